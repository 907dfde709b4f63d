# pawpal/api/feeding/routes.py
from flask import Blueprint, request, jsonify, current_app
from flask_jwt_extended import jwt_required
from marshmallow import ValidationError

from pawpal.api.responses import screen_response
from pawpal.core.session import session_from_jwt
from pawpal.screens import FeedingScreen
from .schemas import FeedingScheduleCreateSchema, FeedingScheduleUpdateSchema, FeedingScheduleResponseSchema

feeding_bp = Blueprint('feeding_bp', __name__)

def _screen(pet_id: str) -> FeedingScreen:
    return FeedingScreen(session_from_jwt(), pet_id,
                         current_app.services['feeding'], current_app.services['pets'])

@feeding_bp.route('/<string:pet_id>/feeding', methods=['GET'])
@jwt_required()
def list_schedules(pet_id: str):
    return screen_response(_screen(pet_id).load(), FeedingScheduleResponseSchema())

@feeding_bp.route('/<string:pet_id>/feeding', methods=['POST'])
@jwt_required()
def add_schedule(pet_id: str):
    """급여 일정 추가. 실패하면 추가 전 목록과 오류 알림을 반환합니다."""
    try:
        data = FeedingScheduleCreateSchema().load(request.get_json())
    except ValidationError as err:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": err.messages}), 400
    return screen_response(_screen(pet_id).add_schedule(data), FeedingScheduleResponseSchema(), 201)

@feeding_bp.route('/<string:pet_id>/feeding/<string:schedule_id>', methods=['PATCH'])
@jwt_required()
def update_schedule(pet_id: str, schedule_id: str):
    try:
        changes = FeedingScheduleUpdateSchema().load(request.get_json())
        return screen_response(_screen(pet_id).edit(schedule_id, changes), FeedingScheduleResponseSchema())
    except ValidationError as err:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": err.messages}), 400
    except ValueError as e:
        return jsonify({"error_code": "INVALID_REQUEST", "message": str(e)}), 400

@feeding_bp.route('/<string:pet_id>/feeding/<string:schedule_id>', methods=['DELETE'])
@jwt_required()
def delete_schedule(pet_id: str, schedule_id: str):
    return screen_response(_screen(pet_id).remove(schedule_id), FeedingScheduleResponseSchema())
