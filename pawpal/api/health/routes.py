# pawpal/api/health/routes.py
from flask import Blueprint, request, jsonify, current_app
from flask_jwt_extended import jwt_required
from marshmallow import ValidationError

from pawpal.api.responses import screen_response
from pawpal.core.session import session_from_jwt
from pawpal.screens import HealthScreen
from .guidelines import HEALTH_GUIDELINES
from .schemas import (
    HealthRecordCreateSchema,
    HealthRecordUpdateSchema,
    HealthRecordResponseSchema,
    HealthStatsSchema,
    GuidelineSchema
)

health_records_bp = Blueprint('health_records_bp', __name__)
health_bp = Blueprint('health_bp', __name__)

def _screen(pet_id: str) -> HealthScreen:
    services = current_app.services
    return HealthScreen(session_from_jwt(), pet_id,
                        services['health'], services['pets'], services['reminders'])

@health_records_bp.route('/<string:pet_id>/health', methods=['GET'])
@jwt_required()
def list_records(pet_id: str):
    return screen_response(_screen(pet_id).load(), HealthRecordResponseSchema())

@health_records_bp.route('/<string:pet_id>/health', methods=['POST'])
@jwt_required()
def add_record(pet_id: str):
    """
    건강 기록 추가.
    다음 예정일(next_due)이 있으면 알림을 예약하며, 예약 실패는 응답에 영향을 주지 않습니다.
    """
    try:
        data = HealthRecordCreateSchema().load(request.get_json())
    except ValidationError as err:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": err.messages}), 400
    return screen_response(_screen(pet_id).add_record(data), HealthRecordResponseSchema(), 201)

@health_records_bp.route('/<string:pet_id>/health/<string:record_id>', methods=['PATCH'])
@jwt_required()
def update_record(pet_id: str, record_id: str):
    try:
        changes = HealthRecordUpdateSchema().load(request.get_json())
        return screen_response(_screen(pet_id).edit(record_id, changes), HealthRecordResponseSchema())
    except ValidationError as err:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": err.messages}), 400
    except ValueError as e:
        return jsonify({"error_code": "INVALID_REQUEST", "message": str(e)}), 400

@health_records_bp.route('/<string:pet_id>/health/<string:record_id>', methods=['DELETE'])
@jwt_required()
def delete_record(pet_id: str, record_id: str):
    """건강 기록 삭제. 이미 예약된 알림은 취소되지 않습니다."""
    return screen_response(_screen(pet_id).remove(record_id), HealthRecordResponseSchema())

@health_records_bp.route('/<string:pet_id>/health/stats', methods=['GET'])
@jwt_required()
def get_stats(pet_id: str):
    return jsonify(HealthStatsSchema().dump(_screen(pet_id).stats())), 200

@health_bp.route('/guidelines', methods=['GET'])
@jwt_required()
def get_guidelines():
    return jsonify(GuidelineSchema(many=True).dump(HEALTH_GUIDELINES)), 200
