# pawpal/api/pets/routes.py
import logging
from flask import Blueprint, request, jsonify, current_app
from flask_jwt_extended import jwt_required
from marshmallow import ValidationError

from pawpal.api.responses import screen_response
from pawpal.core.session import session_from_jwt
from pawpal.screens import PetsScreen
from .schemas import PetCreateSchema, PetUpdateSchema, PetResponseSchema, BatchDeleteSchema

pets_bp = Blueprint('pets_bp', __name__)

def _screen() -> PetsScreen:
    return PetsScreen(session_from_jwt(), current_app.services['pets'])

@pets_bp.route('/', methods=['GET'])
@jwt_required()
def list_pets():
    """로그인한 사용자의 반려동물 목록을 조회합니다."""
    return screen_response(_screen().load(), PetResponseSchema())

@pets_bp.route('/', methods=['POST'])
@jwt_required()
def add_pet():
    """반려동물 등록 API. 실패하면 등록 전 목록과 오류 알림을 반환합니다."""
    try:
        data = PetCreateSchema().load(request.get_json())
    except ValidationError as err:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": err.messages}), 400
    return screen_response(_screen().add_pet(data), PetResponseSchema(), 201)

@pets_bp.route('/<string:pet_id>', methods=['GET'])
@jwt_required()
def get_pet(pet_id: str):
    """[소유자 전용] 특정 반려동물의 프로필을 조회합니다."""
    pet = current_app.services['pets'].get_owned_pet(session_from_jwt(), pet_id)
    return jsonify(PetResponseSchema().dump(pet)), 200

@pets_bp.route('/<string:pet_id>', methods=['PATCH'])
@jwt_required()
def update_pet(pet_id: str):
    """[소유자 전용] 반려동물 프로필 부분 수정"""
    try:
        changes = PetUpdateSchema().load(request.get_json())
        return screen_response(_screen().edit(pet_id, changes), PetResponseSchema())
    except ValidationError as err:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": err.messages}), 400
    except ValueError as e:
        return jsonify({"error_code": "INVALID_REQUEST", "message": str(e)}), 400

@pets_bp.route('/<string:pet_id>', methods=['DELETE'])
@jwt_required()
def delete_pet(pet_id: str):
    """반려동물 삭제. 급여 일정과 건강 기록은 함께 삭제되지 않습니다."""
    return screen_response(_screen().remove(pet_id), PetResponseSchema())

@pets_bp.route('/batch-delete', methods=['POST'])
@jwt_required()
def batch_delete_pets():
    """여러 반려동물 삭제. 본인 소유가 아닌 ID는 실패 목록에 포함됩니다."""
    pet_service = current_app.services['pets']
    try:
        data = BatchDeleteSchema().load(request.get_json())
    except ValidationError as err:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": err.messages}), 400

    session = session_from_jwt()
    owned_ids = {pet.id for pet in pet_service.list_by_owner(session.user_id)}
    requested = list(dict.fromkeys(data['pet_ids']))
    result = pet_service.batch_delete([pet_id for pet_id in requested if pet_id in owned_ids])
    result['failed'].extend(pet_id for pet_id in requested if pet_id not in owned_ids)
    logging.info(f"Batch delete for user {session.user_id}: {len(result['success'])} deleted, {len(result['failed'])} failed")
    return jsonify(result), 200
