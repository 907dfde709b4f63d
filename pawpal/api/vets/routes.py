# pawpal/api/vets/routes.py
import logging
from flask import Blueprint, request, jsonify, current_app
from flask_jwt_extended import jwt_required
from marshmallow import ValidationError

from pawpal.api.responses import screen_response
from pawpal.models.vet_clinic import VetClinic
from pawpal.screens import VetScreen
from .schemas import VetQuerySchema, VetCreateSchema, VetUpdateSchema, VetResponseSchema, VetStatsSchema

vets_bp = Blueprint('vets_bp', __name__)

@vets_bp.route('/', methods=['GET'])
@jwt_required()
def list_vets():
    """
    동물병원 목록 조회 API.
    - district: 지역 (쉼표로 여러 지역 지정 가능)
    - category: all | emergency | clinic
    - q: 이름/주소/지역 검색어
    """
    try:
        query = VetQuerySchema().load(request.args)
    except ValidationError as err:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": err.messages}), 400

    result = VetScreen(current_app.services['vets']).load(query['district'], query['category'], query['q'])
    return screen_response(result, VetResponseSchema())

@vets_bp.route('/stats', methods=['GET'])
@jwt_required()
def get_vet_stats():
    return jsonify(VetStatsSchema().dump(current_app.services['vets'].stats())), 200

@vets_bp.route('/', methods=['POST'])
@jwt_required()
def add_vet():
    try:
        data = VetCreateSchema().load(request.get_json())
    except ValidationError as err:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": err.messages}), 400

    vet = VetClinic(**data)
    vet.id = current_app.services['vets'].add(vet)
    return jsonify(VetResponseSchema().dump(vet)), 201

@vets_bp.route('/<string:vet_id>', methods=['PATCH'])
@jwt_required()
def update_vet(vet_id: str):
    try:
        changes = VetUpdateSchema().load(request.get_json())
        current_app.services['vets'].update(vet_id, changes)
        return jsonify({"message": "Vet updated successfully"}), 200
    except ValidationError as err:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": err.messages}), 400
    except ValueError as e:
        return jsonify({"error_code": "INVALID_REQUEST", "message": str(e)}), 400

@vets_bp.route('/<string:vet_id>', methods=['DELETE'])
@jwt_required()
def delete_vet(vet_id: str):
    current_app.services['vets'].delete(vet_id)
    logging.info(f"Vet deleted (id: {vet_id})")
    return jsonify({"message": "Vet deleted successfully"}), 200
