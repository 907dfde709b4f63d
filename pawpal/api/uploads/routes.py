# pawpal/api/uploads/routes.py

import logging
from flask import request, jsonify, Blueprint, current_app
from flask_jwt_extended import jwt_required, get_jwt_identity
from marshmallow import Schema, fields, validate, ValidationError

from pawpal.services.storage_service import UPLOAD_FOLDERS

# 반려동물 사진 업로드용 블루프린트 ('/api/uploads')
uploads_bp = Blueprint('uploads', __name__)

class UploadUrlRequestSchema(Schema):
    upload_type = fields.Str(load_default='pet_image', validate=validate.OneOf(list(UPLOAD_FOLDERS)))
    filename = fields.Str(required=True, validate=validate.Length(min=1, max=255))
    content_type = fields.Str(required=True, validate=validate.Regexp(r'^image/[\w.+-]+$'))

class FilePathSchema(Schema):
    """파일 경로 유효성 검사를 위한 스키마"""
    file_path = fields.Str(required=True, error_messages={"required": "File path is required."})


@uploads_bp.route('/url', methods=['POST'])
@jwt_required()
def get_upload_url():
    """
    반려동물 사진 업로드용 Pre-signed URL을 발급합니다.
    사진 선택/촬영은 앱이 처리하고, 앱은 이 URL로 Storage에 직접 업로드합니다.
    """
    user_id = get_jwt_identity()
    storage_service = current_app.services['storage']
    try:
        data = UploadUrlRequestSchema().load(request.get_json())
        url_info = storage_service.generate_upload_url(user_id, data['upload_type'], data['filename'], data['content_type'])
        return jsonify(url_info), 200
    except ValidationError as err:
        logging.warning(f"URL 발급 요청 실패 (잘못된 파라미터): {err.messages}")
        return jsonify({"error_code": "VALIDATION_ERROR", "details": err.messages}), 400
    except ValueError as e:
        return jsonify({"error_code": "INVALID_UPLOAD_TYPE", "message": str(e)}), 400
    except Exception as e:
        logging.error(f"Pre-signed URL 생성 중 서버 오류 발생: {e}", exc_info=True)
        return jsonify({"error_code": "URL_GENERATION_FAILED", "message": "Failed to create upload URL."}), 500


@uploads_bp.route('/finalize', methods=['POST'])
@jwt_required()
def finalize_upload():
    """업로드된 사진을 공개로 전환하고, Pet.image에 저장할 URL을 반환합니다."""
    user_id = get_jwt_identity()
    storage_service = current_app.services['storage']
    try:
        data = FilePathSchema().load(request.get_json())
        public_url = storage_service.make_public_and_get_url(user_id, data['file_path'])
        return jsonify({"public_url": public_url}), 200
    except ValidationError as err:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": err.messages}), 400
    except PermissionError as e:
        return jsonify({"error_code": "FORBIDDEN", "message": str(e)}), 403
    except FileNotFoundError as e:
        return jsonify({"error_code": "FILE_NOT_FOUND", "message": str(e)}), 404
    except Exception as e:
        logging.error(f"파일 공개 전환 중 오류 발생: {e}", exc_info=True)
        return jsonify({"error_code": "INTERNAL_SERVER_ERROR", "message": "Failed to process the uploaded file."}), 500
