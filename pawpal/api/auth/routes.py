# pawpal/api/auth/routes.py

import logging
import jwt
from flask import Blueprint, request, jsonify, current_app
from flask_jwt_extended import (
    create_access_token,
    create_refresh_token,
    jwt_required,
    get_jwt
)
from firebase_admin import auth as firebase_auth
from marshmallow import ValidationError

from pawpal.core.errors import AuthProviderError, AuthenticationRequiredError
from pawpal.core.session import Session, session_from_jwt
from .schemas import (
    CredentialsSchema,
    PasswordResetSchema,
    EmailUpdateSchema,
    PasswordUpdateSchema,
    LogoutRequestSchema,
    FcmTokenSchema,
    SessionResponseSchema
)

auth_bp = Blueprint('auth_bp', __name__)

# 자격 증명 문제로 분류되는 제공자 오류 코드 (401)
CREDENTIAL_ERROR_CODES = {
    "EMAIL_NOT_FOUND", "INVALID_PASSWORD", "INVALID_LOGIN_CREDENTIALS",
    "USER_DISABLED", "USER_MISMATCH", "INVALID_EMAIL"
}

def _issue_tokens(session: Session) -> dict:
    claims = session.to_claims()
    return {
        "access_token": create_access_token(identity=session.user_id, additional_claims=claims),
        "refresh_token": create_refresh_token(identity=session.user_id, additional_claims=claims),
        "user": SessionResponseSchema().dump(session.to_dict())
    }

def _provider_error_response(e: AuthProviderError):
    status = 401 if e.code in CREDENTIAL_ERROR_CODES else 400
    return jsonify({"error_code": e.code, "message": str(e)}), status


@auth_bp.route('/register', methods=['POST'])
def register():
    """이메일/비밀번호 회원가입. 가입 즉시 로그인된 세션 토큰을 반환합니다."""
    gateway = current_app.services['auth']
    try:
        data = CredentialsSchema().load(request.get_json())
        session = gateway.register(data['email'], data['password'])
        return jsonify(_issue_tokens(session)), 201
    except ValidationError as err:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": err.messages}), 400
    except firebase_auth.EmailAlreadyExistsError:
        return jsonify({"error_code": "EMAIL_ALREADY_EXISTS", "message": "This email is already registered."}), 409
    except AuthProviderError as e:
        return _provider_error_response(e)
    except Exception as e:
        logging.error(f"회원가입 중 예외 발생: {e}", exc_info=True)
        return jsonify({"error_code": "REGISTER_FAILED", "message": "Failed to create account."}), 500


@auth_bp.route('/login', methods=['POST'])
def login():
    gateway = current_app.services['auth']
    try:
        data = CredentialsSchema().load(request.get_json())
        session = gateway.login(data['email'], data['password'])
        return jsonify(_issue_tokens(session)), 200
    except ValidationError as err:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": err.messages}), 400
    except AuthProviderError as e:
        return _provider_error_response(e)
    except Exception as e:
        logging.error(f"로그인 중 예외 발생: {e}", exc_info=True)
        return jsonify({"error_code": "LOGIN_FAILED", "message": "Failed to login. Please try again."}), 500


# --- 토큰 재발급 엔드포인트 ---
@auth_bp.route('/token/refresh', methods=['POST'])
@jwt_required(refresh=True) # Refresh Token만 허용
def refresh_token():
    """유효한 Refresh Token으로 새로운 Access Token을 발급합니다."""
    session = session_from_jwt()
    new_access_token = create_access_token(identity=session.user_id, additional_claims=session.to_claims())
    return jsonify(access_token=new_access_token), 200


# --- 로그아웃 엔드포인트 ---
@auth_bp.route('/logout', methods=['POST'])
@jwt_required()
def logout():
    """로그아웃. 현재 Access 토큰과 (전달된 경우) Refresh 토큰을 무효화 목록에 추가합니다."""
    gateway = current_app.services['auth']
    try:
        data = LogoutRequestSchema().load(request.get_json(silent=True) or {})
        access_claims = get_jwt()

        refresh_jti = refresh_exp = None
        if data.get('refresh_token'):
            secret_key = current_app.config['JWT_SECRET_KEY']
            algorithm = current_app.config.get('JWT_ALGORITHM', 'HS256')
            # 만료된 Refresh 토큰도 무효화할 수 있도록 만료 검증은 생략합니다.
            decoded_refresh = jwt.decode(data['refresh_token'], secret_key, algorithms=[algorithm],
                                         options={"verify_exp": False})
            refresh_jti, refresh_exp = decoded_refresh['jti'], decoded_refresh['exp']

        gateway.logout(session_from_jwt(), access_claims['jti'], access_claims['exp'], refresh_jti, refresh_exp)
        return jsonify({"message": "Logged out."}), 200

    except ValidationError as e:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": e.messages}), 400
    except jwt.PyJWTError as e:
        logging.error(f"JWT 해독 오류 발생: {e}", exc_info=True)
        return jsonify({"error_code": "INVALID_TOKEN", "message": "Invalid refresh token."}), 422
    except Exception as e:
        logging.error(f"로그아웃 처리 중 오류 발생: {e}", exc_info=True)
        return jsonify({"error_code": "LOGOUT_FAILED", "message": "Failed to logout. Please try again."}), 500


@auth_bp.route('/password-reset', methods=['POST'])
def send_password_reset():
    gateway = current_app.services['auth']
    try:
        data = PasswordResetSchema().load(request.get_json())
        gateway.send_password_reset(data['email'])
        return jsonify({"message": "Password reset email sent."}), 200
    except ValidationError as err:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": err.messages}), 400
    except AuthProviderError as e:
        return _provider_error_response(e)
    except Exception as e:
        logging.error(f"비밀번호 재설정 메일 발송 오류: {e}", exc_info=True)
        return jsonify({"error_code": "RESET_FAILED", "message": "Failed to send reset email."}), 500


@auth_bp.route('/email', methods=['PUT'])
@jwt_required()
def update_email():
    """이메일 변경. 변경된 이메일이 담긴 새 토큰을 반환합니다."""
    gateway = current_app.services['auth']
    try:
        data = EmailUpdateSchema().load(request.get_json())
        session = gateway.update_email(session_from_jwt(), data['new_email'], data.get('current_password'))
        return jsonify(_issue_tokens(session)), 200
    except ValidationError as err:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": err.messages}), 400
    except AuthenticationRequiredError as e:
        return jsonify({"error_code": "AUTHENTICATION_REQUIRED", "message": str(e)}), 401
    except firebase_auth.EmailAlreadyExistsError:
        return jsonify({"error_code": "EMAIL_ALREADY_EXISTS", "message": "This email is already registered."}), 409
    except AuthProviderError as e:
        return _provider_error_response(e)
    except Exception as e:
        logging.error(f"이메일 변경 오류: {e}", exc_info=True)
        return jsonify({"error_code": "UPDATE_FAILED", "message": "Failed to update email."}), 500


@auth_bp.route('/password', methods=['PUT'])
@jwt_required()
def update_password():
    gateway = current_app.services['auth']
    try:
        data = PasswordUpdateSchema().load(request.get_json())
        gateway.update_password(session_from_jwt(), data['new_password'], data.get('current_password'))
        return jsonify({"message": "Password updated."}), 200
    except ValidationError as err:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": err.messages}), 400
    except AuthenticationRequiredError as e:
        return jsonify({"error_code": "AUTHENTICATION_REQUIRED", "message": str(e)}), 401
    except AuthProviderError as e:
        return _provider_error_response(e)
    except Exception as e:
        logging.error(f"비밀번호 변경 오류: {e}", exc_info=True)
        return jsonify({"error_code": "UPDATE_FAILED", "message": "Failed to update password."}), 500


@auth_bp.route('/email-verification', methods=['POST'])
@jwt_required()
def send_email_verification():
    gateway = current_app.services['auth']
    try:
        gateway.send_email_verification(session_from_jwt())
        return jsonify({"message": "Verification email sent."}), 200
    except AuthProviderError as e:
        return _provider_error_response(e)
    except Exception as e:
        logging.error(f"인증 메일 발송 오류: {e}", exc_info=True)
        return jsonify({"error_code": "VERIFICATION_FAILED", "message": "Failed to send verification email."}), 500


@auth_bp.route('/email-verification', methods=['GET'])
@jwt_required()
def get_email_verification():
    """제공자에서 최신 인증 여부를 다시 읽어 반환합니다."""
    gateway = current_app.services['auth']
    try:
        return jsonify({"email_verified": gateway.is_email_verified(session_from_jwt())}), 200
    except Exception as e:
        logging.error(f"인증 여부 조회 오류: {e}", exc_info=True)
        return jsonify({"error_code": "FETCH_FAILED", "message": "Failed to check verification."}), 500


@auth_bp.route('/fcm-token', methods=['PUT'])
@jwt_required()
def update_fcm_token():
    gateway = current_app.services['auth']
    try:
        data = FcmTokenSchema().load(request.get_json())
        gateway.update_fcm_token(session_from_jwt(), data['fcm_token'])
        return jsonify({"message": "Push token saved."}), 200
    except ValidationError as err:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": err.messages}), 400
    except Exception as e:
        logging.error(f"FCM 토큰 저장 오류: {e}", exc_info=True)
        return jsonify({"error_code": "UPDATE_FAILED", "message": "Failed to save push token."}), 500
