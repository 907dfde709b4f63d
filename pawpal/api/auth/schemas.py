#pawpal/api/auth/schemas.py
from marshmallow import Schema, fields, validate

# Firebase Auth의 최소 비밀번호 길이
PASSWORD_RULE = validate.Length(min=6, max=128)

class CredentialsSchema(Schema):
    """회원가입/로그인 요청의 유효성을 검사하는 스키마"""
    email = fields.Email(required=True)
    password = fields.Str(required=True, validate=PASSWORD_RULE, load_only=True)

class PasswordResetSchema(Schema):
    email = fields.Email(required=True)

class EmailUpdateSchema(Schema):
    """이메일 변경 요청. current_password가 있으면 재인증 후 변경합니다."""
    new_email = fields.Email(required=True)
    current_password = fields.Str(required=False, allow_none=True, load_only=True)

class PasswordUpdateSchema(Schema):
    new_password = fields.Str(required=True, validate=PASSWORD_RULE, load_only=True)
    current_password = fields.Str(required=False, allow_none=True, load_only=True)

class LogoutRequestSchema(Schema):
    """로그아웃 요청. Access 토큰은 Authorization 헤더로, Refresh 토큰은 본문으로 받습니다."""
    refresh_token = fields.Str(required=False, allow_none=True)

class FcmTokenSchema(Schema):
    fcm_token = fields.Str(required=True, validate=validate.Length(min=1))

class SessionResponseSchema(Schema):
    user_id = fields.Str()
    email = fields.Str()
    email_verified = fields.Bool()
