# pawpal/api/pets/schemas.py
from marshmallow import Schema, fields, validate

# 이름: 영문자, 공백, 하이픈, 아포스트로피만 허용
NAME_RULES = [
    validate.Length(min=1, max=50),
    validate.Regexp(r"^[a-zA-Z\s\-']+$", error="Name can only contain letters, spaces, hyphens and apostrophes.")
]

class PetCreateSchema(Schema):
    """POST /api/pets/ 반려동물 등록 요청 스키마. 소유자는 로그인 세션에서 정해집니다."""
    name = fields.Str(required=True, validate=NAME_RULES)
    breed = fields.Str(required=True, validate=validate.Length(min=1, max=50))
    age = fields.Float(required=True, validate=validate.Range(min=0, max=30))
    weight = fields.Float(required=True, validate=validate.Range(min=0.1, max=200))
    health_history = fields.Str(required=False, allow_none=True, validate=validate.Length(max=500))
    image = fields.URL(required=False, allow_none=True)

class PetUpdateSchema(Schema):
    """PATCH /api/pets/<pet_id> 부분 수정 스키마. id, owner_id, created_at은 수정할 수 없습니다."""
    name = fields.Str(validate=NAME_RULES)
    breed = fields.Str(validate=validate.Length(min=1, max=50))
    age = fields.Float(validate=validate.Range(min=0, max=30))
    weight = fields.Float(validate=validate.Range(min=0.1, max=200))
    health_history = fields.Str(allow_none=True, validate=validate.Length(max=500))
    image = fields.URL(allow_none=True)

class BatchDeleteSchema(Schema):
    pet_ids = fields.List(fields.Str(validate=validate.Length(min=1)), required=True,
                          validate=validate.Length(min=1))

class PetResponseSchema(Schema):
    id = fields.Str(dump_only=True)
    owner_id = fields.Str(dump_only=True)
    name = fields.Str()
    breed = fields.Str()
    age = fields.Float()
    weight = fields.Float()
    health_history = fields.Str(allow_none=True)
    image = fields.Str(allow_none=True)
    created_at = fields.DateTime(allow_none=True)
    updated_at = fields.DateTime(allow_none=True)
