# pawpal/api/feeding/schemas.py
from marshmallow import Schema, fields, validate, pre_load

from pawpal.api.validators import DATE_RULES
from pawpal.models.feeding_schedule import FeedingFrequency

class FeedingScheduleCreateSchema(Schema):
    """
    POST /api/pets/<pet_id>/feeding 요청 스키마.
    이전 버전 앱의 필드명(food, quantity, repeat)도 받아들입니다.
    """
    food_type = fields.Str(required=True, validate=validate.Length(min=1, max=100))
    amount = fields.Str(required=True, validate=validate.Length(min=1, max=50))
    time = fields.Str(required=True, validate=validate.Length(min=1, max=20))
    frequency = fields.Enum(FeedingFrequency, by_value=True, load_default=FeedingFrequency.DAILY)
    start_date = fields.Str(required=False, allow_none=True, validate=DATE_RULES)
    notes = fields.Str(required=False, allow_none=True, validate=validate.Length(max=500))

    @pre_load
    def accept_legacy_names(self, data, **kwargs):
        data = dict(data or {})
        for legacy, current in (('food', 'food_type'), ('quantity', 'amount'), ('repeat', 'frequency')):
            if legacy in data and current not in data:
                data[current] = data.pop(legacy)
        return data

class FeedingScheduleUpdateSchema(Schema):
    food_type = fields.Str(validate=validate.Length(min=1, max=100))
    amount = fields.Str(validate=validate.Length(min=1, max=50))
    time = fields.Str(validate=validate.Length(min=1, max=20))
    frequency = fields.Enum(FeedingFrequency, by_value=True)
    start_date = fields.Str(allow_none=True, validate=DATE_RULES)
    notes = fields.Str(allow_none=True, validate=validate.Length(max=500))

class FeedingScheduleResponseSchema(Schema):
    id = fields.Str(dump_only=True)
    pet_id = fields.Str(dump_only=True)
    food_type = fields.Str()
    amount = fields.Str()
    time = fields.Str()
    frequency = fields.Enum(FeedingFrequency, by_value=True)
    start_date = fields.Str(allow_none=True)
    notes = fields.Str(allow_none=True)
    created_at = fields.DateTime(allow_none=True)
    updated_at = fields.DateTime(allow_none=True)
