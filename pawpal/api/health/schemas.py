# pawpal/api/health/schemas.py
from marshmallow import Schema, fields, validate, validates_schema, ValidationError

from pawpal.api.validators import DATE_RULES
from pawpal.models.health_record import HealthRecordType

class HealthRecordCreateSchema(Schema):
    """POST /api/pets/<pet_id>/health 요청 스키마."""
    type = fields.Enum(HealthRecordType, by_value=True, required=True)
    title = fields.Str(required=True, validate=validate.Length(min=1, max=100))
    date = fields.Str(required=True, validate=DATE_RULES)
    next_due = fields.Str(required=False, allow_none=True, validate=DATE_RULES)
    notes = fields.Str(required=False, allow_none=True, validate=validate.Length(max=500))
    reminder_days = fields.Int(required=False, allow_none=True, validate=validate.Range(min=0, max=365))

    @validates_schema
    def validate_next_due(self, data, **kwargs):
        """다음 예정일은 기록 날짜보다 앞설 수 없습니다."""
        if data.get('next_due') and data.get('date') and data['next_due'] < data['date']:
            raise ValidationError("Next due date cannot be before the record date.", 'next_due')

class HealthRecordUpdateSchema(Schema):
    type = fields.Enum(HealthRecordType, by_value=True)
    title = fields.Str(validate=validate.Length(min=1, max=100))
    date = fields.Str(validate=DATE_RULES)
    next_due = fields.Str(allow_none=True, validate=DATE_RULES)
    notes = fields.Str(allow_none=True, validate=validate.Length(max=500))
    reminder_days = fields.Int(allow_none=True, validate=validate.Range(min=0, max=365))

class HealthRecordResponseSchema(Schema):
    id = fields.Str(dump_only=True)
    pet_id = fields.Str(dump_only=True)
    type = fields.Enum(HealthRecordType, by_value=True)
    title = fields.Str()
    date = fields.Str()
    next_due = fields.Str(allow_none=True)
    notes = fields.Str(allow_none=True)
    reminder_days = fields.Int(allow_none=True)
    created_at = fields.DateTime(allow_none=True)
    updated_at = fields.DateTime(allow_none=True)

class ReminderSchema(Schema):
    record_id = fields.Str()
    pet_id = fields.Str()
    pet_name = fields.Str()
    record_title = fields.Str()
    record_type = fields.Str()
    due_date = fields.Str()
    days_until = fields.Int()
    is_overdue = fields.Bool()

class HealthStatsSchema(Schema):
    total_records = fields.Int()
    upcoming_reminders = fields.Int()
    overdue_reminders = fields.Int()
    records_by_type = fields.Dict(keys=fields.Str(), values=fields.Int())
    reminders = fields.List(fields.Nested(ReminderSchema))

class GuidelineSchema(Schema):
    category = fields.Str()
    icon = fields.Str()
    color = fields.Str()
    web_url = fields.Str()
    tips = fields.List(fields.Str())
