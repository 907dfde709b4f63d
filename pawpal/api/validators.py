# pawpal/api/validators.py
from datetime import datetime
from marshmallow import ValidationError, validate

DATE_PATTERN = r'^\d{4}-\d{2}-\d{2}$'

def calendar_date(value: str):
    """'YYYY-MM-DD' 형식이더라도 존재하지 않는 날짜(예: 2025-02-30)는 거부합니다."""
    try:
        datetime.strptime(value, '%Y-%m-%d')
    except ValueError:
        raise ValidationError("Not a valid calendar date.")

# 건강 기록 date/next_due, 급여 일정 start_date 공용 규칙
DATE_RULES = [validate.Regexp(DATE_PATTERN, error="Date must be in YYYY-MM-DD format."), calendar_date]
