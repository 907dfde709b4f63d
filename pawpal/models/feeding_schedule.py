# pawpal/models/feeding_schedule.py
import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional, Dict, Any

from pawpal.utils.datetime_utils import DateTimeUtils

class FeedingFrequency(Enum):
    NONE = "none"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"

FEEDING_FIELDS = {
    'pet_id': 'petId',
    'food_type': 'foodType',
    'amount': 'amount',
    'time': 'time',
    'frequency': 'frequency',
    'start_date': 'date',
    'notes': 'notes',
    'created_at': 'createdAt',
    'updated_at': 'updatedAt',
}

# 이전 버전 화면이 저장한 필드명 (food / quantity / repeat)
LEGACY_FIELDS = {'foodType': 'food', 'amount': 'quantity', 'frequency': 'repeat'}

@dataclass
class FeedingSchedule:
    """Firestore 'feedingSchedules' 컬렉션 문서 구조. 항상 하나의 반려동물(pet_id)에 속합니다."""
    CLEARABLE = frozenset({'start_date', 'notes'})

    pet_id: str
    food_type: str
    amount: str             # 예: "200g"
    time: str               # 예: "08:00 AM"
    frequency: FeedingFrequency = FeedingFrequency.DAILY
    id: Optional[str] = None
    start_date: Optional[str] = None  # 첫 급여일 YYYY-MM-DD
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_document(cls, doc_id: str, data: Dict[str, Any]) -> "FeedingSchedule":
        data = DateTimeUtils.from_firestore(data)

        def pick(key: str, default=None):
            if data.get(key) is not None:
                return data[key]
            legacy_key = LEGACY_FIELDS.get(key)
            return data.get(legacy_key, default) if legacy_key else default

        frequency_str = pick('frequency', FeedingFrequency.DAILY.value)
        try:
            frequency = FeedingFrequency(frequency_str)
        except ValueError:
            logging.warning(f"Invalid frequency '{frequency_str}' for feeding schedule {doc_id}. Defaulting to daily.")
            frequency = FeedingFrequency.DAILY

        return cls(
            id=doc_id,
            pet_id=data.get('petId'),
            food_type=pick('foodType', ''),
            amount=pick('amount', ''),
            time=data.get('time', ''),
            frequency=frequency,
            start_date=data.get('date'),
            notes=data.get('notes'),
            created_at=data.get('createdAt'),
            updated_at=data.get('updatedAt'),
        )

    def to_document(self) -> Dict[str, Any]:
        document = {}
        for attr, key in FEEDING_FIELDS.items():
            value = getattr(self, attr)
            if value is None:
                continue
            document[key] = value.value if isinstance(value, Enum) else value
        return document

    @staticmethod
    def document_fields(changes: Dict[str, Any]) -> Dict[str, Any]:
        return {
            FEEDING_FIELDS[attr]: value.value if isinstance(value, Enum) else value
            for attr, value in changes.items() if attr in FEEDING_FIELDS
        }
