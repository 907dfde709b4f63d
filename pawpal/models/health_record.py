# pawpal/models/health_record.py
import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional, Dict, Any

from pawpal.utils.datetime_utils import DateTimeUtils

class HealthRecordType(Enum):
    VACCINATION = "vaccination"
    CHECKUP = "checkup"
    MEDICATION = "medication"
    TREATMENT = "treatment"

HEALTH_FIELDS = {
    'pet_id': 'petId',
    'type': 'type',
    'title': 'title',
    'date': 'date',
    'next_due': 'nextDue',
    'notes': 'notes',
    'reminder_days': 'reminderDays',
    'created_at': 'createdAt',
    'updated_at': 'updatedAt',
}

@dataclass
class HealthRecord:
    """
    Firestore 'healthRecords' 컬렉션 문서 구조.
    next_due가 있으면 생성 시 로컬 알림 예약을 요청합니다.
    """
    CLEARABLE = frozenset({'next_due', 'notes', 'reminder_days'})

    pet_id: str
    type: HealthRecordType
    title: str
    date: str                       # YYYY-MM-DD
    id: Optional[str] = None
    next_due: Optional[str] = None  # YYYY-MM-DD, 다음 예정일
    notes: Optional[str] = None
    reminder_days: Optional[int] = None  # 예정일 며칠 전에 알림 (없으면 설정값 사용)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_document(cls, doc_id: str, data: Dict[str, Any]) -> "HealthRecord":
        data = DateTimeUtils.from_firestore(data)
        type_str = data.get('type')
        try:
            record_type = HealthRecordType(type_str)
        except ValueError:
            logging.warning(f"Invalid health record type '{type_str}' for record {doc_id}. Defaulting to checkup.")
            record_type = HealthRecordType.CHECKUP

        return cls(
            id=doc_id,
            pet_id=data.get('petId'),
            type=record_type,
            title=data.get('title', ''),
            date=data.get('date', ''),
            # 빈 문자열로 저장된 nextDue는 "예정일 없음"
            next_due=data.get('nextDue') or None,
            notes=data.get('notes'),
            reminder_days=data.get('reminderDays'),
            created_at=data.get('createdAt'),
            updated_at=data.get('updatedAt'),
        )

    def to_document(self) -> Dict[str, Any]:
        document = {}
        for attr, key in HEALTH_FIELDS.items():
            value = getattr(self, attr)
            if value is None:
                continue
            document[key] = value.value if isinstance(value, Enum) else value
        return document

    @staticmethod
    def document_fields(changes: Dict[str, Any]) -> Dict[str, Any]:
        return {
            HEALTH_FIELDS[attr]: value.value if isinstance(value, Enum) else value
            for attr, value in changes.items() if attr in HEALTH_FIELDS
        }
