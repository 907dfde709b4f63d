# pawpal/api/health/services.py
import logging
from datetime import date
from typing import Dict, Any, List, Optional

from pawpal.core.errors import MissingParentError
from pawpal.models.health_record import HealthRecord, HealthRecordType
from pawpal.models.pet import Pet
from pawpal.services.document_store import DocumentStore
from pawpal.utils.datetime_utils import DateTimeUtils

# 예정일이 오늘부터 이 기간 안에 있으면 "다가오는 알림"으로 집계합니다.
UPCOMING_WINDOW_DAYS = 30

class HealthService:
    """
    건강 기록 CRUD 및 통계 서비스.
    - 모든 조회는 반려동물(petId) 기준으로 제한됩니다.
    - 기록 삭제/수정은 이미 예약된 알림에 영향을 주지 않습니다.
    """
    COLLECTION = 'healthRecords'
    PETS = 'pets'

    def __init__(self, store: DocumentStore):
        self.store = store

    def create(self, record: HealthRecord) -> str:
        if not record.pet_id:
            raise MissingParentError("Pet", record.pet_id)
        fields = record.to_document()
        fields['createdAt'] = DateTimeUtils.now()
        return self.store.add_document(self.COLLECTION, fields)

    def list_by_pet(self, pet_id: str) -> List[HealthRecord]:
        if not pet_id:
            raise MissingParentError("Pet", pet_id)
        docs = self.store.query_documents(self.COLLECTION, {'petId': pet_id})
        return [HealthRecord.from_document(doc.id, doc.fields) for doc in docs]

    def count_by_pet(self, pet_id: str) -> int:
        return len(self.list_by_pet(pet_id))

    def get_pet_for_record(self, pet_id: str) -> Optional[Pet]:
        """알림 문구에 쓸 반려동물 정보를 조회합니다."""
        doc = self.store.get_document(self.PETS, pet_id)
        if doc is None:
            logging.info(f"No pet found with ID: {pet_id}")
            return None
        return Pet.from_document(doc.id, doc.fields)

    def update(self, record_id: str, changes: Dict[str, Any]):
        """부분 수정. next_due, notes, reminder_days는 None으로 비울 수 있습니다."""
        if 'pet_id' in changes:
            raise ValueError("건강 기록의 반려동물은 변경할 수 없습니다.")
        fields = HealthRecord.document_fields(
            {attr: value for attr, value in changes.items()
             if value is not None or attr in HealthRecord.CLEARABLE}
        )
        if not fields:
            raise ValueError("수정할 데이터가 제공되지 않았습니다.")
        fields['updatedAt'] = DateTimeUtils.now()
        self.store.update_document(self.COLLECTION, record_id, fields)

    def delete(self, record_id: str):
        self.store.delete_document(self.COLLECTION, record_id)

    def reminders(self, pet: Pet, records: Optional[List[HealthRecord]] = None,
                  today: Optional[date] = None) -> List[Dict[str, Any]]:
        """
        예정일(next_due)이 있는 기록을 예정일 순으로 정리합니다.

        :param records: 이미 조회한 기록 목록 (없으면 새로 조회)
        """
        if records is None:
            records = self.list_by_pet(pet.id)
        today = today or DateTimeUtils.today()

        reminders = []
        for record in records:
            if not record.next_due:
                continue
            try:
                days_until = DateTimeUtils.days_until(record.next_due, today)
            except ValueError:
                logging.warning(f"Invalid nextDue '{record.next_due}' on health record {record.id}")
                continue
            reminders.append({
                'record_id': record.id,
                'pet_id': pet.id,
                'pet_name': pet.name,
                'record_title': record.title,
                'record_type': record.type.value,
                'due_date': record.next_due,
                'days_until': days_until,
                'is_overdue': days_until < 0,
            })
        return sorted(reminders, key=lambda r: r['due_date'])

    def stats(self, pet: Pet, records: Optional[List[HealthRecord]] = None,
              today: Optional[date] = None) -> Dict[str, Any]:
        """기록 수, 다가오는/지난 예정일 수, 유형별 기록 수를 집계합니다."""
        if records is None:
            records = self.list_by_pet(pet.id)
        reminders = self.reminders(pet, records, today)

        records_by_type = {record_type.value: 0 for record_type in HealthRecordType}
        for record in records:
            records_by_type[record.type.value] += 1

        return {
            'total_records': len(records),
            'upcoming_reminders': sum(1 for r in reminders if 0 <= r['days_until'] <= UPCOMING_WINDOW_DAYS),
            'overdue_reminders': sum(1 for r in reminders if r['is_overdue']),
            'records_by_type': records_by_type,
        }
