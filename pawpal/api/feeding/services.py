# pawpal/api/feeding/services.py
from typing import Dict, Any, List

from pawpal.core.errors import MissingParentError
from pawpal.models.feeding_schedule import FeedingSchedule
from pawpal.services.document_store import DocumentStore
from pawpal.utils.datetime_utils import DateTimeUtils

class FeedingService:
    """급여 일정 CRUD. 모든 조회는 반려동물(petId) 기준으로 제한됩니다."""
    COLLECTION = 'feedingSchedules'

    def __init__(self, store: DocumentStore):
        self.store = store

    def create(self, schedule: FeedingSchedule) -> str:
        if not schedule.pet_id:
            raise MissingParentError("Pet", schedule.pet_id)
        fields = schedule.to_document()
        fields['createdAt'] = DateTimeUtils.now()
        return self.store.add_document(self.COLLECTION, fields)

    def list_by_pet(self, pet_id: str) -> List[FeedingSchedule]:
        if not pet_id:
            raise MissingParentError("Pet", pet_id)
        docs = self.store.query_documents(self.COLLECTION, {'petId': pet_id})
        return [FeedingSchedule.from_document(doc.id, doc.fields) for doc in docs]

    def count_by_pet(self, pet_id: str) -> int:
        return len(self.list_by_pet(pet_id))

    def update(self, schedule_id: str, changes: Dict[str, Any]):
        if 'pet_id' in changes:
            raise ValueError("급여 일정의 반려동물은 변경할 수 없습니다.")
        fields = FeedingSchedule.document_fields(
            {attr: value for attr, value in changes.items()
             if value is not None or attr in FeedingSchedule.CLEARABLE}
        )
        if not fields:
            raise ValueError("수정할 데이터가 제공되지 않았습니다.")
        fields['updatedAt'] = DateTimeUtils.now()
        self.store.update_document(self.COLLECTION, schedule_id, fields)

    def delete(self, schedule_id: str):
        self.store.delete_document(self.COLLECTION, schedule_id)
