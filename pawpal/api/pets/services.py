# pawpal/api/pets/services.py
import logging
from typing import Dict, Any, List, Optional

from pawpal.core.errors import MissingParentError
from pawpal.core.session import Session, require_session
from pawpal.models.pet import Pet
from pawpal.services.document_store import DocumentStore
from pawpal.utils.datetime_utils import DateTimeUtils

def _require_id(value: Optional[str], label: str) -> str:
    if not value or not isinstance(value, str) or not value.strip():
        raise ValueError(f"{label} is required and must be a valid string")
    return value.strip()

class PetService:
    """반려동물 프로필 관리를 전담하는 서비스. 모든 조회는 소유자(userId) 기준으로 제한됩니다."""
    COLLECTION = 'pets'

    def __init__(self, store: DocumentStore):
        self.store = store

    def create(self, pet: Pet) -> str:
        """새 반려동물을 저장하고 저장소가 발급한 ID를 반환합니다."""
        _require_id(pet.owner_id, "User ID")
        fields = pet.to_document()
        now = DateTimeUtils.now()
        fields.update(createdAt=now, updatedAt=now)
        return self.store.add_document(self.COLLECTION, fields)

    def list_by_owner(self, owner_id: str) -> List[Pet]:
        owner_id = _require_id(owner_id, "User ID")
        docs = self.store.query_documents(self.COLLECTION, {'userId': owner_id})
        return [Pet.from_document(doc.id, doc.fields) for doc in docs]

    def get_pet(self, pet_id: str) -> Optional[Pet]:
        doc = self.store.get_document(self.COLLECTION, _require_id(pet_id, "Pet ID"))
        return Pet.from_document(doc.id, doc.fields) if doc else None

    def get_owned_pet(self, session: Optional[Session], pet_id: Optional[str]) -> Pet:
        """
        [소유자 전용] 세션 사용자의 반려동물을 조회합니다.
        반려동물이 없거나 다른 사용자의 반려동물이면 MissingParentError를 발생시킵니다.
        """
        session = require_session(session)
        if not pet_id:
            raise MissingParentError("Pet", pet_id)
        pet = self.get_pet(pet_id)
        if pet is None or pet.owner_id != session.user_id:
            raise MissingParentError("Pet", pet_id)
        return pet

    def update(self, pet_id: str, changes: Dict[str, Any]):
        """
        반려동물 프로필을 부분 수정합니다.
        선택 항목(Pet.CLEARABLE)의 None은 값을 비우고, 그 외 None은 무시합니다.
        소유자(owner_id)는 변경할 수 없습니다.
        """
        pet_id = _require_id(pet_id, "Pet ID")
        if 'owner_id' in changes:
            raise ValueError("반려동물의 소유자는 변경할 수 없습니다.")
        changes = {attr: value for attr, value in changes.items()
                   if value is not None or attr in Pet.CLEARABLE}
        if not changes:
            raise ValueError("수정할 데이터가 제공되지 않았습니다.")

        fields = Pet.document_fields(changes)
        fields['updatedAt'] = DateTimeUtils.now()
        self.store.update_document(self.COLLECTION, pet_id, fields)

    def delete(self, pet_id: str):
        """반려동물 문서만 삭제합니다. 급여 일정과 건강 기록은 그대로 남습니다."""
        self.store.delete_document(self.COLLECTION, _require_id(pet_id, "Pet ID"))

    def batch_delete(self, pet_ids: List[str]) -> Dict[str, List[str]]:
        """여러 반려동물을 차례로 삭제하고 성공/실패한 ID 목록을 반환합니다."""
        results = {'success': [], 'failed': []}
        for pet_id in pet_ids:
            try:
                self.delete(pet_id)
                results['success'].append(pet_id)
            except Exception as e:
                logging.error(f"Batch delete failed for pet {pet_id}: {e}", exc_info=True)
                results['failed'].append(pet_id)
        return results
