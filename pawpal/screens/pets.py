# pawpal/screens/pets.py
from typing import Any, Dict, List, Optional

from pawpal.api.pets.services import PetService
from pawpal.core.session import Session
from pawpal.models.pet import Pet
from .base import ListScreen, ScreenResult

class PetsScreen(ListScreen[Pet]):
    """로그인한 사용자의 반려동물 목록 화면"""
    label = "pet"

    def __init__(self, session: Optional[Session], pet_service: PetService):
        super().__init__(session)
        self.pet_service = pet_service

    def fetch(self) -> List[Pet]:
        return self.pet_service.list_by_owner(self.session.user_id)

    def add_pet(self, fields: Dict[str, Any]) -> ScreenResult[Pet]:
        # 소유자는 항상 세션 사용자
        return self.add(Pet(owner_id=self.session.user_id, **fields))

    def remote_create(self, item: Pet) -> str:
        return self.pet_service.create(item)

    def remote_delete(self, item_id: str):
        self.pet_service.delete(item_id)

    def remote_update(self, item_id: str, changes: Dict[str, Any]):
        self.pet_service.update(item_id, changes)
