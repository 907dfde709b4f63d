# pawpal/screens/feeding.py
from typing import Any, Dict, List, Optional

from pawpal.api.feeding.services import FeedingService
from pawpal.api.pets.services import PetService
from pawpal.core.session import Session
from pawpal.models.feeding_schedule import FeedingSchedule
from pawpal.models.pet import Pet
from .base import ListScreen, ScreenResult

class FeedingScreen(ListScreen[FeedingSchedule]):
    """
    한 반려동물의 급여 일정 화면.
    반려동물이 없거나 세션 사용자의 반려동물이 아니면 목록을 읽기 전에 MissingParentError가 발생합니다.
    """
    label = "feeding schedule"

    def __init__(self, session: Optional[Session], pet_id: str,
                 feeding_service: FeedingService, pet_service: PetService):
        super().__init__(session)
        self.pet_id = pet_id
        self.feeding_service = feeding_service
        self.pet_service = pet_service
        self.pet: Optional[Pet] = None

    def fetch(self) -> List[FeedingSchedule]:
        self.pet = self.pet_service.get_owned_pet(self.session, self.pet_id)
        return self.feeding_service.list_by_pet(self.pet_id)

    def add_schedule(self, fields: Dict[str, Any]) -> ScreenResult[FeedingSchedule]:
        return self.add(FeedingSchedule(pet_id=self.pet_id, **fields))

    def remote_create(self, item: FeedingSchedule) -> str:
        return self.feeding_service.create(item)

    def remote_delete(self, item_id: str):
        self.feeding_service.delete(item_id)

    def remote_update(self, item_id: str, changes: Dict[str, Any]):
        self.feeding_service.update(item_id, changes)
