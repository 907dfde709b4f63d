# pawpal/screens/health.py
import logging
from typing import Any, Dict, List, Optional

from pawpal.api.health.services import HealthService
from pawpal.api.pets.services import PetService
from pawpal.core.session import Session
from pawpal.models.health_record import HealthRecord
from pawpal.models.pet import Pet
from pawpal.services.reminder_service import HealthReminderService
from .base import ListScreen, ScreenResult

class HealthScreen(ListScreen[HealthRecord]):
    """
    한 반려동물의 건강 기록 화면.
    기록이 생성되면 다음 예정일 알림을 예약합니다. 예약 실패는 기록 생성 결과에 영향을 주지 않습니다.
    """
    label = "health record"

    def __init__(self, session: Optional[Session], pet_id: str,
                 health_service: HealthService, pet_service: PetService,
                 reminder_service: HealthReminderService):
        super().__init__(session)
        self.pet_id = pet_id
        self.health_service = health_service
        self.pet_service = pet_service
        self.reminder_service = reminder_service
        self.pet: Optional[Pet] = None

    def fetch(self) -> List[HealthRecord]:
        self.pet = self.pet_service.get_owned_pet(self.session, self.pet_id)
        return self.health_service.list_by_pet(self.pet_id)

    def add_record(self, fields: Dict[str, Any]) -> ScreenResult[HealthRecord]:
        return self.add(HealthRecord(pet_id=self.pet_id, **fields))

    def remote_create(self, item: HealthRecord) -> str:
        return self.health_service.create(item)

    def remote_delete(self, item_id: str):
        # 예약된 알림은 취소하지 않음
        self.health_service.delete(item_id)

    def remote_update(self, item_id: str, changes: Dict[str, Any]):
        self.health_service.update(item_id, changes)

    def after_create(self, created: HealthRecord):
        if not created.next_due:
            return
        try:
            self.reminder_service.schedule_health_reminder(self.session.user_id, self.pet.name, created)
        except Exception as e:
            logging.error(f"건강 알림 예약 실패 (record: {created.id}): {e}", exc_info=True)

    def stats(self) -> Dict[str, Any]:
        """현재 목록 기준의 건강 통계와 예정일 목록"""
        self._ensure_loaded()
        records = self.state.items
        stats = self.health_service.stats(self.pet, records)
        stats['reminders'] = self.health_service.reminders(self.pet, records)
        return stats
