# pawpal/screens/summary.py
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, Optional, Tuple

from pawpal.api.feeding.services import FeedingService
from pawpal.api.health.services import HealthService
from pawpal.api.pets.services import PetService
from pawpal.core.session import Session, require_session
from pawpal.models.pet import Pet
from .base import Notice

class SummaryScreen:
    """반려동물별 급여 일정/건강 기록 수를 모아 보여주는 요약 화면"""

    def __init__(self, session: Optional[Session], pet_service: PetService,
                 feeding_service: FeedingService, health_service: HealthService):
        self.session = require_session(session)
        self.pet_service = pet_service
        self.feeding_service = feeding_service
        self.health_service = health_service

    def _counts(self, pet: Pet) -> Tuple[Pet, int, int]:
        return pet, self.feeding_service.count_by_pet(pet.id), self.health_service.count_by_pet(pet.id)

    def load(self) -> Tuple[Dict[str, Any], Optional[Notice]]:
        """
        반려동물 목록을 읽은 뒤, 반려동물별 개수 조회를 동시에 실행하고 모두 끝날 때까지 기다립니다.

        :return: (요약 딕셔너리, 실패 시 오류 알림)
        """
        summary = {'pets': [], 'totals': {'pets': 0, 'feeding_schedules': 0,
                                          'health_records': 0, 'pets_with_health_records': 0}}
        try:
            pets = self.pet_service.list_by_owner(self.session.user_id)
            if pets:
                with ThreadPoolExecutor(max_workers=len(pets)) as executor:
                    results = list(executor.map(self._counts, pets))
            else:
                results = []
        except Exception as e:
            logging.error(f"Error loading summary for user {self.session.user_id}: {e}", exc_info=True)
            return summary, Notice.error("Failed to load summary")

        for pet, feeding_count, health_count in results:
            summary['pets'].append({
                'pet_id': pet.id,
                'name': pet.name,
                'image': pet.image,
                'feeding_schedules': feeding_count,
                'health_records': health_count,
            })
        totals = summary['totals']
        totals['pets'] = len(results)
        totals['feeding_schedules'] = sum(r[1] for r in results)
        totals['health_records'] = sum(r[2] for r in results)
        totals['pets_with_health_records'] = sum(1 for r in results if r[2] > 0)
        return summary, None
