# pawpal/screens/vets.py
import logging
from typing import List, Optional

from pawpal.api.vets.services import VetService
from pawpal.models.vet_clinic import VetClinic
from .base import Notice, ScreenResult

class VetScreen:
    """
    동물병원 찾기 화면 (조회 전용).
    지역 선택, 분류(all | emergency | clinic), 검색어 순으로 목록을 좁힙니다.
    """

    def __init__(self, vet_service: VetService):
        self.vet_service = vet_service

    def load(self, districts: Optional[List[str]] = None, category: str = 'all',
             term: Optional[str] = None) -> ScreenResult[VetClinic]:
        try:
            if districts:
                vets = self.vet_service.list_by_districts(districts)
            elif category == 'emergency':
                vets = self.vet_service.list_emergency()
            else:
                vets = self.vet_service.list_all()
        except Exception as e:
            logging.error(f"Error fetching vets: {e}", exc_info=True)
            return ScreenResult([], Notice.error("Failed to load vets"))

        if category == 'emergency':
            vets = [vet for vet in vets if vet.emergency]
        elif category == 'clinic':
            vets = [vet for vet in vets if not vet.emergency]

        if term and term.strip():
            vets = [vet for vet in vets if vet.matches(term.strip())]
        return ScreenResult(vets)
