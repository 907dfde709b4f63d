# pawpal/api/vets/services.py
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, Any, List

from pawpal.models.vet_clinic import VetClinic
from pawpal.services.document_store import DocumentStore
from pawpal.utils.datetime_utils import DateTimeUtils

SAMPLE_VETS = [
    VetClinic(name='Colombo Pet Hospital', address='123 Galle Road, Colombo 03',
              contact='+94112345678', district='Colombo', emergency=True, rating=4.8),
    VetClinic(name='Kandy Animal Clinic', address='456 Peradeniya Road, Kandy',
              contact='+94812345678', district='Kandy', emergency=False, rating=4.5),
    VetClinic(name='Galle Veterinary Center', address='789 Main Street, Galle',
              contact='+94912345678', district='Galle', emergency=False, rating=4.2),
    VetClinic(name='24/7 Pet Emergency Negombo', address='321 Beach Road, Negombo',
              contact='+94312345678', district='Gampaha', emergency=True, rating=4.6),
    VetClinic(name='Jaffna Animal Hospital', address='654 Hospital Road, Jaffna',
              contact='+94212345678', district='Jaffna', emergency=True, rating=4.4),
]

class VetService:
    """
    동물병원 디렉터리 조회 서비스.
    병원 정보는 사용자 소유가 아닌 공용 데이터이며, 지역(district) 단위로 조회합니다.
    """
    COLLECTION = 'vets'

    def __init__(self, store: DocumentStore):
        self.store = store

    def _query(self, filters=None, order_by=None) -> List[VetClinic]:
        docs = self.store.query_documents(self.COLLECTION, filters, order_by)
        return [VetClinic.from_document(doc.id, doc.fields) for doc in docs]

    def list_by_district(self, district: str) -> List[VetClinic]:
        return self._query({'district': district}, ['name'])

    def list_all(self) -> List[VetClinic]:
        return self._query(order_by=['district', 'name'])

    def list_emergency(self) -> List[VetClinic]:
        return self._query({'emergency': True}, ['name'])

    def search(self, term: str) -> List[VetClinic]:
        """
        이름, 주소, 지역에 검색어가 포함된 병원을 찾습니다.
        Firestore는 부분 문자열 검색을 지원하지 않으므로 전체 목록을 받아 서버에서 거릅니다.
        """
        term = (term or '').strip()
        vets = self.list_all()
        if not term:
            return vets
        return [vet for vet in vets if vet.matches(term)]

    def list_by_districts(self, districts: List[str]) -> List[VetClinic]:
        """여러 지역을 동시에 조회하고, 중복을 제거해 이름순으로 반환합니다."""
        if not districts:
            return []

        with ThreadPoolExecutor(max_workers=len(districts)) as executor:
            results = list(executor.map(self.list_by_district, districts))

        unique = {}
        for vets in results:
            for vet in vets:
                unique.setdefault(vet.id, vet)
        return sorted(unique.values(), key=lambda vet: vet.name)

    def stats(self) -> Dict[str, Any]:
        vets = self.list_all()
        breakdown: Dict[str, int] = {}
        for vet in vets:
            breakdown[vet.district] = breakdown.get(vet.district, 0) + 1
        emergency = sum(1 for vet in vets if vet.emergency)
        return {
            'total': len(vets),
            'emergency': emergency,
            'clinics': len(vets) - emergency,
            'districts': len(breakdown),
            'district_breakdown': breakdown,
        }

    def add(self, vet: VetClinic) -> str:
        fields = vet.to_document()
        fields.setdefault('emergency', False)
        fields.setdefault('rating', 0)
        now = DateTimeUtils.now()
        fields.update(createdAt=now, updatedAt=now)
        vet_id = self.store.add_document(self.COLLECTION, fields)
        logging.info(f"Vet added with ID: {vet_id}")
        return vet_id

    def update(self, vet_id: str, changes: Dict[str, Any]):
        fields = VetClinic.document_fields(
            {attr: value for attr, value in changes.items() if value is not None}
        )
        if not fields:
            raise ValueError("수정할 데이터가 제공되지 않았습니다.")
        fields['updatedAt'] = DateTimeUtils.now()
        self.store.update_document(self.COLLECTION, vet_id, fields)

    def delete(self, vet_id: str):
        self.store.delete_document(self.COLLECTION, vet_id)

    def seed_sample_vets(self) -> int:
        """컬렉션이 비어 있을 때만 샘플 병원 데이터를 추가하고, 추가한 개수를 반환합니다."""
        if self.list_all():
            logging.info("Vets already exist, skipping seed")
            return 0
        for vet in SAMPLE_VETS:
            self.add(vet)
        logging.info(f"Sample vets added successfully ({len(SAMPLE_VETS)})")
        return len(SAMPLE_VETS)
