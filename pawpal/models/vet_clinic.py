# pawpal/models/vet_clinic.py
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Dict, Any

from pawpal.utils.datetime_utils import DateTimeUtils

VET_FIELDS = {
    'name': 'name',
    'address': 'address',
    'contact': 'contact',
    'district': 'district',
    'emergency': 'emergency',
    'rating': 'rating',
    'created_at': 'createdAt',
    'updated_at': 'updatedAt',
}

@dataclass
class VetClinic:
    """
    Firestore 'vets' 컬렉션 문서 구조.
    사용자 소유가 아닌 공용 데이터이며, 지역(district) 단위로 조회합니다.
    """
    name: str
    address: str
    contact: str
    district: str
    emergency: bool = False
    rating: float = 0
    id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_document(cls, doc_id: str, data: Dict[str, Any]) -> "VetClinic":
        data = DateTimeUtils.from_firestore(data)
        return cls(
            id=doc_id,
            name=data.get('name', ''),
            address=data.get('address', ''),
            # 샘플 데이터 일부는 phone 필드를 사용
            contact=data.get('contact') or data.get('phone', ''),
            district=data.get('district', ''),
            emergency=bool(data.get('emergency', False)),
            rating=data.get('rating') or 0,
            created_at=data.get('createdAt'),
            updated_at=data.get('updatedAt'),
        )

    def to_document(self) -> Dict[str, Any]:
        return {
            key: getattr(self, attr)
            for attr, key in VET_FIELDS.items()
            if getattr(self, attr) is not None
        }

    @staticmethod
    def document_fields(changes: Dict[str, Any]) -> Dict[str, Any]:
        return {VET_FIELDS[attr]: value for attr, value in changes.items() if attr in VET_FIELDS}

    def matches(self, term: str) -> bool:
        """이름, 주소, 지역에 검색어가 포함되는지 (대소문자 무시)"""
        needle = term.lower()
        return (needle in self.name.lower()
                or needle in self.address.lower()
                or needle in self.district.lower())
