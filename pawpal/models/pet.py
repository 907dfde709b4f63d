# pawpal/models/pet.py
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Dict, Any

from pawpal.utils.datetime_utils import DateTimeUtils

# 파이썬 속성명 -> Firestore 'pets' 문서 필드명 (모바일 앱 컬렉션과 호환)
PET_FIELDS = {
    'owner_id': 'userId',
    'name': 'name',
    'breed': 'breed',
    'age': 'age',
    'weight': 'weight',
    'health_history': 'healthHistory',
    'image': 'image',
    'created_at': 'createdAt',
    'updated_at': 'updatedAt',
}

@dataclass
class Pet:
    """
    Firestore 'pets' 컬렉션 문서 구조.
    항상 소유자(owner_id)를 가지며, 급여 일정/건강 기록의 상위 엔티티입니다.
    삭제 시 하위 기록은 함께 삭제되지 않습니다.
    """
    # PATCH에서 None으로 보내면 값을 비우는 선택 항목
    CLEARABLE = frozenset({'health_history', 'image'})

    owner_id: str
    name: str
    breed: str
    age: float
    weight: float
    id: Optional[str] = None
    health_history: Optional[str] = None
    image: Optional[str] = None  # Storage 공개 URL
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_document(cls, doc_id: str, data: Dict[str, Any]) -> "Pet":
        """Firestore 문서 딕셔너리로부터 Pet 인스턴스를 생성합니다."""
        data = DateTimeUtils.from_firestore(data)
        return cls(
            id=doc_id,
            owner_id=data.get('userId'),
            name=data.get('name', ''),
            breed=data.get('breed', ''),
            age=data.get('age', 0),
            weight=data.get('weight', 0),
            health_history=data.get('healthHistory'),
            image=data.get('image'),
            created_at=data.get('createdAt'),
            updated_at=data.get('updatedAt'),
        )

    def to_document(self) -> Dict[str, Any]:
        """id를 제외하고, 값이 없는 필드는 생략한 Firestore 문서를 반환합니다."""
        return {
            key: getattr(self, attr)
            for attr, key in PET_FIELDS.items()
            if getattr(self, attr) is not None
        }

    @staticmethod
    def document_fields(changes: Dict[str, Any]) -> Dict[str, Any]:
        """부분 수정용 속성 딕셔너리를 문서 필드명으로 변환합니다."""
        return {PET_FIELDS[attr]: value for attr, value in changes.items() if attr in PET_FIELDS}
