# pawpal/models/user.py
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Dict, Any

from pawpal.utils.datetime_utils import DateTimeUtils

# 파이썬 속성명 -> Firestore 'users' 문서 필드명
USER_FIELDS = {
    'user_id': 'userId',
    'email': 'email',
    'join_date': 'joinDate',
    'fcm_token': 'fcmToken',
}

@dataclass
class UserProfile:
    """
    Firestore 'users' 컬렉션의 문서 구조를 정의하는 데이터클래스.
    계정 자체(이메일, 비밀번호, 인증 여부)는 Firebase Auth가 관리하고,
    여기에는 앱이 추가로 필요한 정보만 저장합니다.
    """
    user_id: str
    email: str
    join_date: datetime = field(default_factory=DateTimeUtils.now)
    fcm_token: Optional[str] = None  # 건강 알림 푸시 발송용 FCM 토큰

    @classmethod
    def from_document(cls, doc_id: str, data: Dict[str, Any]) -> "UserProfile":
        data = DateTimeUtils.from_firestore(data)
        return cls(
            user_id=data.get('userId', doc_id),
            email=data.get('email', ''),
            join_date=data.get('joinDate'),
            fcm_token=data.get('fcmToken'),
        )

    def to_document(self) -> Dict[str, Any]:
        return {
            key: getattr(self, attr)
            for attr, key in USER_FIELDS.items()
            if getattr(self, attr) is not None
        }

    @staticmethod
    def document_fields(changes: Dict[str, Any]) -> Dict[str, Any]:
        return {USER_FIELDS[attr]: value for attr, value in changes.items() if attr in USER_FIELDS}
