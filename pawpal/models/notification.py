# pawpal/models/notification.py
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Dict, Any, Optional

from pawpal.utils.datetime_utils import DateTimeUtils

class NotificationStatus(Enum):
    """예약 알림 상태를 정의하는 Enum 클래스"""
    PENDING = "PENDING"
    SENT = "SENT"
    CANCELLED = "CANCELLED"

@dataclass
class ScheduledNotification:
    """
    Firestore 'scheduledNotifications' 컬렉션의 문서 구조를 정의하는 데이터클래스.
    record_id로 어떤 건강 기록 때문에 예약된 알림인지 추적합니다.
    """
    user_id: str           # 알림을 받을 사용자 ID
    title: str
    body: str
    fire_at: datetime      # 알림 발송 시각 (UTC)
    id: Optional[str] = None
    record_id: Optional[str] = None
    status: NotificationStatus = NotificationStatus.PENDING
    sent_at: Optional[datetime] = None

    @classmethod
    def from_document(cls, doc_id: str, data: Dict[str, Any]) -> "ScheduledNotification":
        data = DateTimeUtils.from_firestore(data)
        return cls(
            id=doc_id,
            user_id=data.get('userId'),
            title=data.get('title', ''),
            body=data.get('body', ''),
            fire_at=data.get('fireAt'),
            record_id=data.get('recordId'),
            status=NotificationStatus(data.get('status', NotificationStatus.PENDING.value)),
            sent_at=data.get('sentAt'),
        )

    def to_document(self) -> Dict[str, Any]:
        document = {
            'userId': self.user_id,
            'title': self.title,
            'body': self.body,
            'fireAt': self.fire_at,
            'status': self.status.value,
        }
        if self.record_id:
            document['recordId'] = self.record_id
        if self.sent_at:
            document['sentAt'] = self.sent_at
        return DateTimeUtils.for_firestore(document)
