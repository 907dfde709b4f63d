# pawpal/services/notification_service.py
import logging
from datetime import datetime
from typing import Callable, List, Optional
from firebase_admin import messaging

from pawpal.models.notification import NotificationStatus, ScheduledNotification
from pawpal.models.user import UserProfile
from pawpal.services.document_store import DocumentStore
from pawpal.utils.datetime_utils import DateTimeUtils

class NotificationService:
    """
    예약 알림 저장소 및 발송을 담당하는 공용 서비스 클래스.
    - 예약된 알림은 'scheduledNotifications' 컬렉션에 보관됩니다.
    - dispatch_due()가 발송 시각이 지난 알림을 FCM으로 보냅니다.
    """
    COLLECTION = 'scheduledNotifications'

    def __init__(self, store: DocumentStore, sender: Optional[Callable[[messaging.Message], str]] = None):
        self.store = store
        self.sender = sender or messaging.send

    def schedule_at(self, user_id: str, when: datetime, title: str, body: str,
                    record_id: Optional[str] = None) -> str:
        """
        지정한 시각에 발송될 알림을 예약합니다.

        :param user_id: 알림을 받을 사용자 ID
        :param when: 발송 시각
        :param record_id: 알림을 유발한 건강 기록 ID (취소/재예약 추적용)
        :return: 예약된 알림 문서 ID
        """
        notification = ScheduledNotification(
            user_id=user_id, title=title, body=body,
            fire_at=DateTimeUtils.for_firestore(when), record_id=record_id
        )
        notification_id = self.store.add_document(self.COLLECTION, notification.to_document())
        logging.info(f"Notification scheduled for user {user_id} at {DateTimeUtils.to_iso_string(notification.fire_at)} (id: {notification_id})")
        return notification_id

    def list_pending(self, user_id: str) -> List[ScheduledNotification]:
        docs = self.store.query_documents(self.COLLECTION, {
            'userId': user_id, 'status': NotificationStatus.PENDING.value
        })
        return [ScheduledNotification.from_document(doc.id, doc.fields) for doc in docs]

    def cancel_all(self, user_id: str) -> int:
        """사용자의 대기 중인 예약 알림을 모두 취소하고 취소한 개수를 반환합니다."""
        pending = self.list_pending(user_id)
        for notification in pending:
            self.store.update_document(self.COLLECTION, notification.id, {
                'status': NotificationStatus.CANCELLED.value
            })
        logging.info(f"Cancelled {len(pending)} scheduled notifications for user {user_id}")
        return len(pending)

    def dispatch_due(self, now: Optional[datetime] = None) -> int:
        """
        발송 시각이 지난 대기 알림을 FCM으로 발송합니다.
        FCM 토큰이 없는 사용자의 알림은 다음 실행 때까지 대기 상태로 남습니다.

        :return: 발송에 성공한 알림 개수
        """
        now = now or DateTimeUtils.now()
        docs = self.store.query_documents(self.COLLECTION, {'status': NotificationStatus.PENDING.value})
        due = [ScheduledNotification.from_document(doc.id, doc.fields) for doc in docs]
        due = [n for n in due if n.fire_at and n.fire_at <= now]

        sent = 0
        for notification in due:
            user_doc = self.store.get_document('users', notification.user_id)
            fcm_token = UserProfile.from_document(user_doc.id, user_doc.fields).fcm_token if user_doc else None
            if not fcm_token:
                logging.warning(f"알림 발송 보류: FCM 토큰 없음 (user: {notification.user_id}, id: {notification.id})")
                continue

            try:
                self.sender(messaging.Message(
                    notification=messaging.Notification(title=notification.title, body=notification.body),
                    token=fcm_token,
                ))
                self.store.update_document(self.COLLECTION, notification.id, {
                    'status': NotificationStatus.SENT.value,
                    'sentAt': DateTimeUtils.now()
                })
                sent += 1
            except Exception as e:
                logging.error(f"알림 발송 중 오류 발생 (id: {notification.id}): {e}", exc_info=True)

        logging.info(f"Dispatched {sent}/{len(due)} due notifications")
        return sent
