# pawpal/services/reminder_service.py
import logging
from datetime import datetime
from typing import Optional

from pawpal.models.health_record import HealthRecord
from pawpal.services.notification_service import NotificationService
from pawpal.utils.datetime_utils import DateTimeUtils

REMINDER_TITLE = "🏥 Health Reminder"

class HealthReminderService:
    """
    건강 기록의 다음 예정일(next_due) 알림 예약.
    Fire-and-forget 방식이며, 기록 수정/삭제 시 예약된 알림을 취소하지 않습니다.
    """
    def __init__(self, notification_service: NotificationService, default_days: int = 3):
        self.notification_service = notification_service
        self.default_days = default_days

    def schedule_health_reminder(self, user_id: str, pet_name: str, record: HealthRecord,
                                 reminder_days: Optional[int] = None,
                                 now: Optional[datetime] = None) -> Optional[str]:
        """
        예정일 reminder_days일 전에 알림을 예약합니다.
        예정일이 없거나 알림 시각이 이미 지났으면 예약하지 않고 None을 반환합니다.
        """
        if not record.next_due:
            return None

        if reminder_days is None:
            reminder_days = record.reminder_days if record.reminder_days is not None else self.default_days

        remind_at = DateTimeUtils.days_before(record.next_due, reminder_days)
        if remind_at <= (now or DateTimeUtils.now()):
            logging.info(f"Reminder for record {record.id} skipped: {DateTimeUtils.to_iso_string(remind_at)} is in the past")
            return None

        body = f'{pet_name} has a {record.type.value} - "{record.title}" due on {record.next_due}'
        return self.notification_service.schedule_at(
            user_id, remind_at, REMINDER_TITLE, body, record_id=record.id
        )

    def cancel_all_health_reminders(self, user_id: str) -> int:
        return self.notification_service.cancel_all(user_id)
