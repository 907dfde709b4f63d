# pawpal/services/test_notification_services.py
from datetime import datetime, timezone

import pytest

from pawpal.models.health_record import HealthRecord, HealthRecordType
from pawpal.models.notification import NotificationStatus
from pawpal.services.reminder_service import REMINDER_TITLE

NOW = datetime(2025, 1, 1, 9, 0, tzinfo=timezone.utc)


def _record(next_due="2025-01-20", reminder_days=None):
    return HealthRecord(id="rec-1", pet_id="p1", type=HealthRecordType.VACCINATION, title="Rabies",
                        date="2025-01-01", next_due=next_due, reminder_days=reminder_days)


def test_reminder_is_scheduled_three_days_before_due_date(reminder_service, notification_service):
    notification_id = reminder_service.schedule_health_reminder("user-1", "Rex", _record(), now=NOW)

    (pending,) = notification_service.list_pending("user-1")
    assert pending.id == notification_id
    assert pending.title == REMINDER_TITLE
    assert pending.body == 'Rex has a vaccination - "Rabies" due on 2025-01-20'
    assert pending.fire_at == datetime(2025, 1, 17, tzinfo=timezone.utc)
    assert pending.record_id == "rec-1"


def test_reminder_days_on_record_overrides_default(reminder_service, notification_service):
    reminder_service.schedule_health_reminder("user-1", "Rex", _record(reminder_days=7), now=NOW)
    (pending,) = notification_service.list_pending("user-1")
    assert pending.fire_at == datetime(2025, 1, 13, tzinfo=timezone.utc)


@pytest.mark.parametrize("next_due", [None, "2025-01-03", "2024-06-01"])
def test_past_or_missing_due_dates_are_not_scheduled(reminder_service, store, next_due):
    assert reminder_service.schedule_health_reminder("user-1", "Rex", _record(next_due), now=NOW) is None
    assert store.collections['scheduledNotifications'] == {}


def test_cancel_all_only_touches_pending_notifications_of_user(notification_service, reminder_service):
    reminder_service.schedule_health_reminder("user-1", "Rex", _record(), now=NOW)
    reminder_service.schedule_health_reminder("user-2", "Milo", _record(), now=NOW)

    assert reminder_service.cancel_all_health_reminders("user-1") == 1
    assert notification_service.list_pending("user-1") == []
    assert len(notification_service.list_pending("user-2")) == 1


def test_dispatch_due_sends_to_fcm_token_and_marks_sent(notification_service, store, sent_messages):
    store.collections['users']['user-1'] = {'userId': "user-1", 'email': "a@b.c", 'fcmToken': "token-1"}
    due_id = notification_service.schedule_at("user-1", datetime(2025, 1, 1, tzinfo=timezone.utc), "T", "B")
    later_id = notification_service.schedule_at("user-1", datetime(2025, 2, 1, tzinfo=timezone.utc), "T", "B")

    assert notification_service.dispatch_due(now=NOW) == 1

    assert len(sent_messages) == 1
    assert sent_messages[0].token == "token-1"
    assert sent_messages[0].notification.title == "T"
    assert store.collections['scheduledNotifications'][due_id]['status'] == NotificationStatus.SENT.value
    assert store.collections['scheduledNotifications'][later_id]['status'] == NotificationStatus.PENDING.value


def test_dispatch_keeps_notification_pending_without_token(notification_service, store, sent_messages):
    notification_id = notification_service.schedule_at("user-9", datetime(2024, 12, 31, tzinfo=timezone.utc), "T", "B")

    assert notification_service.dispatch_due(now=NOW) == 0
    assert sent_messages == []
    assert store.collections['scheduledNotifications'][notification_id]['status'] == NotificationStatus.PENDING.value


def test_dispatch_continues_after_send_failure(store):
    from pawpal.services.notification_service import NotificationService

    def failing_sender(message):
        raise RuntimeError("FCM unavailable")

    service = NotificationService(store, sender=failing_sender)
    store.collections['users']['user-1'] = {'fcmToken': "token-1"}
    service.schedule_at("user-1", datetime(2024, 12, 31, tzinfo=timezone.utc), "T", "B")

    assert service.dispatch_due(now=NOW) == 0
    assert len(service.list_pending("user-1")) == 1
