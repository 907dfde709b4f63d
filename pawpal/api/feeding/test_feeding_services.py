# pawpal/api/feeding/test_feeding_services.py
import pytest
from marshmallow import ValidationError

from pawpal.api.feeding.schemas import FeedingScheduleCreateSchema
from pawpal.core.errors import MissingParentError
from pawpal.models.feeding_schedule import FeedingFrequency, FeedingSchedule


def test_created_schedule_round_trips_through_list_by_pet(feeding_service):
    schedule = FeedingSchedule(pet_id="p1", food_type="Dry Food", amount="200g",
                               time="08:00 AM", frequency=FeedingFrequency.DAILY)

    schedule_id = feeding_service.create(schedule)
    schedules = feeding_service.list_by_pet("p1")

    assert len(schedules) == 1
    loaded = schedules[0]
    assert loaded.id == schedule_id
    assert (loaded.pet_id, loaded.food_type, loaded.amount, loaded.time, loaded.frequency) == \
        ("p1", "Dry Food", "200g", "08:00 AM", FeedingFrequency.DAILY)


def test_list_by_pet_never_returns_other_pets_schedules(feeding_service):
    for pet_id in ("p1", "p2", "p1", "p3"):
        feeding_service.create(FeedingSchedule(pet_id=pet_id, food_type="Wet Food", amount="1 can", time="06:00 PM"))

    assert all(s.pet_id == "p1" for s in feeding_service.list_by_pet("p1"))
    assert feeding_service.count_by_pet("p1") == 2
    assert feeding_service.count_by_pet("p4") == 0


def test_missing_pet_id_is_rejected_before_backend_call(feeding_service, store):
    with pytest.raises(MissingParentError):
        feeding_service.create(FeedingSchedule(pet_id="", food_type="Dry Food", amount="200g", time="08:00 AM"))
    with pytest.raises(MissingParentError):
        feeding_service.list_by_pet(None)
    assert store.calls == []


def test_legacy_documents_are_readable(feeding_service, store):
    store.collections['feedingSchedules']['old-1'] = {
        'petId': "p1", 'food': "Kibble", 'quantity': "1 cup", 'time': "07:00 AM", 'repeat': "weekly"
    }

    (schedule,) = feeding_service.list_by_pet("p1")

    assert schedule.food_type == "Kibble"
    assert schedule.amount == "1 cup"
    assert schedule.frequency == FeedingFrequency.WEEKLY


def test_update_stores_enum_value_and_clears_notes(feeding_service, store):
    schedule_id = feeding_service.create(FeedingSchedule(pet_id="p1", food_type="Dry Food", amount="200g", time="08:00 AM"))

    feeding_service.update(schedule_id, {'frequency': FeedingFrequency.MONTHLY, 'notes': None})

    stored = store.collections['feedingSchedules'][schedule_id]
    assert stored['frequency'] == "monthly"
    assert 'updatedAt' in stored
    assert stored['notes'] is None


def test_update_without_changes_is_rejected(feeding_service):
    with pytest.raises(ValueError):
        feeding_service.update("any", {'food_type': None})


def test_schedule_schema_rejects_impossible_start_date():
    with pytest.raises(ValidationError):
        FeedingScheduleCreateSchema().load({'food_type': "Dry Food", 'amount': "200g", 'time': "08:00 AM",
                                            'start_date': "2025-02-30"})
