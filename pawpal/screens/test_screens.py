# pawpal/screens/test_screens.py
"""
화면(Screen) 동작 테스트: 낙관적 추가/삭제, 롤백 알림, 상위 엔티티 검증
"""
import pytest

from pawpal.core.errors import AuthenticationRequiredError, ItemNotFoundError, MissingParentError
from pawpal.core.optimistic import is_temporary_id
from pawpal.core.session import Session
from pawpal.models.feeding_schedule import FeedingFrequency
from pawpal.models.health_record import HealthRecordType
from pawpal.models.notification import NotificationStatus
from pawpal.models.pet import Pet
from pawpal.screens import FeedingScreen, HealthScreen, PetsScreen, SummaryScreen, VetScreen

PET_FIELDS = {'name': "Rex", 'breed': "Beagle", 'age': 3, 'weight': 12.5}


@pytest.fixture
def pets_screen(session, pet_service):
    return PetsScreen(session, pet_service)


@pytest.fixture
def own_pet_id(pet_service, session):
    return pet_service.create(Pet(owner_id=session.user_id, **PET_FIELDS))


def _health_screen(session, pet_id, services):
    return HealthScreen(session, pet_id, services['health'], services['pets'], services['reminders'])


# --- 반려동물 화면 ---
def test_screen_requires_session(pet_service):
    with pytest.raises(AuthenticationRequiredError):
        PetsScreen(None, pet_service)


def test_add_pet_sets_owner_and_backend_id(pets_screen, session):
    result = pets_screen.add_pet(dict(PET_FIELDS))

    assert not result.failed
    assert result.notice.level == "success"
    assert result.item.owner_id == session.user_id
    assert [pet.id for pet in result.items] == [result.item.id]
    assert not is_temporary_id(result.item.id)


def test_failed_add_rolls_back_and_returns_error_notice(pets_screen, own_pet_id, store):
    before = pets_screen.load().items
    store.fail('add_document', 'pets')

    result = pets_screen.add_pet(dict(PET_FIELDS, name="Milo"))

    assert result.failed
    assert result.notice.title == "Error"
    assert result.items == before
    assert result.item is None


def test_failed_delete_restores_pet_at_its_position(pets_screen, pet_service, session, store):
    for name in ("Rex", "Milo", "Luna"):
        pet_service.create(Pet(owner_id=session.user_id, **dict(PET_FIELDS, name=name)))
    before = pets_screen.load().items
    store.fail('delete_document', 'pets')

    result = pets_screen.remove(before[1].id)

    assert result.failed
    assert result.items == before


def test_remove_unknown_pet_raises_not_found(pets_screen):
    with pytest.raises(ItemNotFoundError):
        pets_screen.remove("no-such-pet")


def test_other_users_pet_cannot_be_deleted(pet_service, own_pet_id):
    stranger = Session(user_id="user-2", email="stranger@pawpal.app")
    with pytest.raises(ItemNotFoundError):
        PetsScreen(stranger, pet_service).remove(own_pet_id)
    assert pet_service.get_pet(own_pet_id) is not None


def test_load_failure_returns_error_notice(pets_screen, store):
    store.fail('query_documents', 'pets')
    result = pets_screen.load()
    assert result.failed
    assert result.items == []


def test_edit_reloads_updated_pet(pets_screen, own_pet_id):
    result = pets_screen.edit(own_pet_id, {'weight': 14.0})
    assert not result.failed
    assert result.item.weight == 14.0


def test_edit_failure_keeps_current_list(pets_screen, own_pet_id, store):
    before = pets_screen.load().items
    store.fail('update_document', 'pets')
    result = pets_screen.edit(own_pet_id, {'weight': 14.0})
    assert result.failed
    assert result.items == before


# --- 급여 일정 화면 ---
def test_feeding_screen_for_foreign_pet_raises_missing_parent(session, pet_service, feeding_service, store):
    foreign_pet_id = pet_service.create(Pet(owner_id="user-2", **PET_FIELDS))
    screen = FeedingScreen(session, foreign_pet_id, feeding_service, pet_service)

    with pytest.raises(MissingParentError):
        screen.add_schedule({'food_type': "Dry Food", 'amount': "200g", 'time': "08:00 AM"})
    assert ('add_document', 'feedingSchedules') not in store.calls


def test_feeding_schedule_added_through_screen_is_listed(session, own_pet_id, pet_service, feeding_service):
    screen = FeedingScreen(session, own_pet_id, feeding_service, pet_service)

    result = screen.add_schedule({'food_type': "Dry Food", 'amount': "200g", 'time': "08:00 AM",
                                  'frequency': FeedingFrequency.DAILY})

    (listed,) = FeedingScreen(session, own_pet_id, feeding_service, pet_service).load().items
    assert listed.id == result.item.id
    assert (listed.food_type, listed.amount, listed.time, listed.frequency) == \
        ("Dry Food", "200g", "08:00 AM", FeedingFrequency.DAILY)


# --- 건강 기록 화면 ---
def test_health_record_with_next_due_schedules_reminder(session, own_pet_id, services, notification_service):
    screen = _health_screen(session, own_pet_id, services)

    result = screen.add_record({'type': HealthRecordType.VACCINATION, 'title': "Rabies",
                                'date': "2099-01-01", 'next_due': "2099-06-01"})

    (pending,) = notification_service.list_pending(session.user_id)
    assert pending.record_id == result.item.id
    assert pending.body == 'Rex has a vaccination - "Rabies" due on 2099-06-01'


def test_reminder_failure_does_not_fail_record_creation(session, own_pet_id, services, store):
    store.fail('add_document', 'scheduledNotifications')
    screen = _health_screen(session, own_pet_id, services)

    result = screen.add_record({'type': HealthRecordType.CHECKUP, 'title': "Annual",
                                'date': "2099-01-01", 'next_due': "2099-06-01"})

    assert not result.failed
    assert len(result.items) == 1


def test_deleting_health_record_keeps_its_reminder(session, own_pet_id, services, notification_service):
    screen = _health_screen(session, own_pet_id, services)
    created = screen.add_record({'type': HealthRecordType.MEDICATION, 'title': "Heartworm",
                                 'date': "2099-01-01", 'next_due': "2099-02-01"}).item

    result = screen.remove(created.id)

    assert not result.failed
    (pending,) = notification_service.list_pending(session.user_id)
    assert pending.status == NotificationStatus.PENDING
    assert pending.record_id == created.id


def test_health_stats_include_reminders(session, own_pet_id, services):
    screen = _health_screen(session, own_pet_id, services)
    screen.add_record({'type': HealthRecordType.VACCINATION, 'title': "Rabies",
                       'date': "2020-01-01", 'next_due': "2020-06-01"})

    stats = screen.stats()

    assert stats['total_records'] == 1
    assert stats['overdue_reminders'] == 1
    assert stats['reminders'][0]['record_title'] == "Rabies"


# --- 동물병원 / 요약 화면 ---
def test_vet_screen_filters(vet_service):
    vet_service.seed_sample_vets()
    screen = VetScreen(vet_service)

    assert len(screen.load().items) == 5
    assert {v.name for v in screen.load(category='clinic').items} == {"Kandy Animal Clinic", "Galle Veterinary Center"}
    assert [v.name for v in screen.load(districts=["Colombo", "Galle"], category='emergency').items] == \
        ["Colombo Pet Hospital"]
    assert [v.name for v in screen.load(term="negombo").items] == ["24/7 Pet Emergency Negombo"]


def test_vet_screen_failure_notice(vet_service, store):
    store.fail('query_documents', 'vets')
    result = VetScreen(vet_service).load()
    assert result.failed
    assert result.items == []


def test_summary_counts_per_pet(session, pet_service, feeding_service, health_service, services):
    rex = pet_service.create(Pet(owner_id=session.user_id, **PET_FIELDS))
    milo = pet_service.create(Pet(owner_id=session.user_id, **dict(PET_FIELDS, name="Milo")))
    FeedingScreen(session, rex, feeding_service, pet_service).add_schedule(
        {'food_type': "Dry Food", 'amount': "200g", 'time': "08:00 AM"})
    _health_screen(session, milo, services).add_record(
        {'type': HealthRecordType.CHECKUP, 'title': "Annual", 'date': "2024-01-01"})

    summary, notice = SummaryScreen(session, pet_service, feeding_service, health_service).load()

    assert notice is None
    counts = {p['name']: (p['feeding_schedules'], p['health_records']) for p in summary['pets']}
    assert counts == {"Rex": (1, 0), "Milo": (0, 1)}
    assert summary['totals'] == {'pets': 2, 'feeding_schedules': 1, 'health_records': 1,
                                 'pets_with_health_records': 1}


def test_summary_failure_notice(session, pet_service, feeding_service, health_service, store):
    pet_service.create(Pet(owner_id=session.user_id, **PET_FIELDS))
    store.fail('query_documents', 'healthRecords')

    summary, notice = SummaryScreen(session, pet_service, feeding_service, health_service).load()

    assert notice.level == "error"
    assert summary['pets'] == []


# --- 변경 전 목록 조회 실패 ---
def test_add_returns_error_notice_when_list_read_fails(pets_screen, store):
    store.fail('query_documents', 'pets')

    result = pets_screen.add_pet(dict(PET_FIELDS))

    assert result.failed
    assert result.notice.message == "Failed to add pet"
    assert result.items == []
    assert ('add_document', 'pets') not in store.calls


def test_remove_returns_error_notice_when_list_read_fails(pets_screen, own_pet_id, store):
    store.fail('query_documents', 'pets')

    result = pets_screen.remove(own_pet_id)

    assert result.failed
    assert result.notice.message == "Failed to delete pet"
    assert ('delete_document', 'pets') not in store.calls


def test_edit_returns_error_notice_when_list_read_fails(pets_screen, own_pet_id, store):
    store.fail('query_documents', 'pets')

    result = pets_screen.edit(own_pet_id, {'weight': 14.0})

    assert result.failed
    assert result.notice.message == "Failed to update pet"
    assert ('update_document', 'pets') not in store.calls


def test_missing_parent_propagates_from_mutations(session, feeding_service, pet_service):
    screen = FeedingScreen(session, "no-such-pet", feeding_service, pet_service)
    with pytest.raises(MissingParentError):
        screen.remove("any")


# --- 급여 일정 / 건강 기록 롤백 ---
def test_failed_feeding_add_rolls_back(session, own_pet_id, pet_service, feeding_service, store):
    screen = FeedingScreen(session, own_pet_id, feeding_service, pet_service)
    screen.add_schedule({'food_type': "Dry Food", 'amount': "200g", 'time': "08:00 AM"})
    before = screen.load().items
    store.fail('add_document', 'feedingSchedules')

    result = screen.add_schedule({'food_type': "Wet Food", 'amount': "1 can", 'time': "06:00 PM"})

    assert result.failed
    assert result.notice.message == "Failed to add feeding schedule"
    assert result.items == before


def test_failed_feeding_delete_restores_schedule(session, own_pet_id, pet_service, feeding_service, store):
    screen = FeedingScreen(session, own_pet_id, feeding_service, pet_service)
    for food in ("Dry Food", "Wet Food", "Treats"):
        screen.add_schedule({'food_type': food, 'amount': "100g", 'time': "08:00 AM"})
    before = screen.load().items
    store.fail('delete_document', 'feedingSchedules')

    result = screen.remove(before[1].id)

    assert result.failed
    assert result.items == before


def test_failed_health_add_rolls_back_without_reminder(session, own_pet_id, services, store, notification_service):
    screen = _health_screen(session, own_pet_id, services)
    before = screen.load().items
    store.fail('add_document', 'healthRecords')

    result = screen.add_record({'type': HealthRecordType.VACCINATION, 'title': "Rabies",
                                'date': "2099-01-01", 'next_due': "2099-06-01"})

    assert result.failed
    assert result.items == before
    assert notification_service.list_pending(session.user_id) == []


def test_failed_health_delete_restores_record(session, own_pet_id, services, store):
    screen = _health_screen(session, own_pet_id, services)
    for title in ("Rabies", "Annual", "Heartworm"):
        screen.add_record({'type': HealthRecordType.CHECKUP, 'title': title, 'date': "2024-01-01"})
    before = screen.load().items
    store.fail('delete_document', 'healthRecords')

    result = screen.remove(before[1].id)

    assert result.failed
    assert result.notice.message == "Failed to delete health record"
    assert result.items == before
