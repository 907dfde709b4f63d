# conftest.py
"""
공용 테스트 픽스처

- MemoryDocumentStore: DocumentStore 계약을 메모리로 구현한 테스트용 저장소 (실패 주입 지원)
- FakeAuthProvider: 호출을 기록하는 인증 제공자 대역
- app / client / auth_headers: 위 대역을 주입한 Flask 테스트 앱
"""
import itertools
from collections import defaultdict

import pytest
from flask_jwt_extended import create_access_token, create_refresh_token

from pawpal import create_app
from pawpal.api.auth.services import AuthGateway
from pawpal.api.feeding.services import FeedingService
from pawpal.api.health.services import HealthService
from pawpal.api.pets.services import PetService
from pawpal.api.vets.services import VetService
from pawpal.core.errors import AuthProviderError
from pawpal.core.session import Session
from pawpal.services.document_store import Document, DocumentStore
from pawpal.services.notification_service import NotificationService
from pawpal.services.reminder_service import HealthReminderService
from pawpal.utils.datetime_utils import DateTimeUtils


class BackendUnavailable(Exception):
    """주입된 저장소 실패"""


class MemoryDocumentStore(DocumentStore):
    def __init__(self):
        self.collections = defaultdict(dict)
        self.calls = []
        self._failures = {}
        self._ids = itertools.count(1)

    def fail(self, operation: str, collection_name: str = None, error: Exception = None):
        """다음부터 해당 작업(예: 'add_document')이 실패하도록 설정합니다."""
        self._failures[(operation, collection_name)] = error or BackendUnavailable(f"{operation} failed")

    def recover(self):
        self._failures.clear()

    def _record(self, operation: str, collection_name: str):
        self.calls.append((operation, collection_name))
        for key in ((operation, collection_name), (operation, None)):
            if key in self._failures:
                raise self._failures[key]

    def add_document(self, collection_name, fields):
        self._record('add_document', collection_name)
        doc_id = f"{collection_name}-{next(self._ids)}"
        self.collections[collection_name][doc_id] = DateTimeUtils.for_firestore(dict(fields))
        return doc_id

    def set_document(self, collection_name, doc_id, fields):
        self._record('set_document', collection_name)
        self.collections[collection_name][doc_id] = DateTimeUtils.for_firestore(dict(fields))

    def get_document(self, collection_name, doc_id):
        self._record('get_document', collection_name)
        fields = self.collections[collection_name].get(doc_id)
        return Document(id=doc_id, fields=dict(fields)) if fields is not None else None

    def query_documents(self, collection_name, filters=None, order_by=None):
        self._record('query_documents', collection_name)
        docs = [
            Document(id=doc_id, fields=dict(fields))
            for doc_id, fields in self.collections[collection_name].items()
            if all(fields.get(key) == value for key, value in (filters or {}).items())
        ]
        for field_name in reversed(order_by or []):
            docs.sort(key=lambda doc: doc.fields.get(field_name))
        return docs

    def update_document(self, collection_name, doc_id, fields):
        self._record('update_document', collection_name)
        if doc_id not in self.collections[collection_name]:
            raise KeyError(f"No document to update: {collection_name}/{doc_id}")
        self.collections[collection_name][doc_id].update(DateTimeUtils.for_firestore(dict(fields)))

    def delete_document(self, collection_name, doc_id):
        self._record('delete_document', collection_name)
        self.collections[collection_name].pop(doc_id, None)


class FakeAuthProvider:
    """FirebaseAuthProvider와 같은 메서드를 가진 인증 제공자 대역"""

    def __init__(self):
        self.calls = []
        self.users = {}  # uid -> {'email', 'password', 'email_verified'}
        self._uids = itertools.count(1)

    def _session(self, uid):
        user = self.users[uid]
        return Session(user_id=uid, email=user['email'], email_verified=user['email_verified'])

    def create_user(self, email, password):
        self.calls.append(('create_user', email))
        uid = f"uid-{next(self._uids)}"
        self.users[uid] = {'email': email, 'password': password, 'email_verified': False}
        return self._session(uid)

    def sign_in(self, email, password):
        self.calls.append(('sign_in', email))
        for uid, user in self.users.items():
            if user['email'] == email and user['password'] == password:
                return self._session(uid)
        raise AuthProviderError("INVALID_LOGIN_CREDENTIALS")

    def get_user(self, uid):
        self.calls.append(('get_user', uid))
        return self._session(uid)

    def update_user(self, uid, email=None, password=None):
        self.calls.append(('update_user', uid))
        if email is not None:
            self.users[uid].update(email=email, email_verified=False)
        if password is not None:
            self.users[uid]['password'] = password
        return self._session(uid)

    def send_password_reset(self, email):
        self.calls.append(('send_password_reset', email))

    def send_email_verification(self, uid):
        self.calls.append(('send_email_verification', uid))


@pytest.fixture
def store():
    return MemoryDocumentStore()


@pytest.fixture
def sent_messages():
    return []


@pytest.fixture
def notification_service(store, sent_messages):
    def sender(message):
        sent_messages.append(message)
        return f"projects/pawpal/messages/{len(sent_messages)}"
    return NotificationService(store, sender=sender)


@pytest.fixture
def reminder_service(notification_service):
    return HealthReminderService(notification_service, default_days=3)


@pytest.fixture
def auth_provider():
    return FakeAuthProvider()


@pytest.fixture
def pet_service(store):
    return PetService(store)


@pytest.fixture
def feeding_service(store):
    return FeedingService(store)


@pytest.fixture
def health_service(store):
    return HealthService(store)


@pytest.fixture
def vet_service(store):
    return VetService(store)


@pytest.fixture
def session():
    return Session(user_id="user-1", email="owner@pawpal.app", email_verified=True)


@pytest.fixture
def services(store, notification_service, reminder_service, auth_provider,
             pet_service, feeding_service, health_service, vet_service):
    return {
        'store': store,
        'notifications': notification_service,
        'reminders': reminder_service,
        'auth': AuthGateway(auth_provider, store),
        'pets': pet_service,
        'feeding': feeding_service,
        'health': health_service,
        'vets': vet_service,
    }


@pytest.fixture
def app(services):
    return create_app('testing', services=services)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth_headers(app, session):
    with app.app_context():
        token = create_access_token(identity=session.user_id, additional_claims=session.to_claims())
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def refresh_headers(app, session):
    with app.app_context():
        token = create_refresh_token(identity=session.user_id, additional_claims=session.to_claims())
    return {"Authorization": f"Bearer {token}"}
