# pawpal/services/test_auth_provider.py
"""
Identity Toolkit REST 호출 테스트 (HTTP 세션과 Admin SDK는 대역으로 교체)
"""
from types import SimpleNamespace
from unittest.mock import Mock

import pytest

from pawpal.core.errors import AuthProviderError
from pawpal.services import auth_provider as auth_provider_module
from pawpal.services.auth_provider import FirebaseAuthProvider


def _response(status_code, payload):
    return SimpleNamespace(status_code=status_code, json=lambda: payload)


def _user_record(uid="uid-1", email="owner@pawpal.app", verified=True):
    return SimpleNamespace(uid=uid, email=email, email_verified=verified)


@pytest.fixture
def http():
    return Mock()


@pytest.fixture
def provider(http):
    return FirebaseAuthProvider("web-api-key", timeout=5, http=http)


def test_sign_in_posts_credentials_and_reloads_user(provider, http, monkeypatch):
    http.post.return_value = _response(200, {"localId": "uid-1", "idToken": "id-token"})
    monkeypatch.setattr(auth_provider_module.firebase_auth, "get_user", lambda uid: _user_record(uid))

    session = provider.sign_in("owner@pawpal.app", "secret123")

    assert session.user_id == "uid-1"
    assert session.email_verified is True
    args, kwargs = http.post.call_args
    assert args[0].endswith("accounts:signInWithPassword")
    assert kwargs["params"] == {"key": "web-api-key"}
    assert kwargs["json"]["email"] == "owner@pawpal.app"
    assert kwargs["timeout"] == 5


@pytest.mark.parametrize("message,code", [
    ("INVALID_LOGIN_CREDENTIALS", "INVALID_LOGIN_CREDENTIALS"),
    ("TOO_MANY_ATTEMPTS_TRY_LATER : Access to this account has been temporarily disabled",
     "TOO_MANY_ATTEMPTS_TRY_LATER"),
])
def test_error_code_is_passed_through(provider, http, message, code):
    http.post.return_value = _response(400, {"error": {"code": 400, "message": message}})

    with pytest.raises(AuthProviderError) as exc_info:
        provider.sign_in("owner@pawpal.app", "bad")
    assert exc_info.value.code == code


def test_unparseable_error_body_uses_http_status(provider, http):
    http.post.return_value = _response(503, None)
    with pytest.raises(AuthProviderError) as exc_info:
        provider.send_password_reset("owner@pawpal.app")
    assert exc_info.value.code == "HTTP_503"


def test_missing_api_key_fails_without_request(http):
    provider = FirebaseAuthProvider(None, http=http)
    with pytest.raises(RuntimeError):
        provider.send_password_reset("owner@pawpal.app")
    http.post.assert_not_called()


def test_send_email_verification_exchanges_custom_token(provider, http, monkeypatch):
    monkeypatch.setattr(auth_provider_module.firebase_auth, "create_custom_token", lambda uid: b"custom-token")
    http.post.side_effect = [
        _response(200, {"idToken": "id-token"}),
        _response(200, {"email": "owner@pawpal.app"}),
    ]

    provider.send_email_verification("uid-1")

    first, second = http.post.call_args_list
    assert first.kwargs["json"]["token"] == "custom-token"
    assert second.args[0].endswith("accounts:sendOobCode")
    assert second.kwargs["json"] == {"requestType": "VERIFY_EMAIL", "idToken": "id-token"}


def test_update_email_resets_verification(provider, monkeypatch):
    captured = {}

    def fake_update_user(uid, **changes):
        captured.update(changes)
        return _user_record(uid, changes.get("email"), changes.get("email_verified"))

    monkeypatch.setattr(auth_provider_module.firebase_auth, "update_user", fake_update_user)

    session = provider.update_user("uid-1", email="new@pawpal.app")

    assert captured == {"email": "new@pawpal.app", "email_verified": False}
    assert session.email == "new@pawpal.app"
