# pawpal/services/auth_provider.py

import logging
from typing import Any, Dict, Optional
import requests
from firebase_admin import auth as firebase_auth

from pawpal.core.errors import AuthProviderError
from pawpal.core.session import Session

class FirebaseAuthProvider:
    """
    Firebase Authentication과의 실제 통신을 담당하는 클래스입니다.
    - 계정 생성/수정/조회는 firebase_admin.auth (Admin SDK)를 사용합니다.
    - 이메일/비밀번호 로그인과 메일 발송은 Admin SDK에 없으므로 Identity Toolkit REST API를 호출합니다.
    """
    _identity_toolkit_url = "https://identitytoolkit.googleapis.com/v1/accounts:{method}"

    def __init__(self, api_key: Optional[str], timeout: float = 10, http: Optional[requests.Session] = None):
        self.api_key = api_key
        self.timeout = timeout
        self.http = http or requests.Session()

    def _call(self, method: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Identity Toolkit REST 메서드를 호출하고 JSON 응답을 반환합니다."""
        if not self.api_key:
            raise RuntimeError("FIREBASE_WEB_API_KEY가 설정되지 않았습니다.")

        response = self.http.post(
            self._identity_toolkit_url.format(method=method),
            params={"key": self.api_key},
            json=payload,
            timeout=self.timeout
        )
        if response.status_code != 200:
            try:
                message = response.json()["error"]["message"]
            except (ValueError, KeyError, TypeError):
                message = f"HTTP_{response.status_code}"
            # 예: "TOO_MANY_ATTEMPTS_TRY_LATER : Access to this account has been temporarily disabled..."
            code = message.split(" : ")[0].strip()
            logging.warning(f"Identity Toolkit '{method}' 호출 실패: {code}")
            raise AuthProviderError(code, message)
        return response.json()

    @staticmethod
    def _to_session(record) -> Session:
        return Session(user_id=record.uid, email=record.email, email_verified=bool(record.email_verified))

    def create_user(self, email: str, password: str) -> Session:
        record = firebase_auth.create_user(email=email, password=password)
        logging.info(f"Firebase Auth 사용자 생성 (uid: {record.uid})")
        return self._to_session(record)

    def sign_in(self, email: str, password: str) -> Session:
        data = self._call("signInWithPassword", {
            "email": email, "password": password, "returnSecureToken": True
        })
        # 인증 여부(emailVerified)는 Admin SDK로 최신 값을 다시 읽습니다.
        return self.get_user(data["localId"])

    def get_user(self, uid: str) -> Session:
        return self._to_session(firebase_auth.get_user(uid))

    def update_user(self, uid: str, email: Optional[str] = None, password: Optional[str] = None) -> Session:
        changes = {}
        if email is not None:
            # 이메일이 바뀌면 인증 상태를 초기화합니다.
            changes.update(email=email, email_verified=False)
        if password is not None:
            changes["password"] = password
        return self._to_session(firebase_auth.update_user(uid, **changes))

    def send_password_reset(self, email: str):
        self._call("sendOobCode", {"requestType": "PASSWORD_RESET", "email": email})

    def send_email_verification(self, uid: str):
        """
        인증 메일 발송에는 사용자 ID 토큰이 필요하므로,
        커스텀 토큰으로 로그인해 ID 토큰을 얻은 뒤 메일 발송을 요청합니다.
        """
        custom_token = firebase_auth.create_custom_token(uid)
        if isinstance(custom_token, bytes):
            custom_token = custom_token.decode("utf-8")
        id_token = self._call("signInWithCustomToken", {
            "token": custom_token, "returnSecureToken": True
        })["idToken"]
        self._call("sendOobCode", {"requestType": "VERIFY_EMAIL", "idToken": id_token})
