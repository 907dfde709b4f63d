# pawpal/api/auth/services.py
import logging
from datetime import datetime, timezone
from typing import Optional

from pawpal.core.errors import AuthProviderError
from pawpal.core.session import Session, require_session
from pawpal.models.user import UserProfile
from pawpal.services.auth_provider import FirebaseAuthProvider
from pawpal.services.document_store import DocumentStore
from pawpal.utils.datetime_utils import DateTimeUtils

class AuthGateway:
    """
    인증 제공자(Firebase Auth) 호출을 감싸는 게이트웨이.
    세션이 필요한 작업은 Session 객체를 명시적으로 전달받으며,
    전달받은 Session은 절대 수정하지 않고 필요하면 새 Session을 반환합니다.
    """
    USERS = 'users'
    REVOKED_TOKENS = 'revoked_tokens'

    def __init__(self, provider: FirebaseAuthProvider, store: DocumentStore):
        self.provider = provider
        self.store = store

    # --- 가입 / 로그인 ---
    def register(self, email: str, password: str) -> Session:
        session = self.provider.create_user(email, password)
        self._ensure_profile(session)
        logging.info(f"신규 사용자 가입 완료 (user_id: {session.user_id})")
        return session

    def login(self, email: str, password: str) -> Session:
        session = self.provider.sign_in(email, password)
        self._ensure_profile(session)
        return session

    def _ensure_profile(self, session: Session):
        """users 컬렉션에 프로필 문서가 없으면 생성합니다."""
        if self.store.get_document(self.USERS, session.user_id) is None:
            profile = UserProfile(user_id=session.user_id, email=session.email)
            self.store.set_document(self.USERS, session.user_id, profile.to_document())

    # --- 로그아웃 (Blocklist) ---
    def add_token_to_blocklist(self, jti: str, expires: datetime):
        """토큰의 jti를 만료 시간과 함께 저장합니다."""
        self.store.set_document(self.REVOKED_TOKENS, jti, {
            'revoked_at': DateTimeUtils.now(),
            'expires_at': expires
        })

    def is_token_revoked(self, jwt_payload: dict) -> bool:
        """jti를 이용해 해당 토큰이 무효화 목록에 있는지 확인합니다."""
        return self.store.get_document(self.REVOKED_TOKENS, jwt_payload['jti']) is not None

    def logout(self, session: Optional[Session], access_jti: str, access_exp: int,
               refresh_jti: Optional[str] = None, refresh_exp: Optional[int] = None):
        """세션을 종료합니다. Access/Refresh 토큰을 무효화 목록에 추가합니다."""
        session = require_session(session)
        self.add_token_to_blocklist(access_jti, datetime.fromtimestamp(access_exp, tz=timezone.utc))
        if refresh_jti:
            self.add_token_to_blocklist(refresh_jti, datetime.fromtimestamp(refresh_exp, tz=timezone.utc))
        logging.info(f"사용자 로그아웃 처리 완료 (user_id: {session.user_id}, JTI: {access_jti[:8]}...)")

    # --- 비밀번호 재설정 / 이메일 인증 ---
    def send_password_reset(self, email: str):
        self.provider.send_password_reset(email)
        logging.info("Password reset email requested")

    def send_email_verification(self, session: Optional[Session]):
        session = require_session(session)
        self.provider.send_email_verification(session.user_id)

    def refresh_session(self, session: Optional[Session]) -> Session:
        """제공자에서 사용자 정보를 다시 읽어 최신 Session을 반환합니다."""
        session = require_session(session)
        return self.provider.get_user(session.user_id)

    def is_email_verified(self, session: Optional[Session]) -> bool:
        if session is None:
            return False
        return self.refresh_session(session).email_verified

    # --- 계정 정보 변경 ---
    def reauthenticate(self, session: Optional[Session], current_password: str):
        """민감한 작업 전에 현재 비밀번호로 다시 인증합니다."""
        session = require_session(session)
        verified = self.provider.sign_in(session.email, current_password)
        if verified.user_id != session.user_id:
            raise AuthProviderError("USER_MISMATCH", "재인증한 계정이 현재 세션과 다릅니다.")

    def update_email(self, session: Optional[Session], new_email: str,
                     current_password: Optional[str] = None) -> Session:
        """로그인한 사용자의 이메일을 변경하고, 변경된 정보가 담긴 새 Session을 반환합니다."""
        session = require_session(session)
        if current_password:
            self.reauthenticate(session, current_password)
        updated = self.provider.update_user(session.user_id, email=new_email)
        self.store.update_document(self.USERS, session.user_id, UserProfile.document_fields({'email': new_email}))
        logging.info(f"이메일 변경 완료 (user_id: {session.user_id})")
        return updated

    def update_password(self, session: Optional[Session], new_password: str,
                        current_password: Optional[str] = None):
        session = require_session(session)
        if current_password:
            self.reauthenticate(session, current_password)
        self.provider.update_user(session.user_id, password=new_password)
        logging.info(f"비밀번호 변경 완료 (user_id: {session.user_id})")

    def update_fcm_token(self, session: Optional[Session], fcm_token: str):
        """건강 알림 푸시 발송에 사용할 FCM 토큰을 저장합니다."""
        session = require_session(session)
        self._ensure_profile(session)
        self.store.update_document(self.USERS, session.user_id, UserProfile.document_fields({'fcm_token': fcm_token}))
