# pawpal/core/session.py
from dataclasses import dataclass
from typing import Any, Dict, Optional

from flask_jwt_extended import get_jwt, get_jwt_identity

from pawpal.core.errors import AuthenticationRequiredError


@dataclass(frozen=True)
class Session:
    """
    로그인된 사용자의 세션 정보.
    전역 상태로 읽지 않고, 요청마다 만들어 서비스와 화면에 명시적으로 전달합니다.
    """
    user_id: str
    email: str
    email_verified: bool = False

    def to_claims(self) -> Dict[str, Any]:
        """JWT additional_claims로 넣을 딕셔너리를 반환합니다."""
        return {"email": self.email, "email_verified": self.email_verified}

    def to_dict(self) -> Dict[str, Any]:
        return {"user_id": self.user_id, "email": self.email, "email_verified": self.email_verified}


def session_from_jwt() -> Session:
    """@jwt_required()가 검증한 현재 토큰으로부터 Session을 복원합니다."""
    claims = get_jwt()
    return Session(
        user_id=get_jwt_identity(),
        email=claims.get("email", ""),
        email_verified=bool(claims.get("email_verified", False)),
    )


def require_session(session: Optional[Session]) -> Session:
    """세션이 없으면 AuthenticationRequiredError를 발생시킵니다."""
    if session is None or not session.user_id:
        raise AuthenticationRequiredError()
    return session
