# pawpal/core/errors.py
"""
도메인 전반에서 사용하는 예외 클래스 모음.

- 입력값 검증 오류는 marshmallow의 ValidationError를 그대로 사용합니다.
- 백엔드(Firestore, Firebase Auth) 호출 실패는 감싸지 않고 그대로 전파합니다.
"""
from typing import Optional


class AuthenticationRequiredError(PermissionError):
    """로그인 세션이 필요한 작업을 세션 없이 호출한 경우."""

    def __init__(self, message: str = "로그인이 필요한 작업입니다."):
        super().__init__(message)


class AuthProviderError(Exception):
    """
    인증 제공자(Firebase Auth)가 돌려준 오류.
    제공자의 오류 코드(예: 'EMAIL_NOT_FOUND')를 가공하지 않고 code에 보관합니다.
    """

    def __init__(self, code: str, message: Optional[str] = None):
        self.code = code
        super().__init__(message or code)


class MissingParentError(LookupError):
    """필수 상위 엔티티(반려동물 등)가 없거나 식별자가 비어 있는 경우."""

    def __init__(self, entity: str, entity_id: Optional[str]):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity}을(를) 찾을 수 없습니다 (ID: {entity_id}).")


class MutationInProgressError(RuntimeError):
    """이전 변경 요청이 아직 끝나지 않았는데 새 변경 요청이 들어온 경우."""

    def __init__(self):
        super().__init__("이전 요청을 처리하는 중입니다. 잠시 후 다시 시도해주세요.")


class ItemNotFoundError(LookupError):
    """화면 목록에 없는 항목을 수정/삭제하려는 경우."""

    def __init__(self, label: str, item_id: Optional[str]):
        self.label = label
        self.item_id = item_id
        super().__init__(f"{label} not found: {item_id}")
