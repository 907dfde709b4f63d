# pawpal/screens/base.py
"""
화면(Screen) 공용 기반 클래스.

화면은 한 기능 영역의 목록 상태를 들고, 생성/삭제를 낙관적으로 적용한 뒤
백엔드 결과에 따라 확정하거나 되돌리고 사용자에게 보여줄 알림(Notice)을 만듭니다.
"""
import logging
from dataclasses import dataclass, asdict
from typing import Any, Dict, Generic, List, Optional, TypeVar

from pawpal.core.errors import ItemNotFoundError, MutationInProgressError
from pawpal.core.optimistic import OptimisticList
from pawpal.core.session import Session, require_session

T = TypeVar("T")

@dataclass(frozen=True)
class Notice:
    """사용자에게 표시할 알림 (level: success | error)"""
    level: str
    title: str
    message: str

    @classmethod
    def success(cls, message: str) -> "Notice":
        return cls("success", "Success", message)

    @classmethod
    def error(cls, message: str) -> "Notice":
        return cls("error", "Error", message)

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


@dataclass
class ScreenResult(Generic[T]):
    """화면 동작의 결과: 현재 목록, 알림, 그리고 생성/삭제된 항목"""
    items: List[T]
    notice: Optional[Notice] = None
    item: Optional[T] = None

    @property
    def failed(self) -> bool:
        return self.notice is not None and self.notice.level == "error"


class ListScreen(Generic[T]):
    """
    목록형 화면의 기반 클래스.
    하위 클래스는 fetch / remote_create / remote_delete / remote_update를 구현합니다.
    """
    label = "item"

    def __init__(self, session: Optional[Session]):
        self.session = require_session(session)
        self.state: OptimisticList[T] = OptimisticList()
        self.loaded = False

    # --- 하위 클래스 구현 ---
    def fetch(self) -> List[T]:
        raise NotImplementedError

    def remote_create(self, item: T) -> str:
        raise NotImplementedError

    def remote_delete(self, item_id: str):
        raise NotImplementedError

    def remote_update(self, item_id: str, changes: Dict[str, Any]):
        raise NotImplementedError

    def after_create(self, created: T):
        """생성이 확정된 뒤 호출되는 훅."""

    # --- 화면 동작 ---
    def load(self) -> ScreenResult[T]:
        """백엔드에서 목록을 다시 읽어 상태를 교체합니다. 실패하면 빈 목록과 오류 알림을 반환합니다."""
        try:
            self.state.reset(self.fetch())
            self.loaded = True
            return ScreenResult(self.state.items)
        except LookupError:
            raise
        except Exception as e:
            logging.error(f"Error fetching {self.label}s: {e}", exc_info=True)
            return ScreenResult(self.state.items, Notice.error(f"Failed to load {self.label}s"))

    def _ensure_loaded(self):
        if not self.loaded:
            self.state.reset(self.fetch())
            self.loaded = True

    def _load_before(self, action: str) -> Optional[ScreenResult[T]]:
        """
        변경 전에 현재 목록을 읽습니다.
        백엔드 읽기가 실패하면 오류 알림이 담긴 결과를, 성공하면 None을 반환합니다.
        상위 엔티티 오류(LookupError)는 그대로 전파됩니다.
        """
        try:
            self._ensure_loaded()
        except LookupError:
            raise
        except Exception as e:
            logging.error(f"Error fetching {self.label}s before {action}: {e}", exc_info=True)
            return ScreenResult(self.state.items, Notice.error(f"Failed to {action} {self.label}"))
        return None

    def add(self, item: T) -> ScreenResult[T]:
        """항목을 임시 ID로 먼저 추가하고, 백엔드 결과에 따라 확정하거나 되돌립니다."""
        failure = self._load_before("add")
        if failure is not None:
            return failure
        try:
            created = self.state.create(item, self.remote_create)
        except MutationInProgressError:
            raise
        except Exception as e:
            logging.error(f"Error adding {self.label}: {e}", exc_info=True)
            return ScreenResult(self.state.items, Notice.error(f"Failed to add {self.label}"))

        self.after_create(created)
        return ScreenResult(self.state.items, Notice.success(f"{self.label.capitalize()} added successfully"), created)

    def remove(self, item_id: str) -> ScreenResult[T]:
        """
        항목을 먼저 제거하고, 백엔드 삭제가 실패하면 원래 위치에 되돌립니다.

        :raises ItemNotFoundError: 목록에 없는 항목인 경우
        """
        failure = self._load_before("delete")
        if failure is not None:
            return failure
        if self.state.index_of(item_id) is None:
            raise ItemNotFoundError(self.label, item_id)
        try:
            removed = self.state.delete(item_id, self.remote_delete)
        except MutationInProgressError:
            raise
        except Exception as e:
            logging.error(f"Error deleting {self.label} {item_id}: {e}", exc_info=True)
            return ScreenResult(self.state.items, Notice.error(f"Failed to delete {self.label}"))

        return ScreenResult(self.state.items, Notice.success(f"{self.label.capitalize()} deleted successfully"), removed)

    def edit(self, item_id: str, changes: Dict[str, Any]) -> ScreenResult[T]:
        """수정은 낙관적으로 적용하지 않고, 백엔드 수정이 끝난 뒤 목록을 다시 읽습니다."""
        failure = self._load_before("update")
        if failure is not None:
            return failure
        if self.state.index_of(item_id) is None:
            raise ItemNotFoundError(self.label, item_id)
        try:
            self.remote_update(item_id, changes)
        except ValueError:
            raise
        except Exception as e:
            logging.error(f"Error updating {self.label} {item_id}: {e}", exc_info=True)
            return ScreenResult(self.state.items, Notice.error(f"Failed to update {self.label}"))

        result = self.load()
        if result.failed:
            return result
        position = self.state.index_of(item_id)
        updated = self.state.items[position] if position is not None else None
        return ScreenResult(self.state.items, Notice.success(f"{self.label.capitalize()} updated successfully"), updated)
