# pawpal/core/optimistic.py
"""
낙관적 업데이트(Optimistic update) 공용 엔진.

화면의 목록 상태를 백엔드 응답 전에 먼저 바꾸고,
- 성공하면 임시 ID를 백엔드가 발급한 ID로 교체하고
- 실패하면 변경 전 상태로 되돌린 뒤 예외를 그대로 다시 발생시킵니다.
알림(Notice) 표시는 이 예외를 받은 화면(Screen)이 담당합니다.
"""
import threading
import time
from dataclasses import replace
from typing import Callable, Generic, Iterable, List, Optional, TypeVar

from pawpal.core.errors import MutationInProgressError

T = TypeVar("T")

TEMP_ID_PREFIX = "temp-"


def temporary_id() -> str:
    """현재 시각(ms) 기반의 임시 로컬 ID를 생성합니다."""
    return f"{TEMP_ID_PREFIX}{time.time_ns() // 1_000_000}"


def is_temporary_id(item_id: Optional[str]) -> bool:
    return bool(item_id) and item_id.startswith(TEMP_ID_PREFIX)


def _default_id_of(item) -> Optional[str]:
    return item.id


def _default_with_id(item, new_id: str):
    return replace(item, id=new_id)


class OptimisticList(Generic[T]):
    """
    낙관적 생성/삭제를 지원하는 목록 상태.

    :param items: 초기 목록
    :param id_of: 항목에서 ID를 꺼내는 함수 (기본값: item.id)
    :param with_id: ID만 바꾼 새 항목을 만드는 함수 (기본값: dataclasses.replace)
    """

    def __init__(self,
                 items: Iterable[T] = (),
                 id_of: Callable[[T], Optional[str]] = _default_id_of,
                 with_id: Callable[[T, str], T] = _default_with_id):
        self._items: List[T] = list(items)
        self._id_of = id_of
        self._with_id = with_id
        # 한 번에 하나의 변경만 진행 (연속 탭 방지용 "처리 중" 플래그)
        self._busy = threading.Lock()

    @property
    def items(self) -> List[T]:
        return list(self._items)

    @property
    def in_progress(self) -> bool:
        return self._busy.locked()

    def __len__(self) -> int:
        return len(self._items)

    def reset(self, items: Iterable[T]):
        """백엔드에서 다시 읽어온 목록으로 상태를 교체합니다."""
        self._items = list(items)

    def index_of(self, item_id: str) -> Optional[int]:
        for index, item in enumerate(self._items):
            if self._id_of(item) == item_id:
                return index
        return None

    def create(self, item: T, remote_create: Callable[[T], str]) -> T:
        """
        항목을 임시 ID로 즉시 추가한 뒤 remote_create(item)을 호출합니다.

        :return: 백엔드 ID가 부여된 항목
        :raises MutationInProgressError: 다른 변경이 진행 중인 경우 (상태 변경 없음)
        """
        if not self._busy.acquire(blocking=False):
            raise MutationInProgressError()
        try:
            temp_id = self._unused_temporary_id()
            self._items.append(self._with_id(item, temp_id))

            try:
                new_id = remote_create(item)
            except Exception:
                # 실패: 임시 항목 제거
                self._items.pop(self.index_of(temp_id))
                raise

            created = self._with_id(item, new_id)
            self._items[self.index_of(temp_id)] = created
            return created
        finally:
            self._busy.release()

    def delete(self, item_id: str, remote_delete: Callable[[str], None]) -> T:
        """
        항목을 즉시 제거한 뒤 remote_delete(item_id)를 호출합니다.
        실패하면 원래 위치에 다시 넣습니다.

        :return: 제거된 항목
        :raises LookupError: 목록에 해당 ID가 없는 경우 (백엔드 호출 없음)
        """
        if not self._busy.acquire(blocking=False):
            raise MutationInProgressError()
        try:
            position = self.index_of(item_id)
            if position is None:
                raise LookupError(f"목록에 없는 항목입니다: {item_id}")
            removed = self._items.pop(position)

            try:
                remote_delete(item_id)
            except Exception:
                self._items.insert(position, removed)
                raise

            return removed
        finally:
            self._busy.release()

    def _unused_temporary_id(self) -> str:
        candidate = temporary_id()
        suffix = 0
        while self.index_of(candidate) is not None:
            suffix += 1
            candidate = f"{temporary_id()}-{suffix}"
        return candidate
