# pawpal/core/test_optimistic.py
"""
낙관적 목록(OptimisticList) 테스트

사용법: python -m pytest pawpal/core/test_optimistic.py -v
"""
from dataclasses import dataclass
from typing import Optional

import pytest

from pawpal.core.errors import MutationInProgressError
from pawpal.core.optimistic import OptimisticList, is_temporary_id, temporary_id


@dataclass
class Item:
    name: str
    id: Optional[str] = None


def _initial():
    return [Item("Rex", "a"), Item("Milo", "b"), Item("Luna", "c")]


class BackendDown(Exception):
    pass


def test_temporary_id_format():
    assert temporary_id().startswith("temp-")
    assert is_temporary_id(temporary_id())
    assert not is_temporary_id("abc123")
    assert not is_temporary_id(None)


def test_create_shows_temporary_item_while_backend_call_runs():
    state = OptimisticList(_initial())
    seen = []

    def remote_create(item):
        seen.extend(state.items)
        assert item.id is None
        return "server-1"

    state.create(Item("Bella"), remote_create)
    assert len(seen) == 4
    assert is_temporary_id(seen[-1].id)


def test_successful_create_replaces_temporary_id():
    state = OptimisticList(_initial())

    created = state.create(Item("Bella"), lambda item: "server-1")

    assert created == Item("Bella", "server-1")
    ids = [item.id for item in state.items]
    assert ids.count("server-1") == 1
    assert not any(is_temporary_id(item_id) for item_id in ids)


def test_failed_create_restores_previous_list():
    state = OptimisticList(_initial())
    before = state.items

    def remote_create(item):
        raise BackendDown("offline")

    with pytest.raises(BackendDown):
        state.create(Item("Bella"), remote_create)
    assert state.items == before


def test_successful_delete_keeps_removal():
    state = OptimisticList(_initial())
    removed = state.delete("b", lambda item_id: None)
    assert removed == Item("Milo", "b")
    assert [item.id for item in state.items] == ["a", "c"]


def test_failed_delete_restores_item_at_prior_position():
    state = OptimisticList(_initial())
    before = state.items

    def remote_delete(item_id):
        assert state.index_of(item_id) is None
        raise BackendDown("offline")

    with pytest.raises(BackendDown):
        state.delete("b", remote_delete)
    assert state.items == before


def test_delete_unknown_item_does_not_call_backend():
    state = OptimisticList(_initial())
    calls = []
    with pytest.raises(LookupError):
        state.delete("zzz", calls.append)
    assert calls == []


def test_second_mutation_while_in_flight_is_rejected():
    state = OptimisticList(_initial())
    rejected = []

    def remote_create(item):
        assert state.in_progress
        with pytest.raises(MutationInProgressError):
            state.delete("a", lambda item_id: None)
        rejected.append(True)
        return "server-1"

    state.create(Item("Bella"), remote_create)
    assert rejected == [True]
    assert not state.in_progress
    assert [item.id for item in state.items] == ["a", "b", "c", "server-1"]


def test_custom_id_accessors():
    state = OptimisticList(
        [{"key": "a"}],
        id_of=lambda item: item.get("key"),
        with_id=lambda item, new_id: dict(item, key=new_id),
    )
    created = state.create({"label": "new"}, lambda item: "k-2")
    assert created == {"label": "new", "key": "k-2"}
    assert len(state) == 2
