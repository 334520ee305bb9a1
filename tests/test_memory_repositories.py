"""Tests unitaires du stockage en mémoire."""

from datetime import date

import pytest

from domain.entities import TimeLog


def _time_log(log_id="t1"):
    return TimeLog(id=log_id, project_id="p1", user_id="alice", hours="2", log_date=date(2024, 1, 15))


def test_reads_return_copies(store):
    store.insert_time_log(_time_log())

    first = store.find_time_log_by_id("t1")
    first.notes = "changed locally"

    assert store.find_time_log_by_id("t1").notes == ""


def test_delete_returns_a_copy(store):
    store.insert_time_log(_time_log())
    stored = store.time_logs._time_logs["t1"]

    deleted = store.delete_time_log("t1")

    assert deleted == stored
    assert deleted is not stored
    assert store.find_time_log_by_id("t1") is None
    assert store.delete_time_log("t1") is None


def test_duplicate_insert_is_rejected(store):
    store.insert_time_log(_time_log())
    with pytest.raises(ValueError):
        store.insert_time_log(_time_log())


def test_insertion_order_is_kept(store):
    for log_id in ("t3", "t1", "t2"):
        store.insert_time_log(_time_log(log_id))

    assert [t.id for t in store.list_time_logs()] == ["t3", "t1", "t2"]
