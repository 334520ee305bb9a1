"""Tests unitaires pour TimeLogService."""

import threading
from datetime import date
from decimal import Decimal

import pytest

from application.services import DailyCapValidator, TimeLogService
from domain.entities import TimeLogStatus, TimeLogUpdate
from domain.exceptions import (
    CapExceeded, Forbidden, ProjectArchived, ProjectNotFound, TimeLogNotFound, ValidationError
)


def _archive(store, project_id="p1"):
    project = store.find_project_by_id(project_id)
    project.change_status("archived")
    store.projects.save(project)


def test_create_time_log_success(time_log_service, store):
    time_log = time_log_service.create_time_log(
        user_id="alice", project_id="p1", hours="7.5", log_date="2024-01-15T17:45:00Z", notes="API"
    )

    assert time_log.hours == Decimal("7.5")
    assert time_log.log_date == date(2024, 1, 15)
    assert time_log.status == TimeLogStatus.TODO
    assert time_log.created_at is not None
    assert store.find_time_log_by_id(time_log.id) is not None


def test_create_requires_project_hours_and_date(time_log_service):
    with pytest.raises(ValidationError) as exc_info:
        time_log_service.create_time_log(user_id="alice", project_id="p1", hours=None, log_date="2024-01-15")
    assert "project_id, hours, and log_date" in exc_info.value.message


@pytest.mark.parametrize("hours", ["0.49", "12.01", "abc", "-1"])
def test_create_rejects_hours_out_of_range(time_log_service, hours):
    with pytest.raises(ValidationError):
        time_log_service.create_time_log(user_id="alice", project_id="p1", hours=hours, log_date="2024-01-15")


def test_create_rejects_unknown_project(time_log_service):
    with pytest.raises(ProjectNotFound):
        time_log_service.create_time_log(user_id="alice", project_id="nope", hours="1", log_date="2024-01-15")


def test_archived_project_is_rejected_before_cap_check(time_log_service, store):
    time_log_service.create_time_log(user_id="alice", project_id="p1", hours="12", log_date="2024-01-15")
    _archive(store)

    # Le plafond serait aussi dépassé: c'est l'archivage qui est signalé
    with pytest.raises(ProjectArchived):
        time_log_service.create_time_log(user_id="alice", project_id="p1", hours="1", log_date="2024-01-15")


def test_create_enforces_daily_cap(time_log_service):
    time_log_service.create_time_log(user_id="alice", project_id="p1", hours="8", log_date="2024-01-15")
    time_log_service.create_time_log(user_id="alice", project_id="p1", hours="4", log_date="2024-01-15")

    with pytest.raises(CapExceeded):
        time_log_service.create_time_log(user_id="alice", project_id="p1", hours="0.5", log_date="2024-01-15")


def test_create_invalidates_project_summary(time_log_service, summary_cache):
    summary_cache.get_or_compute("p1")
    assert "p1" in summary_cache

    time_log_service.create_time_log(user_id="alice", project_id="p1", hours="2", log_date="2024-01-15")

    summary, cached = summary_cache.get_or_compute("p1")
    assert cached is False
    assert summary.total_hours == Decimal("2")


def test_update_hours_checks_cap_excluding_current_log(time_log_service, alice):
    first = time_log_service.create_time_log(user_id="alice", project_id="p1", hours="8", log_date="2024-01-15")
    time_log_service.create_time_log(user_id="alice", project_id="p1", hours="4", log_date="2024-01-15")

    updated = time_log_service.update_time_log_fields(first.id, alice, TimeLogUpdate(hours="8"))
    assert updated.hours == Decimal("8")

    with pytest.raises(CapExceeded):
        time_log_service.update_time_log_fields(first.id, alice, TimeLogUpdate(hours="8.5"))


def test_update_by_other_employee_is_forbidden(time_log_service, bob):
    time_log = time_log_service.create_time_log(user_id="alice", project_id="p1", hours="2", log_date="2024-01-15")

    with pytest.raises(Forbidden):
        time_log_service.update_time_log_fields(time_log.id, bob, TimeLogUpdate(notes="hijack"))
    with pytest.raises(Forbidden):
        time_log_service.update_status(time_log.id, bob, "done")
    with pytest.raises(Forbidden):
        time_log_service.delete_time_log(time_log.id, bob)


def test_admin_can_update_any_log(time_log_service, admin):
    time_log = time_log_service.create_time_log(user_id="alice", project_id="p1", hours="2", log_date="2024-01-15")

    updated = time_log_service.update_time_log_fields(
        time_log.id, admin, TimeLogUpdate(notes="reviewed", status="done")
    )

    assert updated.notes == "reviewed"
    assert updated.status == TimeLogStatus.DONE
    assert updated.user_id == "alice"


def test_update_unknown_log_raises(time_log_service, admin):
    with pytest.raises(TimeLogNotFound):
        time_log_service.update_time_log_fields("nope", admin, TimeLogUpdate(notes="x"))


def test_status_update_moves_freely_and_keeps_cache(time_log_service, summary_cache, alice):
    time_log = time_log_service.create_time_log(user_id="alice", project_id="p1", hours="2", log_date="2024-01-15")
    summary_cache.get_or_compute("p1")

    for status in ("done", "todo", "in-progress"):
        time_log = time_log_service.update_status(time_log.id, alice, status)
        assert time_log.status.value == status

    # Un changement de statut n'affecte pas la facturation
    assert summary_cache.get_or_compute("p1")[1] is True


def test_status_update_validates_value_first(time_log_service, alice):
    with pytest.raises(ValidationError):
        time_log_service.update_status("nope", alice, "blocked")


def test_notes_update_invalidates_cache(time_log_service, summary_cache, alice):
    time_log = time_log_service.create_time_log(user_id="alice", project_id="p1", hours="2", log_date="2024-01-15")
    summary_cache.get_or_compute("p1")

    time_log_service.update_time_log_fields(time_log.id, alice, TimeLogUpdate(notes="more detail"))

    assert summary_cache.get_or_compute("p1")[1] is False


def test_delete_removes_log_and_invalidates_cache(time_log_service, summary_cache, store, alice):
    time_log = time_log_service.create_time_log(user_id="alice", project_id="p1", hours="2", log_date="2024-01-15")
    summary_cache.get_or_compute("p1")

    deleted = time_log_service.delete_time_log(time_log.id, alice)

    assert deleted.id == time_log.id
    assert store.find_time_log_by_id(time_log.id) is None
    summary, cached = summary_cache.get_or_compute("p1")
    assert cached is False
    assert summary.total_hours == Decimal("0")

    with pytest.raises(TimeLogNotFound):
        time_log_service.delete_time_log(time_log.id, alice)


def test_employee_only_lists_own_logs(time_log_service, admin, alice):
    time_log_service.create_time_log(user_id="alice", project_id="p1", hours="2", log_date="2024-01-15")
    time_log_service.create_time_log(user_id="bob", project_id="p1", hours="3", log_date="2024-01-15")

    items, total = time_log_service.list_time_logs(alice)
    assert total == 1
    assert items[0].user_id == "alice"

    assert time_log_service.list_time_logs(alice, user_id="bob") == ([], 0)
    assert time_log_service.list_time_logs(admin)[1] == 2
    assert time_log_service.list_time_logs(admin, user_id="bob")[1] == 1


def test_list_filters_and_paginates(time_log_service, admin):
    for day in range(1, 6):
        time_log_service.create_time_log(
            user_id="alice", project_id="p1", hours="1", log_date=f"2024-01-0{day}", status="done" if day % 2 else "todo"
        )

    items, total = time_log_service.list_time_logs(admin, page=2, limit=2)
    assert total == 5
    assert [t.log_date.day for t in items] == [3, 4]

    done, done_total = time_log_service.list_time_logs(admin, status="done")
    assert done_total == 3

    by_day, _ = time_log_service.list_time_logs(admin, log_date="2024-01-02")
    assert [t.log_date for t in by_day] == [date(2024, 1, 2)]

    with pytest.raises(ValidationError):
        time_log_service.list_time_logs(admin, limit=101)


def test_concurrent_creates_cannot_exceed_cap(store, summary_cache):
    service = TimeLogService(store, DailyCapValidator(store), summary_cache)
    errors = []
    errors_lock = threading.Lock()

    def worker():
        try:
            service.create_time_log(user_id="alice", project_id="p1", hours="5", log_date="2024-01-15")
        except CapExceeded as exc:
            with errors_lock:
                errors.append(exc)

    threads = [threading.Thread(target=worker) for _ in range(6)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    # 5 + 5 = 10 <= 12; une troisième saisie dépasserait
    assert DailyCapValidator(store).existing_hours("alice", "2024-01-15") == Decimal("10")
    assert len(errors) == 4


def test_hours_update_invalidates_cache(time_log_service, summary_cache, alice):
    time_log = time_log_service.create_time_log(user_id="alice", project_id="p1", hours="2", log_date="2024-01-15")
    assert summary_cache.get_or_compute("p1")[0].total_hours == Decimal("2")

    time_log_service.update_time_log_fields(time_log.id, alice, TimeLogUpdate(hours="3.5"))

    summary, cached = summary_cache.get_or_compute("p1")
    assert cached is False
    assert summary.total_hours == Decimal("3.5")
    assert summary.total_amount == Decimal("175.00")


@pytest.mark.parametrize("hours", ["1.005", "0.999", "2.125"])
def test_hours_with_more_than_two_decimals_are_rejected(time_log_service, hours):
    with pytest.raises(ValidationError) as exc_info:
        time_log_service.create_time_log(user_id="alice", project_id="p1", hours=hours, log_date="2024-01-15")

    assert exc_info.value.field == "hours"
    assert exc_info.value.constraint == "scale <= 2"


def test_trailing_zeros_do_not_count_as_decimals(time_log_service):
    time_log = time_log_service.create_time_log(
        user_id="alice", project_id="p1", hours="1.500", log_date="2024-01-15"
    )
    assert time_log.hours == Decimal("1.5")
