"""Tests unitaires pour DailyCapValidator."""

from datetime import date
from decimal import Decimal

import pytest

from application.services.daily_cap_validator import DailyCapValidator
from domain.entities import TimeLog
from domain.exceptions import CapExceeded


def _log(store, log_id, hours, user_id="alice", log_date=date(2024, 3, 4), project_id="p1"):
    return store.insert_time_log(TimeLog(
        id=log_id, project_id=project_id, user_id=user_id, hours=hours, log_date=log_date
    ))


def test_exactly_twelve_hours_is_accepted(store):
    _log(store, "t1", "8")
    _log(store, "t2", "3.5")
    validator = DailyCapValidator(store)

    assert validator.validate("alice", date(2024, 3, 4), "0.5") == Decimal("12.0")


def test_above_twelve_hours_is_rejected(store):
    _log(store, "t1", "8")
    _log(store, "t2", "3.5")
    validator = DailyCapValidator(store)

    with pytest.raises(CapExceeded) as exc_info:
        validator.validate("alice", date(2024, 3, 4), "0.51")

    error = exc_info.value
    assert error.existing_hours == Decimal("11.5")
    assert error.proposed_hours == Decimal("0.51")
    assert error.code == "DAILY_CAP_EXCEEDED"


def test_other_days_and_users_are_ignored(store):
    _log(store, "t1", "12", log_date=date(2024, 3, 3))
    _log(store, "t2", "12", user_id="bob")
    validator = DailyCapValidator(store)

    assert validator.existing_hours("alice", date(2024, 3, 4)) == Decimal("0")
    assert validator.validate("alice", "2024-03-04", "12") == Decimal("12")


def test_cap_spans_all_projects(store):
    _log(store, "t1", "10", project_id="p1")
    _log(store, "t2", "2", project_id="p2")
    validator = DailyCapValidator(store)

    with pytest.raises(CapExceeded):
        validator.validate("alice", date(2024, 3, 4), "0.5")


def test_excluding_log_id_replaces_its_hours(store):
    _log(store, "t1", "8")
    _log(store, "t2", "4")
    validator = DailyCapValidator(store)

    # t2 passe de 4h à 4h: le total reste 12h
    assert validator.validate("alice", date(2024, 3, 4), "4", excluding_log_id="t2") == Decimal("12")
    with pytest.raises(CapExceeded):
        validator.validate("alice", date(2024, 3, 4), "4.5", excluding_log_id="t2")


def test_datetime_input_uses_utc_calendar_day(store):
    _log(store, "t1", "11")
    validator = DailyCapValidator(store)

    # 23:30 à UTC-2 = 01:30 UTC le lendemain
    assert validator.existing_hours("alice", "2024-03-03T23:30:00-02:00") == Decimal("11")
    assert validator.existing_hours("alice", "2024-03-04T08:00:00Z") == Decimal("11")
