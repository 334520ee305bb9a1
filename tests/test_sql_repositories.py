"""Tests d'intégration des repositories SQLAlchemy (SQLite en mémoire)."""

from datetime import date, timezone
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import text

from app import app
from application.services import BillingAggregator, DailyCapValidator, SummaryCache, TimeLogService
from domain.entities import Project, ProjectStatus, TimeLog, TimeLogStatus
from domain.exceptions import CapExceeded
from domain.repositories import TimeLogFilter
from infrastructure.database import (
    CorruptedRecordError, create_db_engine, create_session_factory, create_sql_store, init_db
)
from infrastructure.dependencies import build_services
from infrastructure.seed import SAMPLE_PROJECTS, SAMPLE_TIME_LOGS, SAMPLE_USERS, seed_sample_data


@pytest.fixture
def engine():
    engine = create_db_engine("sqlite://")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def sql_store(engine):
    return create_sql_store(create_session_factory(engine))


def test_seed_loads_sample_data_once(sql_store):
    assert seed_sample_data(sql_store) is True
    assert seed_sample_data(sql_store) is False

    assert sql_store.users.count() == len(SAMPLE_USERS)
    assert sql_store.projects.count() == len(SAMPLE_PROJECTS)
    assert sql_store.time_logs.count() == len(SAMPLE_TIME_LOGS)


def test_entities_round_trip_through_database(sql_store):
    seed_sample_data(sql_store)

    project = sql_store.find_project_by_id("3")
    assert project.status == ProjectStatus.COMPLETED
    assert project.billing_rate == Decimal("45")

    time_log = sql_store.find_time_log_by_id("3")
    assert time_log.hours == Decimal("7.5")
    assert time_log.log_date == date(2024, 1, 15)
    assert time_log.status == TimeLogStatus.DONE

    assert sql_store.users.find_by_email("ADMIN@example.com").id == "1"


def test_time_log_filters(sql_store):
    seed_sample_data(sql_store)

    by_project = sql_store.list_time_logs(TimeLogFilter(project_id="1"))
    assert [t.id for t in by_project] == ["1", "3", "2", "4"]

    by_user_day = sql_store.list_time_logs(TimeLogFilter(user_id="2", log_date=date(2024, 1, 15)))
    assert [t.id for t in by_user_day] == ["1"]

    todo = sql_store.list_time_logs(TimeLogFilter(status=TimeLogStatus.TODO))
    assert {t.id for t in todo} == {"4", "6"}


def test_update_and_delete_time_log(sql_store):
    seed_sample_data(sql_store)
    time_log = sql_store.find_time_log_by_id("4")
    time_log.status = TimeLogStatus.DONE
    time_log.notes = "Schema reviewed"

    updated = sql_store.update_time_log(time_log)
    assert updated.status == TimeLogStatus.DONE
    assert sql_store.find_time_log_by_id("4").notes == "Schema reviewed"

    assert sql_store.delete_time_log("4").id == "4"
    assert sql_store.find_time_log_by_id("4") is None
    assert sql_store.delete_time_log("4") is None

    missing = TimeLog(id="missing", project_id="1", user_id="2", hours="1", log_date=date(2024, 1, 1))
    assert sql_store.update_time_log(missing) is None


def test_services_run_on_sql_store(sql_store):
    seed_sample_data(sql_store)
    cache = SummaryCache(BillingAggregator(sql_store))
    service = TimeLogService(sql_store, DailyCapValidator(sql_store), cache)

    summary, _ = cache.get_or_compute("1")
    # 8 + 6 + 7.5 + 4 heures à 50
    assert summary.total_hours == Decimal("25.5")
    assert summary.total_amount == Decimal("1275.00")

    # L'utilisateur 2 a déjà 8h le 2024-01-15
    service.create_time_log(user_id="2", project_id="1", hours="4", log_date="2024-01-15")
    with pytest.raises(CapExceeded):
        service.create_time_log(user_id="2", project_id="2", hours="0.5", log_date="2024-01-15")

    summary, cached = cache.get_or_compute("1")
    assert cached is False
    assert summary.total_hours == Decimal("29.5")


def _corrupt(engine, statement):
    with engine.begin() as connection:
        connection.execute(text(statement))


def test_corrupted_row_is_not_a_validation_error(engine, sql_store):
    seed_sample_data(sql_store)
    _corrupt(engine, "UPDATE time_logs SET hours = 20 WHERE id = '1'")

    with pytest.raises(CorruptedRecordError) as exc_info:
        sql_store.find_time_log_by_id("1")
    assert "time_logs row '1'" in str(exc_info.value)

    with pytest.raises(CorruptedRecordError):
        BillingAggregator(sql_store).summarize("1")


def test_corrupted_project_row_is_not_a_validation_error(engine, sql_store):
    seed_sample_data(sql_store)
    _corrupt(engine, "UPDATE projects SET billing_rate = -5 WHERE id = '2'")

    with pytest.raises(CorruptedRecordError):
        sql_store.find_project_by_id("2")


def test_corrupted_row_gives_internal_error_response(engine, sql_store):
    seed_sample_data(sql_store)
    _corrupt(engine, "UPDATE time_logs SET hours = 20 WHERE id = '1'")

    with TestClient(app, raise_server_exceptions=False) as client:
        app.state.services = build_services(app.state.config, store=sql_store)
        token = app.state.services.jwt_service.create_access_token("1")
        response = client.get(
            "/api/projects/1/billing-summary", headers={"Authorization": f"Bearer {token}"}
        )

    assert response.status_code == 500
    assert response.json() == {
        "success": False, "code": "INTERNAL_ERROR", "message": "Internal server error"
    }


def test_decimal_values_are_stored_exactly(sql_store):
    seed_sample_data(sql_store)
    sql_store.projects.save(Project(id="p9", name="Odd rate", billing_rate="33.33", created_by="1"))
    cache = SummaryCache(BillingAggregator(sql_store))
    service = TimeLogService(sql_store, DailyCapValidator(sql_store), cache)

    time_log = service.create_time_log(user_id="2", project_id="p9", hours="1.25", log_date="2024-03-01")

    assert sql_store.find_time_log_by_id(time_log.id).hours == Decimal("1.25")
    assert sql_store.find_project_by_id("p9").billing_rate == Decimal("33.33")
    # 1.25 * 33.33 = 41.6625
    assert cache.get_or_compute("p9")[0].total_amount == Decimal("41.66")


def test_timestamps_come_back_in_utc(sql_store):
    seed_sample_data(sql_store)

    time_log = sql_store.find_time_log_by_id("1")
    project = sql_store.find_project_by_id("1")

    assert time_log.created_at.tzinfo == timezone.utc
    assert time_log.created_at.isoformat() == "2024-01-15T09:00:00+00:00"
    assert project.created_at.tzinfo == timezone.utc
    assert sql_store.find_user_by_id("1").created_at.tzinfo == timezone.utc


def test_sample_users_use_example_addresses():
    assert all(user.email.endswith("@example.com") for user in SAMPLE_USERS)
