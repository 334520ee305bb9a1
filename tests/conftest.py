"""Fixtures partagées: stockage en mémoire peuplé d'un admin, d'un employé et d'un projet."""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from application.services import BillingAggregator, DailyCapValidator, SummaryCache, TimeLogService
from domain.entities import Project, User
from infrastructure.memory import create_memory_store


@pytest.fixture
def store():
    store = create_memory_store()
    store.users.save(User(id="admin", name="Admin", email="admin@example.com", role="admin"))
    store.users.save(User(id="alice", name="Alice", email="alice@example.com"))
    store.users.save(User(id="bob", name="Bob", email="bob@example.com"))
    store.projects.save(Project(
        id="p1",
        name="Website",
        billing_rate=Decimal("50"),
        created_by="admin",
        created_at=datetime(2024, 1, 1, tzinfo=timezone.utc)
    ))
    return store


@pytest.fixture
def admin(store):
    return store.find_user_by_id("admin")


@pytest.fixture
def alice(store):
    return store.find_user_by_id("alice")


@pytest.fixture
def bob(store):
    return store.find_user_by_id("bob")


@pytest.fixture
def summary_cache(store):
    return SummaryCache(BillingAggregator(store))


@pytest.fixture
def time_log_service(store, summary_cache):
    return TimeLogService(store, DailyCapValidator(store), summary_cache)
