"""
Données d'exemple chargées au démarrage (stockage vide uniquement)
"""

import logging
from datetime import date, datetime, timezone
from decimal import Decimal

from domain.entities import Project, TimeLog, User
from domain.repositories import EntityStore

logger = logging.getLogger(__name__)


def _ts(value: str) -> datetime:
    return datetime.fromisoformat(value).replace(tzinfo=timezone.utc)


SAMPLE_USERS = [
    User(id="1", name="Admin User", email="admin@example.com", role="admin", created_at=_ts("2024-01-01T00:00:00")),
    User(id="2", name="Employee User", email="employee@example.com", role="employee", created_at=_ts("2024-01-01T00:00:00")),
    User(id="3", name="Second Employee", email="employee2@example.com", role="employee", created_at=_ts("2024-01-01T00:00:00")),
]

SAMPLE_PROJECTS = [
    Project(
        id="1", name="E-commerce Website",
        description="Build a full-featured e-commerce platform with payment integration",
        billing_rate=Decimal("50"), status="active", created_by="1", created_at=_ts("2024-01-15T10:30:00")
    ),
    Project(
        id="2", name="Mobile App Development",
        description="Cross-platform mobile application for iOS and Android",
        billing_rate=Decimal("65"), status="active", created_by="1", created_at=_ts("2024-01-10T14:20:00")
    ),
    Project(
        id="3", name="API Integration",
        description="Third-party API integration project",
        billing_rate=Decimal("45"), status="completed", created_by="1", created_at=_ts("2024-01-05T09:15:00")
    ),
    Project(
        id="4", name="Dashboard Redesign",
        description="Modernize user dashboard interface",
        billing_rate=Decimal("55"), status="active", created_by="1", created_at=_ts("2024-01-20T09:00:00")
    ),
]

SAMPLE_TIME_LOGS = [
    ("1", "1", "2", "8", "User authentication implementation", date(2024, 1, 15), "done", "2024-01-15T09:00:00"),
    ("2", "1", "2", "6", "Frontend dashboard design", date(2024, 1, 16), "in-progress", "2024-01-16T10:30:00"),
    ("3", "1", "3", "7.5", "Backend API development", date(2024, 1, 15), "done", "2024-01-15T14:20:00"),
    ("4", "1", "2", "4", "Database schema design", date(2024, 1, 17), "todo", "2024-01-17T11:15:00"),
    ("5", "2", "3", "5", "Mobile UI design", date(2024, 1, 18), "in-progress", "2024-01-18T13:45:00"),
    ("6", "2", "2", "3", "Setup development environment", date(2024, 1, 19), "todo", "2024-01-19T10:00:00"),
]


def seed_sample_data(store: EntityStore) -> bool:
    """Charge les données d'exemple si aucun utilisateur n'existe; retourne True si chargées"""
    if store.users.count() > 0:
        logger.info("Sample data skipped: store already populated")
        return False

    for user in SAMPLE_USERS:
        store.users.save(user)
    for project in SAMPLE_PROJECTS:
        store.projects.save(project)
    for log_id, project_id, user_id, hours, notes, log_date, status, created_at in SAMPLE_TIME_LOGS:
        store.insert_time_log(TimeLog(
            id=log_id,
            project_id=project_id,
            user_id=user_id,
            hours=Decimal(hours),
            log_date=log_date,
            notes=notes,
            status=status,
            created_at=_ts(created_at),
            updated_at=_ts(created_at)
        ))

    logger.info(
        f"✅ Sample data loaded: {len(SAMPLE_USERS)} users, "
        f"{len(SAMPLE_PROJECTS)} projects, {len(SAMPLE_TIME_LOGS)} time logs"
    )
    return True
