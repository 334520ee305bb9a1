"""
Infrastructure Database - Configuration et repositories SQLAlchemy
"""

from infrastructure.database.session import create_db_engine, create_session_factory
from infrastructure.database.models import Base, ProjectModel, UserModel, TimeLogModel
from infrastructure.database.repositories import (
    SQLAlchemyUserRepository,
    SQLAlchemyProjectRepository,
    SQLAlchemyTimeLogRepository,
    create_sql_store
)
from infrastructure.database.init_db import init_db
from infrastructure.database.mappers import CorruptedRecordError

__all__ = [
    "Base",
    "CorruptedRecordError",
    "create_db_engine",
    "create_session_factory",
    "init_db",
    "ProjectModel",
    "UserModel",
    "TimeLogModel",
    "SQLAlchemyUserRepository",
    "SQLAlchemyProjectRepository",
    "SQLAlchemyTimeLogRepository",
    "create_sql_store"
]
