"""
Repositories - Interfaces pour l'accès aux données
"""

from domain.repositories.user_repository import UserRepository
from domain.repositories.project_repository import ProjectRepository
from domain.repositories.time_log_repository import TimeLogFilter, TimeLogRepository
from domain.repositories.entity_store import EntityStore

__all__ = [
    "UserRepository",
    "ProjectRepository",
    "TimeLogFilter",
    "TimeLogRepository",
    "EntityStore"
]
