"""
EntityStore - Regroupe les repositories d'un même stockage

Créé une seule fois au démarrage et injecté dans tous les composants.
"""

from typing import List, Optional
from dataclasses import dataclass

from domain.entities import Project, TimeLog, User
from domain.repositories.project_repository import ProjectRepository
from domain.repositories.time_log_repository import TimeLogFilter, TimeLogRepository
from domain.repositories.user_repository import UserRepository


@dataclass
class EntityStore:
    """Accès aux projets, utilisateurs et saisies"""
    projects: ProjectRepository
    users: UserRepository
    time_logs: TimeLogRepository

    def find_project_by_id(self, project_id: str) -> Optional[Project]:
        return self.projects.find_by_id(project_id)

    def find_user_by_id(self, user_id: str) -> Optional[User]:
        return self.users.find_by_id(user_id)

    def find_time_log_by_id(self, time_log_id: str) -> Optional[TimeLog]:
        return self.time_logs.find_by_id(time_log_id)

    def list_time_logs(self, criteria: Optional[TimeLogFilter] = None) -> List[TimeLog]:
        return self.time_logs.find_all(criteria)

    def insert_time_log(self, time_log: TimeLog) -> TimeLog:
        return self.time_logs.insert(time_log)

    def update_time_log(self, time_log: TimeLog) -> Optional[TimeLog]:
        return self.time_logs.update(time_log)

    def delete_time_log(self, time_log_id: str) -> Optional[TimeLog]:
        return self.time_logs.delete(time_log_id)
