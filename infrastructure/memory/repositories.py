"""
Implémentations en mémoire des repositories

Les entités sont copiées à l'entrée et à la sortie: un appelant qui modifie
l'objet reçu ne modifie pas le stockage tant qu'il ne le sauvegarde pas.
"""

import logging
import threading
from dataclasses import replace
from typing import Dict, Iterable, List, Optional

from domain.entities import Project, ProjectStatus, TimeLog, User
from domain.repositories import (
    EntityStore, ProjectRepository, TimeLogFilter, TimeLogRepository, UserRepository
)

logger = logging.getLogger(__name__)


class InMemoryProjectRepository(ProjectRepository):
    """Implémentation en mémoire du ProjectRepository"""

    def __init__(self, lock: Optional[threading.RLock] = None) -> None:
        self._projects: Dict[str, Project] = {}
        self._lock = lock or threading.RLock()

    def find_by_id(self, project_id: str) -> Optional[Project]:
        with self._lock:
            project = self._projects.get(project_id)
            return replace(project) if project else None

    def find_all(self, statuses: Optional[Iterable[ProjectStatus]] = None) -> List[Project]:
        wanted = set(statuses) if statuses is not None else None
        with self._lock:
            projects = [
                replace(p) for p in self._projects.values()
                if wanted is None or p.status in wanted
            ]
        # Plus récents d'abord, sans date en dernier
        projects.sort(key=lambda p: p.created_at.timestamp() if p.created_at else float("-inf"), reverse=True)
        return projects

    def save(self, project: Project) -> Project:
        with self._lock:
            self._projects[project.id] = replace(project)
        return replace(project)

    def count(self) -> int:
        with self._lock:
            return len(self._projects)


class InMemoryUserRepository(UserRepository):
    """Implémentation en mémoire du UserRepository"""

    def __init__(self, lock: Optional[threading.RLock] = None) -> None:
        self._users: Dict[str, User] = {}
        self._lock = lock or threading.RLock()

    def find_by_id(self, user_id: str) -> Optional[User]:
        with self._lock:
            user = self._users.get(user_id)
            return replace(user) if user else None

    def find_by_email(self, email: str) -> Optional[User]:
        email = email.strip().lower()
        with self._lock:
            user = next((u for u in self._users.values() if u.email == email), None)
            return replace(user) if user else None

    def find_all(self) -> List[User]:
        with self._lock:
            return [replace(u) for u in self._users.values()]

    def save(self, user: User) -> User:
        with self._lock:
            self._users[user.id] = replace(user)
        return replace(user)

    def count(self) -> int:
        with self._lock:
            return len(self._users)


class InMemoryTimeLogRepository(TimeLogRepository):
    """Implémentation en mémoire du TimeLogRepository (ordre d'insertion conservé)"""

    def __init__(self, lock: Optional[threading.RLock] = None) -> None:
        self._time_logs: Dict[str, TimeLog] = {}
        self._lock = lock or threading.RLock()

    def find_by_id(self, time_log_id: str) -> Optional[TimeLog]:
        with self._lock:
            time_log = self._time_logs.get(time_log_id)
            return replace(time_log) if time_log else None

    def find_all(self, criteria: Optional[TimeLogFilter] = None) -> List[TimeLog]:
        criteria = criteria or TimeLogFilter()
        with self._lock:
            return [replace(t) for t in self._time_logs.values() if criteria.matches(t)]

    def insert(self, time_log: TimeLog) -> TimeLog:
        with self._lock:
            if time_log.id in self._time_logs:
                raise ValueError(f"Time log '{time_log.id}' already exists")
            self._time_logs[time_log.id] = replace(time_log)
        return replace(time_log)

    def update(self, time_log: TimeLog) -> Optional[TimeLog]:
        with self._lock:
            if time_log.id not in self._time_logs:
                return None
            self._time_logs[time_log.id] = replace(time_log)
        return replace(time_log)

    def delete(self, time_log_id: str) -> Optional[TimeLog]:
        with self._lock:
            time_log = self._time_logs.pop(time_log_id, None)
        return replace(time_log) if time_log else None

    def count(self) -> int:
        with self._lock:
            return len(self._time_logs)


def create_memory_store() -> EntityStore:
    """Crée un EntityStore en mémoire (un verrou partagé par les trois collections)"""
    lock = threading.RLock()
    logger.info("Entity store: in-memory")
    return EntityStore(
        projects=InMemoryProjectRepository(lock),
        users=InMemoryUserRepository(lock),
        time_logs=InMemoryTimeLogRepository(lock)
    )
