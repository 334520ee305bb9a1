"""
Exceptions du domaine

Chaque erreur porte un attribut `code` stable, exploitable par l'API.

    TimetrackError
    +-- ValidationError          (entrée invalide, aussi un ValueError)
    +-- CapExceeded              (plus de 12h pour un utilisateur sur une journée)
    +-- NotFoundError
    |   +-- ProjectNotFound
    |   +-- TimeLogNotFound
    |   +-- UserNotFound
    +-- ProjectArchived          (écriture sur un projet archivé)
    +-- InvalidProjectTransition
    +-- Forbidden
    +-- DuplicateEmail
"""

from decimal import Decimal
from typing import Optional


class TimetrackError(Exception):
    """Erreur de base du domaine"""

    code: str = "TIMETRACK_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(TimetrackError, ValueError):
    """Entrée mal formée ou hors limites"""

    code: str = "VALIDATION_ERROR"

    def __init__(self, message: str, field: Optional[str] = None, constraint: Optional[str] = None):
        super().__init__(message)
        self.field = field
        self.constraint = constraint


class CapExceeded(TimetrackError):
    """Le total journalier d'un utilisateur dépasserait le plafond"""

    code: str = "DAILY_CAP_EXCEEDED"

    def __init__(self, user_id: str, log_date, existing_hours: Decimal, proposed_hours: Decimal, cap: Decimal):
        self.user_id = user_id
        self.log_date = log_date
        self.existing_hours = existing_hours
        self.proposed_hours = proposed_hours
        self.cap = cap
        super().__init__(
            f"Total hours per day cannot exceed {cap} hours "
            f"({existing_hours} already logged on {log_date}, {proposed_hours} requested)"
        )


class NotFoundError(TimetrackError):
    code: str = "NOT_FOUND"


class ProjectNotFound(NotFoundError):
    code: str = "PROJECT_NOT_FOUND"

    def __init__(self, project_id: str):
        self.project_id = project_id
        super().__init__(f"Project '{project_id}' not found")


class TimeLogNotFound(NotFoundError):
    code: str = "TIME_LOG_NOT_FOUND"

    def __init__(self, time_log_id: str):
        self.time_log_id = time_log_id
        super().__init__(f"Time log '{time_log_id}' not found")


class UserNotFound(NotFoundError):
    code: str = "USER_NOT_FOUND"

    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__(f"User '{user_id}' not found")


class ProjectArchived(TimetrackError):
    """Le projet est archivé: lecture autorisée, écriture refusée"""

    code: str = "PROJECT_ARCHIVED"

    def __init__(self, project_id: str):
        self.project_id = project_id
        super().__init__("Cannot add time logs to archived projects")


class InvalidProjectTransition(TimetrackError):
    code: str = "INVALID_PROJECT_TRANSITION"

    def __init__(self, current: str, requested: str):
        self.current = current
        self.requested = requested
        super().__init__(f"Project status cannot change from '{current}' to '{requested}'")


class Forbidden(TimetrackError):
    code: str = "FORBIDDEN"


class DuplicateEmail(TimetrackError):
    code: str = "DUPLICATE_EMAIL"

    def __init__(self, email: str):
        self.email = email
        super().__init__(f"Email '{email}' already exists")
