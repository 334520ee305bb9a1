"""
Entité TimeLog - Saisie d'heures d'un utilisateur sur un projet
"""

from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from dataclasses import dataclass

from domain.dates import to_calendar_day
from domain.exceptions import ValidationError
from domain.money import check_scale, to_decimal

MIN_HOURS = Decimal("0.5")
MAX_HOURS = Decimal("12")
DAILY_CAP_HOURS = Decimal("12")


class TimeLogStatus(str, Enum):
    """Colonne du tableau de suivi (drag & drop)"""
    TODO = "todo"
    IN_PROGRESS = "in-progress"
    DONE = "done"


def parse_time_log_status(value) -> TimeLogStatus:
    """Accepte exactement les chaînes 'todo', 'in-progress' et 'done'"""
    try:
        return TimeLogStatus(value)
    except ValueError:
        raise ValidationError(
            f"Invalid status '{value}'. Must be todo, in-progress, or done",
            field="status",
            constraint="enum",
        )


def parse_hours(value) -> Decimal:
    hours = check_scale(to_decimal(value, "hours"), "hours")
    if hours < MIN_HOURS or hours > MAX_HOURS:
        raise ValidationError(
            f"Hours must be between {MIN_HOURS} and {MAX_HOURS}",
            field="hours",
            constraint=f"{MIN_HOURS} <= hours <= {MAX_HOURS}",
        )
    return hours


@dataclass
class TimeLog:
    """Entité TimeLog du domaine"""
    id: str
    project_id: str
    user_id: str
    hours: Decimal
    log_date: date
    notes: str = ""
    status: TimeLogStatus = TimeLogStatus.TODO
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        """Validation de l'entité"""
        if not self.project_id:
            raise ValidationError("project_id is required", field="project_id", constraint="required")
        if not self.user_id:
            raise ValidationError("user_id is required", field="user_id", constraint="required")
        self.hours = parse_hours(self.hours)
        self.log_date = to_calendar_day(self.log_date)
        self.notes = self.notes or ""
        self.status = parse_time_log_status(self.status)


@dataclass
class TimeLogUpdate:
    """Mise à jour partielle: seuls ces champs peuvent changer (None = inchangé)"""
    hours: Optional[Decimal] = None
    notes: Optional[str] = None
    status: Optional[str] = None

    def is_empty(self) -> bool:
        return self.hours is None and self.notes is None and self.status is None

    @property
    def affects_billing(self) -> bool:
        """Les heures et les notes font partie du résumé; le statut non"""
        return self.hours is not None or self.notes is not None
