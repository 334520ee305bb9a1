"""
Entité Project - Modèle métier pour les projets facturables
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from dataclasses import dataclass

from domain.exceptions import InvalidProjectTransition, ValidationError
from domain.money import check_scale, to_decimal


class ProjectStatus(str, Enum):
    """Statut d'un projet"""
    ACTIVE = "active"
    COMPLETED = "completed"
    ARCHIVED = "archived"


# Transitions autorisées (archived = suppression logique, état terminal)
PROJECT_TRANSITIONS = {
    ProjectStatus.ACTIVE: {ProjectStatus.COMPLETED, ProjectStatus.ARCHIVED},
    ProjectStatus.COMPLETED: {ProjectStatus.ARCHIVED},
    ProjectStatus.ARCHIVED: set(),
}


@dataclass
class Project:
    """Entité Project du domaine"""
    id: str
    name: str
    billing_rate: Decimal
    created_by: str
    status: ProjectStatus = ProjectStatus.ACTIVE
    description: Optional[str] = None
    created_at: Optional[datetime] = None

    def __post_init__(self):
        """Validation de l'entité"""
        if not self.name or not self.name.strip():
            raise ValidationError("Project name cannot be empty", field="name", constraint="required")
        self.name = self.name.strip()
        if len(self.name) < 3 or len(self.name) > 100:
            raise ValidationError(
                "Project name must be between 3 and 100 characters", field="name", constraint="length"
            )
        if self.description is not None and len(self.description) > 500:
            raise ValidationError(
                "Description cannot exceed 500 characters", field="description", constraint="length"
            )
        self.billing_rate = check_scale(to_decimal(self.billing_rate, "billing_rate"), "billing_rate")
        if self.billing_rate < 0:
            raise ValidationError(
                "Billing rate cannot be negative", field="billing_rate", constraint=">= 0"
            )
        self.status = parse_project_status(self.status)

    @property
    def is_archived(self) -> bool:
        return self.status == ProjectStatus.ARCHIVED

    def change_status(self, requested: "ProjectStatus") -> None:
        """Applique une transition de statut; un statut identique ne change rien"""
        requested = parse_project_status(requested)
        if requested == self.status:
            return
        if requested not in PROJECT_TRANSITIONS[self.status]:
            raise InvalidProjectTransition(self.status.value, requested.value)
        self.status = requested


def parse_project_status(value) -> ProjectStatus:
    try:
        return ProjectStatus(value)
    except ValueError:
        allowed = ", ".join(s.value for s in ProjectStatus)
        raise ValidationError(
            f"Invalid project status '{value}'. Must be {allowed}", field="status", constraint="enum"
        )
