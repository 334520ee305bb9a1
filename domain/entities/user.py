"""
Entité User - Modèle métier pour les utilisateurs
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from dataclasses import dataclass

from domain.exceptions import ValidationError


class UserRole(str, Enum):
    """Rôle d'un utilisateur"""
    ADMIN = "admin"
    EMPLOYEE = "employee"


@dataclass
class User:
    """Entité User du domaine"""
    id: str
    name: str
    email: str
    role: UserRole = UserRole.EMPLOYEE
    created_at: Optional[datetime] = None

    def __post_init__(self):
        """Validation de l'entité"""
        if not self.name:
            raise ValidationError("User name cannot be empty", field="name", constraint="required")
        if not self.email or "@" not in self.email:
            raise ValidationError("A valid email is required", field="email", constraint="email")
        self.email = self.email.strip().lower()
        try:
            self.role = UserRole(self.role)
        except ValueError:
            raise ValidationError(
                f"Invalid role '{self.role}'. Must be admin or employee", field="role", constraint="enum"
            )

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
