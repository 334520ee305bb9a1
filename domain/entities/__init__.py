"""
Entités du domaine
"""

from domain.entities.user import User, UserRole
from domain.entities.project import Project, ProjectStatus
from domain.entities.time_log import TimeLog, TimeLogStatus, TimeLogUpdate
from domain.entities.billing import BillingSummary, DateBilling, ProjectRef, UserBilling

__all__ = [
    "User",
    "UserRole",
    "Project",
    "ProjectStatus",
    "TimeLog",
    "TimeLogStatus",
    "TimeLogUpdate",
    "BillingSummary",
    "DateBilling",
    "ProjectRef",
    "UserBilling"
]
