"""
timetrack-api/api/schemas.py
Schémas Pydantic pour la validation et la sérialisation
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Dict, List, Optional
from pydantic import BaseModel, Field, field_serializer

from domain.entities import BillingSummary, Project, TimeLog, User


def _iso(dt: Optional[datetime]) -> Optional[str]:
    return dt.isoformat() if dt else None


# ============================================================================
# UTILISATEURS
# ============================================================================

class UserResponse(BaseModel):
    """Schéma pour retourner l'utilisateur authentifié"""
    id: str
    name: str
    email: str
    role: str

    @classmethod
    def from_entity(cls, user: User) -> "UserResponse":
        return cls(id=user.id, name=user.name, email=user.email, role=user.role.value)


class UserEnvelope(BaseModel):
    success: bool = True
    data: UserResponse


class UserRef(BaseModel):
    """Auteur d'une saisie (None si l'utilisateur n'existe plus)"""
    id: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None

    @classmethod
    def from_entity(cls, user: Optional[User]) -> "UserRef":
        if user is None:
            return cls()
        return cls(id=user.id, name=user.name, email=user.email)


# ============================================================================
# PROJETS
# ============================================================================

class ProjectCreate(BaseModel):
    """Schéma pour créer un projet"""
    name: Optional[str] = None
    description: Optional[str] = None
    billing_rate: Optional[Decimal] = None
    status: str = "active"


class ProjectUpdate(BaseModel):
    """Schéma pour mettre à jour un projet (champs omis = inchangés)"""
    name: Optional[str] = None
    description: Optional[str] = None
    billing_rate: Optional[Decimal] = None
    status: Optional[str] = None


class ProjectResponse(BaseModel):
    """Schéma pour retourner un projet"""
    id: str
    name: str
    description: Optional[str] = None
    billing_rate: Decimal
    status: str
    created_by: str
    created_at: Optional[datetime] = None

    @field_serializer('billing_rate')
    def serialize_billing_rate(self, value: Decimal, _info):
        return float(value)

    @field_serializer('created_at')
    def serialize_created_at(self, dt: Optional[datetime], _info):
        return _iso(dt)

    @classmethod
    def from_entity(cls, project: Project) -> "ProjectResponse":
        return cls(
            id=project.id,
            name=project.name,
            description=project.description,
            billing_rate=project.billing_rate,
            status=project.status.value,
            created_by=project.created_by,
            created_at=project.created_at
        )


class ProjectEnvelope(BaseModel):
    success: bool = True
    message: Optional[str] = None
    data: ProjectResponse


class Pagination(BaseModel):
    page: int
    limit: int
    total_pages: int


class ProjectListEnvelope(BaseModel):
    success: bool = True
    count: int
    total: int
    pagination: Pagination
    data: List[ProjectResponse]


# ============================================================================
# SAISIES D'HEURES
# ============================================================================

class TimeLogCreate(BaseModel):
    """Schéma pour créer une saisie (l'auteur est l'utilisateur authentifié)"""
    project_id: Optional[str] = None
    hours: Optional[Decimal] = None
    notes: Optional[str] = None
    log_date: Optional[str] = Field(default=None, description="Date ISO 8601 (l'heure est ignorée)")
    status: str = "todo"


class TimeLogUpdateRequest(BaseModel):
    """Schéma pour une mise à jour partielle (heures, notes, statut)"""
    hours: Optional[Decimal] = None
    notes: Optional[str] = None
    status: Optional[str] = None


class TimeLogStatusUpdate(BaseModel):
    """Schéma pour un déplacement sur le tableau"""
    status: Optional[str] = None


class ProjectLink(BaseModel):
    id: Optional[str] = None
    name: Optional[str] = None


class TimeLogResponse(BaseModel):
    """Schéma pour retourner une saisie, avec son auteur et son projet"""
    id: str
    project_id: str
    user_id: str
    hours: Decimal
    notes: str
    log_date: date
    status: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    user: UserRef
    project: ProjectLink

    @field_serializer('hours')
    def serialize_hours(self, value: Decimal, _info):
        return float(value)

    @field_serializer('created_at', 'updated_at')
    def serialize_timestamps(self, dt: Optional[datetime], _info):
        return _iso(dt)

    @classmethod
    def from_entity(
        cls,
        time_log: TimeLog,
        user: Optional[User] = None,
        project: Optional[Project] = None
    ) -> "TimeLogResponse":
        return cls(
            id=time_log.id,
            project_id=time_log.project_id,
            user_id=time_log.user_id,
            hours=time_log.hours,
            notes=time_log.notes,
            log_date=time_log.log_date,
            status=time_log.status.value,
            created_at=time_log.created_at,
            updated_at=time_log.updated_at,
            user=UserRef.from_entity(user),
            project=ProjectLink(id=project.id, name=project.name) if project else ProjectLink()
        )


class TimeLogEnvelope(BaseModel):
    success: bool = True
    message: Optional[str] = None
    data: TimeLogResponse


class TimeLogListEnvelope(BaseModel):
    success: bool = True
    count: int
    total: int
    page: int
    total_pages: int
    data: List[TimeLogResponse]


class TimeLogStatusResponse(BaseModel):
    id: str
    status: str
    updated_at: Optional[datetime] = None

    @field_serializer('updated_at')
    def serialize_updated_at(self, dt: Optional[datetime], _info):
        return _iso(dt)


class TimeLogStatusEnvelope(BaseModel):
    success: bool = True
    data: TimeLogStatusResponse


# ============================================================================
# FACTURATION
# ============================================================================

class BillingProject(BaseModel):
    id: str
    name: str
    billing_rate: float
    status: str


class UserBillingResponse(BaseModel):
    user_id: str
    name: Optional[str] = None
    email: Optional[str] = None
    hours: float
    amount: float


class DateBillingResponse(BaseModel):
    hours: float
    amount: float


class BillingSummaryResponse(BaseModel):
    """Résumé de facturation; `hours_by_date` est indexé par date ISO"""
    project: BillingProject
    total_hours: float
    total_amount: float
    hours_by_user: List[UserBillingResponse]
    hours_by_date: Dict[str, DateBillingResponse]

    @classmethod
    def from_summary(cls, summary: BillingSummary) -> "BillingSummaryResponse":
        return cls(
            project=BillingProject(
                id=summary.project.id,
                name=summary.project.name,
                billing_rate=float(summary.project.billing_rate),
                status=summary.project.status
            ),
            total_hours=float(summary.total_hours),
            total_amount=float(summary.total_amount),
            hours_by_user=[
                UserBillingResponse(
                    user_id=entry.user_id,
                    name=entry.name,
                    email=entry.email,
                    hours=float(entry.hours),
                    amount=float(entry.amount)
                )
                for entry in summary.hours_by_user
            ],
            hours_by_date={
                day: DateBillingResponse(hours=float(entry.hours), amount=float(entry.amount))
                for day, entry in summary.hours_by_date_map().items()
            }
        )


class BillingSummaryEnvelope(BaseModel):
    success: bool = True
    data: BillingSummaryResponse
    cached: bool


# ============================================================================
# ERREURS
# ============================================================================

class ErrorResponse(BaseModel):
    success: bool = False
    code: str
    message: str
    field: Optional[str] = None
