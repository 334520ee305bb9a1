"""
Mappers - Conversion entre modèles SQLAlchemy et entités de domaine

Une ligne stockée qui ne passe plus la validation des entités est une donnée
corrompue, pas une entrée invalide: elle lève CorruptedRecordError.
"""

from datetime import datetime, timezone
from typing import Optional
from infrastructure.database.models import (
    ProjectModel, UserModel, TimeLogModel
)
from domain.entities import Project, User, TimeLog
from domain.exceptions import ValidationError


class CorruptedRecordError(RuntimeError):
    """Ligne persistée impossible à reconstruire en entité"""


def _utc(value: Optional[datetime]) -> Optional[datetime]:
    """SQLite rend des datetimes naïfs: ils ont été écrits en UTC"""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _rebuild(entity_cls, table: str, row_id: str, **fields):
    try:
        return entity_cls(**fields)
    except ValidationError as exc:
        raise CorruptedRecordError(
            f"Corrupted {table} row '{row_id}': {exc.message}"
        ) from exc


class ProjectMapper:
    """Mapper entre ProjectModel et Project"""

    @staticmethod
    def to_domain(model: ProjectModel) -> Project:
        """Convertit un ProjectModel en entité Project"""
        return _rebuild(
            Project, "projects", model.id,
            id=model.id,
            name=model.name,
            description=model.description,
            billing_rate=model.billing_rate,
            status=model.status,
            created_by=model.created_by,
            created_at=_utc(model.created_at)
        )

    @staticmethod
    def to_model(project: Project, model: Optional[ProjectModel] = None) -> ProjectModel:
        """Convertit une entité Project en ProjectModel"""
        if model is None:
            model = ProjectModel()

        model.id = project.id
        model.name = project.name
        model.description = project.description
        model.billing_rate = project.billing_rate
        model.status = project.status.value
        model.created_by = project.created_by
        model.created_at = project.created_at

        return model


class UserMapper:
    """Mapper entre UserModel et User"""

    @staticmethod
    def to_domain(model: UserModel) -> User:
        """Convertit un UserModel en entité User"""
        return _rebuild(
            User, "users", model.id,
            id=model.id,
            name=model.name,
            email=model.email,
            role=model.role,
            created_at=_utc(model.created_at)
        )

    @staticmethod
    def to_model(user: User, model: Optional[UserModel] = None) -> UserModel:
        """Convertit une entité User en UserModel"""
        if model is None:
            model = UserModel()

        model.id = user.id
        model.name = user.name
        model.email = user.email
        model.role = user.role.value
        model.created_at = user.created_at

        return model


class TimeLogMapper:
    """Mapper entre TimeLogModel et TimeLog"""

    @staticmethod
    def to_domain(model: TimeLogModel) -> TimeLog:
        """Convertit un TimeLogModel en entité TimeLog"""
        return _rebuild(
            TimeLog, "time_logs", model.id,
            id=model.id,
            project_id=model.project_id,
            user_id=model.user_id,
            hours=model.hours,
            log_date=model.log_date,
            notes=model.notes or "",
            status=model.status,
            created_at=_utc(model.created_at),
            updated_at=_utc(model.updated_at)
        )

    @staticmethod
    def to_model(time_log: TimeLog, model: Optional[TimeLogModel] = None) -> TimeLogModel:
        """Convertit une entité TimeLog en TimeLogModel"""
        if model is None:
            model = TimeLogModel()

        model.id = time_log.id
        model.project_id = time_log.project_id
        model.user_id = time_log.user_id
        model.hours = time_log.hours
        model.log_date = time_log.log_date
        model.notes = time_log.notes
        model.status = time_log.status.value
        model.created_at = time_log.created_at
        model.updated_at = time_log.updated_at

        return model
