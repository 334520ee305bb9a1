"""
Modèles SQLAlchemy - Projets, utilisateurs et saisies d'heures
"""

from sqlalchemy import (
    Column, Date, DateTime, Enum, ForeignKey, Index, Numeric, String, Text
)
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class ProjectModel(Base):
    """Modèle SQLAlchemy pour les projets"""
    __tablename__ = "projects"
    
    id = Column(String, primary_key=True)
    name = Column(String(100), nullable=False)
    description = Column(String(500), nullable=True)
    billing_rate = Column(Numeric(12, 2), nullable=False)
    status = Column(
        Enum("active", "completed", "archived", name="project_status"),
        default="active",
        nullable=False,
        index=True
    )
    created_by = Column(String, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), index=True)


class UserModel(Base):
    """Modèle SQLAlchemy pour les utilisateurs"""
    __tablename__ = "users"
    
    id = Column(String, primary_key=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    role = Column(
        Enum("admin", "employee", name="user_role"),
        default="employee",
        nullable=False
    )
    created_at = Column(DateTime(timezone=True))


class TimeLogModel(Base):
    """Modèle SQLAlchemy pour les saisies d'heures"""
    __tablename__ = "time_logs"
    
    id = Column(String, primary_key=True)
    project_id = Column(String, ForeignKey("projects.id"), nullable=False, index=True)
    # Pas de clé étrangère: une saisie survit à la disparition de son auteur
    user_id = Column(String, nullable=False, index=True)
    hours = Column(Numeric(5, 2), nullable=False)
    notes = Column(Text, nullable=False, default="")
    log_date = Column(Date, nullable=False, index=True)
    status = Column(
        Enum("todo", "in-progress", "done", name="time_log_status"),
        default="todo",
        nullable=False,
        index=True
    )
    created_at = Column(DateTime(timezone=True), index=True)
    updated_at = Column(DateTime(timezone=True))

    __table_args__ = (
        Index("ix_time_logs_user_day", "user_id", "log_date"),
    )
