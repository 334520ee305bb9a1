"""
Implémentations des repositories SQLAlchemy

Chaque appel ouvre une session courte depuis la session factory: les
repositories peuvent être partagés entre requêtes et threads.
"""

import logging
from typing import Iterable, List, Optional
from sqlalchemy.orm import sessionmaker

from domain.entities import Project, ProjectStatus, TimeLog, User
from domain.repositories import (
    EntityStore, ProjectRepository, TimeLogFilter, TimeLogRepository, UserRepository
)
from infrastructure.database.models import (
    ProjectModel, TimeLogModel, UserModel
)
from infrastructure.database.mappers import (
    ProjectMapper, TimeLogMapper, UserMapper
)

logger = logging.getLogger(__name__)


class SQLAlchemyUserRepository(UserRepository):
    """Implémentation SQLAlchemy du UserRepository"""
    
    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory
    
    def find_by_id(self, user_id: str) -> Optional[User]:
        """Trouve un utilisateur par son ID"""
        with self.session_factory() as session:
            model = session.query(UserModel).filter(UserModel.id == user_id).first()
            return UserMapper.to_domain(model) if model else None
    
    def find_by_email(self, email: str) -> Optional[User]:
        """Trouve un utilisateur par son email"""
        with self.session_factory() as session:
            model = session.query(UserModel).filter(UserModel.email == email.strip().lower()).first()
            return UserMapper.to_domain(model) if model else None
    
    def find_all(self) -> List[User]:
        """Retourne tous les utilisateurs"""
        with self.session_factory() as session:
            models = session.query(UserModel).order_by(UserModel.created_at, UserModel.id).all()
            return [UserMapper.to_domain(model) for model in models]
    
    def save(self, user: User) -> User:
        """Sauvegarde un utilisateur"""
        with self.session_factory() as session:
            model = session.query(UserModel).filter(UserModel.id == user.id).first()
            
            if model:
                model = UserMapper.to_model(user, model)
            else:
                model = UserMapper.to_model(user)
                session.add(model)
            
            try:
                session.commit()
                session.refresh(model)
                return UserMapper.to_domain(model)
            except Exception as e:
                session.rollback()
                logger.error(f"Error saving user: {e}")
                raise
    
    def count(self) -> int:
        with self.session_factory() as session:
            return session.query(UserModel).count()


class SQLAlchemyProjectRepository(ProjectRepository):
    """Implémentation SQLAlchemy du ProjectRepository"""
    
    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory
    
    def find_by_id(self, project_id: str) -> Optional[Project]:
        """Trouve un projet par son ID"""
        with self.session_factory() as session:
            model = session.query(ProjectModel).filter(ProjectModel.id == project_id).first()
            return ProjectMapper.to_domain(model) if model else None
    
    def find_all(self, statuses: Optional[Iterable[ProjectStatus]] = None) -> List[Project]:
        """Retourne les projets, plus récents d'abord"""
        with self.session_factory() as session:
            query = session.query(ProjectModel)
            if statuses is not None:
                query = query.filter(ProjectModel.status.in_([s.value for s in statuses]))
            models = query.order_by(ProjectModel.created_at.desc()).all()
            return [ProjectMapper.to_domain(model) for model in models]
    
    def save(self, project: Project) -> Project:
        """Sauvegarde un projet"""
        with self.session_factory() as session:
            model = session.query(ProjectModel).filter(ProjectModel.id == project.id).first()
            
            if model:
                model = ProjectMapper.to_model(project, model)
            else:
                model = ProjectMapper.to_model(project)
                session.add(model)
            
            try:
                session.commit()
                session.refresh(model)
                return ProjectMapper.to_domain(model)
            except Exception as e:
                session.rollback()
                logger.error(f"Error saving project: {e}")
                raise
    
    def count(self) -> int:
        with self.session_factory() as session:
            return session.query(ProjectModel).count()


class SQLAlchemyTimeLogRepository(TimeLogRepository):
    """Implémentation SQLAlchemy du TimeLogRepository"""
    
    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory
    
    def find_by_id(self, time_log_id: str) -> Optional[TimeLog]:
        """Trouve une saisie par son ID"""
        with self.session_factory() as session:
            model = session.query(TimeLogModel).filter(TimeLogModel.id == time_log_id).first()
            return TimeLogMapper.to_domain(model) if model else None
    
    def find_all(self, criteria: Optional[TimeLogFilter] = None) -> List[TimeLog]:
        """Trouve les saisies avec filtres, dans l'ordre de création"""
        criteria = criteria or TimeLogFilter()
        with self.session_factory() as session:
            query = session.query(TimeLogModel)
            
            if criteria.project_id is not None:
                query = query.filter(TimeLogModel.project_id == criteria.project_id)
            if criteria.user_id is not None:
                query = query.filter(TimeLogModel.user_id == criteria.user_id)
            if criteria.status is not None:
                query = query.filter(TimeLogModel.status == criteria.status.value)
            if criteria.log_date is not None:
                query = query.filter(TimeLogModel.log_date == criteria.log_date)
            
            models = query.order_by(TimeLogModel.created_at, TimeLogModel.id).all()
            return [TimeLogMapper.to_domain(model) for model in models]
    
    def _commit(self, session, action: str) -> None:
        try:
            session.commit()
        except Exception as e:
            session.rollback()
            logger.error(f"Error {action} time log: {e}")
            raise
    
    def insert(self, time_log: TimeLog) -> TimeLog:
        """Ajoute une saisie"""
        with self.session_factory() as session:
            model = TimeLogMapper.to_model(time_log)
            session.add(model)
            self._commit(session, "inserting")
            session.refresh(model)
            return TimeLogMapper.to_domain(model)
    
    def update(self, time_log: TimeLog) -> Optional[TimeLog]:
        """Remplace une saisie existante"""
        with self.session_factory() as session:
            model = session.query(TimeLogModel).filter(TimeLogModel.id == time_log.id).first()
            if not model:
                return None
            
            TimeLogMapper.to_model(time_log, model)
            self._commit(session, "updating")
            session.refresh(model)
            return TimeLogMapper.to_domain(model)
    
    def delete(self, time_log_id: str) -> Optional[TimeLog]:
        """Supprime une saisie"""
        with self.session_factory() as session:
            model = session.query(TimeLogModel).filter(TimeLogModel.id == time_log_id).first()
            if not model:
                return None
            
            deleted = TimeLogMapper.to_domain(model)
            session.delete(model)
            self._commit(session, "deleting")
            return deleted
    
    def count(self) -> int:
        with self.session_factory() as session:
            return session.query(TimeLogModel).count()


def create_sql_store(session_factory: sessionmaker) -> EntityStore:
    """Crée un EntityStore adossé à la base SQL"""
    logger.info("Entity store: SQLAlchemy")
    return EntityStore(
        projects=SQLAlchemyProjectRepository(session_factory),
        users=SQLAlchemyUserRepository(session_factory),
        time_logs=SQLAlchemyTimeLogRepository(session_factory)
    )
