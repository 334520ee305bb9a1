"""
ProjectService - Service applicatif pour la gestion des projets
"""

import logging
import uuid
from dataclasses import replace
from datetime import datetime, timezone
from typing import List, Optional

from application.services.summary_cache import SummaryCache
from domain.entities import Project, ProjectStatus, User
from domain.exceptions import Forbidden, ProjectNotFound, ValidationError
from domain.repositories import ProjectRepository

logger = logging.getLogger(__name__)


class ProjectService:
    """Service pour la gestion des projets"""
    
    def __init__(self, project_repository: ProjectRepository, summary_cache: SummaryCache):
        self.project_repository = project_repository
        self.summary_cache = summary_cache
    
    def create_project(
        self,
        name: str,
        billing_rate,
        created_by: str,
        description: Optional[str] = None,
        status: str = ProjectStatus.ACTIVE.value
    ) -> Project:
        """Crée un nouveau projet"""
        if not name or billing_rate is None or billing_rate == "":
            raise ValidationError("Please provide name and billing rate", constraint="required")
        
        project = Project(
            id=str(uuid.uuid4()),
            name=name,
            description=description,
            billing_rate=billing_rate,
            status=status,
            created_by=created_by,
            created_at=datetime.now(timezone.utc)
        )
        
        saved = self.project_repository.save(project)
        logger.info(f"✅ Project '{saved.name}' created ({saved.id}) at rate {saved.billing_rate}")
        return saved
    
    def get_project(self, project_id: str, caller: Optional[User] = None) -> Project:
        """Récupère un projet par son ID (un employé ne voit pas les projets archivés)"""
        project = self.project_repository.find_by_id(project_id)
        if not project:
            raise ProjectNotFound(project_id)
        
        if caller is not None and not caller.is_admin and project.is_archived:
            raise Forbidden("Not authorized to access archived project")
        
        return project
    
    def list_projects(self, caller: User) -> List[Project]:
        """Liste les projets visibles par l'appelant, plus récents d'abord"""
        if caller.is_admin:
            return self.project_repository.find_all()
        return self.project_repository.find_all(
            statuses=[ProjectStatus.ACTIVE, ProjectStatus.COMPLETED]
        )
    
    def update_project(
        self,
        project_id: str,
        name: Optional[str] = None,
        description: Optional[str] = None,
        billing_rate=None,
        status: Optional[str] = None
    ) -> Project:
        """Met à jour un projet; le résumé de facturation en cache est invalidé"""
        project = self.get_project(project_id)
        
        if status is not None:
            project.change_status(status)
        
        changes = {}
        if name is not None:
            changes["name"] = name
        if description is not None:
            changes["description"] = description
        if billing_rate is not None:
            changes["billing_rate"] = billing_rate
        
        # replace() revalide l'entité (nom, taux >= 0)
        saved = self.project_repository.save(replace(project, **changes))
        self.summary_cache.invalidate(project_id)
        logger.info(f"[{project_id}] Project updated")
        return saved
    
    def archive_project(self, project_id: str) -> Project:
        """Archive un projet (suppression logique)"""
        project = self.get_project(project_id)
        if project.is_archived:
            return project
        
        project.change_status(ProjectStatus.ARCHIVED)
        saved = self.project_repository.save(project)
        self.summary_cache.invalidate(project_id)
        logger.info(f"[{project_id}] Project archived")
        return saved
