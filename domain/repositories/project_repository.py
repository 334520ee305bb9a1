"""
Interface ProjectRepository - Définit les opérations d'accès aux données pour Project
"""

from abc import ABC, abstractmethod
from typing import Iterable, List, Optional
from domain.entities.project import Project, ProjectStatus


class ProjectRepository(ABC):
    """Interface pour le repository des projets"""
    
    @abstractmethod
    def find_by_id(self, project_id: str) -> Optional[Project]:
        """Trouve un projet par son ID"""
        pass
    
    @abstractmethod
    def find_all(self, statuses: Optional[Iterable[ProjectStatus]] = None) -> List[Project]:
        """Retourne les projets (plus récents d'abord), filtrés par statut si demandé"""
        pass
    
    @abstractmethod
    def save(self, project: Project) -> Project:
        """Sauvegarde un projet (création ou mise à jour)"""
        pass
    
    @abstractmethod
    def count(self) -> int:
        """Nombre de projets"""
        pass
