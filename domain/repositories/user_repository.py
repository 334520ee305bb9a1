"""
Interface UserRepository - Définit les opérations d'accès aux données pour User
"""

from abc import ABC, abstractmethod
from typing import List, Optional
from domain.entities.user import User


class UserRepository(ABC):
    """Interface pour le repository des utilisateurs"""
    
    @abstractmethod
    def find_by_id(self, user_id: str) -> Optional[User]:
        """Trouve un utilisateur par son ID"""
        pass
    
    @abstractmethod
    def find_by_email(self, email: str) -> Optional[User]:
        """Trouve un utilisateur par son email"""
        pass
    
    @abstractmethod
    def find_all(self) -> List[User]:
        """Retourne tous les utilisateurs"""
        pass
    
    @abstractmethod
    def save(self, user: User) -> User:
        """Sauvegarde un utilisateur (création ou mise à jour)"""
        pass
    
    @abstractmethod
    def count(self) -> int:
        """Nombre d'utilisateurs"""
        pass
