"""
UserService - Service applicatif pour la gestion des utilisateurs
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import List, Optional
from domain.entities import User, UserRole
from domain.exceptions import DuplicateEmail, UserNotFound
from domain.repositories import UserRepository

logger = logging.getLogger(__name__)


class UserService:
    """Service pour la gestion des utilisateurs"""
    
    def __init__(self, user_repository: UserRepository):
        self.user_repository = user_repository
    
    def create_user(
        self,
        name: str,
        email: str,
        role: str = UserRole.EMPLOYEE.value,
        user_id: Optional[str] = None
    ) -> User:
        """Crée un nouvel utilisateur (email unique)"""
        user = User(
            id=user_id or str(uuid.uuid4()),
            name=name,
            email=email,
            role=role,
            created_at=datetime.now(timezone.utc)
        )
        
        # Vérifier si l'email existe déjà
        if self.user_repository.find_by_email(user.email):
            raise DuplicateEmail(user.email)
        
        saved = self.user_repository.save(user)
        logger.info(f"User '{saved.email}' created (role={saved.role.value})")
        return saved
    
    def get_user(self, user_id: str) -> User:
        """Récupère un utilisateur par son ID"""
        user = self.user_repository.find_by_id(user_id)
        if not user:
            raise UserNotFound(user_id)
        return user
    
    def get_all_users(self) -> List[User]:
        """Récupère tous les utilisateurs"""
        return self.user_repository.find_all()
