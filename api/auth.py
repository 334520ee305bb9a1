"""
timetrack-api/api/auth.py
Identification de l'appelant (JWT émis par le service d'authentification)
"""

import logging

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer

from application.services.user_service import UserService
from domain.entities import User
from domain.exceptions import UserNotFound
from infrastructure.dependencies import get_jwt_service, get_user_service
from infrastructure.security.jwt_service import JWTService

logger = logging.getLogger(__name__)

# Les tokens sont émis par le service d'authentification externe
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login")


def get_current_user(
    token: str = Depends(oauth2_scheme),
    user_service: UserService = Depends(get_user_service),
    jwt_service: JWTService = Depends(get_jwt_service)
) -> User:
    """
    Dépendance FastAPI : Décode le token JWT et retourne l'utilisateur
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    
    user_id = jwt_service.get_user_id_from_token(token)
    if user_id is None:
        raise credentials_exception
    
    try:
        return user_service.get_user(user_id)
    except UserNotFound:
        logger.warning(f"JWT invalid: User '{user_id}' not found")
        raise credentials_exception


def get_current_admin_user(current_user: User = Depends(get_current_user)) -> User:
    """
    Dépendance qui vérifie que l'utilisateur courant est un admin.
    """
    if not current_user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required"
        )
    return current_user
