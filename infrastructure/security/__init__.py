"""
Services de sécurité
"""

from infrastructure.security.jwt_service import JWTService

__all__ = [
    "JWTService"
]
