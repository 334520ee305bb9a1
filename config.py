"""
timetrack-api/config.py
Configuration de l'application (variables d'environnement)
"""

import os
from typing import List

ENV_PREFIX = "TIMETRACK_"

# Durée de validité d'un résumé de facturation en cache (secondes)
SUMMARY_CACHE_TTL_SECONDS = 30


def _env(name: str, default: str) -> str:
    return os.environ.get(f"{ENV_PREFIX}{name}", default)


def _env_bool(name: str, default: bool) -> bool:
    value = os.environ.get(f"{ENV_PREFIX}{name}")
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Config:
    """Configuration centrale, lue une fois à l'instanciation"""

    def __init__(self):
        # Stockage des entités: "memory" (défaut) ou "sql"
        self.store_backend: str = _env("STORE_BACKEND", "memory").lower()
        self.database_url: str = _env("DATABASE_URL", "sqlite:///./timetrack.db")
        self.seed_sample_data: bool = _env_bool("SEED_SAMPLE_DATA", True)

        # JWT (les tokens sont émis par le service d'authentification)
        self.jwt_secret_key: str = _env("JWT_SECRET_KEY", "dev_secret")
        self.jwt_algorithm: str = _env("JWT_ALGORITHM", "HS256")
        self.jwt_expire_minutes: int = int(_env("JWT_EXPIRE_MINUTES", "10080"))

        self.cors_origins: List[str] = [
            origin.strip()
            for origin in _env("CORS_ORIGINS", "http://localhost:3000").split(",")
            if origin.strip()
        ]

        # Logging
        self.log_level: str = _env("LOG_LEVEL", "INFO")
        self.log_colored: bool = _env_bool("LOG_COLORED", True)
        self.log_file_enabled: bool = _env_bool("LOG_FILE_ENABLED", False)
        self.log_file_path: str = _env("LOG_FILE_PATH", "logs/timetrack.log")

        self.summary_cache_ttl: int = SUMMARY_CACHE_TTL_SECONDS

        if self.store_backend not in ("memory", "sql"):
            raise ValueError(
                f"Unsupported store backend '{self.store_backend}' (expected 'memory' or 'sql')"
            )
