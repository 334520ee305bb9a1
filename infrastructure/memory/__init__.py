"""
Infrastructure Memory - Stockage en mémoire du processus
"""

from infrastructure.memory.repositories import (
    InMemoryProjectRepository,
    InMemoryUserRepository,
    InMemoryTimeLogRepository,
    create_memory_store
)

__all__ = [
    "InMemoryProjectRepository",
    "InMemoryUserRepository",
    "InMemoryTimeLogRepository",
    "create_memory_store"
]
