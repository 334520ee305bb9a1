"""
Verrous par clé (utilisateur, projet) pour les séquences lecture-puis-écriture
"""

import threading
from contextlib import contextmanager
from typing import Dict, Hashable, Iterator


class KeyedLock:
    """Exclusion mutuelle par clé; deux clés différentes ne se bloquent pas

    Les verrous sont créés à la demande et conservés: le nombre de clés
    (utilisateurs, projets) reste faible pour un processus unique.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: Dict[Hashable, threading.Lock] = {}

    def get(self, key: Hashable) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = self._locks[key] = threading.Lock()
            return lock

    @contextmanager
    def hold(self, key: Hashable) -> Iterator[None]:
        """Section critique pour `key`"""
        lock = self.get(key)
        with lock:
            yield
