"""
SummaryCache - Cache des résumés de facturation par projet (TTL fixe)
"""

import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple

from application.concurrency import KeyedLock
from application.services.billing_aggregator import BillingAggregator
from config import SUMMARY_CACHE_TTL_SECONDS
from domain.entities import BillingSummary

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CacheEntry:
    summary: BillingSummary
    computed_at: float


class SummaryCache:
    """Mémorise la sortie du BillingAggregator, une entrée par projet

    - Une entrée est valide tant que `now - computed_at < ttl`.
    - Au plus un calcul en cours par projet: les appels concurrents sur une
      entrée absente ou expirée attendent le premier calcul puis lisent son
      résultat.
    - Une invalidation pendant un calcul empêche ce calcul d'être mis en
      cache (son résultat est tout de même retourné à l'appelant).

    Pas d'éviction: une entrée par projet déjà résumé, chacune de taille
    constante.
    """

    def __init__(
        self,
        aggregator: BillingAggregator,
        ttl: float = SUMMARY_CACHE_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic
    ):
        self.aggregator = aggregator
        self.ttl = ttl
        self.clock = clock
        self._entries: Dict[str, CacheEntry] = {}
        self._generations: Dict[str, int] = {}
        self._guard = threading.Lock()
        self._computing = KeyedLock()

    def _fresh_entry(self, project_id: str) -> Optional[CacheEntry]:
        with self._guard:
            entry = self._entries.get(project_id)
        if entry is not None and self.clock() - entry.computed_at < self.ttl:
            return entry
        return None

    def get_or_compute(self, project_id: str) -> Tuple[BillingSummary, bool]:
        """Retourne (résumé, was_cached)

        Lève ProjectNotFound (via l'agrégateur) si le projet n'existe pas.
        """
        entry = self._fresh_entry(project_id)
        if entry is not None:
            logger.debug(f"[{project_id}] Billing summary cache hit")
            return entry.summary, True

        with self._computing.hold(project_id):
            # Un autre appelant a pu remplir l'entrée pendant l'attente
            entry = self._fresh_entry(project_id)
            if entry is not None:
                logger.debug(f"[{project_id}] Billing summary cache hit (after wait)")
                return entry.summary, True

            with self._guard:
                generation = self._generations.get(project_id, 0)

            logger.debug(f"[{project_id}] Billing summary cache miss, computing")
            summary = self.aggregator.summarize(project_id)

            with self._guard:
                if self._generations.get(project_id, 0) == generation:
                    self._entries[project_id] = CacheEntry(summary=summary, computed_at=self.clock())
                else:
                    logger.debug(f"[{project_id}] Invalidated during computation, result not cached")

        return summary, False

    def invalidate(self, project_id: str) -> None:
        """Supprime l'entrée du projet (sans condition)"""
        with self._guard:
            self._entries.pop(project_id, None)
            self._generations[project_id] = self._generations.get(project_id, 0) + 1
        logger.debug(f"[{project_id}] Billing summary cache invalidated")

    def __contains__(self, project_id: str) -> bool:
        return self._fresh_entry(project_id) is not None

    def __len__(self) -> int:
        with self._guard:
            return len(self._entries)
