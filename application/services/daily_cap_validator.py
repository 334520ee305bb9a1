"""
DailyCapValidator - Plafond de 12 heures par utilisateur et par jour
"""

import logging
from decimal import Decimal
from typing import Optional

from domain.dates import DateLike, to_calendar_day
from domain.entities.time_log import DAILY_CAP_HOURS
from domain.exceptions import CapExceeded
from domain.money import to_decimal
from domain.repositories import EntityStore, TimeLogFilter

logger = logging.getLogger(__name__)


class DailyCapValidator:
    """Vérifie qu'une saisie ne ferait pas dépasser le plafond journalier

    Lecture seule sur l'EntityStore. L'appelant qui enchaîne validation et
    écriture doit tenir le verrou de l'utilisateur pendant les deux étapes.
    """

    def __init__(self, store: EntityStore, cap: Decimal = DAILY_CAP_HOURS):
        self.store = store
        self.cap = cap

    def existing_hours(
        self,
        user_id: str,
        log_date: DateLike,
        excluding_log_id: Optional[str] = None
    ) -> Decimal:
        """Total déjà saisi par l'utilisateur ce jour-là (hors `excluding_log_id`)"""
        day = to_calendar_day(log_date)
        logs = self.store.list_time_logs(TimeLogFilter(user_id=user_id, log_date=day))
        return sum(
            (log.hours for log in logs if log.id != excluding_log_id),
            Decimal("0")
        )

    def validate(
        self,
        user_id: str,
        log_date: DateLike,
        proposed_hours,
        excluding_log_id: Optional[str] = None
    ) -> Decimal:
        """Lève CapExceeded si existant + proposé > plafond (12.0 pile est accepté)

        Retourne le nouveau total journalier.
        """
        day = to_calendar_day(log_date)
        proposed = to_decimal(proposed_hours, "hours")
        existing = self.existing_hours(user_id, day, excluding_log_id)

        if existing + proposed > self.cap:
            logger.info(
                f"Daily cap exceeded for user '{user_id}' on {day}: "
                f"{existing} + {proposed} > {self.cap}"
            )
            raise CapExceeded(user_id, day, existing, proposed, self.cap)

        return existing + proposed
