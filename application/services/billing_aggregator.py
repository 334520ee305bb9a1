"""
BillingAggregator - Calcul du résumé de facturation d'un projet
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Dict, List

from domain.entities import (
    BillingSummary, DateBilling, ProjectRef, TimeLog, UserBilling
)
from domain.exceptions import ProjectNotFound
from domain.money import quantize_amount
from domain.repositories import EntityStore, TimeLogFilter

logger = logging.getLogger(__name__)

UNKNOWN_USER_NAME = "Unknown user"


class BillingAggregator:
    """Agrège les saisies d'un projet: total, par utilisateur, par jour

    Lecture seule: ne modifie ni les saisies ni les projets. Le résultat ne
    dépend pas de l'ordre d'insertion des saisies (groupes triés par clé).
    """

    def __init__(self, store: EntityStore):
        self.store = store

    def summarize(self, project_id: str) -> BillingSummary:
        """Résumé d'un projet (les projets archivés restent consultables)"""
        project = self.store.find_project_by_id(project_id)
        if not project:
            raise ProjectNotFound(project_id)

        logs = self.store.list_time_logs(TimeLogFilter(project_id=project_id))
        rate = project.billing_rate

        total_hours = sum((log.hours for log in logs), Decimal("0"))

        summary = BillingSummary(
            project=ProjectRef(
                id=project.id,
                name=project.name,
                billing_rate=rate,
                status=project.status.value
            ),
            total_hours=total_hours,
            total_amount=quantize_amount(total_hours * rate),
            hours_by_user=self._by_user(logs, rate),
            hours_by_date=self._by_date(logs, rate)
        )
        logger.debug(
            f"[{project_id}] Billing summary computed: {len(logs)} logs, "
            f"{summary.total_hours}h, {summary.total_amount}"
        )
        return summary

    def _by_user(self, logs: List[TimeLog], rate: Decimal) -> List[UserBilling]:
        hours: Dict[str, Decimal] = {}
        for log in logs:
            hours[log.user_id] = hours.get(log.user_id, Decimal("0")) + log.hours

        entries = []
        for user_id in sorted(hours):
            user = self.store.find_user_by_id(user_id)
            # Un auteur supprimé garde sa ligne, avec un nom de substitution
            entries.append(UserBilling(
                user_id=user_id,
                name=user.name if user else UNKNOWN_USER_NAME,
                email=user.email if user else None,
                hours=hours[user_id],
                amount=quantize_amount(hours[user_id] * rate)
            ))
        return entries

    def _by_date(self, logs: List[TimeLog], rate: Decimal) -> List[DateBilling]:
        hours: Dict[date, Decimal] = {}
        for log in sorted(logs, key=lambda l: l.log_date):
            hours[log.log_date] = hours.get(log.log_date, Decimal("0")) + log.hours

        return [
            DateBilling(date=day, hours=day_hours, amount=quantize_amount(day_hours * rate))
            for day, day_hours in hours.items()
        ]

