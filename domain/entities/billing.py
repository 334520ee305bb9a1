"""
Résumé de facturation d'un projet (valeur dérivée, jamais persistée)
"""

from datetime import date
from decimal import Decimal
from typing import Dict, List, Optional
from dataclasses import dataclass, field


@dataclass(frozen=True)
class ProjectRef:
    id: str
    name: str
    billing_rate: Decimal
    status: str


@dataclass(frozen=True)
class UserBilling:
    """Heures et montant d'un utilisateur sur le projet"""
    user_id: str
    name: Optional[str]
    email: Optional[str]
    hours: Decimal
    amount: Decimal


@dataclass(frozen=True)
class DateBilling:
    """Heures et montant d'un jour calendaire"""
    date: date
    hours: Decimal
    amount: Decimal


@dataclass(frozen=True)
class BillingSummary:
    """Totaux d'un projet, globaux, par utilisateur et par jour"""
    project: ProjectRef
    total_hours: Decimal
    total_amount: Decimal
    hours_by_user: List[UserBilling] = field(default_factory=list)
    hours_by_date: List[DateBilling] = field(default_factory=list)

    def hours_by_date_map(self) -> Dict[str, DateBilling]:
        """Vue indexée par date ISO (AAAA-MM-JJ)"""
        return {entry.date.isoformat(): entry for entry in self.hours_by_date}
