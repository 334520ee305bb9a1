"""
Prédicat d'autorisation unique pour les opérations d'écriture sur les saisies
"""

from domain.entities.time_log import TimeLog
from domain.entities.user import User


def can_modify(caller: User, time_log: TimeLog) -> bool:
    """Un admin modifie toute saisie, un employé uniquement les siennes"""
    return caller.is_admin or caller.id == time_log.user_id
