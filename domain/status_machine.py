"""
Machine à états du statut d'une saisie (tableau todo / in-progress / done)

Le graphe est libre: chaque statut est atteignable depuis n'importe quel autre
en une seule étape, y compris un retour de "done" vers "todo". Seule une valeur
hors des trois statuts est refusée. Les droits (qui peut déplacer quelle saisie)
sont vérifiés par l'appelant, voir domain.authorization.
"""

from typing import FrozenSet

from domain.entities.time_log import TimeLogStatus, parse_time_log_status

STATUSES: FrozenSet[TimeLogStatus] = frozenset(TimeLogStatus)


def allowed_transitions(current_status) -> FrozenSet[TimeLogStatus]:
    """Statuts atteignables depuis `current_status` (tous)"""
    parse_time_log_status(current_status)
    return STATUSES


def transition(current_status, requested_status) -> TimeLogStatus:
    """Retourne le nouveau statut ou lève ValidationError si un statut est inconnu"""
    parse_time_log_status(current_status)
    return parse_time_log_status(requested_status)
