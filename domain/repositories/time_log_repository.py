"""
Interface TimeLogRepository - Définit les opérations d'accès aux données pour TimeLog
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import List, Optional
from dataclasses import dataclass

from domain.entities.time_log import TimeLog, TimeLogStatus


@dataclass(frozen=True)
class TimeLogFilter:
    """Critères de sélection des saisies (None = pas de filtre)"""
    project_id: Optional[str] = None
    user_id: Optional[str] = None
    status: Optional[TimeLogStatus] = None
    log_date: Optional[date] = None

    def matches(self, time_log: TimeLog) -> bool:
        return (
            (self.project_id is None or time_log.project_id == self.project_id)
            and (self.user_id is None or time_log.user_id == self.user_id)
            and (self.status is None or time_log.status == self.status)
            and (self.log_date is None or time_log.log_date == self.log_date)
        )


class TimeLogRepository(ABC):
    """Interface pour le repository des saisies d'heures"""
    
    @abstractmethod
    def find_by_id(self, time_log_id: str) -> Optional[TimeLog]:
        """Trouve une saisie par son ID"""
        pass
    
    @abstractmethod
    def find_all(self, criteria: Optional[TimeLogFilter] = None) -> List[TimeLog]:
        """Retourne les saisies correspondant aux critères, dans l'ordre d'insertion"""
        pass
    
    @abstractmethod
    def insert(self, time_log: TimeLog) -> TimeLog:
        """Ajoute une nouvelle saisie"""
        pass
    
    @abstractmethod
    def update(self, time_log: TimeLog) -> Optional[TimeLog]:
        """Remplace une saisie existante; None si elle n'existe plus"""
        pass
    
    @abstractmethod
    def delete(self, time_log_id: str) -> Optional[TimeLog]:
        """Supprime une saisie et la retourne; None si elle n'existe pas"""
        pass
    
    @abstractmethod
    def count(self) -> int:
        """Nombre de saisies"""
        pass
