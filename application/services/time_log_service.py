"""
TimeLogService - Service applicatif pour les saisies d'heures
"""

import logging
import uuid
from dataclasses import replace
from datetime import datetime, timezone
from typing import List, Optional, Tuple

from application.concurrency import KeyedLock
from application.services.daily_cap_validator import DailyCapValidator
from application.services.summary_cache import SummaryCache
from domain.authorization import can_modify
from domain.dates import DateLike, to_calendar_day
from domain.entities import TimeLog, TimeLogStatus, TimeLogUpdate, User
from domain.entities.time_log import parse_hours, parse_time_log_status
from domain.exceptions import (
    Forbidden, ProjectArchived, ProjectNotFound, TimeLogNotFound, ValidationError
)
from domain.repositories import EntityStore, TimeLogFilter
from domain.status_machine import transition

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


class TimeLogService:
    """Service pour la gestion des saisies d'heures

    Toute écriture qui change les heures ou les notes d'un projet invalide
    son résumé de facturation; un simple changement de statut ne le fait pas.
    """

    def __init__(
        self,
        store: EntityStore,
        cap_validator: DailyCapValidator,
        summary_cache: SummaryCache,
        user_locks: Optional[KeyedLock] = None
    ):
        self.store = store
        self.cap_validator = cap_validator
        self.summary_cache = summary_cache
        self.user_locks = user_locks or KeyedLock()

    @staticmethod
    def _now() -> datetime:
        return datetime.now(timezone.utc)

    def create_time_log(
        self,
        user_id: str,
        project_id: str,
        hours,
        log_date: DateLike,
        notes: Optional[str] = None,
        status: str = TimeLogStatus.TODO.value
    ) -> TimeLog:
        """Crée une saisie pour `user_id` après contrôle du projet et du plafond journalier"""
        if not project_id or hours is None or hours == "" or not log_date:
            raise ValidationError(
                "Please provide project_id, hours, and log_date", constraint="required"
            )

        project = self.store.find_project_by_id(project_id)
        if not project:
            raise ProjectNotFound(project_id)
        # Refus avant tout contrôle du plafond
        if project.is_archived:
            logger.info(f"[{project_id}] Time log rejected: project is archived")
            raise ProjectArchived(project_id)

        hours = parse_hours(hours)
        day = to_calendar_day(log_date)
        status = parse_time_log_status(status)

        now = self._now()
        with self.user_locks.hold(user_id):
            self.cap_validator.validate(user_id, day, hours)
            time_log = self.store.insert_time_log(TimeLog(
                id=str(uuid.uuid4()),
                project_id=project_id,
                user_id=user_id,
                hours=hours,
                log_date=day,
                notes=notes or "",
                status=status,
                created_at=now,
                updated_at=now
            ))

        self.summary_cache.invalidate(project_id)
        logger.info(f"[{time_log.id}] Time log created: {hours}h on {day} by user '{user_id}' (project '{project_id}')")
        return time_log

    def get_time_log(self, time_log_id: str) -> TimeLog:
        time_log = self.store.find_time_log_by_id(time_log_id)
        if not time_log:
            raise TimeLogNotFound(time_log_id)
        return time_log

    def _get_modifiable(self, time_log_id: str, caller: User, action: str) -> TimeLog:
        time_log = self.get_time_log(time_log_id)
        if not can_modify(caller, time_log):
            logger.warning(f"[{time_log_id}] User '{caller.id}' not allowed to {action} this time log")
            raise Forbidden(f"Not authorized to {action} this time log")
        return time_log

    def update_time_log_fields(self, time_log_id: str, caller: User, changes: TimeLogUpdate) -> TimeLog:
        """Met à jour heures / notes / statut après validation champ par champ"""
        time_log = self._get_modifiable(time_log_id, caller, "update")
        if changes.is_empty():
            return time_log

        new_hours = parse_hours(changes.hours) if changes.hours is not None else None
        if changes.notes is not None and not isinstance(changes.notes, str):
            raise ValidationError("notes must be a string", field="notes", constraint="string")
        new_status = transition(time_log.status, changes.status) if changes.status is not None else None

        with self.user_locks.hold(time_log.user_id):
            # Relecture sous verrou: la saisie a pu changer depuis le contrôle d'accès
            current = self.get_time_log(time_log_id)
            if new_hours is not None:
                self.cap_validator.validate(
                    current.user_id, current.log_date, new_hours, excluding_log_id=current.id
                )

            updated = replace(
                current,
                hours=new_hours if new_hours is not None else current.hours,
                notes=changes.notes if changes.notes is not None else current.notes,
                status=new_status if new_status is not None else current.status,
                updated_at=self._now()
            )
            saved = self.store.update_time_log(updated)
            if saved is None:
                raise TimeLogNotFound(time_log_id)

        if changes.affects_billing:
            self.summary_cache.invalidate(saved.project_id)
        logger.info(f"[{time_log_id}] Time log updated by user '{caller.id}'")
        return saved

    def update_status(self, time_log_id: str, caller: User, status: str) -> TimeLog:
        """Déplacement sur le tableau (drag & drop)"""
        # Statut validé avant la recherche de la saisie
        parse_time_log_status(status)
        return self.update_time_log_fields(time_log_id, caller, TimeLogUpdate(status=status))

    def delete_time_log(self, time_log_id: str, caller: User) -> TimeLog:
        """Supprime une saisie et invalide le résumé de son projet"""
        time_log = self._get_modifiable(time_log_id, caller, "delete")
        with self.user_locks.hold(time_log.user_id):
            deleted = self.store.delete_time_log(time_log_id)
        if deleted is None:
            raise TimeLogNotFound(time_log_id)

        self.summary_cache.invalidate(deleted.project_id)
        logger.info(f"[{time_log_id}] Time log deleted by user '{caller.id}'")
        return deleted

    def list_time_logs(
        self,
        caller: User,
        project_id: Optional[str] = None,
        user_id: Optional[str] = None,
        status: Optional[str] = None,
        log_date: Optional[DateLike] = None,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE
    ) -> Tuple[List[TimeLog], int]:
        """Liste paginée (items, total); un employé ne voit que ses propres saisies"""
        if page < 1:
            raise ValidationError("page must be >= 1", field="page", constraint=">= 1")
        if limit < 1 or limit > MAX_PAGE_SIZE:
            raise ValidationError(
                f"limit must be between 1 and {MAX_PAGE_SIZE}", field="limit", constraint="range"
            )

        if not caller.is_admin:
            if user_id and user_id != caller.id:
                return [], 0
            user_id = caller.id

        criteria = TimeLogFilter(
            project_id=project_id,
            user_id=user_id,
            status=parse_time_log_status(status) if status else None,
            log_date=to_calendar_day(log_date) if log_date else None
        )
        time_logs = self.store.list_time_logs(criteria)
        skip = (page - 1) * limit
        return time_logs[skip:skip + limit], len(time_logs)
