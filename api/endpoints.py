"""
timetrack-api/api/endpoints.py
Endpoints de l'API (projets, saisies d'heures, facturation)
"""

import logging
import math
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from api import auth
from api.schemas import (
    BillingSummaryEnvelope,
    BillingSummaryResponse,
    Pagination,
    ProjectCreate,
    ProjectEnvelope,
    ProjectListEnvelope,
    ProjectResponse,
    ProjectUpdate,
    TimeLogCreate,
    TimeLogEnvelope,
    TimeLogListEnvelope,
    TimeLogResponse,
    TimeLogStatusEnvelope,
    TimeLogStatusResponse,
    TimeLogStatusUpdate,
    TimeLogUpdateRequest,
    UserEnvelope,
    UserResponse
)
from application.services import ProjectService, SummaryCache, TimeLogService
from application.services.time_log_service import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from domain.entities import TimeLog, TimeLogUpdate, User
from domain.repositories import EntityStore
from infrastructure.dependencies import (
    get_project_service, get_store, get_summary_cache, get_time_log_service
)

logger = logging.getLogger(__name__)
router = APIRouter()
auth_router = APIRouter()

admin_router = APIRouter(
    tags=["Admin Management"],
    dependencies=[Depends(auth.get_current_admin_user)]
)

DEFAULT_PROJECT_PAGE_SIZE = 10


# ============================================================================
# HELPERS
# ============================================================================

def _total_pages(total: int, limit: int) -> int:
    return math.ceil(total / limit) if total else 0


def _time_log_response(store: EntityStore, time_log: TimeLog) -> TimeLogResponse:
    """Joint l'auteur et le projet à la saisie"""
    return TimeLogResponse.from_entity(
        time_log,
        user=store.find_user_by_id(time_log.user_id),
        project=store.find_project_by_id(time_log.project_id)
    )


# ============================================================================
# AUTHENTIFICATION
# ============================================================================

@auth_router.get("/auth/me", response_model=UserEnvelope)
def read_current_user(current_user: User = Depends(auth.get_current_user)):
    """Retourne l'utilisateur authentifié"""
    return UserEnvelope(data=UserResponse.from_entity(current_user))


# ============================================================================
# PROJETS
# ============================================================================

@router.get("/projects", response_model=ProjectListEnvelope, tags=["Projects"])
def list_projects(
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PROJECT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    current_user: User = Depends(auth.get_current_user),
    project_service: ProjectService = Depends(get_project_service)
):
    """Liste les projets visibles (les employés ne voient pas les archivés)"""
    projects = project_service.list_projects(current_user)
    skip = (page - 1) * limit
    page_items = projects[skip:skip + limit]
    return ProjectListEnvelope(
        count=len(page_items),
        total=len(projects),
        pagination=Pagination(page=page, limit=limit, total_pages=_total_pages(len(projects), limit)),
        data=[ProjectResponse.from_entity(p) for p in page_items]
    )


@router.get("/projects/{project_id}", response_model=ProjectEnvelope, tags=["Projects"])
def get_project(
    project_id: str,
    current_user: User = Depends(auth.get_current_user),
    project_service: ProjectService = Depends(get_project_service)
):
    project = project_service.get_project(project_id, caller=current_user)
    return ProjectEnvelope(data=ProjectResponse.from_entity(project))


@admin_router.post(
    "/projects",
    response_model=ProjectEnvelope,
    status_code=status.HTTP_201_CREATED,
    tags=["Projects"]
)
def create_project(
    project_data: ProjectCreate,
    current_user: User = Depends(auth.get_current_user),
    project_service: ProjectService = Depends(get_project_service)
):
    """Crée un projet (admin uniquement)"""
    project = project_service.create_project(
        name=project_data.name,
        billing_rate=project_data.billing_rate,
        created_by=current_user.id,
        description=project_data.description,
        status=project_data.status
    )
    return ProjectEnvelope(message="Project created successfully", data=ProjectResponse.from_entity(project))


@admin_router.put("/projects/{project_id}", response_model=ProjectEnvelope, tags=["Projects"])
def update_project(
    project_id: str,
    project_data: ProjectUpdate,
    project_service: ProjectService = Depends(get_project_service)
):
    """Met à jour un projet (admin uniquement)"""
    project = project_service.update_project(
        project_id,
        name=project_data.name,
        description=project_data.description,
        billing_rate=project_data.billing_rate,
        status=project_data.status
    )
    return ProjectEnvelope(message="Project updated successfully", data=ProjectResponse.from_entity(project))


@admin_router.delete("/projects/{project_id}", response_model=ProjectEnvelope, tags=["Projects"])
def archive_project(
    project_id: str,
    project_service: ProjectService = Depends(get_project_service)
):
    """Archive un projet (suppression logique, admin uniquement)"""
    project = project_service.archive_project(project_id)
    return ProjectEnvelope(message="Project archived successfully", data=ProjectResponse.from_entity(project))


@admin_router.get(
    "/projects/{project_id}/billing-summary",
    response_model=BillingSummaryEnvelope,
    tags=["Billing"]
)
def get_billing_summary(
    project_id: str,
    summary_cache: SummaryCache = Depends(get_summary_cache)
):
    """Résumé de facturation du projet (mis en cache 30 secondes)"""
    summary, was_cached = summary_cache.get_or_compute(project_id)
    return BillingSummaryEnvelope(
        data=BillingSummaryResponse.from_summary(summary),
        cached=was_cached
    )


# ============================================================================
# SAISIES D'HEURES
# ============================================================================

@router.get("/timelogs", response_model=TimeLogListEnvelope, tags=["Time Logs"])
def list_time_logs(
    project_id: Optional[str] = None,
    user_id: Optional[str] = None,
    log_status: Optional[str] = Query(None, alias="status"),
    log_date: Optional[str] = Query(None, alias="date"),
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    current_user: User = Depends(auth.get_current_user),
    time_log_service: TimeLogService = Depends(get_time_log_service),
    store: EntityStore = Depends(get_store)
):
    """Liste paginée des saisies (un employé ne voit que les siennes)"""
    items, total = time_log_service.list_time_logs(
        current_user,
        project_id=project_id,
        user_id=user_id,
        status=log_status,
        log_date=log_date,
        page=page,
        limit=limit
    )
    return TimeLogListEnvelope(
        count=len(items),
        total=total,
        page=page,
        total_pages=_total_pages(total, limit),
        data=[_time_log_response(store, t) for t in items]
    )


@router.post(
    "/timelogs",
    response_model=TimeLogEnvelope,
    status_code=status.HTTP_201_CREATED,
    tags=["Time Logs"]
)
def create_time_log(
    time_log_data: TimeLogCreate,
    current_user: User = Depends(auth.get_current_user),
    time_log_service: TimeLogService = Depends(get_time_log_service),
    store: EntityStore = Depends(get_store)
):
    """Crée une saisie pour l'utilisateur authentifié"""
    time_log = time_log_service.create_time_log(
        user_id=current_user.id,
        project_id=time_log_data.project_id,
        hours=time_log_data.hours,
        log_date=time_log_data.log_date,
        notes=time_log_data.notes,
        status=time_log_data.status
    )
    return TimeLogEnvelope(message="Time log created successfully", data=_time_log_response(store, time_log))


@router.put("/timelogs/{time_log_id}", response_model=TimeLogEnvelope, tags=["Time Logs"])
@router.put("/time-logs/{time_log_id}", response_model=TimeLogEnvelope, tags=["Time Logs"])
def update_time_log(
    time_log_id: str,
    time_log_data: TimeLogUpdateRequest,
    current_user: User = Depends(auth.get_current_user),
    time_log_service: TimeLogService = Depends(get_time_log_service),
    store: EntityStore = Depends(get_store)
):
    """Met à jour heures, notes ou statut d'une saisie (auteur ou admin)"""
    time_log = time_log_service.update_time_log_fields(
        time_log_id,
        current_user,
        TimeLogUpdate(
            hours=time_log_data.hours,
            notes=time_log_data.notes,
            status=time_log_data.status
        )
    )
    return TimeLogEnvelope(message="Time log updated successfully", data=_time_log_response(store, time_log))


@router.put("/timelogs/{time_log_id}/status", response_model=TimeLogStatusEnvelope, tags=["Time Logs"])
def update_time_log_status(
    time_log_id: str,
    status_data: TimeLogStatusUpdate,
    current_user: User = Depends(auth.get_current_user),
    time_log_service: TimeLogService = Depends(get_time_log_service)
):
    """Déplace une saisie sur le tableau (todo / in-progress / done)"""
    time_log = time_log_service.update_status(time_log_id, current_user, status_data.status)
    return TimeLogStatusEnvelope(
        data=TimeLogStatusResponse(
            id=time_log.id,
            status=time_log.status.value,
            updated_at=time_log.updated_at
        )
    )


@router.delete("/timelogs/{time_log_id}", tags=["Time Logs"])
def delete_time_log(
    time_log_id: str,
    current_user: User = Depends(auth.get_current_user),
    time_log_service: TimeLogService = Depends(get_time_log_service)
):
    """Supprime une saisie (auteur ou admin)"""
    time_log_service.delete_time_log(time_log_id, current_user)
    return {"success": True, "message": "Time log deleted successfully"}
