"""
Construction des services et dépendances FastAPI pour leur injection
"""

import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import Request

from application.concurrency import KeyedLock
from application.services import (
    BillingAggregator,
    DailyCapValidator,
    ProjectService,
    SummaryCache,
    TimeLogService,
    UserService
)
from config import Config
from domain.repositories import EntityStore
from infrastructure.database import (
    create_db_engine, create_session_factory, create_sql_store, init_db
)
from infrastructure.memory import create_memory_store
from infrastructure.security.jwt_service import JWTService

logger = logging.getLogger(__name__)


@dataclass
class Services:
    """Services partagés par toutes les requêtes (un seul jeu par processus)"""
    config: Config
    store: EntityStore
    summary_cache: SummaryCache
    time_log_service: TimeLogService
    project_service: ProjectService
    user_service: UserService
    jwt_service: JWTService


def create_store(config: Config) -> EntityStore:
    """Crée l'EntityStore selon `config.store_backend`"""
    if config.store_backend == "sql":
        engine = create_db_engine(config.database_url)
        init_db(engine)
        return create_sql_store(create_session_factory(engine))
    return create_memory_store()


def build_services(config: Config, store: Optional[EntityStore] = None) -> Services:
    """Assemble les composants autour d'un même EntityStore"""
    store = store or create_store(config)
    summary_cache = SummaryCache(BillingAggregator(store), ttl=config.summary_cache_ttl)

    return Services(
        config=config,
        store=store,
        summary_cache=summary_cache,
        time_log_service=TimeLogService(
            store,
            DailyCapValidator(store),
            summary_cache,
            user_locks=KeyedLock()
        ),
        project_service=ProjectService(store.projects, summary_cache),
        user_service=UserService(store.users),
        jwt_service=JWTService(
            secret_key=config.jwt_secret_key,
            algorithm=config.jwt_algorithm,
            expire_minutes=config.jwt_expire_minutes
        )
    )


def get_services(request: Request) -> Services:
    """Dépendance pour obtenir le jeu de services de l'application"""
    return request.app.state.services


def get_time_log_service(request: Request) -> TimeLogService:
    """Dépendance pour obtenir le TimeLogService"""
    return get_services(request).time_log_service


def get_project_service(request: Request) -> ProjectService:
    """Dépendance pour obtenir le ProjectService"""
    return get_services(request).project_service


def get_user_service(request: Request) -> UserService:
    """Dépendance pour obtenir le UserService"""
    return get_services(request).user_service


def get_summary_cache(request: Request) -> SummaryCache:
    """Dépendance pour obtenir le SummaryCache"""
    return get_services(request).summary_cache


def get_jwt_service(request: Request) -> JWTService:
    """Dépendance pour obtenir le JWTService"""
    return get_services(request).jwt_service


def get_store(request: Request) -> EntityStore:
    """Dépendance pour obtenir l'EntityStore"""
    return get_services(request).store
