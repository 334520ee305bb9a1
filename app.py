"""
timetrack-api/app.py
Point d'entrée principal de l'API de suivi du temps
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from config import Config
from api.endpoints import router as api_router, auth_router, admin_router
from api.errors import register_exception_handlers
from infrastructure.dependencies import build_services
from infrastructure.seed import seed_sample_data
from logging_config import setup_logging, setup_colored_logging

# Initialiser la configuration
config = Config()

# Configurer le logging
if config.log_colored:
    logger = setup_colored_logging(
        log_level=config.log_level,
        log_file=config.log_file_path if config.log_file_enabled else None
    )
else:
    logger = setup_logging(
        log_level=config.log_level,
        log_file=config.log_file_path if config.log_file_enabled else None
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Gestion du cycle de vie de l'application"""
    # --- Startup ---
    logger.info("🚀 Démarrage de Timetrack API")
    logger.info(f"📦 Store backend: {config.store_backend}")
    if config.store_backend == "sql":
        logger.info(f"📊 Database: {config.database_url.split('@')[-1]}")

    services = build_services(config)
    if config.seed_sample_data:
        seed_sample_data(services.store)

    # Stocker la config et les services dans app.state pour accès dans les endpoints
    app.state.config = config
    app.state.services = services

    yield

    # --- Shutdown ---
    logger.info("🛑 Arrêt de Timetrack API")


# Créer l'application FastAPI
app = FastAPI(
    title="Timetrack API",
    description="API de suivi du temps: saisies d'heures, tableau de statut et facturation par projet",
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc"
)

# Configuration CORS (pour permettre les appels depuis le frontend)
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Inclure les routes API
app.include_router(api_router, prefix="/api")
# Inclure les routes d'authentification
app.include_router(auth_router, prefix="/api", tags=["Authentication"])
# Inclure les routes réservées aux admins
app.include_router(admin_router, prefix="/api")


@app.get("/", tags=["Root"])
def root():
    """Page d'accueil de l'API"""
    return {
        "service": "timetrack-api",
        "version": "1.0.0",
        "status": "operational",
        "documentation": "/docs"
    }


@app.get("/health", tags=["System"])
@app.get("/api/health", tags=["System"])
def health_check(request: Request):
    """Endpoint de santé pour les orchestrateurs (Kubernetes, Docker, etc.)"""
    store = request.app.state.services.store
    return {
        "status": "healthy",
        "service": "timetrack-api",
        "store": request.app.state.config.store_backend,
        "counts": {
            "users": store.users.count(),
            "projects": store.projects.count(),
            "time_logs": store.time_logs.count()
        }
    }


if __name__ == "__main__":
    import uvicorn
    from logging_config import get_uvicorn_log_config

    log_config = get_uvicorn_log_config(log_level=config.log_level)

    uvicorn.run(
        "app:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_config=log_config
    )
