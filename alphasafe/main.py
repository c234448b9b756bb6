"""FastAPI application — main entry point."""

import structlog
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError

from alphasafe.config import get_settings
from alphasafe.infrastructure.database import engine, Base, SessionLocal
from alphasafe.core.logging import configure_logging
from alphasafe.core.middleware import setup_middleware
from alphasafe.core.exceptions import AppError, global_exception_handler, request_validation_handler

# Import all models so SQLAlchemy knows about them
from alphasafe.domain.models.client import Client  # noqa: F401
from alphasafe.domain.models.intervention import Intervention  # noqa: F401
from alphasafe.domain.models.photo import Photo  # noqa: F401
from alphasafe.domain.models.technician import Technician  # noqa: F401
from alphasafe.domain.models.user import User  # noqa: F401
from alphasafe.domain.models.notification_log import NotificationLog  # noqa: F401

from alphasafe.application.services.user_service import UserService
from alphasafe.infrastructure.repositories.user_repository import SQLAlchemyUserRepository

# Import routers
from alphasafe.interfaces.api.auth import router as auth_router
from alphasafe.interfaces.api.clients import router as clients_router
from alphasafe.interfaces.api.interventions import router as interventions_router
from alphasafe.interfaces.api.interventions import photos_router
from alphasafe.interfaces.api.technicians import router as technicians_router
from alphasafe.interfaces.api.users import router as users_router
from alphasafe.interfaces.api.notifications import router as notifications_router

settings = get_settings()

# Configure logging immediately
configure_logging()
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan — startup and shutdown events."""
    logger.info("Starting AlphaSafe backend...", env=settings.ENVIRONMENT)

    # Create DB tables (dev only; use migrations in production)
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created/verified")

    db = SessionLocal()
    try:
        UserService(SQLAlchemyUserRepository(db), settings).ensure_default_admin()
    finally:
        db.close()

    yield

    logger.info("AlphaSafe backend stopped")


app = FastAPI(
    title="AlphaSafe — Gestão de Intervenções",
    description="API Backend — clientes, intervenções, técnicos e notificações",
    version="1.0.0",
    lifespan=lifespan,
)

# Setup Middleware (Correlation ID, Logging, CORS)
setup_middleware(app)

# Global Exception Handling
app.add_exception_handler(RequestValidationError, request_validation_handler)
app.add_exception_handler(AppError, global_exception_handler)
app.add_exception_handler(Exception, global_exception_handler)

# Include routers
app.include_router(auth_router)
app.include_router(clients_router)
app.include_router(interventions_router)
app.include_router(photos_router)
app.include_router(technicians_router)
app.include_router(users_router)
app.include_router(notifications_router)


@app.get("/")
def root():
    return {
        "name": "AlphaSafe",
        "version": "1.0.0",
        "status": "running",
        "docs": "/docs",
    }


@app.get("/health")
@app.get("/api/health")
def health():
    return {"status": "healthy", "env": settings.ENVIRONMENT}
