"""
API Dependencies.
"""

from fastapi import BackgroundTasks, Depends
from sqlalchemy.orm import Session

from alphasafe.application.services.client_service import ClientService
from alphasafe.application.services.intervention_service import InterventionService
from alphasafe.application.services.notification_service import BackgroundTaskNotifier, Notifier
from alphasafe.application.services.technician_service import TechnicianService
from alphasafe.application.services.user_service import UserService
from alphasafe.config import Settings, get_settings
from alphasafe.domain.repositories.client_repository import ClientRepository
from alphasafe.domain.repositories.intervention_repository import InterventionRepository
from alphasafe.domain.repositories.technician_repository import TechnicianRepository
from alphasafe.domain.repositories.user_repository import UserRepository
from alphasafe.infrastructure.database import get_db
from alphasafe.infrastructure.repositories.client_repository import SQLAlchemyClientRepository
from alphasafe.infrastructure.repositories.intervention_repository import SQLAlchemyInterventionRepository
from alphasafe.infrastructure.repositories.technician_repository import SQLAlchemyTechnicianRepository
from alphasafe.infrastructure.repositories.user_repository import SQLAlchemyUserRepository


def get_client_repository(db: Session = Depends(get_db)) -> ClientRepository:
    """Get client repository instance."""
    return SQLAlchemyClientRepository(db)


def get_intervention_repository(db: Session = Depends(get_db)) -> InterventionRepository:
    """Get intervention repository instance."""
    return SQLAlchemyInterventionRepository(db)


def get_technician_repository(db: Session = Depends(get_db)) -> TechnicianRepository:
    """Get technician repository instance."""
    return SQLAlchemyTechnicianRepository(db)


def get_user_repository(db: Session = Depends(get_db)) -> UserRepository:
    """Get user repository instance."""
    return SQLAlchemyUserRepository(db)


def get_notifier(background_tasks: BackgroundTasks) -> Notifier:
    return BackgroundTaskNotifier(background_tasks)


def get_client_service(repo: ClientRepository = Depends(get_client_repository)) -> ClientService:
    return ClientService(repo)


def get_intervention_service(
    repo: InterventionRepository = Depends(get_intervention_repository),
    client_repo: ClientRepository = Depends(get_client_repository),
    technician_repo: TechnicianRepository = Depends(get_technician_repository),
    notifier: Notifier = Depends(get_notifier),
    settings: Settings = Depends(get_settings),
) -> InterventionService:
    return InterventionService(repo, client_repo, technician_repo, settings, notifier)


def get_technician_service(
    repo: TechnicianRepository = Depends(get_technician_repository),
    settings: Settings = Depends(get_settings),
) -> TechnicianService:
    return TechnicianService(repo, settings)


def get_user_service(
    repo: UserRepository = Depends(get_user_repository),
    settings: Settings = Depends(get_settings),
) -> UserService:
    return UserService(repo, settings)
