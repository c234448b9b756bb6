import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("REGISTRATION_WHITELIST", "")
os.environ.setdefault("ADMIN_BILLING_EMAIL", "")
os.environ.setdefault("RESEND_API_KEY", "")
os.environ.setdefault("DEFAULT_ADMIN_EMAIL", "")
os.environ.setdefault("DEFAULT_ADMIN_PASSWORD", "")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from alphasafe.config import Settings
from alphasafe.infrastructure.database import Base
from alphasafe.domain.models.client import Client  # noqa: F401
from alphasafe.domain.models.intervention import Intervention  # noqa: F401
from alphasafe.domain.models.photo import Photo  # noqa: F401
from alphasafe.domain.models.technician import Technician  # noqa: F401
from alphasafe.domain.models.user import User  # noqa: F401
from alphasafe.domain.models.notification_log import NotificationLog  # noqa: F401
from alphasafe.application.services.client_service import ClientService
from alphasafe.application.services.intervention_service import InterventionService
from alphasafe.application.services.technician_service import TechnicianService
from alphasafe.application.services.user_service import UserService
from alphasafe.infrastructure.repositories.client_repository import SQLAlchemyClientRepository
from alphasafe.infrastructure.repositories.intervention_repository import SQLAlchemyInterventionRepository
from alphasafe.infrastructure.repositories.technician_repository import SQLAlchemyTechnicianRepository
from alphasafe.infrastructure.repositories.user_repository import SQLAlchemyUserRepository


class RecordingNotifier:
    def __init__(self):
        self.batches = []

    def notify(self, requests):
        self.batches.append(list(requests))

    @property
    def requests(self):
        return [request for batch in self.batches for request in batch]


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def settings():
    return Settings(
        REGISTRATION_WHITELIST="",
        ADMIN_BILLING_EMAIL="",
        TIMEZONE="Europe/Lisbon",
    )


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def client_repo(db):
    return SQLAlchemyClientRepository(db)


@pytest.fixture
def intervention_repo(db):
    return SQLAlchemyInterventionRepository(db)


@pytest.fixture
def technician_repo(db):
    return SQLAlchemyTechnicianRepository(db)


@pytest.fixture
def user_repo(db):
    return SQLAlchemyUserRepository(db)


@pytest.fixture
def client_service(client_repo):
    return ClientService(client_repo)


@pytest.fixture
def technician_service(technician_repo, settings):
    return TechnicianService(technician_repo, settings)


@pytest.fixture
def user_service(user_repo, settings):
    return UserService(user_repo, settings)


@pytest.fixture
def intervention_service(intervention_repo, client_repo, technician_repo, settings, notifier):
    return InterventionService(intervention_repo, client_repo, technician_repo, settings, notifier)


@pytest.fixture
def sample_client(client_service):
    return client_service.create({"name": "Condomínio Azul", "nif": "123456789", "address": "Rua A, Lisboa"})


def intervention_payload(client_id, **overrides):
    payload = {
        "clientId": client_id,
        "serviceType": ["Alarm"],
        "equipmentModel": "AX-200",
        "serialNumber": "SN-001",
        "technician": "João Silva",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def anyio_backend():
    return "asyncio"
