import pytest

from alphasafe.application.services.user_service import UserService
from alphasafe.config import Settings
from alphasafe.core.exceptions import (
    DuplicateEmailException,
    EmailNotWhitelistedException,
    EntityNotFoundException,
    ValidationException,
)
from alphasafe.domain.models.user import User

REGISTRATION = {"email": "Rita@AlphaSafe.pt", "password": "segredo123", "firstName": "Rita", "lastName": "Sousa"}


def whitelisted_service(user_repo, emails):
    return UserService(user_repo, Settings(REGISTRATION_WHITELIST=emails))


def test_register_lowercases_email_and_forces_technician_role(user_service):
    user = user_service.register({**REGISTRATION, "role": "admin"})

    assert user.email == "rita@alphasafe.pt"
    assert user.role == "technician"


def test_whitelist_and_duplicate_are_distinct_rejections(user_repo):
    service = whitelisted_service(user_repo, " RITA@alphasafe.pt , outro@alphasafe.pt")

    with pytest.raises(EmailNotWhitelistedException) as not_listed:
        service.register({**REGISTRATION, "email": "intruso@alphasafe.pt"})
    assert not_listed.value.status_code == 403
    assert not_listed.value.kind == "not_permitted"

    service.register(REGISTRATION)

    with pytest.raises(DuplicateEmailException) as duplicate:
        service.register(REGISTRATION)
    assert duplicate.value.status_code == 409
    assert duplicate.value.kind == "conflict"


def test_empty_whitelist_allows_anyone(user_service):
    assert user_service.register({**REGISTRATION, "email": "qualquer@exemplo.pt"}).id


def test_registration_rejects_short_password(user_service):
    with pytest.raises(ValidationException):
        user_service.register({**REGISTRATION, "password": "1234567"})


def test_no_password_in_any_read_path(user_service, db):
    registered = user_service.register(REGISTRATION)
    created = user_service.create(
        {"email": "admin@alphasafe.pt", "password": "x", "firstName": "Ad", "lastName": "Min", "role": "admin"}
    )
    reads = [
        registered,
        created,
        user_service.get(registered.id),
        user_service.update(registered.id, {"firstName": "Rita Maria"}),
        user_service.authenticate("rita@alphasafe.pt", "segredo123"),
        *user_service.list(),
    ]

    for user in reads:
        dumped = user.model_dump(by_alias=True)
        assert "password" not in dumped
        assert "passwordHash" not in dumped
        assert "password_hash" not in user.model_dump()

    stored = db.query(User).filter(User.id == registered.id).one()
    assert stored.password_hash != "segredo123"


def test_admin_create_rejects_duplicate(user_service):
    user_service.register(REGISTRATION)
    with pytest.raises(DuplicateEmailException):
        user_service.create({"email": "rita@alphasafe.pt", "password": "x", "firstName": "R", "lastName": "S"})


def test_update_rehashes_password(user_service):
    user = user_service.register(REGISTRATION)
    user_service.update(user.id, {"password": "nova-palavra"})

    assert user_service.authenticate("rita@alphasafe.pt", "segredo123") is None
    assert user_service.authenticate("rita@alphasafe.pt", "nova-palavra").id == user.id


def test_authenticate_unknown_email(user_service):
    assert user_service.authenticate("ninguem@alphasafe.pt", "whatever") is None


def test_delete_user(user_service):
    user = user_service.register(REGISTRATION)
    user_service.delete(user.id)
    with pytest.raises(EntityNotFoundException):
        user_service.get(user.id)


def test_default_admin_seeded_only_once(user_repo):
    service = UserService(
        user_repo,
        Settings(DEFAULT_ADMIN_EMAIL="Admin@AlphaSafe.pt", DEFAULT_ADMIN_PASSWORD="admin-pass"),
    )

    admin = service.ensure_default_admin()
    assert admin.role == "admin"
    assert admin.email == "admin@alphasafe.pt"
    assert service.ensure_default_admin() is None
