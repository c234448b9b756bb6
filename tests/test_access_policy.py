from datetime import timedelta

import pytest

from alphasafe.application.access_policy import require_authenticated, require_role
from alphasafe.application.services.auth_service import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)
from alphasafe.core.exceptions import ForbiddenException, UnauthorizedException
from alphasafe.domain.enums import UserRole
from alphasafe.domain.schemas.auth import UserRead


def user(role):
    return UserRead(id=1, email="a@alphasafe.pt", role=role)


def test_anonymous_is_unauthorized():
    with pytest.raises(UnauthorizedException):
        require_authenticated(None)
    with pytest.raises(UnauthorizedException):
        require_role(None, UserRole.ADMIN)


def test_wrong_role_is_forbidden():
    with pytest.raises(ForbiddenException) as exc:
        require_role(user("technician"), UserRole.ADMIN)
    assert exc.value.status_code == 403


def test_matching_role_passes():
    admin = user("admin")
    assert require_role(admin, UserRole.ADMIN) is admin
    assert require_authenticated(admin) is admin


def test_token_carries_only_the_user_id():
    token = create_access_token(42)
    assert decode_access_token(token) == 42


def test_expired_or_tampered_tokens_are_rejected():
    assert decode_access_token(create_access_token(1, expires_delta=timedelta(seconds=-1))) is None
    assert decode_access_token(create_access_token(1) + "x") is None
    assert decode_access_token("garbage") is None


def test_password_hashing():
    hashed = hash_password("segredo123")
    assert hashed != "segredo123"
    assert verify_password("segredo123", hashed)
    assert not verify_password("errado", hashed)
    assert not verify_password("segredo123", "")
