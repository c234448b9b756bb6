"""Auth API routes — register, login, logout, current user."""

from fastapi import APIRouter, Depends, Response, status

from alphasafe.application.services.auth_service import create_access_token
from alphasafe.application.services.user_service import UserService
from alphasafe.config import get_settings
from alphasafe.core.exceptions import UnauthorizedException
from alphasafe.domain.schemas.auth import LoginRequest, RegisterRequest, TokenResponse, UserRead
from alphasafe.interfaces.api.deps import get_current_user
from alphasafe.interfaces.deps import get_user_service

settings = get_settings()
router = APIRouter(prefix="/api/auth", tags=["Auth"])


def _set_session_cookie(response: Response, user: UserRead) -> str:
    token = create_access_token(user.id)
    response.set_cookie(
        key=settings.AUTH_COOKIE_NAME,
        value=token,
        httponly=True,
        secure=settings.ENVIRONMENT == "production",
        samesite="lax",
        max_age=settings.JWT_EXPIRATION_MINUTES * 60,
        path="/",
    )
    return token


@router.post("/register", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def register(body: RegisterRequest, response: Response, service: UserService = Depends(get_user_service)):
    user = service.register(body)
    _set_session_cookie(response, user)
    return user


@router.post("/login", response_model=TokenResponse)
def login(body: LoginRequest, response: Response, service: UserService = Depends(get_user_service)):
    user = service.authenticate(body.email, body.password)
    if not user:
        raise UnauthorizedException("Credenciais inválidas")

    access_token = _set_session_cookie(response, user)
    return TokenResponse(access_token=access_token, user=user)


@router.post("/logout")
def logout(response: Response):
    response.delete_cookie(settings.AUTH_COOKIE_NAME, path="/")
    return {"message": "Sessão terminada"}


@router.get("/user", response_model=UserRead)
def get_me(user: UserRead = Depends(get_current_user)):
    return user
