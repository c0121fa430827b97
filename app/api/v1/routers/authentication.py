from fastapi import APIRouter, Body, Depends, Request, Response, status
from typing import Any, Dict

from app.api.v1.dependencies import (
    get_app_settings,
    get_auth_service,
    get_current_user_id,
    lenient_json_body,
)
from app.core.config import Settings
from app.features.authentication.services import AuthService
from app.features.authentication.schemas import (
    LoginOut,
    MessageOut,
    TokenPairOut,
    UserOut,
)
from app.security.tokens import TokenPair

router = APIRouter(
    prefix="/auth",
    tags=["auth"],
    responses={401: {"description": "Unauthorized"}},
)

# -----------------------------
# Cookies
# -----------------------------
def _set_auth_cookies(response: Response, settings: Settings, pair: TokenPair) -> None:
    for key, value in (
        (settings.AUTH_ACCESS_COOKIE_NAME, pair["accessToken"]),
        (settings.AUTH_REFRESH_COOKIE_NAME, pair["refreshToken"]),
    ):
        response.set_cookie(
            key=key,
            value=value,
            httponly=True,
            samesite=settings.AUTH_COOKIE_SAMESITE,
            secure=settings.AUTH_COOKIE_SECURE,
            max_age=settings.AUTH_COOKIE_MAX_AGE,
            path=settings.AUTH_COOKIE_PATH,
        )

def _clear_auth_cookies(response: Response, settings: Settings) -> None:
    for key in (settings.AUTH_ACCESS_COOKIE_NAME, settings.AUTH_REFRESH_COOKIE_NAME):
        response.delete_cookie(
            key=key,
            path=settings.AUTH_COOKIE_PATH,
            secure=settings.AUTH_COOKIE_SECURE,
            httponly=True,
            samesite=settings.AUTH_COOKIE_SAMESITE,
        )

# -----------------------------
# Register
# -----------------------------
@router.post(
    "/register",
    summary="Créer un compte",
    status_code=status.HTTP_201_CREATED,
    response_model=UserOut,
    responses={
        400: {"description": "Payload invalide"},
        409: {"description": "Email déjà utilisé"},
    },
)
def register(
    payload: Dict[str, Any] = Body(
        ...,
        examples=[{"userName": "jane", "userEmail": "jane@mail.com", "userPassword": "s3cretpassword"}],
    ),
    svc: AuthService = Depends(get_auth_service),
):
    user = svc.register(payload)
    return UserOut(user_id=user.id, user_name=user.name, user_email=user.email)

# -----------------------------
# Login
# -----------------------------
@router.post(
    "/login",
    summary="Se connecter",
    description=(
        "Retourne un couple access/refresh, aussi posés en cookies httpOnly. "
        "Tout échec, y compris un corps absent ou mal formé, répond 401."
    ),
    response_model=LoginOut,
    openapi_extra={
        "requestBody": {
            "content": {
                "application/json": {
                    "example": {"userEmail": "jane@mail.com", "userPassword": "s3cretpassword"},
                },
            },
        },
    },
)
def login(
    response: Response,
    payload: Any = Depends(lenient_json_body),
    svc: AuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_app_settings),
):
    user, pair = svc.login(payload)
    _set_auth_cookies(response, settings, pair)
    return LoginOut(
        logged_in_user=UserOut(user_id=user.id, user_name=user.name, user_email=user.email),
        access_token=pair["accessToken"],
        refresh_token=pair["refreshToken"],
    )

# -----------------------------
# Logout
# -----------------------------
@router.post(
    "/logout",
    summary="Se déconnecter",
    description="Efface les cookies. Le refresh token stocké côté serveur n'est pas révoqué.",
    response_model=MessageOut,
)
def logout(
    response: Response,
    _user_id: str = Depends(get_current_user_id),
    settings: Settings = Depends(get_app_settings),
):
    _clear_auth_cookies(response, settings)
    return MessageOut(message="User logged out")

# -----------------------------
# Refresh (rotation)
# -----------------------------
@router.post(
    "/refresh-tokens",
    summary="Renouveler les tokens (rotation)",
    description="Lit le refresh token dans le cookie httpOnly ; il doit être le dernier émis pour l'utilisateur.",
    response_model=TokenPairOut,
)
def refresh_tokens(
    request: Request,
    response: Response,
    svc: AuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_app_settings),
):
    pair = svc.refresh(request.cookies.get(settings.AUTH_REFRESH_COOKIE_NAME))
    # Met à jour les cookies httpOnly (rotation)
    _set_auth_cookies(response, settings, pair)
    return TokenPairOut(access_token=pair["accessToken"], refresh_token=pair["refreshToken"])
