"""
➡️ But : Centraliser les dépendances réutilisables des routes.

Exemples :

get_todo_service() : crée un TodoService à partir d’une session DB.

get_current_user_id() : vérifie l'access token (cookie ou header Bearer) et renvoie l'id utilisateur.

🔹 Avantages :

Routes plus propres (pas de code dupliqué).

Facile à injecter dans plusieurs endpoints (Depends()).
"""

from typing import Any, Optional

from fastapi import Depends, Query, Request, Security
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlmodel import Session

from app.core.config import Settings
from app.db.session import get_session

from app.db.repositories.users import UserRepository
from app.features.authentication.services import AuthService, TokenService

from app.db.repositories.todos import TodoRepository
from app.features.todos.services import TodoService


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


def _as_int(raw: Optional[str], default: int) -> int:
    try:
        return int(raw) if raw is not None else default
    except ValueError:
        return default


def pagination(
    page: Optional[str] = Query(None, description="Numéro de page (commence à 1)", examples=["1"]),
    limit: Optional[str] = Query(
        None, description=f"Taille de page (ramenée entre 1 et {MAX_PAGE_SIZE})", examples=["10"]
    ),
):
    # Bornes ramenées plutôt que refusées : la liste ne répond jamais 400
    page_number = max(_as_int(page, 1), 1)
    page_size = min(max(_as_int(limit, DEFAULT_PAGE_SIZE), 1), MAX_PAGE_SIZE)
    return {"page": page_number, "limit": page_size}


# -----------------------------
# Repositories
# -----------------------------
def get_user_repository(session: Session = Depends(get_session)) -> UserRepository:
    return UserRepository(session)

def get_todo_repository(session: Session = Depends(get_session)) -> TodoRepository:
    return TodoRepository(session)


# -----------------------------
# Auth
# -----------------------------
def get_token_service(
    request: Request,
    user_repo: UserRepository = Depends(get_user_repository),
) -> TokenService:
    return TokenService(user_repo=user_repo, jwt_settings=request.app.state.jwt_settings)

def get_auth_service(
    user_repo: UserRepository = Depends(get_user_repository),
    tokens: TokenService = Depends(get_token_service),
) -> AuthService:
    return AuthService(user_repo=user_repo, tokens=tokens)


# -----------------------------
# Todos
# -----------------------------
def get_todo_service(repo: TodoRepository = Depends(get_todo_repository)) -> TodoService:
    return TodoService(repo)


# -----------------------------
# Authentication data
# -----------------------------
bearer_scheme = HTTPBearer(auto_error=False)

def get_access_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Security(bearer_scheme),
    settings: Settings = Depends(get_app_settings),
) -> Optional[str]:
    """Cookie `accessToken` en priorité, sinon header `Authorization: Bearer`."""
    token = request.cookies.get(settings.AUTH_ACCESS_COOKIE_NAME)
    if not token and credentials is not None:
        token = credentials.credentials
    return token


def get_current_user_id(
    access_token: Optional[str] = Depends(get_access_token),
    svc: AuthService = Depends(get_auth_service),
) -> str:
    # Absent ou invalide => 401 avant d'atteindre la route
    return svc.current_user_id(access_token)


async def lenient_json_body(request: Request) -> Any:
    """Corps JSON de la requête, ou None s'il est absent ou illisible."""
    try:
        return await request.json()
    except ValueError:
        return None
