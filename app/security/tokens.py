import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import TypedDict

from jose import jwt, JWTError

# ==========================================================
# 🔧 Configuration : paramètres de génération/validation JWT
# ==========================================================

@dataclass(frozen=True)
class JWTSettings:
    """
    Configuration des tokens JWT.

    - `access_secret` : clé secrète pour signer/valider les access tokens
    - `refresh_secret` : clé secrète distincte pour les refresh tokens
    - `algorithm` : algo de signature (HS256 recommandé)
    - `access_ttl` : durée de vie d’un access token
    - `refresh_ttl` : durée de vie d’un refresh token
    """
    access_secret: str
    refresh_secret: str
    algorithm: str = "HS256"
    access_ttl: timedelta = timedelta(minutes=15)
    refresh_ttl: timedelta = timedelta(days=30)


class InvalidToken(Exception):
    """Signature invalide, token expiré, illisible ou sans `userId`."""


# ==========================================================
# 🧱 Types
# ==========================================================

class TokenPair(TypedDict):
    accessToken: str
    refreshToken: str

class DecodedToken(TypedDict, total=False):
    userId: str         # identifiant utilisateur
    typ: str            # "access" | "refresh"
    jti: str
    iat: int
    exp: int


# ==========================================================
# 🧩 Fonctions utilitaires
# ==========================================================

def _now() -> datetime:
    """Renvoie l'heure UTC actuelle."""
    return datetime.now(timezone.utc)

def new_jti() -> str:
    """Crée un identifiant unique pour un token."""
    return str(uuid.uuid4())


# ==========================================================
# 🎟️ Génération des tokens
# ==========================================================

def _encode(*, user_id: str, typ: str, secret: str, ttl: timedelta, algorithm: str) -> str:
    now = _now()
    payload: DecodedToken = {
        "userId": user_id,
        "typ": typ,
        "jti": new_jti(),
        "iat": int(now.timestamp()),
        "exp": int((now + ttl).timestamp()),
    }
    return jwt.encode(payload, secret, algorithm=algorithm)


def create_access_token(*, user_id: str, settings: JWTSettings) -> str:
    """
    Crée un access token JWT court (par défaut 15 min).
    """
    return _encode(
        user_id=user_id,
        typ="access",
        secret=settings.access_secret,
        ttl=settings.access_ttl,
        algorithm=settings.algorithm,
    )


def create_refresh_token(*, user_id: str, settings: JWTSettings) -> str:
    """
    Crée un refresh token JWT long (par défaut 30 jours).
    Le token complet est stocké côté serveur (un seul actif par utilisateur).
    """
    return _encode(
        user_id=user_id,
        typ="refresh",
        secret=settings.refresh_secret,
        ttl=settings.refresh_ttl,
        algorithm=settings.algorithm,
    )


# ==========================================================
# 🔍 Décodage / Validation
# ==========================================================

def decode_token(token: str, secret: str, *, algorithm: str = "HS256") -> DecodedToken:
    """
    Décode et valide un token JWT (signature + expiration).
    Lève InvalidToken en cas de signature invalide, token expiré ou payload incomplet.
    """
    try:
        decoded = jwt.decode(
            token,
            secret,
            algorithms=[algorithm],
            options={"verify_aud": False},
        )
    except JWTError as e:
        raise InvalidToken(str(e)) from e

    if not decoded.get("userId"):
        raise InvalidToken("Missing userId claim")
    return decoded  # type: ignore[return-value]
