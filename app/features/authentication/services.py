import logging
from typing import Any, Optional, Tuple

from app.core.errors import Conflict, Unauthorized
from app.db.models.users import PublicUser, User
from app.db.repositories.users import USER_EXISTS_MESSAGE, UserRepository
from app.features.authentication.validation import coerce_login, normalize_email, validate_user
from app.security.password import hash_password, verify_password
from app.security.tokens import (
    DecodedToken,
    InvalidToken,
    JWTSettings,
    TokenPair,
    create_access_token,
    create_refresh_token,
    decode_token,
)

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Invalid Credentials"
UNAUTHORIZED_MESSAGE = "Unauthorized request"


class TokenService:
    """
    Émission / vérification des tokens.
    Un seul refresh token actif par utilisateur : issue_pair() écrase celui en base.
    """

    def __init__(self, *, user_repo: UserRepository, jwt_settings: JWTSettings):
        self.user_repo = user_repo
        self.jwt = jwt_settings

    def issue_access_token(self, user_id: str) -> str:
        return create_access_token(user_id=user_id, settings=self.jwt)

    def issue_refresh_token(self, user_id: str) -> str:
        return create_refresh_token(user_id=user_id, settings=self.jwt)

    def issue_pair(self, user_id: str) -> TokenPair:
        access_token = self.issue_access_token(user_id)
        refresh_token = self.issue_refresh_token(user_id)
        self.user_repo.set_refresh_token(user_id, refresh_token)
        return {"accessToken": access_token, "refreshToken": refresh_token}

    def verify(self, token: str, secret: str) -> DecodedToken:
        """Lève InvalidToken (signature, expiration, payload)."""
        return decode_token(token, secret, algorithm=self.jwt.algorithm)

    def _verify_typed(self, token: str, secret: str, typ: str) -> str:
        decoded = self.verify(token, secret)
        if decoded.get("typ") != typ:
            raise InvalidToken(f"Expected a {typ} token")
        return decoded["userId"]

    def verify_access(self, token: str) -> str:
        return self._verify_typed(token, self.jwt.access_secret, "access")

    def verify_refresh(self, token: str) -> str:
        return self._verify_typed(token, self.jwt.refresh_secret, "refresh")


class AuthService:
    """
    Service d'authentification : orchestre le repository utilisateurs + les tokens.
    Ne contient pas d'accès SQL direct et lève des erreurs métier propres.
    """

    def __init__(self, *, user_repo: UserRepository, tokens: TokenService):
        self.user_repo = user_repo
        self.tokens = tokens

    # ---------- Register ----------
    def register(self, payload: Any) -> PublicUser:
        # Doublon détecté avant toute validation : 409 même si le reste du payload est invalide
        raw_email = payload.get("userEmail") if isinstance(payload, dict) else None
        if isinstance(raw_email, str) and self.user_repo.get_by_email(normalize_email(raw_email)):
            raise Conflict(USER_EXISTS_MESSAGE)

        data = validate_user(payload)
        user = self.user_repo.insert(
            name=data.name,
            email=data.email,
            password_hash=hash_password(data.password),
        )
        logger.info("User %s registered", user.id)
        return user

    # ---------- Login ----------
    def login(self, payload: Any) -> Tuple[User, TokenPair]:
        credentials = coerce_login(payload)
        user = self.user_repo.get_by_email(normalize_email(credentials.user_email))
        if not user or not verify_password(credentials.user_password, user.password_hash):
            # Ne pas révéler si l'utilisateur existe
            logger.info("Login rejected")
            raise Unauthorized(INVALID_CREDENTIALS_MESSAGE)

        pair = self.tokens.issue_pair(user.id)
        logger.info("User %s logged in", user.id)
        return user, pair

    # ---------- Refresh (rotation) ----------
    def refresh(self, refresh_token: Optional[str]) -> TokenPair:
        # Toute étape en échec => même 401 opaque ; la raison ne va que dans les logs
        if not refresh_token:
            logger.info("Refresh rejected: no token")
            raise Unauthorized(UNAUTHORIZED_MESSAGE)

        try:
            user_id = self.tokens.verify_refresh(refresh_token)
        except InvalidToken as e:
            logger.info("Refresh rejected: %s", e)
            raise Unauthorized(UNAUTHORIZED_MESSAGE) from e

        user = self.user_repo.get(user_id)
        if not user:
            logger.info("Refresh rejected: unknown user %s", user_id)
            raise Unauthorized(UNAUTHORIZED_MESSAGE)

        if refresh_token != user.refresh_token:
            # réutilisation d'un ancien token, ou token remplacé par un login plus récent
            logger.warning("Refresh rejected: stale token for user %s", user_id)
            raise Unauthorized(UNAUTHORIZED_MESSAGE)

        return self.tokens.issue_pair(user.id)

    # ---------- User id depuis l'access token ----------
    def current_user_id(self, access_token: Optional[str]) -> str:
        if not access_token:
            raise Unauthorized(UNAUTHORIZED_MESSAGE)
        try:
            return self.tokens.verify_access(access_token)
        except InvalidToken as e:
            raise Unauthorized(UNAUTHORIZED_MESSAGE) from e
