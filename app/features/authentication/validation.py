"""
➡️ But : Valider les payloads d'inscription avant hash et insertion.

validate_user() : nom (≤ 10 caractères), email bien formé, mot de passe (≥ 8 caractères).
L'unicité de l'email est vérifiée séparément, par le service puis le repository.

normalize_email() applique la même normalisation que EmailStr (domaine en minuscules),
pour que l'inscription, la détection de doublon et la connexion comparent la même forme.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, EmailStr, Field, TypeAdapter, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic_core import PydanticCustomError

from app.core.errors import ValidationError
from app.features.authentication.schemas import LoginIn

USER_NAME_MAX_LENGTH = 10
PASSWORD_MIN_LENGTH = 8

_email_adapter = TypeAdapter(EmailStr)


class UserIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(alias="userName")
    email: EmailStr = Field(alias="userEmail")
    password: str = Field(alias="userPassword")

    @field_validator("name")
    @classmethod
    def _name_length(cls, value: str) -> str:
        if len(value) > USER_NAME_MAX_LENGTH:
            raise PydanticCustomError(
                "user_name_too_long",
                f"UserName must contain at most {USER_NAME_MAX_LENGTH} character(s)",
            )
        return value

    @field_validator("password")
    @classmethod
    def _password_length(cls, value: str) -> str:
        if len(value) < PASSWORD_MIN_LENGTH:
            raise PydanticCustomError(
                "password_too_short",
                f"Password must contain at least {PASSWORD_MIN_LENGTH} character(s)",
            )
        return value


def validate_user(payload: Any) -> UserIn:
    try:
        return UserIn.model_validate(payload)
    except PydanticValidationError as exc:
        raise ValidationError.from_errors(exc.errors()) from exc


def normalize_email(raw: str) -> str:
    """Forme stockée d'un email ; une adresse mal formée est rendue telle quelle."""
    try:
        return _email_adapter.validate_python(raw)
    except PydanticValidationError:
        return raw


def coerce_login(payload: Any) -> LoginIn:
    """
    Lit un corps de connexion quelconque.
    Corps absent, non-objet ou champs non-textes => identifiants vides (donc 401), jamais 400.
    """
    fields = payload if isinstance(payload, dict) else {}
    email = fields.get("userEmail")
    password = fields.get("userPassword")
    return LoginIn(
        user_email=email if isinstance(email, str) else "",
        user_password=password if isinstance(password, str) else "",
    )
