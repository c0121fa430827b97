"""
➡️ But : Valider les payloads todo avant qu'ils n'atteignent le repository.

validate_todo() est une fonction pure : elle ne touche pas la base et
n'attribue jamais d'id. Un id absent vaut DEFAULT_TODO_ID (1), ce qui
signifie « attribuer un nouvel id » ; c'est le service qui s'en charge.

La date d'échéance est revalidée à chaque écriture (création ET mise à jour) :
elle doit être strictement postérieure à la date du jour (UTC).
"""

import re
from datetime import date, datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic_core import PydanticCustomError

from app.core.errors import ValidationError
from app.db.models.todos import MAX_TODO_ID

DEFAULT_TODO_ID = 1
TITLE_MIN_LENGTH = 5
TITLE_MAX_LENGTH = 50
DESCRIPTION_MAX_LENGTH = 1000
DUE_DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}")


def _today() -> date:
    return datetime.now(timezone.utc).date()


class TodoIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int = DEFAULT_TODO_ID
    title: str
    description: str
    due_date: str = Field(alias="dueDate")
    completed: bool = False

    @field_validator("id")
    @classmethod
    def _positive_id(cls, value: int) -> int:
        if value < 1:
            raise PydanticCustomError("id_positive", "ID must be a positive integer")
        if value > MAX_TODO_ID:
            raise PydanticCustomError("id_too_large", f"ID must be at most {MAX_TODO_ID}")
        return value

    @field_validator("title")
    @classmethod
    def _title_length(cls, value: str) -> str:
        if len(value) < TITLE_MIN_LENGTH:
            raise PydanticCustomError(
                "title_too_short", f"Title must be at least {TITLE_MIN_LENGTH} characters long"
            )
        if len(value) > TITLE_MAX_LENGTH:
            raise PydanticCustomError(
                "title_too_long", f"Title must be at most {TITLE_MAX_LENGTH} characters long"
            )
        return value

    @field_validator("description")
    @classmethod
    def _description_length(cls, value: str) -> str:
        if len(value) > DESCRIPTION_MAX_LENGTH:
            raise PydanticCustomError(
                "description_too_long",
                f"Description must be at most {DESCRIPTION_MAX_LENGTH} characters long",
            )
        return value

    @field_validator("due_date")
    @classmethod
    def _future_due_date(cls, value: str, info: ValidationInfo) -> str:
        if not DUE_DATE_PATTERN.fullmatch(value):
            raise PydanticCustomError(
                "due_date_format", "Due_date should be in the format 'YYYY-MM-DD'"
            )
        try:
            due = date.fromisoformat(value)
        except ValueError:
            raise PydanticCustomError(
                "due_date_invalid", "Due_date should be a valid calendar date"
            ) from None

        today = (info.context or {}).get("today") or _today()
        if due <= today:
            raise PydanticCustomError(
                "due_date_past", "Due_date should be greater than today's date"
            )
        return value


def validate_todo(payload: Any, *, today: Optional[date] = None) -> TodoIn:
    """
    Valide un payload todo (camelCase) et renvoie un TodoIn.
    Lève ValidationError avec toutes les erreurs `champ: raison` jointes par ", ".
    `today` permet de figer la date de référence (tests).
    """
    try:
        return TodoIn.model_validate(payload, context={"today": today})
    except PydanticValidationError as exc:
        raise ValidationError.from_errors(exc.errors()) from exc
