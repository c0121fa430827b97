"""
➡️ But : Définir les formats de sortie de l’API pour les todos.

TodoOut → réponse de l’API (camelCase : dueDate, createdAt, updatedAt)

Les entrées passent par validation.TodoIn (règles métier sur les champs).
"""

from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class TodoOut(BaseModel):
    id: int = Field(examples=[1])
    title: str = Field(examples=["Acheter du lait"])
    description: str
    due_date: str = Field(examples=["2030-01-31"])
    completed: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class MessageOut(BaseModel):
    message: str
