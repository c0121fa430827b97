"""
➡️ But : Définir la structure des tables de la base (ORM).

Représente les todos. L'`id` exposé est unique par utilisateur seulement :
la clé technique `row_id` (auto-incrément) porte l'ordre d'insertion,
la contrainte (owner_user_id, id) garantit l'espace de noms par utilisateur.
"""

from typing import Optional

from sqlmodel import Field
from sqlalchemy import UniqueConstraint

from .base import TimestampedModelDB

# Plus grand entier stockable dans une colonne INTEGER SQLite
MAX_TODO_ID = 2**63 - 1


class Todo(TimestampedModelDB, table=True):
    __table_args__ = (
        UniqueConstraint("owner_user_id", "id", name="uq_todo_owner_id"),
    )

    row_id: Optional[int] = Field(default=None, primary_key=True)
    id: int = Field(nullable=False)
    owner_user_id: str = Field(foreign_key="user.id", index=True)

    title: str
    description: str = ""
    due_date: str  # YYYY-MM-DD
    completed: bool = Field(default=False, nullable=False)
