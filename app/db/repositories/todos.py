"""
➡️ But : Encapsuler toutes les opérations de base de données sur les todos.

Toutes les méthodes sont scopées par `owner_user_id` : un utilisateur ne voit
jamais les todos d'un autre, et les ids ne sont uniques que par utilisateur.
"""

from typing import Any, Optional, Sequence

from sqlmodel import select

from app.core.errors import Conflict
from app.db.models.base import utcnow
from app.db.models.todos import MAX_TODO_ID, Todo
from app.db.repositories.base import BaseRepository

# Champs remplacés en bloc par update()
UPDATABLE_FIELDS = ("title", "description", "due_date", "completed")


def already_exists_message(todo_id: int) -> str:
    return f"Id: {todo_id} Already Exist"


class TodoRepository(BaseRepository[Todo]):
    model = Todo

    def _scoped(self, owner_user_id: str):
        return select(self.model).where(self.model.owner_user_id == owner_user_id)

    def ids(self, owner_user_id: str) -> set[int]:
        rows = self.session.exec(
            select(self.model.id).where(self.model.owner_user_id == owner_user_id)
        ).all()
        return set(rows)

    def next_unused_id(self, owner_user_id: str) -> int:
        """Plus petit entier positif non utilisé par cet utilisateur."""
        used = self.ids(owner_user_id)
        candidate = 1
        while candidate in used:
            candidate += 1
        return candidate

    def exists(self, owner_user_id: str, todo_id: int) -> bool:
        return self.get_scoped(owner_user_id, todo_id) is not None

    def get_scoped(self, owner_user_id: str, todo_id: int) -> Optional[Todo]:
        if not 0 < todo_id <= MAX_TODO_ID:
            # hors plage : aucun todo ne peut porter cet id
            return None
        return self.session.exec(
            self._scoped(owner_user_id).where(self.model.id == todo_id)
        ).first()

    def list_scoped(self, owner_user_id: str, offset: int, limit: int) -> Sequence[Todo]:
        """Page de todos dans l'ordre d'insertion."""
        statement = (
            self._scoped(owner_user_id)
            .order_by(self.model.row_id)
            .offset(offset)
            .limit(limit)
        )
        return self.session.exec(statement).all()

    def insert(self, owner_user_id: str, *, id: int, **fields: Any) -> Todo:
        if self.exists(owner_user_id, id):
            raise Conflict(already_exists_message(id))
        return self.create(owner_user_id=owner_user_id, id=id, **fields)

    def update_scoped(self, owner_user_id: str, todo_id: int, **fields: Any) -> Optional[Todo]:
        """
        Remplace title/description/due_date/completed et rafraîchit updated_at.
        Ne fait rien si le todo n'appartient pas à l'utilisateur (le service vérifie avant).
        """
        todo = self.get_scoped(owner_user_id, todo_id)
        if todo is None:
            return None
        changes = {name: fields[name] for name in UPDATABLE_FIELDS if name in fields}
        changes["updated_at"] = utcnow()
        return self.update(todo, **changes)

    def delete_scoped(self, owner_user_id: str, todo_id: int) -> None:
        todo = self.get_scoped(owner_user_id, todo_id)
        if todo is not None:
            self.delete(todo)
