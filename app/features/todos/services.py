"""
➡️ But : Contenir la logique métier des todos : orchestrer le repository, appliquer les règles, signaler les erreurs.

TodoService : valide, attribue les ids, vérifie l'existence avant lecture / modification / suppression.

Lève des erreurs métier (NotFound, Conflict, ValidationError), traduites en HTTP par app.core.errors.
"""

import logging
from typing import Any, List, Optional

from app.core.errors import Conflict, NotFound
from app.db.models.todos import MAX_TODO_ID, Todo
from app.db.repositories.todos import TodoRepository, already_exists_message
from app.features.todos.validation import DEFAULT_TODO_ID, validate_todo

logger = logging.getLogger(__name__)

STATUS_COMPLETED = "completed"
SORT_DUE_DATE = "dueDate"


def not_found_message(todo_id: int) -> str:
    return f"Id: {todo_id} Not Found"


class TodoService:
    def __init__(self, repo: TodoRepository):
        self.repo = repo

    def list(
        self,
        owner_user_id: str,
        *,
        page: int = 1,
        limit: int = 10,
        status: Optional[str] = None,
        sort: Optional[str] = None,
    ) -> List[Todo]:
        """
        Pagine d'abord (ordre d'insertion), puis filtre et trie la page obtenue.
        Le filtre `completed` et le tri par échéance ne portent donc que sur la page.
        """
        # une page très lointaine reste une page vide, pas un débordement SQLite
        offset = min((page - 1) * limit, MAX_TODO_ID)
        items = list(self.repo.list_scoped(owner_user_id, offset, limit))
        if status == STATUS_COMPLETED:
            items = [t for t in items if t.completed]
        if sort == SORT_DUE_DATE:
            # YYYY-MM-DD : l'ordre lexical est l'ordre chronologique
            items.sort(key=lambda t: t.due_date)
        return items

    def get(self, owner_user_id: str, todo_id: int) -> Todo:
        todo = self.repo.get_scoped(owner_user_id, todo_id)
        if not todo:
            raise NotFound(not_found_message(todo_id))
        return todo

    def create(self, owner_user_id: str, payload: Any) -> Todo:
        data = validate_todo(payload)
        todo_id = data.id
        if todo_id == DEFAULT_TODO_ID:
            todo_id = self.repo.next_unused_id(owner_user_id)
        if self.repo.exists(owner_user_id, todo_id):
            raise Conflict(already_exists_message(todo_id))

        todo = self.repo.insert(
            owner_user_id,
            id=todo_id,
            title=data.title,
            description=data.description,
            due_date=data.due_date,
            completed=data.completed,
        )
        logger.info("Todo %s created for user %s", todo.id, owner_user_id)
        return todo

    def update(self, owner_user_id: str, todo_id: int, payload: Any) -> Todo:
        self.get(owner_user_id, todo_id)
        data = validate_todo(payload)
        todo = self.repo.update_scoped(
            owner_user_id,
            todo_id,
            title=data.title,
            description=data.description,
            due_date=data.due_date,
            completed=data.completed,
        )
        if todo is None:
            # supprimé entre la vérification et l'écriture
            raise NotFound(not_found_message(todo_id))
        return todo

    def delete(self, owner_user_id: str, todo_id: int) -> str:
        self.get(owner_user_id, todo_id)
        self.repo.delete_scoped(owner_user_id, todo_id)
        logger.info("Todo %s deleted for user %s", todo_id, owner_user_id)
        return f"Todo with {todo_id} deleted successfully"
