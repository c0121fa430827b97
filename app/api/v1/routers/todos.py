"""
➡️ But : Définir les endpoints de l’API.

C’est la couche la plus proche du web :

Réceptionne les requêtes HTTP (GET, POST, PUT, DELETE…)

Appelle le service correspondant, toujours avec l'id de l'utilisateur authentifié

Retourne les schémas de sortie (response_model)

🔹 Avantages :

Automatiquement documentée dans Swagger.

Isolation totale du reste du code : les routes ne contiennent ni SQL ni logique métier.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, Query, status
from app.api.v1.dependencies import get_current_user_id, get_todo_service, pagination
from app.features.todos.schemas import MessageOut, TodoOut
from app.features.todos.services import TodoService

router = APIRouter(
    prefix="/todos",
    tags=["todos"],
    responses={
        401: {"description": "Unauthorized"},
        404: {"description": "Not Found"},
    },
)

_TODO_EXAMPLE = {
    "title": "Acheter du lait",
    "description": "Demi-écrémé",
    "dueDate": "2030-01-31",
    "completed": False,
}

@router.get(
    "",
    summary="Lister les todos",
    description=(
        "Retourne une page de tâches (ordre d'insertion). "
        "`status=completed` et `sort=dueDate` s'appliquent à la page obtenue ; "
        "toute autre valeur est ignorée."
    ),
    response_model=List[TodoOut],
)
def list_todos(
    p=Depends(pagination),
    todo_status: Optional[str] = Query(None, alias="status", examples=["completed"]),
    sort: Optional[str] = Query(None, examples=["dueDate"]),
    user_id: str = Depends(get_current_user_id),
    svc: TodoService = Depends(get_todo_service),
):
    return svc.list(user_id, status=todo_status, sort=sort, **p)

@router.post(
    "",
    summary="Créer un todo",
    description="Sans `id` (ou avec id=1), le plus petit id libre de l'utilisateur est attribué.",
    status_code=status.HTTP_201_CREATED,
    response_model=TodoOut,
    responses={400: {"description": "Payload invalide"}, 409: {"description": "Id déjà utilisé"}},
)
def create_todo(
    payload: Dict[str, Any] = Body(..., examples=[_TODO_EXAMPLE]),
    user_id: str = Depends(get_current_user_id),
    svc: TodoService = Depends(get_todo_service),
):
    return svc.create(user_id, payload)

@router.get(
    "/{todo_id}",
    summary="Récupérer un todo",
    response_model=TodoOut,
)
def get_todo(
    todo_id: int,
    user_id: str = Depends(get_current_user_id),
    svc: TodoService = Depends(get_todo_service),
):
    return svc.get(user_id, todo_id)

@router.put(
    "/{todo_id}",
    summary="Remplacer un todo",
    response_model=TodoOut,
    responses={400: {"description": "Payload invalide"}},
)
def update_todo(
    todo_id: int,
    payload: Dict[str, Any] = Body(..., examples=[_TODO_EXAMPLE]),
    user_id: str = Depends(get_current_user_id),
    svc: TodoService = Depends(get_todo_service),
):
    return svc.update(user_id, todo_id, payload)

@router.delete(
    "/{todo_id}",
    summary="Supprimer un todo",
    response_model=MessageOut,
)
def delete_todo(
    todo_id: int,
    user_id: str = Depends(get_current_user_id),
    svc: TodoService = Depends(get_todo_service),
):
    return MessageOut(message=svc.delete(user_id, todo_id))
