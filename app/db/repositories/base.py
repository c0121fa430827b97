from typing import Any, Generic, Optional, Type, TypeVar
from sqlmodel import SQLModel, Session

ModelT = TypeVar("ModelT", bound=SQLModel)

class BaseRepository(Generic[ModelT]):
    """
    Accès générique à une table (User, Todo) par clé primaire.

    👉 Aucune règle métier : unicité, portée par utilisateur et messages d'erreur
       vivent dans les repositories concrets.
    👉 Chaque écriture est validée immédiatement : une requête HTTP = au plus une écriture.
    """

    model: Type[ModelT]

    def __init__(self, session: Session):
        self.session = session

    def get(self, pk: Any) -> Optional[ModelT]:
        return self.session.get(self.model, pk)

    def _save(self, entity: ModelT) -> ModelT:
        self.session.add(entity)
        self.session.commit()
        self.session.refresh(entity)
        return entity

    def create(self, **fields: Any) -> ModelT:
        return self._save(self.model(**fields))

    def update(self, entity: ModelT, **changes: Any) -> ModelT:
        for key, value in changes.items():
            setattr(entity, key, value)
        return self._save(entity)

    def delete(self, entity: ModelT) -> None:
        self.session.delete(entity)
        self.session.commit()
