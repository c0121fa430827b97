"""
➡️ But : Encapsuler toutes les opérations de base de données sur les utilisateurs.

UserRepository : lookup par id / email, insertion, mise à jour du refresh token.

Ne contient aucune logique métier, juste de la persistance.
"""

from __future__ import annotations

from typing import Optional
from sqlmodel import select

from app.core.errors import Conflict
from app.db.models.base import utcnow
from app.db.models.users import PublicUser, User
from app.db.repositories.base import BaseRepository

USER_EXISTS_MESSAGE = "User Already Exist"


class UserRepository(BaseRepository[User]):
    """
    Repository pour la table User.
    Hérite du CRUD générique de BaseRepository.
    """
    model = User

    def get_by_email(self, email: str) -> Optional[User]:
        """Retourne un utilisateur par son email."""
        return self.session.exec(
            select(self.model).where(self.model.email == email)
        ).first()

    def insert(self, *, name: str, email: str, password_hash: str) -> PublicUser:
        """
        Crée l'utilisateur et renvoie sa projection publique.
        L'unicité de l'email est vérifiée avant l'insertion (pas atomique).
        """
        if self.get_by_email(email) is not None:
            raise Conflict(USER_EXISTS_MESSAGE)
        user = self.create(name=name, email=email, password_hash=password_hash)
        return PublicUser(id=user.id, name=user.name, email=user.email)

    def set_refresh_token(self, user_id: str, token: str) -> None:
        user = self.get(user_id)
        if user is None:
            return
        self.update(user, refresh_token=token, updated_at=utcnow())
