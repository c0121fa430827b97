"""
➡️ But : Définir la structure des tables de la base (ORM).

Représente les utilisateurs : identité, hash du mot de passe et refresh token courant.

Un seul refresh token actif par utilisateur : en émettre un nouveau écrase l'ancien.
"""

from uuid import uuid4

from sqlmodel import Field, SQLModel

from .base import TimestampedModelDB


def new_user_id() -> str:
    return uuid4().hex


class User(TimestampedModelDB, table=True):
    id: str = Field(default_factory=new_user_id, primary_key=True)
    name: str
    email: str = Field(index=True, unique=True)
    password_hash: str
    refresh_token: str = Field(default="")


class PublicUser(SQLModel):
    """Projection sans hash ni refresh token (jamais exposés)."""
    id: str
    name: str
    email: str
