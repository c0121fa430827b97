"""
➡️ But : Hasher et vérifier les mots de passe (jamais stockés en clair).

bcrypt via passlib : hash lent, salé, adaptatif.
"""

from passlib.context import CryptContext

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(raw_password: str) -> str:
    """Hash un mot de passe en clair avec bcrypt."""
    return pwd_context.hash(raw_password)


def verify_password(raw_password: str, hashed_password: str) -> bool:
    """Vérifie qu'un mot de passe en clair correspond au hash stocké."""
    return pwd_context.verify(raw_password, hashed_password)
