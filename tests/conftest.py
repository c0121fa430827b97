from __future__ import annotations

from typing import Callable, Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlmodel import Session

from app.core.config import Settings
from app.main import create_app
from tests._helpers.api import login, register


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        ENV="test",
        DATABASE_URL=f"sqlite:///{tmp_path / 'test.db'}",
        JWT_ACCESS_SECRET="test-access-secret",
        JWT_REFRESH_SECRET="test-refresh-secret",
        LOG_LEVEL="WARNING",
    )


@pytest.fixture
def app(settings: Settings) -> FastAPI:
    return create_app(settings)


@pytest.fixture
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app) as c:
        yield c


@pytest.fixture
def session(app: FastAPI) -> Iterator[Session]:
    with Session(app.state.engine) as s:
        yield s


@pytest.fixture
def make_user(app: FastAPI) -> Iterator[Callable[..., tuple[TestClient, dict]]]:
    """
    Crée un utilisateur, le connecte et renvoie (client dédié, corps du login).
    Chaque client a son propre cookie jar ; le header Bearer est posé par défaut.
    """
    clients: list[TestClient] = []

    def _make(name: str = "jane", email: str = "jane@mail.com") -> tuple[TestClient, dict]:
        c = TestClient(app)
        clients.append(c)
        assert register(c, name=name, email=email).status_code == 201
        resp = login(c, email=email)
        assert resp.status_code == 200, resp.text
        body = resp.json()
        c.headers["Authorization"] = f"Bearer {body['accessToken']}"
        return c, body

    yield _make
    for c in clients:
        c.close()


@pytest.fixture
def user_client(make_user) -> TestClient:
    c, _ = make_user()
    return c
