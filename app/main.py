"""
➡️ But : assembler toutes les pièces du puzzle.

create_app() crée l’instance FastAPI et configure :

logs, engine SQLAlchemy (porté par app.state), création des tables

CORS (autorisations de qui peut appeler ces API)

titre, version, tags, schéma OpenAPI personnalisé

handlers d'erreurs (réponses {"message": ...})

Inclut les routers (/api/v1/auth, /api/v1/todos).

🔹 Avantages :

Une app isolée par appel (une base par test), aucun singleton global.

Point unique d’exécution : uvicorn app.main:create_app --factory
"""

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.core.config import Settings, build_jwt_settings, get_settings
from app.core.errors import register_exception_handlers
from app.core.logging import configure_logging
from app.core.openapi import custom_openapi
from app.db.session import build_engine, init_db

from app.api.v1.routers import authentication, todos

import uvicorn

logger = logging.getLogger(__name__)

WELCOME_MESSAGE = "Welcome to My Todo Api"


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title=settings.APP_NAME,
        version="0.1.0",
        openapi_tags=[
            {"name": "auth", "description": "Inscription, connexion, rotation des tokens"},
            {"name": "todos", "description": "CRUD des tâches de l'utilisateur connecté"},
        ],
    )

    # Ressources partagées entre requêtes, construites une seule fois ici
    app.state.settings = settings
    app.state.jwt_settings = build_jwt_settings(settings)
    app.state.engine = build_engine(settings)
    init_db(app.state.engine)

    # CORS (ajustez selon vos besoins)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"], allow_credentials=True,
        allow_methods=["*"], allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Routers
    app.include_router(authentication.router, prefix="/api/v1")
    app.include_router(todos.router, prefix="/api/v1")

    @app.get("/", summary="Accueil", include_in_schema=False)
    def welcome():
        return {"message": WELCOME_MESSAGE}

    # Génération du schéma OpenAPI custom (facultatif, mais propre)
    app.openapi = lambda: custom_openapi(app)

    logger.info("%s ready (env=%s)", settings.APP_NAME, settings.ENV)
    return app


if __name__ == "__main__":
    settings = get_settings()
    uvicorn.run(
        "app.main:create_app",
        factory=True,
        host=settings.HOST,
        port=settings.PORT,
        reload=(settings.ENV == "dev"),
    ) # http://localhost:8080
