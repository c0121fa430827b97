"""
➡️ But : Personnaliser la documentation Swagger/OpenAPI.

custom_openapi(app) modifie le schéma généré par FastAPI pour :

ajouter une description détaillée (conventions d'auth, pagination, erreurs),

centraliser la personnalisation du Swagger.
"""

from fastapi.openapi.utils import get_openapi

def custom_openapi(app):
    if app.openapi_schema:
        return app.openapi_schema
    openapi_schema = get_openapi(
        title=app.title,
        version=app.version,
        description=(
            "API Todo multi-utilisateurs (FastAPI + SQLite).\n\n"
            "### Conventions\n"
            "- Auth : access token en cookie `accessToken` ou header `Authorization: Bearer`.\n"
            "- Rotation : `POST /api/v1/auth/refresh-tokens` lit le cookie `refreshToken`.\n"
            "- Pagination: query params `page` (à partir de 1) & `limit`.\n"
            "- Dates d'échéance au format `YYYY-MM-DD`, strictement dans le futur.\n"
            "- Erreurs : corps `{\"message\": ...}`.\n"
        ),
        routes=app.routes,
        tags=app.openapi_tags,
    )
    app.openapi_schema = openapi_schema
    return app.openapi_schema
