"""
Application FastAPI de Dracin Stream.

Initialise l'application web avec le Container DI, configure CORS et monte
les routes (proxy brut, API normalisée, état). La passerelle amont est
fermée à l'arrêt pour libérer le pool de connexions.
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from ..container import Container
from ..core.ports.upstream import UpstreamError
from .deps import APP_VERSION, CORS_HEADERS
from .routes.catalog import router as catalog_router
from .routes.health import router as health_router
from .routes.proxy import router as proxy_router


def create_app(container: Optional[Container] = None) -> FastAPI:
    """
    Construit l'application.

    Args:
        container: Container DI à utiliser (un nouveau par défaut)

    Returns:
        Application FastAPI prête à servir
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Expose le Container DI au démarrage et ferme la passerelle à l'arrêt."""
        app.state.container = container or Container()
        settings = app.state.container.config()
        logger.info(
            "Démarrage de Dracin Stream",
            version=APP_VERSION,
            default_provider=settings.default_provider,
        )
        yield
        await app.state.container.gateway().close()

    app = FastAPI(title="Dracin Stream", version=APP_VERSION, lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    @app.exception_handler(UpstreamError)
    async def upstream_error_handler(request: Request, exc: UpstreamError) -> JSONResponse:
        """Échec de transport non absorbé : 500 {"error": <message>}."""
        logger.error("Erreur amont non geree: {}", exc, path=request.url.path)
        return JSONResponse({"error": str(exc)}, status_code=500, headers=CORS_HEADERS)

    app.include_router(health_router)
    app.include_router(proxy_router)
    app.include_router(catalog_router)
    return app


app = create_app()
