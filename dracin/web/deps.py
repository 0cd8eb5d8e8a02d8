"""
Dépendances partagées de l'application web.

Fournit l'accès au Container DI (stocké dans app.state par le lifespan),
les en-têtes CORS du proxy et la version de l'application.
"""

import tomllib
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

from fastapi import Request

from ..container import Container
from ..core.ports.upstream import IUpstreamGateway
from ..services.catalog import CatalogService

_WEB_DIR = Path(__file__).parent
_PROJECT_ROOT = _WEB_DIR.parent.parent

# En-têtes ajoutés à chaque réponse du proxy (succès comme erreur)
CORS_HEADERS = {"Access-Control-Allow-Origin": "*"}

# Réponse au preflight OPTIONS
PREFLIGHT_HEADERS = {
    **CORS_HEADERS,
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


def _read_version() -> str:
    """Version lue depuis pyproject.toml, ou depuis les métadonnées installées."""
    pyproject = _PROJECT_ROOT / "pyproject.toml"
    if pyproject.exists():
        with open(pyproject, "rb") as f:
            return tomllib.load(f)["project"]["version"]
    try:
        return version("dracin-stream")
    except PackageNotFoundError:
        return "0.0.0"


APP_VERSION = _read_version()


def get_container(request: Request) -> Container:
    """Container DI initialisé au démarrage de l'application."""
    return request.app.state.container


def get_gateway(request: Request) -> IUpstreamGateway:
    """Passerelle amont partagée (singleton du container)."""
    return get_container(request).gateway()


def get_catalog(request: Request) -> CatalogService:
    """Service catalogue (nouvelle instance sans état à chaque requête)."""
    return get_container(request).catalog_service()
