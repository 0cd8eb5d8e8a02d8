"""Route d'état du service."""

from fastapi import APIRouter, Depends

from ...container import Container
from ..deps import APP_VERSION, get_container

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health(container: Container = Depends(get_container)) -> dict:
    """État du service et fournisseurs configurés (aucun appel amont)."""
    table = container.provider_table()
    return {
        "status": "ok",
        "version": APP_VERSION,
        "defaultProvider": table.default,
        "providers": {
            name: {"baseUrl": config.base_url, "flavor": config.flavor.value}
            for name, config in table.providers.items()
        },
    }
