"""
Routes de l'API normalisée.

Chaque route effectue un seul appel amont via CatalogService et renvoie des
enregistrements canoniques en camelCase. Le paramètre provider choisit le
fournisseur ; les échecs amont donnent des listes vides, jamais d'erreur.
"""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ...services.catalog import CatalogService
from ..deps import get_catalog

router = APIRouter(prefix="/catalog", tags=["Catalog"])

ProviderParam = Annotated[Optional[str], Query(description="Fournisseur amont (primary, secondary)")]
PageParam = Annotated[int, Query(ge=1)]


@router.get("/home")
async def home(
    page: PageParam = 1,
    provider: ProviderParam = None,
    catalog: CatalogService = Depends(get_catalog),
) -> list[dict]:
    """Dramas mis en avant."""
    return [d.to_dict() for d in await catalog.get_home(page, provider)]


@router.get("/recommend")
async def recommend(
    page: PageParam = 1,
    provider: ProviderParam = None,
    catalog: CatalogService = Depends(get_catalog),
) -> list[dict]:
    """Dramas recommandés."""
    return [d.to_dict() for d in await catalog.get_recommend(page, provider)]


@router.get("/vip")
async def vip(
    page: PageParam = 1,
    provider: ProviderParam = None,
    catalog: CatalogService = Depends(get_catalog),
) -> list[dict]:
    """Contenu VIP."""
    return [d.to_dict() for d in await catalog.get_vip(page, provider)]


@router.get("/search")
async def search(
    q: Annotated[str, Query(min_length=1)],
    page: PageParam = 1,
    provider: ProviderParam = None,
    catalog: CatalogService = Depends(get_catalog),
) -> list[dict]:
    """Recherche par mot-clé."""
    return [d.to_dict() for d in await catalog.search(q, page, provider)]


@router.get("/categories")
async def categories(
    provider: ProviderParam = None,
    catalog: CatalogService = Depends(get_catalog),
) -> list[dict]:
    """Liste des catégories."""
    return [c.to_dict() for c in await catalog.get_categories(provider)]


@router.get("/categories/{category_type}")
async def category(
    category_type: str,
    page: PageParam = 1,
    provider: ProviderParam = None,
    catalog: CatalogService = Depends(get_catalog),
) -> list[dict]:
    """Dramas d'une catégorie (id numérique ou alias : trending, foryou, vip...)."""
    dramas = await catalog.get_dramas_by_category(category_type, page, provider)
    return [d.to_dict() for d in dramas]


@router.get("/dramas/{book_id}")
async def drama_detail(
    book_id: str,
    provider: ProviderParam = None,
    catalog: CatalogService = Depends(get_catalog),
) -> dict:
    """Fiche d'un drama (enregistrement par défaut si l'amont ne répond pas)."""
    drama = await catalog.get_drama_detail(book_id, provider)
    return drama.to_dict()


@router.get("/dramas/{book_id}/episodes")
async def episodes(
    book_id: str,
    provider: ProviderParam = None,
    catalog: CatalogService = Depends(get_catalog),
) -> list[dict]:
    """Liste des épisodes (sans flux)."""
    return [e.to_dict() for e in await catalog.get_all_episodes(book_id, provider)]


@router.get("/dramas/{book_id}/episodes/{episode}")
async def episode_detail(
    book_id: str,
    episode: int,
    provider: ProviderParam = None,
    catalog: CatalogService = Depends(get_catalog),
) -> dict:
    """Épisode complété par ses flux."""
    resolved = await catalog.get_episode(book_id, episode=episode, provider=provider)
    if resolved is None:
        raise HTTPException(status_code=404, detail=f"Episode {episode} introuvable")
    return resolved.to_dict()


@router.get("/dramas/{book_id}/episodes/{episode}/stream")
async def episode_stream(
    book_id: str,
    episode: int,
    provider: ProviderParam = None,
    catalog: CatalogService = Depends(get_catalog),
) -> list[dict]:
    """Flux d'un épisode par numéro, 720 en tête."""
    options = await catalog.get_stream(book_id, episode=episode, provider=provider)
    return [o.to_dict() for o in options]


@router.get("/dramas/{book_id}/chapters/{chapter_id}/stream")
async def chapter_stream(
    book_id: str,
    chapter_id: str,
    provider: ProviderParam = None,
    catalog: CatalogService = Depends(get_catalog),
) -> list[dict]:
    """Flux d'un chapitre par identifiant, 720 en tête."""
    options = await catalog.get_stream(book_id, chapter_id=chapter_id, provider=provider)
    return [o.to_dict() for o in options]
