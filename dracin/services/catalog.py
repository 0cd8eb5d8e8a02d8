"""
Service catalogue : enchaîne passerelle amont et normaliseurs.

Chaque opération effectue exactement un appel sortant puis normalise la
réponse. Les échecs de transport sont absorbés (journalisés puis convertis
en liste vide ou enregistrement par défaut) : le front-end reçoit toujours
une réponse exploitable.

Deux formes de fournisseurs (voir ApiFlavor) :
- DOWNLOAD : home/recommend/vip/search/categories, détail et épisodes via
  download/<bookId> qui renvoie {info, data}
- ACTION : chaque appel porte action=<nom> et size, réponses {success, data},
  détail/chapitres/flux via des actions dédiées
"""

from collections.abc import Mapping
from typing import Any, Optional

from loguru import logger

from dracin.core.entities.drama import Category, Drama, Episode, QualityOption
from dracin.core.ports.upstream import IUpstreamGateway, UpstreamError
from dracin.core.value_objects.provider import ApiFlavor, ProviderConfig, ProviderTable
from dracin.services.normalization import (
    apply_chapter_list,
    build_episode_list,
    extract_quality_options,
    normalize_categories,
    normalize_drama,
    normalize_dramas,
    normalize_episode,
)
from dracin.utils.constants import CATEGORY_ALIASES
from dracin.utils.helpers import first_defined, parse_count

# Cles sous lesquelles certaines reponses enveloppent leur liste
_LIST_KEYS = ("bookList", "list", "data")
_CHAPTER_LIST_KEYS = ("data", "chapterList", "list", "chapters")
_CHAPTER_ID_KEYS = ("chapterId", "chapterid", "id")
_CHAPTER_INDEX_KEYS = ("chapterIndex", "index")


def _as_list(payload: Any, keys: tuple[str, ...] = _LIST_KEYS) -> list[Any]:
    """Liste nue, ou première liste trouvée sous l'une des clés d'enveloppe."""
    if isinstance(payload, list):
        return payload
    if isinstance(payload, Mapping):
        for key in keys:
            value = payload.get(key)
            if isinstance(value, list):
                return value
    return []


def split_download_payload(payload: Any) -> tuple[list[Any], Mapping[str, Any]]:
    """
    Sépare une réponse épisodes en (chapitres, informations du drama).

    Accepte une liste nue de chapitres, la forme {info, data: [...]} ou un
    objet drama portant lui-même sa liste de chapitres.
    """
    if isinstance(payload, list):
        return payload, {}
    if not isinstance(payload, Mapping):
        return [], {}

    info = payload.get("info")
    if not isinstance(info, Mapping):
        info = payload
    return _as_list(payload, _CHAPTER_LIST_KEYS), info


def locate_chapter(
    chapters: list[Any],
    episode: Optional[int] = None,
    chapter_id: Optional[str] = None,
) -> Optional[tuple[int, Mapping[str, Any]]]:
    """
    Retrouve un chapitre par identifiant, ou par numéro d'épisode.

    Par numéro : d'abord le chapitre dont chapterIndex vaut ce numéro,
    sinon la position numéro-1 dans la liste.

    Returns:
        (position, chapitre) ou None
    """
    entries = [(idx, ch) for idx, ch in enumerate(chapters) if isinstance(ch, Mapping)]

    if chapter_id is not None:
        for idx, chapter in entries:
            if str(first_defined(chapter, _CHAPTER_ID_KEYS, default="")) == chapter_id:
                return idx, chapter
        return None

    if episode is None:
        return None

    for idx, chapter in entries:
        if parse_count(first_defined(chapter, _CHAPTER_INDEX_KEYS)) == episode:
            return idx, chapter

    position = episode - 1
    if 0 <= position < len(chapters) and isinstance(chapters[position], Mapping):
        return position, chapters[position]
    return None


class CatalogService:
    """
    Opérations catalogue normalisées, par fournisseur.

    Le service n'a aucun état entre requêtes : la table des fournisseurs
    est immuable et la passerelle ne conserve que son pool de connexions.

    Example:
        service = CatalogService(gateway=gateway, providers=settings.provider_table)
        dramas = await service.get_home(page=1)
        episodes = await service.get_all_episodes(dramas[0].book_id)
        options = await service.get_stream(dramas[0].book_id, episode=1)
    """

    def __init__(
        self,
        gateway: IUpstreamGateway,
        providers: ProviderTable,
        page_size: int = 20,
    ) -> None:
        """
        Initialise le service.

        Args:
            gateway: Passerelle vers les API amont
            providers: Table des fournisseurs (détermine la forme des appels)
            page_size: Taille de page envoyée aux fournisseurs ACTION
        """
        self._gateway = gateway
        self._providers = providers
        self._page_size = page_size

    def _provider(self, name: Optional[str]) -> ProviderConfig:
        return self._providers.resolve(name)

    async def _call(
        self,
        action: str,
        params: Optional[dict[str, Any]] = None,
        provider: Optional[str] = None,
        paged: bool = False,
    ) -> Any:
        """
        Appelle l'amont et retourne le corps désenveloppé, ou None en cas d'échec.

        Pour un fournisseur ACTION, ajoute action=<nom> et la taille de page ;
        seule une réponse {success: true, data} est exploitée.
        """
        config = self._provider(provider)
        query: dict[str, Any] = dict(params or {})
        if config.flavor is ApiFlavor.ACTION:
            query = {"action": action, **query}
            if paged:
                query["size"] = self._page_size

        try:
            if config.flavor is not ApiFlavor.ACTION:
                return await self._gateway.fetch_json(action, query, provider=config.name)
            response = await self._gateway.fetch(action, query, provider=config.name)
        except UpstreamError as e:
            logger.warning("{} error: {}", action, e, provider=config.name)
            return None

        body = response.payload
        if not response.ok or not isinstance(body, Mapping) or body.get("success") is not True:
            logger.warning("{} error: reponse invalide", action, status_code=response.status_code)
            return None
        return body.get("data")

    async def _list_dramas(
        self,
        action: str,
        params: dict[str, Any],
        provider: Optional[str],
    ) -> list[Drama]:
        data = await self._call(action, params, provider, paged=True)
        return normalize_dramas(_as_list(data))

    async def get_home(self, page: int = 1, provider: Optional[str] = None) -> list[Drama]:
        """Dramas mis en avant (page d'accueil)."""
        return await self._list_dramas("home", {"page": page}, provider)

    async def get_recommend(self, page: int = 1, provider: Optional[str] = None) -> list[Drama]:
        """Dramas recommandés."""
        return await self._list_dramas("recommend", {"page": page}, provider)

    async def get_vip(self, page: int = 1, provider: Optional[str] = None) -> list[Drama]:
        """Contenu VIP (liste nue ou {bookList: [...]})."""
        return await self._list_dramas("vip", {"page": page}, provider)

    async def search(
        self,
        query: str,
        page: int = 1,
        provider: Optional[str] = None,
    ) -> list[Drama]:
        """
        Recherche de dramas par mot-clé.

        Les fournisseurs DOWNLOAD attendent keyword=, les fournisseurs ACTION query=.
        """
        if self._provider(provider).flavor is ApiFlavor.ACTION:
            params: dict[str, Any] = {"query": query, "page": page}
        else:
            params = {"keyword": query}
        return await self._list_dramas("search", params, provider)

    async def get_categories(self, provider: Optional[str] = None) -> list[Category]:
        """Liste des catégories."""
        data = await self._call("categories", provider=provider)
        return normalize_categories(_as_list(data))

    async def get_category(
        self,
        category_id: int,
        page: int = 1,
        provider: Optional[str] = None,
    ) -> list[Drama]:
        """Dramas d'une catégorie."""
        action = "category" if self._provider(provider).flavor is ApiFlavor.ACTION else "categories"
        return await self._list_dramas(action, {"categoryId": category_id, "page": page}, provider)

    async def get_dramas_by_category(
        self,
        category_type: str,
        page: int = 1,
        provider: Optional[str] = None,
    ) -> list[Drama]:
        """
        Dramas d'une catégorie numérique ou d'un alias du front-end.

        "12" -> catégorie 12 ; trending/latest/dubindo -> home ;
        foryou/populersearch -> recommend ; vip -> vip ; inconnu -> home.
        """
        category_type = category_type.strip()
        if category_type.isdecimal():
            return await self.get_category(int(category_type), page, provider)

        target = CATEGORY_ALIASES.get(category_type.lower(), "home")
        if target == "recommend":
            return await self.get_recommend(page, provider)
        if target == "vip":
            return await self.get_vip(page, provider)
        return await self.get_home(page, provider)

    async def _episodes_payload(self, book_id: str, provider: Optional[str]) -> Any:
        if self._provider(provider).flavor is ApiFlavor.ACTION:
            return await self._call("chapters", {"bookId": book_id}, provider)
        return await self._call(f"download/{book_id}", provider=provider)

    async def get_drama_detail(self, book_id: str, provider: Optional[str] = None) -> Drama:
        """
        Fiche d'un drama.

        Pour un fournisseur DOWNLOAD, la longueur de la liste de chapitres fait
        foi pour chapter_count et latest_episode. Sans information exploitable,
        retourne un Drama par défaut portant book_id.
        """
        if self._provider(provider).flavor is ApiFlavor.ACTION:
            data = await self._call("detail", {"bookId": book_id}, provider)
            info, chapters = (data if isinstance(data, Mapping) else None), None
        else:
            payload = await self._call(f"download/{book_id}", provider=provider)
            info = payload.get("info") if isinstance(payload, Mapping) else None
            chapters = payload.get("data") if isinstance(payload, Mapping) else None

        if not isinstance(info, Mapping) or not info:
            return normalize_drama({"bookId": book_id})

        drama = apply_chapter_list(normalize_drama(info), chapters if isinstance(chapters, list) else None)
        if not drama.book_id:
            drama.book_id = book_id
        return drama

    async def get_all_episodes(self, book_id: str, provider: Optional[str] = None) -> list[Episode]:
        """
        Liste des épisodes d'un drama (étape liste, sans flux).

        Sans liste amont mais avec un chapterCount connu dans la même réponse,
        une liste de remplacement est synthétisée.
        """
        payload = await self._episodes_payload(book_id, provider)
        chapters, info = split_download_payload(payload)
        drama = normalize_drama(info)
        return build_episode_list(chapters, drama.chapter_count, cover=drama.cover)

    async def get_episode(
        self,
        book_id: str,
        episode: Optional[int] = None,
        chapter_id: Optional[str] = None,
        provider: Optional[str] = None,
    ) -> Optional[Episode]:
        """
        Épisode complété par ses flux (étape lecture).

        Args:
            book_id: Identifiant du drama
            episode: Numéro d'épisode (1-based)
            chapter_id: Identifiant du chapitre (requis pour un fournisseur ACTION)
            provider: Nom du fournisseur

        Returns:
            Episode résolu, ou None si le chapitre est introuvable
        """
        if self._provider(provider).flavor is ApiFlavor.ACTION:
            if chapter_id is None:
                logger.warning("stream error: chapterId requis", book_id=book_id)
                return None
            data = await self._call("stream", {"bookId": book_id, "chapterId": chapter_id}, provider)
            if not isinstance(data, Mapping):
                return None
            position = episode - 1 if episode else 0
            listing = normalize_episode({**data, "chapterId": chapter_id}, position)
            return listing.with_stream(extract_quality_options(data))

        payload = await self._call(f"download/{book_id}", provider=provider)
        chapters, _ = split_download_payload(payload)
        found = locate_chapter(chapters, episode=episode, chapter_id=chapter_id)
        if found is None:
            return None

        position, chapter = found
        return normalize_episode(chapter, position).with_stream(extract_quality_options(chapter))

    async def get_stream(
        self,
        book_id: str,
        episode: Optional[int] = None,
        chapter_id: Optional[str] = None,
        provider: Optional[str] = None,
    ) -> list[QualityOption]:
        """Flux triés d'un épisode ; liste vide si introuvable ou en échec."""
        resolved = await self.get_episode(book_id, episode, chapter_id, provider)
        if resolved is None or not resolved.quality_options:
            return []
        return list(resolved.quality_options)
