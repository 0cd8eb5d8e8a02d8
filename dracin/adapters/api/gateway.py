"""
Passerelle HTTP vers les API de contenu amont.

Implemente IUpstreamGateway avec httpx : un seul GET par requete entrante,
sans cache ni relance. Un echec de transport remonte immediatement sous
forme d'UpstreamError.

Usage:
    table = settings.provider_table
    gateway = UpstreamGateway(providers=table, user_agent="Dracin-Stream/2.0")
    response = await gateway.fetch("home", {"page": 1})
    dramas = await gateway.fetch_json("home", {"page": 1}, provider="secondary")
    await gateway.close()
"""

import json
from collections.abc import Mapping
from typing import Any, Optional
from urllib.parse import urlencode

import httpx
from loguru import logger

from dracin.core.ports.upstream import IUpstreamGateway, UpstreamError, UpstreamResponse
from dracin.core.value_objects.provider import ProviderTable
from dracin.utils.constants import ACCEPT_HEADER, USER_AGENT


def unwrap_payload(payload: Any) -> Any:
    """
    Retire l'enveloppe {data, success, statusCode} des reponses amont.

    Un objet contenant une cle "data" est remplace par sa valeur, sauf s'il
    porte aussi "info" : c'est la forme download/<bookId> dont l'appelant
    a besoin en entier. Toute autre valeur est retournee telle quelle.
    """
    if isinstance(payload, Mapping) and "data" in payload and not payload.get("info"):
        return payload["data"]
    return payload


def _query_string(params: Optional[Mapping[str, Any]]) -> str:
    if not params:
        return ""
    return urlencode({k: str(v) for k, v in params.items() if v is not None})


class UpstreamGateway(IUpstreamGateway):
    """
    Passerelle amont basee sur httpx.AsyncClient.

    La table des fournisseurs est immuable et fournie a la construction.
    Le client HTTP est cree a la premiere requete et partage ensuite
    (connection pooling) ; il ne porte aucun etat metier.

    Attributes:
        DEFAULT_TIMEOUT: Delai maximal d'un appel sortant (secondes)

    Example:
        gateway = UpstreamGateway(providers=table)
        response = await gateway.fetch("download/42")
        if response.ok:
            print(response.payload["info"]["bookName"])
        await gateway.close()
    """

    DEFAULT_TIMEOUT = 15.0

    def __init__(
        self,
        providers: ProviderTable,
        user_agent: str = USER_AGENT,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        """
        Initialise la passerelle.

        Args:
            providers: Table immuable des fournisseurs amont
            user_agent: En-tete User-Agent envoye a chaque appel
            timeout: Delai maximal d'un appel sortant, en secondes
        """
        self._providers = providers
        self._user_agent = user_agent
        self._timeout = timeout
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def providers(self) -> ProviderTable:
        return self._providers

    def _get_client(self) -> httpx.AsyncClient:
        """
        Retourne le client HTTP, le cree si necessaire (lazy init).

        Returns:
            httpx.AsyncClient avec les en-tetes Accept et User-Agent fixes
        """
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                headers={"Accept": ACCEPT_HEADER, "User-Agent": self._user_agent},
                timeout=self._timeout,
            )
        return self._client

    def resolve_url(
        self,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        provider: Optional[str] = None,
    ) -> str:
        """
        Construit l'URL cible : <base fournisseur>/<chemin>[?<query>].

        Un fournisseur inconnu resout vers le fournisseur par defaut.
        """
        config = self._providers.resolve(provider)
        if provider and provider not in self._providers:
            logger.warning(
                "Fournisseur inconnu, utilisation du defaut",
                provider=provider,
                default=config.name,
            )
        url = config.url_for(path)
        query = _query_string(params)
        return f"{url}?{query}" if query else url

    async def fetch(
        self,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        provider: Optional[str] = None,
    ) -> UpstreamResponse:
        """
        Effectue le GET amont et retourne statut + corps JSON bruts.

        Args:
            path: Chemin logique ("home", "download/42")
            params: Parametres de requete transmis tels quels
            provider: Nom du fournisseur (defaut si absent)

        Returns:
            UpstreamResponse, quel que soit le statut HTTP

        Raises:
            UpstreamError: Erreur reseau, delai depasse ou corps non JSON
        """
        target_url = self.resolve_url(path, params, provider)
        logger.debug("[API Proxy] path: {} | targetUrl: {}", path, target_url)

        client = self._get_client()
        try:
            response = await client.get(target_url)
        except httpx.HTTPError as e:
            logger.error("Erreur de transport amont: {!r}", e, url=target_url)
            raise UpstreamError(str(e) or type(e).__name__, url=target_url) from e

        try:
            payload = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.error(
                "Reponse amont non JSON",
                url=target_url,
                status_code=response.status_code,
            )
            raise UpstreamError(
                f"Invalid JSON from upstream: {e}",
                url=target_url,
                status_code=response.status_code,
            ) from e

        return UpstreamResponse(
            status_code=response.status_code,
            payload=payload,
            url=target_url,
        )

    async def fetch_json(
        self,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        provider: Optional[str] = None,
    ) -> Any:
        """
        Effectue le GET amont et retourne le corps desenveloppe (voir unwrap_payload).

        Raises:
            UpstreamError: Echec de transport ou statut hors 2xx
        """
        response = await self.fetch(path, params, provider)
        if not response.ok:
            logger.warning(
                "API error: {}",
                response.status_code,
                url=response.url,
            )
            raise UpstreamError(
                f"API error: {response.status_code}",
                url=response.url,
                status_code=response.status_code,
            )
        return unwrap_payload(response.payload)

    async def close(self) -> None:
        """
        Ferme le client HTTP.

        Doit etre appele a la fin de l'utilisation pour liberer
        les ressources reseau.
        """
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None
