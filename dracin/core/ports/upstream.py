"""
Interface port pour la passerelle vers les API amont.

Définit le contrat d'un appel sortant unique par requête entrante :
résolution de l'URL depuis (fournisseur, chemin), un GET, et le corps
JSON brut. L'implémentation concrète (httpx) vit dans adapters/api/.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Mapping, Optional


class UpstreamError(Exception):
    """
    Échec de transport vers l'amont.

    Levée pour une erreur réseau, un délai dépassé, un corps non JSON
    ou (via fetch_json) un statut HTTP hors 2xx. Jamais relancée
    automatiquement : un seul essai, échec immédiat.

    Attributes:
        url: URL cible de l'appel
        status_code: Statut HTTP de l'amont s'il a répondu, sinon None
    """

    def __init__(self, message: str, url: str = "", status_code: Optional[int] = None) -> None:
        self.url = url
        self.status_code = status_code
        super().__init__(message)


@dataclass(frozen=True)
class UpstreamResponse:
    """
    Réponse amont non modifiée.

    Attributs :
        status_code : Statut HTTP renvoyé par l'amont
        payload : Corps JSON décodé (objet, liste ou scalaire)
        url : URL effectivement appelée
    """

    status_code: int
    payload: Any
    url: str = ""

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class IUpstreamGateway(ABC):
    """
    Interface de la passerelle amont.

    Une passerelle est construite avec une table de fournisseurs immuable
    et n'a aucun état partagé entre requêtes hormis son pool de connexions.
    """

    @abstractmethod
    def resolve_url(
        self,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        provider: Optional[str] = None,
    ) -> str:
        """
        Construit l'URL cible complète.

        Args :
            path : Chemin logique ("home", "download/42")
            params : Paramètres de requête transmis tels quels
            provider : Nom du fournisseur, défaut si absent ou inconnu

        Retourne :
            URL absolue avec sa query string
        """
        ...

    @abstractmethod
    async def fetch(
        self,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        provider: Optional[str] = None,
    ) -> UpstreamResponse:
        """
        Effectue l'appel sortant et retourne la réponse brute.

        Le statut amont est conservé tel quel (pas d'exception sur 4xx/5xx).

        Lève :
            UpstreamError : échec réseau ou corps non JSON
        """
        ...

    @abstractmethod
    async def fetch_json(
        self,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        provider: Optional[str] = None,
    ) -> Any:
        """
        Effectue l'appel sortant et retourne le corps désenveloppé.

        Lève :
            UpstreamError : échec réseau, corps non JSON ou statut hors 2xx
        """
        ...

    @abstractmethod
    async def close(self) -> None:
        """Libère les ressources réseau."""
        ...
