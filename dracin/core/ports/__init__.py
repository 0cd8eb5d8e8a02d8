"""
Ports (interfaces abstraites) de la couche domaine.

Exports :
- IUpstreamGateway : Contrat de la passerelle vers les API amont
- UpstreamResponse : Réponse amont brute (statut + JSON)
- UpstreamError : Échec de transport vers l'amont
"""

from dracin.core.ports.upstream import IUpstreamGateway, UpstreamError, UpstreamResponse

__all__ = [
    "IUpstreamGateway",
    "UpstreamError",
    "UpstreamResponse",
]
