"""
Clients des API de contenu amont.

Ce module fournit l'adaptateur de la passerelle amont:
- UpstreamGateway: un GET par requete, en-tetes Accept/User-Agent fixes
- unwrap_payload: retrait de l'enveloppe {data, success, statusCode}

La passerelle implemente IUpstreamGateway defini dans core/ports/upstream.py.
"""

from dracin.adapters.api.gateway import UpstreamGateway, unwrap_payload

__all__ = [
    "UpstreamGateway",
    "unwrap_payload",
]
