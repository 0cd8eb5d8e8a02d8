"""
Route du proxy brut vers les API amont.

GET /api/<chemin>?<query> : le paramètre provider choisit le fournisseur,
les autres paramètres (hors path et provider) sont transmis tels quels.
La réponse reprend le statut et le corps JSON de l'amont sans les modifier ;
un échec de transport donne un 500 {"error": <message>}.
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, Response
from loguru import logger

from ...core.ports.upstream import IUpstreamGateway, UpstreamError
from ...utils.constants import RESERVED_QUERY_PARAMS
from ..deps import CORS_HEADERS, PREFLIGHT_HEADERS, get_gateway

router = APIRouter(tags=["Proxy"])


@router.options("/api/{path:path}", include_in_schema=False)
async def proxy_preflight(path: str) -> Response:
    """Répond au preflight CORS du navigateur."""
    return Response(status_code=200, headers=PREFLIGHT_HEADERS)


@router.get("/api/{path:path}")
async def proxy(
    request: Request,
    path: str,
    gateway: IUpstreamGateway = Depends(get_gateway),
) -> JSONResponse:
    """Relaie la requête vers l'amont et renvoie sa réponse telle quelle."""
    provider = request.query_params.get("provider")
    params = {
        key: value
        for key, value in request.query_params.items()
        if key not in RESERVED_QUERY_PARAMS
    }

    try:
        upstream = await gateway.fetch(path, params, provider=provider)
    except UpstreamError as e:
        logger.error("Proxy error: {}", e, path=path, provider=provider)
        return JSONResponse({"error": str(e)}, status_code=500, headers=CORS_HEADERS)

    return JSONResponse(
        upstream.payload,
        status_code=upstream.status_code,
        headers=CORS_HEADERS,
    )
