import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, Response

from parking_radar.config import settings
from parking_radar.models import (
    ErrorResponse,
    MissingCoordinatesError,
    ParkingQuery,
    ParksFailureResponse,
    ParksResponse,
    ProxySuccess,
)
from parking_radar.proxy import fetch_parks

logger = logging.getLogger(__name__)

router = APIRouter()

JSON_MEDIA_TYPE = "application/json; charset=utf-8"

CORS_HEADERS = {"Access-Control-Allow-Origin": "*"}
PREFLIGHT_HEADERS = {
    **CORS_HEADERS,
    "Access-Control-Allow-Methods": "GET, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}
NO_STORE_HEADERS = {**CORS_HEADERS, "Cache-Control": "no-store"}

# Every method is routed here so that rejections still carry the CORS header.
ALL_METHODS = ["GET", "OPTIONS", "HEAD", "POST", "PUT", "PATCH", "DELETE"]


def _json(status_code: int, body: dict, headers: dict[str, str]) -> JSONResponse:
    return JSONResponse(
        content=body,
        status_code=status_code,
        headers=headers,
        media_type=JSON_MEDIA_TYPE,
    )


async def _handle_parks(request: Request) -> Response:
    if request.method == "OPTIONS":
        return Response(status_code=200, content="", headers=PREFLIGHT_HEADERS)

    if request.method != "GET":
        return Response(
            status_code=405, content="Method Not Allowed", headers=CORS_HEADERS
        )

    try:
        query = ParkingQuery.from_params(request.query_params)
    except MissingCoordinatesError as e:
        return _json(400, {"ok": False, "error": str(e)}, CORS_HEADERS)

    try:
        result = await fetch_parks(
            query,
            settings=settings,
            transport=getattr(request.app.state, "upstream_transport", None),
        )
    except Exception as e:
        logger.exception("Parks proxy failed")
        body = {
            "ok": False,
            "error": "proxy_failed",
            "message": str(e) or type(e).__name__,
        }
        return _json(500, body, CORS_HEADERS)

    if isinstance(result, ProxySuccess):
        return _json(200, result.to_body(), NO_STORE_HEADERS)
    return _json(result.status, result.to_body(), NO_STORE_HEADERS)


_PARKS_DOC = dict(
    summary="Nearby parking lots",
    description="Proxies the Taipei parking availability service. Each call "
    "warms up a fresh upstream session, discovers an anti-forgery token, and "
    "forwards `longitude`/`lon`, `latitude`/`lat`, `vehicle_type`/`type` "
    "(default `car`) and `radius` (default `5`). Upstream rejections are "
    "returned with the upstream status and a diagnostics bundle.",
    tags=["parks"],
    responses={
        200: {"model": ParksResponse},
        400: {"model": ErrorResponse},
        403: {"model": ParksFailureResponse},
        500: {"model": ErrorResponse},
    },
)


@router.api_route("/parks", methods=ALL_METHODS, **_PARKS_DOC)
async def parks(request: Request):
    return await _handle_parks(request)


# Path the existing PWA front end requests.
@router.api_route(
    "/.netlify/functions/parks", methods=ALL_METHODS, include_in_schema=False
)
async def parks_legacy(request: Request):
    return await _handle_parks(request)
