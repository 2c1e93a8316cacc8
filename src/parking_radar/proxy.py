import json
import logging
from urllib.parse import quote

import httpx

from parking_radar.config import TOKEN_HEADER_NAMES, Settings
from parking_radar.config import settings as default_settings
from parking_radar.discovery import TokenDiscovery
from parking_radar.headers import api_headers
from parking_radar.models import (
    Diagnostics,
    ParkingQuery,
    ProxyFailure,
    ProxyResult,
    ProxySuccess,
    Token,
)
from parking_radar.session import BootstrapResult, Session, bootstrap

logger = logging.getLogger(__name__)

COOKIE_PREVIEW_CHARS = 200
HTML_PREVIEW_CHARS = 400
TEXT_PREVIEW_CHARS = 1000


def build_parks_url(origin: str, base_path: str, query: ParkingQuery) -> str:
    segments = [query.longitude, query.latitude, query.vehicle_type, query.radius]
    return origin + base_path + "".join("/" + quote(s, safe="") for s in segments)


def build_api_headers(
    user_agent: str, origin: str, cookie_header: str, token: Token | None
) -> dict[str, str]:
    headers = api_headers(user_agent, origin)
    if cookie_header:
        headers["Cookie"] = cookie_header
    if token is not None:
        for name in TOKEN_HEADER_NAMES:
            headers[name] = token.value
    return headers


def _reject_constant(name: str):
    raise ValueError(f"non-standard JSON constant {name}")


def _parse_body(text: str):
    try:
        data = json.loads(text, parse_constant=_reject_constant)
    except ValueError:
        logger.info("Upstream body is not JSON, passing raw text through")
        return text
    if isinstance(data, list):
        logger.info("Upstream returned %d items", len(data))
    return data


def build_diagnostics(
    boot: BootstrapResult,
    cookie_header: str,
    response: httpx.Response,
    attempts: dict[str, dict],
) -> dict:
    diagnostics = Diagnostics(
        bootStatus=boot.status,
        bootContentType=boot.content_type,
        bootError=boot.error,
        cookiePreview=cookie_header[:COOKIE_PREVIEW_CHARS],
        htmlPreview=boot.html[:HTML_PREVIEW_CHARS],
        responseHeaders=dict(response.headers),
        tokenAttempts=attempts or None,
    ).model_dump()
    for key in ("bootError", "tokenAttempts"):
        if diagnostics[key] is None:
            del diagnostics[key]
    return diagnostics


async def fetch_parks(
    query: ParkingQuery,
    settings: Settings = default_settings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> ProxyResult:
    """Serve one parks lookup end to end.

    Bootstraps a fresh session, discovers a token (a missing token is not
    fatal), then calls the protected parks endpoint once. Transport errors on
    that final call propagate to the caller.
    """
    logger.info(
        "Parks lookup lon=%s lat=%s type=%s radius=%s",
        query.longitude,
        query.latitude,
        query.vehicle_type,
        query.radius,
    )
    async with Session(settings, transport=transport) as session:
        boot = await bootstrap(session)

        discovery = TokenDiscovery(session)
        token = await discovery.discover(boot.html)

        url = build_parks_url(session.origin, settings.parks_path, query)
        cookie_header = session.cookie_header(url)
        has_cookie = bool(cookie_header)
        headers = build_api_headers(
            session.user_agent, session.origin, cookie_header, token
        )

        logger.info(
            "Calling %s (cookie=%s, token=%s)",
            url,
            has_cookie,
            token.source if token else "none",
        )
        resp = await session.get(url, headers=headers)
        text = resp.text
        logger.info("Upstream status %d, %d chars", resp.status_code, len(text))

        if not resp.is_success:
            logger.warning(
                "Upstream rejected parks call (%d): %s",
                resp.status_code,
                text[:200],
            )
            return ProxyFailure(
                status=resp.status_code,
                url=url,
                token=token,
                has_cookie=has_cookie,
                diagnostics=build_diagnostics(
                    boot, cookie_header, resp, discovery.attempts_dict()
                ),
                text=text[:TEXT_PREVIEW_CHARS],
            )

        return ProxySuccess(data=_parse_body(text), token=token, has_cookie=has_cookie)
