import logging
from dataclasses import dataclass

import httpx

from parking_radar.config import Settings
from parking_radar.cookies import CookieStore
from parking_radar.headers import entry_headers, same_origin_navigation_headers

logger = logging.getLogger(__name__)


class Session:
    """One browser-like visit to the target origin.

    Owns a single ``httpx.AsyncClient`` and its cookie jar. Every outbound
    call made while serving one inbound request must go through the same
    Session so cookies accumulate across bootstrap, discovery and the final
    call. Nothing is shared between Sessions.
    """

    def __init__(
        self,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.settings = settings
        self.origin = settings.target_origin
        self.client = httpx.AsyncClient(
            transport=transport,
            follow_redirects=True,
            timeout=settings.request_timeout,
        )
        self.cookies = CookieStore(self.client.cookies)
        self.last_cookie_header = ""

    async def __aenter__(self) -> "Session":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.client.aclose()

    def url(self, path: str = "") -> str:
        return self.origin + path

    @property
    def user_agent(self) -> str:
        return self.settings.user_agent

    def cookie_header(self, url: str | None = None) -> str:
        """Cookie header the jar holds for *url* (the origin root by default)."""
        self.last_cookie_header = self.cookies.cookie_header(url or self.url("/"))
        return self.last_cookie_header

    async def get(self, url: str, headers: dict[str, str]) -> httpx.Response:
        resp = await self.client.get(url, headers=headers)
        self.cookies.record_from_response(resp)
        return resp

    async def post(
        self, url: str, headers: dict[str, str], content: str
    ) -> httpx.Response:
        resp = await self.client.post(url, headers=headers, content=content)
        self.cookies.record_from_response(resp)
        return resp


@dataclass
class BootstrapResult:
    status: int | None = None
    content_type: str | None = None
    html: str = ""
    error: str | None = None


async def bootstrap(session: Session) -> BootstrapResult:
    """Warm the session up the way a browser arriving from a search engine would.

    Two GETs: an entry fetch with cross-site navigation headers, then a
    same-origin fetch that lets the front end settle its session cookies.
    The entry page HTML is kept for token extraction. Transport errors are
    logged and reported in the result rather than raised.
    """
    result = BootstrapResult()
    ua = session.user_agent

    logger.info("Bootstrap: entry fetch %s", session.origin)
    try:
        resp = await session.get(session.url(), headers=entry_headers(ua))
        result.status = resp.status_code
        result.content_type = resp.headers.get("content-type")
        result.html = resp.text
        logger.info(
            "Entry page status %d, %d chars", resp.status_code, len(result.html)
        )
    except httpx.HTTPError as e:
        result.error = str(e) or type(e).__name__
        logger.warning("Entry fetch failed: %s", result.error)

    logger.info("Bootstrap: stabilizing cookies")
    try:
        await session.get(
            session.url("/"),
            headers=same_origin_navigation_headers(ua, session.origin),
        )
    except httpx.HTTPError as e:
        logger.warning("Stabilization fetch failed: %s", str(e) or type(e).__name__)

    has_cookie = bool(session.cookie_header())
    logger.info("Bootstrap done, cookies %s", "present" if has_cookie else "absent")
    return result
