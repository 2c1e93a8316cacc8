import logging

import httpx

from parking_radar.config import FORM_PROBE_PATH, TOKEN_CANDIDATES, TOKEN_COOKIE_NAMES
from parking_radar.extract import extract_from_html, extract_from_json
from parking_radar.headers import ajax_headers, form_headers
from parking_radar.models import DiscoveryAttempt, Token
from parking_radar.session import Session

logger = logging.getLogger(__name__)


class TokenDiscovery:
    """Find the target's anti-forgery token by trying each strategy in turn.

    Strategies run in a fixed order (page HTML, candidate endpoints, session
    cookies) and stop at the first hit. Every candidate endpoint probed is
    recorded in ``attempts`` for the failure diagnostics.
    """

    def __init__(
        self,
        session: Session,
        candidates: list[str] | None = None,
        cookie_names: list[str] | None = None,
    ):
        self.session = session
        self.candidates = candidates if candidates is not None else TOKEN_CANDIDATES
        self.cookie_names = (
            cookie_names if cookie_names is not None else TOKEN_COOKIE_NAMES
        )
        self.attempts: dict[str, DiscoveryAttempt] = {}

    async def discover(self, html: str) -> Token | None:
        token = await self.from_html(html)
        if token is None:
            logger.info("No token in page HTML, probing candidate endpoints")
            token = await self.from_candidates()
        if token is None:
            logger.info("Candidate endpoints gave nothing, reading cookies")
            token = self.from_cookies()

        if token is None:
            logger.info("No token found, continuing without one")
        else:
            logger.info("Token from %s (%s)", token.source, token.preview)
        return token

    async def from_html(self, html: str) -> Token | None:
        value = extract_from_html(html)
        if value:
            return Token(value, "html")

        # The form POST is a best-effort trigger; whatever it returns is
        # only inspected when it succeeded.
        session = self.session
        try:
            resp = await session.post(
                session.url(FORM_PROBE_PATH),
                headers=form_headers(
                    session.user_agent, session.origin, session.cookie_header()
                ),
                content="dummy=1",
            )
        except httpx.HTTPError as e:
            logger.info("Form probe failed: %s", str(e) or type(e).__name__)
            return None

        if not resp.is_success:
            logger.debug("Form probe returned %d", resp.status_code)
            return None
        value = extract_from_html(resp.text)
        if value:
            return Token(value, "html")
        return None

    async def from_candidates(self) -> Token | None:
        session = self.session
        headers = ajax_headers(session.user_agent, session.origin)
        for path in self.candidates:
            logger.debug("Probing token endpoint %s", path)
            try:
                resp = await session.get(session.url(path), headers=headers)
            except httpx.HTTPError as e:
                self.attempts[path] = DiscoveryAttempt(
                    error=str(e) or type(e).__name__
                )
                logger.warning("Token endpoint %s failed: %s", path, e)
                continue

            self.attempts[path] = DiscoveryAttempt(
                status=resp.status_code,
                content_type=resp.headers.get("content-type"),
                size=resp.headers.get("content-length"),
            )

            # Some endpoints only answer through Set-Cookie.
            value = self.session.cookies.read_named(
                session.url("/"), self.cookie_names
            )
            if value is None:
                text = resp.text
                value = extract_from_html(text) or extract_from_json(text)
            if value:
                return Token(value, f"endpoint:{path}")
        return None

    def from_cookies(self) -> Token | None:
        value = self.session.cookies.read_named(
            self.session.url("/"), self.cookie_names
        )
        if value:
            return Token(value, "cookie")
        return None

    def attempts_dict(self) -> dict[str, dict]:
        return {path: attempt.to_dict() for path, attempt in self.attempts.items()}
