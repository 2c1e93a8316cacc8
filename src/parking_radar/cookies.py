import logging

import httpx

logger = logging.getLogger(__name__)


class CookieStore:
    """Session cookies accumulated across the outbound calls of one proxy request.

    Wraps the ``httpx.Cookies`` jar of the session's client, so cookies set by
    any response are replayed on every later call to the same origin. Domain,
    path and secure scoping are left to the underlying ``http.cookiejar``.
    """

    def __init__(self, cookies: httpx.Cookies | None = None):
        self.cookies = cookies if cookies is not None else httpx.Cookies()

    @property
    def jar(self):
        return self.cookies.jar

    def record_from_response(self, response: httpx.Response) -> None:
        """Merge the response's Set-Cookie directives into the jar."""
        self.cookies.extract_cookies(response)

    def cookie_header(self, url: str) -> str:
        """Return the ``name=value; ...`` string that would be sent to *url*."""
        request = httpx.Request("GET", url)
        self.cookies.set_cookie_header(request)
        return request.headers.get("Cookie", "")

    def pairs(self, url: str) -> list[tuple[str, str]]:
        header = self.cookie_header(url)
        if not header:
            return []
        pairs = []
        for part in header.split("; "):
            name, _, value = part.partition("=")
            pairs.append((name, value))
        return pairs

    def read_named(self, url: str, candidate_names: list[str]) -> str | None:
        """Return the value of the first cookie matching *candidate_names*.

        Names are tried in priority order; a stored cookie matches a name when
        it is equal to it or contains it, ignoring case.
        """
        pairs = self.pairs(url)
        for candidate in candidate_names:
            wanted = candidate.lower()
            for name, value in pairs:
                if not value:
                    continue
                if name == candidate or wanted in name.lower():
                    logger.info("Token found in cookie %s (%s...)", name, value[:20])
                    return value
        return None

    def __len__(self) -> int:
        return len(self.jar)
