import json
import logging
import re

logger = logging.getLogger(__name__)

# Known ways the target embeds its anti-forgery token, most specific first.
# Several may be present in one page; the first hit wins.
HTML_TOKEN_PATTERNS: list[re.Pattern] = [
    re.compile(
        r"""name=["']__RequestVerificationToken["']\s+value=["']([^"']+)["']""",
        re.IGNORECASE,
    ),
    re.compile(
        r"""<input[^>]*name=["']__RequestVerificationToken["'][^>]*value=["']([^"']+)["']""",
        re.IGNORECASE,
    ),
    re.compile(r'"__RequestVerificationToken":\s*"([^"]+)"', re.IGNORECASE),
    re.compile(
        r"""window\.antiForgeryToken\s*=\s*["']([^"']+)["']""", re.IGNORECASE
    ),
    re.compile(r"""data-antiforgery-token=["']([^"']+)["']""", re.IGNORECASE),
    re.compile(r"'__RequestVerificationToken':\s*'([^']+)'", re.IGNORECASE),
]

JSON_TOKEN_FIELDS: tuple[str, ...] = (
    "token",
    "antiforgeryToken",
    "__RequestVerificationToken",
)


def extract_from_html(html: str | None) -> str | None:
    """Pull an anti-forgery token out of an HTML (or script) document."""
    if not html:
        return None
    for pattern in HTML_TOKEN_PATTERNS:
        match = pattern.search(html)
        if match and match.group(1):
            logger.debug("HTML token matched %s", pattern.pattern[:40])
            return match.group(1)
    return None


def extract_from_json(body: str | None) -> str | None:
    """Return the first token-like field of a JSON object body.

    Anything that is not a JSON object carrying one of ``JSON_TOKEN_FIELDS``
    yields None.
    """
    if not body:
        return None
    try:
        data = json.loads(body)
    except (ValueError, TypeError):
        return None
    if not isinstance(data, dict):
        return None
    for field in JSON_TOKEN_FIELDS:
        value = data.get(field)
        if isinstance(value, str) and value:
            return value
    return None
