"""Browser-like request header profiles for each kind of outbound call.

The target's front end only hands out a usable session when the traffic looks
like a real visit, so every call carries the headers a browser would send for
that kind of request.
"""

ACCEPT_HTML = "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"
ACCEPT_ANY = "*/*"
ACCEPT_LANGUAGE = "zh-TW,zh;q=0.9,en;q=0.8,en-GB;q=0.7,en-US;q=0.6"

EXTERNAL_REFERER = "https://www.google.com/"


def entry_headers(user_agent: str) -> dict[str, str]:
    """A fresh top-level visit arriving from a search engine."""
    return {
        "Accept": ACCEPT_HTML,
        "Accept-Language": ACCEPT_LANGUAGE,
        "User-Agent": user_agent,
        "Referer": EXTERNAL_REFERER,
        "Sec-Fetch-Site": "cross-site",
        "Sec-Fetch-Mode": "navigate",
        "Sec-Fetch-Dest": "document",
        "Upgrade-Insecure-Requests": "1",
    }


def same_origin_navigation_headers(user_agent: str, origin: str) -> dict[str, str]:
    return {
        "Accept": ACCEPT_HTML,
        "Accept-Language": ACCEPT_LANGUAGE,
        "User-Agent": user_agent,
        "Referer": origin + "/",
        "Sec-Fetch-Site": "same-origin",
        "Sec-Fetch-Mode": "navigate",
        "Sec-Fetch-Dest": "document",
        "Upgrade-Insecure-Requests": "1",
    }


def ajax_headers(user_agent: str, origin: str) -> dict[str, str]:
    return {
        "Accept": ACCEPT_ANY,
        "Accept-Language": ACCEPT_LANGUAGE,
        "User-Agent": user_agent,
        "Referer": origin + "/",
        "Sec-Fetch-Site": "same-origin",
        "Sec-Fetch-Mode": "cors",
        "Sec-Fetch-Dest": "empty",
        "X-Requested-With": "XMLHttpRequest",
    }


def form_headers(user_agent: str, origin: str, cookie_header: str) -> dict[str, str]:
    headers = {
        "Content-Type": "application/x-www-form-urlencoded",
        "Accept": ACCEPT_HTML,
        "User-Agent": user_agent,
        "Referer": origin + "/",
    }
    if cookie_header:
        headers["Cookie"] = cookie_header
    return headers


def api_headers(user_agent: str, origin: str) -> dict[str, str]:
    return {
        "Accept": ACCEPT_ANY,
        "Content-Type": "application/json",
        "User-Agent": user_agent,
        "Referer": origin + "/",
        "Accept-Language": ACCEPT_LANGUAGE,
        "Sec-Fetch-Site": "same-origin",
        "Sec-Fetch-Mode": "cors",
        "Sec-Fetch-Dest": "empty",
    }
