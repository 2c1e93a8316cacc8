import os

# Paths under the target origin that have been seen (or guessed) to issue an
# anti-forgery token. Tried in this order; the real one is undocumented.
TOKEN_CANDIDATES: list[str] = [
    "/antiforgery/token",
    "/antiforgery/get",
    "/api/antiforgery/token",
    "/Home/GetAntiForgeryToken",
    "/api/token/antiforgery",
    "/token/csrf",
    "/Home/AntiForgeryToken",
    "/w1/InitToken",
]

# Cookie names that may carry the token, highest priority first.
TOKEN_COOKIE_NAMES: list[str] = [
    "XSRF-TOKEN",
    "RequestVerificationToken",
    "__RequestVerificationToken",
    "CSRF-TOKEN",
    "X-CSRF-TOKEN",
]

# The target's expected header name is unknown, so the token goes out under all of them.
TOKEN_HEADER_NAMES: list[str] = [
    "X-CSRF-TOKEN",
    "RequestVerificationToken",
    "X-XSRF-TOKEN",
    "__RequestVerificationToken",
]

# Some deployments only render the token after a state-changing request.
FORM_PROBE_PATH = "/Home/Index"

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) ParkingRadar/1.0"
)


class Settings:
    def __init__(self):
        self.target_origin: str = os.environ.get(
            "TARGET_ORIGIN", "https://itaipeiparking.pma.gov.taipei"
        ).rstrip("/")
        self.parks_path: str = "/" + os.environ.get(
            "PARKS_PATH", "/w1/GetParks"
        ).strip("/")
        self.request_timeout: float = float(os.environ.get("REQUEST_TIMEOUT", "8"))
        self.user_agent: str = os.environ.get("USER_AGENT", DEFAULT_USER_AGENT)
        self.log_level: str = os.environ.get("LOG_LEVEL", "INFO")


settings = Settings()
