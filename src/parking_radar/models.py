from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field


class MissingCoordinatesError(ValueError):
    """Raised when an inbound query lacks longitude or latitude."""


# ── Discovery ────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Token:
    value: str
    source: str  # "html", "cookie" or "endpoint:<path>"
    discovered_at: datetime = field(
        default_factory=lambda: datetime.now(timezone.utc)
    )

    @property
    def preview(self) -> str:
        return self.value[:20] + "..."


@dataclass
class DiscoveryAttempt:
    """Outcome of probing one candidate token endpoint."""

    status: int | None = None
    content_type: str | None = None
    size: str | None = None
    error: str | None = None

    def to_dict(self) -> dict:
        if self.error is not None:
            return {"error": self.error}
        return {
            "status": self.status,
            "contentType": self.content_type,
            "size": self.size,
        }


# ── Inbound query ────────────────────────────────────────────────────


def _first_present(params: Mapping[str, str], *names: str, default: str = "") -> str:
    # A present-but-empty parameter still wins over its alias.
    for name in names:
        value = params.get(name)
        if value is not None:
            return value
    return default


class ParkingQuery(BaseModel):
    model_config = ConfigDict(frozen=True)

    longitude: str = Field(..., description="Longitude, passed through verbatim")
    latitude: str = Field(..., description="Latitude, passed through verbatim")
    vehicle_type: str = Field("car", description="Vehicle type understood upstream")
    radius: str = Field("5", description="Search radius understood upstream")

    @classmethod
    def from_params(cls, params: Mapping[str, str]) -> "ParkingQuery":
        """Build a query from raw query-string parameters.

        Accepts ``longitude``/``lon``, ``latitude``/``lat``,
        ``vehicle_type``/``type`` and ``radius``. Values are trimmed; only the
        presence of both coordinates is checked.
        """
        lon = _first_present(params, "longitude", "lon").strip()
        lat = _first_present(params, "latitude", "lat").strip()
        vehicle_type = _first_present(params, "vehicle_type", "type", default="car")
        radius = _first_present(params, "radius", default="5")
        if not lon or not lat:
            raise MissingCoordinatesError("missing lon/lat")
        return cls(
            longitude=lon,
            latitude=lat,
            vehicle_type=vehicle_type.strip(),
            radius=radius.strip(),
        )


# ── Proxy outcome ────────────────────────────────────────────────────


@dataclass
class ProxySuccess:
    data: Any
    token: Token | None
    has_cookie: bool

    @property
    def used_token(self) -> bool:
        return self.token is not None

    def meta(self) -> dict:
        meta: dict[str, Any] = {}
        if self.token is not None:
            meta["tokenSource"] = self.token.source
        meta["hasCookie"] = self.has_cookie
        meta["usedToken"] = self.used_token
        return meta

    def to_body(self) -> dict:
        return {"ok": True, "data": self.data, "meta": self.meta()}


@dataclass
class ProxyFailure:
    status: int
    url: str
    token: Token | None
    has_cookie: bool
    diagnostics: dict
    text: str

    @property
    def used_token(self) -> bool:
        return self.token is not None

    def to_body(self) -> dict:
        body: dict[str, Any] = {
            "ok": False,
            "status": self.status,
            "url": self.url,
            "hasCookie": self.has_cookie,
            "usedToken": self.used_token,
        }
        if self.token is not None:
            body["tokenSource"] = self.token.source
        body["diagnostics"] = self.diagnostics
        body["text"] = self.text
        return body


ProxyResult = ProxySuccess | ProxyFailure


# ── Response schemas (OpenAPI) ───────────────────────────────────────


class ProxyMeta(BaseModel):
    tokenSource: str | None = Field(
        None,
        description="Strategy that produced the token: 'html', 'cookie' or "
        "'endpoint:<path>'. Absent when no token was used.",
        json_schema_extra={"example": "endpoint:/antiforgery/token"},
    )
    hasCookie: bool = Field(..., description="Session cookies were sent upstream")
    usedToken: bool = Field(..., description="An anti-forgery token was sent upstream")


class ParksResponse(BaseModel):
    ok: bool = Field(True)
    data: Any = Field(
        ..., description="Upstream payload: parsed JSON, or raw text if not JSON"
    )
    meta: ProxyMeta


class Diagnostics(BaseModel):
    bootStatus: int | None = Field(None, description="Status of the entry fetch")
    bootContentType: str | None = Field(None)
    bootError: str | None = Field(None, description="Entry fetch transport error")
    cookiePreview: str = Field("", description="First 200 chars of the cookie header")
    htmlPreview: str = Field("", description="First 400 chars of the entry page")
    responseHeaders: dict[str, str] = Field(default_factory=dict)
    tokenAttempts: dict[str, dict] | None = Field(
        None, description="Per-candidate token endpoint probe results"
    )


class ParksFailureResponse(BaseModel):
    ok: bool = Field(False)
    status: int = Field(..., description="Upstream HTTP status")
    url: str = Field(..., description="Upstream URL that was called")
    hasCookie: bool
    usedToken: bool
    tokenSource: str | None = None
    diagnostics: Diagnostics
    text: str = Field(..., description="First 1000 chars of the upstream body")


class ErrorResponse(BaseModel):
    ok: bool = Field(False)
    error: str = Field(..., json_schema_extra={"example": "missing lon/lat"})
    message: str | None = None


class HealthResponse(BaseModel):
    status: str = Field("ok")
    target: str = Field(..., description="Origin being proxied")
