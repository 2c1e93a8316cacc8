import logging

from fastapi import FastAPI

from parking_radar.config import settings
from parking_radar.models import HealthResponse
from parking_radar.routes import router

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s — %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="parking radar",
    description="Proxy for the Taipei parking availability service. "
    "The upstream has no public API: every request re-creates a browser-like "
    "session and reverse-engineers its anti-forgery token before asking for "
    "nearby parking lots.",
    version="0.1.0",
)
app.include_router(router)


@app.get("/health", response_model=HealthResponse, tags=["system"])
def health():
    return {"status": "ok", "target": settings.target_origin}
