import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from mediadup.api.http.routers.fingerprint import router as fingerprint_router
from mediadup.api.http.routers.compare import router as compare_router
from mediadup.infrastructure.settings import get_settings

"""
Punto de entrada de la app FastAPI.
"""

@asynccontextmanager
async def lifespan(app: FastAPI):
    """En startup configura logging según LOG_LEVEL."""
    settings = get_settings()
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger(__name__).info(
        "mediadup listo (cache=%s, compare_area=%d)",
        settings.FINGERPRINT_CACHE_BACKEND if settings.FINGERPRINT_CACHE_ENABLED else "off",
        settings.HASH_COMPARE_AREA,
    )
    yield

app = FastAPI(title="mediadup fingerprint service", version="1.0.0", lifespan=lifespan)

app.include_router(fingerprint_router, prefix="/api")
app.include_router(compare_router, prefix="/api")

@app.get("/health", tags=["health"])
def health():
    """Healthcheck simple para liveness/readiness."""

    return {"status": "ok"}
