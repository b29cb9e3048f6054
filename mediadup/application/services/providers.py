import logging
from functools import lru_cache
from typing import Optional

from mediadup.application.services.image_fingerprint import ImageFingerprintService
from mediadup.application.services.video_fingerprint import FrameStillWriter, VideoFingerprintService
from mediadup.infrastructure.cache.fingerprint_cache import FingerprintCache, MemoryFingerprintCache
from mediadup.infrastructure.redisdb.client import get_redis
from mediadup.infrastructure.redisdb.fingerprints import RedisFingerprintCache
from mediadup.infrastructure.settings import Settings

"""
Arma cache y servicios a partir de Settings (inyección explícita, sin globales en el core).
"""

logger = logging.getLogger(__name__)

@lru_cache
def _memory_cache(max_entries: int) -> MemoryFingerprintCache:
    """Un cache en memoria por proceso (por tamaño configurado)."""

    return MemoryFingerprintCache(max_entries=max_entries)

def build_cache(settings: Settings) -> Optional[FingerprintCache]:
    """
    Returns:
        El cache configurado, o None si está desactivado.
    """

    if not settings.FINGERPRINT_CACHE_ENABLED:
        return None
    backend = settings.FINGERPRINT_CACHE_BACKEND.lower()
    if backend == "memory":
        return _memory_cache(settings.FINGERPRINT_CACHE_MAX_ENTRIES)
    if backend == "redis":
        return RedisFingerprintCache(get_redis(settings.REDIS_URL), ttl_s=settings.FINGERPRINT_CACHE_TTL_S)
    raise ValueError(f"FINGERPRINT_CACHE_BACKEND desconocido: {settings.FINGERPRINT_CACHE_BACKEND}")

def build_image_service(settings: Settings) -> ImageFingerprintService:
    return ImageFingerprintService(cache=build_cache(settings))

def build_video_service(settings: Settings) -> VideoFingerprintService:
    hook = None
    if settings.DEBUG_FRAMES_DIR:
        logger.info("Capturas de depuración en %s", settings.DEBUG_FRAMES_DIR)
        hook = FrameStillWriter(settings.DEBUG_FRAMES_DIR, scale=settings.DEBUG_FRAME_SCALE)
    return VideoFingerprintService(cache=build_cache(settings), debug_hook=hook)
