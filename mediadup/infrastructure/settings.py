from pydantic import Field
from pydantic_settings import BaseSettings
from functools import lru_cache

"""
Configuración centralizada (se carga de .env si existe).
"""

class Settings(BaseSettings):
    REDIS_URL: str = "redis://localhost:6379/0"

    # Cache de huellas
    FINGERPRINT_CACHE_ENABLED: bool = True
    FINGERPRINT_CACHE_BACKEND: str = "redis"  # "redis" | "memory"
    FINGERPRINT_CACHE_TTL_S: int = 0  # 0 = sin expiración
    FINGERPRINT_CACHE_MAX_ENTRIES: int = Field(100_000, ge=0)  # backend "memory"; 0 = sin límite

    # Comparación
    HASH_COMPARE_AREA: int = Field(0, ge=0, le=4)
    HASH_SIMILAR_MAX_DISTANCE: int = Field(5, ge=0, le=64)

    # Muestreo de video
    VIDEO_SAMPLE_INTERVAL_S: int = 5
    VIDEO_MAX_FRAMES: int = 20
    SEQ_BIT_TOLERANCE: int = 5
    SEQ_WINDOW: int = 2

    # Capturas de depuración (None = desactivado)
    DEBUG_FRAMES_DIR: str | None = None
    DEBUG_FRAME_SCALE: int = 100

    LOG_LEVEL: str = "INFO"

    # Worker (Redis Streams)
    WORKER_STREAM: str = "queue:fingerprint"
    WORKER_GROUP: str = "g1"

    class Config:
        env_file = ".env"

@lru_cache
def get_settings() -> Settings:
    """Singleton de Settings para inyectar en FastAPI."""

    return Settings()
