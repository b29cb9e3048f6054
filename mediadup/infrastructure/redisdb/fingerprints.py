import hashlib
import logging
from typing import Optional

import redis as _redis

from mediadup.infrastructure.bitpack import pack_fingerprint, unpack_fingerprint
from mediadup.infrastructure.cache.fingerprint_cache import CacheKey

"""
Cache de huellas en Redis.

Estructura:
- fp:{sha1(path)} (HASH) -> {
    path,
    "{kind}:{timestamp}" -> huella (8 bytes big-endian),
  }

Si Redis no responde se comporta como "sin cache": get -> miss, set -> no-op.
"""

logger = logging.getLogger(__name__)

def _b(s): return s if isinstance(s, bytes) else s.encode("utf-8", "surrogateescape")
def _sha1(text: str) -> str: return hashlib.sha1(_b(text)).hexdigest()

def _path_key(path: str) -> str:          return f"fp:{_sha1(path)}"
def _field(key: CacheKey) -> bytes:       return _b(f"{key.kind.value}:{int(key.timestamp)}")

class RedisFingerprintCache:
    def __init__(self, client: _redis.Redis, ttl_s: int = 0):
        self.client = client
        self.ttl_s = ttl_s

    def get(self, key: CacheKey) -> Optional[int]:
        try:
            raw = self.client.hget(_path_key(key.path), _field(key))
        except _redis.RedisError as e:
            logger.warning("Cache Redis no disponible (get %s): %s", key.path, e)
            return None
        if raw is None:
            return None
        try:
            return unpack_fingerprint(raw)
        except ValueError as e:
            logger.warning("Huella corrupta en cache para %s: %s", key.path, e)
            return None

    def set(self, key: CacheKey, value: int) -> None:
        k = _path_key(key.path)
        pipe = self.client.pipeline()
        pipe.hset(k, mapping={
            b"path":     _b(key.path),
            _field(key): pack_fingerprint(value),
        })
        if self.ttl_s > 0:
            pipe.expire(k, self.ttl_s)
        try:
            pipe.execute()
        except _redis.RedisError as e:
            logger.warning("Cache Redis no disponible (set %s): %s", key.path, e)
