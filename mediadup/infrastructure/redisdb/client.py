from functools import lru_cache
import redis as _redis

"""
Cliente Redis compartido por URL.
decode_responses=False porque guardamos huellas binarias; decodificamos a mano.
"""

@lru_cache
def get_redis(url: str = "redis://localhost:6379/0") -> _redis.Redis:
    return _redis.from_url(url, decode_responses=False)
