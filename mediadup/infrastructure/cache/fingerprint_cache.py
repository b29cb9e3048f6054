import threading
from collections import OrderedDict
from enum import Enum
from typing import NamedTuple, Optional, Protocol

"""
Contrato del cache de huellas.

Clave = (ruta, timestamp, tipo). timestamp 0 para imágenes fijas.
Los valores se escriben una vez tras el primer cálculo exitoso; nunca se mutan.
Las implementaciones deben ser seguras entre hilos.
"""

class HashKind(str, Enum):
    HASH = "hash"
    PHASH = "phash"

class CacheKey(NamedTuple):
    path: str
    timestamp: int
    kind: HashKind

class FingerprintCache(Protocol):
    def get(self, key: CacheKey) -> Optional[int]: ...

    def set(self, key: CacheKey, value: int) -> None: ...

class MemoryFingerprintCache:
    """
    Cache LRU en memoria del proceso, protegido con lock.
    Con `max_entries` > 0 descarta la entrada menos usada al llenarse.
    """

    def __init__(self, max_entries: int = 0):
        self.max_entries = max_entries
        self._data: "OrderedDict[CacheKey, int]" = OrderedDict()
        self._lock = threading.Lock()

    def get(self, key: CacheKey) -> Optional[int]:
        with self._lock:
            value = self._data.get(key)
            if value is not None:
                self._data.move_to_end(key)
            return value

    def set(self, key: CacheKey, value: int) -> None:
        with self._lock:
            self._data[key] = int(value)
            self._data.move_to_end(key)
            if self.max_entries > 0:
                while len(self._data) > self.max_entries:
                    self._data.popitem(last=False)

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)

    def __contains__(self, key: CacheKey) -> bool:
        with self._lock:
            return key in self._data
