import logging
from dataclasses import dataclass
from typing import Callable, Optional

from mediadup.infrastructure.cache.fingerprint_cache import CacheKey, FingerprintCache, HashKind
from mediadup.infrastructure.cv.image_source import load_pixels
from mediadup.infrastructure.cv.phash import HASH_LEN, INVALID_FINGERPRINT, fingerprint
from mediadup.infrastructure.cv.pixels import PixelGrid
from mediadup.infrastructure.errors import DecodeError

logger = logging.getLogger(__name__)

PixelSource = Callable[[str, int, int], PixelGrid]

@dataclass
class ImageFingerprintService:
    """
    Huella de imágenes fijas, mediada por el cache.

    Flujo:
      1) Cache lookup con (path, 0, HASH). Un HIT se devuelve tal cual, incluso 0:
         un fallo recordado no se reintenta.
      2) MISS: se pide la grilla 8x8 a la fuente de píxeles.
         Si falla la decodificación devuelve 0 y NO escribe el cache, así un fallo
         transitorio se reintenta en la siguiente llamada.
      3) Se calcula la huella y, si es válida, se guarda en el cache.
    """

    load_pixels: PixelSource = load_pixels
    cache: Optional[FingerprintCache] = None

    def fingerprint(self, path: str) -> int:
        key = CacheKey(path, 0, HashKind.HASH)
        if self.cache is not None:
            cached = self.cache.get(key)
            if cached is not None:
                return cached

        try:
            grid = self.load_pixels(path, HASH_LEN, HASH_LEN)
        except DecodeError as e:
            logger.warning("Load file: %s to pixels failed: %s", path, e.reason)
            return INVALID_FINGERPRINT

        h = fingerprint(grid)
        del grid

        if self.cache is not None and h != INVALID_FINGERPRINT:
            self.cache.set(key, h)
        return h
