import logging
import os
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional

from mediadup.infrastructure.cache.fingerprint_cache import CacheKey, FingerprintCache, HashKind
from mediadup.infrastructure.cv.frame_sampler import get_duration_s, sample_frame, save_frame_still
from mediadup.infrastructure.cv.phash import HASH_LEN, INVALID_FINGERPRINT, fingerprint
from mediadup.infrastructure.cv.pixels import PixelGrid
from mediadup.infrastructure.errors import SampleError

logger = logging.getLogger(__name__)

FrameSampler = Callable[[str, int, int, int], PixelGrid]
FrameHook = Callable[[str, int], None]

FIRST_SAMPLE_S = 1

def sample_timestamps(duration_s: float, interval_s: int = 5, max_frames: int = 20) -> List[int]:
    """
    Timestamps (segundos enteros) 1, 1+interval, 1+2*interval, ... dentro de la duración.

    Se empieza en FIRST_SAMPLE_S: la clave (path, 0) es la de las imágenes fijas.
    Con duración desconocida (0) se devuelve sólo FIRST_SAMPLE_S; un video de
    menos de un segundo no produce muestras.
    """

    if interval_s <= 0:
        raise ValueError(f"interval_s debe ser > 0, llegó {interval_s}")
    if max_frames <= 0:
        return []
    if duration_s <= 0:
        return [FIRST_SAMPLE_S]
    out = []
    t = FIRST_SAMPLE_S
    while len(out) < max_frames and t <= duration_s:
        out.append(t)
        t += interval_s
    return out

@dataclass
class FrameStillWriter:
    """
    Hook de depuración: guarda una captura legible del frame muestreado
    en `<out_dir>/<basename>-<timestamp>.png`.
    """

    out_dir: str
    scale: int = 100

    def __call__(self, path: str, timestamp: int) -> None:
        name = f"{os.path.basename(path)}-{timestamp}.png"
        size = HASH_LEN * self.scale
        save_frame_still(path, timestamp, size, size, os.path.join(self.out_dir, name))

@dataclass
class VideoFingerprintService:
    """
    Huella de un frame de video en un timestamp, mediada por el cache.

    Mismo flujo que las imágenes fijas, con clave (path, timestamp, HASH) y
    píxeles del muestreador de frames. El hook de depuración (opcional) corre
    tras un muestreo exitoso y nunca afecta la huella ni el cache.
    """

    sample_frame: FrameSampler = sample_frame
    cache: Optional[FingerprintCache] = None
    debug_hook: Optional[FrameHook] = None
    get_duration: Callable[[str], float] = get_duration_s

    def fingerprint_frame(self, path: str, timestamp: int) -> int:
        key = CacheKey(path, int(timestamp), HashKind.HASH)
        if self.cache is not None:
            cached = self.cache.get(key)
            if cached is not None:
                return cached

        try:
            grid = self.sample_frame(path, int(timestamp), HASH_LEN, HASH_LEN)
        except SampleError as e:
            logger.warning("Sample frame: %s at %ss failed: %s", path, timestamp, e.reason)
            return INVALID_FINGERPRINT

        if self.debug_hook is not None:
            self._run_debug_hook(path, int(timestamp))

        h = fingerprint(grid)
        del grid

        if self.cache is not None and h != INVALID_FINGERPRINT:
            self.cache.set(key, h)
        return h

    def fingerprint_frames(self, path: str, timestamps: Iterable[int]) -> List[int]:
        return [self.fingerprint_frame(path, t) for t in timestamps]

    def fingerprint_video(self, path: str, interval_s: int = 5, max_frames: int = 20) -> List[int]:
        """Secuencia de huellas muestreando cada `interval_s` segundos (máx. `max_frames`)."""

        duration = self.get_duration(path)
        return self.fingerprint_frames(path, sample_timestamps(duration, interval_s, max_frames))

    def _run_debug_hook(self, path: str, timestamp: int) -> None:
        try:
            self.debug_hook(path, timestamp)
        except Exception as e:
            logger.warning("Debug still de %s en %ss falló: %s", path, timestamp, e)
