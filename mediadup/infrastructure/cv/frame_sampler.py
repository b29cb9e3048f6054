import os
import cv2

from mediadup.infrastructure.cv.image_source import to_rgb_grid
from mediadup.infrastructure.cv.pixels import PixelGrid
from mediadup.infrastructure.errors import SampleError

"""
Muestreo de frames de video (OpenCV).

- `sample_frame`: frame en `timestamp` (segundos) reducido a RGB `w` x `h`.
- `save_frame_still`: mismo frame a tamaño legible, a un PNG (sólo depuración).
- `get_duration_s`: duración del video.

El VideoCapture se libera siempre, haya o no error. VideoCapture sólo recibe
rutas UTF-8 válidas: con nombres que no lo son, OpenCV aborta el proceso.
"""

def _is_cv_path(path: str) -> bool:
    try:
        path.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True

def get_duration_s(path: str) -> float:
    """Duración del video en segundos (0 si FPS inválido o ruta no utilizable)."""

    if not _is_cv_path(path):
        return 0.0
    cap = cv2.VideoCapture(path)
    try:
        fps = cap.get(cv2.CAP_PROP_FPS) or 0.0
        frames = cap.get(cv2.CAP_PROP_FRAME_COUNT) or 0.0
    finally:
        cap.release()
    return (frames / fps) if fps > 0 else 0.0

def _read_frame(path: str, timestamp: int):
    """Frame BGR en `timestamp` segundos; SampleError si no se puede leer."""

    if not os.path.isfile(path):
        raise SampleError(path, "no existe")
    if timestamp < 0:
        raise SampleError(path, f"timestamp negativo: {timestamp}")
    if not _is_cv_path(path):
        raise SampleError(path, "ruta no UTF-8, OpenCV no puede abrirla")

    cap = cv2.VideoCapture(path)
    try:
        if not cap.isOpened():
            raise SampleError(path, "OpenCV no pudo abrir el video")
        cap.set(cv2.CAP_PROP_POS_MSEC, timestamp * 1000.0)
        ok, frame = cap.read()
    finally:
        cap.release()

    if not ok or frame is None:
        raise SampleError(path, f"sin frame en t={timestamp}s")
    return frame

def sample_frame(path: str, timestamp: int, target_w: int, target_h: int) -> PixelGrid:
    return to_rgb_grid(_read_frame(path, timestamp), target_w, target_h)

def save_frame_still(path: str, timestamp: int, width: int, height: int, out_path: str) -> str:
    """Escribe el frame en `timestamp` como PNG `width` x `height` y devuelve la ruta."""

    frame = _read_frame(path, timestamp)
    still = cv2.resize(frame, (width, height), interpolation=cv2.INTER_AREA)
    ok, buf = cv2.imencode(".png", still)
    if not ok:
        raise SampleError(path, f"no se pudo codificar {out_path}")
    os.makedirs(os.path.dirname(out_path) or ".", exist_ok=True)
    buf.tofile(out_path)
    return out_path
