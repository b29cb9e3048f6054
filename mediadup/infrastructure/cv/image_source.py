import os
import cv2
import numpy as np

from mediadup.infrastructure.cv.pixels import PixelGrid
from mediadup.infrastructure.errors import DecodeError

"""
Fuente de píxeles para imágenes fijas (OpenCV).
Decodifica, reduce a `target_w` x `target_h` con INTER_AREA y entrega RGB.
"""

def to_rgb_grid(image_bgr: np.ndarray, target_w: int, target_h: int) -> PixelGrid:
    """Reduce un frame BGR(A)/gris de OpenCV a una PixelGrid RGB del tamaño pedido."""

    if image_bgr.ndim == 2:
        rgb = cv2.cvtColor(image_bgr, cv2.COLOR_GRAY2RGB)
    elif image_bgr.shape[2] == 4:
        rgb = cv2.cvtColor(image_bgr, cv2.COLOR_BGRA2RGB)
    else:
        rgb = cv2.cvtColor(image_bgr, cv2.COLOR_BGR2RGB)
    resized = cv2.resize(rgb, (target_w, target_h), interpolation=cv2.INTER_AREA)
    return PixelGrid.from_array(resized)

def load_pixels(path: str, target_w: int, target_h: int) -> PixelGrid:
    """
    Carga `path` como grilla RGB `target_w` x `target_h`.

    Raises:
        DecodeError: archivo inexistente, corrupto o formato no soportado.
    """

    if not os.path.isfile(path):
        raise DecodeError(path, "no existe")
    # La ruta la abre Python: OpenCV no acepta nombres que no sean UTF-8
    try:
        raw = np.fromfile(path, dtype=np.uint8)
    except OSError as e:
        raise DecodeError(path, f"no se pudo leer: {e}") from e
    if raw.size == 0:
        raise DecodeError(path, "archivo vacío")
    image = cv2.imdecode(raw, cv2.IMREAD_COLOR)
    if image is None or image.size == 0:
        raise DecodeError(path, "OpenCV no pudo decodificar la imagen")
    return to_rgb_grid(image, target_w, target_h)
