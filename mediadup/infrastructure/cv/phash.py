import logging
import numpy as np

from mediadup.infrastructure.bitpack import bits_to_fingerprint
from mediadup.infrastructure.cv.pixels import PixelGrid

"""
Huella visual (64 bits) por umbral de luma promedio sobre una grilla 8x8.

- luma = (R*30 + G*59 + B*11) / 100, entera.
- bit i = 1 si la celda i (row-major) tiene luma >= promedio entero de la grilla.
- 0 está reservado como "huella inválida" (no se pudo calcular).

Los pesos y el redondeo deben mantenerse exactos: las huellas ya cacheadas
dependen de ellos bit a bit.
"""

logger = logging.getLogger(__name__)

HASH_LEN = 8
FINGERPRINT_BITS = HASH_LEN * HASH_LEN
INVALID_FINGERPRINT = 0

def _luma(rgb: np.ndarray) -> np.ndarray:
    """Luma entera por pixel (H, W) a partir de (H, W, >=3) uint8."""

    px = rgb[..., :3].astype(np.int64)
    return (px[..., 0] * 30 + px[..., 1] * 59 + px[..., 2] * 11) // 100

def fingerprint(grid: PixelGrid) -> int:
    """
    Calcula la huella de una grilla HASH_LEN x HASH_LEN.

    Raises:
        ValueError: si la grilla no es 8x8 RGB(A) de 8 bits. Una grilla mayor
        desbordaría los 64 bits de la huella.
    """

    if grid.width != HASH_LEN or grid.height != HASH_LEN:
        raise ValueError(
            f"la grilla debe ser {HASH_LEN}x{HASH_LEN}, llegó {grid.width}x{grid.height}"
        )

    grays = _luma(grid.to_array()).reshape(-1)
    avg = int(grays.sum()) // grays.size
    return bits_to_fingerprint(grays >= avg)

def buffer_fingerprint(data: bytes) -> int:
    """
    Huella de un buffer RGB empaquetado de HASH_LEN*HASH_LEN*3 bytes.

    Returns:
        La huella, o INVALID_FINGERPRINT si el buffer no tiene el tamaño esperado.
    """

    expected = FINGERPRINT_BITS * 3
    if len(data) != expected:
        logger.warning("Buffer inline de %d bytes, se esperaban %d", len(data), expected)
        return INVALID_FINGERPRINT

    grid = PixelGrid(data=bytes(data), width=HASH_LEN, height=HASH_LEN, rowstride=HASH_LEN * 3)
    return fingerprint(grid)
