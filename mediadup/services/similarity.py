from enum import IntEnum
from typing import Sequence

from mediadup.infrastructure.cv.phash import FINGERPRINT_BITS, INVALID_FINGERPRINT

"""
Distancia entre huellas con tolerancia por máscara de bits.

La máscara elige qué posiciones de bit participan; los bits enmascarados
nunca suman a la distancia.
"""

MAX_DISTANCE = FINGERPRINT_BITS

class ToleranceMode(IntEnum):
    FULL = 0
    IGNORE_LOW_BYTE = 1
    IGNORE_HIGH_BYTE = 2
    SPARSE_HIGH = 3
    SPARSE_LOW = 4

_FULL_MASK = 0xFFFFFFFFFFFFFFFF

COMPARE_MASKS = {
    ToleranceMode.FULL: _FULL_MASK,
    ToleranceMode.IGNORE_LOW_BYTE: 0xFFFFFFFFFFFFFF00,
    ToleranceMode.IGNORE_HIGH_BYTE: 0x00FFFFFFFFFFFFFF,
    ToleranceMode.SPARSE_HIGH: 0xFCFCFCFCFCFCFCFC,
    ToleranceMode.SPARSE_LOW: 0x3F3F3F3F3F3F3F3F,
}

def mask_for(mode: int) -> int:
    """Máscara del modo; un modo desconocido compara todos los bits."""

    return COMPARE_MASKS.get(mode, _FULL_MASK)

def distance(a: int, b: int, mode: int = ToleranceMode.FULL) -> int:
    """
    Bits distintos entre `a` y `b` tras aplicar la máscara de `mode`.

    Returns:
        0..64. Si alguna huella es inválida (0) devuelve MAX_DISTANCE.
    """

    if a == INVALID_FINGERPRINT or b == INVALID_FINGERPRINT:
        return MAX_DISTANCE
    return ((a ^ b) & mask_for(mode)).bit_count()

def similarity_percent(a: int, b: int, mode: int = ToleranceMode.FULL) -> float:
    """Similitud en % = 100 - distancia%; 0.0 si alguna huella es inválida."""

    if a == INVALID_FINGERPRINT or b == INVALID_FINGERPRINT:
        return 0.0
    return round(100.0 * (1.0 - distance(a, b, mode) / float(MAX_DISTANCE)), 2)

def is_similar(a: int, b: int, mode: int = ToleranceMode.FULL, max_distance: int = 5) -> bool:
    if a == INVALID_FINGERPRINT or b == INVALID_FINGERPRINT:
        return False
    return distance(a, b, mode) <= max_distance

def sequence_match_percent(
    seq_a: Sequence[int],
    seq_b: Sequence[int],
    mode: int = ToleranceMode.FULL,
    bit_tolerance: int = 5,
    window: int = 2,
) -> float:
    """
    % de huellas de A que encuentran "mejor match" en B dentro de una ventana temporal.

    Args:
        bit_tolerance: distancia máxima para considerar match (0..64).
        window: desfase permitido +/-window posiciones (para trims/speed).

    Returns:
        Porcentaje 0..100. Las huellas inválidas nunca hacen match.
    """

    if not seq_a or not seq_b:
        return 0.0
    matches = 0
    for i, h_a in enumerate(seq_a):
        if h_a == INVALID_FINGERPRINT:
            continue
        start = max(0, i - window)
        end = min(len(seq_b), i + window + 1)
        best = MAX_DISTANCE + 1

        for j in range(start, end):
            if seq_b[j] == INVALID_FINGERPRINT:
                continue
            dist = distance(h_a, seq_b[j], mode)
            if dist < best:
                best = dist

        if best <= bit_tolerance:
            matches += 1

    return round(100.0 * matches / len(seq_a), 2)
