from pydantic import BaseModel
from typing import List

class FingerprintResponse(BaseModel):
    """
    Huella calculada.
    - fingerprint: entero de 64 bits (0 = no se pudo calcular).
    - hex: la misma huella en 16 dígitos hex.
    - valid: False si fingerprint == 0.
    - bits: los 64 bits (0/1), bit i = celda i de la grilla 8x8 en orden row-major.
    """
    path: str
    timestamp: int
    fingerprint: int
    hex: str
    valid: bool
    bits: List[int]

    model_config = {
        "json_schema_extra": {
            "examples": [{
                "path": "/data/photos/IMG_0001.jpg",
                "timestamp": 0,
                "fingerprint": 18446744073709551615,
                "hex": "ffffffffffffffff",
                "valid": True,
                "bits": [1] * 64,
            }]
        }
    }

class SequenceResponse(BaseModel):
    path: str
    items: List[FingerprintResponse]

class CompareResponse(BaseModel):
    """
    Resultado de comparar dos huellas.
    - distance: bits distintos tras la máscara (64 = incomparable).
    - similarity_percent: 0..100.
    - similar: distance <= HASH_SIMILAR_MAX_DISTANCE y ambas válidas.
    """
    distance: int
    similarity_percent: float
    mode: int
    similar: bool
