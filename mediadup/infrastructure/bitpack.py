import numpy as np

FINGERPRINT_BYTES = 8

def pack_fingerprint(value: int) -> bytes:
    """Huella (int 64 bits) -> 8 bytes big-endian."""

    return int(value).to_bytes(FINGERPRINT_BYTES, "big")

def unpack_fingerprint(data: bytes) -> int:
    """8 bytes big-endian -> huella (int)."""

    if len(data) != FINGERPRINT_BYTES:
        raise ValueError(f"se esperaban {FINGERPRINT_BYTES} bytes, llegaron {len(data)}")
    return int.from_bytes(data, "big")

def bits_to_fingerprint(bits_u8: np.ndarray) -> int:
    """bits_u8: shape (64,), valores 0/1; el elemento i es el bit i de la huella."""

    b = np.packbits(np.asarray(bits_u8, dtype=np.uint8), bitorder="little")
    return int.from_bytes(b.tobytes(), "little")

def fingerprint_to_bits(value: int) -> np.ndarray:
    """Huella -> (64,) uint8 0/1, bit i en la posición i."""

    arr = np.frombuffer(int(value).to_bytes(FINGERPRINT_BYTES, "little"), dtype=np.uint8)
    return np.unpackbits(arr, bitorder="little").astype(np.uint8)
