from dataclasses import dataclass
import numpy as np

"""
Grilla de píxeles independiente de la librería de decodificación.

Buffer inmutable RGB de 8 bits por canal, row-major, con `rowstride` que puede
incluir padding al final de cada fila.
"""

@dataclass(frozen=True)
class PixelGrid:
    data: bytes
    width: int
    height: int
    rowstride: int
    n_channels: int = 3

    @classmethod
    def from_array(cls, rgb: np.ndarray) -> "PixelGrid":
        """Construye la grilla desde un ndarray (H, W, C) uint8 en orden RGB."""

        if rgb.ndim != 3 or rgb.dtype != np.uint8:
            raise ValueError(f"se esperaba ndarray (H, W, C) uint8, llegó {rgb.shape} {rgb.dtype}")
        h, w, c = rgb.shape
        arr = np.ascontiguousarray(rgb)
        return cls(data=arr.tobytes(), width=w, height=h, rowstride=w * c, n_channels=c)

    def to_array(self) -> np.ndarray:
        """Vista (H, W, C) uint8 sin el padding de fila."""

        if self.n_channels < 3:
            raise ValueError(f"se requieren al menos 3 canales RGB, hay {self.n_channels}")
        row_bytes = self.width * self.n_channels
        if self.rowstride < row_bytes:
            raise ValueError(f"rowstride {self.rowstride} < width*n_channels {row_bytes}")
        needed = self.rowstride * (self.height - 1) + row_bytes
        if len(self.data) < needed:
            raise ValueError(f"buffer de {len(self.data)} bytes, se necesitan {needed}")

        buf = np.frombuffer(self.data, dtype=np.uint8, count=needed)
        # La última fila puede venir sin padding
        padded = np.zeros(self.rowstride * self.height, dtype=np.uint8)
        padded[:needed] = buf
        rows = padded.reshape(self.height, self.rowstride)[:, :row_bytes]
        return rows.reshape(self.height, self.width, self.n_channels)
