"""
Errores de los colaboradores de píxeles.

Nunca salen de los servicios de huella: se convierten en la huella inválida (0).
"""

class PixelSourceError(Exception):
    """No se pudo obtener una grilla de píxeles válida."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason

class DecodeError(PixelSourceError):
    """Imagen corrupta, formato no soportado o archivo ilegible."""

class SampleError(PixelSourceError):
    """No se pudo extraer el frame pedido (video ilegible o timestamp fuera de rango)."""
