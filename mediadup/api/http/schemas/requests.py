from pydantic import BaseModel, Field, AliasChoices, ConfigDict
from typing import Optional

class ImageFingerprintRequest(BaseModel):
    """Ruta local de la imagen a procesar."""

    model_config = ConfigDict(json_schema_extra={"example": {"path": "/data/photos/IMG_0001.jpg"}})

    path: str = Field(..., min_length=1, description="Ruta del archivo", validation_alias=AliasChoices("path", "file"))

class VideoFrameFingerprintRequest(BaseModel):
    """
    Frame de video a procesar.

    Campos:
      - path: ruta local del video.
      - timestamp: segundo del frame a muestrear (>= 0).
    """
    model_config = ConfigDict(json_schema_extra={"example": {"path": "/data/videos/clip.mp4", "timestamp": 30}})

    path: str = Field(..., min_length=1, description="Ruta del video", validation_alias=AliasChoices("path", "file"))
    timestamp: int = Field(..., ge=0, description="Segundo del frame", validation_alias=AliasChoices("timestamp", "time"))

class VideoSequenceRequest(BaseModel):
    path: str = Field(..., min_length=1, description="Ruta del video")
    interval_s: Optional[int] = Field(None, gt=0, description="Segundos entre muestras (default: VIDEO_SAMPLE_INTERVAL_S)")
    max_frames: Optional[int] = Field(None, gt=0, le=500, description="Máximo de frames (default: VIDEO_MAX_FRAMES)")

class CompareRequest(BaseModel):
    """
    Dos huellas a comparar.
    - mode: modo de tolerancia 0..4; si falta se usa HASH_COMPARE_AREA.
    """
    model_config = ConfigDict(json_schema_extra={
        "example": {"a": 18446744073709551615, "b": 18446744073709551360, "mode": 1}
    })

    a: int = Field(..., ge=0, lt=2**64, description="Huella A (0 = inválida)")
    b: int = Field(..., ge=0, lt=2**64, description="Huella B (0 = inválida)")
    mode: Optional[int] = Field(None, ge=0, le=4, description="Modo de tolerancia")
