from fastapi import APIRouter, Depends

from mediadup.api.http.schemas.requests import (
    ImageFingerprintRequest, VideoFrameFingerprintRequest, VideoSequenceRequest,
)
from mediadup.api.http.schemas.responses import FingerprintResponse, SequenceResponse
from mediadup.application.services.image_fingerprint import ImageFingerprintService
from mediadup.application.services.providers import build_image_service, build_video_service
from mediadup.application.services.video_fingerprint import VideoFingerprintService, sample_timestamps
from mediadup.infrastructure.bitpack import fingerprint_to_bits
from mediadup.infrastructure.cv.phash import INVALID_FINGERPRINT
from mediadup.infrastructure.settings import get_settings, Settings

router = APIRouter(tags=["fingerprints"])

"""
Router de huellas.

- Imágenes fijas: (path) -> huella 64 bits.
- Video: (path, timestamp) -> huella del frame; o secuencia muestreada.

Una huella 0 significa que el archivo no se pudo decodificar: se devuelve 200
con `valid=false`, no un error.
"""

def get_image_service(settings: Settings = Depends(get_settings)) -> ImageFingerprintService:
    return build_image_service(settings)

def get_video_service(settings: Settings = Depends(get_settings)) -> VideoFingerprintService:
    return build_video_service(settings)

def _as_response(path: str, timestamp: int, fp: int) -> FingerprintResponse:
    return FingerprintResponse(
        path=path,
        timestamp=timestamp,
        fingerprint=fp,
        hex=f"{fp:016x}",
        valid=fp != INVALID_FINGERPRINT,
        bits=fingerprint_to_bits(fp).tolist(),
    )

@router.post(
    "/fingerprints/image",
    response_model=FingerprintResponse,
    summary="Huella de una imagen fija",
)
def fingerprint_image(
    req: ImageFingerprintRequest,
    service: ImageFingerprintService = Depends(get_image_service),
) -> FingerprintResponse:
    return _as_response(req.path, 0, service.fingerprint(req.path))

@router.post(
    "/fingerprints/video",
    response_model=FingerprintResponse,
    summary="Huella de un frame de video",
)
def fingerprint_video_frame(
    req: VideoFrameFingerprintRequest,
    service: VideoFingerprintService = Depends(get_video_service),
) -> FingerprintResponse:
    return _as_response(req.path, req.timestamp, service.fingerprint_frame(req.path, req.timestamp))

@router.post(
    "/fingerprints/video/sequence",
    response_model=SequenceResponse,
    summary="Secuencia de huellas muestreadas de un video",
)
def fingerprint_video_sequence(
    req: VideoSequenceRequest,
    service: VideoFingerprintService = Depends(get_video_service),
    settings: Settings = Depends(get_settings),
) -> SequenceResponse:
    """Muestrea cada `interval_s` segundos (máx. `max_frames`) y devuelve una huella por frame."""

    interval = req.interval_s or settings.VIDEO_SAMPLE_INTERVAL_S
    max_frames = req.max_frames or settings.VIDEO_MAX_FRAMES
    timestamps = sample_timestamps(service.get_duration(req.path), interval, max_frames)
    fps = service.fingerprint_frames(req.path, timestamps)
    return SequenceResponse(
        path=req.path,
        items=[_as_response(req.path, t, fp) for t, fp in zip(timestamps, fps)],
    )
