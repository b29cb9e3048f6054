import logging
import os
import time

import redis as _redis

from mediadup.application.services.image_fingerprint import ImageFingerprintService
from mediadup.application.services.providers import build_image_service, build_video_service
from mediadup.application.services.video_fingerprint import VideoFingerprintService
from mediadup.infrastructure.redisdb.client import get_redis
from mediadup.infrastructure.settings import get_settings

"""
Worker de pre-cálculo de huellas (Redis Streams).

Mensajes: {path, timestamp?, kind?}. `kind` es "image" o "video"; si falta, un
timestamp > 0 implica frame de video y si no, imagen fija (el frame en t=0 exige
`kind=video`). El resultado queda en el cache de huellas.
"""

logger = logging.getLogger("worker")

CONSUMER = os.getenv("HOSTNAME", "consumer-1")

def _d(b): return b.decode("utf-8", "surrogateescape") if isinstance(b, bytes) else b

def ensure_group(client: _redis.Redis, stream: str, group: str) -> None:
    try:
        client.xgroup_create(stream, group, id="0-0", mkstream=True)
    except _redis.ResponseError as e:
        if "BUSYGROUP" not in str(e):
            raise

def handle_message(fields: dict, images: ImageFingerprintService, videos: VideoFingerprintService) -> int:
    """
    Calcula la huella de un mensaje.

    Raises:
        ValueError: mensaje sin `path`, con `timestamp` no entero o `kind` desconocido.
    """

    data = {_d(k): _d(v) for k, v in fields.items()}
    path = data.get("path")
    if not path:
        raise ValueError(f"mensaje sin path: {data}")
    timestamp = int(data.get("timestamp") or 0)
    kind = data.get("kind") or ("video" if timestamp > 0 else "image")
    if kind == "video":
        return videos.fingerprint_frame(path, timestamp)
    if kind == "image":
        return images.fingerprint(path)
    raise ValueError(f"kind desconocido: {kind}")

def process_batch(client: _redis.Redis, stream: str, group: str, consumer: str,
                  images: ImageFingerprintService, videos: VideoFingerprintService,
                  block_ms: int = 5000) -> int:
    """Lee hasta 10 mensajes, los procesa y los confirma. Devuelve cuántos procesó."""

    resp = client.xreadgroup(group, consumer, {stream: ">"}, count=10, block=block_ms)
    if not resp:
        return 0
    n = 0
    for _stream, messages in resp:
        for msg_id, fields in messages:
            try:
                fp = handle_message(fields, images, videos)
                logger.info("processed %s -> %016x", _d(msg_id), fp)
            except ValueError as e:
                logger.warning("mensaje inválido %s: %s", _d(msg_id), e)
            client.xack(stream, group, msg_id)
            n += 1
    return n

def main():
    settings = get_settings()
    logging.basicConfig(level=settings.LOG_LEVEL.upper(),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    client = get_redis(settings.REDIS_URL)
    images = build_image_service(settings)
    videos = build_video_service(settings)

    ensure_group(client, settings.WORKER_STREAM, settings.WORKER_GROUP)
    logger.info("started (stream=%s, group=%s)", settings.WORKER_STREAM, settings.WORKER_GROUP)
    while True:
        process_batch(client, settings.WORKER_STREAM, settings.WORKER_GROUP, CONSUMER, images, videos)
        time.sleep(0.1)

if __name__ == "__main__":
    main()
