import os

import cv2
import numpy as np
import pytest

from mediadup.application.services.image_fingerprint import ImageFingerprintService
from mediadup.application.services.video_fingerprint import VideoFingerprintService
from mediadup.infrastructure.cv.frame_sampler import get_duration_s, sample_frame, save_frame_still
from mediadup.infrastructure.cv.image_source import load_pixels
from mediadup.infrastructure.cv.phash import fingerprint
from mediadup.infrastructure.errors import DecodeError, SampleError


def _write_png(path, bgr):
    assert cv2.imwrite(str(path), bgr)
    return str(path)


def test_load_pixels_downscales_to_target(tmp_path):
    path = _write_png(tmp_path / "gray.png", np.full((16, 16, 3), 128, dtype=np.uint8))

    grid = load_pixels(path, 8, 8)

    assert (grid.width, grid.height, grid.n_channels) == (8, 8, 3)
    assert (grid.to_array() == 128).all()
    assert fingerprint(grid) == 0xFFFFFFFFFFFFFFFF


def test_load_pixels_returns_rgb_order(tmp_path):
    bgr = np.zeros((8, 8, 3), dtype=np.uint8)
    bgr[..., 0] = 255  # azul en BGR
    grid = load_pixels(_write_png(tmp_path / "blue.png", bgr), 8, 8)

    assert tuple(grid.to_array()[0, 0]) == (0, 0, 255)


def test_quadrant_image_fingerprint(tmp_path):
    bgr = np.zeros((64, 64, 3), dtype=np.uint8)
    bgr[:32, :32] = 255
    path = _write_png(tmp_path / "quadrant.png", bgr)

    assert fingerprint(load_pixels(path, 8, 8)) == 0x0F0F0F0F


def test_load_pixels_missing_file(tmp_path):
    with pytest.raises(DecodeError):
        load_pixels(str(tmp_path / "nope.png"), 8, 8)


def test_load_pixels_corrupt_file(tmp_path):
    path = tmp_path / "corrupt.png"
    path.write_bytes(b"not an image at all")
    with pytest.raises(DecodeError):
        load_pixels(str(path), 8, 8)


def test_image_service_end_to_end(tmp_path, memory_cache):
    good = _write_png(tmp_path / "gray.png", np.full((20, 30, 3), 90, dtype=np.uint8))
    bad = tmp_path / "bad.jpg"
    bad.write_bytes(b"\x00\x01")
    service = ImageFingerprintService(cache=memory_cache)

    assert service.fingerprint(good) == 0xFFFFFFFFFFFFFFFF
    assert service.fingerprint(str(bad)) == 0
    assert len(memory_cache) == 1


def _latin1_name(tmp_path, name: bytes) -> str:
    """Ruta con bytes no UTF-8 (como la devuelve os.listdir en Linux)."""

    return os.fsdecode(os.path.join(os.fsencode(str(tmp_path)), name))


def test_load_pixels_non_utf8_filename(tmp_path):
    path = _latin1_name(tmp_path, b"foto-\xe9.png")
    ok, buf = cv2.imencode(".png", np.full((16, 16, 3), 128, dtype=np.uint8))
    assert ok
    buf.tofile(path)

    grid = load_pixels(path, 8, 8)

    assert (grid.to_array() == 128).all()
    assert ImageFingerprintService().fingerprint(path) == 0xFFFFFFFFFFFFFFFF


def test_load_pixels_empty_file(tmp_path):
    path = tmp_path / "empty.png"
    path.write_bytes(b"")
    with pytest.raises(DecodeError):
        load_pixels(str(path), 8, 8)


def test_sample_frame_missing_file(tmp_path):
    with pytest.raises(SampleError):
        sample_frame(str(tmp_path / "nope.mp4"), 1, 8, 8)


def test_sample_frame_corrupt_file(tmp_path):
    path = tmp_path / "corrupt.mp4"
    path.write_bytes(b"definitely not a video")
    with pytest.raises(SampleError):
        sample_frame(str(path), 0, 8, 8)


def test_sample_frame_negative_timestamp(tmp_path):
    path = tmp_path / "any.mp4"
    path.write_bytes(b"x")
    with pytest.raises(SampleError):
        sample_frame(str(path), -1, 8, 8)


def test_video_service_swallows_sample_errors(tmp_path):
    service = VideoFingerprintService()
    assert service.fingerprint_frame(str(tmp_path / "nope.mp4"), 5) == 0


def test_non_utf8_video_is_a_sample_error(tmp_path):
    path = _latin1_name(tmp_path, b"clip-\xe9.mp4")
    with open(path, "wb") as f:
        f.write(b"not decoded")

    with pytest.raises(SampleError):
        sample_frame(path, 1, 8, 8)
    assert get_duration_s(path) == 0.0
    assert VideoFingerprintService().fingerprint_frame(path, 1) == 0


@pytest.fixture
def gray_video(tmp_path):
    path = str(tmp_path / "gray.avi")
    writer = cv2.VideoWriter(path, cv2.VideoWriter_fourcc(*"MJPG"), 10.0, (32, 32))
    if not writer.isOpened():
        pytest.skip("OpenCV sin escritor MJPG")
    frame = np.full((32, 32, 3), 128, dtype=np.uint8)
    for _ in range(30):
        writer.write(frame)
    writer.release()
    return path


def test_sample_frame_from_real_video(gray_video):
    grid = sample_frame(gray_video, 1, 8, 8)
    assert (grid.width, grid.height) == (8, 8)
    # un frame uniforme tiene la misma luma en todas las celdas
    assert fingerprint(grid) == 0xFFFFFFFFFFFFFFFF
    assert get_duration_s(gray_video) == pytest.approx(3.0, abs=0.2)


def test_save_frame_still_writes_png(gray_video, tmp_path):
    out = save_frame_still(gray_video, 1, 80, 80, str(tmp_path / "debug" / "gray.avi-1.png"))
    still = cv2.imread(out)
    assert still.shape == (80, 80, 3)
