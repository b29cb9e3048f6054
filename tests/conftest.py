import numpy as np
import pytest

from mediadup.infrastructure.cache.fingerprint_cache import MemoryFingerprintCache
from mediadup.infrastructure.cv.pixels import PixelGrid
from mediadup.infrastructure.errors import DecodeError, SampleError


def grid_from_cells(cells):
    """64 tuplas RGB en orden row-major -> PixelGrid 8x8."""
    arr = np.array(cells, dtype=np.uint8).reshape(8, 8, 3)
    return PixelGrid.from_array(arr)


def solid_grid(rgb=(128, 128, 128), size=8):
    arr = np.empty((size, size, 3), dtype=np.uint8)
    arr[:, :] = rgb
    return PixelGrid.from_array(arr)


class FakePixelSource:
    """Fuente de píxeles que cuenta llamadas y puede fallar."""

    def __init__(self, grid=None, fail=False):
        self.grid = grid if grid is not None else solid_grid()
        self.fail = fail
        self.calls = []

    def __call__(self, path, target_w, target_h):
        self.calls.append((path, target_w, target_h))
        if self.fail:
            raise DecodeError(path, "corrupt")
        return self.grid


class FakeFrameSampler:
    def __init__(self, grid=None, fail=False):
        self.grid = grid if grid is not None else solid_grid()
        self.fail = fail
        self.calls = []

    def __call__(self, path, timestamp, target_w, target_h):
        self.calls.append((path, timestamp, target_w, target_h))
        if self.fail:
            raise SampleError(path, "unseekable")
        return self.grid


@pytest.fixture
def memory_cache():
    return MemoryFingerprintCache()
