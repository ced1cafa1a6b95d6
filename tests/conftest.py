# tests/conftest.py

import pytest
import numpy as np
import cv2


def solid_pixels(color, size=(64, 48)):
    """BGR image of a single color"""
    w, h = size
    img = np.zeros((h, w, 3), dtype=np.uint8)
    img[:, :] = color
    return img


@pytest.fixture
def write_image(tmp_path):
    """Write a solid-color PNG under tmp_path and return its path"""
    def _write(name, color, size=(64, 48)):
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        assert cv2.imwrite(str(path), solid_pixels(color, size))
        return str(path)
    return _write


@pytest.fixture
def similar_images(write_image, tmp_path):
    """a.png and b.png nearly identical, c.png very different"""
    a = write_image("a.png", (30, 30, 200))
    b = write_image("b.png", (30, 30, 204), size=(128, 96))
    c = write_image("c.png", (20, 220, 20))
    return tmp_path, a, b, c
