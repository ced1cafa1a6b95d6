# image_grouper/core/thumbnail.py

import logging
from typing import Optional

import numpy as np
from PIL import Image

logger = logging.getLogger(__name__)

# Single-channel modes wider than 8 bits; Pillow's convert() clips these
# at 255 instead of rescaling them
WIDE_INTEGER_MODES = ('I;16', 'I;16L', 'I;16B', 'I;16N', 'I')


def _to_8bit_gray(image: Image.Image) -> Image.Image:
    """
    Rescale a 16-bit integer or floating point grayscale image to mode L

    Integer modes are read as 16-bit samples (0-65535), float mode as
    0.0-1.0 intensities.
    """
    values = np.asarray(image).astype(np.float64)
    if image.mode == 'F':
        values = np.clip(values, 0.0, 1.0) * 255.0
    else:
        values = np.clip(values, 0, 65535) / 257.0

    return Image.fromarray(np.round(values).astype(np.uint8))


class Thumbnail:
    """
    Fixed-size RGB downsample of an image, used as a comparison fingerprint
    """

    SIZE = 32
    CHANNELS = 3
    # Total number of channel values in a thumbnail
    TOTAL_CHANNELS = SIZE * SIZE * CHANNELS

    __slots__ = ('_pixels',)

    def __init__(self, pixels: np.ndarray):
        if pixels.shape != (self.SIZE, self.SIZE, self.CHANNELS):
            raise ValueError(
                f"Thumbnail must be {self.SIZE}x{self.SIZE}x{self.CHANNELS}, "
                f"got {pixels.shape}"
            )
        pixels = np.array(pixels, dtype=np.uint8, copy=True)
        pixels.flags.writeable = False
        self._pixels = pixels

    @classmethod
    def from_image(cls, image: Image.Image) -> 'Thumbnail':
        """
        Build a thumbnail from a decoded image of any size and mode.

        The image is converted to 8-bit RGB first (palette and 1-bit images
        cannot be resampled with a smoothing filter), then resized to
        exactly 32x32 with the bilinear (triangle) filter without keeping
        the aspect ratio.
        """
        if image.mode in WIDE_INTEGER_MODES or image.mode == 'F':
            image = _to_8bit_gray(image)
        if image.mode != 'RGB':
            image = image.convert('RGB')

        resized = image.resize((cls.SIZE, cls.SIZE), Image.Resampling.BILINEAR)
        return cls(np.asarray(resized, dtype=np.uint8))

    @property
    def pixels(self) -> np.ndarray:
        """Read-only (32, 32, 3) uint8 array"""
        return self._pixels

    def __eq__(self, other):
        if not isinstance(other, Thumbnail):
            return NotImplemented
        return np.array_equal(self._pixels, other._pixels)

    def __hash__(self):
        return hash(self._pixels.tobytes())

    def __repr__(self):
        return f"Thumbnail(mean={self._pixels.mean():.1f})"


def load_thumbnail(image_path: str) -> Optional[Thumbnail]:
    """Decode an image file and thumbnail it, or None if it can't be decoded"""
    try:
        with Image.open(image_path) as img:
            return Thumbnail.from_image(img)
    except (OSError, EOFError, ValueError, SyntaxError, Image.DecompressionBombError) as e:
        # Not an image, truncated, or too large to decode
        logger.debug("Skipping %s: %s", image_path, e)
        return None
