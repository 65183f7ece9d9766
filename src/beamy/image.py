"""
Pixel writer boundary: hands the rendered byte buffer to Pillow.
"""
import os
import numpy as np
import PIL.Image
from beamy import constants


def to_image(buffer, width, height) -> PIL.Image.Image:
    """Wrap a row-major interleaved RGB buffer as a Pillow image."""
    pixels = np.asarray(buffer, dtype=np.uint8)
    expected = width * height * constants.CHANNELS
    if pixels.size != expected:
        raise ValueError(f"Buffer holds {pixels.size} bytes, expected {expected} for {width}x{height} RGB")
    return PIL.Image.fromarray(pixels.reshape(height, width, constants.CHANNELS))


def save_png(buffer, width, height, path):
    """Encode the buffer losslessly as PNG at `path`."""
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    to_image(buffer, width, height).save(path, format="PNG")
