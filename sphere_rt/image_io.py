import io
import os
import numpy as np
from PIL import Image

# Formats PIL picks from the file extension; anything else falls back to PPM
_FORMATS_BY_EXTENSION = {".ppm": "PPM", ".png": "PNG"}

def to_uint8(frame, width: int, height: int) -> np.ndarray:
    """Quantize a flat float frame buffer to an 8-bit (height, width, 3) image.

    Each channel is clamped to [0, 1] and mapped with floor(255.99 * c), so
    1.0 lands on 255 and everything below 1/255.99 on 0.
    """
    pixels = np.asarray(frame, dtype=np.float64)
    if pixels.shape != (width * height, 3):
        raise ValueError(
            f"Frame buffer shape {pixels.shape} doesn't match {width}x{height} image ({width * height}, 3)"
        )
    image_ldr = np.clip(pixels, 0.0, 1.0)
    image_uint8 = np.floor(255.99 * image_ldr).astype(np.uint8)
    return image_uint8.reshape(height, width, 3)

def encode_image(frame, width: int, height: int, fmt: str = "PPM") -> bytes:
    """Serialize the frame buffer; PPM output is the binary P6 header followed by RGB triples."""
    img = Image.fromarray(to_uint8(frame, width, height), 'RGB')
    buffer = io.BytesIO()
    img.save(buffer, format=fmt)
    return buffer.getvalue()

def save_image(frame, width: int, height: int, path: str = "output.ppm") -> str:
    extension = os.path.splitext(path)[1].lower()
    fmt = _FORMATS_BY_EXTENSION.get(extension, "PPM")
    img = Image.fromarray(to_uint8(frame, width, height), 'RGB')
    img.save(path, format=fmt)
    return path
