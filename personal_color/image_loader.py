import base64
import binascii
from pathlib import Path

import cv2
import numpy as np

from .errors import InvalidInputError


def ensure_rgb(image):
    """
    Validate a decoded pixel buffer and return it as (H, W, 3) uint8 RGB.
    Greyscale (H, W) and RGBA (H, W, 4) inputs are converted.
    """
    if not isinstance(image, np.ndarray):
        raise InvalidInputError(f"image must be a numpy array, got {type(image).__name__}")
    if image.dtype != np.uint8:
        raise InvalidInputError(f"image must be uint8, got {image.dtype}")

    if image.ndim == 2:
        image = np.repeat(image[:, :, None], 3, axis=2)
    elif image.ndim == 3 and image.shape[2] == 4:
        image = image[:, :, :3]
    elif image.ndim != 3 or image.shape[2] != 3:
        raise InvalidInputError(f"unsupported image shape: {image.shape}")

    if image.shape[0] == 0 or image.shape[1] == 0:
        raise InvalidInputError("image is empty")

    return np.ascontiguousarray(image)


def bytes_to_rgb(data):
    """Encoded image bytes (jpg/png/webp...) → RGB array. EXIF orientation is applied."""
    if not data:
        raise InvalidInputError("image payload is empty")
    arr = np.frombuffer(bytes(data), dtype=np.uint8)
    img = cv2.imdecode(arr, cv2.IMREAD_COLOR)
    if img is None:
        raise InvalidInputError("image payload could not be decoded")
    return cv2.cvtColor(img, cv2.COLOR_BGR2RGB)


def base64_to_rgb(payload):
    """Base64 payload, with or without a data:image/...;base64, prefix."""
    if not payload:
        raise InvalidInputError("image payload is empty")
    if "," in payload:
        payload = payload.split(",", 1)[1]
    try:
        data = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidInputError(f"invalid base64 image payload: {e}") from e
    return bytes_to_rgb(data)


def load_image(image_path):
    img_path = Path(image_path)
    if not img_path.exists():
        raise FileNotFoundError(f"image not found: {image_path}")
    return bytes_to_rgb(img_path.read_bytes())
