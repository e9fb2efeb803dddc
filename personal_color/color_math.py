import math
import re

import numpy as np
from skimage import color

from .errors import ComputationError, InvalidInputError
from .models import RGB, Lab

# sRGB (D65) -> XYZ
SRGB_TO_XYZ = np.array([
    [0.4124564, 0.3575761, 0.1804375],
    [0.2126729, 0.7151522, 0.0721750],
    [0.0193339, 0.1191920, 0.9503041],
])
D65_WHITE = np.array([0.95047, 1.0, 1.08883])

LAB_EPSILON = 0.008856
LAB_KAPPA = 7.787

_HEX_RE = re.compile(r"^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


# -------------------------------------------------------
# hex <-> RGB
# -------------------------------------------------------
def hex_to_rgb(hex_color):
    if not isinstance(hex_color, str):
        raise InvalidInputError(f"hex colour must be a string, got {type(hex_color).__name__}")

    match = _HEX_RE.match(hex_color.strip())
    if not match:
        raise InvalidInputError(f"malformed hex colour: {hex_color!r}")

    digits = match.group(1)
    if len(digits) == 3:
        digits = "".join(c * 2 for c in digits)

    return RGB(int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))


def rgb_to_hex(rgb):
    r, g, b = _channels(rgb)
    return f"#{r:02x}{g:02x}{b:02x}"


def normalize_hex(hex_color):
    return rgb_to_hex(hex_to_rgb(hex_color))


# -------------------------------------------------------
# RGB -> XYZ -> Lab (D65)
# -------------------------------------------------------
def _srgb_decode(c):
    return ((c + 0.055) / 1.055) ** 2.4 if c > 0.04045 else c / 12.92


def rgb_to_xyz(rgb):
    """XYZ normalised by the D65 white, so the white point maps to (1, 1, 1)."""
    linear = [_srgb_decode(c / 255.0) for c in _channels(rgb)]
    xyz = SRGB_TO_XYZ @ np.array(linear)
    return tuple(float(v) for v in xyz / D65_WHITE)


def _lab_f(t):
    return t ** (1.0 / 3.0) if t > LAB_EPSILON else LAB_KAPPA * t + 16.0 / 116.0


def xyz_to_lab(xyz):
    fx, fy, fz = (_lab_f(t) for t in xyz)
    lab = Lab(L=116.0 * fy - 16.0, a=500.0 * (fx - fy), b=200.0 * (fy - fz))
    if not all(math.isfinite(v) for v in lab.as_tuple()):
        raise ComputationError(f"non-finite Lab value from XYZ {xyz}")
    return lab


def rgb_to_lab(rgb):
    return xyz_to_lab(rgb_to_xyz(rgb))


def hex_to_lab(hex_color):
    return rgb_to_lab(hex_to_rgb(hex_color))


# -------------------------------------------------------
# RGB -> HSV (h: 0~360, s/v: 0~1)
# -------------------------------------------------------
def rgb_to_hsv(rgb):
    r, g, b = (c / 255.0 for c in _channels(rgb))
    c_max, c_min = max(r, g, b), min(r, g, b)
    d = c_max - c_min

    h = 0.0
    if d != 0:
        if c_max == r:
            h = ((g - b) / d) % 6
        elif c_max == g:
            h = (b - r) / d + 2
        else:
            h = (r - g) / d + 4
        h *= 60.0

    s = 0.0 if c_max == 0 else d / c_max
    return h, s, c_max


# -------------------------------------------------------
# ΔE (CIE76)
# -------------------------------------------------------
def delta_e76(lab1, lab2):
    l1, a1, b1 = _lab_tuple(lab1)
    l2, a2, b2 = _lab_tuple(lab2)
    return math.sqrt((l1 - l2) ** 2 + (a1 - a2) ** 2 + (b1 - b2) ** 2)


# -------------------------------------------------------
# vectorised forms for pixel batches, shape (..., 3) uint8 RGB
# -------------------------------------------------------
def _batch_image(rgb):
    """(..., 3) RGB values → (N, 1, 3) uint8 image for skimage, plus the leading shape."""
    arr = np.asarray(rgb)
    if arr.dtype != np.uint8:
        arr = np.clip(np.rint(arr), 0, 255).astype(np.uint8)
    return arr.reshape(-1, 1, 3), arr.shape[:-1]


def rgb_array_to_lab(rgb):
    img, shape = _batch_image(rgb)
    if img.size == 0:
        return np.empty(shape + (3,), dtype=np.float64)

    lab = color.rgb2lab(img).reshape(shape + (3,))
    if not np.all(np.isfinite(lab)):
        raise ComputationError("non-finite Lab value in pixel batch")
    return lab


def rgb_array_to_hsv(rgb):
    """h in degrees (0~360), s/v 0~1, same convention as rgb_to_hsv."""
    img, shape = _batch_image(rgb)
    if img.size == 0:
        return np.empty(shape + (3,), dtype=np.float64)

    hsv = color.rgb2hsv(img).reshape(shape + (3,))
    hsv[..., 0] *= 360.0
    return hsv


def _channels(rgb):
    if isinstance(rgb, RGB):
        return rgb.as_tuple()
    r, g, b = (int(c) for c in rgb)
    return RGB(r, g, b).as_tuple()


def _lab_tuple(lab):
    if isinstance(lab, Lab):
        return lab.as_tuple()
    return tuple(float(v) for v in lab)
