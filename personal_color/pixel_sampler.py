import cv2
import numpy as np

from .color_math import rgb_array_to_hsv, rgb_to_hsv
from .config import get_settings

# decimals of hue (degrees) used by the bound checks
HUE_DECIMALS = 6


# -------------------------------------------------------
# per-pixel skin test
# -------------------------------------------------------
def is_skin_pixel(rgb, settings=None):
    """
    Conjunction of simple bounds:
    brightness window, saturation window, red/orange hue,
    R clearly above B, not green-biased, not lip-red.
    """
    s = settings or get_settings()
    r, g, b = (int(c) for c in rgb)
    h, sat, v = rgb_to_hsv((r, g, b))
    h = round(h, HUE_DECIMALS)

    if not s.skin_value_min <= v <= s.skin_value_max:
        return False
    if not s.skin_saturation_min <= sat <= s.skin_saturation_max:
        return False
    if not (h <= s.skin_hue_max or h >= s.skin_hue_wrap_min):
        return False
    if r - b < s.skin_min_red_over_blue:
        return False
    if not s.skin_min_red_over_green <= r - g <= s.skin_max_red_over_green:
        return False
    if g < b - s.skin_blue_over_green_tolerance:
        return False
    return True


def skin_mask(pixels, settings=None):
    """Vectorised is_skin_pixel over an (..., 3) RGB array → bool array (...)."""
    s = settings or get_settings()
    px = np.asarray(pixels)
    if px.size == 0:
        return np.zeros(px.shape[:-1], dtype=bool)

    hsv = rgb_array_to_hsv(px)
    h, sat, v = np.round(hsv[..., 0], HUE_DECIMALS), hsv[..., 1], hsv[..., 2]
    rgb = px.astype(np.int32)
    r, g, b = rgb[..., 0], rgb[..., 1], rgb[..., 2]

    mask = (v >= s.skin_value_min) & (v <= s.skin_value_max)
    mask &= (sat >= s.skin_saturation_min) & (sat <= s.skin_saturation_max)
    mask &= (h <= s.skin_hue_max) | (h >= s.skin_hue_wrap_min)
    mask &= (r - b) >= s.skin_min_red_over_blue
    mask &= ((r - g) >= s.skin_min_red_over_green) & ((r - g) <= s.skin_max_red_over_green)
    mask &= g >= (b - s.skin_blue_over_green_tolerance)
    return mask


# -------------------------------------------------------
# resizing / grid sampling
# -------------------------------------------------------
def downsample(image, max_side=500):
    """Shrink so the longer side is at most max_side. Returns (image, scale)."""
    h, w = image.shape[:2]
    scale = max_side / max(h, w)
    if scale >= 1:
        return image, 1.0
    resized = cv2.resize(image, (max(1, round(w * scale)), max(1, round(h * scale))),
                         interpolation=cv2.INTER_AREA)
    return resized, scale


def grid_points(x0, y0, x1, y1, n):
    """
    Up to n x n integer pixel coordinates spread over the half-open box [x0, x1) x [y0, y1).
    Boxes narrower than n pixels yield each pixel once.
    Returns (xs, ys) flattened.
    """
    xs = np.unique(np.linspace(x0, max(x0, x1 - 1), n).round().astype(int))
    ys = np.unique(np.linspace(y0, max(y0, y1 - 1), n).round().astype(int))
    gx, gy = np.meshgrid(xs, ys)
    return gx.ravel(), gy.ravel()


def sample_grid(image, box, n):
    """Pixels of image on an n x n grid inside box=(x0, y0, x1, y1). Returns (xs, ys, pixels)."""
    h, w = image.shape[:2]
    x0, y0, x1, y1 = box
    x0, x1 = max(0, x0), min(w, x1)
    y0, y1 = max(0, y0), min(h, y1)
    xs, ys = grid_points(x0, y0, x1, y1, n)
    return xs, ys, image[ys, xs]


def fraction_box(fractions, width, height):
    """(fx0, fy0, fx1, fy1) fractions → integer pixel box."""
    fx0, fy0, fx1, fy1 = fractions
    return (int(fx0 * width), int(fy0 * height), int(round(fx1 * width)), int(round(fy1 * height)))
