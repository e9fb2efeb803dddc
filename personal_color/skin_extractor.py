import logging
from dataclasses import dataclass, field
from typing import Dict, Tuple

import cv2
import numpy as np

from .color_math import rgb_array_to_hsv, rgb_array_to_lab
from .config import get_settings
from .face_detector import crop_face
from .models import RGB, FaceNotDetected, NotDetectedReason
from .pixel_sampler import fraction_box, sample_grid, skin_mask

logger = logging.getLogger(__name__)


@dataclass
class SkinEstimate:
    rgb: RGB
    mean_saturation: float
    skin_count: int
    sample_count: int
    kept_count: int
    mad_lab: tuple  # median absolute deviation of (L*, a*, b*) over kept samples
    corrected_chroma: float  # chroma percentile after colour constancy
    stable_count: int
    gains: Tuple[float, float, float]
    gains_clamped: bool
    zone_counts: Dict[str, int] = field(default_factory=dict)

    @property
    def skin_ratio(self):
        return self.skin_count / self.sample_count if self.sample_count else 0.0


# -------------------------------------------------------
# 1) cheek / forehead sampling on a canonical canvas
# -------------------------------------------------------
def sample_skin(face, settings=None):
    """
    face: RGB crop of the face box.
    Returns (skin_samples (N, 3), all_sample_count, per-zone skin counts)
    """
    s = settings or get_settings()
    canvas = cv2.resize(face, (s.face_canvas, s.face_canvas), interpolation=cv2.INTER_AREA)

    skin_parts = []
    zone_counts = {}
    total = 0
    for name, fractions in s.sample_zones.items():
        _, _, pixels = sample_grid(canvas, fraction_box(fractions, s.face_canvas, s.face_canvas),
                                   s.sample_grid)
        mask = skin_mask(pixels, s)
        skin_parts.append(pixels[mask])
        zone_counts[name] = int(mask.sum())
        total += len(pixels)

    skin = np.concatenate(skin_parts) if skin_parts else np.empty((0, 3), dtype=np.uint8)
    return skin, total, zone_counts


# -------------------------------------------------------
# 2) trimmed mean over brightness
# -------------------------------------------------------
def trimmed_samples(samples, fraction):
    """Drop floor(n * fraction) of the darkest and of the brightest samples (keeps at least one)."""
    order = np.argsort(samples.astype(np.int32).sum(axis=1), kind="stable")
    ordered = samples[order]
    n = len(ordered)
    trim = int(n * fraction)
    return ordered[trim:max(trim + 1, n - trim)]


# -------------------------------------------------------
# 3) Shades-of-Gray colour constancy
# -------------------------------------------------------
def shades_of_gray(samples, settings=None):
    """
    Scale each channel so the p-norm means of R, G, B meet at their average.
    Gains are clamped; samples too dark to estimate the illuminant are returned unchanged.
    Returns (corrected samples, (gain_r, gain_g, gain_b), clamped)
    """
    s = settings or get_settings()
    if len(samples) == 0:
        return samples, (1.0, 1.0, 1.0), False

    p = s.gray_p_norm
    norms = np.mean(samples.astype(np.float64) ** p, axis=0) ** (1.0 / p)
    if (norms < s.gray_min_channel).any():
        return samples, (1.0, 1.0, 1.0), False

    raw_gains = norms.mean() / norms
    gains = np.clip(raw_gains, s.gray_min_gain, s.gray_max_gain)
    corrected = np.clip(np.rint(samples * gains), 0, 255).astype(np.uint8)
    return corrected, tuple(float(g) for g in gains), bool((gains != raw_gains).any())


def corrected_chroma(corrected, settings=None):
    s = settings or get_settings()
    lab = rgb_array_to_lab(corrected)
    return float(np.percentile(np.hypot(lab[:, 1], lab[:, 2]), s.chroma_percentile))


def _mad(values):
    return float(np.median(np.abs(values - np.median(values))))


# -------------------------------------------------------
# 4) representative skin colour (or FaceNotDetected)
# -------------------------------------------------------
def estimate_skin_color(image, face_box, settings=None):
    s = settings or get_settings()
    face = crop_face(image, face_box)
    skin, total, zone_counts = sample_skin(face, s)

    diagnostics = {"skin_count": len(skin), "sample_count": total, "zones": zone_counts}
    if len(skin) < s.min_skin_samples:
        logger.info("skin validation failed: %d skin samples < %d", len(skin), s.min_skin_samples)
        return FaceNotDetected(
            reason=NotDetectedReason.too_few_skin_samples,
            message="Not enough skin pixels in the face region",
            diagnostics=diagnostics,
        )
    if len(skin) / total < s.min_skin_ratio:
        logger.info("skin validation failed: ratio %.2f < %.2f", len(skin) / total, s.min_skin_ratio)
        return FaceNotDetected(
            reason=NotDetectedReason.low_skin_ratio,
            message="Face region is mostly non-skin pixels",
            diagnostics=diagnostics,
        )

    kept = trimmed_samples(skin, s.trim_fraction)
    r, g, b = (int(round(v)) for v in kept.mean(axis=0))
    lab = rgb_array_to_lab(kept)
    saturation = float(rgb_array_to_hsv(kept)[:, 1].mean())
    corrected, gains, clamped = shades_of_gray(skin, s)
    chroma = corrected_chroma(corrected, s)
    logger.debug("shades-of-gray gains=%s clamped=%s corrected chroma=%.2f",
                 tuple(round(g, 3) for g in gains), clamped, chroma)

    return SkinEstimate(
        rgb=RGB(r, g, b),
        mean_saturation=saturation,
        skin_count=len(skin),
        sample_count=total,
        kept_count=len(kept),
        mad_lab=tuple(_mad(lab[:, i]) for i in range(3)),
        corrected_chroma=chroma,
        stable_count=len(corrected),
        gains=gains,
        gains_clamped=clamped,
        zone_counts=zone_counts,
    )
