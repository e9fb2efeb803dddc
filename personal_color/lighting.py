from dataclasses import dataclass
from typing import Tuple

import cv2
import numpy as np

from .config import get_settings


@dataclass(frozen=True)
class LightingEstimate:
    average_rgb: Tuple[float, float, float]
    warm_index: float
    is_warm: bool
    severity: float  # 0~1, used as a confidence penalty


# -------------------------------------------------------
# warm ambient-light cast from whole-image channel means
# -------------------------------------------------------
def estimate_lighting(image, settings=None):
    s = settings or get_settings()
    grid = cv2.resize(image, (s.lighting_grid, s.lighting_grid), interpolation=cv2.INTER_AREA)
    avg_r, avg_g, avg_b = (float(v) for v in grid.reshape(-1, 3).mean(axis=0))

    warm_index = (avg_r + avg_g) / 2 / 255 - avg_b / 255
    severity = float(np.clip((warm_index - s.warm_index_threshold) / s.warm_index_span, 0.0, 1.0))

    return LightingEstimate(
        average_rgb=(avg_r, avg_g, avg_b),
        warm_index=round(warm_index, 3),
        is_warm=warm_index > s.warm_index_threshold,
        severity=severity,
    )
