import logging
from functools import lru_cache

import numpy as np

from .color_math import hex_to_lab, normalize_hex
from .config import get_settings
from .models import (ClassificationResult, ClassificationStatus, SeasonColorRating, Season)
from .palette import iter_palette, season_colors

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def _palette_lab_matrix():
    matrix = np.array([color.lab.as_tuple() for color in iter_palette()], dtype=np.float64)
    matrix.setflags(write=False)
    return matrix


def rank_palette(lab):
    """
    ΔE76 from lab to every palette colour, ascending.
    Equal distances keep palette declaration order (stable sort).
    Returns [(PaletteColor, ΔE), ...]
    """
    colors = iter_palette()
    distances = np.linalg.norm(_palette_lab_matrix() - np.array(lab.as_tuple()), axis=1)
    order = np.argsort(distances, kind="stable")
    return [(colors[i], float(distances[i])) for i in order]


def classify_color(hex_color, settings=None):
    """
    Nearest palette colour with accept / unclassified / ambiguous gating.

    1) best ΔE > max_delta_e                      → unclassified
    2) runner-up ΔE - best ΔE < min_delta_e_gap   → ambiguous
    3) otherwise                                   → ok, tagged with best's season/group
    """
    settings = settings or get_settings()
    input_hex = normalize_hex(hex_color)
    lab = hex_to_lab(input_hex)

    ranked = rank_palette(lab)
    best, best_de = ranked[0]
    runner_up_de = ranked[1][1] if len(ranked) > 1 else None

    if best_de > settings.max_delta_e:
        status = ClassificationStatus.unclassified
    elif runner_up_de is not None and runner_up_de - best_de < settings.min_delta_e_gap:
        status = ClassificationStatus.ambiguous
    else:
        status = ClassificationStatus.ok

    logger.debug("classify %s: nearest=%s ΔE=%.2f runner-up ΔE=%s status=%s",
                 input_hex, best.name, best_de,
                 f"{runner_up_de:.2f}" if runner_up_de is not None else "-", status.value)

    accepted = status is ClassificationStatus.ok
    return ClassificationResult(
        input_hex=input_hex,
        lab=lab,
        status=status,
        season_tag=best.season if accepted else None,
        group_tag=best.group if accepted else None,
        nearest_color_name=best.name,
        nearest_hex=best.hex,
        min_delta_e=best_de,
        runner_up_delta_e=runner_up_de,
    )


# -------------------------------------------------------
# garment colour vs. a user's season
# -------------------------------------------------------
def rate_color_for_season(hex_color, season, settings=None):
    settings = settings or get_settings()
    season = Season(season)
    lab = hex_to_lab(hex_color)

    nearest, nearest_de = None, None
    for color in season_colors(season):
        de = float(np.linalg.norm(np.array(color.lab.as_tuple()) - np.array(lab.as_tuple())))
        if nearest_de is None or de < nearest_de:
            nearest, nearest_de = color, de

    # relaxed thresholds for deep colours
    great, good, ok = settings.rating_delta_e_deep if lab.L < settings.deep_color_l else settings.rating_delta_e
    if nearest_de <= great:
        rating = "great"
    elif nearest_de <= good:
        rating = "good"
    elif nearest_de <= ok:
        rating = "ok"
    else:
        rating = "poor"

    return SeasonColorRating(
        season=season,
        rating=rating,
        nearest_color_name=nearest.name,
        nearest_hex=nearest.hex,
        group=nearest.group,
        delta_e=nearest_de,
    )
