from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Every tunable threshold of the engine.
    Values can be overridden with PERSONAL_COLOR_<FIELD> environment variables.
    """
    model_config = SettingsConfigDict(env_prefix="PERSONAL_COLOR_", env_file=".env", extra="ignore")

    # -------------------------------------------------------
    # palette gating (ΔE76)
    # -------------------------------------------------------
    max_delta_e: float = 12.0
    min_delta_e_gap: float = 2.0

    # season suitability rating: great / good / ok
    rating_delta_e: tuple[float, float, float] = (6.0, 12.0, 22.0)
    rating_delta_e_deep: tuple[float, float, float] = (8.0, 16.0, 30.0)
    deep_color_l: float = 40.0

    # -------------------------------------------------------
    # per-pixel skin test
    # -------------------------------------------------------
    skin_value_min: float = 0.22
    skin_value_max: float = 0.95
    skin_saturation_min: float = 0.12
    skin_saturation_max: float = 0.65
    skin_hue_max: float = 55.0
    skin_hue_wrap_min: float = 320.0
    skin_min_red_over_blue: int = 18
    skin_min_red_over_green: int = 8
    skin_max_red_over_green: int = 95
    skin_blue_over_green_tolerance: int = 10

    # -------------------------------------------------------
    # face region detection
    # -------------------------------------------------------
    detect_max_side: int = 500
    detect_grid: int = 30
    # (x0, y0, x1, y1) as fractions of the frame
    detect_zones: tuple[tuple[float, float, float, float], ...] = (
        (0.20, 0.05, 0.80, 0.65),
        (0.10, 0.05, 0.60, 0.65),
        (0.40, 0.05, 0.90, 0.65),
    )
    zone_min_skin_ratio: float = 0.35
    zone_min_skin_count: int = 50
    face_min_aspect: float = 0.5
    face_max_aspect: float = 1.5
    face_padding: float = 0.20
    min_face_box_side: int = 16

    # -------------------------------------------------------
    # skin colour estimation
    # -------------------------------------------------------
    face_canvas: int = 160
    sample_grid: int = 14
    # (x0, y0, x1, y1) as fractions of the face crop
    sample_zones: dict[str, tuple[float, float, float, float]] = Field(default_factory=lambda: {
        "left_cheek": (0.15, 0.45, 0.40, 0.70),
        "right_cheek": (0.60, 0.45, 0.85, 0.70),
        "forehead": (0.30, 0.12, 0.70, 0.30),
    })
    min_skin_samples: int = 60
    min_skin_ratio: float = 0.45
    trim_fraction: float = 0.15

    # Shades-of-Gray colour constancy on the skin samples
    gray_p_norm: float = 6.0
    gray_min_channel: float = 10.0
    gray_min_gain: float = 0.70
    gray_max_gain: float = 1.45
    chroma_percentile: float = 70.0

    # -------------------------------------------------------
    # lighting bias
    # -------------------------------------------------------
    lighting_grid: int = 64
    warm_index_threshold: float = 0.08
    warm_index_span: float = 0.18
    lighting_severity_high: float = 0.45
    lighting_severity_penalize: float = 0.35
    lighting_confidence_weight: float = 0.35

    # -------------------------------------------------------
    # undertone / depth / clarity
    # -------------------------------------------------------
    undertone_neutral_point: float = 9.0
    undertone_margin: float = 3.0
    undertone_full_confidence_span: float = 8.0
    undertone_lighting_penalty: float = 0.08
    undertone_max_confidence: float = 0.92
    depth_light_l: float = 65.0
    depth_deep_l: float = 45.0
    depth_confidence_base: float = 0.62
    depth_confidence_span: float = 28.0
    depth_max_confidence: float = 0.92
    clarity_muted_max: float = 0.25
    clarity_vivid_min: float = 0.40
    clarity_confidence_span: float = 0.15
    clarity_max_confidence: float = 0.90

    # -------------------------------------------------------
    # season scoring
    # -------------------------------------------------------
    # (season, metric, low, high, points, reason); fires when low <= value < high.
    # metric: "L" (L*), "warmth" (b* - 0.5 a*) or "saturation" (mean HSV S)
    season_rules: tuple[tuple[str, str, Optional[float], Optional[float], float, str], ...] = (
        ("spring", "L", 60.0, None, 2.0, "light skin"),
        ("spring", "L", 52.0, 60.0, 1.0, "medium-light skin"),
        ("spring", "L", None, 45.0, -2.0, "too deep for spring"),
        ("spring", "warmth", 12.0, None, 2.0, "golden undertone"),
        ("spring", "warmth", 9.0, 12.0, 1.0, "slightly warm undertone"),
        ("spring", "warmth", None, 6.0, -2.0, "cool undertone"),
        ("spring", "saturation", 0.30, None, 1.5, "clear colouring"),
        ("spring", "saturation", None, 0.22, -1.0, "too muted for spring"),

        ("summer", "L", 60.0, None, 2.0, "light skin"),
        ("summer", "L", 52.0, 60.0, 1.0, "medium-light skin"),
        ("summer", "L", None, 45.0, -2.0, "too deep for summer"),
        ("summer", "warmth", None, 6.0, 2.0, "rosy undertone"),
        ("summer", "warmth", 6.0, 9.0, 1.0, "slightly cool undertone"),
        ("summer", "warmth", 12.0, None, -2.0, "warm undertone"),
        ("summer", "saturation", None, 0.30, 1.5, "soft colouring"),
        ("summer", "saturation", 0.40, None, -1.0, "too vivid for summer"),

        ("autumn", "L", None, 45.0, 2.0, "deep skin"),
        ("autumn", "L", 45.0, 52.0, 1.0, "medium-deep skin"),
        ("autumn", "L", 65.0, None, -2.0, "too light for autumn"),
        ("autumn", "warmth", 12.0, None, 2.0, "golden undertone"),
        ("autumn", "warmth", 9.0, 12.0, 1.0, "slightly warm undertone"),
        ("autumn", "warmth", None, 6.0, -2.0, "cool undertone"),
        ("autumn", "saturation", None, 0.30, 1.5, "muted colouring"),
        ("autumn", "saturation", 0.40, None, -1.0, "too vivid for autumn"),

        ("winter", "L", None, 45.0, 2.0, "deep skin"),
        ("winter", "L", 45.0, 52.0, 1.0, "medium-deep skin"),
        ("winter", "L", 65.0, None, -2.0, "too light for winter"),
        ("winter", "warmth", None, 6.0, 2.0, "rosy undertone"),
        ("winter", "warmth", 6.0, 9.0, 1.0, "slightly cool undertone"),
        ("winter", "warmth", 12.0, None, -2.0, "warm undertone"),
        ("winter", "saturation", 0.30, None, 1.5, "clear colouring"),
        ("winter", "saturation", None, 0.22, -1.0, "too muted for winter"),
    )
    season_max_score: float = 5.5

    # -------------------------------------------------------
    # confidence floors
    # -------------------------------------------------------
    confidence_floor: float = 0.55
    decisive_confidence: float = 0.65
    confirm_below: float = 0.72
    max_confidence: float = 0.95

    # noisy-sample thresholds (Lab MAD)
    noisy_mad_l: float = 10.0
    noisy_mad_b: float = 4.5
    washed_out_chroma: float = 4.0
    min_stable_samples: int = 260


@lru_cache(maxsize=1)
def get_settings():
    return Settings()
