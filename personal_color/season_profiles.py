from dataclasses import dataclass
from typing import Tuple

from .models import SEASONS, Depth, Season, Undertone


@dataclass(frozen=True)
class SeasonProfile:
    season: Season
    description: str
    tone: Undertone
    depth: Depth
    best_colors: Tuple[str, ...]
    avoid_colors: Tuple[str, ...]
    swatches: Tuple[str, ...]


PROFILES = {
    Season.spring: SeasonProfile(
        season=Season.spring,
        description="Warm & Light (Spring)",
        tone=Undertone.warm,
        depth=Depth.light,
        best_colors=("coral", "peach", "warm ivory", "golden yellow",
                     "turquoise", "light warm green", "warm pink", "cream"),
        avoid_colors=("black", "pure white", "cool grey", "burgundy", "dark navy"),
        swatches=("#ff7f50", "#ffdab9", "#fffff0", "#ffd700",
                  "#40e0d0", "#90ee90", "#ffb6c1", "#fffdd0"),
    ),
    Season.summer: SeasonProfile(
        season=Season.summer,
        description="Cool & Soft (Summer)",
        tone=Undertone.cool,
        depth=Depth.light,
        best_colors=("lavender", "soft pink", "powder blue", "rose",
                     "mauve", "soft grey", "periwinkle", "dusty blue"),
        avoid_colors=("orange", "gold", "warm brown", "bright yellow", "rust"),
        swatches=("#e6e6fa", "#ffb6c1", "#b0e0e6", "#ff007f",
                  "#e0b0ff", "#c0c0c0", "#ccccff", "#6699cc"),
    ),
    Season.autumn: SeasonProfile(
        season=Season.autumn,
        description="Warm & Deep (Autumn)",
        tone=Undertone.warm,
        depth=Depth.deep,
        best_colors=("camel", "rust", "olive", "burnt orange",
                     "warm brown", "teal", "mustard", "terracotta"),
        avoid_colors=("pastel pink", "icy blue", "silver grey", "bright white", "fuchsia"),
        swatches=("#c19a6b", "#b7410e", "#808000", "#cc5500",
                  "#964b00", "#008080", "#ffdb58", "#e2725b"),
    ),
    Season.winter: SeasonProfile(
        season=Season.winter,
        description="Cool & Deep (Winter)",
        tone=Undertone.cool,
        depth=Depth.deep,
        best_colors=("black", "pure white", "true red", "emerald",
                     "royal blue", "fuchsia", "icy grey", "burgundy"),
        avoid_colors=("orange", "gold", "warm beige", "rust", "mustard"),
        swatches=("#000000", "#ffffff", "#ff0000", "#50c878",
                  "#4169e1", "#ff00ff", "#d3d3d3", "#800020"),
    ),
}

# user-facing text for SeasonAnalysis.quality_issues
QUALITY_MESSAGES = {
    "neutral_undertone": "Undertone is close to neutral; both warm and cool colours may suit you",
    "low_confidence": "The result is uncertain; try a photo in daylight without filters",
    "warm_lighting": "Strong warm lighting cast",
    "noisy_samples": "Skin samples vary a lot; shadows or make-up may be affecting the result",
    "few_stable_pixels": "Not enough stable pixels",
    "washed_out": "Image too gray or washed out",
}


def get_season_profile(season):
    return PROFILES[Season(season)]


def all_seasons():
    return [PROFILES[season] for season in SEASONS]


def quality_messages(issues):
    return [QUALITY_MESSAGES.get(issue, issue) for issue in issues]
