from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from .errors import InvalidInputError


class Season(str, Enum):
    spring = "spring"
    summer = "summer"
    autumn = "autumn"
    winter = "winter"


class Group(str, Enum):
    neutrals = "neutrals"
    accents = "accents"
    brights = "brights"
    softs = "softs"


class Undertone(str, Enum):
    warm = "warm"
    cool = "cool"
    neutral = "neutral"


class Depth(str, Enum):
    light = "light"
    medium = "medium"
    deep = "deep"


class Clarity(str, Enum):
    muted = "muted"
    clear = "clear"
    vivid = "vivid"


class ClassificationStatus(str, Enum):
    ok = "ok"
    unclassified = "unclassified"
    ambiguous = "ambiguous"


class NotDetectedReason(str, Enum):
    no_skin_region = "no_skin_region"
    too_few_skin_samples = "too_few_skin_samples"
    low_skin_ratio = "low_skin_ratio"


# declaration order is the tie-break order everywhere
SEASONS: Tuple[Season, ...] = tuple(Season)
GROUPS: Tuple[Group, ...] = tuple(Group)


@dataclass(frozen=True)
class RGB:
    r: int
    g: int
    b: int

    def __post_init__(self):
        for value in (self.r, self.g, self.b):
            if not 0 <= value <= 255:
                raise InvalidInputError(f"RGB channel out of range: {(self.r, self.g, self.b)}")

    def as_tuple(self) -> Tuple[int, int, int]:
        return (self.r, self.g, self.b)


@dataclass(frozen=True)
class Lab:
    L: float
    a: float
    b: float

    def as_tuple(self) -> Tuple[float, float, float]:
        return (self.L, self.a, self.b)


@dataclass(frozen=True)
class PaletteColor:
    name: str
    hex: str
    lab: Lab
    season: Season
    group: Group


@dataclass(frozen=True)
class FaceBox:
    """Face rectangle in source-image pixel coordinates."""
    x: int
    y: int
    width: int
    height: int

    @classmethod
    def from_normalized(cls, x, y, width, height, image_width, image_height) -> "FaceBox":
        """Box given as 0..1 fractions of the image size."""
        return cls(
            x=int(round(x * image_width)),
            y=int(round(y * image_height)),
            width=int(round(width * image_width)),
            height=int(round(height * image_height)),
        )

    def clamp(self, image_width: int, image_height: int) -> "FaceBox":
        x = min(max(0, self.x), image_width)
        y = min(max(0, self.y), image_height)
        x2 = min(max(0, self.x + self.width), image_width)
        y2 = min(max(0, self.y + self.height), image_height)
        return FaceBox(x=x, y=y, width=max(0, x2 - x), height=max(0, y2 - y))

    def as_tuple(self) -> Tuple[int, int, int, int]:
        return (self.x, self.y, self.width, self.height)


@dataclass(frozen=True)
class ClassificationResult:
    input_hex: str
    lab: Lab
    status: ClassificationStatus
    season_tag: Optional[Season]
    group_tag: Optional[Group]
    nearest_color_name: str
    nearest_hex: str
    min_delta_e: float
    runner_up_delta_e: Optional[float]


@dataclass(frozen=True)
class SeasonColorRating:
    season: Season
    rating: str  # great | good | ok | poor
    nearest_color_name: str
    nearest_hex: str
    group: Group
    delta_e: float


@dataclass(frozen=True)
class SeasonCandidate:
    season: Season
    score: float
    reasons: Tuple[str, ...] = ()


@dataclass
class SeasonAnalysis:
    undertone: Undertone
    undertone_lean: Optional[Undertone]
    depth: Depth
    clarity: Clarity
    season: Season
    season_confidence: float
    needs_confirmation: bool
    skin_rgb: RGB
    skin_hex: str
    skin_lab: Lab
    face_box: FaceBox
    season_candidates: List[SeasonCandidate] = field(default_factory=list)
    quality_issues: List[str] = field(default_factory=list)
    diagnostics: Dict[str, Any] = field(default_factory=dict)

    face_detected = True


@dataclass
class FaceNotDetected:
    reason: NotDetectedReason
    message: str
    diagnostics: Dict[str, Any] = field(default_factory=dict)

    face_detected = False
