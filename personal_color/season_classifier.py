"""
Rule-based season decision.

Skin Lab + mean saturation + lighting estimate
→ undertone / depth / clarity (each with a confidence)
→ season scores from the weighted rule table in Settings.season_rules
→ season, confidence, needs_confirmation

A season is always returned; uncertainty is carried by the confidence
and the needs_confirmation flag.
"""
import logging
from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np

from .config import get_settings
from .models import SEASONS, Clarity, Depth, Season, SeasonCandidate, Undertone

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Attribute:
    value: object
    confidence: float


@dataclass
class SeasonDecision:
    undertone: Undertone
    undertone_lean: Optional[Undertone]
    depth: Depth
    clarity: Clarity
    season: Season
    season_confidence: float
    needs_confirmation: bool
    candidates: List[SeasonCandidate]
    quality_issues: List[str] = field(default_factory=list)
    component_confidence: dict = field(default_factory=dict)
    scores: dict = field(default_factory=dict)


def _clamp(value, low, high):
    return float(np.clip(value, low, high))


def warmth(lab):
    """Yellow-vs-pink balance of a skin colour."""
    return lab.b - 0.5 * lab.a


# -------------------------------------------------------
# undertone
# -------------------------------------------------------
def compute_undertone(lab, lighting_severity=0.0, settings=None):
    """Returns (Attribute(undertone), lean). lean is set only for neutral undertones."""
    s = settings or get_settings()
    warm_score = max(lab.b, 0.0) + max(-lab.a, 0.0)
    cool_score = 0.5 * max(lab.a, 0.0) + max(-lab.b, 0.0)
    balance = warm_score - cool_score - s.undertone_neutral_point

    lean = None
    if abs(balance) > s.undertone_margin:
        undertone = Undertone.warm if balance > 0 else Undertone.cool
        past = (abs(balance) - s.undertone_margin) / s.undertone_full_confidence_span
        confidence = s.decisive_confidence + past * (s.undertone_max_confidence - s.decisive_confidence)
        confidence = _clamp(confidence, s.decisive_confidence, s.undertone_max_confidence)
    else:
        undertone = Undertone.neutral
        lean = Undertone.warm if balance >= 0 else Undertone.cool
        # lowest at the neutral centre, rising toward the warm/cool thresholds
        confidence = s.confidence_floor + (s.decisive_confidence - s.confidence_floor) * abs(balance) / s.undertone_margin

    if lighting_severity > s.lighting_severity_penalize:
        confidence = _clamp(confidence - s.undertone_lighting_penalty, 0.0, 1.0)

    return Attribute(undertone, confidence), lean


# -------------------------------------------------------
# depth / clarity
# -------------------------------------------------------
def compute_depth(lab, settings=None):
    s = settings or get_settings()
    if lab.L > s.depth_light_l:
        depth = Depth.light
    elif lab.L <= s.depth_deep_l:
        depth = Depth.deep
    else:
        depth = Depth.medium

    distance = min(abs(lab.L - s.depth_light_l), abs(lab.L - s.depth_deep_l))
    confidence = _clamp(s.depth_confidence_base + distance / s.depth_confidence_span,
                        s.confidence_floor, s.depth_max_confidence)
    return Attribute(depth, confidence)


def compute_clarity(saturation, settings=None):
    s = settings or get_settings()
    if saturation < s.clarity_muted_max:
        clarity = Clarity.muted
    elif saturation < s.clarity_vivid_min:
        clarity = Clarity.clear
    else:
        clarity = Clarity.vivid

    distance = min(abs(saturation - s.clarity_muted_max), abs(saturation - s.clarity_vivid_min))
    confidence = _clamp(s.confidence_floor + distance / s.clarity_confidence_span,
                        s.confidence_floor, s.clarity_max_confidence)
    return Attribute(clarity, confidence)


# -------------------------------------------------------
# season scoring
# -------------------------------------------------------
def score_seasons(lab, saturation, settings=None):
    """season -> (total points, [reasons of the rules that fired])"""
    s = settings or get_settings()
    metrics = {"L": lab.L, "warmth": warmth(lab), "saturation": saturation}
    scores = {season: [0.0, []] for season in SEASONS}

    for season, metric, low, high, points, reason in s.season_rules:
        value = metrics[metric]
        if low is not None and value < low:
            continue
        if high is not None and value >= high:
            continue
        entry = scores[Season(season)]
        entry[0] += points
        entry[1].append(reason if points > 0 else f"penalty: {reason}")

    return {season: (total, reasons) for season, (total, reasons) in scores.items()}


def rank_seasons(scores, settings=None):
    """Highest score first; equal scores keep declaration order (spring, summer, autumn, winter)."""
    s = settings or get_settings()
    ordered = sorted(SEASONS, key=lambda season: -scores[season][0])
    return [
        SeasonCandidate(
            season=season,
            score=_clamp(scores[season][0] / s.season_max_score, 0.0, 1.0),
            reasons=tuple(scores[season][1]),
        )
        for season in ordered
    ]


# -------------------------------------------------------
# final decision
# -------------------------------------------------------
def decide_season(lab, saturation, lighting_severity=0.0, mad_lab=None, settings=None,
                  corrected_chroma=None, stable_count=None):
    """
    mad_lab, corrected_chroma and stable_count are sample-quality signals;
    each one that is given can add a quality issue.
    """
    s = settings or get_settings()

    undertone, lean = compute_undertone(lab, lighting_severity, s)
    depth = compute_depth(lab, s)
    clarity = compute_clarity(saturation, s)

    scores = score_seasons(lab, saturation, s)
    ranked = rank_seasons(scores, s)
    winner = ranked[0].season

    base = (undertone.confidence + depth.confidence + clarity.confidence) / 3
    confidence = base * (1 - s.lighting_confidence_weight * lighting_severity)
    confidence = _clamp(confidence, 0.0, s.max_confidence)

    issues = []
    if undertone.value is Undertone.neutral:
        issues.append("neutral_undertone")
    if confidence < s.confirm_below:
        issues.append("low_confidence")
    if lighting_severity > s.lighting_severity_high:
        issues.append("warm_lighting")
    if mad_lab is not None and (mad_lab[0] > s.noisy_mad_l or mad_lab[2] > s.noisy_mad_b):
        issues.append("noisy_samples")
    if stable_count is not None and stable_count < s.min_stable_samples:
        issues.append("few_stable_pixels")
    if corrected_chroma is not None and corrected_chroma < s.washed_out_chroma:
        issues.append("washed_out")

    logger.debug("season scores: %s", {k.value: round(v[0], 2) for k, v in scores.items()})
    logger.debug("winner=%s confidence=%.3f issues=%s", winner.value, confidence, issues)

    return SeasonDecision(
        undertone=undertone.value,
        undertone_lean=lean,
        depth=depth.value,
        clarity=clarity.value,
        season=winner,
        season_confidence=round(confidence, 3),
        needs_confirmation=bool(issues),
        candidates=ranked[:2],
        quality_issues=issues,
        component_confidence={
            "undertone": round(undertone.confidence, 3),
            "depth": round(depth.confidence, 3),
            "clarity": round(clarity.confidence, 3),
        },
        scores={k.value: round(v[0], 3) for k, v in scores.items()},
    )
