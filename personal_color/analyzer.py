"""
Entry points.

image (RGB uint8) [+ optional face box]
→ face region (provided or heuristic)
→ skin colour estimate
→ lighting estimate
→ season decision
→ SeasonAnalysis | FaceNotDetected
"""
import logging

from .color_math import rgb_to_hex, rgb_to_lab
from .config import get_settings
from .errors import InvalidInputError
from .face_detector import detect_face_region
from .image_loader import ensure_rgb
from .lighting import estimate_lighting
from .models import FaceNotDetected, NotDetectedReason, SeasonAnalysis
from .palette_classifier import classify_color  # noqa: F401  (re-export)
from .season_classifier import decide_season
from .skin_extractor import estimate_skin_color

logger = logging.getLogger(__name__)


def resolve_face_box(image, face_box=None, settings=None):
    """
    Returns (FaceBox or None, detection method).
    A supplied box is trusted but clamped to the image.
    """
    s = settings or get_settings()
    img_h, img_w = image.shape[:2]

    if face_box is not None:
        box = face_box.clamp(img_w, img_h)
        if box.width < s.min_face_box_side or box.height < s.min_face_box_side:
            raise InvalidInputError(
                f"face box {face_box.as_tuple()} is empty or too small inside a {img_w}x{img_h} image"
            )
        return box, "provided"

    return detect_face_region(image, s), "heuristic"


def analyze_face(image, face_box=None, settings=None):
    s = settings or get_settings()
    image = ensure_rgb(image)

    box, method = resolve_face_box(image, face_box, s)
    if box is None:
        logger.info("no face-like skin region found")
        return FaceNotDetected(
            reason=NotDetectedReason.no_skin_region,
            message="No face-like skin region found in the image",
            diagnostics={"detection_method": method, "image_size": image.shape[1::-1]},
        )

    skin = estimate_skin_color(image, box, s)
    if isinstance(skin, FaceNotDetected):
        skin.diagnostics.update(detection_method=method, face_box=box.as_tuple())
        return skin

    lighting = estimate_lighting(image, s)
    lab = rgb_to_lab(skin.rgb)

    decision = decide_season(lab, skin.mean_saturation, lighting.severity, skin.mad_lab, s,
                             corrected_chroma=skin.corrected_chroma, stable_count=skin.stable_count)

    logger.debug("skin %s lab=(%.1f, %.1f, %.1f) → %s (%.2f)",
                 rgb_to_hex(skin.rgb), lab.L, lab.a, lab.b,
                 decision.season.value, decision.season_confidence)

    return SeasonAnalysis(
        undertone=decision.undertone,
        undertone_lean=decision.undertone_lean,
        depth=decision.depth,
        clarity=decision.clarity,
        season=decision.season,
        season_confidence=decision.season_confidence,
        needs_confirmation=decision.needs_confirmation,
        skin_rgb=skin.rgb,
        skin_hex=rgb_to_hex(skin.rgb),
        skin_lab=lab,
        face_box=box,
        season_candidates=decision.candidates,
        quality_issues=decision.quality_issues,
        diagnostics={
            "detection_method": method,
            "skin_count": skin.skin_count,
            "sample_count": skin.sample_count,
            "skin_ratio": round(skin.skin_ratio, 3),
            "kept_count": skin.kept_count,
            "zone_counts": skin.zone_counts,
            "mean_saturation": round(skin.mean_saturation, 3),
            "mad_lab": tuple(round(v, 2) for v in skin.mad_lab),
            "colour_constancy": {
                "gains": tuple(round(g, 3) for g in skin.gains),
                "gains_clamped": skin.gains_clamped,
                "corrected_chroma": round(skin.corrected_chroma, 2),
                "stable_count": skin.stable_count,
            },
            "lighting": {
                "average_rgb": tuple(round(v, 1) for v in lighting.average_rgb),
                "warm_index": lighting.warm_index,
                "is_warm": lighting.is_warm,
                "severity": round(lighting.severity, 3),
            },
            "component_confidence": decision.component_confidence,
            "season_scores": decision.scores,
        },
    )
