import numpy as np
import pytest

from personal_color.analyzer import analyze_face
from personal_color.errors import InvalidInputError
from personal_color.models import (Depth, FaceBox, FaceNotDetected, NotDetectedReason, Season,
                                   SeasonAnalysis)

from .synthetic import FACE, portrait

SKIN_TONES = [(210, 170, 140), (235, 205, 185), (150, 100, 70), (190, 150, 140), (120, 80, 60)]


def test_synthetic_face_end_to_end(face_image, settings):
    result = analyze_face(face_image, settings=settings)
    assert isinstance(result, SeasonAnalysis)
    assert result.face_detected
    assert result.depth in (Depth.light, Depth.medium)
    assert result.season is Season.spring
    assert result.skin_hex == "#d2aa8c"
    assert result.diagnostics["detection_method"] == "heuristic"
    assert result.diagnostics["lighting"]["severity"] == 0.0
    assert len(result.season_candidates) == 2


def test_blue_image_is_not_a_face(blue_image, settings):
    result = analyze_face(blue_image, settings=settings)
    assert isinstance(result, FaceNotDetected)
    assert not result.face_detected
    assert result.reason is NotDetectedReason.no_skin_region


def test_noise_is_not_a_face(noise_image, settings):
    result = analyze_face(noise_image, settings=settings)
    assert isinstance(result, FaceNotDetected)


def test_provided_box_is_used(face_image, settings):
    result = analyze_face(face_image, face_box=FACE, settings=settings)
    assert result.face_detected
    assert result.face_box == FACE
    assert result.diagnostics["detection_method"] == "provided"


def test_provided_box_is_clamped(face_image, settings):
    result = analyze_face(face_image, face_box=FaceBox(40, 20, 500, 500), settings=settings)
    assert result.face_box == FaceBox(40, 20, 120, 140)


def test_normalized_box(face_image, settings):
    box = FaceBox.from_normalized(0.25, 0.125, 0.5, 0.625, 160, 160)
    assert box == FACE
    assert analyze_face(face_image, face_box=box, settings=settings).face_detected


@pytest.mark.parametrize("box", [FaceBox(500, 500, 50, 50), FaceBox(10, 10, 0, 40), FaceBox(-80, 0, 60, 60)])
def test_empty_box_is_an_error(box, face_image, settings):
    with pytest.raises(InvalidInputError):
        analyze_face(face_image, face_box=box, settings=settings)


def test_provided_box_over_background(face_image, settings):
    result = analyze_face(face_image, face_box=FaceBox(0, 125, 160, 35), settings=settings)
    assert isinstance(result, FaceNotDetected)
    assert result.reason is NotDetectedReason.too_few_skin_samples
    assert result.diagnostics["detection_method"] == "provided"


@pytest.mark.parametrize("skin", SKIN_TONES)
def test_always_a_season(skin, settings):
    result = analyze_face(portrait(skin=skin), face_box=FACE, settings=settings)
    assert isinstance(result, SeasonAnalysis)
    assert result.season in tuple(Season)
    assert 0.0 <= result.season_confidence <= settings.max_confidence
    assert isinstance(result.needs_confirmation, bool)


def test_warm_cast_lowers_confidence(settings):
    cool_bg = portrait()
    warm_bg = portrait(background=(200, 190, 60))
    plain = analyze_face(cool_bg, face_box=FACE, settings=settings)
    lit = analyze_face(warm_bg, face_box=FACE, settings=settings)
    assert lit.diagnostics["lighting"]["severity"] > 0.45
    assert lit.season_confidence < plain.season_confidence
    assert "warm_lighting" in lit.quality_issues


@pytest.mark.parametrize("image", [
    np.zeros((0, 10, 3), dtype=np.uint8),
    np.zeros((10, 10, 3), dtype=np.float32),
    np.zeros((10, 10, 2), dtype=np.uint8),
    [[0, 0, 0]],
])
def test_bad_images_rejected(image, settings):
    with pytest.raises(InvalidInputError):
        analyze_face(image, settings=settings)


def test_greyscale_and_rgba_accepted(face_image, settings):
    rgba = np.dstack([face_image, np.full(face_image.shape[:2], 255, dtype=np.uint8)])
    assert analyze_face(rgba, settings=settings).face_detected
    grey = face_image[:, :, 0].copy()
    assert isinstance(analyze_face(grey, settings=settings), (SeasonAnalysis, FaceNotDetected))


@pytest.mark.parametrize("side", [1, 5])
def test_tiny_images_are_not_faces(side, settings):
    result = analyze_face(np.full((side, side, 3), (210, 170, 140), dtype=np.uint8), settings=settings)
    assert isinstance(result, FaceNotDetected)
    assert result.reason is NotDetectedReason.no_skin_region


def test_flat_skin_is_washed_out(face_image, settings):
    result = analyze_face(face_image, face_box=FACE, settings=settings)
    constancy = result.diagnostics["colour_constancy"]
    assert constancy["corrected_chroma"] < settings.washed_out_chroma
    assert constancy["stable_count"] == result.diagnostics["skin_count"]
    assert "washed_out" in result.quality_issues
    assert result.needs_confirmation


def test_few_stable_pixels_reported(face_image, settings):
    strict = settings.model_copy(update={"min_stable_samples": 10_000})
    result = analyze_face(face_image, face_box=FACE, settings=strict)
    assert "few_stable_pixels" in result.quality_issues
