import numpy as np
import pytest

from personal_color.lighting import estimate_lighting
from personal_color.models import FaceBox, FaceNotDetected, NotDetectedReason
from personal_color.skin_extractor import (SkinEstimate, corrected_chroma, estimate_skin_color,
                                          shades_of_gray, trimmed_samples)

from .synthetic import FACE, SKIN, solid_image


def test_uniform_face_estimate(face_image, settings):
    estimate = estimate_skin_color(face_image, FACE, settings)
    assert isinstance(estimate, SkinEstimate)
    assert estimate.rgb.as_tuple() == SKIN
    assert estimate.sample_count == 3 * 14 * 14
    assert estimate.skin_ratio == pytest.approx(1.0)
    assert estimate.mad_lab == pytest.approx((0.0, 0.0, 0.0))
    assert estimate.mean_saturation == pytest.approx(70 / 210, abs=1e-6)
    assert set(estimate.zone_counts) == {"left_cheek", "right_cheek", "forehead"}


def test_too_few_skin_samples(face_image, settings):
    outcome = estimate_skin_color(face_image, FaceBox(0, 125, 160, 35), settings)
    assert isinstance(outcome, FaceNotDetected)
    assert outcome.reason is NotDetectedReason.too_few_skin_samples
    assert outcome.diagnostics["skin_count"] == 0


def test_low_skin_ratio(face_image, settings):
    # only the left third of this box is skin
    outcome = estimate_skin_color(face_image, FaceBox(100, 20, 60, 100), settings)
    assert isinstance(outcome, FaceNotDetected)
    assert outcome.reason is NotDetectedReason.low_skin_ratio
    assert outcome.diagnostics["skin_count"] >= settings.min_skin_samples


def test_trimmed_samples_drop_both_tails():
    samples = np.array([[v, v, v] for v in range(10, 110, 10)], dtype=np.uint8)
    np.random.default_rng(0).shuffle(samples)
    kept = trimmed_samples(samples, 0.15)
    assert len(kept) == 8
    assert kept[:, 0].min() == 20 and kept[:, 0].max() == 90


def test_trimmed_samples_keep_one():
    one = np.array([[1, 2, 3]], dtype=np.uint8)
    assert trimmed_samples(one, 0.15).tolist() == [[1, 2, 3]]
    three = np.array([[1, 1, 1], [2, 2, 2], [3, 3, 3]], dtype=np.uint8)
    assert len(trimmed_samples(three, 0.5)) == 1


def test_outliers_do_not_move_the_estimate(face_image, settings):
    img = face_image.copy()
    # a few darker and brighter skin pixels inside the cheeks
    img[70:72, 40:120] = (120, 80, 60)
    img[90:92, 40:120] = (235, 205, 185)
    estimate = estimate_skin_color(img, FACE, settings)
    r, g, b = estimate.rgb.as_tuple()
    assert abs(r - SKIN[0]) <= 3 and abs(g - SKIN[1]) <= 3 and abs(b - SKIN[2]) <= 3


def test_lighting_neutral_and_warm(blue_image, settings):
    cool = estimate_lighting(blue_image, settings)
    assert not cool.is_warm
    assert cool.severity == 0.0

    warm = estimate_lighting(solid_image((220, 180, 80)), settings)
    assert warm.is_warm
    assert warm.warm_index == pytest.approx(120 / 255, abs=1e-3)
    assert warm.severity == 1.0

    mild = estimate_lighting(solid_image((150, 140, 120)), settings)
    assert mild.is_warm
    assert mild.severity == pytest.approx((25 / 255 - 0.08) / 0.18, abs=1e-6)


def test_uniform_skin_is_gray_after_constancy(face_image, settings):
    estimate = estimate_skin_color(face_image, FACE, settings)
    assert estimate.stable_count == estimate.skin_count
    assert not estimate.gains_clamped
    assert estimate.corrected_chroma < settings.washed_out_chroma


def test_shades_of_gray_balances_channels(settings):
    samples = np.tile(np.array([[210, 170, 140]], dtype=np.uint8), (20, 1))
    corrected, gains, clamped = shades_of_gray(samples, settings)
    assert not clamped
    assert gains == pytest.approx((520 / 3 / 210, 520 / 3 / 170, 520 / 3 / 140), rel=1e-6)
    assert (corrected == 173).all()


def test_shades_of_gray_clamps_gains(settings):
    samples = np.tile(np.array([[200, 100, 40]], dtype=np.uint8), (20, 1))
    corrected, gains, clamped = shades_of_gray(samples, settings)
    assert clamped
    assert gains[0] == pytest.approx(0.70)
    assert gains[2] == pytest.approx(1.45)
    assert corrected[0].tolist() == [140, 113, 58]


def test_shades_of_gray_skips_dark_samples(settings):
    samples = np.full((10, 3), 5, dtype=np.uint8)
    corrected, gains, clamped = shades_of_gray(samples, settings)
    assert corrected is samples
    assert gains == (1.0, 1.0, 1.0) and not clamped


def test_varied_skin_keeps_chroma(settings):
    samples = np.array([[210, 170, 140]] * 50 + [[150, 100, 70]] * 50, dtype=np.uint8)
    corrected, _, _ = shades_of_gray(samples, settings)
    assert corrected_chroma(corrected, settings) > settings.washed_out_chroma
