import numpy as np
import pytest
from skimage.color import rgb2lab

from personal_color.color_math import (delta_e76, hex_to_lab, hex_to_rgb, normalize_hex,
                                       rgb_array_to_hsv, rgb_array_to_lab, rgb_to_hex,
                                       rgb_to_hsv, rgb_to_lab)
from personal_color.errors import InvalidInputError
from personal_color.models import RGB, Lab

SAMPLE_COLORS = [
    (0, 0, 0), (255, 255, 255), (255, 0, 0), (0, 255, 0), (0, 0, 255),
    (210, 170, 140), (255, 127, 80), (18, 52, 86), (128, 128, 128), (1, 254, 17),
]


def test_hex_rgb_round_trip():
    rng = np.random.default_rng(7)
    for r, g, b in rng.integers(0, 256, size=(500, 3)):
        assert hex_to_rgb(rgb_to_hex((r, g, b))).as_tuple() == (r, g, b)
    for color in SAMPLE_COLORS:
        assert hex_to_rgb(rgb_to_hex(color)).as_tuple() == color


def test_hex_formatting():
    assert rgb_to_hex(RGB(255, 127, 80)) == "#ff7f50"
    assert normalize_hex("FF7F50") == "#ff7f50"
    assert hex_to_rgb("#abc").as_tuple() == (0xAA, 0xBB, 0xCC)


@pytest.mark.parametrize("bad", ["", "#12345", "#GGGGGG", "red", "#1234567", None, 0xFF7F50])
def test_malformed_hex_rejected(bad):
    with pytest.raises(InvalidInputError):
        hex_to_rgb(bad)


def test_rgb_range_checked():
    with pytest.raises(InvalidInputError):
        RGB(256, 0, 0)
    with pytest.raises(ValueError):
        rgb_to_lab((-1, 0, 0))


def test_known_lab_values():
    white = rgb_to_lab((255, 255, 255))
    assert white.L == pytest.approx(100.0, abs=0.01)
    assert white.a == pytest.approx(0.0, abs=0.01)
    assert white.b == pytest.approx(0.0, abs=0.01)

    black = rgb_to_lab((0, 0, 0))
    assert black.as_tuple() == pytest.approx((0.0, 0.0, 0.0), abs=1e-6)

    skin = rgb_to_lab((210, 170, 140))
    assert skin.L == pytest.approx(72.5, abs=0.3)
    assert skin.b > skin.a > 0


def test_lab_matches_skimage():
    rng = np.random.default_rng(3)
    colors = np.vstack([np.array(SAMPLE_COLORS), rng.integers(0, 256, size=(200, 3))]).astype(np.uint8)
    reference = rgb2lab(colors.reshape(1, -1, 3)).reshape(-1, 3)
    for color, ref in zip(colors, reference):
        assert delta_e76(rgb_to_lab(color), ref) < 0.5


def test_vectorised_forms_agree_with_scalar():
    colors = np.array(SAMPLE_COLORS, dtype=np.uint8)
    labs = rgb_array_to_lab(colors)
    hsvs = rgb_array_to_hsv(colors)
    for color, lab, hsv in zip(SAMPLE_COLORS, labs, hsvs):
        assert delta_e76(lab, rgb_to_lab(color)) < 0.05
        assert hsv == pytest.approx(rgb_to_hsv(color), abs=1e-6)


def test_batch_shapes():
    img = np.zeros((4, 5, 3), dtype=np.uint8)
    img[:, :] = (210, 170, 140)
    assert rgb_array_to_lab(img).shape == (4, 5, 3)
    assert rgb_array_to_hsv(img).shape == (4, 5, 3)
    assert rgb_array_to_hsv(img)[0, 0] == pytest.approx(rgb_to_hsv((210, 170, 140)))
    assert rgb_array_to_lab(np.empty((0, 3), dtype=np.uint8)).shape == (0, 3)


def test_hsv():
    assert rgb_to_hsv((255, 0, 0)) == pytest.approx((0.0, 1.0, 1.0))
    assert rgb_to_hsv((0, 0, 255)) == pytest.approx((240.0, 1.0, 1.0))
    h, s, v = rgb_to_hsv((128, 128, 128))
    assert s == 0.0
    assert v == pytest.approx(128 / 255)


def test_delta_e_identity_and_symmetry():
    labs = [hex_to_lab(rgb_to_hex(c)) for c in SAMPLE_COLORS]
    for lab in labs:
        assert delta_e76(lab, lab) == 0.0
    for a in labs:
        for b in labs:
            assert delta_e76(a, b) == delta_e76(b, a)


def test_delta_e_is_euclidean():
    assert delta_e76(Lab(50, 0, 0), Lab(53, 4, 0)) == pytest.approx(5.0)
    assert delta_e76((50, 0, 0), Lab(50, 0, 12)) == pytest.approx(12.0)
