import numpy as np
import pytest

from personal_color.config import Settings

from .synthetic import BACKGROUND, portrait, solid_image


@pytest.fixture
def settings():
    return Settings()


@pytest.fixture
def face_image():
    return portrait()


@pytest.fixture
def blue_image():
    return solid_image(BACKGROUND)


@pytest.fixture
def noise_image():
    rng = np.random.default_rng(0)
    return rng.integers(0, 256, size=(160, 160, 3), dtype=np.uint8)
