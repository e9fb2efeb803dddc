from .analyzer import analyze_face
from .color_math import delta_e76, hex_to_lab, hex_to_rgb, rgb_to_hex, rgb_to_lab
from .config import Settings, get_settings
from .errors import ComputationError, InvalidInputError, PersonalColorError
from .models import (RGB, ClassificationResult, ClassificationStatus, Clarity, Depth, FaceBox,
                     FaceNotDetected, Group, Lab, NotDetectedReason, PaletteColor, Season,
                     SeasonAnalysis, SeasonCandidate, Undertone)
from .palette import get_palette, iter_palette
from .palette_classifier import classify_color, rate_color_for_season
from .season_profiles import all_seasons, get_season_profile

__version__ = "0.1.0"
