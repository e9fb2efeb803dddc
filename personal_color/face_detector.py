import logging
from dataclasses import dataclass, replace
from typing import Optional, Tuple

from .config import get_settings
from .image_loader import ensure_rgb
from .models import FaceBox
from .pixel_sampler import downsample, fraction_box, sample_grid, skin_mask

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ZoneScan:
    """Skin statistics of one search zone, in downsampled coordinates."""
    index: int
    zone: Tuple[int, int, int, int]
    skin_count: int
    sample_count: int
    bbox: Optional[Tuple[int, int, int, int]]  # (x, y, w, h) of skin samples
    accepted: bool

    @property
    def skin_ratio(self):
        return self.skin_count / self.sample_count if self.sample_count else 0.0

    @property
    def aspect(self):
        if self.bbox is None or self.bbox[3] == 0:
            return 0.0
        return self.bbox[2] / self.bbox[3]

    @property
    def score(self):
        return self.skin_ratio * self.skin_count


# -------------------------------------------------------
# search zones → skin bounding boxes
# -------------------------------------------------------
def scan_zones(small, settings=None):
    """Scan each search zone of an already downsampled RGB image."""
    s = settings or get_settings()
    h, w = small.shape[:2]

    scans = []
    for index, fractions in enumerate(s.detect_zones):
        zone = fraction_box(fractions, w, h)
        xs, ys, pixels = sample_grid(small, zone, s.detect_grid)
        mask = skin_mask(pixels, s)
        skin_count = int(mask.sum())

        bbox = None
        if skin_count:
            sx, sy = xs[mask], ys[mask]
            bbox = (int(sx.min()), int(sy.min()),
                    int(sx.max() - sx.min() + 1), int(sy.max() - sy.min() + 1))

        scan = ZoneScan(index=index, zone=zone, skin_count=skin_count,
                        sample_count=len(xs), bbox=bbox, accepted=False)
        accepted = (
            scan.skin_ratio >= s.zone_min_skin_ratio
            and skin_count >= s.zone_min_skin_count
            and s.face_min_aspect <= scan.aspect <= s.face_max_aspect
        )
        scan = replace(scan, accepted=accepted)

        logger.debug("zone %d %s: skin=%d/%d ratio=%.2f aspect=%.2f accepted=%s",
                     index, zone, skin_count, scan.sample_count, scan.skin_ratio, scan.aspect, accepted)
        scans.append(scan)

    return scans


def pick_zone(scans):
    """Accepted zone with the highest ratio x count; first zone wins ties."""
    best = None
    for scan in scans:
        if scan.accepted and (best is None or scan.score > best.score):
            best = scan
    return best


# -------------------------------------------------------
# final face box in source-image coordinates
# -------------------------------------------------------
def detect_face_region(image, settings=None):
    """
    Heuristic face box, or None when no zone looks like a face.
    None means "no face"; callers must not fall back to a guess.
    """
    s = settings or get_settings()
    image = ensure_rgb(image)
    img_h, img_w = image.shape[:2]

    small, scale = downsample(image, s.detect_max_side)
    best = pick_zone(scan_zones(small, s))
    if best is None:
        logger.debug("no search zone accepted")
        return None

    x, y, w, h = best.bbox
    pad_x = w * s.face_padding
    pad_y = h * s.face_padding
    box = FaceBox(
        x=int(round((x - pad_x) / scale)),
        y=int(round((y - pad_y) / scale)),
        width=int(round((w + 2 * pad_x) / scale)),
        height=int(round((h + 2 * pad_y) / scale)),
    ).clamp(img_w, img_h)

    if box.width == 0 or box.height == 0:
        return None

    logger.debug("face region from zone %d: %s", best.index, box.as_tuple())
    return box


def crop_face(image, box):
    return image[box.y:box.y + box.height, box.x:box.x + box.width]
