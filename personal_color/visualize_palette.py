import logging
from math import ceil

import cv2
import numpy as np

from .image_loader import ensure_rgb

logger = logging.getLogger(__name__)


def draw_palette(df, block_size=120):
    """
    Swatch strip (RGB) from a DataFrame with R, G, B columns.
    """
    if df.empty:
        return np.zeros((block_size, 0, 3), dtype=np.uint8)

    palette_img = np.zeros((block_size, block_size * len(df), 3), dtype=np.uint8)
    for i, row in enumerate(df.itertuples(index=False)):
        x1, x2 = i * block_size, (i + 1) * block_size
        palette_img[:, x1:x2] = [row.R, row.G, row.B]

    return palette_img


def _fit_width(row_img, width):
    row_w = row_img.shape[1]
    if row_w < width:
        pad_left = (width - row_w) // 2
        pad_right = width - row_w - pad_left
        return cv2.copyMakeBorder(row_img, 0, 0, pad_left, pad_right,
                                  cv2.BORDER_CONSTANT, value=[255, 255, 255])
    if row_w > width:
        start = (row_w - width) // 2
        return row_img[:, start:start + width]
    return row_img


def append_palette_to_face(image, palette_df, block_size=80, max_rows=2):
    """
    Face image (RGB) with the palette swatches stacked underneath.
    One row when the swatches fit the image width, otherwise up to max_rows rows.
    """
    image = ensure_rgb(image)
    img_w = image.shape[1]
    num_colors = len(palette_df)
    if num_colors == 0:
        raise ValueError("palette is empty")

    max_blocks_per_row = max(1, img_w // block_size)
    if num_colors <= max_blocks_per_row:
        rows_needed = 1
        blocks_per_row = num_colors
    else:
        rows_needed = min(max_rows, ceil(num_colors / max_blocks_per_row))
        blocks_per_row = ceil(num_colors / rows_needed)

    palette_rows = []
    for r in range(rows_needed):
        sub_df = palette_df.iloc[r * blocks_per_row:(r + 1) * blocks_per_row]
        if sub_df.empty:
            continue
        palette_rows.append(_fit_width(draw_palette(sub_df, block_size=block_size), img_w))

    return np.vstack([image] + palette_rows)


def save_rgb(image, save_path):
    """cv2.imwrite expects BGR."""
    ok = cv2.imwrite(str(save_path), cv2.cvtColor(image, cv2.COLOR_RGB2BGR))
    if not ok:
        raise OSError(f"could not write image: {save_path}")
    logger.debug("image saved → %s", save_path)
    return save_path
