"""
Working-image preparation.

Bounds the image size by ``max_dimension`` and derives the mask and
composite buffers consumed by the segmentation core.
"""

from __future__ import annotations

import math
from pathlib import Path
from typing import Optional, Tuple

from .codec import (
    InvalidImageError,
    SourceImage,
    derive_composite_buffer,
    derive_mask_buffer,
    load_and_normalize,
    resample,
)
from .config import Settings
from .logging import get_logger
from .segmentation import WorkingImage

logger = get_logger(__name__)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def compute_working_size(
    width: Optional[int],
    height: Optional[int],
    max_dimension: int,
) -> Tuple[int, int, float]:
    """
    Compute the working resolution for an image.

    The larger side is brought down to ``max_dimension`` and each side is
    rounded independently, so the aspect ratio may drift by up to a pixel.

    Returns:
        Tuple of (width, height, scale)

    Raises:
        InvalidImageError: If either dimension is missing or zero
    """
    if not width or not height:
        raise InvalidImageError(f"Invalid image dimensions: {width}x{height}")

    largest = max(width, height)
    if largest <= max_dimension:
        return width, height, 1.0

    scale = max_dimension / largest
    scaled_width = max(1, _round_half_up(width * scale))
    scaled_height = max(1, _round_half_up(height * scale))
    return scaled_width, scaled_height, scale


def prepare_working_image(source: SourceImage, settings: Settings) -> WorkingImage:
    """Derive the mask and composite buffers for ``source`` at its working size."""
    width, height, scale = compute_working_size(source.width, source.height, settings.max_dimension)

    image = source.image
    if scale < 1.0:
        logger.info(
            f"Scaling {source.width}x{source.height} image by {scale:.4f} to {width}x{height}"
        )
        image = resample(image, width, height)

    mask = derive_mask_buffer(image, settings.threshold)
    composite = derive_composite_buffer(image)

    return WorkingImage(
        width=width,
        height=height,
        mask=mask,
        composite=composite,
        source_width=source.width,
        source_height=source.height,
        scale=scale,
    )


def load_working_image(path: Path, settings: Settings) -> WorkingImage:
    """Decode ``path`` and prepare its working image."""
    with load_and_normalize(path) as source:
        return prepare_working_image(source, settings)
