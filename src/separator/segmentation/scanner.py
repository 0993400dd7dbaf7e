from __future__ import annotations

from typing import List

from .flood_fill import flood_fill
from .model import Component, PixelCoordinate, SegmentationContext
from ..logging import get_logger

logger = get_logger(__name__)

# Seeds are sampled on an even grid; regions made only of odd-coordinate
# pixels are never seeded.
SEED_STRIDE = 2


def scan_components(context: SegmentationContext, min_pixels: int) -> List[Component]:
    """
    Find every foreground component reachable from an even-coordinate seed.

    Components are returned in scan order (top-to-bottom, left-to-right by
    seed) and only when they hold strictly more than ``min_pixels`` pixels.
    """
    width = context.width
    height = context.height
    mask = context.mask
    visited = context.visited
    threshold = context.threshold

    components: List[Component] = []
    seeds_filled = 0
    dropped = 0

    for y in range(0, height, SEED_STRIDE):
        for x in range(0, width, SEED_STRIDE):
            pos = y * width + x
            if visited[pos] or mask[pos] >= threshold:
                continue

            component = flood_fill(context, PixelCoordinate(x, y))
            seeds_filled += 1
            if component.size > min_pixels:
                components.append(component)
            else:
                dropped += 1

    logger.debug(
        f"Scanned {width}x{height} mask: {seeds_filled} fills, "
        f"{len(components)} kept, {dropped} at or below {min_pixels} pixels"
    )
    return components
