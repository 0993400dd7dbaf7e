"""
Connected-component discovery over a binary mask.

The fill walks 4-connected foreground pixels from a seed using the run's
preallocated work list as a LIFO stack. The stack never grows past one slot
per pixel: once fewer than five slots remain, a visited pixel pushes no
neighbours at all. On near fully-foreground images this can leave a
component incomplete; that truncation is accepted and is not reported as an
error.
"""

from __future__ import annotations

from .model import Bounds, Component, PixelCoordinate, SegmentationContext
from ..logging import get_logger

logger = get_logger(__name__)


def flood_fill(context: SegmentationContext, seed: PixelCoordinate) -> Component:
    """
    Collect the foreground region reachable from ``seed``.

    Marks every collected pixel in ``context.visited``.

    Args:
        context: Run state holding mask, threshold, visited flags and work list
        seed: Starting coordinate; must be an unvisited foreground pixel

    Returns:
        Component with the region's linear pixel indices and inclusive bounds

    Raises:
        ValueError: If the seed is out of bounds, already visited or background
    """
    width = context.width
    height = context.height
    if not seed.is_within(width, height):
        raise ValueError(f"Seed {seed} lies outside {width}x{height} image")
    seed_pos = seed.linear_index(width)
    if context.is_visited(seed_pos) or not context.is_foreground(seed_pos):
        raise ValueError(f"Seed {seed} is not an unvisited foreground pixel")

    mask = context.mask
    visited = context.visited
    threshold = context.threshold
    queue_x = context.queue_x
    queue_y = context.queue_y
    capacity = context.capacity

    pixels = set()
    min_x = max_x = seed.x
    min_y = max_y = seed.y

    queue_x[0] = seed.x
    queue_y[0] = seed.y
    size = 1
    truncated = False

    while size > 0:
        size -= 1
        x = queue_x[size]
        y = queue_y[size]
        pos = y * width + x

        if x < 0 or x >= width or y < 0 or y >= height or visited[pos] or mask[pos] >= threshold:
            continue

        visited[pos] = 1
        pixels.add(pos)

        if x < min_x:
            min_x = x
        elif x > max_x:
            max_x = x
        if y < min_y:
            min_y = y
        elif y > max_y:
            max_y = y

        if size + 4 < capacity:
            if x + 1 < width:
                queue_x[size] = x + 1
                queue_y[size] = y
                size += 1
            if x - 1 >= 0:
                queue_x[size] = x - 1
                queue_y[size] = y
                size += 1
            if y + 1 < height:
                queue_x[size] = x
                queue_y[size] = y + 1
                size += 1
            if y - 1 >= 0:
                queue_x[size] = x
                queue_y[size] = y - 1
                size += 1
        else:
            truncated = True

    if truncated:
        logger.debug(f"Work list full while filling from {seed}; component may be partial")

    return Component(
        pixels=frozenset(pixels),
        bounds=Bounds(min_x=min_x, min_y=min_y, max_x=max_x, max_y=max_y),
        seed=seed,
    )
