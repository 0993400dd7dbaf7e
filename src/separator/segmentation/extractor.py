from __future__ import annotations

import numpy as np

from .model import Component, ExtractedObject


def extract_object(component: Component, composite: bytes, width: int, index: int = 0) -> ExtractedObject:
    """
    Cut one component out of the composite buffer.

    The result covers the component's bounding box. Component pixels carry
    the source RGB with full opacity; source alpha is discarded. Every other
    pixel in the box stays fully transparent.

    Args:
        component: Component to extract
        composite: Row-major RGBA buffer of the working image (read only)
        width: Working image width
        index: Sequence number of the object in scan order

    Returns:
        ExtractedObject owning a copy of the cropped pixels
    """
    bounds = component.bounds
    source = np.frombuffer(composite, dtype=np.uint8).reshape(-1, 4)

    positions = np.fromiter(component.pixels, dtype=np.int64, count=component.size)
    rows = positions // width - bounds.min_y
    cols = positions % width - bounds.min_x

    canvas = np.zeros((bounds.height, bounds.width, 4), dtype=np.uint8)
    canvas[rows, cols, :3] = source[positions, :3]
    canvas[rows, cols, 3] = 255

    return ExtractedObject(
        index=index,
        width=bounds.width,
        height=bounds.height,
        rgba=canvas.tobytes(),
        bounds=bounds,
        pixel_count=component.size,
    )
