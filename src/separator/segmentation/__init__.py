"""
Foreground segmentation.

Flood-fill component discovery over a thresholded mask and per-component
RGBA extraction.
"""

from .model import (
    Bounds,
    Component,
    ExtractedObject,
    PixelCoordinate,
    SegmentationContext,
    WorkingImage,
)
from .flood_fill import flood_fill
from .scanner import scan_components
from .extractor import extract_object

__all__ = [
    'Bounds',
    'Component',
    'ExtractedObject',
    'PixelCoordinate',
    'SegmentationContext',
    'WorkingImage',
    'flood_fill',
    'scan_components',
    'extract_object',
]
