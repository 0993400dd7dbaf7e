"""Data model for mask segmentation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, List, Tuple


@dataclass(frozen=True)
class PixelCoordinate:
    x: int
    y: int

    def is_within(self, width: int, height: int) -> bool:
        return 0 <= self.x < width and 0 <= self.y < height

    def linear_index(self, width: int) -> int:
        return self.y * width + self.x


@dataclass(frozen=True)
class Bounds:
    """Inclusive bounding box of a component in working-image coordinates."""

    min_x: int
    min_y: int
    max_x: int
    max_y: int

    @property
    def width(self) -> int:
        return self.max_x - self.min_x + 1

    @property
    def height(self) -> int:
        return self.max_y - self.min_y + 1

    def as_bbox(self) -> Tuple[int, int, int, int]:
        """Return the box as (x, y, w, h)."""
        return (self.min_x, self.min_y, self.width, self.height)


@dataclass(frozen=True)
class Component:
    """A connected foreground region discovered by one flood fill."""

    pixels: FrozenSet[int]
    bounds: Bounds
    seed: PixelCoordinate

    @property
    def size(self) -> int:
        return len(self.pixels)


@dataclass(frozen=True)
class WorkingImage:
    """
    Mask and composite buffers at the working resolution.

    ``mask`` holds one byte per pixel and ``composite`` four (RGBA), both in
    row-major order. ``scale`` records the factor applied to the source image
    (1.0 when it already fit).
    """

    width: int
    height: int
    mask: bytes = field(repr=False)
    composite: bytes = field(repr=False)
    source_width: int = 0
    source_height: int = 0
    scale: float = 1.0

    def __post_init__(self) -> None:
        if self.width < 1 or self.height < 1:
            raise ValueError(f"Working image must be non-empty, got {self.width}x{self.height}")
        if len(self.mask) != self.pixel_count:
            raise ValueError(
                f"Mask has {len(self.mask)} bytes, expected {self.pixel_count}"
            )
        if len(self.composite) != self.pixel_count * 4:
            raise ValueError(
                f"Composite has {len(self.composite)} bytes, expected {self.pixel_count * 4}"
            )

    @property
    def pixel_count(self) -> int:
        return self.width * self.height


@dataclass(frozen=True)
class ExtractedObject:
    """A cropped RGBA cutout of one component, independent of the working image."""

    index: int
    width: int
    height: int
    rgba: bytes = field(repr=False)
    bounds: Bounds
    pixel_count: int


class SegmentationContext:
    """
    State owned by a single segmentation run.

    Holds the visited flags and the flood-fill work list. Both are allocated
    once and reused by every flood fill in the run; visited flags are only
    ever set, never cleared.
    """

    def __init__(self, working: WorkingImage, threshold: int) -> None:
        self.working = working
        self.threshold = threshold
        self.visited = bytearray(working.pixel_count)
        # Work list capacity is fixed at one slot per pixel
        self.capacity = working.pixel_count
        self.queue_x: List[int] = [0] * self.capacity
        self.queue_y: List[int] = [0] * self.capacity

    @property
    def width(self) -> int:
        return self.working.width

    @property
    def height(self) -> int:
        return self.working.height

    @property
    def mask(self) -> bytes:
        return self.working.mask

    def is_foreground(self, pos: int) -> bool:
        return self.working.mask[pos] < self.threshold

    def is_visited(self, pos: int) -> bool:
        return bool(self.visited[pos])
