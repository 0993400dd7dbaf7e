"""
Run manifest for separated objects.

Describes every written object file with its size, pixel count and the
bounding box it was cut from, together with the settings and resolution of
the run that produced it.
"""

import json
from dataclasses import dataclass, asdict
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List

from ..codec import EncodeError
from ..config import Settings
from ..segmentation import ExtractedObject, WorkingImage
from ..logging import get_logger

logger = get_logger(__name__)

MANIFEST_VERSION = "1.0.0"
MANIFEST_FILE_NAME = "manifest.json"


@dataclass(frozen=True)
class ManifestItem:
    """Single written object."""
    index: int                              # Scan-order index
    file_name: str                          # Output file name
    file_path: str                          # Path to saved image file
    width: int                              # Cutout width in pixels
    height: int                             # Cutout height in pixels
    pixel_count: int                        # Opaque pixels in the cutout
    bounds: Dict[str, int]                  # Inclusive box in working coordinates

    @classmethod
    def from_object(cls, obj: ExtractedObject, path: Path) -> "ManifestItem":
        return cls(
            index=obj.index,
            file_name=path.name,
            file_path=str(path),
            width=obj.width,
            height=obj.height,
            pixel_count=obj.pixel_count,
            bounds={
                "min_x": obj.bounds.min_x,
                "min_y": obj.bounds.min_y,
                "max_x": obj.bounds.max_x,
                "max_y": obj.bounds.max_y,
            },
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)


@dataclass(frozen=True)
class Manifest:
    """Complete description of one separation run."""
    version: str                            # Manifest format version
    source_image: str                       # Source image path
    extraction_timestamp: str               # When extraction was performed
    source_dimensions: Dict[str, int]       # Decoded, orientation-corrected size
    working_dimensions: Dict[str, int]      # Size the mask was scanned at
    scale: float                            # Working / source scale factor
    settings: Dict[str, Any]                # Settings used for the run
    total_items: int                        # Total number of objects
    items: List[ManifestItem]               # Individual objects

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "version": self.version,
            "source_image": self.source_image,
            "extraction_timestamp": self.extraction_timestamp,
            "source_dimensions": self.source_dimensions,
            "working_dimensions": self.working_dimensions,
            "scale": self.scale,
            "settings": self.settings,
            "total_items": self.total_items,
            "items": [item.to_dict() for item in self.items],
        }


def build_manifest(
    source_path: Path,
    working: WorkingImage,
    items: List[ManifestItem],
    settings: Settings,
) -> Manifest:
    """
    Build a manifest from the results of a separation run.

    Args:
        source_path: Path to the input image
        working: Working image the objects were cut from
        items: One item per written object
        settings: Settings the run used

    Returns:
        Complete Manifest object, items ordered by index
    """
    ordered = sorted(items, key=lambda item: item.index)
    settings_dict = {
        "min_pixels": settings.min_pixels,
        "max_dimension": settings.max_dimension,
        "threshold": settings.threshold,
        "png_compression_level": settings.png_compression_level,
    }

    manifest = Manifest(
        version=MANIFEST_VERSION,
        source_image=str(source_path),
        extraction_timestamp=datetime.now().isoformat(),
        source_dimensions={"width": working.source_width, "height": working.source_height},
        working_dimensions={"width": working.width, "height": working.height},
        scale=working.scale,
        settings=settings_dict,
        total_items=len(ordered),
        items=ordered,
    )

    logger.info(f"Built manifest with {len(ordered)} items")
    return manifest


def write_manifest_json(manifest: Manifest, output_dir: Path) -> Path:
    """
    Write manifest to JSON file in the output directory.

    Returns:
        Path to the written manifest file

    Raises:
        EncodeError: If the directory or file cannot be written
    """
    manifest_path = output_dir / MANIFEST_FILE_NAME

    try:
        output_dir.mkdir(parents=True, exist_ok=True)
        with open(manifest_path, 'w', encoding='utf-8') as f:
            json.dump(manifest.to_dict(), f, indent=2, ensure_ascii=False)
    except OSError as exc:
        logger.error(f"Failed to write manifest to {manifest_path}: {exc}")
        raise EncodeError(f"Failed to write manifest to {manifest_path}: {exc}") from exc

    logger.info(f"Wrote manifest to {manifest_path}")
    return manifest_path


def load_manifest_json(manifest_path: Path) -> Manifest:
    """Load a manifest previously written by write_manifest_json."""
    try:
        with open(manifest_path, 'r', encoding='utf-8') as f:
            data = json.load(f)

        items = [ManifestItem(**item_data) for item_data in data.get("items", [])]

        manifest = Manifest(
            version=data["version"],
            source_image=data["source_image"],
            extraction_timestamp=data["extraction_timestamp"],
            source_dimensions=data["source_dimensions"],
            working_dimensions=data["working_dimensions"],
            scale=data["scale"],
            settings=data["settings"],
            total_items=data["total_items"],
            items=items,
        )
    except Exception as exc:
        logger.error(f"Failed to load manifest from {manifest_path}: {exc}")
        raise

    logger.info(f"Loaded manifest from {manifest_path} with {len(items)} items")
    return manifest
