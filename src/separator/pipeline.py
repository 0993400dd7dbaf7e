"""
End-to-end separation of foreground objects from one image.

Stages run strictly in order: preprocessing, a full component scan, then
extraction. Extraction and PNG output are independent per component and run
on a thread pool that shares the working image's immutable composite buffer.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from .codec import EncodeError, encode_png, write_file
from .config import Settings
from .logging import get_logger
from .output.manifest import ManifestItem, build_manifest, write_manifest_json
from .preprocess import load_working_image
from .segmentation import (
    Component,
    SegmentationContext,
    WorkingImage,
    extract_object,
    scan_components,
)

logger = get_logger(__name__)

OBJECT_FILE_TEMPLATE = "object_{index}.png"


@dataclass
class SeparationResult:
    """Outcome of a completed separation run."""
    object_count: int
    output_paths: List[Path] = field(default_factory=list)
    objects: List[ManifestItem] = field(default_factory=list)
    working_width: int = 0
    working_height: int = 0
    scale: float = 1.0
    manifest_path: Optional[Path] = None


def object_file_name(index: int) -> str:
    return OBJECT_FILE_TEMPLATE.format(index=index)


def find_components(working: WorkingImage, threshold: int, min_pixels: int) -> List[Component]:
    """Scan a working image with a fresh segmentation context."""
    context = SegmentationContext(working, threshold)
    return scan_components(context, min_pixels)


def _save_object(
    index: int,
    component: Component,
    working: WorkingImage,
    output_dir: Path,
    compression_level: int,
) -> ManifestItem:
    obj = extract_object(component, working.composite, working.width, index=index)
    data = encode_png(obj.rgba, obj.width, obj.height, compression_level=compression_level)
    path = write_file(output_dir / object_file_name(index), data)
    logger.info(f"Saved object {index} to {path} (bbox {obj.bounds.as_bbox()})")
    return ManifestItem.from_object(obj, path)


def save_objects(
    components: List[Component],
    working: WorkingImage,
    output_dir: Path,
    settings: Settings,
) -> List[ManifestItem]:
    """
    Extract and write every component as ``object_<index>.png``.

    Files are written concurrently; the returned items are in index order.
    The first failure in index order is re-raised after outstanding work finishes.
    """
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise EncodeError(f"Failed to create output directory {output_dir}: {exc}") from exc
    if not components:
        return []

    with ThreadPoolExecutor(max_workers=settings.workers) as executor:
        futures = [
            executor.submit(
                _save_object,
                index,
                component,
                working,
                output_dir,
                settings.png_compression_level,
            )
            for index, component in enumerate(components)
        ]
        return [future.result() for future in futures]


def separate_objects(
    input_path: Path,
    output_dir: Optional[Path] = None,
    settings: Optional[Settings] = None,
) -> SeparationResult:
    """
    Separate every foreground object of an image into its own PNG.

    Args:
        input_path: Image file to process
        output_dir: Destination directory (defaults to ``settings.output_dir``)
        settings: Run configuration (uses defaults if None)

    Returns:
        SeparationResult whose object_count equals the number of retained components

    Raises:
        DecodeError: If the input cannot be decoded
        InvalidImageError: If the input has no usable dimensions
        EncodeError: If any object fails to encode or write
    """
    if settings is None:
        settings = Settings()
    input_path = Path(input_path)
    output_dir = Path(output_dir) if output_dir is not None else settings.output_dir

    logger.info(f"Processing image: {input_path}")
    try:
        working = load_working_image(input_path, settings)
        components = find_components(working, settings.threshold, settings.min_pixels)
        logger.info(f"Found {len(components)} objects")

        items = save_objects(components, working, output_dir, settings)

        manifest_path = None
        if settings.write_manifest:
            manifest = build_manifest(input_path, working, items, settings)
            manifest_path = write_manifest_json(manifest, output_dir)
    except Exception as exc:
        logger.error(f"Failed to separate {input_path}: {exc}")
        raise

    logger.info("Processing complete")
    return SeparationResult(
        object_count=len(items),
        output_paths=[Path(item.file_path) for item in items],
        objects=items,
        working_width=working.width,
        working_height=working.height,
        scale=working.scale,
        manifest_path=manifest_path,
    )
