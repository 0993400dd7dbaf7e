"""Output artifacts written alongside separated objects."""

from .manifest import (
    Manifest,
    ManifestItem,
    build_manifest,
    load_manifest_json,
    write_manifest_json,
)

__all__ = [
    'Manifest',
    'ManifestItem',
    'build_manifest',
    'load_manifest_json',
    'write_manifest_json',
]
