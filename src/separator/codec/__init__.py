"""
Image codec adapter.

Decoding, orientation, buffer derivation, resampling and PNG output for the
segmentation core, backed by Pillow and OpenCV.
"""

from .ingestion import (
    DecodeError,
    ImageCodecError,
    InvalidImageError,
    SourceImage,
    load_and_normalize,
)
from .buffers import derive_composite_buffer, derive_mask_buffer, resample
from .encoding import EncodeError, encode_png, write_file

__all__ = [
    'DecodeError',
    'EncodeError',
    'ImageCodecError',
    'InvalidImageError',
    'SourceImage',
    'load_and_normalize',
    'derive_mask_buffer',
    'derive_composite_buffer',
    'resample',
    'encode_png',
    'write_file',
]
