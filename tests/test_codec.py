"""Tests for the Pillow/OpenCV image codec adapter."""

import io

import pytest
from PIL import Image

from separator.codec import (
    DecodeError,
    EncodeError,
    ImageCodecError,
    InvalidImageError,
    derive_composite_buffer,
    derive_mask_buffer,
    encode_png,
    load_and_normalize,
    resample,
    write_file,
)


def _gray_row(values):
    img = Image.new("L", (len(values), 1))
    img.putdata(values)
    return img


class TestErrorHierarchy:
    def test_invalid_image_is_a_decode_error(self):
        assert issubclass(InvalidImageError, DecodeError)
        assert issubclass(DecodeError, ImageCodecError)
        assert issubclass(EncodeError, ImageCodecError)


class TestLoadAndNormalize:
    def test_loads_png(self, tmp_path):
        path = tmp_path / "img.png"
        Image.new("RGB", (7, 3), color="blue").save(path)

        with load_and_normalize(path) as source:
            assert source.path == path
            assert (source.width, source.height) == (7, 3)
            assert source.image.size == (7, 3)

    def test_missing_file(self, tmp_path):
        with pytest.raises(DecodeError, match="does not exist"):
            load_and_normalize(tmp_path / "missing.png")

    def test_not_an_image(self, tmp_path):
        path = tmp_path / "notes.png"
        path.write_bytes(b"definitely not an image")

        with pytest.raises(DecodeError):
            load_and_normalize(path)

    def test_truncated_image(self, tmp_path):
        buffer = io.BytesIO()
        Image.new("RGB", (64, 64), color="red").save(buffer, format="PNG")
        path = tmp_path / "truncated.png"
        path.write_bytes(buffer.getvalue()[:60])

        with pytest.raises(DecodeError):
            load_and_normalize(path)


class TestDeriveMaskBuffer:
    def test_threshold_boundary(self):
        mask = derive_mask_buffer(_gray_row([0, 100, 239, 240, 255]), 240)
        assert list(mask) == [0, 0, 0, 255, 255]

    def test_zero_threshold_has_no_foreground(self):
        mask = derive_mask_buffer(_gray_row([0, 128, 255]), 0)
        assert list(mask) == [255, 255, 255]

    def test_max_threshold(self):
        mask = derive_mask_buffer(_gray_row([0, 254, 255]), 255)
        assert list(mask) == [0, 0, 255]

    def test_colour_image_uses_luma(self):
        img = Image.new("RGB", (2, 1))
        img.putdata([(255, 255, 255), (0, 0, 255)])
        mask = derive_mask_buffer(img, 240)
        # pure blue is dark in luma terms
        assert list(mask) == [255, 0]

    def test_alpha_is_ignored(self):
        img = Image.new("RGBA", (2, 1))
        img.putdata([(0, 0, 0, 0), (255, 255, 255, 0)])
        mask = derive_mask_buffer(img, 240)
        # transparent black is still dark
        assert list(mask) == [0, 255]

    def test_row_major_layout(self):
        img = Image.new("L", (3, 2), color=255)
        img.putpixel((2, 1), 0)
        mask = derive_mask_buffer(img, 128)
        assert len(mask) == 6
        assert mask[5] == 0
        assert mask.count(0) == 1


class TestDeriveCompositeBuffer:
    def test_adds_opaque_alpha(self):
        img = Image.new("RGB", (2, 1), color=(10, 20, 30))
        assert derive_composite_buffer(img) == bytes([10, 20, 30, 255] * 2)

    def test_keeps_existing_alpha(self):
        img = Image.new("RGBA", (1, 1), color=(10, 20, 30, 40))
        assert derive_composite_buffer(img) == bytes([10, 20, 30, 40])

    def test_grayscale_source(self):
        img = Image.new("L", (1, 1), color=77)
        assert derive_composite_buffer(img) == bytes([77, 77, 77, 255])


class TestResample:
    def test_resizes_to_exact_dimensions(self):
        img = Image.new("RGB", (40, 20), color="green")
        resized = resample(img, 10, 5)
        assert resized.size == (10, 5)


class TestEncodePng:
    def test_encodes_decodable_png(self):
        rgba = bytes([255, 0, 0, 255, 0, 0, 0, 0])
        data = encode_png(rgba, 2, 1)

        assert data.startswith(b"\x89PNG")
        with Image.open(io.BytesIO(data)) as img:
            assert img.mode == "RGBA"
            assert img.size == (2, 1)
            assert img.tobytes() == rgba

    def test_buffer_size_mismatch(self):
        with pytest.raises(EncodeError, match="expected"):
            encode_png(bytes(7), 2, 1)

    def test_compression_level_does_not_change_pixels(self):
        rgba = bytes(range(64))
        fast = encode_png(rgba, 4, 4, compression_level=0)
        small = encode_png(rgba, 4, 4, compression_level=9)

        with Image.open(io.BytesIO(fast)) as a, Image.open(io.BytesIO(small)) as b:
            assert a.tobytes() == b.tobytes() == rgba


class TestWriteFile:
    def test_writes_bytes(self, tmp_path):
        path = write_file(tmp_path / "out.bin", b"abc")
        assert path.read_bytes() == b"abc"

    def test_missing_directory(self, tmp_path):
        with pytest.raises(EncodeError, match="Failed to write"):
            write_file(tmp_path / "missing" / "out.bin", b"abc")
