"""
Tests for per-format encoding
"""
import io

import pytest
from PIL import Image


class TestPrepareForFormat:
    """Test pixel mode normalization"""

    def test_jpeg_flattens_alpha_onto_white(self):
        from image_converter.export import prepare_for_format
        from image_converter.formats import ImageFormat

        transparent = Image.new("RGBA", (4, 4), (0, 0, 0, 0))
        prepared = prepare_for_format(transparent, ImageFormat.JPEG)

        assert prepared.mode == "RGB"
        assert prepared.getpixel((0, 0)) == (255, 255, 255)

    def test_png_keeps_alpha(self):
        from image_converter.export import prepare_for_format
        from image_converter.formats import ImageFormat

        image = Image.new("RGBA", (4, 4), (10, 20, 30, 40))
        assert prepare_for_format(image, ImageFormat.PNG) is image

    def test_cmyk_converted_for_png(self):
        from image_converter.export import prepare_for_format
        from image_converter.formats import ImageFormat

        image = Image.new("CMYK", (4, 4))
        assert prepare_for_format(image, ImageFormat.PNG).mode == "RGBA"

    def test_bmp_flattens_palette_transparency(self):
        from image_converter.export import prepare_for_format
        from image_converter.formats import ImageFormat

        image = Image.new("P", (4, 4), 0)
        image.info["transparency"] = 0
        assert prepare_for_format(image, ImageFormat.BMP).mode == "RGB"

    def test_gif_quantizes_to_palette(self, noisy_image):
        from image_converter.export import prepare_for_format
        from image_converter.formats import ImageFormat

        prepared = prepare_for_format(noisy_image.convert("RGB"), ImageFormat.GIF)

        assert prepared.mode == "P"
        assert len(prepared.getcolors(maxcolors=256)) <= 256

    def test_gif_keeps_transparency(self):
        from image_converter.export import ImageEncoder
        from image_converter.formats import ImageFormat

        image = Image.new("RGBA", (8, 4), (0, 0, 0, 0))
        image.paste((200, 0, 0, 255), (4, 0, 8, 4))

        encoder = ImageEncoder(ImageFormat.GIF)
        prepared = encoder.prepare(image)
        assert prepared.mode == "P"
        assert prepared.getpixel((0, 0)) == prepared.info["transparency"]
        assert prepared.getpixel((6, 2)) != prepared.info["transparency"]

        with Image.open(io.BytesIO(encoder.encode_bytes(prepared))) as decoded:
            rgba = decoded.convert("RGBA")
            assert rgba.getpixel((0, 0))[3] == 0
            assert rgba.getpixel((6, 2))[3] == 255



class TestImageEncoder:
    """Test writing each target format"""

    @pytest.mark.parametrize("fmt,pillow_name", [
        ("jpeg", "JPEG"),
        ("png", "PNG"),
        ("webp", "WEBP"),
        ("gif", "GIF"),
        ("bmp", "BMP"),
        ("tiff", "TIFF"),
        ("ico", "PNG"),
    ])
    def test_encoded_bytes_decode_as_expected_container(self, fmt, pillow_name):
        from image_converter.export import ImageEncoder
        from image_converter.formats import ImageFormat

        encoder = ImageEncoder(ImageFormat(fmt))
        image = encoder.prepare(Image.new("RGBA", (16, 8), (200, 100, 50, 255)))
        data = encoder.encode_bytes(image, quality=80)

        with Image.open(io.BytesIO(data)) as decoded:
            assert decoded.format == pillow_name
            assert decoded.size == (16, 8)

    def test_svg_encoder_rejected(self):
        from image_converter.errors import EncodeFailure
        from image_converter.export import ImageEncoder
        from image_converter.formats import ImageFormat

        with pytest.raises(EncodeFailure):
            ImageEncoder(ImageFormat.SVG)

    def test_quality_changes_jpeg_size(self, noisy_image):
        from image_converter.export import ImageEncoder
        from image_converter.formats import ImageFormat

        encoder = ImageEncoder(ImageFormat.JPEG)
        small = encoder.encode_bytes(noisy_image, quality=10)
        large = encoder.encode_bytes(noisy_image, quality=95)
        assert len(small) < len(large)

    def test_save_to_missing_directory_fails(self, tmp_path):
        from image_converter.errors import IOFailure
        from image_converter.export import ImageEncoder
        from image_converter.formats import ImageFormat

        encoder = ImageEncoder(ImageFormat.PNG)
        with pytest.raises(IOFailure):
            encoder.save(Image.new("RGB", (2, 2)), tmp_path / "missing" / "out.png")
