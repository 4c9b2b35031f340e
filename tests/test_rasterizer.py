"""
Tests for SVG parsing and rasterization
"""
import pytest
import numpy as np

from conftest import requires_cairo


def svg(attrs: str, body: str = '<rect width="10" height="10" fill="#000"/>') -> bytes:
    return f'<svg xmlns="http://www.w3.org/2000/svg" {attrs}>{body}</svg>'.encode()


class TestParsing:
    """Test bounding box and intrinsic size detection"""

    def test_width_height_only(self):
        from image_converter.ingestion import VectorRasterizer

        doc = VectorRasterizer().parse(svg('width="120" height="80"'))
        assert doc.pixel_size == (120, 80)
        assert (doc.bounds.left, doc.bounds.top) == (0.0, 0.0)

    def test_viewbox_only(self):
        from image_converter.ingestion import VectorRasterizer

        doc = VectorRasterizer().parse(svg('viewBox="10 20 200 100"'))
        assert doc.pixel_size == (200, 100)
        assert doc.bounds.left == 10
        assert doc.bounds.top == 20

    def test_width_derives_height_from_viewbox(self):
        from image_converter.ingestion import VectorRasterizer

        doc = VectorRasterizer().parse(svg('width="400" viewBox="0 0 200 100"'))
        assert doc.pixel_size == (400, 200)

    def test_absolute_units(self):
        from image_converter.ingestion import VectorRasterizer

        doc = VectorRasterizer(dpi=96).parse(svg('width="1in" height="72pt"'))
        assert doc.pixel_size == (96, 96)

    def test_percent_falls_back_to_viewbox(self):
        from image_converter.ingestion import VectorRasterizer

        doc = VectorRasterizer().parse(svg('width="100%" height="100%" viewBox="0 0 50 25"'))
        assert doc.pixel_size == (50, 25)

    def test_malformed_xml(self):
        from image_converter.errors import VectorParseFailure
        from image_converter.ingestion import VectorRasterizer

        with pytest.raises(VectorParseFailure):
            VectorRasterizer().parse(b"<svg><rect></svg>")

    def test_non_svg_root(self):
        from image_converter.errors import VectorParseFailure
        from image_converter.ingestion import VectorRasterizer

        with pytest.raises(VectorParseFailure, match="Not an SVG"):
            VectorRasterizer().parse(b"<html></html>")

    @pytest.mark.parametrize("attrs", [
        '',
        'width="100"',
        'width="0" height="100"',
        'viewBox="0 0 0 50"',
        'width="100%" height="100%"',
    ])
    def test_empty_bounding_box(self, attrs):
        from image_converter.errors import VectorParseFailure
        from image_converter.ingestion import VectorRasterizer

        with pytest.raises(VectorParseFailure, match="empty bounding box"):
            VectorRasterizer().parse(svg(attrs))

    def test_missing_file(self, tmp_path):
        from image_converter.errors import SourceNotFound
        from image_converter.ingestion import VectorRasterizer

        with pytest.raises(SourceNotFound):
            VectorRasterizer().parse(tmp_path / "missing.svg")


@requires_cairo
class TestRasterization:
    """Test painting onto the canvas"""

    def test_identity_size(self, square_svg):
        from image_converter.ingestion import VectorRasterizer

        result = VectorRasterizer().rasterize(square_svg)
        assert result.pixels.shape == (300, 300, 4)
        assert result.pixels.dtype == np.uint8
        assert (result.scale_x, result.scale_y) == (1.0, 1.0)

    def test_transparent_background(self, square_svg):
        from image_converter.ingestion import VectorRasterizer

        result = VectorRasterizer().rasterize(square_svg, supports_transparency=True)
        assert result.pixels[5, 5, 3] == 0               # corner outside the rect
        assert tuple(result.pixels[150, 150]) == (255, 0, 0, 255)

    def test_white_background_when_opaque(self, square_svg):
        from image_converter.ingestion import VectorRasterizer

        result = VectorRasterizer().rasterize(square_svg, supports_transparency=False)
        assert tuple(result.pixels[5, 5]) == (255, 255, 255, 255)
        assert (result.pixels[:, :, 3] == 255).all()

    def test_exact_resize(self, square_svg):
        from image_converter.ingestion import VectorRasterizer
        from image_converter.resize import ResizeMode, ResizeSpec

        resize = ResizeSpec(mode=ResizeMode.EXACT_SIZE, target_width=600, target_height=600)
        result = VectorRasterizer().rasterize(square_svg, resize=resize)
        assert (result.width, result.height) == (600, 600)
        assert result.original_size == (300, 300)
        assert (result.scale_x, result.scale_y) == (2.0, 2.0)

    def test_non_uniform_scaling_fills_canvas(self):
        from image_converter.ingestion import VectorRasterizer
        from image_converter.resize import ResizeMode, ResizeSpec

        document = svg('width="100" height="100"', '<rect width="100" height="100" fill="#00f"/>')
        resize = ResizeSpec(mode=ResizeMode.EXACT_SIZE, target_width=200, target_height=50)
        result = VectorRasterizer().rasterize(document, resize=resize)

        assert (result.width, result.height) == (200, 50)
        assert (result.scale_x, result.scale_y) == (2.0, 0.5)
        # Stretched, not letterboxed: every corner is painted
        for y, x in [(0, 0), (0, 199), (49, 0), (49, 199)]:
            assert result.pixels[y, x, 3] == 255

    def test_viewbox_origin_is_translated(self):
        from image_converter.ingestion import VectorRasterizer

        document = svg(
            'width="100" height="100" viewBox="100 100 100 100"',
            '<rect x="100" y="100" width="50" height="50" fill="#0f0"/>',
        )
        result = VectorRasterizer().rasterize(document)

        assert tuple(result.pixels[10, 10]) == (0, 255, 0, 255)
        assert result.pixels[90, 90, 3] == 0

    def test_to_image(self, square_svg):
        from image_converter.ingestion import VectorRasterizer

        image = VectorRasterizer().rasterize(square_svg).to_image()
        assert image.mode == "RGBA"
        assert image.size == (300, 300)
