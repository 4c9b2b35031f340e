"""
Tests for output path resolution
"""
from pathlib import Path


def options(fmt="png", **kwargs):
    from image_converter.models import ConversionOptions

    return ConversionOptions(target_format=fmt, **kwargs)


class TestOutputPathResolver:
    """Test default paths and collision handling"""

    def test_default_path_uses_target_extension(self, tmp_path):
        from image_converter.export import OutputPathResolver

        resolver = OutputPathResolver()
        resolved = resolver.resolve(tmp_path / "photo.png", options("jpeg"))
        assert resolved == tmp_path / "photo.jpg"

    def test_explicit_output_path(self, tmp_path):
        from image_converter.export import OutputPathResolver

        target = tmp_path / "out" / "custom.name"
        resolved = OutputPathResolver().resolve(tmp_path / "photo.png", options(output_path=str(target)))
        assert resolved == target

    def test_existing_file_gets_counter(self, tmp_path):
        from image_converter.export import OutputPathResolver

        (tmp_path / "photo.png").write_bytes(b"existing")
        resolved = OutputPathResolver().resolve(tmp_path / "photo.jpg", options("png"))
        assert resolved == tmp_path / "photo (1).png"

    def test_counter_increments(self, tmp_path):
        from image_converter.export import OutputPathResolver

        for name in ["photo.png", "photo (1).png", "photo (2).png"]:
            (tmp_path / name).write_bytes(b"x")
        resolved = OutputPathResolver().resolve(tmp_path / "photo.gif", options("png"))
        assert resolved == tmp_path / "photo (3).png"
        assert not resolved.exists()

    def test_overwrite_keeps_path(self, tmp_path):
        from image_converter.export import OutputPathResolver

        (tmp_path / "photo.png").write_bytes(b"existing")
        resolved = OutputPathResolver().resolve(
            tmp_path / "photo.jpg", options("png", overwrite_existing=True)
        )
        assert resolved == tmp_path / "photo.png"

    def test_explicit_path_collision(self, tmp_path):
        from image_converter.export import OutputPathResolver

        target = tmp_path / "result.webp"
        target.write_bytes(b"x")
        resolved = OutputPathResolver().resolve(
            tmp_path / "photo.jpg", options("webp", output_path=str(target))
        )
        assert resolved == tmp_path / "result (1).webp"

    def test_gives_up_after_max_attempts(self, tmp_path):
        from image_converter.export import OutputPathResolver

        (tmp_path / "photo.png").write_bytes(b"x")
        for n in range(1, 4):
            (tmp_path / f"photo ({n}).png").write_bytes(b"x")

        resolver = OutputPathResolver(max_attempts=3)
        resolved = resolver.resolve(tmp_path / "photo.bmp", options("png"))
        assert resolved == tmp_path / "photo (3).png"
        assert resolved.exists()

    def test_resolution_has_no_side_effects(self, tmp_path):
        from image_converter.export import OutputPathResolver

        target = tmp_path / "missing" / "dir" / "out.png"
        OutputPathResolver().resolve(tmp_path / "photo.jpg", options(output_path=str(target)))
        assert not target.parent.exists()
