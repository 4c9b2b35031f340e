"""
Format Capability Catalog - Static per-format traits
"""
from pathlib import Path
from typing import Dict, List, Optional, Union
from dataclasses import dataclass
from enum import Enum


class ImageFormat(str, Enum):
    JPEG = "jpeg"
    PNG = "png"
    WEBP = "webp"
    GIF = "gif"
    BMP = "bmp"
    TIFF = "tiff"
    ICO = "ico"
    SVG = "svg"   # Source only, cannot be written


@dataclass(frozen=True)
class FormatTraits:
    """Immutable capabilities of one image format"""
    display_name: str
    extension: str
    mime_type: str
    supports_quality: bool
    supports_transparency: bool
    can_be_target: bool
    pillow_format: Optional[str]  # Encoder used for writing, None if not writable


# ICO is written through the PNG encoder (PNG bytes in a .ico file).
FORMAT_TRAITS: Dict[ImageFormat, FormatTraits] = {
    ImageFormat.JPEG: FormatTraits("JPEG (.jpg)", ".jpg", "image/jpeg", True, False, True, "JPEG"),
    ImageFormat.PNG: FormatTraits("PNG (.png)", ".png", "image/png", False, True, True, "PNG"),
    ImageFormat.WEBP: FormatTraits("WebP (.webp)", ".webp", "image/webp", True, True, True, "WEBP"),
    ImageFormat.GIF: FormatTraits("GIF (.gif)", ".gif", "image/gif", False, True, True, "GIF"),
    ImageFormat.BMP: FormatTraits("Bitmap (.bmp)", ".bmp", "image/bmp", False, False, True, "BMP"),
    ImageFormat.TIFF: FormatTraits("TIFF (.tiff)", ".tiff", "image/tiff", False, False, True, "TIFF"),
    ImageFormat.ICO: FormatTraits("Icon (.ico)", ".ico", "image/x-icon", False, True, True, "PNG"),
    ImageFormat.SVG: FormatTraits("SVG (.svg)", ".svg", "image/svg+xml", False, True, False, None),
}

_EXTENSION_MAP: Dict[str, ImageFormat] = {
    ".jpg": ImageFormat.JPEG,
    ".jpeg": ImageFormat.JPEG,
    ".png": ImageFormat.PNG,
    ".webp": ImageFormat.WEBP,
    ".gif": ImageFormat.GIF,
    ".bmp": ImageFormat.BMP,
    ".tiff": ImageFormat.TIFF,
    ".tif": ImageFormat.TIFF,
    ".ico": ImageFormat.ICO,
    ".svg": ImageFormat.SVG,
}

SUPPORTED_EXTENSIONS = frozenset(_EXTENSION_MAP)


def get_traits(fmt: ImageFormat) -> FormatTraits:
    """Look up the trait record for a format"""
    return FORMAT_TRAITS[fmt]


def format_from_extension(extension: str) -> Optional[ImageFormat]:
    """Map a file extension (with or without the dot) to its format"""
    ext = extension.lower()
    if not ext.startswith("."):
        ext = "." + ext
    return _EXTENSION_MAP.get(ext)


def format_from_path(path: Union[str, Path]) -> Optional[ImageFormat]:
    """Infer the format of a file from its extension"""
    return format_from_extension(Path(path).suffix)


def parse_format(name: str) -> ImageFormat:
    """
    Resolve a user-supplied format name.

    Accepts enum values ("jpeg", "png") as well as extensions ("jpg", ".tif").

    Raises:
        ValueError: If the name matches no known format
    """
    try:
        return ImageFormat(name.lower())
    except ValueError:
        fmt = format_from_extension(name)
        if fmt is None:
            raise ValueError(f"Unknown image format: {name}")
        return fmt


def target_formats() -> List[ImageFormat]:
    """All formats that can be used as a conversion target"""
    return [fmt for fmt, traits in FORMAT_TRAITS.items() if traits.can_be_target]


def is_supported_format(path: Union[str, Path]) -> bool:
    """Check whether a file extension is one the converter can read"""
    return Path(path).suffix.lower() in SUPPORTED_EXTENSIONS


def is_svg_file(path: Union[str, Path]) -> bool:
    return format_from_path(path) == ImageFormat.SVG
