# Formats module
# Closed set of image formats and their capabilities:
# - extension / MIME type lookup
# - quality and transparency support
# - eligibility as a conversion target

from .catalog import (
    FORMAT_TRAITS,
    SUPPORTED_EXTENSIONS,
    FormatTraits,
    ImageFormat,
    format_from_extension,
    format_from_path,
    get_traits,
    is_supported_format,
    is_svg_file,
    parse_format,
    target_formats,
)

__all__ = [
    "FORMAT_TRAITS",
    "SUPPORTED_EXTENSIONS",
    "FormatTraits",
    "ImageFormat",
    "format_from_extension",
    "format_from_path",
    "get_traits",
    "is_supported_format",
    "is_svg_file",
    "parse_format",
    "target_formats",
]
