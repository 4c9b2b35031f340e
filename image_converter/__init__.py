# Image Converter
# Converts still images between raster formats and from SVG,
# with optional resizing and a quality search for a target file size.

from .errors import (
    ConversionError,
    DecodeFailure,
    EncodeFailure,
    IOFailure,
    SourceNotFound,
    UnsupportedTargetFormat,
    VectorParseFailure,
)
from .formats import ImageFormat, is_supported_format
from .models import ConversionOptions, ConversionResult, ImageInfo
from .pipeline import ConversionOrchestrator, ConversionStage, convert_image
from .resize import ResizeMode

__version__ = "0.1.0"

__all__ = [
    "ConversionError",
    "DecodeFailure",
    "EncodeFailure",
    "IOFailure",
    "SourceNotFound",
    "UnsupportedTargetFormat",
    "VectorParseFailure",
    "ImageFormat",
    "is_supported_format",
    "ConversionOptions",
    "ConversionResult",
    "ImageInfo",
    "ConversionOrchestrator",
    "ConversionStage",
    "convert_image",
    "ResizeMode",
]
