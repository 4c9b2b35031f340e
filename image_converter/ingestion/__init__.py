# Ingestion module
# Turns source files into pixels:
# - Raster images (JPEG, PNG, WebP, GIF, BMP, TIFF, ICO) via Pillow
# - Vector documents (SVG) rasterized via CairoSVG

from .loader import RasterDecoder, SourceKind, detect_source_kind
from .rasterizer import RasterizedImage, VectorRasterizer

__all__ = [
    "RasterDecoder",
    "SourceKind",
    "detect_source_kind",
    "RasterizedImage",
    "VectorRasterizer",
]
