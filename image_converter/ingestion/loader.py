"""
Raster Decoder - Loads raster sources and reads their metadata
"""
from pathlib import Path
from typing import Union
from enum import Enum
import logging

from PIL import Image, UnidentifiedImageError

from ..errors import DecodeFailure, SourceNotFound
from ..formats import is_svg_file
from ..models import ImageInfo

logger = logging.getLogger(__name__)

# Containers whose decoded images may carry an alpha channel
ALPHA_CONTAINERS = {"PNG", "GIF", "WEBP"}


class SourceKind(Enum):
    RASTER = "raster"
    VECTOR = "vector"


def detect_source_kind(path: Union[str, Path]) -> SourceKind:
    """Pick the decode path for a source file, once per job"""
    return SourceKind.VECTOR if is_svg_file(path) else SourceKind.RASTER


def build_image_info(
    path: Path,
    width: int,
    height: int,
    detected_format: str,
    has_transparency: bool,
) -> ImageInfo:
    """Combine file system metadata with decoded dimensions"""
    try:
        size_bytes = path.stat().st_size
    except FileNotFoundError as e:
        raise SourceNotFound(f"Source file not found: {path}") from e

    return ImageInfo(
        file_path=path,
        file_name=path.name,
        extension=path.suffix.lower(),
        directory=path.parent,
        file_size_bytes=size_bytes,
        width=width,
        height=height,
        detected_format=detected_format,
        has_transparency=has_transparency,
    )


class RasterDecoder:
    """
    Decodes raster images with Pillow.

    Supported containers: JPEG, PNG, WebP, GIF, BMP, TIFF, ICO.
    Multi-frame sources decode to their first frame.
    """

    def decode(self, path: Union[str, Path]) -> Image.Image:
        """
        Fully decode a raster file into memory.

        The returned image is detached from the file handle, which is
        closed before returning.

        Raises:
            SourceNotFound: If the file does not exist
            DecodeFailure: If Pillow cannot read the file
        """
        path = Path(path)
        logger.info(f"Decoding raster image: {path}")

        try:
            with Image.open(path) as img:
                img.load()
                return img.copy()
        except FileNotFoundError as e:
            raise SourceNotFound(f"Source file not found: {path}") from e
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as e:
            raise DecodeFailure(f"Failed to decode image {path.name}: {e}") from e

    def read_info(self, path: Union[str, Path]) -> ImageInfo:
        """Read dimensions and container format without decoding pixels"""
        path = Path(path)

        try:
            with Image.open(path) as img:
                width, height = img.size
                detected = img.format or "Unknown"
        except FileNotFoundError as e:
            raise SourceNotFound(f"Source file not found: {path}") from e
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as e:
            raise DecodeFailure(f"Failed to read image {path.name}: {e}") from e

        return build_image_info(
            path,
            width,
            height,
            detected_format=detected,
            has_transparency=detected in ALPHA_CONTAINERS,
        )
