"""
Image Encoder - Writes images with per-format Pillow settings
"""
from pathlib import Path
from typing import BinaryIO, Union, Optional, Dict, Any
import io
import logging

from PIL import Image

from config.settings import settings
from ..errors import EncodeFailure, IOFailure
from ..formats import ImageFormat, get_traits

logger = logging.getLogger(__name__)

_ALPHA_MODES = {"RGBA", "LA", "PA", "RGBa", "La"}


def has_alpha(image: Image.Image) -> bool:
    return image.mode in _ALPHA_MODES or (image.mode == "P" and "transparency" in image.info)


def flatten_alpha(image: Image.Image, background=(255, 255, 255)) -> Image.Image:
    """Composite an image with alpha onto an opaque background"""
    rgba = image.convert("RGBA")
    flat = Image.new("RGB", rgba.size, background)
    flat.paste(rgba, mask=rgba.split()[-1])
    return flat


def to_palette(image: Image.Image, colors: int = 256) -> Image.Image:
    """
    Quantize to an adaptive palette for GIF.

    Pixels under half opacity map to a reserved transparent index.
    """
    if image.mode in ("P", "L"):
        return image
    if not has_alpha(image):
        return image.convert("RGB").quantize(colors=colors)

    rgba = image.convert("RGBA")
    alpha = rgba.getchannel("A")
    paletted = rgba.convert("RGB").quantize(colors=colors - 1)

    # Pad so the reserved index is a real palette entry
    palette = paletted.getpalette()[:3 * (colors - 1)]
    palette += [0] * (3 * colors - len(palette))
    paletted.putpalette(palette)

    mask = alpha.point(lambda a: 255 if a < 128 else 0)
    paletted.paste(colors - 1, mask=mask)
    paletted.info["transparency"] = colors - 1
    return paletted


def prepare_for_format(image: Image.Image, fmt: ImageFormat) -> Image.Image:
    """
    Normalize the pixel mode so the target encoder accepts it.

    Targets without transparency get alpha flattened onto white.
    GIF targets are quantized to a palette.
    """
    traits = get_traits(fmt)

    if fmt == ImageFormat.GIF:
        return to_palette(image)

    if not traits.supports_transparency:
        if has_alpha(image):
            return flatten_alpha(image)
        if image.mode not in ("RGB", "L"):
            return image.convert("RGB")
        return image

    if image.mode not in ("RGB", "RGBA", "L", "LA", "P"):
        return image.convert("RGBA")
    return image


def encoder_params(fmt: ImageFormat, quality: Optional[int] = None) -> Dict[str, Any]:
    """Pillow save() keyword arguments for a target format"""
    traits = get_traits(fmt)
    if not traits.can_be_target:
        raise EncodeFailure(f"No encoder for format: {fmt.value}")

    params: Dict[str, Any] = {"format": traits.pillow_format}
    if traits.supports_quality:
        params["quality"] = quality if quality is not None else settings.default_quality
    if traits.pillow_format == "PNG":
        params["compress_level"] = settings.png_compress_level
    return params


class ImageEncoder:
    """
    Encodes images for a single target format.

    Supported targets:
    - JPEG, WebP: lossy, honor the quality parameter
    - PNG: best compression
    - GIF: adaptive palette, transparent index for alpha
    - BMP, TIFF: codec defaults
    - ICO: written with the PNG encoder
    """

    def __init__(self, fmt: ImageFormat):
        if not get_traits(fmt).can_be_target:
            raise EncodeFailure(f"Cannot encode to {fmt.value}: not a raster target format")
        self.format = fmt

    def prepare(self, image: Image.Image) -> Image.Image:
        return prepare_for_format(image, self.format)

    def encode_to(self, image: Image.Image, stream: BinaryIO, quality: Optional[int] = None):
        """Encode an image into an open binary stream"""
        params = encoder_params(self.format, quality)
        try:
            image.save(stream, **params)
        except (OSError, ValueError, KeyError) as e:
            raise EncodeFailure(f"Failed to encode {self.format.value}: {e}") from e

    def encode_bytes(self, image: Image.Image, quality: Optional[int] = None) -> bytes:
        """Encode fully into memory"""
        buffer = io.BytesIO()
        self.encode_to(image, buffer, quality)
        return buffer.getvalue()

    def save(self, image: Image.Image, path: Union[str, Path], quality: Optional[int] = None) -> Path:
        """
        Encode an image to a file.

        Raises:
            IOFailure: If the file cannot be opened for writing
            EncodeFailure: If the encoder fails
        """
        path = Path(path)
        logger.info(f"Encoding {self.format.value} to {path}")
        try:
            stream = open(path, "wb")
        except OSError as e:
            raise IOFailure(f"Cannot write output file {path}: {e}") from e

        with stream:
            self.encode_to(image, stream, quality)
        return path
