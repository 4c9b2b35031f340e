"""
Vector Rasterizer - Paints SVG documents onto fixed-size RGBA buffers

Pipeline:
1. Parse the document and compute its bounding box
2. Compute the target size (intrinsic, or via the resize calculator)
3. Allocate a canvas (opaque white or fully transparent)
4. Compute independent X/Y scale factors from the bounding box
5. Translate by the box origin and paint through CairoSVG
"""
from pathlib import Path
from typing import Optional, Tuple, Union
from dataclasses import dataclass
import io
import logging
import re
import xml.etree.ElementTree as ET

import numpy as np
from PIL import Image

from config.settings import settings
from ..errors import SourceNotFound, VectorParseFailure
from ..resize import ResizeSpec, calculate_dimensions

logger = logging.getLogger(__name__)

SVG_NAMESPACE = "http://www.w3.org/2000/svg"
XLINK_NAMESPACE = "http://www.w3.org/1999/xlink"

ET.register_namespace("", SVG_NAMESPACE)
ET.register_namespace("xlink", XLINK_NAMESPACE)

_LENGTH_RE = re.compile(
    r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)\s*(px|pt|pc|mm|cm|in|%)?\s*$"
)

WHITE = (255, 255, 255, 255)
TRANSPARENT = (0, 0, 0, 0)


@dataclass(frozen=True)
class BoundingBox:
    """Document area in user units"""
    left: float
    top: float
    width: float
    height: float

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0


@dataclass
class VectorDocument:
    """Parsed SVG with its geometry"""
    root: ET.Element
    bounds: BoundingBox
    intrinsic_width: float
    intrinsic_height: float
    base_url: Optional[str] = None

    @property
    def pixel_size(self) -> Tuple[int, int]:
        """Intrinsic size floor-rounded to whole pixels (at least 1)"""
        return max(1, int(self.intrinsic_width)), max(1, int(self.intrinsic_height))


@dataclass
class RasterizedImage:
    """Fully painted pixel buffer"""
    pixels: np.ndarray  # (height, width, 4) uint8 RGBA, top-left origin
    bounds: BoundingBox
    original_size: Tuple[int, int]
    scale_x: float
    scale_y: float

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    def to_image(self) -> Image.Image:
        return Image.fromarray(self.pixels)


def parse_length(value: Optional[str], dpi: float = None) -> Optional[float]:
    """
    Convert an SVG length attribute to pixels.

    Percentages and unknown units return None so callers fall back
    to the viewBox.
    """
    if value is None:
        return None
    match = _LENGTH_RE.match(value)
    if not match:
        return None

    number, unit = float(match.group(1)), match.group(2) or "px"
    dpi = dpi or settings.svg_dpi
    factors = {
        "px": 1.0,
        "pt": dpi / 72.0,
        "pc": dpi / 6.0,
        "mm": dpi / 25.4,
        "cm": dpi / 2.54,
        "in": dpi,
    }
    if unit not in factors:
        return None
    return number * factors[unit]


def parse_viewbox(value: Optional[str]) -> Optional[BoundingBox]:
    if not value:
        return None
    parts = value.replace(",", " ").split()
    if len(parts) != 4:
        return None
    try:
        left, top, width, height = (float(p) for p in parts)
    except ValueError:
        return None
    return BoundingBox(left, top, width, height)


class VectorRasterizer:
    """
    Rasterizes SVG documents.

    Scaling is not forced to keep the aspect ratio: the document's
    bounding box is stretched onto the canvas, so aspect handling is
    decided entirely by the resize calculator.
    """

    def __init__(self, dpi: Optional[float] = None):
        self.dpi = dpi or settings.svg_dpi

    def parse(self, source: Union[str, Path, bytes]) -> VectorDocument:
        """
        Parse an SVG document from a path or raw bytes.

        Raises:
            SourceNotFound: If a path is given and does not exist
            VectorParseFailure: If the XML is invalid, the root is not
                <svg>, or the bounding box is empty
        """
        base_url = None
        if isinstance(source, bytes):
            data = source
        else:
            path = Path(source)
            base_url = str(path)
            try:
                data = path.read_bytes()
            except FileNotFoundError as e:
                raise SourceNotFound(f"Source file not found: {path}") from e

        try:
            root = ET.fromstring(data)
        except ET.ParseError as e:
            raise VectorParseFailure(f"Failed to parse SVG file: {e}") from e

        if root.tag.rsplit("}", 1)[-1] != "svg":
            raise VectorParseFailure(f"Not an SVG document (root element <{root.tag}>)")

        bounds, width, height = self._measure(root)
        if bounds is None or bounds.is_empty or width <= 0 or height <= 0:
            raise VectorParseFailure("SVG document has an empty bounding box")

        return VectorDocument(
            root=root,
            bounds=bounds,
            intrinsic_width=width,
            intrinsic_height=height,
            base_url=base_url,
        )

    def _measure(self, root: ET.Element) -> Tuple[Optional[BoundingBox], float, float]:
        """Bounding box and intrinsic pixel size of the root viewport"""
        viewbox = parse_viewbox(root.get("viewBox"))
        width = parse_length(root.get("width"), self.dpi)
        height = parse_length(root.get("height"), self.dpi)

        if viewbox is not None and not viewbox.is_empty:
            if width is None and height is None:
                width, height = viewbox.width, viewbox.height
            elif width is None:
                width = height * viewbox.width / viewbox.height
            elif height is None:
                height = width * viewbox.height / viewbox.width
            return viewbox, width, height

        if width is None or height is None:
            return None, 0.0, 0.0
        return BoundingBox(0.0, 0.0, width, height), width, height

    def read_document_size(self, source: Union[str, Path, bytes]) -> Tuple[int, int]:
        """Intrinsic pixel size of a document, without painting it"""
        return self.parse(source).pixel_size

    def rasterize(
        self,
        source: Union[str, Path, bytes],
        resize: Optional[ResizeSpec] = None,
        supports_transparency: bool = True,
    ) -> RasterizedImage:
        """
        Parse and paint a document at its target resolution.

        Args:
            source: SVG path or bytes
            resize: Resize mode applied to the intrinsic size, None for identity
            supports_transparency: False fills the canvas with opaque white

        Returns:
            RasterizedImage with a fully materialized RGBA buffer
        """
        document = self.parse(source)
        original_width, original_height = document.pixel_size

        if resize is None:
            target_width, target_height = original_width, original_height
        else:
            target_width, target_height = calculate_dimensions(
                original_width, original_height, resize
            )

        bounds = document.bounds
        scale_x = target_width / bounds.width
        scale_y = target_height / bounds.height
        logger.info(
            f"Rasterizing SVG {original_width}x{original_height} -> "
            f"{target_width}x{target_height} (scale {scale_x:.3f}, {scale_y:.3f})"
        )

        fill = TRANSPARENT if supports_transparency else WHITE
        canvas = Image.new("RGBA", (target_width, target_height), fill)
        with self._paint(document, target_width, target_height) as layer:
            canvas.alpha_composite(layer)

        return RasterizedImage(
            pixels=np.array(canvas, dtype=np.uint8),
            bounds=bounds,
            original_size=(original_width, original_height),
            scale_x=scale_x,
            scale_y=scale_y,
        )

    def _paint(self, document: VectorDocument, width: int, height: int) -> Image.Image:
        """
        Render the document through the bounding-box transform.

        The root viewport is pinned to the bounding box with
        preserveAspectRatio="none", which makes CairoSVG apply
        scale(width / box.width, height / box.height) followed by
        translate(-box.left, -box.top).
        """
        import cairosvg

        bounds = document.bounds
        root = document.root
        root.set("width", str(width))
        root.set("height", str(height))
        root.set("viewBox", f"{bounds.left:g} {bounds.top:g} {bounds.width:g} {bounds.height:g}")
        root.set("preserveAspectRatio", "none")

        try:
            png_bytes = cairosvg.svg2png(
                bytestring=ET.tostring(root),
                url=document.base_url,
                dpi=self.dpi,
            )
        except Exception as e:
            raise VectorParseFailure(f"Failed to render SVG: {e}") from e

        layer = Image.open(io.BytesIO(png_bytes))
        layer.load()
        if layer.mode != "RGBA":
            layer = layer.convert("RGBA")
        if layer.size != (width, height):
            layer = layer.resize((width, height), Image.Resampling.LANCZOS)
        return layer
