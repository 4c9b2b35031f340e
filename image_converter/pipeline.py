"""
Conversion Orchestrator - Coordinates one image conversion job
"""
from pathlib import Path
from typing import Optional, Callable, List, Sequence, Union
from enum import Enum
import asyncio
import logging
import time

from PIL import Image

from config.settings import settings
from .errors import ConversionError, IOFailure, SourceNotFound, UnsupportedTargetFormat
from .export import ImageEncoder, OutputPathResolver, SizeTargetOptimizer
from .formats import ImageFormat, get_traits, is_supported_format, parse_format
from .ingestion import RasterDecoder, SourceKind, VectorRasterizer, detect_source_kind
from .ingestion.loader import build_image_info
from .models import ConversionOptions, ConversionResult, ImageInfo
from .resize import ResizeSpec, calculate_dimensions

logger = logging.getLogger(__name__)

RESAMPLE_FILTERS = {
    "nearest": Image.Resampling.NEAREST,
    "bilinear": Image.Resampling.BILINEAR,
    "bicubic": Image.Resampling.BICUBIC,
    "lanczos": Image.Resampling.LANCZOS,
}

ProgressCallback = Callable[["ConversionStage", float, str], None]


class ConversionStage(Enum):
    VALIDATION = "validation"
    DECODE = "decode"
    RESIZE = "resize"
    OUTPUT = "output"
    ENCODE = "encode"
    FINALIZE = "finalize"


class ConversionOrchestrator:
    """
    Runs conversion jobs from a source path and options.

    Job stages:
    1. Validation: source exists, target format is writable
    2. Decode: Pillow for raster sources, rasterizer for SVG
    3. Resize: raster sources only (SVG is painted at its target size)
    4. Output: resolve output path, create directories
    5. Encode: single pass, or quality search under a byte budget
    6. Finalize: stat output, build result

    Jobs share no mutable state, so one orchestrator can run many
    conversions concurrently. Blocking work runs in worker threads.
    """

    def __init__(
        self,
        decoder: Optional[RasterDecoder] = None,
        rasterizer: Optional[VectorRasterizer] = None,
        path_resolver: Optional[OutputPathResolver] = None,
        optimizer: Optional[SizeTargetOptimizer] = None,
    ):
        self.decoder = decoder or RasterDecoder()
        self.rasterizer = rasterizer or VectorRasterizer()
        self.path_resolver = path_resolver or OutputPathResolver()
        self.optimizer = optimizer or SizeTargetOptimizer()
        self._progress_callback: Optional[ProgressCallback] = None

    def set_progress_callback(self, callback: ProgressCallback):
        """
        Set callback for progress updates.

        Callback signature: (stage: ConversionStage, progress: float, message: str)
        """
        self._progress_callback = callback

    def _report_progress(self, stage: ConversionStage, progress: float, message: str):
        """Report progress to callback if set"""
        if self._progress_callback:
            self._progress_callback(stage, progress, message)

    @staticmethod
    def is_supported_format(file_path: Union[str, Path]) -> bool:
        return is_supported_format(file_path)

    async def convert(
        self,
        source_path: Union[str, Path],
        options: ConversionOptions,
    ) -> ConversionResult:
        """
        Convert one image.

        Never raises: every failure is returned as a failed result.
        """
        source = Path(source_path)
        start_time = time.perf_counter()
        stage = ConversionStage.VALIDATION
        image: Optional[Image.Image] = None
        logger.info(f"Converting {source} to {options.target_format.value}")

        try:
            # Stage 1: Validation
            self._report_progress(stage, 0.0, "Validating request...")
            original_size_bytes = await asyncio.to_thread(self._stat_source, source)
            target = get_traits(options.target_format)
            if not target.can_be_target:
                raise UnsupportedTargetFormat(
                    f"Cannot convert to {options.target_format.value.upper()} format. "
                    f"It is a vector format and cannot be created from raster images."
                )

            # Stage 2: Decode
            stage = ConversionStage.DECODE
            kind = detect_source_kind(source)
            self._report_progress(stage, 0.0, f"Loading {kind.value} source...")
            if kind == SourceKind.VECTOR:
                rasterized = await asyncio.to_thread(
                    self.rasterizer.rasterize,
                    source,
                    options.resize,
                    target.supports_transparency,
                )
                original_width, original_height = rasterized.original_size
                image = rasterized.to_image()
            else:
                image = await asyncio.to_thread(self.decoder.decode, source)
                original_width, original_height = image.size

                # Stage 3: Resize
                stage = ConversionStage.RESIZE
                self._report_progress(stage, 0.0, "Resizing...")
                image = await asyncio.to_thread(self._resize, image, options.resize)

            new_width, new_height = image.size

            # Stage 4: Output path
            stage = ConversionStage.OUTPUT
            self._report_progress(stage, 0.0, "Resolving output path...")
            output_path = await asyncio.to_thread(self._prepare_output, source, options)

            # Stage 5: Encode
            stage = ConversionStage.ENCODE
            self._report_progress(stage, 0.0, f"Encoding {output_path.name}...")
            final_quality = await asyncio.to_thread(self._encode, image, output_path, options)

            # Stage 6: Finalize
            stage = ConversionStage.FINALIZE
            new_size_bytes = await asyncio.to_thread(self._stat_output, output_path)
            self._report_progress(stage, 1.0, "Conversion complete")

            elapsed = time.perf_counter() - start_time
            logger.info(
                f"Converted {source.name} -> {output_path.name} in {elapsed:.2f}s "
                f"({original_size_bytes} -> {new_size_bytes} bytes)"
            )

            return ConversionResult(
                success=True,
                output_path=output_path,
                original_size_bytes=original_size_bytes,
                new_size_bytes=new_size_bytes,
                original_width=original_width,
                original_height=original_height,
                new_width=new_width,
                new_height=new_height,
                elapsed=elapsed,
                final_quality=final_quality,
            )

        except ConversionError as e:
            elapsed = time.perf_counter() - start_time
            logger.error(f"Conversion failed at {stage.value}: {e}")
            return ConversionResult.failed(str(e), elapsed)

        except Exception as e:
            elapsed = time.perf_counter() - start_time
            logger.exception(f"Unexpected error at {stage.value} converting {source}")
            return ConversionResult.failed(f"Conversion failed: {e}", elapsed)

        finally:
            if image is not None:
                image.close()

    async def convert_batch(
        self,
        source_paths: Sequence[Union[str, Path]],
        options: ConversionOptions,
        max_concurrency: Optional[int] = None,
    ) -> List[ConversionResult]:
        """Convert several sources concurrently; results keep input order"""
        semaphore = asyncio.Semaphore(max_concurrency or settings.batch_concurrency)

        async def _run(path):
            async with semaphore:
                return await self.convert(path, options)

        return list(await asyncio.gather(*(_run(p) for p in source_paths)))

    async def get_image_info(self, file_path: Union[str, Path]) -> ImageInfo:
        """
        Read metadata for an image file.

        Raises:
            SourceNotFound: If the file does not exist
            DecodeFailure / VectorParseFailure: If the file cannot be read
        """
        path = Path(file_path)
        if not await asyncio.to_thread(path.is_file):
            raise SourceNotFound(f"Source file not found: {path}")

        if detect_source_kind(path) == SourceKind.VECTOR:
            width, height = await asyncio.to_thread(self.rasterizer.read_document_size, path)
            # Vector documents are always treated as alpha-capable
            return await asyncio.to_thread(build_image_info, path, width, height, "SVG", True)

        return await asyncio.to_thread(self.decoder.read_info, path)

    def _stat_source(self, source: Path) -> int:
        if not source.is_file():
            raise SourceNotFound(f"Source file not found: {source}")
        return source.stat().st_size

    def _resize(self, image: Image.Image, spec: ResizeSpec) -> Image.Image:
        width, height = image.size
        new_size = calculate_dimensions(width, height, spec)
        if new_size == (width, height):
            return image

        logger.info(f"Resizing {width}x{height} -> {new_size[0]}x{new_size[1]}")
        resample = RESAMPLE_FILTERS.get(settings.resample_filter.lower(), Image.Resampling.LANCZOS)
        resized = image.resize(new_size, resample)
        image.close()
        return resized

    def _prepare_output(self, source: Path, options: ConversionOptions) -> Path:
        output_path = self.path_resolver.resolve(source, options)
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise IOFailure(f"Cannot create output directory {output_path.parent}: {e}") from e
        return output_path

    def _encode(self, image: Image.Image, output_path: Path, options: ConversionOptions) -> Optional[int]:
        """Write the output file, returning the quality used (None if not applicable)"""
        encoder = ImageEncoder(options.target_format)
        supports_quality = get_traits(options.target_format).supports_quality
        prepared = encoder.prepare(image)

        try:
            quality = options.quality if supports_quality else None
            if supports_quality and options.target_size_kb > 0:
                search = self.optimizer.optimize(
                    prepared, encoder, options.target_size_kb, options.quality
                )
                quality = search.quality
                if not search.met_target:
                    logger.warning(
                        f"No quality fit the {options.target_size_kb} KB budget, "
                        f"writing best effort at quality {quality}"
                    )

            encoder.save(prepared, output_path, quality=quality)
            return quality
        finally:
            if prepared is not image:
                prepared.close()

    def _stat_output(self, output_path: Path) -> int:
        try:
            return output_path.stat().st_size
        except OSError as e:
            raise IOFailure(f"Cannot read output file {output_path}: {e}") from e


def convert_image(
    source_path: Union[str, Path],
    target_format: Union[ImageFormat, str],
    **kwargs
) -> ConversionResult:
    """
    Convenience function to run a single conversion synchronously.

    Args:
        source_path: Path to the source image (raster or SVG)
        target_format: Output format
        **kwargs: Additional ConversionOptions fields

    Returns:
        ConversionResult
    """
    options = ConversionOptions(target_format=parse_format(target_format), **kwargs)
    orchestrator = ConversionOrchestrator()
    return asyncio.run(orchestrator.convert(source_path, options))
