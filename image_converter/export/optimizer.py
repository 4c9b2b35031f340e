"""
Size Target Optimizer - Binary search over encoder quality for a byte budget
"""
from typing import List, Optional
from dataclasses import dataclass, field
import logging

from PIL import Image

from config.settings import settings
from .encoder import ImageEncoder

logger = logging.getLogger(__name__)


@dataclass
class OptimizationResult:
    """Outcome of a quality search"""
    quality: int                  # Quality to use for the final encode
    probes: int                   # Number of encodes performed
    probe_qualities: List[int] = field(default_factory=list)
    probe_sizes: List[int] = field(default_factory=list)
    target_bytes: int = 0

    @property
    def met_target(self) -> bool:
        """Whether any probe fit the budget"""
        return any(size <= self.target_bytes for size in self.probe_sizes)


class SizeTargetOptimizer:
    """
    Finds the highest encoder quality whose output fits a byte budget.

    Assumes encoded size grows with quality. Codecs that violate this
    locally still get a bounded, best-effort answer: the search never
    exceeds max_probes encodes and never raises on its own.
    """

    def __init__(
        self,
        min_quality: Optional[int] = None,
        max_quality: Optional[int] = None,
        max_probes: Optional[int] = None,
    ):
        self.min_quality = min_quality or settings.min_quality
        self.max_quality = max_quality or settings.max_quality
        self.max_probes = max_probes or settings.max_optimizer_probes

    def optimize(
        self,
        image: Image.Image,
        encoder: ImageEncoder,
        target_size_kb: int,
        initial_quality: int,
    ) -> OptimizationResult:
        """
        Search for a quality value within the budget.

        Args:
            image: Image already prepared for the encoder's format
            encoder: Quality-capable encoder
            target_size_kb: Budget in kilobytes (1 KB = 1024 bytes)
            initial_quality: First quality to probe

        Returns:
            OptimizationResult with the quality for the final encode
        """
        target_bytes = target_size_kb * 1024
        low = self.min_quality
        high = self.max_quality
        quality = initial_quality
        result = OptimizationResult(quality=quality, probes=0, target_bytes=target_bytes)

        for _ in range(self.max_probes):
            if low >= high:
                break

            size = len(encoder.encode_bytes(image, quality=quality))
            result.probes += 1
            result.probe_qualities.append(quality)
            result.probe_sizes.append(size)
            logger.debug(f"Probe {result.probes}: quality={quality} size={size} budget={target_bytes}")

            if size <= target_bytes:
                low = quality + 1
            else:
                high = quality - 1
            quality = (low + high) // 2

        # Last confirmed floor, one step down, never below the minimum
        result.quality = max(low - 1, self.min_quality)
        logger.info(
            f"Quality search finished after {result.probes} probes: "
            f"quality={result.quality} (budget {target_size_kb} KB, tried {result.probe_qualities})"
        )
        return result
