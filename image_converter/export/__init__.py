# Export module
# Writes converted images:
# - per-format Pillow encoders (ICO via PNG)
# - quality search against a byte budget
# - output path derivation and collision avoidance

from .encoder import ImageEncoder, prepare_for_format
from .optimizer import OptimizationResult, SizeTargetOptimizer
from .paths import OutputPathResolver

__all__ = [
    "ImageEncoder",
    "prepare_for_format",
    "OptimizationResult",
    "SizeTargetOptimizer",
    "OutputPathResolver",
]
