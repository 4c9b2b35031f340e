"""
Resize Calculator - Target dimensions from a resize mode
"""
from typing import Tuple
from dataclasses import dataclass
from enum import Enum


class ResizeMode(str, Enum):
    NONE = "none"
    EXACT_SIZE = "exact"
    MAX_WIDTH = "max_width"
    MAX_HEIGHT = "max_height"
    PERCENTAGE = "percentage"   # Percentage is carried in target_width


@dataclass(frozen=True)
class ResizeSpec:
    """Resize mode with its parameters"""
    mode: ResizeMode = ResizeMode.NONE
    target_width: int = 0
    target_height: int = 0
    maintain_aspect_ratio: bool = True


def calculate_dimensions(width: int, height: int, spec: ResizeSpec) -> Tuple[int, int]:
    """
    Compute new pixel dimensions for an image.

    Malformed parameters (zero or negative targets) leave the affected
    axis unchanged. Results are floor-rounded and never smaller than 1.

    Args:
        width: Original width in pixels
        height: Original height in pixels
        spec: Resize mode and parameters

    Returns:
        Tuple of (new_width, new_height)
    """
    new_width, new_height = width, height
    mode = spec.mode

    if mode == ResizeMode.EXACT_SIZE:
        if spec.target_width > 0:
            new_width = spec.target_width
        if spec.target_height > 0:
            new_height = spec.target_height

    elif mode == ResizeMode.MAX_WIDTH:
        # Maximum, not exact: images already narrow enough are left alone
        if 0 < spec.target_width < width:
            new_width = spec.target_width
            if spec.maintain_aspect_ratio:
                new_height = int(height * (spec.target_width / width))

    elif mode == ResizeMode.MAX_HEIGHT:
        if 0 < spec.target_height < height:
            new_height = spec.target_height
            if spec.maintain_aspect_ratio:
                new_width = int(width * (spec.target_height / height))

    elif mode == ResizeMode.PERCENTAGE:
        if spec.target_width > 0:
            # Integer math keeps the floor exact for every percentage
            new_width = width * spec.target_width // 100
            new_height = height * spec.target_width // 100

    return max(1, new_width), max(1, new_height)
