# Resize module
# Pure dimension math for the supported resize modes:
# - exact size, max width, max height, percentage

from .calculator import ResizeMode, ResizeSpec, calculate_dimensions

__all__ = ["ResizeMode", "ResizeSpec", "calculate_dimensions"]
