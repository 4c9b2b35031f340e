"""
Conversion data model - options, image metadata and job results
"""
from pathlib import Path
from typing import Optional, Dict, Any
from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field

from config.settings import settings
from .formats import ImageFormat
from .resize import ResizeMode, ResizeSpec


class ConversionOptions(BaseModel):
    """Options for a single conversion job"""
    model_config = ConfigDict(frozen=True)

    target_format: ImageFormat
    quality: int = Field(default_factory=lambda: settings.default_quality, ge=1, le=100)

    # Resize
    resize_mode: ResizeMode = ResizeMode.NONE
    target_width: int = 0
    target_height: int = 0
    maintain_aspect_ratio: bool = True

    # Size budget in kilobytes, 0 disables the optimizer
    target_size_kb: int = Field(default=0, ge=0)

    # Output
    output_path: Optional[str] = None
    overwrite_existing: bool = False

    @property
    def resize(self) -> ResizeSpec:
        return ResizeSpec(
            mode=self.resize_mode,
            target_width=self.target_width,
            target_height=self.target_height,
            maintain_aspect_ratio=self.maintain_aspect_ratio,
        )


@dataclass(frozen=True)
class ImageInfo:
    """Read-only snapshot of an image file"""
    file_path: Path
    file_name: str
    extension: str
    directory: Path
    file_size_bytes: int
    width: int
    height: int
    detected_format: str
    has_transparency: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "file_path": str(self.file_path),
            "file_name": self.file_name,
            "extension": self.extension,
            "directory": str(self.directory),
            "file_size_bytes": self.file_size_bytes,
            "width": self.width,
            "height": self.height,
            "detected_format": self.detected_format,
            "has_transparency": self.has_transparency,
        }


@dataclass(frozen=True)
class ConversionResult:
    """Outcome of one conversion job"""
    success: bool
    output_path: Optional[Path] = None

    original_size_bytes: int = 0
    new_size_bytes: int = 0

    original_width: int = 0
    original_height: int = 0
    new_width: int = 0
    new_height: int = 0

    elapsed: float = 0.0  # seconds
    final_quality: Optional[int] = None
    error_message: Optional[str] = None

    @classmethod
    def failed(cls, message: str, elapsed: float = 0.0) -> "ConversionResult":
        return cls(success=False, error_message=message, elapsed=elapsed)

    @property
    def compression_ratio(self) -> Optional[float]:
        """New size as a fraction of the original size"""
        if not self.success or self.original_size_bytes <= 0:
            return None
        return self.new_size_bytes / self.original_size_bytes

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "output_path": str(self.output_path) if self.output_path else None,
            "original_size_bytes": self.original_size_bytes,
            "new_size_bytes": self.new_size_bytes,
            "original_width": self.original_width,
            "original_height": self.original_height,
            "new_width": self.new_width,
            "new_height": self.new_height,
            "elapsed": self.elapsed,
            "final_quality": self.final_quality,
            "compression_ratio": self.compression_ratio,
            "error_message": self.error_message,
        }
