"""
Application settings and configuration
"""
from pathlib import Path
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration"""

    model_config = SettingsConfigDict(env_prefix="IMGCONV_", env_file=".env", extra="ignore")

    # Encoding
    default_quality: int = 85
    min_quality: int = 5  # Floor used by the size optimizer
    max_quality: int = 100
    max_optimizer_probes: int = 10
    png_compress_level: int = 9  # 0-9, 9 = best compression

    # Resizing
    resample_filter: str = "lanczos"  # nearest, bilinear, bicubic, lanczos

    # Vector sources
    svg_dpi: float = 96.0  # Pixels per inch for absolute SVG units (mm, in, pt)

    # Output paths
    max_collision_attempts: int = 1000

    # Batch conversion
    batch_concurrency: int = 4

    # API Server
    api_host: str = "127.0.0.1"
    api_port: int = 7002
    cors_origins: list = []  # Browser origins allowed to call the API; empty blocks cross-origin calls

    # Logging
    log_level: str = "INFO"
    log_file: Optional[Path] = None


settings = Settings()
