# Configuration module
# Environment-driven settings (prefix IMGCONV_), loaded once at import time.

from .settings import Settings, settings

__all__ = ["Settings", "settings"]
