# API module
# REST API for local conversion requests:
# - format catalog
# - image metadata
# - conversion jobs

from .server import create_app

__all__ = ["create_app"]
