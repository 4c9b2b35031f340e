"""
FastAPI Server - REST API over the conversion engine

Only local filesystem paths are accepted; image bytes are never
uploaded or downloaded.
"""
from typing import Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from config.settings import settings
from .. import __version__
from ..errors import ConversionError, SourceNotFound
from ..formats import FORMAT_TRAITS
from ..models import ConversionOptions
from ..pipeline import ConversionOrchestrator


class InfoRequest(BaseModel):
    """Request metadata for a local image file"""
    path: str


class ConvertRequest(BaseModel):
    """Request to convert a local image file"""
    source_path: str
    options: ConversionOptions


class FormatResponse(BaseModel):
    """Capabilities of one image format"""
    name: str
    display_name: str
    extension: str
    mime_type: str
    supports_quality: bool
    supports_transparency: bool
    can_be_target: bool


def create_app(orchestrator: Optional[ConversionOrchestrator] = None) -> FastAPI:
    """Create and configure FastAPI application"""

    engine = orchestrator or ConversionOrchestrator()

    app = FastAPI(
        title="Image Converter API",
        description="Convert images between raster formats and from SVG",
        version=__version__,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {"status": "healthy", "version": __version__}

    @app.get("/formats", response_model=list[FormatResponse])
    async def list_formats():
        """All known formats and what they support"""
        return [
            FormatResponse(
                name=fmt.value,
                display_name=traits.display_name,
                extension=traits.extension,
                mime_type=traits.mime_type,
                supports_quality=traits.supports_quality,
                supports_transparency=traits.supports_transparency,
                can_be_target=traits.can_be_target,
            )
            for fmt, traits in FORMAT_TRAITS.items()
        ]

    @app.post("/info")
    async def image_info(request: InfoRequest):
        """
        Read image metadata.

        - **path**: Local path to a supported image file
        """
        if not engine.is_supported_format(request.path):
            raise HTTPException(status_code=400, detail=f"Unsupported file type: {request.path}")
        try:
            info = await engine.get_image_info(request.path)
        except SourceNotFound as e:
            raise HTTPException(status_code=404, detail=str(e))
        except ConversionError as e:
            raise HTTPException(status_code=400, detail=str(e))
        return info.to_dict()

    @app.post("/convert")
    async def convert(request: ConvertRequest):
        """
        Convert a local image file.

        Failed conversions are reported in the body with success=false.
        """
        result = await engine.convert(request.source_path, request.options)
        return result.to_dict()

    return app


app = create_app()
