"""
Image Converter - Main Entry Point
"""
import argparse
import asyncio
import sys

import uvicorn

from config.settings import settings

RESIZE_CHOICES = {
    "exact": "exact",
    "max-width": "max_width",
    "max-height": "max_height",
    "percentage": "percentage",
}


def run_server(host: str, port: int, reload: bool = False):
    """Run the API server"""
    print("\n" + "=" * 60)
    print("  Image Converter Server")
    print("=" * 60)
    print(f"  Host: {host}")
    print(f"  Port: {port}")
    print(f"  API Docs: http://{host}:{port}/docs")
    print(f"  Auto-reload: {'enabled' if reload else 'disabled'}")
    print("=" * 60 + "\n")

    uvicorn.run(
        "image_converter.api.server:app",
        host=host,
        port=port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )


def run_convert(args) -> int:
    """Convert one file from command line arguments"""
    from pydantic import ValidationError

    from image_converter import ConversionOptions
    from image_converter.formats import parse_format
    from image_converter.pipeline import ConversionOrchestrator

    try:
        options = ConversionOptions(
            target_format=parse_format(args.format),
            quality=args.quality if args.quality is not None else settings.default_quality,
            resize_mode=RESIZE_CHOICES.get(args.resize, "none"),
            target_width=args.width or 0,
            target_height=args.height or 0,
            maintain_aspect_ratio=not args.no_aspect,
            target_size_kb=args.target_size_kb or 0,
            output_path=args.output,
            overwrite_existing=args.overwrite,
        )
    except (ValueError, ValidationError) as e:
        print(f"Invalid options: {e}")
        return 2

    result = asyncio.run(ConversionOrchestrator().convert(args.input, options))

    if result.success:
        print(f"Success! Output file: {result.output_path}")
        print(f"  Dimensions: {result.original_width}x{result.original_height} -> "
              f"{result.new_width}x{result.new_height}")
        print(f"  Size: {result.original_size_bytes} -> {result.new_size_bytes} bytes")
        if result.final_quality is not None:
            print(f"  Quality: {result.final_quality}")
        print(f"  Time: {result.elapsed:.2f}s")
        return 0

    print(f"Failed: {result.error_message}")
    return 1


def run_info(path: str) -> int:
    """Print image metadata"""
    from image_converter import ConversionError
    from image_converter.pipeline import ConversionOrchestrator

    try:
        info = asyncio.run(ConversionOrchestrator().get_image_info(path))
    except ConversionError as e:
        print(f"Failed: {e}")
        return 1

    for key, value in info.to_dict().items():
        print(f"{key:>18}: {value}")
    return 0


def run_formats() -> int:
    """List formats and their capabilities"""
    from image_converter.formats import FORMAT_TRAITS

    for fmt, traits in FORMAT_TRAITS.items():
        flags = []
        if traits.supports_quality:
            flags.append("quality")
        if traits.supports_transparency:
            flags.append("alpha")
        if not traits.can_be_target:
            flags.append("source only")
        print(f"  {fmt.value:<6} {traits.display_name:<16} {', '.join(flags)}")
    return 0


def main():
    parser = argparse.ArgumentParser(
        description="Image Converter - Convert images between formats with resizing and size targets"
    )
    parser.add_argument("--log-level", default=None, help="Override log level (DEBUG, INFO, ...)")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Server command
    server_parser = subparsers.add_parser("server", help="Run API server")
    server_parser.add_argument("--host", default=settings.api_host, help="Host to bind to")
    server_parser.add_argument("--port", type=int, default=settings.api_port, help="Port to listen on")
    server_parser.add_argument("--reload", action="store_true", help="Enable auto-reload")

    # Convert command
    convert_parser = subparsers.add_parser("convert", help="Convert an image")
    convert_parser.add_argument("input", help="Input file (JPG, PNG, WebP, GIF, BMP, TIFF, ICO, SVG)")
    convert_parser.add_argument("-f", "--format", required=True, help="Target format (jpg, png, webp, gif, bmp, tiff, ico)")
    convert_parser.add_argument("-q", "--quality", type=int, help="Quality 1-100 for JPEG/WebP")
    convert_parser.add_argument("--resize", choices=sorted(RESIZE_CHOICES), help="Resize mode")
    convert_parser.add_argument("--width", type=int, help="Target width, or percentage for --resize percentage")
    convert_parser.add_argument("--height", type=int, help="Target height")
    convert_parser.add_argument("--no-aspect", action="store_true", help="Do not keep aspect ratio")
    convert_parser.add_argument("--target-size-kb", type=int, help="Maximum output size in KB")
    convert_parser.add_argument("-o", "--output", help="Output file path")
    convert_parser.add_argument("--overwrite", action="store_true", help="Overwrite existing output")

    # Info command
    info_parser = subparsers.add_parser("info", help="Show image information")
    info_parser.add_argument("input", help="Image file")

    # Formats command
    subparsers.add_parser("formats", help="List supported formats")

    args = parser.parse_args()

    from image_converter.logging_setup import configure_logging
    configure_logging(args.log_level)

    if args.command == "server":
        run_server(host=args.host, port=args.port, reload=args.reload)
    elif args.command == "convert":
        sys.exit(run_convert(args))
    elif args.command == "info":
        sys.exit(run_info(args.input))
    elif args.command == "formats":
        sys.exit(run_formats())
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
