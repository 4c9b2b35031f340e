"""
Output Path Resolver - Default output locations and collision avoidance
"""
from pathlib import Path
from typing import Optional, Union, TYPE_CHECKING
import logging

from config.settings import settings
from ..formats import get_traits

if TYPE_CHECKING:
    from ..models import ConversionOptions

logger = logging.getLogger(__name__)


class OutputPathResolver:
    """
    Derives where a conversion writes its output.

    Resolution only checks for existing files; it never creates
    directories or files.
    """

    def __init__(self, max_attempts: Optional[int] = None):
        self.max_attempts = max_attempts or settings.max_collision_attempts

    def default_path(self, source_path: Union[str, Path], options: "ConversionOptions") -> Path:
        """{source_dir}/{source_stem}{target_extension}"""
        source_path = Path(source_path)
        extension = get_traits(options.target_format).extension
        return source_path.parent / f"{source_path.stem}{extension}"

    def resolve(self, source_path: Union[str, Path], options: "ConversionOptions") -> Path:
        if options.output_path:
            path = Path(options.output_path)
        else:
            path = self.default_path(source_path, options)

        if path.exists() and not options.overwrite_existing:
            unique = self.unique_path(path)
            logger.info(f"Output {path.name} exists, writing to {unique.name}")
            return unique
        return path

    def unique_path(self, path: Path) -> Path:
        """
        Append " (n)" before the extension until the name is free.

        Gives up after max_attempts and returns the last candidate,
        even if it exists.
        """
        if not path.exists():
            return path

        counter = 1
        while True:
            candidate = path.with_name(f"{path.stem} ({counter}){path.suffix}")
            if not candidate.exists() or counter >= self.max_attempts:
                return candidate
            counter += 1
