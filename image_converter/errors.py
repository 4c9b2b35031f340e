"""
Conversion errors - every failure a conversion job can report
"""


class ConversionError(Exception):
    """Base class for failures recovered at the orchestrator boundary"""


class SourceNotFound(ConversionError):
    """Source file does not exist"""


class UnsupportedTargetFormat(ConversionError):
    """Requested output format cannot be produced (vector output)"""


class VectorParseFailure(ConversionError):
    """Vector document could not be parsed or has an empty bounding box"""


class DecodeFailure(ConversionError):
    """Raster source could not be decoded"""


class EncodeFailure(ConversionError):
    """Encoder rejected the image or failed while writing"""


class IOFailure(ConversionError):
    """Filesystem failure: directory creation, write or stat"""
