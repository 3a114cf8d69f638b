"""
funcsift - signature-matched function extraction

Keeps the functions of a source file whose declared input and output types all
belong to a caller-supplied type universe, and recovers their verbatim source.
"""

__version__ = "0.3.0"

from .api import extract_file, extract_files
from .extraction import (
    File,
    FileAggregator,
    Function,
    HeaderSignature,
    TypeUniverse,
    extract_body,
    parse_file,
    parse_header,
)

__all__ = [
    "extract_file",  # Main entry point
    "extract_files",
    "parse_file",  # Core, headers already in hand
    "parse_header",
    "extract_body",
    "FileAggregator",
    "File",
    "Function",
    "HeaderSignature",
    "TypeUniverse",
]
