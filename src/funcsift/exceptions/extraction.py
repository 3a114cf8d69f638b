"""Extraction-related exceptions: header preconditions, languages, header suppliers.

Header rejections, unbalanced braces and empty result sets are not exceptions;
they are reported as omissions. Only conditions the caller must fix are raised.
"""

from pathlib import Path
from typing import List, Optional

from .base import FuncsiftError


class ExtractionError(FuncsiftError):
    """Base class for extraction-related errors."""

    pass


class EmptyHeaderError(ExtractionError):
    """Raised when an empty header line reaches the header parser."""

    def __init__(self, raw_header: str):
        super().__init__(
            "Header is empty after comment stripping",
            details={"raw_header": repr(raw_header)},
        )
        self.raw_header = raw_header


class UnsupportedLanguageError(ExtractionError):
    """Raised when a language or file extension has no table entry."""

    def __init__(self, language: str, supported_languages: List[str]):
        super().__init__(
            f"Unsupported language: {language}",
            details={"language": language, "supported": ", ".join(supported_languages)},
        )
        self.language = language
        self.supported_languages = supported_languages


class HeaderSupplierError(ExtractionError):
    """Raised when the raw header supplier cannot produce headers for a file."""

    def __init__(self, filepath: Path, reason: str, returncode: Optional[int] = None):
        details = {"filepath": str(filepath), "reason": reason}
        if returncode is not None:
            details["returncode"] = str(returncode)

        super().__init__(f"Cannot read function headers from {filepath}", details=details)
        self.filepath = filepath
        self.reason = reason
        self.returncode = returncode
