"""Exception hierarchy for funcsift."""

from .base import FuncsiftError
from .config import (
    ConfigurationError,
    InvalidConfigError,
    InvalidUniverseError,
)
from .extraction import (
    EmptyHeaderError,
    ExtractionError,
    HeaderSupplierError,
    UnsupportedLanguageError,
)

__all__ = [
    "FuncsiftError",
    "ExtractionError",
    "EmptyHeaderError",
    "UnsupportedLanguageError",
    "HeaderSupplierError",
    "ConfigurationError",
    "InvalidConfigError",
    "InvalidUniverseError",
]
