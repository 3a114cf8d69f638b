"""Signature-matched function extraction.

Leaves first: universe and hashing, the header parser and its concurrent
validator, the brace balancer, and the file aggregator that ties them together.
"""

from .aggregator import FileAggregator, parse_file
from .balancer import BodyExtraction, BraceDiagnostic, ScanState, extract_body
from .hashing import fnv1a_32, identity_hash
from .header_parser import HeaderParser, parse_header
from .languages import DEFAULT_LANGUAGES, LanguageSpec, LanguageTable
from .models import File, Function, HeaderSignature, RejectReason, TypeStatus
from .suppliers import CtagsHeaderSupplier, HeaderSupplier, StaticHeaderSupplier
from .universe import TypeUniverse
from .validator import TypeValidator, ValidationOutcome

__all__ = [
    "FileAggregator",
    "parse_file",
    "BodyExtraction",
    "BraceDiagnostic",
    "ScanState",
    "extract_body",
    "fnv1a_32",
    "identity_hash",
    "HeaderParser",
    "parse_header",
    "DEFAULT_LANGUAGES",
    "LanguageSpec",
    "LanguageTable",
    "File",
    "Function",
    "HeaderSignature",
    "RejectReason",
    "TypeStatus",
    "CtagsHeaderSupplier",
    "HeaderSupplier",
    "StaticHeaderSupplier",
    "TypeUniverse",
    "TypeValidator",
    "ValidationOutcome",
]
