"""Public API for funcsift.

Example:
    >>> from funcsift import extract_file
    >>>
    >>> universe = {"int": True, "String": True, "float": False}
    >>> file, ok = extract_file("src/Calculator.java", universe)
    >>> if ok:
    ...     print(file.function_names())
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Optional

from .config import ExtractionConfig
from .exceptions import FuncsiftError
from .extraction.aggregator import FileAggregator
from .extraction.balancer import DiagnosticSink
from .extraction.languages import DEFAULT_LANGUAGES, LanguageTable
from .extraction.models import File
from .extraction.suppliers import CtagsHeaderSupplier, HeaderSupplier
from .extraction.universe import as_universe
from .logging_config import get_logger

logger = get_logger(__name__)


def default_supplier(config: ExtractionConfig) -> HeaderSupplier:
    return CtagsHeaderSupplier(
        binary=config.ctags_binary, timeout_seconds=config.ctags_timeout_seconds
    )


def extract_file(
    path: str,
    universe: Mapping[str, bool],
    supplier: Optional[HeaderSupplier] = None,
    language: Optional[str] = None,
    config: Optional[ExtractionConfig] = None,
    sink: Optional[DiagnosticSink] = None,
    languages: LanguageTable = DEFAULT_LANGUAGES,
) -> tuple[Optional[File], bool]:
    """Extract the functions of one file whose signatures match ``universe``.

    Args:
        path: Source file to process
        universe: Type name -> desired flag
        supplier: Header supplier; defaults to ctags
        language: Language name; defaults to config.language, then the file extension
        config: Extraction settings; defaults to ExtractionConfig()
        sink: Receives brace diagnostics
        languages: Language table used to resolve ``language``

    Returns:
        (File, True) if anything matched, else (None, False)

    Raises:
        UnsupportedLanguageError: If the language cannot be resolved
        HeaderSupplierError: If the supplier cannot list headers
    """
    config = config or ExtractionConfig()
    spec = languages.resolve(path, language or config.language)
    supplier = supplier or default_supplier(config)

    headers = supplier.headers(path, spec)
    aggregator = FileAggregator(config=config, language=spec, sink=sink)
    return aggregator.parse_file(headers, path, universe)


def extract_files(
    paths: Iterable[str],
    universe: Mapping[str, bool],
    supplier: Optional[HeaderSupplier] = None,
    language: Optional[str] = None,
    config: Optional[ExtractionConfig] = None,
    sink: Optional[DiagnosticSink] = None,
    languages: LanguageTable = DEFAULT_LANGUAGES,
) -> dict[str, File]:
    """Run extract_file over many paths.

    Files that fail (unsupported language, supplier error) are logged and
    skipped, as are files with no matching function.

    Returns:
        Dict mapping path to File, for files that produced one
    """
    config = config or ExtractionConfig()
    supplier = supplier or default_supplier(config)
    types = as_universe(universe)

    results: dict[str, File] = {}
    for path in paths:
        try:
            file, ok = extract_file(
                path,
                types,
                supplier=supplier,
                language=language,
                config=config,
                sink=sink,
                languages=languages,
            )
        except FuncsiftError as e:
            logger.warning("Skipping %s: %s", path, e)
            continue
        if ok and file is not None:
            results[path] = file

    return results
