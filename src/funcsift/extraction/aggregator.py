"""File aggregator: raw header lines of one file -> File record.

    1. Parse every header concurrently (one task per header); join.
    2. Keep accepted headers whose input and output types are both non-empty.
    3. No survivors -> (None, False).
    4. Build the File, then recover each function's source from the file's
       bytes. Functions whose braces never balance are dropped.
    5. A file missing on disk skips step 4; its functions keep empty sources.

Functions come back in declaration order: each header task writes into the
slot of its own position, so thread completion order does not leak out.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Optional

from ..config import DEFAULT_WORKERS, ExtractionConfig
from ..logging_config import get_logger
from .balancer import DiagnosticSink, extract_body
from .hashing import identity_hash
from .header_parser import HeaderParser, anchor_text, strip_comment
from .languages import LanguageSpec
from .models import File, Function, RejectReason
from .universe import TypeUniverse, as_universe
from .validator import TypeValidator

logger = get_logger(__name__)

_WHITESPACE = b" \t\r\n\f\v"


def locate_header(content: bytes, anchor: bytes, start: int = 0) -> int:
    """Offset of the header's definition in ``content``, or -1.

    Occurrences followed by ';' (forward declarations such as C prototypes)
    are skipped. If every occurrence from ``start`` on is a declaration, the
    first one is returned.
    """
    first = content.find(anchor, start)
    pos = first
    while pos >= 0:
        end = pos + len(anchor)
        while end < len(content) and content[end] in _WHITESPACE:
            end += 1
        if content[end : end + 1] != b";":
            return pos
        pos = content.find(anchor, pos + 1)
    return first


class FileAggregator:
    """Builds File records from raw header lines.

    One aggregator can serve many files concurrently; it holds no per-file state.
    """

    def __init__(
        self,
        config: Optional[ExtractionConfig] = None,
        language: Optional[LanguageSpec] = None,
        sink: Optional[DiagnosticSink] = None,
    ) -> None:
        """
        Args:
            config: Extraction settings; defaults to ExtractionConfig()
            language: Supplies the modifier keywords; None uses Java modifiers
            sink: Receives brace diagnostics; None logs them as warnings
        """
        self.config = config or ExtractionConfig()
        self.language = language
        self.sink = sink
        self.parser = HeaderParser(
            modifiers=language.modifiers if language is not None else None,
            min_prefix_tokens=self.config.min_prefix_tokens,
            comment_marker=self.config.comment_marker,
            validator=TypeValidator(
                max_workers=self.config.type_workers, parallel=self.config.parallel
            ),
        )
        self._max_workers = self.config.header_workers or DEFAULT_WORKERS

    def parse_file(
        self,
        raw_headers: Iterable[str],
        path: str,
        universe: Mapping[str, bool],
    ) -> tuple[Optional[File], bool]:
        """Parse a file's headers and extract the matching functions.

        Args:
            raw_headers: Header lines in file order, as produced by a header supplier
            path: Location of the file; only read for source extraction
            universe: Type name -> desired flag

        Returns:
            (File, True) when at least one function matched, else (None, False)
        """
        types = as_universe(universe)
        headers = list(raw_headers)
        slots: list[Optional[Function]] = [None] * len(headers)

        def _parse_one(position: int, raw_header: str) -> None:
            slots[position] = self._build_function(position, raw_header, types)

        if not self.config.parallel or len(headers) < 2:
            for position, raw_header in enumerate(headers):
                _parse_one(position, raw_header)
        else:
            workers = min(self._max_workers, len(headers))
            with ThreadPoolExecutor(max_workers=workers) as executor:
                futures = [
                    executor.submit(_parse_one, position, raw_header)
                    for position, raw_header in enumerate(headers)
                ]
                for future in as_completed(futures):
                    future.result()

        functions = [fn for fn in slots if fn is not None]
        if not functions:
            logger.info("No function in %s matched the type universe", path)
            return None, False

        file = File(
            id=identity_hash(path),
            name=File.base_name(path),
            path=path,
            functions=functions,
        )
        self.extract_sources(file)
        return file, True

    def _build_function(
        self, position: int, raw_header: str, universe: TypeUniverse
    ) -> Optional[Function]:
        marker = self.config.comment_marker
        if not strip_comment(raw_header, marker):
            logger.debug("Skipping empty header at position %d", position)
            return None

        signature = self.parser.parse(raw_header, universe)
        if not signature.accepted:
            return None
        if not signature.has_desired_types:
            logger.debug(
                "Rejected header %r: %s", raw_header.strip(), RejectReason.NO_DESIRED_TYPES.value
            )
            return None

        return Function(
            id=identity_hash(signature.name + raw_header.strip()),
            name=signature.name,
            header=anchor_text(raw_header, marker),
            input_types=list(signature.input_types),
            output_types=list(signature.output_types),
            position=position,
        )

    def extract_sources(self, file: File) -> None:
        """Fill in ``source`` for each function, dropping those that fail to balance.

        Each function is anchored at its definition, not at a forward declaration.
        A header that occurs several times is matched to successive definitions
        in file order; such functions still share one ``id``, since the id only
        hashes name and header text.

        Mutates ``file.functions`` in place.
        """
        path = Path(file.path)
        if not path.exists():
            logger.info("%s not found; keeping functions without source", file.path)
            return

        try:
            content = path.read_bytes()
        except OSError as e:
            logger.warning("Cannot read %s: %s; keeping functions without source", file.path, e)
            return

        kept: list[Function] = []
        # Repeated headers resume searching after the previous match
        resume_at: dict[str, int] = {}
        for fn in file.functions:
            anchor = fn.header.encode("utf-8")
            offset = locate_header(content, anchor, resume_at.get(fn.header, 0))
            if offset >= 0:
                resume_at[fn.header] = offset + len(anchor)
            body = extract_body(content, offset, path=file.path, sink=self.sink)
            if body.ok:
                fn.source = body.text
                kept.append(fn)
            else:
                logger.warning("Dropping %s from %s: body could not be balanced", fn.name, file.path)

        file.functions[:] = kept


def parse_file(
    raw_headers: Iterable[str],
    path: str,
    universe: Mapping[str, bool],
    *,
    config: Optional[ExtractionConfig] = None,
    language: Optional[LanguageSpec] = None,
    sink: Optional[DiagnosticSink] = None,
) -> tuple[Optional[File], bool]:
    """Convenience wrapper around FileAggregator.parse_file."""
    aggregator = FileAggregator(config=config, language=language, sink=sink)
    return aggregator.parse_file(raw_headers, path, universe)
