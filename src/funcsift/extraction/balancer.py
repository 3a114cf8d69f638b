"""Brace balancer: recover a function's verbatim text from file bytes.

Starting at the byte offset where a header begins, the scanner moves through
three states:

    SEARCHING  -> first '{' at or after the offset    -> BALANCING
    BALANCING  -> '{' deepens, '}' closes; depth 0     -> DONE
    either     -> end of buffer                        -> UNBALANCED

DONE returns content[offset:closing_brace + 1] with newlines and tabs removed.
UNBALANCED returns nothing at all; a truncated body is never handed back.
Each UNBALANCED scan is reported to a diagnostics sink.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from ..logging_config import get_logger

logger = get_logger(__name__)

_OPEN = ord("{")
_CLOSE = ord("}")


class ScanState(Enum):
    SEARCHING = "searching"
    BALANCING = "balancing"
    DONE = "done"
    UNBALANCED = "unbalanced"


@dataclass(frozen=True)
class BraceDiagnostic:
    """Where and why a balancing scan gave up.

    Attributes:
        path: File being scanned ("" when unknown)
        offset: Byte offset the scan started from
        buffer_length: Length of the scanned buffer
        state: State the scanner was in when the buffer ran out
        depth: Open brace count at that point
    """

    path: str
    offset: int
    buffer_length: int
    state: ScanState
    depth: int = 0


@dataclass(frozen=True)
class BodyExtraction:
    text: str
    ok: bool

    def __iter__(self):
        yield self.text
        yield self.ok


DiagnosticSink = Callable[[BraceDiagnostic], None]


def log_diagnostic(diagnostic: BraceDiagnostic) -> None:
    """Default sink: a warning on the funcsift logger."""
    logger.warning(
        "Unbalanced braces in %s: offset=%d, buffer length=%d, stopped while %s (depth %d)",
        diagnostic.path or "<buffer>",
        diagnostic.offset,
        diagnostic.buffer_length,
        diagnostic.state.value,
        diagnostic.depth,
    )


_FAILED = BodyExtraction(text="", ok=False)


def extract_body(
    content: bytes,
    offset: int,
    *,
    path: str = "",
    sink: Optional[DiagnosticSink] = None,
) -> BodyExtraction:
    """Scan forward from ``offset`` to the brace that closes the function body.

    Args:
        content: Full byte content of the source file
        offset: Byte index at (or before) which the header begins; negative
            means the header was not found and the scan fails immediately
        path: File path, only used in diagnostics
        sink: Receives a BraceDiagnostic on failure; defaults to log_diagnostic

    Returns:
        BodyExtraction(text, ok). On failure text is "" and ok is False.
    """
    report = sink or log_diagnostic
    length = len(content)
    state = ScanState.SEARCHING
    depth = 0
    pos = offset if offset >= 0 else length

    while pos < length:
        byte = content[pos]
        if byte == _OPEN:
            depth += 1
            state = ScanState.BALANCING
        elif byte == _CLOSE and state is ScanState.BALANCING:
            depth -= 1
            if depth == 0:
                state = ScanState.DONE
                break
        pos += 1

    if state is not ScanState.DONE:
        _emit(report, BraceDiagnostic(path, offset, length, state, depth))
        return _FAILED

    raw = content[offset : pos + 1].decode("utf-8", errors="replace")
    return BodyExtraction(text=raw.replace("\n", "").replace("\t", ""), ok=True)


def _emit(sink: DiagnosticSink, diagnostic: BraceDiagnostic) -> None:
    # Sink errors are logged, never raised
    try:
        sink(diagnostic)
    except Exception as e:
        logger.error("Diagnostics sink failed for %s: %s", diagnostic.path or "<buffer>", e)
