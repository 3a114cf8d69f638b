"""Raw header suppliers: where header lines come from.

The aggregator never tokenizes source itself. A supplier turns a file into
ordered header lines with positional metadata already removed:

    CtagsHeaderSupplier   runs ``ctags -x`` and keeps the language's function rows
    StaticHeaderSupplier  returns pre-recorded lines (tests, embedding callers)
"""

from __future__ import annotations

import subprocess
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Optional, Protocol

from ..exceptions import HeaderSupplierError
from ..logging_config import get_logger
from .languages import LanguageSpec

logger = get_logger(__name__)


class HeaderSupplier(Protocol):
    def headers(self, path: str, language: LanguageSpec) -> list[str]:
        """Header lines for ``path`` in file order."""
        ...


def parse_ctags_xref(output: str, function_kind: str) -> list[str]:
    """Pull header text out of ``ctags -x`` cross-reference output.

    Each row is ``<name> <kind> <line> <file> <source line...>``. Rows whose
    kind is not ``function_kind`` are skipped; the four leading fields are
    dropped and the remaining source line is returned as-is.
    """
    headers: list[str] = []
    for row in output.splitlines():
        fields = row.split(None, 4)
        if len(fields) < 5 or fields[1] != function_kind:
            continue
        headers.append(fields[4])
    return headers


class CtagsHeaderSupplier:
    """Lists function headers with exuberant/universal ctags."""

    def __init__(self, binary: str = "ctags", timeout_seconds: int = 30):
        self.binary = binary
        self.timeout_seconds = timeout_seconds

    def headers(self, path: str, language: LanguageSpec) -> list[str]:
        """Run ctags on one file.

        Raises:
            HeaderSupplierError: If ctags is missing, times out, or exits non-zero
        """
        cmd = [self.binary, "-x", "--c-types=f", path]
        try:
            result = subprocess.run(cmd, capture_output=True, timeout=self.timeout_seconds)
        except FileNotFoundError:
            raise HeaderSupplierError(Path(path), f"'{self.binary}' not found on PATH")
        except subprocess.TimeoutExpired:
            raise HeaderSupplierError(
                Path(path), f"ctags timed out after {self.timeout_seconds}s"
            )

        if result.returncode != 0:
            stderr = _decode(result.stderr).strip()
            raise HeaderSupplierError(Path(path), stderr or "ctags failed", result.returncode)

        headers = parse_ctags_xref(_decode(result.stdout), language.function_kind)
        logger.debug("ctags found %d %s header(s) in %s", len(headers), language.function_kind, path)
        return headers


class StaticHeaderSupplier:
    """Serves header lines recorded ahead of time, keyed by path."""

    def __init__(self, headers_by_path: Optional[Mapping[str, Sequence[str]]] = None):
        self._headers = {str(k): list(v) for k, v in (headers_by_path or {}).items()}

    def add(self, path: str, headers: Sequence[str]) -> None:
        self._headers[str(path)] = list(headers)

    def headers(self, path: str, language: LanguageSpec) -> list[str]:
        return list(self._headers.get(str(path), []))


def _decode(output: bytes) -> str:
    # ctags echoes source lines byte for byte; invalid UTF-8 becomes U+FFFD
    return output.decode("utf-8", errors="replace")
