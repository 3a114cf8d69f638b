"""Header parser: one raw header line -> HeaderSignature.

Supported grammar (one line, as emitted by the header supplier):

    <modifiers and return-type keywords> <name>(<type> <name>, <type> <name>, ...) [{] [// comment]

Parsing steps:
    1. Drop the inline comment and surrounding whitespace.
    2. A trailing ';' is a declaration without a body (abstract/interface member).
    3. Split at '(' into a prefix segment and a parameter segment; exactly one split.
    4. The last prefix token is the name. Prefix tokens that are language
       modifiers (public, static, ...) are structural; the rest are return-type
       keywords.
    5. Parameter tokens alternate type/name; only even-indexed tokens are types.
    6. Return-type keywords and parameter types are validated concurrently.
    7. Reject if any type was unknown, or if fewer than ``min_prefix_tokens``
       tokens precede the name (class headers and the like).
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Optional

from ..exceptions import EmptyHeaderError
from ..logging_config import get_logger
from .languages import JAVA_MODIFIERS
from .models import HeaderSignature, RejectReason
from .universe import as_universe
from .validator import TypeValidator

logger = get_logger(__name__)

DEFAULT_COMMENT_MARKER = "//"
DEFAULT_MIN_PREFIX_TOKENS = 3


def strip_comment(raw_header: str, comment_marker: str = DEFAULT_COMMENT_MARKER) -> str:
    """Remove an inline comment and trim whitespace."""
    return raw_header.split(comment_marker, 1)[0].strip()


def anchor_text(raw_header: str, comment_marker: str = DEFAULT_COMMENT_MARKER) -> str:
    """Header text as it can be found verbatim in the source file."""
    return strip_comment(raw_header, comment_marker).replace("{", "").strip()


def parameter_types(parameter_segment: str) -> list[str]:
    """Candidate types from the text after '(' (names at odd indexes are skipped)."""
    params = parameter_segment.split(")", 1)[0].split()
    return [token.split(",", 1)[0].strip() for token in params[::2]]


class HeaderParser:
    """Parses header lines for one language's modifier set."""

    def __init__(
        self,
        modifiers: Optional[Iterable[str]] = None,
        min_prefix_tokens: int = DEFAULT_MIN_PREFIX_TOKENS,
        comment_marker: str = DEFAULT_COMMENT_MARKER,
        validator: Optional[TypeValidator] = None,
    ) -> None:
        self.modifiers = JAVA_MODIFIERS if modifiers is None else frozenset(modifiers)
        self.min_prefix_tokens = min_prefix_tokens
        self.comment_marker = comment_marker
        self.validator = validator or TypeValidator()

    def parse(self, raw_header: str, universe: Mapping[str, bool]) -> HeaderSignature:
        """Parse and validate a single header.

        Raises:
            EmptyHeaderError: If nothing is left after comment stripping.
                Callers are expected to filter empty lines first.
        """
        header = strip_comment(raw_header, self.comment_marker)
        if not header:
            raise EmptyHeaderError(raw_header)

        if header.endswith(";"):
            return self._reject(header, RejectReason.DECLARATION_WITHOUT_BODY)

        segments = header.split("(")
        if len(segments) != 2:
            return self._reject(header, RejectReason.MALFORMED_HEADER)

        prefix = segments[0].split()
        if not prefix:
            return self._reject(header, RejectReason.MALFORMED_HEADER)
        name = prefix.pop()

        return_types = [token for token in prefix if token not in self.modifiers]
        param_types = parameter_types(segments[1])

        outcome = self.validator.validate(as_universe(universe), return_types + param_types)
        output_types = outcome.collected(0, len(return_types))
        input_types = outcome.collected(len(return_types))

        if outcome.halted:
            reason = RejectReason.INVALID_TYPE
        elif len(prefix) < self.min_prefix_tokens:
            reason = RejectReason.MALFORMED_HEADER
        else:
            return HeaderSignature(
                name=name,
                input_types=input_types,
                output_types=output_types,
                accepted=True,
            )

        return self._reject(header, reason, name, input_types, output_types)

    def _reject(
        self,
        header: str,
        reason: RejectReason,
        name: str = "",
        input_types: tuple[str, ...] = (),
        output_types: tuple[str, ...] = (),
    ) -> HeaderSignature:
        logger.debug("Rejected header %r: %s", header, reason.value)
        return HeaderSignature.rejected(reason, name, input_types, output_types)


def parse_header(
    raw_header: str,
    universe: Mapping[str, bool],
    *,
    modifiers: Optional[Iterable[str]] = None,
    min_prefix_tokens: int = DEFAULT_MIN_PREFIX_TOKENS,
    comment_marker: str = DEFAULT_COMMENT_MARKER,
    validator: Optional[TypeValidator] = None,
) -> HeaderSignature:
    """Convenience wrapper around HeaderParser.parse.

    Example:
        >>> universe = {"int": True, "String": True, "float": False}
        >>> sig = parse_header("public static int add(int a, int b) {", universe)
        >>> sig.name, sig.input_types, sig.output_types, sig.accepted
        ('add', ('int', 'int'), ('int',), True)
    """
    parser = HeaderParser(
        modifiers=modifiers,
        min_prefix_tokens=min_prefix_tokens,
        comment_marker=comment_marker,
        validator=validator,
    )
    return parser.parse(raw_header, universe)
