"""Data models for signature-matched function extraction.

HeaderSignature is what the header parser produces for one raw header line.
Function and File are the records handed back to callers:
    - Function: one accepted function, its filtered types and verbatim source
    - File: the accepted functions of one source file, in declaration order

A File only exists when at least one Function was accepted for it.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator, Optional


class TypeStatus(Enum):
    """Result of looking one token up in a type universe."""

    DESIRED = "desired"  # present and true
    UNDESIRED = "undesired"  # present and false
    UNKNOWN = "unknown"  # absent


class RejectReason(Enum):
    """Why a header was not turned into a Function."""

    MALFORMED_HEADER = "malformed_header"
    DECLARATION_WITHOUT_BODY = "declaration_without_body"
    INVALID_TYPE = "invalid_type"
    NO_DESIRED_TYPES = "no_desired_types"


@dataclass(frozen=True)
class HeaderSignature:
    """Parsed form of a single header line.

    Attributes:
        name: Declared function name ("" when the header is invalid)
        input_types: Desired parameter types, declaration order
        output_types: Desired return-type keywords, declaration order
        accepted: True if every declared type is known and the header is well formed
        reason: Rejection reason, None when accepted
    """

    name: str
    input_types: tuple[str, ...] = ()
    output_types: tuple[str, ...] = ()
    accepted: bool = False
    reason: Optional[RejectReason] = None

    def __iter__(self) -> Iterator[Any]:
        # Allows ``name, ins, outs, ok = parse_header(...)``
        yield self.name
        yield list(self.input_types)
        yield list(self.output_types)
        yield self.accepted

    @property
    def has_desired_types(self) -> bool:
        """Both sides of the signature carry at least one desired type."""
        return bool(self.input_types) and bool(self.output_types)

    @classmethod
    def rejected(
        cls,
        reason: RejectReason,
        name: str = "",
        input_types: tuple[str, ...] = (),
        output_types: tuple[str, ...] = (),
    ) -> HeaderSignature:
        return cls(
            name=name,
            input_types=input_types,
            output_types=output_types,
            accepted=False,
            reason=reason,
        )


@dataclass
class Function:
    """A function whose signature matched the type universe.

    Attributes:
        id: FNV-1a hash of name + trimmed raw header (content address, not a sequence number)
        name: Declared function name
        header: Normalized header text used to locate the function in its file
        input_types: Desired parameter types in declaration order
        output_types: Desired return-type keywords in declaration order
        source: Verbatim function text with newlines and tabs removed, "" until extracted
        position: Index of the header among the raw headers supplied for the file
    """

    id: int
    name: str
    header: str
    input_types: list[str]
    output_types: list[str]
    source: str = ""
    position: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "header": self.header,
            "input_types": list(self.input_types),
            "output_types": list(self.output_types),
            "source": self.source,
            "position": self.position,
        }


@dataclass
class File:
    """Matched functions of one source file."""

    id: int
    name: str
    path: str
    functions: list[Function] = field(default_factory=list)

    def function_names(self) -> list[str]:
        """Names of the matched functions, in file order."""
        return [fn.name for fn in self.functions]

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "path": self.path,
            "functions": [fn.to_dict() for fn in self.functions],
        }

    @staticmethod
    def base_name(path: str) -> str:
        return os.path.basename(path)
