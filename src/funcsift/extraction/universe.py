"""The type universe: which declared types make a function worth keeping.

A universe maps type names to a desired flag:
    - present and True  -> desired, the type is collected
    - present and False -> known but undesired, silently ignored
    - absent            -> unknown, the whole header is rejected

Example TOML file (either a ``[types]`` table or top-level booleans):

    [types]
    int = true
    String = true
    float = false
"""

from __future__ import annotations

import tomllib
from collections.abc import Iterable, Iterator, Mapping
from pathlib import Path
from typing import Optional

from ..exceptions import InvalidUniverseError
from .models import TypeStatus


class TypeUniverse(Mapping[str, bool]):
    """Read-only mapping of type name to desired flag.

    Shared by every validation task without locking; it is never mutated
    after construction.
    """

    def __init__(self, types: Optional[Mapping[str, bool]] = None):
        self._types: dict[str, bool] = {str(k): bool(v) for k, v in (types or {}).items()}

    def __getitem__(self, key: str) -> bool:
        return self._types[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._types)

    def __len__(self) -> int:
        return len(self._types)

    def __repr__(self) -> str:
        return f"TypeUniverse({self._types!r})"

    def status(self, token: str) -> TypeStatus:
        desired = self._types.get(token)
        if desired is None:
            return TypeStatus.UNKNOWN
        return TypeStatus.DESIRED if desired else TypeStatus.UNDESIRED

    @property
    def desired(self) -> frozenset[str]:
        return frozenset(name for name, flag in self._types.items() if flag)

    def merged(self, other: Mapping[str, bool]) -> TypeUniverse:
        """New universe with ``other`` taking precedence."""
        combined = dict(self._types)
        combined.update({str(k): bool(v) for k, v in other.items()})
        return TypeUniverse(combined)

    @classmethod
    def from_lists(
        cls, desired: Iterable[str] = (), undesired: Iterable[str] = ()
    ) -> TypeUniverse:
        types = {name: False for name in undesired}
        types.update({name: True for name in desired})
        return cls(types)

    @classmethod
    def from_toml(cls, path: Path) -> TypeUniverse:
        """Load a universe from a TOML file.

        Raises:
            InvalidUniverseError: If the file is missing, unparsable, or has non-boolean values
        """
        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except OSError as e:
            raise InvalidUniverseError(path, f"cannot read file: {e}")
        except tomllib.TOMLDecodeError as e:
            raise InvalidUniverseError(path, f"invalid TOML: {e}")

        table = data.get("types", data)
        if not isinstance(table, dict):
            raise InvalidUniverseError(path, "[types] must be a table")

        for name, flag in table.items():
            if not isinstance(flag, bool):
                raise InvalidUniverseError(path, f"value for '{name}' must be true or false")

        return cls(table)


def as_universe(types: Mapping[str, bool]) -> TypeUniverse:
    """Wrap a plain mapping; universes pass through unchanged."""
    if isinstance(types, TypeUniverse):
        return types
    return TypeUniverse(types)
