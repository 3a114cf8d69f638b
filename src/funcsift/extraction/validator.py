"""Concurrent type validation for a single header.

Every candidate type token of a header (return-type keywords and parameter
types) is looked up in the type universe on its own worker task. The tasks
share two things:

    - a halt signal (threading.Event) that is only ever set, never cleared,
      by any task that meets a type absent from the universe
    - a pre-sized slot list, where each task writes its desired token at its
      own index

The coordinator joins on every task before reading either, so the collected
types come back in declaration order no matter which task finished first.
There is no early cancellation: once one token halts the header, the
remaining checks still run to completion.
"""

from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Optional, Sequence

from ..config import DEFAULT_WORKERS
from .models import TypeStatus
from .universe import TypeUniverse


@dataclass(frozen=True)
class ValidationOutcome:
    """Joined result of one validation round.

    Attributes:
        slots: One entry per candidate; the token if desired, else None
        halted: True if any candidate was absent from the universe
    """

    slots: tuple[Optional[str], ...]
    halted: bool

    def collected(self, start: int = 0, stop: Optional[int] = None) -> tuple[str, ...]:
        """Desired tokens within ``slots[start:stop]``, order preserved."""
        return tuple(token for token in self.slots[start:stop] if token is not None)


class TypeValidator:
    """Checks candidate tokens against a universe with one task per token."""

    def __init__(self, max_workers: Optional[int] = None, parallel: bool = True) -> None:
        """
        Args:
            max_workers: Upper bound on worker threads per round. Defaults to CPU count (max 8).
            parallel: When False, checks run inline on the calling thread.
        """
        self._max_workers = max_workers or DEFAULT_WORKERS
        self._parallel = parallel

    def validate(self, universe: TypeUniverse, tokens: Sequence[str]) -> ValidationOutcome:
        slots: list[Optional[str]] = [None] * len(tokens)
        halt = threading.Event()

        def _check(index: int, token: str) -> None:
            status = universe.status(token)
            if status is TypeStatus.DESIRED:
                slots[index] = token
            elif status is TypeStatus.UNKNOWN:
                halt.set()
            # UNDESIRED contributes nothing and does not halt

        if not self._parallel or len(tokens) < 2:
            for index, token in enumerate(tokens):
                _check(index, token)
        else:
            workers = min(self._max_workers, len(tokens))
            with ThreadPoolExecutor(max_workers=workers) as executor:
                futures = [
                    executor.submit(_check, index, token) for index, token in enumerate(tokens)
                ]
                for future in as_completed(futures):
                    future.result()

        return ValidationOutcome(slots=tuple(slots), halted=halt.is_set())
