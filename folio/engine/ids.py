"""Identity generation for positions and ledger records."""

import itertools
from typing import Iterable, Protocol


class IdGenerator(Protocol):
    def next_id(self) -> int: ...


class SequentialIdGenerator:
    """Monotonic integer ids.

    Positions and ledger records share one sequence so an id is unique
    across the whole session.
    """

    def __init__(self, start: int = 1):
        self._counter = itertools.count(start)

    @classmethod
    def after(cls, used: Iterable[int]) -> "SequentialIdGenerator":
        """Create a generator that continues past the given ids."""
        return cls(start=max(used, default=0) + 1)

    def next_id(self) -> int:
        return next(self._counter)
