import itertools
import re
import uuid
from typing import Callable, Iterable

IdGenerator = Callable[[], str]


class UuidIdGenerator:
    def __call__(self) -> str:
        return f"p_{uuid.uuid4().hex}"


class CounterIdGenerator:
    """Deterministic ``p_1``, ``p_2``, ... ids."""

    def __init__(self, start: int = 1):
        self._counter = itertools.count(start)

    def __call__(self) -> str:
        return f"p_{next(self._counter)}"

    @classmethod
    def after(cls, existing: Iterable[str]) -> "CounterIdGenerator":
        """Start past the highest ``p_<n>`` id already in use."""
        numbers = [int(m.group(1)) for m in map(re.compile(r"p_(\d+)$").match, existing) if m]
        return cls(max(numbers, default=0) + 1)
