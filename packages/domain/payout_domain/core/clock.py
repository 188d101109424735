"""Logical time source."""


class SequenceClock:
    """Monotonically increasing integer clock (block height, sequence number).

    The engine only reads it. The host advances it between operations.
    """

    def __init__(self, start: int = 1):
        if start < 0:
            raise ValueError(f"Clock cannot start below 0, got {start}")
        self._now = start

    def now(self) -> int:
        return self._now

    def advance(self, steps: int = 1) -> int:
        """Move the clock forward and return the new time."""
        if steps < 1:
            raise ValueError(f"Clock only moves forward, got steps={steps}")
        self._now += steps
        return self._now

    def __repr__(self) -> str:
        return f"SequenceClock(now={self._now})"
