"""
ServeCountdown — display-only "3, 2, 1, go" counter for the serve phase.

Advanced by its own fixed-interval timer, never by the tick. It holds no
reference to the ball or the scores; the match only reads `running`
when the serve gate asks whether the countdown is over.

Usage
-----
cd = ServeCountdown(start=3)
cd.restart()            # value 3
while cd.advance():     # called once per interval by a timer
    ...
cd.value                # 0 → "go"
"""
from __future__ import annotations
from typing import Optional


class ServeCountdown:

    def __init__(self, start: int = 3) -> None:
        self._start = start
        self._value: Optional[int] = None
        self._generation = 0

    def restart(self) -> None:
        """Begin a new count. Bumps `generation` so a driving timer can re-arm."""
        self._value = self._start
        self._generation += 1

    def advance(self) -> bool:
        """
        One interval elapsed. Returns True while there is more to count,
        False once "go" is reached (or nothing is counting).
        """
        if self._value is None or self._value <= 0:
            return False
        self._value -= 1
        return self._value > 0

    def cancel(self) -> None:
        """Hide the countdown (serve taken, match over, loop stopped)."""
        self._value = None

    @property
    def value(self) -> Optional[int]:
        return self._value

    @property
    def running(self) -> bool:
        return self._value is not None and self._value > 0

    @property
    def generation(self) -> int:
        return self._generation
