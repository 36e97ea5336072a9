"""Frame-counted blink phase."""

from dataclasses import dataclass

from soft_terminal.core.constants import (
    BLINK_PERIOD,
    RAPID_BLINK_ON,
    RAPID_BLINK_PERIOD,
    SLOW_BLINK_ON,
)


@dataclass
class BlinkClock:
    """
    Cyclic counter advanced once per draw call.

    The blink phase depends only on how many times ``tick`` was called,
    never on wall-clock time. Both predicates stay off until the first
    tick.
    """
    counter: int = 0
    fast: bool = False
    slow: bool = False

    def __post_init__(self) -> None:
        self.counter %= BLINK_PERIOD

    def tick(self) -> None:
        self.counter = (self.counter + 1) % BLINK_PERIOD
        self._update()

    def _update(self) -> None:
        self.fast = self.counter % RAPID_BLINK_PERIOD in RAPID_BLINK_ON
        self.slow = self.counter in SLOW_BLINK_ON
