"""Rate gate bounding how often the remote JWKS endpoint is fetched."""

import time
from collections.abc import Callable

from jwkgate.core.settings import JWKS_REFRESH_INTERVAL_DEFAULT


class RefreshPolicy:
    """Allows at most one remote fetch per ``min_interval`` seconds.

    The window starts when a fetch is attempted, not when it succeeds, so a
    failing endpoint is not retried more often than a healthy one.
    """

    def __init__(
        self,
        min_interval: float = JWKS_REFRESH_INTERVAL_DEFAULT,
        *,
        allow_empty_key_set: bool = True,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.min_interval = min_interval
        self.allow_empty_key_set = allow_empty_key_set
        self._clock = clock
        self._not_before = 0.0

    @property
    def not_before(self) -> float:
        return self._not_before

    def try_acquire(self) -> bool:
        """Open the gate and start a new window, or refuse inside one."""
        now = self._clock()
        if now < self._not_before:
            return False
        self._not_before = now + self.min_interval
        return True
