from __future__ import annotations

import time

from src.web.errors import ConfigError


class Deadline:
    """Absolute point in (monotonic) time shared by every blocking operation of a run."""

    def __init__(self, expires_at: float) -> None:
        self._expires_at = expires_at

    @classmethod
    def after(cls, seconds: float) -> "Deadline":
        if seconds <= 0:
            raise ConfigError("Deadline must be positive.")
        return cls(time.monotonic() + seconds)

    def remaining(self) -> float:
        return max(0.0, self._expires_at - time.monotonic())

    def remaining_ms(self) -> int:
        return int(self.remaining() * 1000)

    @property
    def expired(self) -> bool:
        return self.remaining_ms() <= 0

    def __repr__(self) -> str:
        return f"Deadline(remaining={self.remaining():.3f}s)"
