"""Span records marking the start and end of generation phases."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime, timezone
import logging
from typing import Any, Dict, Iterator


@dataclass
class Span:
    """Timing metadata for one phase of manifest generation."""

    name: str
    started_at: datetime
    ended_at: datetime | None = None
    extra: Dict[str, Any] = field(default_factory=dict)

    @property
    def duration_ms(self) -> float:
        """Return the duration in milliseconds, or ``0.0`` while still open."""

        if self.ended_at is None:
            return 0.0
        return (self.ended_at - self.started_at).total_seconds() * 1000.0

    def close(self) -> None:
        self.ended_at = datetime.now(timezone.utc)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "time": {
                "start": self.started_at.isoformat(),
                "end": self.ended_at.isoformat() if self.ended_at else None,
            },
            "duration_ms": self.duration_ms,
            "extra": dict(self.extra),
        }

    @classmethod
    def start(cls, name: str) -> "Span":
        return cls(name=name, started_at=datetime.now(timezone.utc))


@contextmanager
def traced(logger: logging.Logger, name: str, level: int = logging.DEBUG) -> Iterator[Span]:
    """Log start and end markers around the wrapped block.

    The span is closed and the end marker emitted even when the block raises;
    the exception itself is left untouched.
    """

    span = Span.start(name)
    logger.log(level, "Start: %s", name)
    try:
        yield span
    finally:
        span.close()
        logger.log(level, "End: %s (%.2f ms)", name, span.duration_ms)
