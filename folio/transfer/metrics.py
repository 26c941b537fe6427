"""
transfer/metrics.py - Running transfer metrics
"""

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any, Dict, Optional


@dataclass
class TransferMetrics:
    """Counters and timings across transfer attempts."""

    total_attempts: int = 0
    successes: int = 0
    failures: int = 0
    last_duration_ms: float = 0.0
    last_attempt_at: Optional[datetime] = None
    average_duration_ms: float = 0.0

    def record(self, success: bool, duration_ms: float, attempted_at: datetime) -> None:
        """Fold one finished attempt into the counters."""
        total_time = self.average_duration_ms * self.total_attempts + duration_ms
        self.total_attempts += 1
        if success:
            self.successes += 1
        else:
            self.failures += 1
        self.last_duration_ms = duration_ms
        self.last_attempt_at = attempted_at
        self.average_duration_ms = total_time / self.total_attempts

    @property
    def success_rate(self) -> float:
        if self.total_attempts == 0:
            return 0.0
        return self.successes / self.total_attempts

    def snapshot(self) -> "TransferMetrics":
        return replace(self)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_attempts": self.total_attempts,
            "successes": self.successes,
            "failures": self.failures,
            "last_duration_ms": self.last_duration_ms,
            "last_attempt_at": self.last_attempt_at.isoformat() if self.last_attempt_at else None,
            "average_duration_ms": self.average_duration_ms,
        }
