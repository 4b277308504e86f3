from __future__ import annotations

import logging
import threading
from datetime import datetime, timezone

_LOGGER = logging.getLogger(__name__)


class TokenUsageTracker:
    """Running token count across every model call made by the providers."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.total_tokens = 0
        self.by_operation: dict[str, int] = {}
        self.last_reset: datetime | None = None

    def record(self, operation: str, input_tokens: int, output_tokens: int) -> None:
        used = int(input_tokens or 0) + int(output_tokens or 0)
        with self._lock:
            self.total_tokens += used
            self.by_operation[operation] = self.by_operation.get(operation, 0) + used
            total = self.total_tokens
        _LOGGER.info(
            "token usage operation=%s input=%s output=%s total=%d running_total=%d",
            operation,
            input_tokens,
            output_tokens,
            used,
            total,
        )

    def reset(self) -> None:
        with self._lock:
            self.total_tokens = 0
            self.by_operation = {}
            self.last_reset = datetime.now(timezone.utc)

    def snapshot(self) -> dict[str, object]:
        with self._lock:
            return {
                "totalTokens": self.total_tokens,
                "byOperation": dict(self.by_operation),
                "lastReset": self.last_reset.isoformat() if self.last_reset else None,
            }
