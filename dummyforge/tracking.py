"""
Per-run generation state

UniquenessTracker and AutoIncrementRegistry live for exactly one
generate_records call; the engine builds fresh instances every run.
"""

from typing import Any, Callable, Dict, Optional, Set
import logging

from .errors import ErrorKind, create_error

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 100


class UniquenessTracker:
    """
    Remembers emitted values per field and retries duplicates

    Exhausting the retry ceiling is a hard failure: the tracker never
    falls back to suffixing or otherwise mutating a value.
    """

    def __init__(self, max_attempts: int = DEFAULT_MAX_ATTEMPTS):
        self.max_attempts = max_attempts
        self._seen: Dict[str, Set[Any]] = {}

    def ensure_unique(
        self,
        field_name: str,
        candidate: Any,
        regenerate: Callable[[], Any],
        field_type: Optional[str] = None,
    ) -> Any:
        """
        Return a value not yet emitted for this field

        Args:
            field_name: Field the value belongs to
            candidate: First generated value
            regenerate: Produces a new candidate with the same record context
            field_type: Field type, reported in the error context

        Returns:
            The candidate, or the first fresh regenerated value

        Raises:
            DummyForgeError: UniquenessExhausted after max_attempts retries
        """
        seen = self._seen.setdefault(field_name, set())

        if candidate not in seen:
            seen.add(candidate)
            return candidate

        for attempt in range(1, self.max_attempts + 1):
            candidate = regenerate()
            if candidate not in seen:
                logger.debug(f"Unique value for '{field_name}' found after {attempt} retries")
                seen.add(candidate)
                return candidate

        raise create_error(
            ErrorKind.UNIQUENESS_EXHAUSTED,
            f"Failed to generate unique value for {field_name}",
            {
                "field_name": field_name,
                "field_type": field_type,
                "attempts": self.max_attempts,
                "distinct_values": len(seen),
            },
        )

    def seen_count(self, field_name: str) -> int:
        return len(self._seen.get(field_name, ()))

    def reset(self):
        self._seen.clear()


class AutoIncrementRegistry:
    """Independent monotonic counters keyed by name"""

    def __init__(self):
        self._counters: Dict[str, int] = {}

    def next(self, key: str, start: int = 1, step: int = 1) -> int:
        """
        Current value of the counter, then advance it by step

        The first call for a key initializes the counter to start.
        """
        current = self._counters.get(key, start)
        self._counters[key] = current + step
        return current

    def reset(self):
        self._counters.clear()
