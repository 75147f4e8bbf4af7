"""In-memory cache of recent image generations."""

from collections import deque
from typing import Any

from .models import GenerationRecord

DEFAULT_CAPACITY = 5


class RecentGenerations:
    """Most-recent-first, capacity-bounded list of generation results.

    Index 0 is always the newest record. Once the cache is full, recording a
    new generation evicts the oldest one.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY):
        if capacity < 1:
            raise ValueError(f"capacity must be at least 1, got {capacity}")
        self._records: deque[GenerationRecord] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._records.maxlen  # type: ignore[return-value]

    def record(self, prompt: str, response: Any) -> GenerationRecord:
        """Insert a new generation at the front, evicting the tail when full."""
        generation = GenerationRecord(prompt=prompt, response=response)
        self._records.appendleft(generation)
        return generation

    def records(self) -> list[GenerationRecord]:
        """Snapshot of all cached generations, newest first."""
        return list(self._records)

    def get(self, index: int) -> GenerationRecord | None:
        """Look up a generation by position (0 = most recent)."""
        if 0 <= index < len(self._records):
            return self._records[index]
        return None

    def __len__(self) -> int:
        return len(self._records)
