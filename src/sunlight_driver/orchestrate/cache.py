"""Thread-safe LRU cache for computed day curves."""

from __future__ import annotations

from collections import OrderedDict
from collections.abc import Callable
from dataclasses import dataclass
from threading import Lock

from sunlight_driver.orchestrate.batch import DayCurve


@dataclass(frozen=True)
class DayCurveKey:
    """Stable cache key for one day-curve request."""

    year: int
    month: int
    day: int
    latitude: float
    longitude: float
    step_minutes: int
    start_minute: int
    end_minute: int
    utc_offset_minutes: int


class DayCurveCache:
    """Bounded in-memory store of day curves with LRU eviction."""

    def __init__(self, max_entries: int = 64) -> None:
        """Initialize cache with positive capacity."""
        if max_entries <= 0:
            raise ValueError("max_entries must be positive")
        self._max_entries = max_entries
        self._lock = Lock()
        self._entries: OrderedDict[DayCurveKey, DayCurve] = OrderedDict()
        self.build_count = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def get_or_build(self, key: DayCurveKey, builder: Callable[[], DayCurve]) -> tuple[DayCurve, bool]:
        """Return cached curve for key, building once on miss."""
        with self._lock:
            existing = self._entries.get(key)
            if existing is not None:
                self._entries.move_to_end(key)
                return existing, False

            curve = builder()
            self._entries[key] = curve
            self.build_count += 1
            while len(self._entries) > self._max_entries:
                self._entries.popitem(last=False)
            return curve, True
