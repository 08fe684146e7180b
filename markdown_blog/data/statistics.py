"""Counters for cache operations, kept next to the cache they describe."""

from dataclasses import dataclass, field, fields
from threading import Lock

from markdown_blog.utils.helpers import utc_now_str

COUNTER_NAMES = (
    "hits",
    "misses",
    "sets",
    "deletes",
    "evictions",
    "errors",
    "total_bytes_written",
    "total_bytes_read",
)


@dataclass
class CacheStatistics:
    """
    Running totals of what a ``BlogCacheManager`` did since creation or reset.

    Unlike the snapshot returned by ``get_statistics()``, which is computed
    from the entries currently held, these counters remember misses and
    evictions, so ``hit_rate`` here is the real hits / lookups ratio.
    """

    hits: int = 0
    misses: int = 0
    sets: int = 0
    deletes: int = 0
    evictions: int = 0
    errors: int = 0
    total_bytes_written: int = 0
    total_bytes_read: int = 0
    created_at: str = field(default_factory=utc_now_str)
    last_updated_at: str = field(default_factory=utc_now_str)
    _lock: Lock = field(default_factory=Lock, init=False, repr=False, compare=False)

    def _bump(self, **deltas: int) -> None:
        with self._lock:
            for name, delta in deltas.items():
                setattr(self, name, getattr(self, name) + delta)
            self.last_updated_at = utc_now_str()

    def record_hit(self, bytes_read: int = 0) -> None:
        """Count a lookup that returned a live entry of ``bytes_read`` bytes."""
        self._bump(hits=1, total_bytes_read=bytes_read)

    def record_miss(self) -> None:
        self._bump(misses=1)

    def record_set(self, bytes_written: int = 0) -> None:
        """Count an entry persisted to the file tier."""
        self._bump(sets=1, total_bytes_written=bytes_written)

    def record_delete(self, count: int = 1) -> None:
        self._bump(deletes=count)

    def record_eviction(self, count: int = 1) -> None:
        self._bump(evictions=count)

    def record_error(self) -> None:
        self._bump(errors=1)

    @property
    def total_requests(self) -> int:
        return self.hits + self.misses

    @property
    def hit_rate(self) -> float:
        """Hits over lookups, as a percentage (0 when nothing was looked up)."""
        total = self.total_requests
        return self.hits / total * 100 if total else 0.0

    def reset(self) -> None:
        with self._lock:
            for name in COUNTER_NAMES:
                setattr(self, name, 0)
            self.created_at = self.last_updated_at = utc_now_str()

    def to_dict(self) -> dict[str, int | float | str]:
        """Counters plus derived totals, shaped for ``CacheStatisticsData.operations``."""
        with self._lock:
            data: dict[str, int | float | str] = {
                f.name: getattr(self, f.name) for f in fields(self) if not f.name.startswith("_")
            }
        data["hit_rate"] = f"{self.hit_rate:.2f}%"
        data["total_requests"] = self.total_requests
        return data
