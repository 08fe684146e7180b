"""Tests for markdown_blog/data/statistics.py module."""

from markdown_blog.data import CacheStatistics


class TestCacheStatistics:
    """Tests for CacheStatistics counters."""

    def test_initial_state(self) -> None:
        """Test counters start at zero."""
        stats = CacheStatistics()
        assert stats.total_requests == 0
        assert stats.hit_rate == 0.0

    def test_hit_rate(self) -> None:
        """Test the hit rate is hits over requests, in percent."""
        stats = CacheStatistics()
        for _ in range(3):
            stats.record_hit(bytes_read=10)
        stats.record_miss()
        assert stats.hit_rate == 75.0
        assert stats.total_bytes_read == 30

    def test_counters(self) -> None:
        """Test set, delete, eviction and error counters."""
        stats = CacheStatistics()
        stats.record_set(100)
        stats.record_delete()
        stats.record_eviction(count=4)
        stats.record_error()
        assert (stats.sets, stats.total_bytes_written) == (1, 100)
        assert (stats.deletes, stats.evictions, stats.errors) == (1, 4, 1)

    def test_to_dict_and_reset(self) -> None:
        """Test dictionary export and reset."""
        stats = CacheStatistics()
        stats.record_hit()
        data = stats.to_dict()
        assert data["hits"] == 1
        assert data["hit_rate"] == "100.00%"
        stats.reset()
        assert stats.to_dict()["hits"] == 0
