"""Unit tests for request latency tracking."""

from fruitnut.api.middleware.latency_logging import LatencyStats


class TestLatencyStats:
    """Tests for LatencyStats."""

    def test_empty(self) -> None:
        assert LatencyStats().get_stats() == {"total_requests": 0, "avg_latency_ms": 0, "p95_latency_ms": 0}

    def test_aggregates(self) -> None:
        stats = LatencyStats()
        for latency in range(1, 101):
            stats.record("/farmer/shifts", float(latency))

        result = stats.get_stats()

        assert result["total_requests"] == 100
        assert result["avg_latency_ms"] == 50.5
        assert result["p95_latency_ms"] == 96.0

    def test_ids_grouped_by_screen(self) -> None:
        stats = LatencyStats()
        stats.record("/farmer/shifts/330e8400-e29b-41d4-a716-446655440000/signups", 10.0)
        stats.record("/farmer/shifts/330e8400-e29b-41d4-a716-446655440001/signups", 20.0)

        by_path = stats.get_stats_by_path()

        assert by_path == {"/farmer/shifts/{id}/signups": {"count": 2, "avg_ms": 15.0}}

    def test_keeps_most_recent_samples(self) -> None:
        stats = LatencyStats(max_samples=2)
        stats.record("/home", 100.0)
        stats.record("/home", 1.0)
        stats.record("/home", 3.0)

        assert stats.get_stats()["total_requests"] == 2
        assert stats.get_stats()["avg_latency_ms"] == 2.0
