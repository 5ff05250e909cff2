"""Tests for chunk sizing strategies."""
import pytest
from tusupload.core.upload.strategies.chunking import (
    AdaptiveChunkSizer,
    FixedChunkSizer
)
from tusupload.core.constants import MIN_CHUNK, MAX_CHUNK, INITIAL_CHUNK


class TestAdaptiveChunkSizer:
    """Test suite for AdaptiveChunkSizer."""

    @pytest.fixture
    def sizer(self):
        """Create sizer instance."""
        return AdaptiveChunkSizer()

    def test_initial_size(self, sizer):
        """Test default initial chunk size."""
        assert sizer.initial_size == 262144 == INITIAL_CHUNK

    @pytest.mark.parametrize("current,elapsed,expected", [
        (262144, 0.25, 524288),
        (1048576, 0.1, 1048576),
        (262144, 0.9, 131072),
        (65536, 0.9, 65536),
        (262144, 0.5, 262144),
    ])
    def test_sizing_table(self, sizer, current, elapsed, expected):
        """Test documented sizing decisions."""
        assert sizer.next_size(current, elapsed) == expected

    def test_growth_clamped_to_max(self, sizer):
        """Test doubling never passes the upper bound."""
        assert sizer.next_size(786432, 0.1) == MAX_CHUNK

    def test_shrink_clamped_to_min(self, sizer):
        """Test halving never goes below the lower bound."""
        assert sizer.next_size(98304, 2.0) == MIN_CHUNK

    def test_thresholds_are_exclusive(self, sizer):
        """Test latencies exactly on a threshold leave size unchanged."""
        assert sizer.next_size(262144, 0.3) == 262144
        assert sizer.next_size(262144, 0.8) == 262144

    def test_repeated_fast_chunks_reach_max(self, sizer):
        """Test size converges to the maximum on a fast link."""
        size = sizer.initial_size
        for _ in range(10):
            size = sizer.next_size(size, 0.05)
        assert size == MAX_CHUNK

    def test_repeated_slow_chunks_reach_min(self, sizer):
        """Test size converges to the minimum on a slow link."""
        size = sizer.initial_size
        for _ in range(10):
            size = sizer.next_size(size, 1.5)
        assert size == MIN_CHUNK

    def test_custom_bounds(self):
        """Test custom bounds and thresholds."""
        sizer = AdaptiveChunkSizer(
            initial_size=1000, min_size=500, max_size=1500,
            fast_threshold=0.1, slow_threshold=0.2
        )
        assert sizer.next_size(1000, 0.05) == 1500
        assert sizer.next_size(1000, 0.15) == 1000
        assert sizer.next_size(1000, 0.25) == 500

    def test_invalid_bounds(self):
        """Test inconsistent bounds are rejected."""
        with pytest.raises(ValueError):
            AdaptiveChunkSizer(min_size=2048, max_size=1024, initial_size=1024)

    def test_initial_outside_bounds(self):
        """Test initial size outside the bounds is rejected."""
        with pytest.raises(ValueError):
            AdaptiveChunkSizer(initial_size=10)


class TestFixedChunkSizer:
    """Test suite for FixedChunkSizer."""

    def test_size_never_changes(self):
        """Test latency is ignored."""
        sizer = FixedChunkSizer(100000)

        assert sizer.initial_size == 100000
        assert sizer.next_size(100000, 0.01) == 100000
        assert sizer.next_size(100000, 5.0) == 100000

    def test_invalid_size(self):
        """Test zero chunk size raises error."""
        with pytest.raises(ValueError, match="positive"):
            FixedChunkSizer(0)
