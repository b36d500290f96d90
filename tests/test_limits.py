"""Tests for limit helpers and DepthGuard."""

from __future__ import annotations

import logging
import sys

import pytest
from hypothesis import given
from hypothesis import strategies as st

from streamcomb.constants import MAX_JSON_DEPTH
from streamcomb.core import DepthGuard, check_source_size, depth_clamp, resolve_limit
from streamcomb.diagnostics import DiagnosticCode, InputLimitExceededError

# ============================================================================
# DEPTH CLAMP
# ============================================================================


class TestDepthClamp:
    """depth_clamp keeps depths within the interpreter stack."""

    def test_within_limit_unchanged(self) -> None:
        """Small depths pass through."""
        assert depth_clamp(10) == 10

    def test_clamped_with_frames_per_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Frames per level divide the usable stack."""
        monkeypatch.setattr(sys, "getrecursionlimit", lambda: 1000)

        assert depth_clamp(10, frames_per_level=20) == 10
        assert depth_clamp(100, frames_per_level=20) == 47

    def test_clamping_logs_warning(
        self, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Clamping is reported."""
        monkeypatch.setattr(sys, "getrecursionlimit", lambda: 150)

        with caplog.at_level(logging.WARNING, logger="streamcomb.core.limits"):
            assert depth_clamp(500) == 100

        assert any("Clamping" in record.getMessage() for record in caplog.records)

    def test_never_below_one(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """A tiny recursion limit still allows one level."""
        monkeypatch.setattr(sys, "getrecursionlimit", lambda: 10)

        assert depth_clamp(5, frames_per_level=20) == 1

    @given(depth=st.integers(min_value=1, max_value=100_000))
    def test_result_bounded(self, depth: int) -> None:
        """PROPERTY: 1 <= depth_clamp(d) <= d."""
        assert 1 <= depth_clamp(depth) <= depth


# ============================================================================
# DEPTH GUARD
# ============================================================================


class TestDepthGuard:
    """DepthGuard counts nesting as a context manager."""

    def test_default_limit(self) -> None:
        """The default comes from the constants."""
        assert DepthGuard().max_depth == MAX_JSON_DEPTH

    def test_tracks_depth(self) -> None:
        """Depth goes up on enter and down on exit."""
        guard = DepthGuard(max_depth=3)

        with guard:
            with guard:
                assert guard.depth == 2
            assert guard.depth == 1
        assert guard.depth == 0

    def test_exceeding_raises(self) -> None:
        """Entering past max_depth raises InputLimitExceededError."""
        guard = DepthGuard(max_depth=2)

        with guard, guard:
            with pytest.raises(InputLimitExceededError) as exc_info:
                guard.__enter__()

            assert guard.depth == 2

        assert exc_info.value.limit == 2
        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code == DiagnosticCode.JSON_DEPTH_EXCEEDED

    def test_depth_restored_after_exception(self) -> None:
        """An exception inside the block still decrements."""
        guard = DepthGuard(max_depth=5)

        with pytest.raises(RuntimeError):
            with guard:
                raise RuntimeError

        assert guard.depth == 0


# ============================================================================
# SIZE LIMITS
# ============================================================================


class TestResolveLimit:
    """resolve_limit applies keyword overrides."""

    def test_none_selects_default(self) -> None:
        """None means the module default."""
        assert resolve_limit(None, 64) == 64

    def test_override(self) -> None:
        """Explicit values win, including 0."""
        assert resolve_limit(8, 64) == 8
        assert resolve_limit(0, 64) == 0

    def test_negative_invalid(self) -> None:
        """Negative limits are refused."""
        with pytest.raises(ValueError, match="Limit must be >= 0"):
            resolve_limit(-1, 64)


class TestCheckSourceSize:
    """check_source_size guards complete inputs."""

    def test_within_limit(self) -> None:
        """Sizes up to the limit pass."""
        check_source_size(10, 10)

    def test_over_limit(self) -> None:
        """Larger sizes raise."""
        with pytest.raises(InputLimitExceededError) as exc_info:
            check_source_size(11, 10)

        assert exc_info.value.limit == 10

    def test_zero_disables(self) -> None:
        """A zero limit never raises."""
        check_source_size(10**9, 0)
