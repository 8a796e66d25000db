"""Tests for progress tracker."""

import time
from unittest.mock import Mock

from osu_sync.core.sync import ProgressPhase, ProgressTracker, ProgressUpdate


class TestProgressUpdate:
    """Test ProgressUpdate dataclass."""

    def test_percentage(self):
        """Test percentage property calculation."""
        update = ProgressUpdate(phase=ProgressPhase.DOWNLOADING, current=25, total=100)
        assert update.percentage == 25.0
        assert update.message == ""

    def test_percentage_zero_total(self):
        """Test percentage with zero total."""
        update = ProgressUpdate(phase=ProgressPhase.DOWNLOADING, current=3, total=0)
        assert update.percentage == 0.0

    def test_is_complete(self):
        """Test is_complete at, below and beyond the total."""
        done = ProgressUpdate(phase=ProgressPhase.DOWNLOADING, current=100, total=100)
        partial = ProgressUpdate(phase=ProgressPhase.DOWNLOADING, current=99, total=100)
        beyond = ProgressUpdate(phase=ProgressPhase.DOWNLOADING, current=101, total=100)

        assert done.is_complete is True
        assert partial.is_complete is False
        assert beyond.is_complete is True

    def test_str(self):
        """Test string representation."""
        update = ProgressUpdate(
            phase=ProgressPhase.DOWNLOADING,
            current=42.0,
            total=100,
            message="Copying 1234 Artist - Title",
        )
        result = str(update)

        assert "[downloading]" in result
        assert "42/100" in result
        assert "42.0%" in result
        assert "Copying 1234 Artist - Title" in result


class TestProgressTracker:
    """Test ProgressTracker class."""

    def test_start_notifies(self):
        """Test that starting a phase notifies the callback."""
        callback = Mock()
        tracker = ProgressTracker(callback=callback)

        tracker.start(ProgressPhase.DOWNLOADING, total=100, message="Download started")

        assert tracker.current_phase == ProgressPhase.DOWNLOADING
        update = callback.call_args[0][0]
        assert update.current == 0
        assert update.total == 100
        assert update.message == "Download started"

    def test_update_throttled(self):
        """Test that updates inside the interval are dropped."""
        callback = Mock()
        tracker = ProgressTracker(callback=callback, update_interval=10.0)
        tracker.start(ProgressPhase.DOWNLOADING, total=100)
        callback.reset_mock()

        tracker.update(10)
        tracker.update(20)

        callback.assert_not_called()

    def test_update_after_interval(self):
        """Test that an update goes through once the interval passed."""
        callback = Mock()
        tracker = ProgressTracker(callback=callback, update_interval=0.01)
        tracker.start(ProgressPhase.DOWNLOADING, total=100)
        callback.reset_mock()

        time.sleep(0.02)
        tracker.update(50, message="Copying 1 A - B")

        update = callback.call_args[0][0]
        assert update.current == 50
        assert update.message == "Copying 1 A - B"

    def test_complete_bypasses_throttle(self):
        """Test that completion is always reported."""
        callback = Mock()
        tracker = ProgressTracker(callback=callback, update_interval=10.0)
        tracker.start(ProgressPhase.DOWNLOADING, total=100)
        tracker.update(30)
        callback.reset_mock()

        tracker.complete("Download finished")

        update = callback.call_args[0][0]
        assert update.is_complete is True
        assert update.message == "Download finished"

    def test_error_reports_error_phase(self):
        """Test error reporting keeps the progress reached so far."""
        callback = Mock()
        tracker = ProgressTracker(callback=callback, update_interval=0.0)
        tracker.start(ProgressPhase.DOWNLOADING, total=100)
        tracker.update(40)

        tracker.error("disk full")

        update = callback.call_args[0][0]
        assert update.phase == ProgressPhase.ERROR
        assert update.current == 40
        assert update.message == "disk full"

    def test_error_without_phase_is_silent(self):
        """Test that an error before any phase is not reported."""
        callback = Mock()
        tracker = ProgressTracker(callback=callback)

        tracker.error("Nothing started")

        callback.assert_not_called()

    def test_callback_exception_is_contained(self):
        """Test that a failing callback does not break tracking."""
        tracker = ProgressTracker(callback=Mock(side_effect=RuntimeError("display")))

        tracker.start(ProgressPhase.DOWNLOADING, total=100)
        tracker.complete()

        assert tracker.current_phase == ProgressPhase.DOWNLOADING

    def test_reset(self):
        """Test that reset forgets the current phase and counters."""
        callback = Mock()
        tracker = ProgressTracker(callback=callback, update_interval=10.0)
        tracker.start(ProgressPhase.DOWNLOADING, total=100)
        tracker.update(80)

        tracker.reset()

        assert tracker.current_phase is None
        tracker.error("after reset")
        assert callback.call_count == 1
