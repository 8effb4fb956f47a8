from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

from cartlink.services.progress import ProgressTracker, is_tty_enabled


def test_is_tty_enabled_returns_stdout_isatty():
    with patch("sys.stdout.isatty", return_value=True):
        assert is_tty_enabled() is True
    with patch("sys.stdout.isatty", return_value=False):
        assert is_tty_enabled() is False


class TestProgressTracker:
    def test_init_with_tty_enabled(self):
        with patch("cartlink.services.progress.is_tty_enabled", return_value=True), \
             patch("cartlink.services.progress.tqdm") as mock_tqdm:
            tracker = ProgressTracker(3, description="Building cart links")
            assert tracker.enabled is True
            mock_tqdm.assert_called_once_with(total=3, desc="Building cart links", unit="file")

    def test_file_cycle_updates_bar(self):
        with patch("cartlink.services.progress.is_tty_enabled", return_value=True), \
             patch("cartlink.services.progress.tqdm") as mock_tqdm:
            pbar = mock_tqdm.return_value
            with ProgressTracker(1, description="Run") as tracker:
                tracker.start_file(Path("data/order.csv"))
                pbar.set_description.assert_called_with("Run (order.csv)")
                tracker.set_postfix(success=1, failed=0, items=3)
                pbar.set_postfix.assert_called_once_with(success=1, failed=0, items=3)
                tracker.finish_file(success=True)
                pbar.update.assert_called_once_with(1)
                assert tracker.current_file == 1
            pbar.close.assert_called_once()
            assert tracker.pbar is None

    def test_disabled_without_tty(self):
        with patch("cartlink.services.progress.is_tty_enabled", return_value=False), \
             patch("cartlink.services.progress.tqdm") as mock_tqdm:
            with ProgressTracker(2) as tracker:
                tracker.start_file(Path("a.csv"))
                tracker.set_postfix(success=0)
                tracker.finish_file(success=False)
            mock_tqdm.assert_not_called()
            assert tracker.pbar is None
            assert tracker.current_file == 1
