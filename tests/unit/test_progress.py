from __future__ import annotations

from pathlib import Path
from unittest.mock import Mock, patch

from listing_import.services.progress import ProgressTracker, is_tty_enabled

PATCH_TTY = "listing_import.services.progress.is_tty_enabled"
PATCH_TQDM = "listing_import.services.progress.tqdm"


def test_is_tty_enabled_returns_stdout_isatty():
    with patch("sys.stdout.isatty", return_value=True):
        assert is_tty_enabled() is True
    with patch("sys.stdout.isatty", return_value=False):
        assert is_tty_enabled() is False


class TestProgressTracker:
    def test_init_with_tty_enabled(self):
        with patch(PATCH_TTY, return_value=True), patch(PATCH_TQDM) as mock_tqdm:
            tracker = ProgressTracker(5, description="Listings")
            assert tracker.enabled is True
            assert tracker.current_file == 0
            mock_tqdm.assert_called_once_with(
                total=5,
                desc="Listings",
                unit="file",
                disable=False,
                leave=True,
                position=0,
                ncols=80,
                ascii=True,
            )

    def test_no_bar_without_tty(self):
        with patch(PATCH_TTY, return_value=False), patch(PATCH_TQDM) as mock_tqdm:
            tracker = ProgressTracker(5)
            tracker.start_file(Path("abt_march.txt"))
            tracker.set_postfix(rows=3, blocking=0)
            tracker.finish_file()
            tracker.close()
            assert tracker.pbar is None
            assert tracker.current_file == 1
            mock_tqdm.assert_not_called()

    def test_file_cycle_updates_bar(self):
        mock_pbar = Mock()
        with patch(PATCH_TTY, return_value=True), patch(PATCH_TQDM, return_value=mock_pbar):
            tracker = ProgressTracker(2, description="Parsing listings")
            tracker.start_file(Path("data/flu_clinic.txt"))
            mock_pbar.set_description.assert_called_once_with("Parsing listings (flu_clinic.txt)")
            tracker.set_postfix(rows=2, blocking=1)
            mock_pbar.set_postfix.assert_called_once_with(rows=2, blocking=1)
            tracker.finish_file()
            mock_pbar.update.assert_called_once_with(1)
            assert mock_pbar.set_description.call_args.args == ("Parsing listings",)

    def test_context_manager_closes_once(self):
        mock_pbar = Mock()
        with patch(PATCH_TTY, return_value=True), patch(PATCH_TQDM, return_value=mock_pbar):
            with ProgressTracker(1) as tracker:
                assert isinstance(tracker, ProgressTracker)
            tracker.close()
            mock_pbar.close.assert_called_once()
            assert tracker.pbar is None
