"""Tests for local-only state persistence."""

import json
from pathlib import Path

from sitesync.state import (
    EMAIL_CAPTURE_MARKER,
    STATE_FILENAME,
    LocalState,
    clear_local_state,
    load_local_state,
    save_local_state,
)


class TestLocalState:
    def test_mark_and_query(self):
        state = LocalState()
        assert not state.has_marker(EMAIL_CAPTURE_MARKER)
        marker = state.mark(EMAIL_CAPTURE_MARKER, "dismissed")
        assert state.has_marker(EMAIL_CAPTURE_MARKER)
        assert marker.status == "dismissed"
        assert marker.timestamp.tzinfo is not None

    def test_mark_replaces(self):
        state = LocalState()
        state.mark(EMAIL_CAPTURE_MARKER, "dismissed")
        state.mark(EMAIL_CAPTURE_MARKER, "subscribed")
        assert state.markers[EMAIL_CAPTURE_MARKER].status == "subscribed"


class TestStateIO:
    def test_missing_file_is_empty(self, tmp_path: Path):
        assert load_local_state(tmp_path) == LocalState()

    def test_round_trip(self, tmp_path: Path):
        state = LocalState()
        state.mark(EMAIL_CAPTURE_MARKER, "subscribed")
        save_local_state(state, tmp_path)

        data = json.loads((tmp_path / STATE_FILENAME).read_text(encoding="utf-8"))
        assert data["markers"][EMAIL_CAPTURE_MARKER]["status"] == "subscribed"
        assert load_local_state(tmp_path).markers[EMAIL_CAPTURE_MARKER].status == "subscribed"

    def test_corrupt_file_starts_fresh(self, tmp_path: Path):
        (tmp_path / STATE_FILENAME).write_text("{oops", encoding="utf-8")
        assert load_local_state(tmp_path) == LocalState()

    def test_save_creates_directory(self, tmp_path: Path):
        target = tmp_path / "nested" / "state"
        save_local_state(LocalState(), target)
        assert (target / STATE_FILENAME).exists()

    def test_clear(self, tmp_path: Path):
        save_local_state(LocalState(), tmp_path)
        assert clear_local_state(tmp_path) is True
        assert not (tmp_path / STATE_FILENAME).exists()
        assert clear_local_state(tmp_path) is False
