"""Local-only state that never reaches the remote store.

Markers record one-off visitor decisions, such as whether the email
capture modal was dismissed or subscribed to.  ``reset_data`` wipes
the whole file.
"""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from pathlib import Path

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

STATE_FILENAME = ".sitesync-state.json"

EMAIL_CAPTURE_MARKER = "aurexis-email-capture"


class Marker(BaseModel):
    """A recorded outcome, e.g. ``dismissed`` or ``subscribed``."""

    status: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(tz=UTC))


class LocalState(BaseModel):
    """Named markers keyed by storage key."""

    markers: dict[str, Marker] = Field(default_factory=dict)

    def has_marker(self, key: str) -> bool:
        return key in self.markers

    def mark(self, key: str, status: str) -> Marker:
        """Record *status* under *key*, replacing any earlier marker."""
        marker = Marker(status=status)
        self.markers[key] = marker
        return marker


# ---------------------------------------------------------------------------
# State I/O
# ---------------------------------------------------------------------------


def load_local_state(state_dir: Path) -> LocalState:
    """Load local state from disk.

    Returns empty LocalState if file doesn't exist or is corrupt.
    """
    state_path = Path(state_dir) / STATE_FILENAME
    if not state_path.exists():
        return LocalState()
    try:
        data = json.loads(state_path.read_text(encoding="utf-8"))
        return LocalState.model_validate(data)
    except (json.JSONDecodeError, ValueError, KeyError):
        logger.warning("Corrupt local state at %s, starting fresh", state_path)
        return LocalState()


def save_local_state(state: LocalState, state_dir: Path) -> None:
    """Save local state to disk."""
    state_path = Path(state_dir) / STATE_FILENAME
    state_path.parent.mkdir(parents=True, exist_ok=True)
    state_path.write_text(state.model_dump_json(indent=2), encoding="utf-8")


def clear_local_state(state_dir: Path) -> bool:
    """Delete the local state file. Returns True if a file was removed."""
    state_path = Path(state_dir) / STATE_FILENAME
    if not state_path.exists():
        return False
    state_path.unlink()
    logger.info("Cleared local state at %s", state_path)
    return True
