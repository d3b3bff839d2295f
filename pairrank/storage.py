"""File-backed session persistence.

One JSON document per variant, named after the variant's storage key.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from .engine.state import AnyState, state_from_dict
from .engine.variants import VARIANT_PROFILES, Variant

logger = logging.getLogger(__name__)

STATE_DIR_ENV = "PAIRRANK_STATE_DIR"


def default_state_dir() -> Path:
    """``$PAIRRANK_STATE_DIR`` if set, else ``~/.pairrank``."""
    env = os.environ.get(STATE_DIR_ENV)
    if env:
        return Path(env)
    return Path.home() / ".pairrank"


class JSONStateStore:
    """Snapshots and restores session state as JSON files."""

    def __init__(self, directory: str | Path | None = None):
        self.directory = Path(directory) if directory is not None else default_state_dir()

    def path_for(self, variant: Variant) -> Path:
        return self.directory / f"{VARIANT_PROFILES[variant].storage_key}.json"

    def persist(self, state: AnyState) -> Path:
        """Write ``state`` under its variant's storage key.

        Raises:
            OSError: If the file cannot be written
        """
        path = self.path_for(state.variant)
        self.directory.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(state.to_dict(), indent=2), encoding='utf-8')
        logger.debug("Persisted %s state to %s", state.variant.value, path)
        return path

    def load_persisted(self, variant: Variant) -> AnyState | None:
        """Load the saved state for ``variant``.

        Returns:
            The state, or None when nothing usable is stored
        """
        path = self.path_for(variant)
        if not path.exists():
            return None

        try:
            data = json.loads(path.read_text(encoding='utf-8'))
            state = state_from_dict(data)
        except (OSError, ValueError, KeyError, TypeError, IndexError) as e:
            logger.warning("Ignoring unreadable state file %s: %s", path, e)
            return None

        if state.variant != variant:
            logger.warning(
                "State file %s holds %r data, expected %r - ignoring",
                path, state.variant.value, variant.value,
            )
            return None

        logger.debug("Loaded %s state from %s", variant.value, path)
        return state

    def clear(self, variant: Variant) -> bool:
        """Remove the saved state. Returns True if a file was removed."""
        path = self.path_for(variant)
        if path.exists():
            path.unlink()
            logger.debug("Removed %s", path)
            return True
        return False
