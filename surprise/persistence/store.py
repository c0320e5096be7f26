"""
State Store - Saves the session blob to local disk.

The store:
- Holds one JSON file (the whole session)
- Is written after every mutation, read once at startup
- Treats a missing file as "no saved game"
- Never raises on bad content: a corrupt file loads as defaults
"""

from __future__ import annotations
import json
import logging
import os
from pathlib import Path
from typing import Any, Protocol

from .schema import StateBlob, parse_blob

logger = logging.getLogger(__name__)


class StateStore(Protocol):
    """Anything that can load, save and clear the session blob."""

    def load(self) -> StateBlob | None:
        ...

    def save(self, blob: dict[str, Any]) -> None:
        ...

    def clear(self) -> None:
        ...


class JsonFileStore:
    """
    File-based store for the session blob.

    Usage:
        store = JsonFileStore("~/.surprise/state.json")
        blob = store.load()       # None when nothing is saved
        store.save(session.snapshot())
    """

    def __init__(self, path: str | Path | None = None):
        if path is None:
            path = Path.home() / ".surprise" / "state.json"
        self.path = Path(path).expanduser()

    def load(self) -> StateBlob | None:
        """
        Load the saved blob, or None if nothing was saved.

        An unreadable file (bad encoding or bad JSON) loads as defaults.
        """
        if not self.path.exists():
            return None

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except (OSError, ValueError) as e:
            logger.error("Failed to load state from %s: %s", self.path, e)
            return StateBlob()

        return parse_blob(raw)

    def save(self, blob: dict[str, Any]) -> None:
        """Write the blob, replacing the previous file atomically."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(blob, f, indent=2)
        os.replace(tmp_path, self.path)

    def clear(self) -> None:
        """Delete the saved blob."""
        self.path.unlink(missing_ok=True)
