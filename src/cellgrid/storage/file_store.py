"""
Local file snapshot store.

Each key is stored as ``<directory>/<key>.json``. Writes go to a temporary
file that is then renamed over the target, so a failed save never leaves a
half-written snapshot behind.
"""

import logging
import os
import re
from pathlib import Path
from typing import Optional, Union

from cellgrid.exceptions import PersistenceError

logger = logging.getLogger(__name__)

_KEY_RE = re.compile(r"^[A-Za-z0-9_.-]+$")


class JsonFileStore:
    """SnapshotStore that keeps one JSON file per key.

    Attributes:
        directory: Folder holding the snapshot files (created on first save)
    """

    def __init__(self, directory: Union[str, os.PathLike]) -> None:
        self.directory = Path(directory)

    def path_for(self, key: str) -> Path:
        """Return the file path used for key.

        Raises:
            PersistenceError: If key is not a plain file-name-safe identifier
        """
        if not _KEY_RE.match(key) or key in (".", ".."):
            raise PersistenceError(f"Invalid storage key: {key!r}")
        return self.directory / f"{key}.json"

    def get(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as e:
            raise PersistenceError(f"Failed to read snapshot '{path}': {e}") from e

    def set(self, key: str, payload: str) -> None:
        path = self.path_for(key)
        tmp_path = path.with_name(path.name + ".tmp")
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(payload, encoding="utf-8")
            os.replace(tmp_path, path)
        except OSError as e:
            raise PersistenceError(f"Failed to write snapshot '{path}': {e}") from e
        logger.debug("Wrote %d bytes to %s", len(payload), path)

    def __repr__(self) -> str:
        return f"JsonFileStore({str(self.directory)!r})"
