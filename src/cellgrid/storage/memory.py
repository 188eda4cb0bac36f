"""In-process snapshot store."""

from typing import Dict, Optional


class MemoryStore:
    """Dict-backed SnapshotStore; contents live as long as the object."""

    def __init__(self) -> None:
        self._data: Dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, payload: str) -> None:
        self._data[key] = payload

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __repr__(self) -> str:
        return f"MemoryStore(keys={sorted(self._data)!r})"
