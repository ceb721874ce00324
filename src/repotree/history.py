"""Recent-repository history backed by an injected key-value store.

The history is a side concern of the tree core, so the storage is a collaborator
passed in by the caller rather than a module-level singleton. Stores are append-only;
deduplication and the length cap are applied when the history is read.
"""

import json
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

from repotree.types import PathType

MAX_HISTORY_ITEMS = 5


@dataclass(frozen=True)
class HistoryEntry:
    """A repository URL and when it was last visited.

    Attributes:
        url (str): The repository URL.
        timestamp (int): Milliseconds since the epoch.
    """

    url: str
    timestamp: int

    def to_dict(self) -> Dict[str, object]:
        return {"url": self.url, "timestamp": self.timestamp}


class HistoryStore(ABC):
    """Abstract storage for history entries."""

    @abstractmethod
    def load(self) -> List[HistoryEntry]:
        """Return every stored entry."""
        pass

    @abstractmethod
    def append(self, entry: HistoryEntry) -> None:
        """Persist one entry."""
        pass


class InMemoryHistoryStore(HistoryStore):
    """History store that keeps entries in a list for the lifetime of the object."""

    def __init__(self) -> None:
        self._entries: List[HistoryEntry] = []

    def load(self) -> List[HistoryEntry]:
        return list(self._entries)

    def append(self, entry: HistoryEntry) -> None:
        self._entries.append(entry)


class JSONFileHistoryStore(HistoryStore):
    """History store persisted as a JSON list of ``{"url", "timestamp"}`` objects.

    A missing file reads as an empty history. The file is trimmed to ``max_entries``
    newest entries on every append so it cannot grow without bound.

    Attributes:
        path (Path): Location of the JSON file.
        max_entries (int): Maximum number of entries kept on disk.
    """

    def __init__(self, path: PathType, max_entries: int = 50) -> None:
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self.path = Path(path)
        self.max_entries = max_entries

    def load(self) -> List[HistoryEntry]:
        """Read every entry from disk.

        Raises:
            ValueError: If the file is not a JSON list of history objects.
        """
        if not self.path.exists():
            return []
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ValueError(f"Corrupt history file {self.path}: {e}")
        if not isinstance(data, list):
            raise ValueError(f"Corrupt history file {self.path}: expected a list")

        entries = []
        for item in data:
            if not isinstance(item, dict) or not isinstance(item.get("url"), str):
                raise ValueError(f"Corrupt history file {self.path}: invalid entry {item!r}")
            timestamp = item.get("timestamp", 0)
            if isinstance(timestamp, bool) or not isinstance(timestamp, (int, float)):
                raise ValueError(f"Corrupt history file {self.path}: invalid timestamp {timestamp!r}")
            entries.append(HistoryEntry(item["url"], int(timestamp)))
        return entries

    def append(self, entry: HistoryEntry) -> None:
        entries = self.load()
        entries.append(entry)
        entries = sorted(entries, key=lambda e: e.timestamp)[-self.max_entries :]
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps([e.to_dict() for e in entries], indent=2), encoding="utf-8")


class RecentRepositories:
    """The most recently visited repositories, newest first.

    Example:
        >>> recent = RecentRepositories(InMemoryHistoryStore(), max_items=2)
        >>> recent.record("https://github.com/a/one", timestamp=1)
        >>> recent.record("https://github.com/a/two", timestamp=2)
        >>> recent.record("https://github.com/a/one", timestamp=3)
        >>> recent.record("https://github.com/a/three", timestamp=4)
        >>> recent.recent()
        ['https://github.com/a/three', 'https://github.com/a/one']
    """

    def __init__(self, store: HistoryStore, max_items: int = MAX_HISTORY_ITEMS) -> None:
        if max_items < 1:
            raise ValueError("max_items must be at least 1")
        self.store = store
        self.max_items = max_items

    def record(self, url: str, timestamp: Optional[int] = None) -> None:
        """Record a visit to ``url``; the timestamp defaults to now."""
        if timestamp is None:
            timestamp = int(time.time() * 1000)
        self.store.append(HistoryEntry(url, timestamp))

    def recent(self) -> List[str]:
        """URLs newest first, each listed once, capped at ``max_items``."""
        urls: List[str] = []
        # Among equal timestamps, later appends come first.
        for entry in reversed(sorted(self.store.load(), key=lambda e: e.timestamp)):
            if entry.url not in urls:
                urls.append(entry.url)
            if len(urls) == self.max_items:
                break
        return urls
