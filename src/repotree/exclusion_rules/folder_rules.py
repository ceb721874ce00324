"""Exclusion of whole folders by name or relative path prefix."""

from typing import AbstractSet, FrozenSet, Iterable, Optional

from .base_rules import BaseExclusionRules


def _normalize_exclusion(entry: object) -> Optional[str]:
    # Surrounding slashes are tolerated; anything empty or non-string has no effect.
    if not isinstance(entry, str):
        return None
    entry = entry.strip("/")
    return entry or None


def is_excluded(path: str, exclusions: Iterable[str]) -> bool:
    """Decide whether a path falls under one of the excluded roots.

    A path is excluded when it equals an exclusion entry or starts with the entry
    followed by ``/``. Matching is on whole path components, so excluding ``test``
    leaves ``testing`` alone. Empty or malformed entries never exclude anything.

    Args:
        path: Slash-separated path relative to the repository root.
        exclusions: Folder names or relative path prefixes.

    Returns:
        True if the path is the excluded root itself or lies beneath it.

    Example:
        >>> is_excluded("node_modules/react/index.js", {"node_modules"})
        True
        >>> is_excluded("testing/unit.py", {"test"})
        False
        >>> is_excluded("a/c", ["a/c/"])
        True
        >>> is_excluded("a/b.txt", ["", "/"])
        False
    """
    for entry in exclusions:
        root = _normalize_exclusion(entry)
        if root is None:
            continue
        if path == root or path.startswith(root + "/"):
            return True
    return False


class FolderExclusionRules(BaseExclusionRules):
    """Exclusion rules backed by a set of excluded folder roots.

    This is the caller-owned exclusion set: entries may be added or removed between
    builds, and excluding a directory implicitly excludes its entire subtree because
    every descendant path shares the excluded prefix.

    Attributes:
        folders (FrozenSet[str]): Snapshot of the configured exclusion entries.

    Example:
        >>> rules = FolderExclusionRules(["node_modules", ".git"])
        >>> rules.exclude(".git/HEAD")
        True
        >>> rules.add_rule("dist")
        >>> rules.exclude("dist")
        True
        >>> rules.remove_rule("dist")
        True
        >>> rules.exclude("dist")
        False
    """

    def __init__(self, folders: Optional[Iterable[str]] = None):
        self._folders = set(folders) if folders is not None else set()

    @property
    def folders(self) -> FrozenSet[str]:
        return frozenset(self._folders)

    def exclude(self, path: str) -> bool:
        return is_excluded(path, self._folders)

    def add_rule(self, rule: str) -> None:
        """Add a folder name or relative path prefix to the exclusion set."""
        self._folders.add(rule)

    def remove_rule(self, rule: str) -> bool:
        """Remove an entry from the exclusion set.

        Returns:
            True if the entry was present and removed, False otherwise.
        """
        try:
            self._folders.remove(rule)
            return True
        except KeyError:
            return False

    def replace(self, folders: AbstractSet[str]) -> None:
        """Replace the whole exclusion set."""
        self._folders = set(folders)

    def has_rules(self) -> bool:
        return any(_normalize_exclusion(entry) is not None for entry in self._folders)
