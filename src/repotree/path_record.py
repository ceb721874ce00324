"""Flat repository records and their normalization.

A listing from a source-control hosting API is a flat sequence of entries, each with a
slash-separated path, a kind, and (for files) an optional size. This module validates
and classifies those entries into immutable ``PathRecord`` values before any tree is
assembled from them.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Iterable, List, Optional, Union

from repotree.exceptions import InvalidPathError, InvalidRecordError
from repotree.types import NodeKind

_KIND_ALIASES = {
    "file": NodeKind.FILE,
    "blob": NodeKind.FILE,
    "dir": NodeKind.DIRECTORY,
    "directory": NodeKind.DIRECTORY,
    "tree": NodeKind.DIRECTORY,
}


@dataclass(frozen=True)
class PathRecord:
    """One validated entry of a flat repository listing.

    Records are normally created through ``normalize_record``, which guarantees that
    ``path`` is well formed and that directories carry no size.

    Attributes:
        path (str): Slash-separated path relative to the repository root.
        kind (NodeKind): Whether the entry is a file or a directory.
        size (Optional[int]): Size in bytes, only ever set for files.

    Example:
        >>> record = normalize_record("src/utils/helpers.py", "file", 120)
        >>> record.name
        'helpers.py'
        >>> record.parent_path
        'src/utils'
        >>> normalize_record("README.md", "blob").parent_path is None
        True
    """

    path: str
    kind: NodeKind
    size: Optional[int] = None

    @property
    def name(self) -> str:
        return self.path.rsplit("/", 1)[-1]

    @property
    def parent_path(self) -> Optional[str]:
        if "/" not in self.path:
            return None
        return self.path.rsplit("/", 1)[0]

    @property
    def is_dir(self) -> bool:
        return self.kind is NodeKind.DIRECTORY


def classify_kind(kind: Union[str, NodeKind], record: Any = None) -> NodeKind:
    """Map a kind name reported by a listing onto a ``NodeKind``.

    Args:
        kind: A ``NodeKind`` or one of "file", "blob", "dir", "directory", "tree"
            (case-insensitive).
        record: The raw record, attached to the error for context.

    Returns:
        The classified kind.

    Raises:
        InvalidRecordError: If the kind is not recognized.
    """
    if isinstance(kind, NodeKind):
        return kind
    if isinstance(kind, str):
        classified = _KIND_ALIASES.get(kind.strip().lower())
        if classified is not None:
            return classified
    raise InvalidRecordError(f"Unknown entry kind {kind!r}", record=record)


def validate_path(path: Any, record: Any = None) -> str:
    """Check that a path is a non-empty, relative, slash-separated string.

    Args:
        path: The path to check.
        record: The raw record, attached to the error for context.

    Returns:
        The path unchanged.

    Raises:
        InvalidPathError: If the path is empty, absolute, has a trailing slash, or
            contains an empty, "." or ".." segment.
    """
    if not isinstance(path, str):
        raise InvalidPathError(path, "path must be a string", record=record)
    if not path:
        raise InvalidPathError(path, "empty path", record=record)
    if path.startswith("/"):
        raise InvalidPathError(path, "leading '/'", record=record)
    if path.endswith("/"):
        raise InvalidPathError(path, "trailing '/'", record=record)
    for segment in path.split("/"):
        if not segment:
            raise InvalidPathError(path, "empty path segment", record=record)
        if segment in (".", ".."):
            raise InvalidPathError(path, f"relative segment '{segment}'", record=record)
    return path


def normalize_record(
    path: Any, kind: Union[str, NodeKind], size: Optional[int] = None, *, record: Any = None
) -> PathRecord:
    """Validate and classify a single flat entry.

    Args:
        path: Slash-separated path relative to the repository root.
        kind: Entry kind (see ``classify_kind``).
        size: Optional non-negative size in bytes. Ignored for directories.
        record: The raw record this entry came from, attached to any error raised.

    Returns:
        A validated ``PathRecord``.

    Raises:
        InvalidPathError: If the path is malformed.
        InvalidRecordError: If the kind is unknown or the size is not a non-negative integer.

    Example:
        >>> normalize_record("docs", "tree", 4096)
        PathRecord(path='docs', kind=<NodeKind.DIRECTORY: 'dir'>, size=None)
    """
    validate_path(path, record=record)
    node_kind = classify_kind(kind, record=record)

    if node_kind is NodeKind.DIRECTORY:
        return PathRecord(path, node_kind, None)

    if size is not None:
        if isinstance(size, bool) or not isinstance(size, int):
            raise InvalidRecordError(f"Size of '{path}' must be an integer, got {type(size).__name__}", record=record)
        if size < 0:
            raise InvalidRecordError(f"Size of '{path}' cannot be negative", record=record)
    return PathRecord(path, node_kind, size)


def record_from_mapping(item: Any) -> PathRecord:
    """Normalize a ``{path, type|kind, size?}`` mapping into a ``PathRecord``.

    Raises:
        InvalidRecordError: If the item is not a mapping or lacks a kind.
        InvalidPathError: If the path is missing or malformed.
    """
    if not isinstance(item, Mapping):
        raise InvalidRecordError(f"Record must be a mapping, got {type(item).__name__}", record=item)
    kind = item.get("type", item.get("kind"))
    if kind is None:
        raise InvalidRecordError(f"Record for {item.get('path')!r} has no type", record=item)
    return normalize_record(item.get("path"), kind, item.get("size"), record=item)


def records_from_mappings(items: Iterable[Any]) -> List[PathRecord]:
    """Normalize a sequence of record mappings, failing on the first invalid one."""
    return [record_from_mapping(item) for item in items]


def coerce_records(records: Iterable[Union[PathRecord, Mapping]]) -> List[PathRecord]:
    """Accept a mix of ``PathRecord`` values and raw mappings and return records only."""
    return [record if isinstance(record, PathRecord) else record_from_mapping(record) for record in records]
