"""Synthesis of directory records that a flat listing implies but omits.

Listing APIs frequently leave out empty directories and sometimes intermediate ones,
yet the tree cannot be assembled hierarchically unless every ancestor is present.
"""

from typing import Dict, Iterable, Iterator, List

from repotree.exceptions import InconsistentTreeError
from repotree.path_record import PathRecord
from repotree.types import NodeKind


def implied_directories(path: str) -> Iterator[str]:
    """Yield every proper, non-empty ancestor prefix of ``path``, shallowest first.

    Example:
        >>> list(implied_directories("a/b/c.txt"))
        ['a', 'a/b']
        >>> list(implied_directories("README.md"))
        []
    """
    index = path.find("/")
    while index != -1:
        yield path[:index]
        index = path.find("/", index + 1)


def synthesize_ancestors(records: Iterable[PathRecord]) -> List[PathRecord]:
    """Complete a filtered listing with every implied ancestor directory.

    Explicit records are authoritative and are returned first, in their original order
    (duplicates included, so the tree builder can report them). A directory record with
    no size is then appended for each implied ancestor path that no explicit record
    already covers, in order of first appearance.

    Args:
        records: Filtered flat records.

    Returns:
        Explicit records followed by synthesized directory records.

    Raises:
        InconsistentTreeError: If an explicit file record is an ancestor of another
            record, since a file cannot contain children.

    Example:
        >>> from repotree.path_record import normalize_record
        >>> completed = synthesize_ancestors([normalize_record("a/c/d.txt", "file", 2048)])
        >>> [(r.path, r.kind.value) for r in completed]
        [('a/c/d.txt', 'file'), ('a', 'dir'), ('a/c', 'dir')]
    """
    explicit = list(records)
    present: Dict[str, PathRecord] = {}
    for record in explicit:
        present.setdefault(record.path, record)

    synthesized: Dict[str, PathRecord] = {}
    for record in explicit:
        for ancestor in implied_directories(record.path):
            existing = present.get(ancestor)
            if existing is not None:
                if not existing.is_dir:
                    raise InconsistentTreeError(
                        record.path,
                        ancestor,
                        f"'{record.path}' lies beneath '{ancestor}', which is listed as a file",
                    )
                continue
            if ancestor not in synthesized:
                synthesized[ancestor] = PathRecord(ancestor, NodeKind.DIRECTORY)

    return explicit + list(synthesized.values())
