"""Assembly of a flat, ancestor-complete listing into a forest of nodes."""

from typing import Dict, Iterable, List, Optional

from repotree.exceptions import DuplicatePathError, InconsistentTreeError
from repotree.exclusion_rules.base_rules import BaseExclusionRules, filter_records
from repotree.path_record import PathRecord
from repotree.repo_tree.ancestor_synthesizer import synthesize_ancestors
from repotree.repo_tree.forest import Forest
from repotree.repo_tree.repo_tree_node import RepoTreeNode


def build_forest(records: Iterable[PathRecord]) -> Forest:
    """Convert filtered, ancestor-complete records into a nested forest.

    The first pass allocates one node per record and fails on duplicate paths. The
    second pass links every node to its parent, found by removing the last path
    segment; nodes without a ``/`` in their path become roots. Children are linked in
    record order and no display order is imposed here.

    Args:
        records: Records whose ancestors are all present (see ``synthesize_ancestors``).

    Returns:
        The assembled forest. Building twice from the same records yields forests with
        the same paths and parent/child edges.

    Raises:
        DuplicatePathError: If two records share a path.
        InconsistentTreeError: If a record's parent is missing or is not a directory.

    Example:
        >>> from repotree.path_record import normalize_record
        >>> forest = build_forest([
        ...     normalize_record("a/b.txt", "file", 100),
        ...     normalize_record("a", "dir"),
        ... ])
        >>> sorted(forest.edges())
        [('a', 'a/b.txt')]
    """
    ordered: List[PathRecord] = list(records)
    nodes: Dict[str, RepoTreeNode] = {}
    for record in ordered:
        if record.path in nodes:
            raise DuplicatePathError(record.path)
        nodes[record.path] = RepoTreeNode(record.path, record.kind, record.size)

    roots: List[RepoTreeNode] = []
    for record in ordered:
        node = nodes[record.path]
        parent_path = record.parent_path
        if parent_path is None:
            roots.append(node)
            continue

        parent = nodes.get(parent_path)
        if parent is None:
            raise InconsistentTreeError(record.path, parent_path)
        if not parent.is_dir:
            raise InconsistentTreeError(
                record.path, parent_path, f"Parent '{parent_path}' of '{record.path}' is not a directory"
            )
        parent.add_child(node)

    return Forest(roots, nodes)


def build_repository_forest(
    records: Iterable[PathRecord], exclusion_rules: Optional[BaseExclusionRules] = None
) -> Forest:
    """Run the whole pipeline: exclusion, ancestor synthesis, then assembly.

    Args:
        records: Normalized flat records as reported by the listing.
        exclusion_rules: Rules deciding which records to drop. None keeps everything.

    Returns:
        The assembled forest, free of excluded paths.
    """
    kept = filter_records(records, exclusion_rules)
    return build_forest(synthesize_ancestors(kept))
