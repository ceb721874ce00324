"""Repository tree facade with configurable exclusion rules.

This module provides the main RepoTree class, which turns a flat repository listing
into a forest of nodes and answers the queries consumers need: counts, lookups,
search visibility and the plain-text rendering.
"""

from collections.abc import Mapping
from typing import Iterable, Iterator, List, Optional, Set, Tuple, Union

from repotree.exclusion_rules.base_rules import BaseExclusionRules
from repotree.path_record import PathRecord, coerce_records
from repotree.repo_tree.forest import Forest
from repotree.repo_tree.repo_tree_node import RepoTreeNode
from repotree.repo_tree.tree_builder import build_repository_forest
from repotree.search_matcher import matches, visible_paths
from repotree.text_renderer import render, stream_tree_lines
from repotree.tree_sorter import sorted_children


class RepoTree:
    """A tree representation of a repository listing with support for exclusion rules.

    The listing is normalized eagerly, so malformed records are reported on
    construction. The forest itself is built lazily on first access and then kept
    until ``refresh`` is called, for example after the caller changed the exclusion
    rules. Every rebuild discards the previous forest entirely.

    Attributes:
        records (Tuple[PathRecord, ...]): The normalized, unfiltered listing.
        exclusion_rules (Optional[BaseExclusionRules]): Rules for excluding records.

    Example:
        >>> from repotree.exclusion_rules.folder_rules import FolderExclusionRules
        >>> tree = RepoTree(
        ...     [
        ...         {"path": "a/b.txt", "type": "file", "size": 100},
        ...         {"path": "a/c/d.txt", "type": "file", "size": 2048},
        ...     ],
        ...     exclusion_rules=FolderExclusionRules(["a/c"]),
        ... )
        >>> print(tree.get_tree_representation(), end="")
        └── a
            └── b.txt (100.0 B)
        >>> tree.get_file_count(), tree.get_directory_count()
        (1, 1)
    """

    def __init__(
        self,
        records: Iterable[Union[PathRecord, Mapping]],
        exclusion_rules: Optional[BaseExclusionRules] = None,
    ) -> None:
        """Initialize a RepoTree.

        Args:
            records: Flat records, either ``PathRecord`` values or mappings with
                ``path``, ``type`` and optional ``size`` keys.
            exclusion_rules: Rules for excluding records. Defaults to None.

        Raises:
            InvalidPathError: If a record's path is malformed.
            InvalidRecordError: If a record's kind or size is invalid.
        """
        self.records: Tuple[PathRecord, ...] = tuple(coerce_records(records))
        self.exclusion_rules = exclusion_rules
        self._forest: Optional[Forest] = None

    def get_forest(self) -> Forest:
        """Get the forest, building it on first access.

        Raises:
            DuplicatePathError: If two records share a path.
            InconsistentTreeError: If the listing places an entry beneath a file.
        """
        if self._forest is None:
            self._forest = build_repository_forest(self.records, self.exclusion_rules)
        return self._forest

    def refresh(self) -> None:
        """Discard the current forest and rebuild it from the records.

        Use this after the exclusion rules have been changed.
        """
        self._forest = None
        self.get_forest()

    def get_node(self, path: str) -> Optional[RepoTreeNode]:
        return self.get_forest().get(path)

    def get_file_count(self) -> int:
        return self.get_forest().file_count

    def get_directory_count(self) -> int:
        return self.get_forest().directory_count

    def get_total_size(self) -> int:
        return self.get_forest().total_size

    def get_roots(self) -> List[RepoTreeNode]:
        """Top-level nodes in display order."""
        return sorted_children(self.get_forest())

    def get_children(self, path: str) -> List[RepoTreeNode]:
        """Children of the node at ``path`` in display order.

        Raises:
            KeyError: If no node exists at ``path``.
        """
        return sorted_children(self.get_forest()[path])

    def iterate_files(self) -> Iterator[Tuple[str, Optional[int]]]:
        """Yield ``(path, size)`` for every file, in display order."""
        for node in self.walk():
            if not node.is_dir:
                yield (node.path, node.size)

    def walk(self, search_term: Optional[str] = None) -> Iterator[RepoTreeNode]:
        """Yield every visible node depth-first in display order."""
        forest = self.get_forest()
        visible: Optional[Set[str]] = visible_paths(forest, search_term) if search_term else None

        stack = list(reversed(sorted_children(forest)))
        while stack:
            node = stack.pop()
            if visible is not None and node.path not in visible:
                continue
            yield node
            stack.extend(reversed(sorted_children(node)))

    def matches(self, path: str, search_term: Optional[str]) -> bool:
        """Whether the node at ``path`` is visible for ``search_term``.

        Raises:
            KeyError: If no node exists at ``path``.
        """
        return matches(self.get_forest()[path], search_term)

    def search(self, search_term: Optional[str]) -> Set[str]:
        """Paths of every node visible for ``search_term``."""
        return visible_paths(self.get_forest(), search_term)

    def stream_tree_representation(self, search_term: Optional[str] = None) -> Iterator[str]:
        """Generate the rendered tree one line at a time (without newlines)."""
        return stream_tree_lines(self.get_forest(), search_term)

    def get_tree_representation(self, search_term: Optional[str] = None) -> str:
        """Get the complete rendered tree, each line terminated by a newline."""
        return render(self.get_forest(), search_term)
