"""The collection of top-level nodes produced by a tree build."""

from typing import Dict, FrozenSet, Iterator, Optional, Sequence, Tuple

from repotree.repo_tree.repo_tree_node import RepoTreeNode


class Forest:
    """The top-level nodes of a reconstructed repository hierarchy.

    A repository may have several root-level files and directories, hence a forest
    rather than a single tree. A forest is built once per listing and exclusion
    configuration and is not modified afterwards; any change in input produces a new
    forest. Because of that, concurrent queries against one forest are safe.

    Besides the roots, a forest holds the path-to-node mapping built during assembly,
    so node lookups by path never walk the tree.

    Example:
        >>> from repotree.repo_tree.tree_builder import build_forest
        >>> from repotree.path_record import normalize_record
        >>> forest = build_forest([normalize_record("a", "dir"), normalize_record("a/b.txt", "file", 100)])
        >>> [root.name for root in forest.roots]
        ['a']
        >>> forest["a/b.txt"].size
        100
        >>> "a/missing" in forest
        False
    """

    def __init__(self, roots: Sequence[RepoTreeNode], nodes: Dict[str, RepoTreeNode]) -> None:
        self._roots: Tuple[RepoTreeNode, ...] = tuple(roots)
        self._nodes = dict(nodes)

    @property
    def roots(self) -> Tuple[RepoTreeNode, ...]:
        return self._roots

    def get(self, path: str) -> Optional[RepoTreeNode]:
        return self._nodes.get(path)

    def __getitem__(self, path: str) -> RepoTreeNode:
        return self._nodes[path]

    def __contains__(self, path: object) -> bool:
        return path in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[RepoTreeNode]:
        """Iterate over every node in pre-order, following insertion order."""
        for root in self._roots:
            yield from root.iter_subtree()

    def paths(self) -> FrozenSet[str]:
        """The set of every node path in the forest."""
        return frozenset(node.path for node in self)

    def edges(self) -> FrozenSet[Tuple[str, str]]:
        """The set of (parent path, child path) pairs."""
        return frozenset((node.path, child.path) for node in self for child in node.children)

    def iter_files(self) -> Iterator[RepoTreeNode]:
        return (node for node in self if not node.is_dir)

    @property
    def file_count(self) -> int:
        return sum(1 for _ in self.iter_files())

    @property
    def directory_count(self) -> int:
        return sum(1 for node in self if node.is_dir)

    @property
    def total_size(self) -> int:
        """Sum of all reported file sizes; files without a size count as zero."""
        return sum(node.size or 0 for node in self.iter_files())

    def __repr__(self) -> str:
        return f"Forest(roots={len(self._roots)}, nodes={len(self._nodes)})"
