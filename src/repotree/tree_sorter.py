"""Deterministic display order for sibling nodes.

Order is imposed lazily, one sibling group at a time, and never stored in the tree, so
every query reflects the current comparator.
"""

from functools import lru_cache
from typing import Iterable, List, Tuple, Union

from pyuca import Collator

from repotree.repo_tree.forest import Forest
from repotree.repo_tree.repo_tree_node import RepoTreeNode


@lru_cache(maxsize=1)
def _collator() -> Collator:
    # Loading the collation table is slow, so it happens once, on first use.
    return Collator()


def collation_key(name: str) -> Tuple[int, ...]:
    """Unicode Collation Algorithm key for a name.

    Punctuation sorts before digits and letters, accented letters sort with their base
    letter, and lowercase precedes uppercase when names differ only in case.

    Example:
        >>> sorted(["zeta.md", "éclair.md", "_config.yml", "~notes.md", ".gitignore"], key=collation_key)
        ['_config.yml', '.gitignore', '~notes.md', 'éclair.md', 'zeta.md']
    """
    return tuple(_collator().sort_key(name))


def sort_key(node: RepoTreeNode) -> Tuple[int, Tuple[int, ...], str, str]:
    """Key placing directories before files, then names in collation order.

    Names the collation considers equal fall back to a case-insensitive comparison and
    then to their exact spelling. Identical names keep their insertion order through the
    stable sort.
    """
    return (0 if node.is_dir else 1, collation_key(node.name), node.name.casefold(), node.name.swapcase())


def sorted_nodes(nodes: Iterable[RepoTreeNode]) -> List[RepoTreeNode]:
    return sorted(nodes, key=sort_key)


def sorted_children(container: Union[RepoTreeNode, Forest]) -> List[RepoTreeNode]:
    """Return the children of a node, or the roots of a forest, in display order.

    Example:
        >>> from repotree.repo_tree.tree_builder import build_forest
        >>> from repotree.path_record import normalize_record
        >>> forest = build_forest([
        ...     normalize_record("zeta.txt", "file"),
        ...     normalize_record("Beta", "dir"),
        ...     normalize_record("alpha.txt", "file"),
        ...     normalize_record("docs", "dir"),
        ... ])
        >>> [node.name for node in sorted_children(forest)]
        ['Beta', 'docs', 'alpha.txt', 'zeta.txt']
    """
    if isinstance(container, Forest):
        return sorted_nodes(container.roots)
    return sorted_nodes(container.children)
