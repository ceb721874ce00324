"""Plain-text rendering of a forest, as used for clipboard export.

The output mirrors the Unix ``tree`` command: one line per visible node in display
order, ``├── ``/``└── `` branch markers, ``│   ``/``    `` continuation prefixes, and a
binary-unit size suffix for files that report a size. Ordering and prefixes are part of
the output contract.
"""

from typing import Iterator, List, Optional, Sequence, Set, Tuple

from repotree.repo_tree.forest import Forest
from repotree.repo_tree.repo_tree_node import RepoTreeNode
from repotree.search_matcher import visible_paths
from repotree.tree_sorter import sorted_nodes

SIZE_UNITS = ("B", "KB", "MB", "GB")

BRANCH = "├── "
LAST_BRANCH = "└── "
PIPE = "│   "
SPACE = "    "


def format_size(size: Optional[int]) -> str:
    """Format a byte count with 1024-based units and one decimal place.

    Units escalate from B through KB and MB up to GB, which is never exceeded.

    Example:
        >>> format_size(100)
        '100.0 B'
        >>> format_size(2048)
        '2.0 KB'
        >>> format_size(5 * 1024 ** 4)
        '5120.0 GB'
        >>> format_size(None)
        ''
    """
    if size is None:
        return ""
    value = float(size)
    unit = 0
    while value >= 1024 and unit < len(SIZE_UNITS) - 1:
        value /= 1024
        unit += 1
    return f"{value:.1f} {SIZE_UNITS[unit]}"


def size_suffix(node: RepoTreeNode) -> str:
    # Zero-byte files carry no suffix, like directories and files without a size.
    if not node.size:
        return ""
    return f" ({format_size(node.size)})"


def stream_tree_lines(forest: Forest, search_term: Optional[str] = None) -> Iterator[str]:
    """Generate the rendered tree one line at a time, without line terminators.

    Args:
        forest: The forest to render.
        search_term: Optional search term; only visible nodes are rendered.

    Yields:
        Rendered lines.
    """
    visible: Optional[Set[str]] = visible_paths(forest, search_term) if search_term else None

    def visible_children(nodes: Sequence[RepoTreeNode]) -> Sequence[RepoTreeNode]:
        ordered = sorted_nodes(nodes)
        if visible is None:
            return ordered
        return [node for node in ordered if node.path in visible]

    def level(nodes: Sequence[RepoTreeNode], prefix: str) -> List[Tuple[RepoTreeNode, str, bool]]:
        # Reversed so that popping from the stack yields siblings in display order.
        children = visible_children(nodes)
        last = len(children) - 1
        return [(node, prefix, i == last) for i, node in reversed(list(enumerate(children)))]

    stack = level(forest.roots, "")
    while stack:
        node, prefix, is_last = stack.pop()
        connector = LAST_BRANCH if is_last else BRANCH
        yield f"{prefix}{connector}{node.name}{size_suffix(node)}"
        if node.is_dir and node.children:
            stack.extend(level(node.children, prefix + (SPACE if is_last else PIPE)))


def render(forest: Forest, search_term: Optional[str] = None) -> str:
    """Render a forest as an ASCII tree, each line terminated by a newline.

    Example:
        >>> from repotree.repo_tree.tree_builder import build_repository_forest
        >>> from repotree.path_record import normalize_record
        >>> forest = build_repository_forest([
        ...     normalize_record("a/b.txt", "file", 100),
        ...     normalize_record("a/c/d.txt", "file", 2048),
        ... ])
        >>> print(render(forest), end="")
        └── a
            ├── b.txt (100.0 B)
            └── c
                └── d.txt (2.0 KB)
    """
    return "".join(line + "\n" for line in stream_tree_lines(forest, search_term))
