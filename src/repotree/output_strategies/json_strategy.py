"""JSON output strategy for forest export.

This module provides a strategy that serializes a forest as a nested JSON document,
the same shape a presentation layer consumes.
"""

import json
from typing import Any, Dict, Iterator, List, Optional, Set, Tuple, Union

from repotree.repo_tree.forest import Forest
from repotree.repo_tree.repo_tree_node import RepoTreeNode
from repotree.search_matcher import visible_paths
from repotree.tree_sorter import sorted_children, sorted_nodes

from .base_strategy import OutputStrategy


class JSONOutputStrategy(OutputStrategy):
    """Output strategy that serializes a forest as a JSON array of node objects.

    Each node becomes an object with the following structure:
    {
        "name": "main.py",
        "path": "src/main.py",
        "type": "file",
        "size": 120          # only for files that report a size
    }

    Directories have ``"type": "dir"`` and a ``"children"`` array instead of a size.
    Siblings appear in display order (directories first, then by name), and when a
    search term is given only visible nodes are included.

    Attributes:
        indent (Optional[int]): Indentation passed to the JSON encoder.

    Example:
        >>> from repotree.repo_tree.tree_builder import build_repository_forest
        >>> from repotree.path_record import normalize_record
        >>> forest = build_repository_forest([normalize_record("a/b.txt", "file", 100)])
        >>> print("".join(JSONOutputStrategy().format_forest(forest)), end="")
        [{"name": "a", "path": "a", "type": "dir", "children": [{"name": "b.txt", "path": "a/b.txt", "type": "file", "size": 100}]}]
    """

    def __init__(self, indent: Optional[int] = None) -> None:
        self.indent = indent

    def format_forest(self, forest: Forest, search_term: Optional[str] = None) -> Iterator[str]:
        # Encoded from an explicit stack, so arbitrarily deep forests never hit the
        # recursion limit. The layout matches json.dumps with the same indent.
        visible: Optional[Set[str]] = visible_paths(forest, search_term) if search_term else None
        stack: List[Union[str, Tuple[RepoTreeNode, int]]] = self._list_parts(sorted_children(forest), 0, visible)
        stack.reverse()
        while stack:
            part = stack.pop()
            if isinstance(part, str):
                yield part
            else:
                stack.extend(reversed(self._object_parts(*part, visible)))
        yield "\n"

    def node_to_dict(self, node: RepoTreeNode, visible: Optional[Set[str]] = None) -> Dict[str, Any]:
        """Serialize one node and its visible descendants."""
        data = self._fields(node)
        pending = [(node, data)]
        while pending:
            current, target = pending.pop()
            if not current.is_dir:
                continue
            target["children"] = []
            for child in sorted_nodes(current.children):
                if visible is None or child.path in visible:
                    child_data = self._fields(child)
                    target["children"].append(child_data)
                    pending.append((child, child_data))
        return data

    def get_file_extension(self) -> str:
        return ".json"

    def _fields(self, node: RepoTreeNode) -> Dict[str, Any]:
        data: Dict[str, Any] = {"name": node.name, "path": node.path, "type": node.kind.value}
        if not node.is_dir and node.size is not None:
            data["size"] = node.size
        return data

    def _newline(self, depth: int) -> str:
        if self.indent is None:
            return ""
        return "\n" + " " * (self.indent * depth)

    def _separator(self) -> str:
        return ", " if self.indent is None else ","

    def _list_parts(
        self, nodes: List[RepoTreeNode], depth: int, visible: Optional[Set[str]]
    ) -> List[Union[str, Tuple[RepoTreeNode, int]]]:
        shown = [node for node in nodes if visible is None or node.path in visible]
        if not shown:
            return ["[]"]
        parts: List[Union[str, Tuple[RepoTreeNode, int]]] = ["["]
        for i, node in enumerate(shown):
            parts.append((self._separator() if i else "") + self._newline(depth + 1))
            parts.append((node, depth + 1))
        parts.append(self._newline(depth) + "]")
        return parts

    def _object_parts(
        self, node: RepoTreeNode, depth: int, visible: Optional[Set[str]]
    ) -> List[Union[str, Tuple[RepoTreeNode, int]]]:
        members = [
            f"{json.dumps(key)}: {json.dumps(value, ensure_ascii=False)}" for key, value in self._fields(node).items()
        ]
        if node.is_dir:
            members.append('"children": ')
        inner = self._separator() + self._newline(depth + 1)
        parts: List[Union[str, Tuple[RepoTreeNode, int]]] = ["{" + self._newline(depth + 1) + inner.join(members)]
        if node.is_dir:
            parts.extend(self._list_parts(sorted_nodes(node.children), depth + 1, visible))
        parts.append(self._newline(depth) + "}")
        return parts
