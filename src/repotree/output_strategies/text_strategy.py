"""Plain-text tree output strategy."""

from typing import Iterator, Optional

from repotree.repo_tree.forest import Forest
from repotree.text_renderer import stream_tree_lines

from .base_strategy import OutputStrategy


class TextOutputStrategy(OutputStrategy):
    """Output strategy producing the ASCII tree used for clipboard export.

    Each chunk is one rendered line terminated by a newline, so the concatenated output
    is identical to ``repotree.text_renderer.render``.
    """

    def format_forest(self, forest: Forest, search_term: Optional[str] = None) -> Iterator[str]:
        for line in stream_tree_lines(forest, search_term):
            yield line + "\n"

    def get_file_extension(self) -> str:
        return ".txt"
