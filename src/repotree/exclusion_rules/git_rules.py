"""Implementation of exclusion rules using .gitignore pattern syntax."""

from os import PathLike
from pathlib import Path
from typing import List, Optional, Sequence, Union

from pathspec import GitIgnoreSpec

from repotree.path_record import PathRecord
from repotree.types import PathType

from .base_rules import BaseExclusionRules


class GitIgnoreExclusionRules(BaseExclusionRules):
    """Implementation of exclusion rules using .gitignore pattern syntax.

    Patterns are matched with the pathspec library the same way Git matches them,
    including globs, directory-only patterns (ending in /), negations (starting with !),
    double-asterisk matching and comment lines.

    Rules can come from one or more pattern files and from individual patterns added
    with ``add_rule``. All patterns are evaluated in the order they were added, so a
    later negation can re-include a path excluded by an earlier pattern.

    Directory records are also matched with a trailing slash appended, so that a
    directory-only pattern such as ``build/`` excludes the ``build`` entry itself and
    not just its contents.

    Attributes:
        spec (GitIgnoreSpec): Compiled pattern matcher.

    Example:
        >>> rules = GitIgnoreExclusionRules()
        >>> rules.add_rule("*.pyc")
        >>> rules.exclude("src/main.pyc")
        True
        >>> rules.add_rule("!keep.pyc")
        >>> rules.exclude("keep.pyc")
        False

    Note:
        Paths passed to ``exclude`` must use forward slashes as separators.
    """

    def __init__(self, rules_files: Optional[Union[PathType, Sequence[PathType]]] = None):
        """Initialize GitIgnoreExclusionRules with patterns from the specified files.

        Args:
            rules_files: Path(s) to file(s) containing .gitignore patterns.

        Raises:
            FileNotFoundError: If any rules file does not exist.
        """
        self._patterns: List[str] = []
        self.spec = GitIgnoreSpec.from_lines(self._patterns)

        if rules_files is not None:
            self.load_rules(rules_files)

    @property
    def patterns(self) -> List[str]:
        """A copy of the raw pattern lines, in evaluation order."""
        return list(self._patterns)

    def exclude(self, path: str) -> bool:
        """Check if a path matches the loaded patterns.

        Args:
            path: Slash-separated path relative to the repository root.

        Returns:
            True if the path is ignored by the patterns, taking negations into account.
        """
        return self.spec.match_file(path)

    def exclude_record(self, record: PathRecord) -> bool:
        if self.exclude(record.path):
            return True
        return record.is_dir and self.exclude(record.path + "/")

    def has_rules(self) -> bool:
        return any(line.strip() and not line.lstrip().startswith("#") for line in self._patterns)

    def load_rules(self, rules_files: Union[PathType, Sequence[PathType]]) -> None:
        """Load and append .gitignore patterns from one or more files.

        Args:
            rules_files: Path(s) to file(s) containing .gitignore patterns.

        Raises:
            FileNotFoundError: If any rules file does not exist.
        """
        if isinstance(rules_files, (str, PathLike)):
            rules_files = [rules_files]

        for rules_file in rules_files:
            path = Path(rules_file)
            if not path.exists():
                raise FileNotFoundError(f"Rules file not found: {path}")

            with open(path, "r", encoding="utf-8") as f:
                self._patterns.extend(f.read().splitlines())

        self._compile()

    def add_rule(self, rule: str) -> None:
        """Add a single .gitignore pattern, e.g. "*.log", "dist/" or "!important.log"."""
        self._patterns.append(rule)
        self._compile()

    def _compile(self) -> None:
        self.spec = GitIgnoreSpec.from_lines(self._patterns)
