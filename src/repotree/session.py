"""Fetch sequencing and rebuild policy around a repository tree.

The network layer that retrieves listings lives outside this package. A session only
tags each fetch with a request id, accepts the response of the latest request, and
rebuilds the tree in full whenever the listing or the exclusion set changes.
"""

import itertools
import threading
from collections.abc import Mapping
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from repotree.exclusion_rules.folder_rules import FolderExclusionRules
from repotree.github import node_url, parse_github_url, repository_url
from repotree.history import RecentRepositories
from repotree.path_record import PathRecord, coerce_records
from repotree.repository import RepoTree

DEFAULT_EXCLUDED_FOLDERS: Tuple[str, ...] = ("node_modules", ".git")
DEFAULT_BRANCH = "main"


class RepoTreeSession:
    """State of one repository view: listing, exclusions, branch and latest tree.

    Fetches complete in any order. Each ``begin_fetch`` issues a new, strictly
    increasing request id, and only the response carrying the latest id is applied;
    older responses are discarded, so a slow stale fetch can never overwrite the result
    of a newer one.

    Attributes:
        history (Optional[RecentRepositories]): Where successful fetches are recorded.
        repo_url (Optional[str]): URL of the latest fetch.
        tree (Optional[RepoTree]): Tree built from the latest accepted listing.
        error (Optional[str]): Message of the latest failed fetch.

    Example:
        >>> session = RepoTreeSession()
        >>> first = session.begin_fetch("https://github.com/octocat/Hello-World")
        >>> second = session.begin_fetch("https://github.com/octocat/Spoon-Knife")
        >>> session.complete_fetch(first, [{"path": "old.txt", "type": "file"}])
        False
        >>> session.complete_fetch(second, [{"path": "README.md", "type": "file"}])
        True
        >>> print(session.tree.get_tree_representation(), end="")
        └── README.md
    """

    def __init__(
        self,
        history: Optional[RecentRepositories] = None,
        excluded_folders: Iterable[str] = DEFAULT_EXCLUDED_FOLDERS,
        branch: str = DEFAULT_BRANCH,
    ) -> None:
        self.history = history
        self._branch = branch
        self._exclusions = FolderExclusionRules(excluded_folders)
        self._lock = threading.Lock()
        self._request_ids = itertools.count(1)
        self._latest_request = 0
        self._records: Optional[List[PathRecord]] = None
        self.repo_url: Optional[str] = None
        self.tree: Optional[RepoTree] = None
        self.error: Optional[str] = None

    @property
    def branch(self) -> str:
        return self._branch

    @branch.setter
    def branch(self, value: str) -> None:
        self._branch = value

    @property
    def excluded_folders(self) -> Tuple[str, ...]:
        return tuple(sorted(self._exclusions.folders))

    @excluded_folders.setter
    def excluded_folders(self, folders: Iterable[str]) -> None:
        rules = FolderExclusionRules(folders)
        with self._lock:
            # A listing the new exclusions cannot build leaves both the old set and tree in place.
            tree = self._build(self._records, rules) if self._records is not None else None
            self._exclusions = rules
            if tree is not None:
                self.tree = tree

    @property
    def latest_request(self) -> int:
        return self._latest_request

    def begin_fetch(self, repo_url: str) -> int:
        """Start a new fetch and return its request id.

        Raises:
            InvalidRepositoryUrlError: If ``repo_url`` is not a GitHub repository URL.
        """
        canonical_url = repository_url(*parse_github_url(repo_url))
        with self._lock:
            self._latest_request = next(self._request_ids)
            self.repo_url = canonical_url
            self.error = None
            return self._latest_request

    def complete_fetch(self, request_id: int, records: Sequence[Union[PathRecord, Mapping]]) -> bool:
        """Apply a fetched listing if it belongs to the latest request.

        Returns:
            True if the listing was applied, False if it was stale and discarded.

        Raises:
            InvalidPathError, InvalidRecordError: If a record is malformed.
            DuplicatePathError, InconsistentTreeError: If the listing is structurally
                invalid. The previously accepted tree is kept in that case.
        """
        with self._lock:
            if request_id != self._latest_request:
                return False
            normalized = coerce_records(records)
            tree = self._build(normalized, self._exclusions)
            self._records = normalized
            self.tree = tree
            self.error = None
            url = self.repo_url

        if self.history is not None and url is not None:
            self.history.record(url)
        return True

    def fail_fetch(self, request_id: int, error: Union[str, BaseException]) -> bool:
        """Record the failure of a fetch if it belongs to the latest request.

        Returns:
            True if the error was recorded, False if the request was stale.
        """
        with self._lock:
            if request_id != self._latest_request:
                return False
            self.error = str(error)
            return True

    def node_url(self, path: str) -> str:
        """GitHub web URL of ``path`` on the current branch.

        Raises:
            ValueError: If no fetch has been started yet.
        """
        if self.repo_url is None:
            raise ValueError("No repository has been fetched")
        return node_url(self.repo_url, self._branch, path)

    def recent_repositories(self) -> List[str]:
        return self.history.recent() if self.history is not None else []

    def reset(self) -> None:
        """Forget the current listing, tree and error."""
        with self._lock:
            self._records = None
            self.tree = None
            self.error = None

    def _build(self, records: Sequence[PathRecord], rules: FolderExclusionRules) -> RepoTree:
        tree = RepoTree(records, exclusion_rules=rules)
        tree.get_forest()
        return tree
