"""GitHub-specific helpers at the edges of the tree core.

These functions translate between GitHub's conventions and the core's flat records:
parsing repository URLs, building per-node web URLs, and converting a git/trees API
response into records. No network access happens here; fetching the listing is the
caller's job.
"""

from collections.abc import Mapping
from typing import Any, List, Tuple
from urllib.parse import urlparse

from repotree.exceptions import InvalidRecordError, InvalidRepositoryUrlError
from repotree.path_record import PathRecord, normalize_record
from repotree.types import NodeKind

GITHUB_HOST = "github.com"


def parse_github_url(url: str) -> Tuple[str, str]:
    """Extract the owner and repository name from a GitHub repository URL.

    Args:
        url: A URL such as ``https://github.com/owner/repo`` (extra path segments,
            a trailing slash and a ``.git`` suffix are tolerated).

    Returns:
        ``(owner, repo)``.

    Raises:
        InvalidRepositoryUrlError: If the URL is not on github.com or lacks an owner
            and repository.

    Example:
        >>> parse_github_url("https://github.com/octocat/Hello-World/")
        ('octocat', 'Hello-World')
        >>> parse_github_url("https://github.com/octocat/Hello-World.git")
        ('octocat', 'Hello-World')
    """
    if not isinstance(url, str):
        raise InvalidRepositoryUrlError(str(url))

    clean_url = url.strip().rstrip("/")
    try:
        parsed = urlparse(clean_url)
    except ValueError:
        raise InvalidRepositoryUrlError(url)

    parts = [part for part in parsed.path.split("/") if part]
    if parsed.scheme not in ("http", "https") or parsed.hostname != GITHUB_HOST or len(parts) < 2:
        raise InvalidRepositoryUrlError(url)

    owner, repo = parts[0], parts[1]
    if repo.endswith(".git"):
        repo = repo[: -len(".git")]
    if not repo:
        raise InvalidRepositoryUrlError(url)
    return owner, repo


def repository_url(owner: str, repo: str) -> str:
    return f"https://{GITHUB_HOST}/{owner}/{repo}"


def node_url(repo_url: str, branch: str, path: str) -> str:
    """Build the GitHub web URL for a file or directory on a branch.

    Example:
        >>> node_url("https://github.com/octocat/Hello-World/", "main", "src/app.py")
        'https://github.com/octocat/Hello-World/tree/main/src/app.py'
    """
    return f"{repo_url.rstrip('/')}/tree/{branch}/{path}"


def records_from_github_tree(payload: Any) -> List[PathRecord]:
    """Convert a git/trees API response into flat records.

    Entries of type ``blob`` become files; every other type (``tree``, and ``commit``
    for submodules) becomes a directory.

    Args:
        payload: The decoded JSON response, a mapping with a ``tree`` list.

    Returns:
        One record per listed entry, in listing order.

    Raises:
        InvalidRecordError: If the payload has no ``tree`` list or an entry is malformed.
        InvalidPathError: If an entry's path is malformed.

    Example:
        >>> records = records_from_github_tree({"tree": [
        ...     {"path": "src", "type": "tree"},
        ...     {"path": "src/app.py", "type": "blob", "size": 512},
        ... ]})
        >>> [(r.path, r.kind.value, r.size) for r in records]
        [('src', 'dir', None), ('src/app.py', 'file', 512)]
    """
    if not isinstance(payload, Mapping) or not isinstance(payload.get("tree"), list):
        raise InvalidRecordError("GitHub tree payload must be an object with a 'tree' list", record=payload)

    records = []
    for item in payload["tree"]:
        if not isinstance(item, Mapping):
            raise InvalidRecordError(f"Tree entry must be an object, got {type(item).__name__}", record=item)
        kind = NodeKind.FILE if item.get("type") == "blob" else NodeKind.DIRECTORY
        records.append(normalize_record(item.get("path"), kind, item.get("size"), record=item))
    return records


def is_truncated(payload: Any) -> bool:
    """Whether GitHub reported the recursive listing as truncated."""
    return isinstance(payload, Mapping) and bool(payload.get("truncated", False))
