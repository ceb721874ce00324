from typing import Any, Optional


class RepoTreeError(Exception):
    """
    Base class for every error raised while normalizing records or building a tree.

    Catching this exception is enough to handle any structural problem with a listing
    without also swallowing unrelated programming errors.
    """

    pass


class InvalidRecordError(RepoTreeError, ValueError):
    """
    Exception raised when a flat record cannot be classified.

    This covers an unknown entry kind, a negative or non-integer size, or an input item
    that is not a mapping at all. The offending record is kept so the caller can decide
    to drop it and continue, or abort.

    Attributes:
        record (Any): The raw record that was rejected.

    Example:
        >>> error = InvalidRecordError("Unknown kind 'symlink'", record={"path": "a", "type": "symlink"})
        >>> str(error)
        "Unknown kind 'symlink'"
        >>> error.record["path"]
        'a'
    """

    def __init__(self, message: str, record: Any = None) -> None:
        self.record = record
        super().__init__(message)


class InvalidPathError(InvalidRecordError):
    """
    Exception raised when a record's path is empty or malformed.

    Paths must be relative, slash-separated, and free of empty, ``.`` or ``..`` segments.

    Attributes:
        path (Any): The rejected path value.
        reason (str): Short description of what is wrong with the path.

    Example:
        >>> error = InvalidPathError("/src/main.py", "leading '/'")
        >>> str(error)
        "Invalid path '/src/main.py': leading '/'"
    """

    def __init__(self, path: Any, reason: str, record: Any = None) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid path {path!r}: {reason}", record=record)


class DuplicatePathError(RepoTreeError):
    """
    Exception raised when two input records share an identical path.

    The build is abandoned and no partial tree is returned.

    Attributes:
        path (str): The duplicated path.

    Example:
        >>> str(DuplicatePathError("src/main.py"))
        'Duplicate path in listing: src/main.py'
    """

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Duplicate path in listing: {path}")


class InconsistentTreeError(RepoTreeError):
    """
    Exception raised when a record's parent is missing from the tree, or is not a directory.

    After ancestor synthesis every parent path should be present as a directory, so this
    indicates a broken invariant and is never silently dropped.

    Attributes:
        path (str): The record whose parent could not be resolved.
        parent_path (Optional[str]): The parent path that was expected.
    """

    def __init__(self, path: str, parent_path: Optional[str], message: Optional[str] = None) -> None:
        self.path = path
        self.parent_path = parent_path
        if message is None:
            message = f"Parent directory '{parent_path}' of '{path}' is missing from the tree"
        super().__init__(message)


class InvalidRepositoryUrlError(RepoTreeError, ValueError):
    """
    Exception raised when a URL does not name a GitHub repository.

    Attributes:
        url (str): The rejected URL.

    Example:
        >>> str(InvalidRepositoryUrlError("https://example.com/a/b"))
        'Invalid GitHub repository URL: https://example.com/a/b'
    """

    def __init__(self, url: str) -> None:
        self.url = url
        super().__init__(f"Invalid GitHub repository URL: {url}")
