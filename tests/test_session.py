"""Tests for fetch sequencing and rebuilds in RepoTreeSession."""

import threading

import pytest

from repotree.exceptions import DuplicatePathError, InvalidRepositoryUrlError
from repotree.history import InMemoryHistoryStore, RecentRepositories
from repotree.session import DEFAULT_BRANCH, DEFAULT_EXCLUDED_FOLDERS, RepoTreeSession

URL = "https://github.com/octocat/Hello-World"

LISTING = [
    {"path": "node_modules/react/index.js", "type": "file", "size": 10},
    {"path": "docs/guide.md", "type": "file", "size": 300},
    {"path": "src/app.py", "type": "file", "size": 512},
]


def test_defaults():
    session = RepoTreeSession()
    assert session.branch == DEFAULT_BRANCH == "main"
    assert session.excluded_folders == tuple(sorted(DEFAULT_EXCLUDED_FOLDERS))
    assert session.tree is None
    assert session.latest_request == 0


def test_fetch_applies_default_exclusions():
    session = RepoTreeSession()
    request = session.begin_fetch(URL)
    assert session.complete_fetch(request, LISTING) is True
    assert session.tree.get_node("node_modules") is None
    assert session.tree.get_node("src/app.py").size == 512


def test_stale_response_is_discarded():
    session = RepoTreeSession()
    first = session.begin_fetch(URL)
    second = session.begin_fetch("https://github.com/octocat/Spoon-Knife/")
    assert second > first
    assert session.repo_url == "https://github.com/octocat/Spoon-Knife"

    assert session.complete_fetch(second, [{"path": "new.txt", "type": "file"}]) is True
    assert session.complete_fetch(first, [{"path": "old.txt", "type": "file"}]) is False
    assert session.tree.get_node("new.txt") is not None
    assert session.tree.get_node("old.txt") is None


def test_invalid_url_does_not_start_a_fetch():
    session = RepoTreeSession()
    with pytest.raises(InvalidRepositoryUrlError):
        session.begin_fetch("https://example.com/a/b")
    assert session.latest_request == 0
    assert session.repo_url is None


def test_changing_exclusions_rebuilds_tree():
    session = RepoTreeSession()
    session.complete_fetch(session.begin_fetch(URL), LISTING)
    old_tree = session.tree

    session.excluded_folders = ["docs"]
    assert session.tree is not old_tree
    assert session.tree.get_node("docs") is None
    assert session.tree.get_node("node_modules/react/index.js") is not None
    assert session.excluded_folders == ("docs",)


def test_changing_exclusions_before_any_fetch():
    session = RepoTreeSession()
    session.excluded_folders = []
    assert session.tree is None
    assert session.excluded_folders == ()


def test_structural_error_keeps_previous_tree():
    session = RepoTreeSession()
    session.complete_fetch(session.begin_fetch(URL), LISTING)
    good_tree = session.tree

    request = session.begin_fetch(URL)
    with pytest.raises(DuplicatePathError):
        session.complete_fetch(request, [{"path": "a", "type": "file"}, {"path": "a", "type": "file"}])
    assert session.tree is good_tree


def test_unbuildable_exclusion_change_keeps_previous_state():
    session = RepoTreeSession()
    listing = [
        {"path": "node_modules/x.js", "type": "file"},
        {"path": "node_modules/x.js", "type": "file"},
        {"path": "src/a.py", "type": "file"},
    ]
    session.complete_fetch(session.begin_fetch(URL), listing)
    good_tree = session.tree

    with pytest.raises(DuplicatePathError):
        session.excluded_folders = []
    assert session.excluded_folders == (".git", "node_modules")
    assert session.tree is good_tree

    # A later fetch still builds with the unchanged exclusions
    assert session.complete_fetch(session.begin_fetch(URL), listing) is True
    assert session.tree.get_node("node_modules") is None


@pytest.mark.parametrize(
    "url",
    [
        "https://github.com/octocat/Hello-World.git",
        "http://github.com/octocat/Hello-World",
        "  https://github.com/octocat/Hello-World/tree/dev/src/ ",
    ],
)
def test_repository_url_is_canonical(url):
    history = RecentRepositories(InMemoryHistoryStore())
    session = RepoTreeSession(history=history)
    session.complete_fetch(session.begin_fetch(url), LISTING)
    assert session.repo_url == URL
    assert session.node_url("src") == URL + "/tree/main/src"
    assert session.recent_repositories() == [URL]


def test_fail_fetch():
    session = RepoTreeSession()
    first = session.begin_fetch(URL)
    second = session.begin_fetch(URL)
    assert session.fail_fetch(first, "rate limited") is False
    assert session.error is None
    assert session.fail_fetch(second, RuntimeError("Repository not found")) is True
    assert session.error == "Repository not found"

    session.begin_fetch(URL)
    assert session.error is None


def test_node_url_follows_branch():
    session = RepoTreeSession(branch="dev")
    with pytest.raises(ValueError, match="No repository has been fetched"):
        session.node_url("src/app.py")

    session.begin_fetch(URL + "/")
    assert session.node_url("src/app.py") == URL + "/tree/dev/src/app.py"
    session.branch = "main"
    assert session.node_url("docs") == URL + "/tree/main/docs"


def test_successful_fetch_is_recorded_in_history():
    history = RecentRepositories(InMemoryHistoryStore())
    session = RepoTreeSession(history=history)
    assert session.recent_repositories() == []

    session.complete_fetch(session.begin_fetch(URL), LISTING)
    stale = session.begin_fetch("https://github.com/octocat/Spoon-Knife")
    session.fail_fetch(stale, "not found")
    assert session.recent_repositories() == [URL]


def test_reset():
    session = RepoTreeSession()
    session.complete_fetch(session.begin_fetch(URL), LISTING)
    session.reset()
    assert session.tree is None
    session.excluded_folders = ["src"]
    assert session.tree is None


def test_concurrent_completions_keep_latest():
    session = RepoTreeSession()
    requests = [session.begin_fetch(URL) for _ in range(10)]
    results = {}

    def complete(request_id):
        results[request_id] = session.complete_fetch(request_id, [{"path": f"f{request_id}.txt", "type": "file"}])

    threads = [threading.Thread(target=complete, args=(r,)) for r in reversed(requests)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert [r for r, applied in results.items() if applied] == [requests[-1]]
    assert session.tree.get_node(f"f{requests[-1]}.txt") is not None
