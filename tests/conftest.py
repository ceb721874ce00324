"""Test configuration and fixtures for repotree."""

import json
import sys

import pytest

from repotree.path_record import normalize_record


@pytest.fixture
def sample_records():
    """A small listing that omits the intermediate directories."""
    return [
        normalize_record("a/b.txt", "file", 100),
        normalize_record("a/c/d.txt", "file", 2048),
    ]


@pytest.fixture
def github_payload():
    """A git/trees response with an excluded folder, a submodule and an empty file."""
    return {
        "sha": "9fb037999f264ba9a7fc6274d15fa3ae2ab98312",
        "truncated": False,
        "tree": [
            {"path": ".git", "type": "tree"},
            {"path": ".git/HEAD", "type": "blob", "size": 23},
            {"path": "README.md", "type": "blob", "size": 1536},
            {"path": "src", "type": "tree"},
            {"path": "src/app.py", "type": "blob", "size": 512},
            {"path": "src/__init__.py", "type": "blob", "size": 0},
            {"path": "node_modules/react/index.js", "type": "blob", "size": 190},
            {"path": "vendor/lib", "type": "commit"},
        ],
    }


@pytest.fixture
def listing_file(tmp_path, github_payload):
    """The sample git/trees response written to a JSON file."""
    path = tmp_path / "tree.json"
    path.write_text(json.dumps(github_payload), encoding="utf-8")
    return path


@pytest.fixture
def deep_records():
    """A single file nested more directories deep than the interpreter's recursion limit."""
    depth = sys.getrecursionlimit() + 200
    return [normalize_record("/".join(["d"] * depth + ["leaf.txt"]), "file", 1)]
