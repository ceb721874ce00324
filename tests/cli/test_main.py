"""Unit tests for the CLI main module."""

import io
import json
from unittest.mock import patch

import pytest

from repotree.cli.main import build_exclusion_rules, load_listing, main, records_from_payload
from repotree.exceptions import InvalidRecordError
from repotree.exclusion_rules.git_rules import GitIgnoreExclusionRules
from repotree.path_record import normalize_record

REPO = "https://github.com/octocat/Hello-World"


def run_main(argv, stdin=None):
    """Run the CLI in-process and return its exit code."""
    with patch("sys.argv", ["repotree"] + argv):
        if stdin is not None:
            with patch("sys.stdin", io.StringIO(stdin)):
                return _run()
        return _run()


def _run():
    try:
        main()
    except SystemExit as e:
        return e.code
    return 0


def test_default_exclusions(listing_file, capsys):
    assert run_main([str(listing_file)]) == 0
    out = capsys.readouterr().out
    assert out == (
        "├── src\n"
        "│   ├── __init__.py\n"
        "│   └── app.py (512.0 B)\n"
        "├── vendor\n"
        "│   └── lib\n"
        "└── README.md (1.5 KB)\n"
    )


def test_explicit_folder_exclusions_replace_defaults(listing_file, capsys):
    assert run_main(["-x", "src", "-x", "vendor", str(listing_file)]) == 0
    out = capsys.readouterr().out
    assert out == (
        "├── .git\n"
        "│   └── HEAD (23.0 B)\n"
        "├── node_modules\n"
        "│   └── react\n"
        "│       └── index.js (190.0 B)\n"
        "└── README.md (1.5 KB)\n"
    )


def test_empty_folder_exclusion_keeps_everything(listing_file, capsys):
    assert run_main(["-x", "", "-s", "HEAD", str(listing_file)]) == 0
    assert capsys.readouterr().out == "└── .git\n    └── HEAD (23.0 B)\n"


def test_pattern_and_size_exclusions(listing_file, capsys):
    assert run_main(["-i", "*.md", "-i", "vendor/", "-m", "100", str(listing_file)]) == 0
    assert capsys.readouterr().out == "└── src\n    └── __init__.py\n"


def test_search(listing_file, capsys):
    assert run_main(["-s", "APP", str(listing_file)]) == 0
    assert capsys.readouterr().out == "└── src\n    └── app.py (512.0 B)\n"


def test_json_output_to_file(listing_file, tmp_path, capsys):
    output = tmp_path / "out.json"
    assert run_main(["-f", "json", "-o", str(output), "-s", "readme", str(listing_file)]) == 0
    assert capsys.readouterr().out == ""
    assert json.loads(output.read_text(encoding="utf-8")) == [
        {"name": "README.md", "path": "README.md", "type": "file", "size": 1536}
    ]


def test_stdin_record_list(capsys):
    listing = json.dumps(
        [
            {"path": "a/b.txt", "type": "file", "size": 100},
            {"path": "a/c/d.txt", "type": "file", "size": 2048},
        ]
    )
    assert run_main(["-"], stdin=listing) == 0
    assert capsys.readouterr().out == "└── a\n    ├── b.txt (100.0 B)\n    └── c\n        └── d.txt (2.0 KB)\n"


def test_urls(listing_file, capsys):
    assert run_main(["-u", "-r", REPO + "/", "-b", "dev", "-s", "app", str(listing_file)]) == 0
    assert capsys.readouterr().out == (
        f"src\t{REPO}/tree/dev/src\n" f"src/app.py\t{REPO}/tree/dev/src/app.py\n"
    )


def test_summary(listing_file, capsys):
    assert run_main(["--summary", str(listing_file)]) == 0
    err = capsys.readouterr().err
    assert "Directories: 3" in err
    assert "Files: 3" in err
    assert "Total size: 2048" in err


def test_truncated_listing_warns(tmp_path, capsys):
    path = tmp_path / "tree.json"
    path.write_text(json.dumps({"tree": [{"path": "a.txt", "type": "blob"}], "truncated": True}), encoding="utf-8")
    assert run_main([str(path)]) == 0
    captured = capsys.readouterr()
    assert captured.out == "└── a.txt\n"
    assert captured.err.startswith("Warning: the listing was truncated")


def test_history(listing_file, tmp_path, capsys):
    history = tmp_path / "history.json"
    assert run_main(["-r", REPO, "--history", str(history), str(listing_file)]) == 0
    capsys.readouterr()

    assert run_main(["--history", str(history), "--recent"]) == 0
    assert capsys.readouterr().out == REPO + "\n"


@pytest.mark.parametrize(
    "argv,message",
    [
        ([], "a listing file"),
        (["-u", "tree.json"], "-u/--urls requires -r/--repo-url"),
        (["-r", "https://example.com/a/b", "tree.json"], "Invalid GitHub repository URL"),
        (["-e", "missing-rules-file", "tree.json"], "Rules file not found"),
        (["-m", "lots", "tree.json"], "Invalid size format"),
        (["does-not-exist.json"], "No such file"),
    ],
)
def test_errors_exit_with_1(argv, message, capsys):
    assert run_main(argv) == 1
    err = capsys.readouterr().err
    assert err.startswith("Error: ")
    assert message in err


@pytest.mark.parametrize(
    "content,message",
    [
        ("not json", "Listing is not valid JSON"),
        ('{"sha": "x"}', "Listing must be a GitHub trees response"),
        ('[{"path": "a", "type": "file"}, {"path": "a", "type": "file"}]', "Duplicate path in listing: a"),
        ('[{"path": "/a", "type": "file"}]', "Invalid path '/a'"),
    ],
)
def test_invalid_listing_exit_with_1(tmp_path, capsys, content, message):
    path = tmp_path / "tree.json"
    path.write_text(content, encoding="utf-8")
    assert run_main([str(path)]) == 1
    assert message in capsys.readouterr().err


def test_syntax_error_exits_with_2(capsys):
    assert run_main(["--format", "xml", "tree.json"]) == 2


def test_load_listing_from_stdin():
    assert load_listing("-", stdin=io.StringIO('{"tree": []}')) == {"tree": []}


def test_records_from_payload():
    assert records_from_payload({"tree": [{"path": "a", "type": "tree"}]}) == [normalize_record("a", "dir")]
    assert records_from_payload([{"path": "a", "type": "dir"}]) == [normalize_record("a", "dir")]
    with pytest.raises(InvalidRecordError):
        records_from_payload("a")


def test_build_exclusion_rules():
    patterns = GitIgnoreExclusionRules()
    defaults = build_exclusion_rules(None, patterns)
    assert defaults.exclude("node_modules/x.js")
    assert len(defaults.get_rules()) == 1

    patterns.add_rule("*.log")
    combined = build_exclusion_rules([], patterns, "1KB")
    assert not combined.exclude("node_modules/x.js")
    assert combined.exclude("debug.log")
    assert combined.exclude_record(normalize_record("big.bin", "file", 2000))


def test_repository_url_is_canonical(listing_file, tmp_path, capsys):
    history = tmp_path / "history.json"
    argv = ["-u", "-r", REPO + ".git", "-s", "readme", "--history", str(history), str(listing_file)]
    assert run_main(argv) == 0
    assert capsys.readouterr().out == f"README.md\t{REPO}/tree/main/README.md\n"

    assert run_main(["--history", str(history), "--recent"]) == 0
    assert capsys.readouterr().out == REPO + "\n"
