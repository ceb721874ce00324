"""Command-line interface for repotree.

This module provides the command-line interface for repotree, which renders the flat
listing returned by a source-control hosting API as a directory tree. It handles
argument parsing, loading the listing, assembling exclusion rules, and writing output.

Exit Codes:
    0: Successful completion
    1: Runtime error (invalid listing, invalid URL, unreadable file, ...)
    2: Command-line syntax error

Example:
    # Render a GitHub trees response with default exclusions
    $ repotree tree.json

    # Search, then export as JSON
    $ repotree tree.json -s config -f json -o config.json
"""

import json
import sys
from collections.abc import Mapping
from typing import Any, Iterable, Iterator, List, Optional, TextIO

from repotree.cli.argparser import create_parser, validate_args
from repotree.exceptions import InvalidRecordError
from repotree.exclusion_rules.base_rules import BaseExclusionRules
from repotree.exclusion_rules.composite_rules import CompositeExclusionRules
from repotree.exclusion_rules.folder_rules import FolderExclusionRules
from repotree.exclusion_rules.git_rules import GitIgnoreExclusionRules
from repotree.exclusion_rules.size_rules import SizeExclusionRules
from repotree.github import is_truncated, node_url, parse_github_url, records_from_github_tree, repository_url
from repotree.history import JSONFileHistoryStore, RecentRepositories
from repotree.output_strategies.base_strategy import OutputStrategy
from repotree.output_strategies.json_strategy import JSONOutputStrategy
from repotree.output_strategies.text_strategy import TextOutputStrategy
from repotree.path_record import PathRecord, records_from_mappings
from repotree.repository import RepoTree
from repotree.session import DEFAULT_EXCLUDED_FOLDERS


def format_counts(tree: RepoTree) -> str:
    """Format the tree's counts into a human-readable string."""
    return "\n".join(
        [
            f"Directories: {tree.get_directory_count()}",
            f"Files: {tree.get_file_count()}",
            f"Total size: {tree.get_total_size()}",
        ]
    )


def load_listing(source: str, stdin: Optional[TextIO] = None) -> Any:
    """Read and decode a JSON listing from a file, or from stdin when source is '-'.

    Raises:
        FileNotFoundError: If the listing file does not exist.
        ValueError: If the content is not valid JSON.
    """
    if source == "-":
        text = (stdin or sys.stdin).read()
    else:
        with open(source, "r", encoding="utf-8") as f:
            text = f.read()
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"Listing is not valid JSON: {e}")


def records_from_payload(payload: Any) -> List[PathRecord]:
    """Normalize either a GitHub trees response or a plain list of record mappings."""
    if isinstance(payload, Mapping) and "tree" in payload:
        return records_from_github_tree(payload)
    if isinstance(payload, list):
        return records_from_mappings(payload)
    raise InvalidRecordError("Listing must be a GitHub trees response or a list of records", record=payload)


def build_exclusion_rules(
    folders: Optional[Iterable[str]],
    pattern_rules: GitIgnoreExclusionRules,
    max_size: Optional[str] = None,
) -> BaseExclusionRules:
    """Combine folder, pattern and size exclusions into one rule object.

    Args:
        folders: Excluded folders; None selects the default exclusions.
        pattern_rules: Gitignore-style rules collected while parsing arguments.
        max_size: Optional human-readable size limit.
    """
    rules: List[BaseExclusionRules] = [
        FolderExclusionRules(folders if folders is not None else DEFAULT_EXCLUDED_FOLDERS)
    ]
    if pattern_rules.has_rules():
        rules.append(pattern_rules)
    if max_size is not None:
        rules.append(SizeExclusionRules(max_size))
    return CompositeExclusionRules(rules)


def stream_urls(tree: RepoTree, repo_url: str, branch: str, search_term: Optional[str]) -> Iterator[str]:
    for node in tree.walk(search_term):
        yield f"{node.path}\t{node_url(repo_url, branch, node.path)}\n"


def main() -> None:
    """Main entry point for the repotree command-line interface.

    Exit codes:
        0: Successful completion
        1: Runtime error during execution
        2: Command-line syntax error
    """
    try:
        # Populated by the -e/-i actions while the arguments are parsed
        pattern_rules = GitIgnoreExclusionRules()
        parser = create_parser(pattern_rules)
        args = parser.parse_args()
        validate_args(args)

        if args.recent:
            for url in RecentRepositories(JSONFileHistoryStore(args.history)).recent():
                print(url)
            return

        history = RecentRepositories(JSONFileHistoryStore(args.history)) if args.history else None

        repo_url = None
        if args.repo_url:
            repo_url = repository_url(*parse_github_url(args.repo_url))

        exclusion_rules = build_exclusion_rules(args.exclude_folder, pattern_rules, args.max_size)

        payload = load_listing(args.listing)
        if is_truncated(payload):
            print("Warning: the listing was truncated by the API; the tree may be incomplete.", file=sys.stderr)

        tree = RepoTree(records_from_payload(payload), exclusion_rules=exclusion_rules)
        tree.get_forest()

        chunks: Iterable[str]
        if args.urls:
            chunks = stream_urls(tree, repo_url, args.branch, args.search)
        else:
            strategy: OutputStrategy = JSONOutputStrategy(indent=2) if args.format == "json" else TextOutputStrategy()
            chunks = strategy.format_forest(tree.get_forest(), args.search)

        if args.output:
            with open(args.output, "w", encoding="utf-8") as f:
                for chunk in chunks:
                    f.write(chunk)
        else:
            for chunk in chunks:
                sys.stdout.write(chunk)
            sys.stdout.flush()

        if args.summary:
            print(format_counts(tree), file=sys.stderr)

        if history is not None and repo_url is not None:
            history.record(repo_url)

    except Exception as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
