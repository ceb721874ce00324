"""Command-line argument parsing for repotree.

This module defines the command-line interface for repotree,
handling argument parsing and validation.
"""

import argparse
import os
from pathlib import Path
from typing import Any, List, Optional, Sequence, Type, Union

from repotree import __version__
from repotree.exclusion_rules.base_rules import BaseExclusionRules


def create_exclusion_action(exclusion_rules: BaseExclusionRules) -> Type[argparse.Action]:
    """Create a custom action class for handling gitignore-style exclusion rules.

    This factory function creates an action class that updates the provided
    exclusion rules object as arguments are processed, so patterns from files and
    patterns given directly keep the exact order in which they appear on the
    command line.

    Args:
        exclusion_rules: The exclusion rules object to update during parsing.

    Returns:
        A custom action class for use with argparse.
    """

    class ExclusionRulesAction(argparse.Action):
        """Action to update exclusion rules as arguments are processed."""

        def __init__(self, option_strings: List[str], dest: str, **kwargs: Any) -> None:
            super().__init__(option_strings, dest, **kwargs)

        def __call__(
            self,
            parser: argparse.ArgumentParser,
            namespace: argparse.Namespace,
            values: Union[str, Sequence[Any], None],
            option_string: Optional[str] = None,
        ) -> None:
            if values is None:
                return

            if option_string in ("-e", "--exclude"):
                if isinstance(values, (str, os.PathLike)):
                    exclusion_rules.load_rules(values)
                else:
                    exclusion_rules.load_rules(Path(str(values)))
            else:  # -i/--ignore
                exclusion_rules.add_rule(str(values))

            if getattr(namespace, self.dest, None) is None:
                setattr(namespace, self.dest, [])
            getattr(namespace, self.dest).append(values)

    return ExclusionRulesAction


def create_parser(exclusion_rules: BaseExclusionRules) -> argparse.ArgumentParser:
    """Create and configure the command-line argument parser.

    Args:
        exclusion_rules: The pattern exclusion rules object to update during parsing.

    Returns:
        An ArgumentParser instance configured with repotree's options.
    """
    description = """
    repotree: Render a repository listing as a directory tree.

    Reads the flat path listing returned by a source-control hosting API (either a
    GitHub git/trees response or a JSON list of {"path", "type", "size"} records) and
    reconstructs the file/directory hierarchy, synthesizing any directories the
    listing leaves out.

    Key Features:
    - Tree-style visualization with file sizes
    - Folder exclusions (node_modules and .git by default)
    - Gitignore-style pattern and size exclusions
    - Search that keeps the ancestors of every match visible
    - Plain-text or JSON output, and per-node GitHub links
    """

    epilog = """
    Examples:
      # Render a GitHub trees response
      repotree tree.json

      # Read the listing from stdin
      curl -s https://api.github.com/repos/OWNER/REPO/git/trees/main?recursive=1 | repotree -

      # Exclude folders (replaces the default node_modules/.git exclusions)
      repotree -x docs -x tests tree.json

      # Keep every folder, including node_modules and .git
      repotree -x "" tree.json

      # Exclude with gitignore-style patterns and pattern files
      repotree -i "*.min.js" -e .gitignore tree.json

      # Drop files larger than 1 MiB
      repotree -m 1MiB tree.json

      # Show only matches for a search term and their ancestors
      repotree -s readme tree.json

      # Export as JSON to a file
      repotree -f json -o tree-export.json tree.json

      # List GitHub links for every visible node
      repotree -u -r https://github.com/OWNER/REPO -b main tree.json

      # Remember the repository and list recently viewed ones
      repotree -r https://github.com/OWNER/REPO --history ~/.repotree-history.json tree.json
      repotree --history ~/.repotree-history.json --recent
    """

    parser = argparse.ArgumentParser(
        prog="repotree",
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "-V", "--version", action="version", version=f"repotree {__version__}", help="Show the version and exit"
    )

    ExclusionAction = create_exclusion_action(exclusion_rules)

    parser.add_argument(
        "listing",
        nargs="?",
        help="JSON file holding the repository listing, or '-' to read it from stdin.",
    )
    parser.add_argument(
        "-x",
        "--exclude-folder",
        metavar="FOLDER",
        action="append",
        help=(
            "Folder name or relative path prefix to exclude together with everything beneath it "
            "(can be specified multiple times; default: node_modules and .git)."
        ),
    )
    parser.add_argument(
        "-e",
        "--exclude",
        type=Path,
        metavar="FILE",
        action=ExclusionAction,
        help="Path to a gitignore-style pattern file (can be specified multiple times).",
    )
    parser.add_argument(
        "-i",
        "--ignore",
        type=str,
        metavar="PATTERN",
        action=ExclusionAction,
        help=(
            "Individual gitignore-style pattern to exclude, such as '*.log', 'dist/' or '!keep.log' "
            "(can be specified multiple times, processed in order with -e/--exclude)."
        ),
    )
    parser.add_argument(
        "-m",
        "--max-size",
        metavar="SIZE",
        help="Exclude files whose reported size exceeds SIZE (e.g. 500KB, 1MiB, 2048).",
    )
    parser.add_argument(
        "-s",
        "--search",
        metavar="TERM",
        help="Only show entries whose name contains TERM (case-insensitive), plus their ancestors.",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=["text", "json"],
        default="text",
        help="Output format (default: text).",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        metavar="FILE",
        help="Output file path. If not specified, output is written to stdout.",
    )
    parser.add_argument(
        "-r",
        "--repo-url",
        metavar="URL",
        help="GitHub repository URL the listing belongs to.",
    )
    parser.add_argument(
        "-b",
        "--branch",
        default="main",
        help="Branch the listing belongs to, used for links (default: main).",
    )
    parser.add_argument(
        "-u",
        "--urls",
        action="store_true",
        help="Print each visible path with its GitHub link instead of the tree (requires -r/--repo-url).",
    )
    parser.add_argument(
        "--summary",
        action="store_true",
        help="Print directory and file counts to stderr.",
    )
    parser.add_argument(
        "--history",
        type=Path,
        metavar="FILE",
        help="JSON file in which recently viewed repositories are recorded.",
    )
    parser.add_argument(
        "--recent",
        action="store_true",
        help="Print recently viewed repositories from --history and exit.",
    )

    return parser


def validate_args(args: argparse.Namespace) -> None:
    """Validate command-line arguments.

    Performs additional validation beyond what argparse can handle.

    Args:
        args: Parsed command-line arguments.

    Raises:
        ValueError: If any arguments fail validation.
    """
    if args.recent:
        if not args.history:
            raise ValueError("--recent requires --history to be specified")
        return
    if not args.listing:
        raise ValueError("a listing file (or '-' for stdin) is required")
    if args.urls and not args.repo_url:
        raise ValueError("-u/--urls requires -r/--repo-url to be specified")
