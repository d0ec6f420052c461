"""Command-line argument parsing for dir2toc.

This module defines the command-line interface for dir2toc,
handling argument parsing and validation.
"""

import argparse
from pathlib import Path
from typing import Any, List, Optional, Sequence, Union

from dir2toc import __version__
from dir2toc.config import DEFAULT_ROOT, DEFAULT_TITLE, RULES_FILE_NAME
from dir2toc.renderers import RENDERERS

# Kinds of entries recorded by ExtraRulesAction
RULES_FILE = "file"
RULE_PATTERN = "pattern"


class ExtraRulesAction(argparse.Action):
    """Action recording -e/--exclude and -i/--ignore values in command-line order.

    Both options append to the same namespace list as (kind, value) pairs, so rule
    files and individual patterns can be layered in exactly the order given.
    """

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

        kind = RULES_FILE if option_string in ("-e", "--exclude") else RULE_PATTERN
        extra_rules = getattr(namespace, self.dest, None)
        if extra_rules is None:
            extra_rules = []
            setattr(namespace, self.dest, extra_rules)
        extra_rules.append((kind, values))


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the command-line argument parser.

    Returns:
        An ArgumentParser instance configured with dir2toc's options.
    """
    description = f"""
    dir2toc: build a table of contents for a directory tree.

    The directory is scanned once, depth first. Every file and directory is checked
    against an ordered list of glob exclusion rules before it is visited; excluded
    directories are never entered. The files that remain are rendered as a nested
    list, by default as an HTML document.

    Rules are read from two optional files named {RULES_FILE_NAME}:
    - the global file in your home directory (or the file named by
      DIR2TOC_GLOBAL_EXCLUDE), skipped with --no-global
    - the local file in the scanned directory

    Rule syntax, one rule per line:
    - blank lines and lines starting with '#' are ignored
    - '*' matches within a path segment, '**' across segments, '?' one character,
      '[...]' a character set and '{{a,b}}' either alternative
    - a trailing '/' ("build/") matches that directory at any depth and everything in it
    - a leading '!' re-includes paths excluded by an earlier rule
    - later rules override earlier ones, so local rules override global rules
    """

    epilog = """
    Examples:
      # Table of contents for the current directory, written to stdout
      dir2toc

      # Write the table of contents for a docs tree to a file
      dir2toc docs -o docs/index.html

      # Ignore the global rules file
      dir2toc --no-global

      # Layer extra rules on top of the rule files
      dir2toc -e extra-exclude -i "*.log" -i "!important.log"

      # Plain-text tree or JSON instead of HTML
      dir2toc -f text
      dir2toc -f json -o toc.json

      # Print directory and file counts to stderr
      dir2toc -s stderr -o toc.html
    """

    parser = argparse.ArgumentParser(
        prog="dir2toc",
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "-V", "--version", action="version", version=f"dir2toc {__version__}", help="Show the version and exit"
    )
    parser.add_argument(
        "directory",
        nargs="?",
        type=Path,
        default=Path(DEFAULT_ROOT),
        help="The directory to scan (default: the current directory). Links are relative to it.",
    )
    parser.add_argument(
        "--no-global",
        action="store_true",
        help=f"Do not load the global {RULES_FILE_NAME} file.",
    )
    parser.add_argument(
        "-e",
        "--exclude",
        dest="extra_rules",
        type=Path,
        metavar="FILE",
        action=ExtraRulesAction,
        help=(
            "Additional rules file layered on top of the global and local rule files "
            "(can be specified multiple times). The file must exist."
        ),
    )
    parser.add_argument(
        "-i",
        "--ignore",
        dest="extra_rules",
        type=str,
        metavar="PATTERN",
        action=ExtraRulesAction,
        help=(
            "Individual rule layered on top of the rule files, e.g. '*.log', 'build/' or "
            "'!important.log'. Can be specified multiple times; -e and -i are applied in "
            "the order they appear."
        ),
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=sorted(RENDERERS),
        default="html",
        help="Output format (default: html).",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        metavar="FILE",
        help="Output file path. If not specified, output is written to stdout.",
    )
    parser.add_argument(
        "--title",
        default=DEFAULT_TITLE,
        help=f"Document title for HTML output (default: {DEFAULT_TITLE!r}).",
    )
    parser.add_argument(
        "-s",
        "--summary",
        metavar="DEST",
        choices=["stderr", "stdout"],
        help="Print directory and file counts. Valid destinations: stderr, stdout",
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
    if not args.directory.is_dir():
        raise ValueError(f"'{args.directory}' is not a valid directory")
    if args.output is not None and args.output.is_dir():
        raise ValueError(f"Output path is a directory: {args.output}")
    if args.output is not None and not args.output.parent.is_dir():
        raise ValueError(f"Output directory does not exist: {args.output.parent}")
    if args.summary == "stdout" and args.output is None:
        raise ValueError("--summary=stdout requires -o/--output so the summary does not mix with the output")
