"""Command-line interface for dir2toc.

This module provides the command-line entry point, which assembles the layered
exclusion rules, scans the directory and writes the rendered table of contents.

The scan completes before any output is written, so a failing scan produces no
output at all. File output is staged and moved into place only on success.

Exit Codes:
    0: Successful completion
    1: Runtime error (malformed rule, unreadable directory, bad arguments, ...)
    2: Command-line syntax error
    130: Interrupted by SIGINT (Ctrl+C)
    141: Broken pipe (SIGPIPE) on Unix-like systems

Example:
    # HTML table of contents for the current directory
    $ dir2toc > toc.html

    # Text tree of a docs directory without the global rules
    $ dir2toc docs --no-global -f text
"""

import argparse
import sys

from dir2toc.cli.argparser import RULES_FILE, create_parser, validate_args
from dir2toc.cli.safe_writer import SafeWriter
from dir2toc.cli.signal_handler import setup_signal_handling, signal_handler
from dir2toc.exclusion_rules.glob_rules import GlobExclusionRules
from dir2toc.renderers import RENDERERS, HTMLTreeRenderer, TreeRenderer
from dir2toc.toc_tree.toc_tree import TocTree


def format_counts(directories: int, files: int) -> str:
    """Format the tree counts into a human-readable string.

    Example:
        >>> print(format_counts(3, 12))
        Directories: 3
        Files: 12
    """
    return "\n".join([f"Directories: {directories}", f"Files: {files}"])


def build_exclusion_rules(args: argparse.Namespace) -> GlobExclusionRules:
    """Assemble the rules for a run: global, local, then -e/-i in command-line order.

    Raises:
        FileNotFoundError: If a file given with -e/--exclude does not exist.
        RuleSyntaxError: If any rule is not well-formed glob syntax.
    """
    exclusion_rules = GlobExclusionRules.from_sources(args.directory, use_global=not args.no_global)
    for kind, value in args.extra_rules or []:
        if kind == RULES_FILE:
            exclusion_rules.load_rules(value)
        else:
            exclusion_rules.add_rule(value)
    return exclusion_rules


def create_renderer(args: argparse.Namespace) -> TreeRenderer:
    if args.format == "html":
        return HTMLTreeRenderer(title=args.title)
    return RENDERERS[args.format]()


def main() -> None:
    """Main entry point for the dir2toc command-line interface.

    Exit codes:
        0: Successful completion
        1: Runtime error during execution
        2: Command-line syntax error
        130: Interrupted by SIGINT (Ctrl+C)
        141: Broken pipe (SIGPIPE) on Unix-like systems
    """
    setup_signal_handling()

    try:
        parser = create_parser()
        args = parser.parse_args()
        validate_args(args)

        exclusion_rules = build_exclusion_rules(args)
        toc_tree = TocTree(args.directory, exclusion_rules)
        root = toc_tree.get_tree()
        renderer = create_renderer(args)

        output_file = args.output if args.output else sys.stdout.fileno()
        try:
            with SafeWriter(output_file) as safe_writer:
                for chunk in renderer.render(root):
                    safe_writer.write(chunk)
        except BrokenPipeError:
            pass  # Exit status is set from the recorded signal below

        if args.summary and not signal_handler.interrupted():
            summary_stream = sys.stdout if args.summary == "stdout" else sys.stderr
            print(
                format_counts(toc_tree.get_directory_count(), toc_tree.get_file_count()),
                file=summary_stream,
            )

        if root.is_empty():
            print(f"Warning: No files were included from {args.directory}", file=sys.stderr)

    except Exception as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(1)

    exit_code = signal_handler.exit_code()
    if exit_code is not None:
        sys.exit(exit_code)


if __name__ == "__main__":
    main()
