"""Directory to table-of-contents conversion utilities.

This package scans a directory tree, filters it through layered glob exclusion
rules and renders the surviving files as a nested table of contents.
"""

from importlib.metadata import PackageNotFoundError, version

# Expose the version for both programmatic use and CLI
try:
    __version__ = version("dir2toc")
except PackageNotFoundError:
    __version__ = "unknown"
