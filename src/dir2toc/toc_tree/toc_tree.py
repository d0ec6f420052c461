"""Filtered directory tree for table-of-contents generation.

This module provides the TocTree class, which walks a directory once, consults the
exclusion rules before entering any entry, and keeps only the directories that end
up containing at least one included file.
"""

import os
from pathlib import Path
from typing import List, Optional

from anytree import PreOrderIter

from dir2toc.exceptions import ScanError
from dir2toc.exclusion_rules.base_rules import BaseExclusionRules
from dir2toc.toc_tree.directory_node import DirectoryNode
from dir2toc.types import PathType


class TocTree:
    """A filtered tree of the files under a scan root.

    The tree is built by a single depth-first traversal. Every entry's path relative
    to the scan root is checked against the exclusion rules before anything else
    happens to it. An excluded directory is never entered, so nothing beneath it can
    appear in the tree, even a path a later negation rule would re-include on its own.

    Symbolic links are skipped entirely, as are entries that are neither regular
    files nor directories. A directory with no included files anywhere beneath it
    gets no node. Entries are recorded in the order the filesystem lists them;
    ordering for display is left to the renderers.

    The tree is built lazily on first access and can be rebuilt with refresh().

    Attributes:
        root_path (Path): The scan root.
        exclusion_rules (Optional[BaseExclusionRules]): Rules for excluding entries.

    Example:
        >>> tree = TocTree(".")  # doctest: +SKIP
        >>> root = tree.get_tree()  # doctest: +SKIP
        >>> sorted(root.files)  # doctest: +SKIP
        ['README.md', 'setup.cfg']
    """

    def __init__(self, root_path: PathType, exclusion_rules: Optional[BaseExclusionRules] = None) -> None:
        """Initialize a TocTree.

        Args:
            root_path: Path to the directory to scan. Can be any path-like object.
            exclusion_rules: Rules for excluding files and directories. Defaults to None,
                which includes everything.
        """
        self.root_path = Path(root_path)
        self.exclusion_rules = exclusion_rules
        self._tree: Optional[DirectoryNode] = None
        self._file_count: int = 0
        self._directory_count: int = 0

    def get_tree(self) -> DirectoryNode:
        """Get the root node of the filtered tree, building it if needed.

        Returns:
            The root node. It has an empty name and may itself be empty.

        Raises:
            FileNotFoundError: If the root path doesn't exist.
            NotADirectoryError: If the root path isn't a directory.
            ScanError: If any directory cannot be read.
        """
        if self._tree is None:
            self._build_tree()
        assert self._tree is not None
        return self._tree

    def _build_tree(self) -> None:
        """Build the filtered tree from the root path and update the counts.

        Raises:
            FileNotFoundError: If the root path doesn't exist.
            NotADirectoryError: If the root path isn't a directory.
            ScanError: If any directory cannot be read.
        """
        if not self.root_path.exists():
            raise FileNotFoundError(f"Root path does not exist: {self.root_path}")
        if not self.root_path.is_dir():
            raise NotADirectoryError(f"Root path is not a directory: {self.root_path}")

        root = self._scan_directory(self.root_path, "")
        self._tree = root if root is not None else DirectoryNode("")
        self._count_files_and_directories()

    def _is_included(self, relative_path: str) -> bool:
        if self.exclusion_rules is None:
            return True
        return not self.exclusion_rules.exclude(relative_path)

    def _scan_directory(self, path: Path, relative_path: str) -> Optional[DirectoryNode]:
        """Recursively scan one directory.

        Args:
            path: Filesystem path of the directory.
            relative_path: The directory's path relative to the scan root ("" for the root).

        Returns:
            A node for the directory, or None if nothing beneath it was included.

        Raises:
            ScanError: If this directory or any directory beneath it cannot be read.
        """
        files: List[str] = []
        subdirectories: List[DirectoryNode] = []

        try:
            with os.scandir(path) as entries:
                for entry in entries:
                    if entry.is_symlink():
                        continue

                    child_relative_path = f"{relative_path}/{entry.name}" if relative_path else entry.name
                    if entry.is_dir(follow_symlinks=False):
                        if not self._is_included(child_relative_path):
                            continue
                        child = self._scan_directory(Path(entry.path), child_relative_path)
                        if child is not None:
                            subdirectories.append(child)
                    elif entry.is_file(follow_symlinks=False):
                        if self._is_included(child_relative_path):
                            files.append(entry.name)
        except ScanError:
            raise
        except OSError as e:
            raise ScanError(str(path), e.strerror or e) from e

        if not files and not subdirectories:
            return None

        name = path.name if relative_path else ""
        node = DirectoryNode(name, files=files)
        for child in subdirectories:
            node.add_subdirectory(child)
        return node

    def _count_files_and_directories(self) -> None:
        """Count the included files and the directories below the root."""
        self._file_count = 0
        self._directory_count = 0
        if self._tree is None:
            return

        for node in PreOrderIter(self._tree):
            self._file_count += len(node.files)
            if node is not self._tree:
                self._directory_count += 1

    def get_file_count(self) -> int:
        """Get the total number of included files in the tree."""
        if self._tree is None:
            self._build_tree()
        return self._file_count

    def get_directory_count(self) -> int:
        """Get the number of directories in the tree, not counting the root."""
        if self._tree is None:
            self._build_tree()
        return self._directory_count

    def refresh(self) -> None:
        """Rebuild the tree to reflect the current filesystem state."""
        self._tree = None
        self._file_count = 0
        self._directory_count = 0
        self._build_tree()
