"""Renderer base class defining the interface for table-of-contents output.

A renderer receives the finished root node of a filtered tree and produces the
complete output document as a stream of strings. Renderers own presentation order:
the tree itself is unordered, and every renderer lists a directory's subdirectories
first and its files second, each in code-point order of their names.
"""

from abc import ABC, abstractmethod
from typing import Iterator, List, Tuple

from dir2toc.toc_tree.directory_node import DirectoryNode


class TreeRenderer(ABC):
    """Abstract base class for table-of-contents renderers.

    Example:
        >>> class FlatRenderer(TreeRenderer):
        ...     def render(self, root):
        ...         for path in self.iter_file_paths(root):
        ...             yield path + "\\n"
        ...
        ...     def get_file_extension(self) -> str:
        ...         return ".lst"
        >>> root = DirectoryNode("", files={"b.txt", "a.txt"})
        >>> _ = DirectoryNode("docs", parent=root, files={"index.md"})
        >>> print("".join(FlatRenderer().render(root)), end="")
        docs/index.md
        a.txt
        b.txt
    """

    @abstractmethod
    def render(self, root: DirectoryNode) -> Iterator[str]:
        """Render the tree rooted at ``root``.

        Args:
            root: The root node of the filtered tree.

        Yields:
            Consecutive pieces of the output document. Joining them gives the whole
            document.
        """
        pass

    @abstractmethod
    def get_file_extension(self) -> str:
        """Get the appropriate file extension for this output format.

        Returns:
            The file extension including the leading dot (e.g., ".html").
        """
        pass

    def render_to_string(self, root: DirectoryNode) -> str:
        """Render the whole document into a single string."""
        return "".join(self.render(root))

    @staticmethod
    def sorted_entries(node: DirectoryNode) -> Tuple[List[DirectoryNode], List[str]]:
        """Return a node's subdirectories and file names in presentation order."""
        return sorted(node.children, key=lambda child: child.name), sorted(node.files)

    @classmethod
    def iter_file_paths(cls, node: DirectoryNode) -> Iterator[str]:
        """Yield the relative path of every file under ``node`` in presentation order."""
        subdirectories, files = cls.sorted_entries(node)
        for child in subdirectories:
            yield from cls.iter_file_paths(child)
        prefix = node.relative_path
        for file_name in files:
            yield f"{prefix}/{file_name}" if prefix else file_name
