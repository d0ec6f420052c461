"""Node representation for directories in the filtered tree."""

from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Optional, Set

from anytree import Node


class DirectoryNode(Node):  # type: ignore
    """Node class representing one directory of the filtered tree.

    Extends anytree.Node so that subdirectories are ordinary anytree children, with
    the directory's own files kept in a set on the node. The root of a scan has an
    empty name.

    Subdirectory names are unique within a parent, as are file names.

    Attributes:
        name (str): The directory's own name (empty for the scan root).
        parent (Optional[DirectoryNode]): The parent directory node.
        files (Set[str]): Names of the included files directly inside this directory.
        children (tuple[DirectoryNode]): Subdirectory nodes (inherited from anytree.Node).

    Example:
        >>> root = DirectoryNode("", files={"README.md"})
        >>> docs = DirectoryNode("docs", parent=root, files={"index.md"})
        >>> sorted(root.subdirectories)
        ['docs']
        >>> docs.relative_path
        'docs'
    """

    def __init__(
        self,
        name: str,
        parent: Optional["DirectoryNode"] = None,
        files: Optional[Iterable[str]] = None,
        **kwargs: Any,
    ) -> None:
        """Initialize a DirectoryNode.

        Args:
            name: The directory name.
            parent: The parent node. Defaults to None.
            files: Names of files directly inside the directory. Defaults to none.
            **kwargs: Additional arguments passed to anytree.Node.

        Raises:
            ValueError: If the parent already has a subdirectory with this name.
        """
        self._subdirectory_index: Dict[str, "DirectoryNode"] = {}
        super().__init__(name, parent, **kwargs)
        self.files: Set[str] = set(files) if files is not None else set()

    def _pre_attach(self, parent: Any) -> None:
        if isinstance(parent, DirectoryNode) and self.name in parent._subdirectory_index:
            raise ValueError(f"Directory '{self.name}' already exists under '{parent.relative_path}'")

    def _post_attach(self, parent: Any) -> None:
        if isinstance(parent, DirectoryNode):
            parent._subdirectory_index[self.name] = self

    def _post_detach(self, parent: Any) -> None:
        if isinstance(parent, DirectoryNode):
            parent._subdirectory_index.pop(self.name, None)

    @property
    def subdirectories(self) -> Mapping[str, "DirectoryNode"]:
        """Read-only mapping from subdirectory name to node."""
        return MappingProxyType(self._subdirectory_index)

    @property
    def relative_path(self) -> str:
        """Path of this directory relative to the scan root, using '/' separators."""
        return "/".join(node.name for node in self.path if node.name)

    def is_empty(self) -> bool:
        return not self.files and not self.children

    def add_subdirectory(self, node: "DirectoryNode") -> None:
        """Attach a detached node as a subdirectory.

        Raises:
            ValueError: If a subdirectory with the same name is already attached.
        """
        node.parent = self
