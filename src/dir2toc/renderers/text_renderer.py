"""Plain-text renderer in the style of the Unix tree command."""

from typing import Iterator, List, Union

from dir2toc.toc_tree.directory_node import DirectoryNode

from .base_renderer import TreeRenderer


class TextTreeRenderer(TreeRenderer):
    """Renderer that draws the tree with box-drawing connectors.

    Example:
        >>> root = DirectoryNode("", files={"README.md"})
        >>> src = DirectoryNode("src", parent=root, files={"main.py", "util.py"})
        >>> print(TextTreeRenderer().render_to_string(root), end="")
        ./
        ├── src/
        │   ├── main.py
        │   └── util.py
        └── README.md
    """

    def render(self, root: DirectoryNode) -> Iterator[str]:
        yield "./\n"
        yield from self._render_children(root, "")

    def _render_children(self, node: DirectoryNode, prefix: str) -> Iterator[str]:
        subdirectories, files = self.sorted_entries(node)
        entries: List[Union[DirectoryNode, str]] = [*subdirectories, *files]

        for i, entry in enumerate(entries):
            is_last = i == len(entries) - 1
            connector = "└── " if is_last else "├── "
            if isinstance(entry, DirectoryNode):
                yield f"{prefix}{connector}{entry.name}/\n"
                yield from self._render_children(entry, prefix + ("    " if is_last else "│   "))
            else:
                yield f"{prefix}{connector}{entry}\n"

    def get_file_extension(self) -> str:
        return ".txt"
