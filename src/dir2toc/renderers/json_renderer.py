"""JSON renderer producing a nested object per directory."""

import json
from typing import Any, Dict, Iterator

from dir2toc.toc_tree.directory_node import DirectoryNode

from .base_renderer import TreeRenderer


class JSONTreeRenderer(TreeRenderer):
    """Renderer that formats the tree as one JSON document.

    Every directory is an object with its name, its sorted file names and its sorted
    subdirectory objects. The root's name is the empty string.

    Example:
        >>> root = DirectoryNode("", files={"README.md"})
        >>> _ = DirectoryNode("docs", parent=root, files={"index.md"})
        >>> JSONTreeRenderer().to_dict(root)["directories"][0]
        {'name': 'docs', 'files': ['index.md'], 'directories': []}
    """

    def __init__(self, indent: int = 2) -> None:
        self.indent = indent

    def to_dict(self, node: DirectoryNode) -> Dict[str, Any]:
        subdirectories, files = self.sorted_entries(node)
        return {
            "name": node.name,
            "files": files,
            "directories": [self.to_dict(child) for child in subdirectories],
        }

    def render(self, root: DirectoryNode) -> Iterator[str]:
        yield json.dumps(self.to_dict(root), indent=self.indent, ensure_ascii=False) + "\n"

    def get_file_extension(self) -> str:
        return ".json"
