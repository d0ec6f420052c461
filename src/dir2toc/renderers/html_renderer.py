"""HTML renderer producing a nested-list table of contents."""

from html import escape as html_escape
from typing import Iterator
from urllib.parse import quote

from dir2toc.config import DEFAULT_TITLE
from dir2toc.toc_tree.directory_node import DirectoryNode

from .base_renderer import TreeRenderer


class HTMLTreeRenderer(TreeRenderer):
    """Renderer that formats the tree as a standalone HTML document.

    Each directory becomes a list item labelled with its name and a trailing slash,
    holding a nested <ul> of its contents. Each file becomes a list item linking to
    the file's path relative to the scan root, so the document works when saved in
    the scan root. Names are HTML-escaped and link targets are URL-quoted.

    Example:
        >>> root = DirectoryNode("", files={"a&b.md"})
        >>> _ = DirectoryNode("docs", parent=root, files={"my notes.md"})
        >>> print("".join(HTMLTreeRenderer().render_list(root)), end="")
        <ul>
          <li>docs/
            <ul>
              <li><a href="docs/my%20notes.md">my notes.md</a></li>
            </ul>
          </li>
          <li><a href="a%26b.md">a&amp;b.md</a></li>
        </ul>
    """

    def __init__(self, title: str = DEFAULT_TITLE) -> None:
        """Initialize the HTML renderer.

        Args:
            title: Text for the document's <title> and top-level heading.
        """
        self.title = title

    def render(self, root: DirectoryNode) -> Iterator[str]:
        title = html_escape(self.title)
        yield "<!DOCTYPE html>\n"
        yield '<html lang="en">\n'
        yield "<head>\n"
        yield '<meta charset="utf-8">\n'
        yield f"<title>{title}</title>\n"
        yield "</head>\n"
        yield "<body>\n"
        yield f"<h1>{title}</h1>\n"
        yield from self.render_list(root)
        yield "</body>\n"
        yield "</html>\n"

    def render_list(self, node: DirectoryNode, depth: int = 0) -> Iterator[str]:
        """Render the nested list for ``node`` without the surrounding document."""
        indent = "  " * depth
        subdirectories, files = self.sorted_entries(node)

        yield f"{indent}<ul>\n"
        for child in subdirectories:
            yield f"{indent}  <li>{html_escape(child.name)}/\n"
            yield from self.render_list(child, depth + 2)
            yield f"{indent}  </li>\n"

        prefix = node.relative_path
        for file_name in files:
            relative_path = f"{prefix}/{file_name}" if prefix else file_name
            href = html_escape(quote(relative_path))
            yield f'{indent}  <li><a href="{href}">{html_escape(file_name)}</a></li>\n'
        yield f"{indent}</ul>\n"

    def get_file_extension(self) -> str:
        """Get the file extension for HTML output.

        Example:
            >>> HTMLTreeRenderer().get_file_extension()
            '.html'
        """
        return ".html"
