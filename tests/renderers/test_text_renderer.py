from dir2toc.renderers.text_renderer import TextTreeRenderer
from dir2toc.toc_tree.directory_node import DirectoryNode


def test_render_nested_tree():
    root = DirectoryNode("", files={"README.md"})
    a = DirectoryNode("a", parent=root, files={"x.txt"})
    DirectoryNode("b", parent=a, files={"y.txt", "z.txt"})
    DirectoryNode("c", parent=root, files={"w.txt"})

    expected = "\n".join(
        [
            "./",
            "├── a/",
            "│   ├── b/",
            "│   │   ├── y.txt",
            "│   │   └── z.txt",
            "│   └── x.txt",
            "├── c/",
            "│   └── w.txt",
            "└── README.md",
        ]
    )
    assert TextTreeRenderer().render_to_string(root) == expected + "\n"


def test_render_empty_tree():
    assert TextTreeRenderer().render_to_string(DirectoryNode("")) == "./\n"


def test_render_uses_code_point_order():
    root = DirectoryNode("", files={"b.txt", "B.txt", "a.txt"})
    lines = TextTreeRenderer().render_to_string(root).splitlines()
    assert lines[1:] == ["├── B.txt", "├── a.txt", "└── b.txt"]


def test_get_file_extension():
    assert TextTreeRenderer().get_file_extension() == ".txt"


def test_iter_file_paths_follows_presentation_order():
    root = DirectoryNode("", files={"b.txt", "A.txt"})
    docs = DirectoryNode("docs", parent=root, files={"index.md"})
    DirectoryNode("api", parent=docs, files={"ref.md"})

    assert list(TextTreeRenderer.iter_file_paths(root)) == [
        "docs/api/ref.md",
        "docs/index.md",
        "A.txt",
        "b.txt",
    ]
