"""Unit tests for the DirectoryNode class."""

import pytest

from dir2toc.toc_tree.directory_node import DirectoryNode


def test_directory_node_initialization():
    node = DirectoryNode("docs")
    assert node.name == "docs"
    assert node.files == set()
    assert node.children == ()
    assert node.parent is None
    assert node.is_empty()


def test_directory_node_with_files():
    node = DirectoryNode("", files=["a.txt", "b.txt", "a.txt"])
    assert node.files == {"a.txt", "b.txt"}
    assert not node.is_empty()


def test_parent_child_relationships():
    root = DirectoryNode("")
    docs = DirectoryNode("docs", parent=root)
    guide = DirectoryNode("guide", parent=docs, files={"install.md"})

    assert docs.parent is root
    assert root.subdirectories == {"docs": docs}
    assert docs.subdirectories == {"guide": guide}
    assert not root.is_empty()


def test_relative_path():
    root = DirectoryNode("")
    docs = DirectoryNode("docs", parent=root)
    guide = DirectoryNode("guide", parent=docs)

    assert root.relative_path == ""
    assert docs.relative_path == "docs"
    assert guide.relative_path == "docs/guide"


def test_duplicate_subdirectory_name_rejected():
    root = DirectoryNode("")
    DirectoryNode("docs", parent=root)
    with pytest.raises(ValueError):
        DirectoryNode("docs", parent=root)


def test_add_subdirectory():
    root = DirectoryNode("")
    docs = DirectoryNode("docs", files={"index.md"})
    root.add_subdirectory(docs)
    assert docs.parent is root

    with pytest.raises(ValueError):
        root.add_subdirectory(DirectoryNode("docs"))


def test_subdirectory_index_follows_detach_and_reattach():
    root = DirectoryNode("")
    other = DirectoryNode("other")
    docs = DirectoryNode("docs", parent=root)

    docs.parent = other
    assert root.subdirectories == {}
    assert other.subdirectories == {"docs": docs}

    docs.parent = None
    assert other.subdirectories == {}
    root.add_subdirectory(DirectoryNode("docs"))
    assert list(root.subdirectories) == ["docs"]


def test_rejected_duplicate_leaves_index_unchanged():
    root = DirectoryNode("")
    docs = DirectoryNode("docs", parent=root)
    duplicate = DirectoryNode("docs")

    with pytest.raises(ValueError):
        root.add_subdirectory(duplicate)
    assert duplicate.parent is None
    assert root.subdirectories == {"docs": docs}
    assert root.children == (docs,)


def test_subdirectories_view_is_read_only():
    root = DirectoryNode("")
    with pytest.raises(TypeError):
        root.subdirectories["docs"] = DirectoryNode("docs")


def test_many_subdirectories_are_indexed_by_name():
    root = DirectoryNode("")
    for i in range(500):
        root.add_subdirectory(DirectoryNode(f"dir{i:03d}"))

    assert len(root.subdirectories) == 500
    assert root.subdirectories["dir123"].relative_path == "dir123"
