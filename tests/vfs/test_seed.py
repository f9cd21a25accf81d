"""Tests for the sample disk a new desktop starts with."""

from py_webos.vfs import QUICK_ACCESS, ROOT_ID, NodeKind, sample_filesystem


class TestSampleFilesystem:
    """Verify the sample folders and files."""

    def test_top_level_folders(self) -> None:
        """The root should hold the four sample folders in order."""
        vfs = sample_filesystem()
        names = [c.name for c in vfs.list_children(ROOT_ID)]
        assert names == ["Documents", "Pictures", "Projects", "System"]

    def test_well_known_ids(self) -> None:
        """Sample nodes should use their readable ids."""
        vfs = sample_filesystem()
        todo = vfs.get("todo")
        assert todo is not None
        assert todo.name == "todo.txt"
        assert todo.parent_id == "docs"
        assert todo.kind is NodeKind.FILE

    def test_file_content(self) -> None:
        """Sample files should carry their text."""
        vfs = sample_filesystem()
        assert vfs.read_file("sys_log") is not None
        assert "Kernel loaded" in vfs.read_file("sys_log")  # type: ignore[operator]

    def test_pictures_is_empty(self) -> None:
        """The Pictures folder starts empty."""
        assert sample_filesystem().list_children("pics") == []

    def test_sample_tree_is_consistent(self) -> None:
        """The seeded tree should satisfy every invariant."""
        assert sample_filesystem().check() == []

    def test_quick_access_targets_are_folders(self) -> None:
        """Every quick-access link should point at a sample folder."""
        vfs = sample_filesystem()
        assert [label for label, _ in QUICK_ACCESS] == ["This PC", "Documents", "Pictures"]
        for _label, folder_id in QUICK_ACCESS:
            node = vfs.get(folder_id)
            assert node is not None
            assert node.is_folder
