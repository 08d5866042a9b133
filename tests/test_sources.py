"""
Tests for tree source implementations.
"""
from __future__ import annotations

import os
from pathlib import Path

import pytest

from merkledag.builder import add
from merkledag.sources import LocalDir, LocalFile, MemoryDir, MemoryFile, open_path
from merkledag.storage.memory import MemoryStore
from merkledag.tree_types import DirNode, FileNode, NodeKind


class TestMemorySources:
    """Test in-memory nodes."""

    def test_file(self):
        node = MemoryFile("a.txt", b"hi")
        assert node.kind is NodeKind.FILE
        assert node.size == 2
        assert node.read_bytes() == b"hi"
        assert isinstance(node, FileNode)

    def test_dir_size_is_sum_of_children(self, sample_tree):
        assert sample_tree.kind is NodeKind.DIRECTORY
        assert sample_tree.size == 5 + 11 + 5
        assert isinstance(sample_tree, DirNode)

    def test_dir_iteration_is_restartable(self, sample_tree):
        first = [child.name for child in sample_tree.iter_children()]
        second = [child.name for child in sample_tree.iter_children()]
        assert first == second == ["readme.md", "src", "empty"]

    def test_empty_dir(self):
        node = MemoryDir("empty")
        assert node.size == 0
        assert list(node.iter_children()) == []


class TestLocalSources:
    """Test filesystem-backed nodes."""

    def test_file(self, tmp_path):
        path = tmp_path / "data.bin"
        path.write_bytes(b"\x00\x01\x02")

        node = LocalFile(path)

        assert node.kind is NodeKind.FILE
        assert node.name == "data.bin"
        assert node.size == 3
        assert node.read_bytes() == b"\x00\x01\x02"

    def test_children_sorted_by_name(self, tmp_path):
        for name in ["zeta", "alpha", "Mid"]:
            (tmp_path / name).write_text(name)
        (tmp_path / "beta").mkdir()

        names = [child.name for child in LocalDir(tmp_path).iter_children()]

        assert names == ["Mid", "alpha", "beta", "zeta"]

    def test_child_kinds(self, local_tree):
        children = {child.name: child for child in LocalDir(local_tree).iter_children()}

        assert isinstance(children["readme.md"], LocalFile)
        assert isinstance(children["src"], LocalDir)
        assert children["src"].kind is NodeKind.DIRECTORY

    def test_dir_size_is_recursive(self, local_tree):
        assert LocalDir(local_tree).size == 5 + 11 + 5

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks not supported")
    def test_symlinks_skipped_by_default(self, tmp_path):
        (tmp_path / "real.txt").write_text("real")
        os.symlink(tmp_path / "real.txt", tmp_path / "alias.txt")

        names = [child.name for child in LocalDir(tmp_path).iter_children()]
        followed = [child.name for child in LocalDir(tmp_path, follow_symlinks=True).iter_children()]

        assert names == ["real.txt"]
        assert followed == ["alias.txt", "real.txt"]

    def test_each_directory_listed_once(self, tmp_path, monkeypatch):
        deepest = tmp_path / "root"
        for depth in range(7):
            deepest = deepest / f"d{depth}"
        deepest.mkdir(parents=True)
        (deepest / "leaf.txt").write_bytes(b"leaf")

        listed = []
        original_iterdir = Path.iterdir

        def counting_iterdir(self):
            listed.append(self)
            return original_iterdir(self)

        monkeypatch.setattr(Path, "iterdir", counting_iterdir)
        root = LocalDir(tmp_path / "root")

        add(MemoryStore(), root)

        assert len(listed) == 8
        assert len(set(listed)) == 8
        assert root.size == 4

    def test_size_and_children_share_instances(self, local_tree):
        root = LocalDir(local_tree)

        first = list(root.iter_children())
        second = list(root.iter_children())

        assert all(a is b for a, b in zip(first, second))
        assert root.size == sum(child.size for child in first)

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks not supported")
    def test_followed_symlink_cycle_skipped(self, tmp_path):
        root = tmp_path / "root"
        (root / "sub").mkdir(parents=True)
        (root / "sub" / "f.txt").write_bytes(b"x")
        os.symlink(root, root / "sub" / "back")

        node = LocalDir(root, follow_symlinks=True)
        sub = next(node.iter_children())

        assert [child.name for child in sub.iter_children()] == ["f.txt"]
        assert node.size == 1
        assert add(MemoryStore(), node) == add(MemoryStore(), LocalDir(root))

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks not supported")
    def test_followed_symlink_to_sibling_kept(self, tmp_path):
        root = tmp_path / "root"
        (root / "a").mkdir(parents=True)
        (root / "a" / "f.txt").write_bytes(b"x")
        os.symlink(root / "a", root / "b")

        names = [child.name for child in LocalDir(root, follow_symlinks=True).iter_children()]

        assert names == ["a", "b"]

    def test_matches_equivalent_memory_tree(self, local_tree):
        memory_tree = MemoryDir("root", [
            MemoryDir("empty", []),
            MemoryFile("readme.md", b"hello"),
            MemoryDir("src", [
                MemoryFile("copy.md", b"hello"),
                MemoryFile("main.py", b"print('hi')"),
            ]),
        ])

        assert add(MemoryStore(), LocalDir(local_tree)) == add(MemoryStore(), memory_tree)


class TestOpenPath:
    """Test path to node resolution."""

    def test_file(self, tmp_path):
        path = tmp_path / "f.txt"
        path.write_text("x")

        node = open_path(path)

        assert isinstance(node, LocalFile)
        assert node.name == "f.txt"

    def test_directory(self, local_tree):
        node = open_path(str(local_tree))

        assert isinstance(node, LocalDir)
        assert node.name == "root"

    def test_relative_dot_gets_real_name(self, local_tree, monkeypatch):
        monkeypatch.chdir(local_tree)

        assert open_path(".").name == "root"

    def test_missing_path(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="Path not found"):
            open_path(tmp_path / "missing")

    def test_follow_symlinks_passed_through(self, local_tree):
        node = open_path(local_tree, follow_symlinks=True)
        assert node.follow_symlinks is True
