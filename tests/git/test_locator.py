"""Tests for repository root discovery."""

import os
from pathlib import Path

import pytest

from gham.git import NotGitRepositoryError, find_repo_root, require_repo_root


class TestFindRepoRoot:
    def test_root_itself(self, make_repo):
        root = make_repo()
        assert find_repo_root(root) == root

    def test_nested_directory(self, make_repo):
        root = make_repo()
        nested = root / "src" / "pkg"
        nested.mkdir(parents=True)

        assert find_repo_root(nested) == root

    def test_file_path_uses_parent(self, make_repo):
        root = make_repo()
        module = root / "src" / "module.py"
        module.parent.mkdir()
        module.write_text("x = 1\n")

        assert find_repo_root(module) == root

    def test_gitdir_file_counts(self, tmp_path: Path):
        """Worktrees and submodules have a .git file, not a directory."""
        worktree = tmp_path / "worktree"
        worktree.mkdir()
        (worktree / ".git").write_text("gitdir: /elsewhere/.git/worktrees/wt\n")

        assert find_repo_root(worktree / ".") == worktree

    def test_nearest_root_wins(self, make_repo):
        outer = make_repo("outer")
        inner = outer / "vendor" / "lib"
        inner.mkdir(parents=True)
        (inner / ".git").mkdir()

        assert find_repo_root(inner / ".") == inner
        assert find_repo_root(outer / "vendor") == outer

    def test_outside_repository(self, tmp_path: Path):
        plain = tmp_path / "plain"
        plain.mkdir()

        # tmp_path itself is never inside a repository in the test environment
        if find_repo_root(tmp_path) is None:
            assert find_repo_root(plain) is None

    def test_nonexistent_path(self, tmp_path: Path):
        assert find_repo_root(tmp_path / "missing" / "dir") is None

    def test_relative_path(self, make_repo, monkeypatch):
        root = make_repo()
        (root / "docs").mkdir()
        monkeypatch.chdir(root / "docs")

        assert find_repo_root(".") == root

    def test_returns_absolute_path(self, make_repo, monkeypatch):
        root = make_repo()
        monkeypatch.chdir(root.parent)

        result = find_repo_root(root.name)

        assert result is not None
        assert result.is_absolute()
        assert result == root


class TestRequireRepoRoot:
    def test_returns_root(self, make_repo):
        root = make_repo()
        assert require_repo_root(root) == root

    def test_raises_outside_repository(self, tmp_path: Path):
        missing = tmp_path / "missing"

        with pytest.raises(NotGitRepositoryError) as exc_info:
            require_repo_root(missing)

        assert exc_info.value.path == os.path.abspath(missing)
        assert "Hint:" in str(exc_info.value)
