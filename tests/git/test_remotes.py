"""Tests for reading remote URLs from .git/config."""

import sys

import pytest

from gham.git import RemoteNotFoundError, get_remote_url


def test_reads_origin_url(make_repo):
    root = make_repo(origin_url="git@github.com:acme/project.git")

    assert get_remote_url(root) == "git@github.com:acme/project.git"


def test_missing_remote(make_repo):
    root = make_repo(origin_url=None)

    with pytest.raises(RemoteNotFoundError) as exc_info:
        get_remote_url(root)

    assert exc_info.value.remote_name == "origin"


def test_named_remote_not_configured(make_repo):
    root = make_repo()

    with pytest.raises(RemoteNotFoundError):
        get_remote_url(root, "upstream")


def test_read_does_not_modify_config(make_repo):
    root = make_repo()
    config = root / ".git" / "config"
    before = config.read_bytes()

    get_remote_url(root)

    assert config.read_bytes() == before


def test_not_a_repository(tmp_path):
    with pytest.raises(RemoteNotFoundError):
        get_remote_url(tmp_path)


def test_gitpython_unusable(make_repo, monkeypatch):
    # Importing GitPython fails like this when no git executable is on PATH
    monkeypatch.setitem(sys.modules, "git", None)
    root = make_repo()

    with pytest.raises(RemoteNotFoundError) as exc_info:
        get_remote_url(root)

    assert isinstance(exc_info.value.__cause__, ImportError)
