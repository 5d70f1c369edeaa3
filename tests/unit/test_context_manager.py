"""Tests for gham/engine/contexts.py - add/remove/assign orchestration."""

import pytest

from gham.config.store import ContextStore
from gham.credentials.store import SecretStore
from gham.engine.contexts import ContextManager
from gham.exceptions import (
    BackendNotAvailableError,
    ContextExistsError,
    ContextNotFoundError,
    CredentialError,
    GhamError,
)
from gham.git.exceptions import NotGitRepositoryError
from gham.models import Context


@pytest.fixture
def manager(store, secrets):
    return ContextManager(store, secrets)


class TestAddContext:
    def test_saves_context_and_token(self, manager, config_path, memory_backend):
        stored = manager.add_context(Context(name="work", email="alice@example.com"), "ghp_work")

        assert stored.name == "work"
        assert memory_backend.secrets == {"work": "ghp_work"}
        assert ContextStore.load(config_path).find_context("work") is not None

    def test_rolls_back_when_secret_store_fails(self, manager, store, config_path, memory_backend):
        memory_backend.fail_on.add("set")

        with pytest.raises(CredentialError):
            manager.add_context(Context(name="work"), "ghp_work")

        assert store.find_context("work") is None
        assert ContextStore.load(config_path).find_context("work") is None

    def test_rolls_back_without_backend(self, store, config_path, make_backend):
        manager = ContextManager(store, SecretStore([make_backend(available=False)]))

        with pytest.raises(BackendNotAvailableError):
            manager.add_context(Context(name="work"), "ghp_work")

        assert ContextStore.load(config_path).contexts == []

    def test_duplicate_name(self, manager, memory_backend):
        manager.add_context(Context(name="work"), "first")

        with pytest.raises(ContextExistsError):
            manager.add_context(Context(name="work"), "second")

        assert memory_backend.secrets["work"] == "first"

    def test_empty_token(self, manager, store):
        with pytest.raises(GhamError):
            manager.add_context(Context(name="work"), "")

        assert store.contexts == []


class TestRemoveContext:
    def test_removes_everything(self, manager, store, config_path, memory_backend, make_repo):
        root = make_repo()
        manager.add_context(Context(name="work"), "ghp_work")
        manager.assign(root, "work")

        result = manager.remove_context("work")

        assert result.unassigned == [str(root)]
        assert result.warnings == []
        assert memory_backend.secrets == {}
        reloaded = ContextStore.load(config_path)
        assert reloaded.contexts == []
        assert reloaded.repositories == []

    def test_missing_context(self, manager):
        with pytest.raises(ContextNotFoundError):
            manager.remove_context("nope")

    def test_secret_failure_is_a_warning(self, manager, config_path, memory_backend):
        manager.add_context(Context(name="work"), "ghp_work")
        memory_backend.fail_on.add("delete")

        result = manager.remove_context("work")

        assert len(result.warnings) == 1
        assert "work" in result.warnings[0]
        assert ContextStore.load(config_path).contexts == []

    def test_works_without_backend(self, store, config_path, make_backend):
        store.add_context(Context(name="work"))
        store.save()
        manager = ContextManager(store, SecretStore([make_backend(available=False)]))

        result = manager.remove_context("work")

        assert result.warnings
        assert ContextStore.load(config_path).contexts == []


class TestAssign:
    def test_assigns_repo_root(self, manager, store, config_path, make_repo):
        root = make_repo()
        sub = root / "src"
        sub.mkdir()
        store.add_context(Context(name="work"))

        assert manager.assign(sub, "work") == root
        assert ContextStore.load(config_path).get_assignment(root) == "work"

    def test_outside_repository(self, manager, store, tmp_path):
        store.add_context(Context(name="work"))

        with pytest.raises(NotGitRepositoryError):
            manager.assign(tmp_path / "missing", "work")

    def test_unknown_context(self, manager, make_repo):
        with pytest.raises(ContextNotFoundError):
            manager.assign(make_repo(), "nope")


class TestCurrent:
    def test_unassigned(self, manager, make_repo):
        root = make_repo()

        info = manager.current(root)

        assert info.repo_root == root
        assert info.context_name is None
        assert not info.is_dangling

    def test_assigned(self, manager, store, make_repo):
        root = make_repo()
        store.add_context(Context(name="work", username="alice"))
        store.assign_repo_context(root, "work")

        info = manager.current(root)

        assert info.context.username == "alice"

    def test_dangling(self, manager, store, make_repo):
        root = make_repo()
        store.add_context(Context(name="work"))
        store.assign_repo_context(root, "work")
        store.config.contexts.clear()

        info = manager.current(root)

        assert info.context_name == "work"
        assert info.is_dangling

    def test_outside_repository(self, manager, tmp_path):
        assert manager.current(tmp_path / "missing").repo_root is None
