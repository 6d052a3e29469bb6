"""Tests for the git config store adapter."""

import subprocess

import pytest

from git_id.exceptions import NotFound, StoreUnreachable
from git_id.store import GitConfigStore

from .conftest import git_config_local, requires_git


@requires_git
class TestGitConfigStore:
    """Reads and writes against a real repository."""

    def test_lookup_missing_identity(self, repo):
        store = GitConfigStore()
        with pytest.raises(NotFound):
            store.lookup("john", "name")

    def test_upsert_then_lookup(self, repo):
        store = GitConfigStore()
        store.upsert("john", "John Doe", "john@example.com", sshkey="/keys/john")

        assert store.lookup("john", "name") == "John Doe"
        assert store.lookup("john", "email") == "john@example.com"
        assert store.lookup("john", "sshkey") == "/keys/john"
        assert store.get("john", "token") is None

    def test_values_are_written_to_local_config(self, repo):
        GitConfigStore().upsert("john", "John Doe", "john@example.com", token="abc")

        assert git_config_local(repo, "--get", "identity.john.name").strip() == "John Doe"
        assert git_config_local(repo, "--get", "identity.john.token").strip() == "abc"

    def test_upsert_keeps_unspecified_credential(self, repo):
        store = GitConfigStore()
        store.upsert("john", "John Doe", "john@example.com", sshkey="/keys/john")
        store.upsert("john", "John", "j@example.com", token="abc")

        assert store.lookup("john", "name") == "John"
        assert store.lookup("john", "sshkey") == "/keys/john"
        assert store.lookup("john", "token") == "abc"

    def test_exists(self, repo):
        store = GitConfigStore()
        assert not store.exists("john")

        store.upsert("john", "John Doe", "john@example.com")
        assert store.exists("john")

    def test_identity_without_name_does_not_exist(self, repo):
        GitConfigStore().upsert("john", "", "john@example.com")
        assert not GitConfigStore().exists("john")

    def test_remove(self, repo):
        store = GitConfigStore()
        store.upsert("john", "John Doe", "john@example.com")
        store.remove("john")

        assert not store.exists("john")
        assert store.list_ids() == []

    def test_remove_missing_identity(self, repo):
        with pytest.raises(NotFound):
            GitConfigStore().remove("ghost")

    def test_remove_missing_identity_in_translated_locale(self, repo, monkeypatch):
        monkeypatch.setenv("LANG", "de_DE.UTF-8")
        monkeypatch.setenv("LANGUAGE", "de")
        monkeypatch.setenv("LC_ALL", "de_DE.UTF-8")
        with pytest.raises(NotFound):
            GitConfigStore().remove("ghost")

    def test_list_ids_sorted_and_unique(self, repo):
        store = GitConfigStore()
        store.upsert("zoe", "Zoe", "zoe@example.com", token="t")
        store.upsert("alice", "Alice", "alice@example.com", sshkey="/k")
        store.upsert("alice", "Alice A.", "alice@example.com")

        assert store.list_ids() == ["alice", "zoe"]

    def test_list_ids_empty(self, repo):
        assert GitConfigStore().list_ids() == []

    def test_list_ids_ignores_other_sections(self, repo):
        store = GitConfigStore()
        store.upsert("john", "John Doe", "john@example.com")
        git_config_local(repo, "user.name", "Someone")

        assert store.list_ids() == ["john"]

    def test_ids_with_dots(self, repo):
        store = GitConfigStore()
        store.upsert("john.work", "John Doe", "john@work.example.com")

        assert store.list_ids() == ["john.work"]
        assert store.lookup("john.work", "name") == "John Doe"

    def test_custom_namespace(self, repo):
        store = GitConfigStore(namespace="gitid")
        store.upsert("john", "John Doe", "john@example.com")

        assert git_config_local(repo, "--get", "gitid.john.name").strip() == "John Doe"
        assert GitConfigStore().list_ids() == []

    def test_ensure_reachable_in_repo(self, repo):
        GitConfigStore().ensure_reachable()

    def test_ensure_reachable_outside_repo(self, not_a_repo):
        with pytest.raises(StoreUnreachable):
            GitConfigStore().ensure_reachable()


def test_missing_git_binary_is_unreachable(tmp_path):
    store = GitConfigStore(cwd=tmp_path, git_program="no-such-git-binary")
    with pytest.raises(StoreUnreachable):
        store.ensure_reachable()


def test_git_runs_in_c_locale(tmp_path, monkeypatch):
    seen = []

    def fake_run(cmd, **kwargs):
        seen.append(kwargs["env"])
        return subprocess.CompletedProcess(cmd, 0, stdout="", stderr="")

    monkeypatch.setenv("LC_ALL", "fr_FR.UTF-8")
    monkeypatch.setattr(subprocess, "run", fake_run)
    GitConfigStore(cwd=tmp_path).list_ids()

    assert seen[0]["LC_ALL"] == "C"
    assert seen[0]["HOME"] == str(tmp_path / "home")
