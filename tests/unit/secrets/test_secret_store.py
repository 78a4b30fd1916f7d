"""Tests for secret lookup and the Secret wrapper."""
from __future__ import annotations

import copy
from pathlib import Path

import pytest

from helpers.project import write_config, write_secrets
from safeglue import Secret, SecretStore, render
from safeglue.core.exceptions import SecretNotFoundError
from safeglue.core.secrets import env_var_name
from safeglue.core.secrets.secret import MASK


def test_env_var_name_mapping() -> None:
    assert env_var_name("db-password", "SAFEGLUE_SECRET_") == "SAFEGLUE_SECRET_DB_PASSWORD"
    assert env_var_name("api.key", "X_") == "X_API_KEY"


def test_secret_from_environment(isolated_project: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SAFEGLUE_SECRET_DB_PASSWORD", "hunter22")

    secret = SecretStore(repo_root=isolated_project).get("db-password")

    assert secret.reveal() == "hunter22"
    assert secret.name == "db-password"
    assert str(secret) == MASK
    assert "hunter22" not in repr(secret)


def test_secret_from_file(isolated_project: Path) -> None:
    write_secrets(isolated_project, {"api-token": "abc123"})
    store = SecretStore(repo_root=isolated_project)

    assert store.get("api-token").reveal() == "abc123"
    assert store.source_of("api-token") == "file"
    assert store.has("api-token")


def test_environment_wins_over_file(isolated_project: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    write_secrets(isolated_project, {"token": "from-file"})
    monkeypatch.setenv("SAFEGLUE_SECRET_TOKEN", "from-env")
    store = SecretStore(repo_root=isolated_project)

    assert store.get("token").reveal() == "from-env"
    assert store.source_of("token") == "env"


def test_missing_secret(isolated_project: Path) -> None:
    store = SecretStore(repo_root=isolated_project)

    with pytest.raises(SecretNotFoundError) as excinfo:
        store.get("nope")

    assert isinstance(excinfo.value, LookupError)
    assert "SAFEGLUE_SECRET_NOPE" in str(excinfo.value)
    assert store.get("nope", None) is None
    assert not store.has("nope")
    assert store.source_of("nope") is None


def test_names_and_known_values(isolated_project: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    write_secrets(isolated_project, {"api-token": "abc123", "nested": {"a": 1}, "empty": None})
    monkeypatch.setenv("SAFEGLUE_SECRET_DB_PASSWORD", "hunter22")
    store = SecretStore(repo_root=isolated_project)

    assert store.names() == ["api-token", "db_password"]
    assert sorted(store.known_values()) == ["abc123", "hunter22"]


def test_names_are_not_duplicated_across_sources(isolated_project: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    write_secrets(isolated_project, {"db-password": "from-file"})
    monkeypatch.setenv("SAFEGLUE_SECRET_DB_PASSWORD", "from-env")
    store = SecretStore(repo_root=isolated_project)

    assert store.names() == ["db-password"]
    assert store.source_of("db-password") == "env"
    assert store.known_values() == ["from-env"]


def test_non_mapping_secrets_file_is_ignored(isolated_project: Path) -> None:
    (isolated_project / ".safeglue" / "secrets.local.yaml").write_text("- a\n- b\n", encoding="utf-8")

    assert SecretStore(repo_root=isolated_project).names() == []


def test_prefix_and_file_from_config(isolated_project: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    write_config(isolated_project, "secrets", {"secrets": {"env_prefix": "MYAPP_", "file": "vault.yaml"}})
    (isolated_project / ".safeglue" / "vault.yaml").write_text("db: s3cret\n", encoding="utf-8")
    monkeypatch.setenv("MYAPP_TOKEN", "t0ken")
    store = SecretStore(repo_root=isolated_project)

    assert store.file_path == isolated_project / ".safeglue" / "vault.yaml"
    assert store.get("token").reveal() == "t0ken"
    assert store.get("db").reveal() == "s3cret"


def test_explicit_sources(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = tmp_path / "s.yaml"
    path.write_text("key: value\n", encoding="utf-8")
    monkeypatch.setenv("X_OTHER", "other")

    store = SecretStore(env_prefix="X_", file_path=path)

    assert store.get("key").reveal() == "value"
    assert store.get("other").reveal() == "other"


class TestSecret:
    def test_requires_a_string(self) -> None:
        with pytest.raises(TypeError):
            Secret(123)  # type: ignore[arg-type]

    def test_equality_compares_values(self) -> None:
        assert Secret("a") == Secret("a", name="x")
        assert Secret("a") != Secret("b")
        assert Secret("a") != "a"
        assert hash(Secret("a")) == hash(Secret("a"))

    def test_masking(self) -> None:
        secret = Secret("hunter22", name="pw")

        assert f"{secret}" == MASK
        assert repr(secret) == f"Secret(name='pw', value='{MASK}')"
        assert repr(Secret("x")) == f"Secret('{MASK}')"

    def test_truthiness(self) -> None:
        assert Secret("x")
        assert not Secret("")

    def test_copies_keep_the_value(self) -> None:
        secret = Secret("v", name="n")

        assert copy.deepcopy(secret).reveal() == "v"

    def test_renders_escaped_into_sql(self) -> None:
        assert render("pw = {pw}", pw=Secret("it's"), dialect="ansi") == "pw = 'it''s'"
