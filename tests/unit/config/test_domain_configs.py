"""Tests for the typed config section accessors."""
from __future__ import annotations

from pathlib import Path

import pytest

from helpers.project import write_config
from safeglue.core.config.domains import DialectsConfig, LoggingConfig, RenderConfig, SecretsConfig


def test_render_defaults(isolated_project: Path) -> None:
    cfg = RenderConfig(repo_root=isolated_project)

    assert cfg.default_dialect == "ansi"
    assert cfg.strict is False
    assert cfg.engine == "glue"


def test_render_uses_project_root_env_by_default(isolated_project: Path) -> None:
    write_config(isolated_project, "render", {"render": {"engine": "jinja"}})

    assert RenderConfig().engine == "jinja"


def test_secrets_file_resolves_under_project_config_dir(isolated_project: Path, tmp_path: Path) -> None:
    assert SecretsConfig(repo_root=isolated_project).file_path == isolated_project / ".safeglue" / "secrets.local.yaml"

    absolute = tmp_path / "elsewhere.yaml"
    write_config(isolated_project, "secrets", {"secrets": {"file": str(absolute)}})

    assert SecretsConfig(repo_root=isolated_project).file_path == absolute


def test_logging_defaults(isolated_project: Path) -> None:
    cfg = LoggingConfig(repo_root=isolated_project)

    assert cfg.level == "WARNING"
    assert cfg.path is None
    assert cfg.redaction_enabled is True
    assert cfg.redaction_replacement == "[REDACTED]"
    assert len(cfg.redaction_patterns) == 1


def test_logging_relative_path(isolated_project: Path) -> None:
    write_config(isolated_project, "logging", {"logging": {"level": "DEBUG", "path": "logs/safeglue.log"}})

    cfg = LoggingConfig(repo_root=isolated_project)

    assert cfg.level == "DEBUG"
    assert cfg.path == isolated_project / "logs" / "safeglue.log"


def test_logging_redaction_can_be_disabled(isolated_project: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SAFEGLUE_logging__redaction__enabled", "false")

    assert LoggingConfig(repo_root=isolated_project).redaction_enabled is False


def test_dialect_definitions_are_keyed_lowercase(isolated_project: Path) -> None:
    write_config(
        isolated_project,
        "dialects",
        {"dialects": {"Oracle": {"string_quote": "'", "identifier_quote": ['"', '"']}}},
    )

    definitions = DialectsConfig(repo_root=isolated_project).definitions

    assert "oracle" in definitions
    assert definitions["mysql"]["identifier_quote"] == ["`", "`"]
