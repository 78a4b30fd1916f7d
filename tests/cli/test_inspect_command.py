"""Tests for `safeglue inspect`."""
from __future__ import annotations

import json
from pathlib import Path

import pytest

from safeglue.cli._dispatcher import main

TEMPLATE = "SELECT {`t`} WHERE id IN ({ids*}) AND x = {x}"


def test_text_output_lists_each_placeholder(isolated_project: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = main(["inspect", TEMPLATE, "--repo-root", str(isolated_project)])

    assert code == 0
    assert capsys.readouterr().out.splitlines() == [
        "t\tidentifier\t@7",
        "ids\tliteral (list)\t@26",
        "x\tliteral\t@42",
    ]


def test_json_output(isolated_project: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = main(["inspect", TEMPLATE, "--json", "--repo-root", str(isolated_project)])

    assert code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["engine"] == "glue"
    assert payload["names"] == ["t", "ids", "x"]
    assert payload["placeholders"][1] == {"name": "ids", "kind": "literal", "collapse": True, "position": 26}


def test_jinja_variables(isolated_project: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = main(
        [
            "inspect",
            "{{ a }} {% for c in cols %}{{ c | ident }}{% endfor %}",
            "--engine",
            "jinja",
            "--repo-root",
            str(isolated_project),
        ]
    )

    assert code == 0
    assert capsys.readouterr().out.splitlines() == ["a", "cols"]


def test_syntax_errors_fail(isolated_project: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["inspect", "SELECT }", "--repo-root", str(isolated_project)]) == 1
    assert "at offset 7" in capsys.readouterr().err

    assert main(["inspect", "{% if %}", "--engine", "jinja", "--repo-root", str(isolated_project)]) == 1
    assert "Invalid Jinja template" in capsys.readouterr().err


def test_jinja_templates_using_every_filter(isolated_project: Path, capsys: pytest.CaptureFixture[str]) -> None:
    text = "SELECT {{ cols | ident }} FROM t WHERE id IN ({{ ids | inclause }}) AND {{ cond | sql }}"

    code = main(["inspect", text, "--engine", "jinja", "--json", "--repo-root", str(isolated_project)])

    assert code == 0
    assert json.loads(capsys.readouterr().out) == {"engine": "jinja", "names": ["cols", "cond", "ids"]}


def test_jinja_unknown_filter_is_reported(isolated_project: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = main(["inspect", "{{ a | nosuchfilter }}", "--engine", "jinja", "--repo-root", str(isolated_project)])

    assert code == 1
    assert "Invalid Jinja template" in capsys.readouterr().err
