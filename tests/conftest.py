import os
import sys
from pathlib import Path

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'safeglue' and tests/ importable for helpers
for p in (SRC_ROOT, TESTS_ROOT):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))


from helpers.cache_utils import reset_safeglue_caches


@pytest.fixture(autouse=True)
def _isolate_safeglue_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    """Run every test against an empty project with no SAFEGLUE_* leakage.

    The project root lives at ``tmp_path / "project"`` and is exported through
    SAFEGLUE_PROJECT_ROOT so config, secret and dialect lookups never read the
    developer's own ``.safeglue/`` directory.
    """
    for key in list(os.environ):
        if key.startswith("SAFEGLUE_"):
            monkeypatch.delenv(key, raising=False)

    project = tmp_path / "project"
    project.mkdir()
    monkeypatch.setenv("SAFEGLUE_PROJECT_ROOT", str(project))

    reset_safeglue_caches()
    yield
    reset_safeglue_caches()


@pytest.fixture
def isolated_project(tmp_path: Path) -> Path:
    """The per-test project root, with an empty ``.safeglue/config`` directory."""
    project = tmp_path / "project"
    (project / ".safeglue" / "config").mkdir(parents=True, exist_ok=True)
    return project
