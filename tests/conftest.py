from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure the repo root (containing `copytxmate/`) is importable when pytest
# picks `tests/` as the rootdir (e.g., single-file runs).
REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT))


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    # Never touch the developer's .env, log dir or real clipboard settings from tests.
    monkeypatch.setenv("COPYTXMATE_DISABLE_FILE_LOG", "1")
    monkeypatch.setenv("COPYTXMATE_DOTENV_PATH", str(tmp_path / ".env"))
    for name in ("COPYTXMATE_AUTO_FORMAT", "COPYTXMATE_POLL_INTERVAL", "COPYTXMATE_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
