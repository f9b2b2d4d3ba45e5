from __future__ import annotations

import os
import re
import threading
import uuid
from dataclasses import dataclass
from pathlib import Path

_DOTENV_ASSIGN_RE = re.compile(r"^\s*(?:export\s+)?([A-Za-z_][A-Za-z0-9_]*)\s*=\s*(.*)\s*$")

_LOCK = threading.Lock()

_ENV_AUTO_FORMAT = "COPYTXMATE_AUTO_FORMAT"

_PREFERENCE_KEYS = (_ENV_AUTO_FORMAT,)

_TRUE_VALUES = {"1", "true", "yes", "y", "on"}
_FALSE_VALUES = {"0", "false", "no", "n", "off"}


def preferences_path(*, workdir: Path) -> Path:
    override = str(os.getenv("COPYTXMATE_DOTENV_PATH", "") or "").strip()
    if override:
        return Path(override)
    return workdir / ".env"


def _parse_assignment(line: str) -> tuple[str, str] | None:
    stripped = str(line or "").strip()
    if not stripped or stripped.startswith("#"):
        return None
    m = _DOTENV_ASSIGN_RE.match(line)
    if not m:
        return None
    key = str(m.group(1) or "").strip()
    if not key:
        return None
    return key, str(m.group(2) or "")


def _decode_value(raw: str) -> str:
    v = str(raw or "").strip()
    if (v.startswith('"') and v.endswith('"') and len(v) >= 2) or (v.startswith("'") and v.endswith("'") and len(v) >= 2):
        return v[1:-1]
    return v


def _parse_bool(key: str, raw: str) -> bool:
    v = raw.strip().lower()
    if v in _TRUE_VALUES:
        return True
    if v in _FALSE_VALUES:
        return False
    raise ValueError(f"{key} must be a boolean (true/false)")


def _atomic_write_text(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(path.suffix + f".{uuid.uuid4().hex}.tmp")
    tmp.write_text(content, encoding="utf-8")
    tmp.replace(path)


@dataclass(frozen=True)
class Preferences:
    # None means "not stored"; callers fall back to their own default.
    auto_format: bool | None = None


def read_preferences(path: Path) -> Preferences:
    if not path.exists():
        return Preferences()

    raw_values: dict[str, str] = {}
    for line in path.read_text(encoding="utf-8").splitlines():
        parsed = _parse_assignment(line)
        if parsed is None:
            continue
        k, v = parsed
        if k in _PREFERENCE_KEYS:
            raw_values[k] = _decode_value(v)

    auto_format: bool | None = None
    if raw_values.get(_ENV_AUTO_FORMAT):
        auto_format = _parse_bool(_ENV_AUTO_FORMAT, raw_values[_ENV_AUTO_FORMAT])

    return Preferences(auto_format=auto_format)


def update_preferences(path: Path, *, updates: dict[str, str | None]) -> None:
    """Rewrite managed keys in the dotenv file, keeping every other line as is.

    `None` clears a key (written as `KEY=`).
    """

    for k in updates:
        if k not in _PREFERENCE_KEYS:
            raise ValueError(f"unsupported key: {k}")

    with _LOCK:
        lines: list[str] = []
        if path.exists():
            lines = path.read_text(encoding="utf-8").splitlines()

        key_to_index: dict[str, int] = {}
        for i, line in enumerate(lines):
            parsed = _parse_assignment(line)
            if parsed is None:
                continue
            k, _v = parsed
            if k in updates and k not in key_to_index:
                key_to_index[k] = i

        for key, value in updates.items():
            new_line = f"{key}={'' if value is None else value}"
            if key in key_to_index:
                lines[key_to_index[key]] = new_line
            else:
                lines.append(new_line)

        content = "\n".join(lines).rstrip("\n") + "\n"
        _atomic_write_text(path, content)


def preference_updates_from_patch(patch: Preferences, *, fields_set: set[str]) -> dict[str, str | None]:
    updates: dict[str, str | None] = {}
    if "auto_format" in fields_set:
        updates[_ENV_AUTO_FORMAT] = None if patch.auto_format is None else ("true" if patch.auto_format else "false")
    return updates
