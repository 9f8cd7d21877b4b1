"""Workspace file access: lenient reads, locked atomic writes.

Missing or blank files read as empty. Writes go to a sibling temp file
that is swapped into place, so a crash never leaves a half-written
sessions.json behind.
"""

from __future__ import annotations

import fcntl
import json
import os
import tempfile
from pathlib import Path
from typing import Any

import yaml


def read_text(path: Path) -> str:
    return path.read_text(encoding="utf-8") if path.exists() else ""


def read_yaml(path: Path) -> dict[str, Any]:
    """Top-level YAML mapping of *path*; anything else reads as {}."""
    text = read_text(path)
    data = yaml.safe_load(text) if text.strip() else None
    return data if isinstance(data, dict) else {}


def read_record_list(path: Path, key: str) -> list[dict[str, Any]]:
    """Records under *key* in a JSON file.

    Accepts ``{"<key>": [...]}`` as well as a bare top-level list, as
    older exports wrote. Non-dict entries are dropped here; field-level
    checks belong to the store.
    """
    text = read_text(path)
    if not text.strip():
        return []
    data = json.loads(text)
    records = data.get(key) if isinstance(data, dict) else data
    if not isinstance(records, list):
        return []
    return [r for r in records if isinstance(r, dict)]


def _replace_file(path: Path, content: str, suffix: str) -> None:
    """Write *content* next to *path* under an exclusive lock, then rename over it."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, scratch = tempfile.mkstemp(dir=path.parent, prefix=".tmp_", suffix=suffix)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            fcntl.flock(handle.fileno(), fcntl.LOCK_EX)
            try:
                handle.write(content)
                handle.flush()
                os.fsync(handle.fileno())
            finally:
                fcntl.flock(handle.fileno(), fcntl.LOCK_UN)
        os.replace(scratch, path)
    except BaseException:
        if os.path.exists(scratch):
            os.unlink(scratch)
        raise


def write_json_atomic(path: Path, data: dict[str, Any]) -> None:
    """Pretty-printed UTF-8 JSON with a trailing newline."""
    _replace_file(path, json.dumps(data, indent=2, ensure_ascii=False) + "\n", ".json")


def write_yaml_atomic(path: Path, data: dict[str, Any]) -> None:
    """Block-style YAML, keys kept in insertion order."""
    text = yaml.safe_dump(data, default_flow_style=False, allow_unicode=True, sort_keys=False)
    _replace_file(path, text, ".yaml")
