from __future__ import annotations

import contextlib
import json
import os
import tempfile
from pathlib import Path
from typing import Any


def dumps_json(payload: Any, *, indent: int | None = None) -> str:
    """
    Encode JSON deterministically: key order is kept as inserted, never sorted.

    Raises TypeError/ValueError for values JSON cannot represent.
    """
    return json.dumps(payload, indent=indent, ensure_ascii=False, allow_nan=False)


def read_json(path: Path) -> Any:
    """
    Read JSON from disk.

    Missing files raise FileNotFoundError; undecodable content raises ValueError
    (json.JSONDecodeError and UnicodeDecodeError are both ValueError subclasses).
    """
    raw = path.read_text(encoding="utf-8")
    return json.loads(raw)


def atomic_write_text(path: Path, text: str) -> None:
    """
    Atomically write text to disk by writing to a temp file then replacing.

    The temp file lives next to the target so the rename never crosses a
    filesystem boundary. Its name starts with a dot and ends in `.tmp`, so it
    never looks like a stored document.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
            f.write("\n")
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        with contextlib.suppress(OSError):
            os.unlink(tmp_name)
        raise
