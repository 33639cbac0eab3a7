from __future__ import annotations

from pathlib import Path
import sys


import pytest


# Make `docstore` and `helpers` importable without installing the package.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from docstore import DocumentStore  # noqa: E402
from helpers import CATHY_ID, TONY_ID, cathy, tony  # noqa: E402


@pytest.fixture
def sandbox_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """
    Point every DOCSTORE_* setting at a temp directory so tests never touch real ./data.
    """
    monkeypatch.setenv("DOCSTORE_ROOT", str(tmp_path / "data"))
    monkeypatch.setenv("DOCSTORE_CACHE_DIR", str(tmp_path / "cache"))
    for name in ("DOCSTORE_EXTENSION", "DOCSTORE_JSON_INDENT", "DOCSTORE_DEBUG_LOG_SCANS"):
        monkeypatch.delenv(name, raising=False)
    return tmp_path


@pytest.fixture
def store(tmp_path: Path) -> DocumentStore:
    return DocumentStore(tmp_path / "store")


@pytest.fixture
def contacts(store: DocumentStore) -> DocumentStore:
    assert store.set(f"contacts/{TONY_ID}", tony())
    assert store.set(f"contacts/{CATHY_ID}", cathy())
    return store
