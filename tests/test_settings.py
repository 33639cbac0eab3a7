from __future__ import annotations

from pathlib import Path

import pytest

from docstore import Document, DocumentStore, get_settings, load_settings


def test_defaults(sandbox_env: Path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("DOCSTORE_ROOT")
    monkeypatch.delenv("DOCSTORE_CACHE_DIR")
    settings = get_settings()

    assert settings.root_dir == "data"
    assert settings.extension == ".json"
    assert settings.json_indent == 4
    assert settings.cache_dir.endswith("document-store")
    assert settings.debug_log_scans is False


def test_env_overrides(sandbox_env: Path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("DOCSTORE_EXTENSION", "doc")
    monkeypatch.setenv("DOCSTORE_JSON_INDENT", "2")
    monkeypatch.setenv("DOCSTORE_DEBUG_LOG_SCANS", "yes")
    settings = get_settings()

    assert settings.root_dir == str(sandbox_env / "data")
    assert settings.extension == ".doc"
    assert settings.json_indent == 2
    assert settings.debug_log_scans is True


def test_bad_indent_falls_back(sandbox_env: Path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("DOCSTORE_JSON_INDENT", "wide")

    assert get_settings().json_indent == 4


def test_load_settings_reads_env_file(sandbox_env: Path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("DOCSTORE_ROOT")
    env_file = sandbox_env / "local.env"
    env_file.write_text(f"DOCSTORE_ROOT={sandbox_env / 'from-file'}\n", encoding="utf-8")

    settings = load_settings(str(env_file))
    # load_dotenv writes into os.environ; drop it again after the test
    monkeypatch.delenv("DOCSTORE_ROOT")

    assert settings.root_dir == str(sandbox_env / "from-file")


def test_store_from_settings(sandbox_env: Path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("DOCSTORE_JSON_INDENT", "2")
    store = DocumentStore.from_settings(get_settings())
    store.set("demo", Document({"name": "foo"}))

    assert store.root == (sandbox_env / "data").resolve()
    raw = (store.root / "demo.json").read_text(encoding="utf-8")
    assert raw.splitlines()[1] == '  "name": "foo"'
