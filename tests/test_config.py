from pathlib import Path

import config
from config import DEFAULT_FILENAME, STORE_ENV_VAR, default_store_path


def test_default_is_in_home(monkeypatch, tmp_path):
    monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))
    assert default_store_path({}) == tmp_path / DEFAULT_FILENAME


def test_env_override(tmp_path):
    target = tmp_path / "mine.json"
    assert default_store_path({STORE_ENV_VAR: str(target)}) == target


def test_blank_override_ignored(monkeypatch, tmp_path):
    monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))
    assert default_store_path({STORE_ENV_VAR: "  "}) == tmp_path / DEFAULT_FILENAME


def test_override_expands_user(monkeypatch, tmp_path):
    monkeypatch.setenv("HOME", str(tmp_path))
    assert default_store_path({STORE_ENV_VAR: "~/t.json"}) == tmp_path / "t.json"


def test_reads_process_environment(monkeypatch, tmp_path):
    monkeypatch.setenv(STORE_ENV_VAR, str(tmp_path / "env.json"))
    assert default_store_path() == tmp_path / "env.json"


def test_falls_back_to_current_dir_without_home(monkeypatch):
    def no_home(cls):
        raise RuntimeError("Could not determine home directory.")
    monkeypatch.setattr(Path, "home", classmethod(no_home))
    assert config.default_store_path({}) == Path(".") / DEFAULT_FILENAME
