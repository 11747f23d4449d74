# tests/test_config.py

from __future__ import annotations

from pathlib import Path

import pytest

from villain_timeline.config import CONFIG_ENV_VAR, TimelineConfig, load_config


def test_load_explicit_file(tmp_path):
    cfg_file = tmp_path / "custom.yml"
    cfg_file.write_text(
        "debug: true\n"
        "paths:\n  data_dir: /srv/villains\n"
        "merge:\n  series_name: Everything\n",
        encoding="utf-8",
    )

    cfg = load_config(cfg_file)

    assert cfg.debug is True
    assert cfg.data_dir == Path("/srv/villains")
    assert cfg.merge["series_name"] == "Everything"
    assert cfg.taxonomy == {}


def test_missing_explicit_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "missing.yml")


def test_env_var_overrides_default_path(tmp_path, monkeypatch):
    cfg_file = tmp_path / "env.yml"
    cfg_file.write_text("processing:\n  validate: false\n", encoding="utf-8")
    monkeypatch.setenv(CONFIG_ENV_VAR, str(cfg_file))

    assert load_config().processing == {"validate": False}


def test_relative_data_dir_resolves_against_cwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert TimelineConfig({}).data_dir == tmp_path / "data"


def test_empty_file_gives_defaults(tmp_path):
    cfg_file = tmp_path / "empty.yml"
    cfg_file.write_text("", encoding="utf-8")

    cfg = load_config(cfg_file)

    assert cfg.debug is False
    assert cfg.paths == {}
