import os
from pathlib import Path

import yaml

CONFIG_PATH = Path(__file__).resolve().parents[2] / "config" / "villain_timeline.yml"
CONFIG_ENV_VAR = "VILLAIN_TIMELINE_CONFIG"


class TimelineConfig:
    def __init__(self, data):
        self.paths = data.get("paths", {}) or {}
        self.processing = data.get("processing", {}) or {}
        self.merge = data.get("merge", {}) or {}
        self.taxonomy = data.get("taxonomy", {}) or {}
        self.logging = data.get("logging", {}) or {}
        self.debug = data.get("debug", False)

    @property
    def data_dir(self) -> Path:
        data_dir = Path(self.paths.get("data_dir") or "data")
        if not data_dir.is_absolute():
            data_dir = Path.cwd() / data_dir
        return data_dir


def load_config(path=None) -> 'TimelineConfig':
    """
    Read the YAML config.

    An explicit path (argument or VILLAIN_TIMELINE_CONFIG) must exist; the
    bundled default path falls back to built-in defaults when absent.
    """
    explicit = path or os.environ.get(CONFIG_ENV_VAR)
    config_path = Path(explicit) if explicit else CONFIG_PATH

    if not config_path.exists():
        if explicit:
            raise FileNotFoundError(f"Config file not found: {config_path}")
        return TimelineConfig({})

    with open(config_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    return TimelineConfig(data)


_config_cache = None


def get_config() -> 'TimelineConfig':
    global _config_cache
    if _config_cache is None:
        _config_cache = load_config()
    return _config_cache
