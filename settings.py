import copy
import logging
import os

import yaml

logger = logging.getLogger(__name__)

HERE = os.path.dirname(os.path.abspath(__file__))
DEFAULT_CONFIG_PATH = os.path.join(HERE, "config.yaml")

DEFAULTS = {
    "dictionary": "dictionary.tsv",
    "opening_word": "tares",
    "hard_mode": False,
    "top_n": 10,
    # Bounds the dictionary, and with it the N x N byte table of each thread's cache
    "max_words": None,
    # Optional .npz written by precompute.py
    "pattern_data": None,
    "sigmoid": {
        "steepness": 30000000.0,
        "midpoint": 0.00000497,
    },
    "log_level": "INFO",
}

PATH_KEYS = ("dictionary", "pattern_data")


def load_settings(path=None, **overrides):
    """
    Read the YAML config at `path` (default: config.yaml next to this file) on
    top of DEFAULTS. Keyword overrides win over both. Relative paths are
    resolved against the config file's directory.
    """
    settings = copy.deepcopy(DEFAULTS)
    base_dir = HERE

    if path is None and os.path.exists(DEFAULT_CONFIG_PATH):
        path = DEFAULT_CONFIG_PATH
    if path is not None:
        with open(path, encoding="utf-8") as f:
            loaded = yaml.safe_load(f) or {}
        _merge(settings, loaded)
        base_dir = os.path.dirname(os.path.abspath(path))
        logger.debug("Loaded settings from %s", path)

    _merge(settings, {k: v for k, v in overrides.items() if v is not None})

    for key in PATH_KEYS:
        value = settings[key]
        if value is not None and not os.path.isabs(value):
            settings[key] = os.path.join(base_dir, value)

    if settings["top_n"] < 1:
        raise ValueError("top_n must be at least 1")
    return settings


def _merge(into, new, prefix=""):
    for key, value in new.items():
        if key not in into:
            raise ValueError(f"Unknown setting: {prefix}{key}")
        if isinstance(into[key], dict):
            if not isinstance(value, dict):
                raise ValueError(f"Setting {prefix}{key} must be a mapping")
            _merge(into[key], value, prefix=f"{prefix}{key}.")
        else:
            into[key] = value
