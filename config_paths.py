import json
import logging
import os

HOME = os.path.expanduser("~")
XDG_CONFIG_HOME = os.environ.get("XDG_CONFIG_HOME")
CONFIG_HOME = XDG_CONFIG_HOME if XDG_CONFIG_HOME else os.path.join(HOME, ".config")
CONFIG_DIR = os.path.join(CONFIG_HOME, "tabscope")
CONFIG_JSON = os.path.join(CONFIG_DIR, "config.json")
LOG_PATH = os.path.join(CONFIG_DIR, "tabscope.log")

# default settings
MIN_COL_WIDTH_DEFAULT = 4
MAX_COL_WIDTH_DEFAULT = 40
LOG_LEVEL_DEFAULT = "WARNING"

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def ensure_config_dirs():
    os.makedirs(CONFIG_DIR, exist_ok=True)


def _positive_int(value):
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value if value > 0 else None


def load_config():
    cfg = {
        "MIN_COL_WIDTH": MIN_COL_WIDTH_DEFAULT,
        "MAX_COL_WIDTH": MAX_COL_WIDTH_DEFAULT,
        "LOG_LEVEL": LOG_LEVEL_DEFAULT,
    }

    if not os.path.exists(CONFIG_JSON):
        return cfg

    try:
        with open(CONFIG_JSON, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as exc:
        logging.getLogger(__name__).warning("ignoring %s: %s", CONFIG_JSON, exc)
        return cfg

    if not isinstance(data, dict):
        return cfg

    grid = data.get("grid")
    if isinstance(grid, dict):
        min_w = _positive_int(grid.get("min_col_width"))
        max_w = _positive_int(grid.get("max_col_width"))
        if min_w is not None:
            cfg["MIN_COL_WIDTH"] = min_w
        if max_w is not None:
            cfg["MAX_COL_WIDTH"] = max_w
        if cfg["MAX_COL_WIDTH"] < cfg["MIN_COL_WIDTH"]:
            cfg["MAX_COL_WIDTH"] = cfg["MIN_COL_WIDTH"]

    level = data.get("log_level")
    if isinstance(level, str) and level.upper() in _LOG_LEVELS:
        cfg["LOG_LEVEL"] = level.upper()

    return cfg
