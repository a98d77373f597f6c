import os

HOME = os.path.expanduser("~")
XDG_CONFIG_HOME = os.environ.get("XDG_CONFIG_HOME")
CONFIG_HOME = XDG_CONFIG_HOME if XDG_CONFIG_HOME else os.path.join(HOME, ".config")
CONFIG_DIR = os.path.join(CONFIG_HOME, "tabledit")
CONFIG_JSON = os.path.join(CONFIG_DIR, "config.json")
LOG_PATH = os.path.join(CONFIG_DIR, "tabledit.log")

# default settings
FETCH_URL_DEFAULT = "http://localhost:8080/data"
PERSIST_URL_DEFAULT = "http://localhost:8000/updateTable"
TIMEOUT_SECONDS_DEFAULT = 10
LOG_LEVEL_DEFAULT = "INFO"
UNDO_MAX_DEPTH_DEFAULT = 50

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def ensure_config_dirs():
    os.makedirs(CONFIG_DIR, exist_ok=True)


def load_config():
    cfg = {
        "FETCH_URL": FETCH_URL_DEFAULT,
        "PERSIST_URL": PERSIST_URL_DEFAULT,
        "TIMEOUT_SECONDS": TIMEOUT_SECONDS_DEFAULT,
        "LOG_LEVEL": LOG_LEVEL_DEFAULT,
        "UNDO_MAX_DEPTH": UNDO_MAX_DEPTH_DEFAULT,
    }

    if not os.path.exists(CONFIG_JSON):
        return cfg

    import json

    try:
        with open(CONFIG_JSON, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError):
        return cfg
    if not isinstance(data, dict):
        return cfg

    for key, cfg_key in (("fetch_url", "FETCH_URL"), ("persist_url", "PERSIST_URL")):
        url = data.get(key)
        if isinstance(url, str) and url.strip():
            cfg[cfg_key] = url.strip()

    timeout = data.get("timeout_seconds")
    if isinstance(timeout, (int, float)) and not isinstance(timeout, bool) and timeout > 0:
        cfg["TIMEOUT_SECONDS"] = timeout

    level = data.get("log_level")
    if isinstance(level, str) and level.upper() in _LOG_LEVELS:
        cfg["LOG_LEVEL"] = level.upper()

    depth = data.get("undo_max_depth")
    if isinstance(depth, int) and not isinstance(depth, bool) and depth > 0:
        cfg["UNDO_MAX_DEPTH"] = depth

    return cfg
