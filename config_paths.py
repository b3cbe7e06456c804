import json
import os

HOME = os.path.expanduser("~")
XDG_CONFIG_HOME = os.environ.get("XDG_CONFIG_HOME")
CONFIG_HOME = XDG_CONFIG_HOME if XDG_CONFIG_HOME else os.path.join(HOME, ".config")
CONFIG_DIR = os.path.join(CONFIG_HOME, "csvgrid")
CONFIG_JSON = os.path.join(CONFIG_DIR, "config.json")

# default settings
MIN_ROWS_DEFAULT = 100
MIN_COLS_DEFAULT = 26
SAVE_DELAY_MS_DEFAULT = 500
BACKUP_DIR_DEFAULT = None


def ensure_config_dirs():
    os.makedirs(CONFIG_DIR, exist_ok=True)


def default_config():
    return {
        "MIN_ROWS": MIN_ROWS_DEFAULT,
        "MIN_COLS": MIN_COLS_DEFAULT,
        "SAVE_DELAY_MS": SAVE_DELAY_MS_DEFAULT,
        "BACKUP_DIR": BACKUP_DIR_DEFAULT,
    }


def _non_negative_int(value):
    # bool is an int subclass; "true" is not a row count
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value if value >= 0 else None


def load_config():
    cfg = default_config()

    if not os.path.exists(CONFIG_JSON):
        return cfg

    try:
        with open(CONFIG_JSON, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError):
        return cfg

    if not isinstance(data, dict):
        return cfg

    display = data.get("display")
    if isinstance(display, dict):
        min_rows = _non_negative_int(display.get("min_rows"))
        if min_rows is not None:
            cfg["MIN_ROWS"] = min_rows
        min_cols = _non_negative_int(display.get("min_cols"))
        if min_cols is not None:
            cfg["MIN_COLS"] = min_cols

    save = data.get("save")
    if isinstance(save, dict):
        delay = _non_negative_int(save.get("delay_ms"))
        if delay is not None:
            cfg["SAVE_DELAY_MS"] = delay
        backup_dir = save.get("backup_dir")
        if isinstance(backup_dir, str) and backup_dir.strip():
            cfg["BACKUP_DIR"] = os.path.expanduser(backup_dir.strip())

    return cfg
