from pathlib import Path
import json

from slide_style import DEFAULT_STYLE, SlideStyle, resolve_style

CONFIG_FILE = Path.home() / ".lyric_slides_config.json"

DEFAULT_OUTPUT_DIR = Path.home() / "LyricSlides"


def _load_config():
    if not CONFIG_FILE.exists():
        return {}
    with open(CONFIG_FILE, "r", encoding="utf-8") as f:
        return json.load(f)


def _save_config(data):
    CONFIG_FILE.parent.mkdir(parents=True, exist_ok=True)
    with open(CONFIG_FILE, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)


def load_default_style() -> SlideStyle:
    """DEFAULT_STYLE with the user's saved profile (if any) merged over it."""
    saved = _load_config().get("default_style") or {}
    return resolve_style(DEFAULT_STYLE, saved)


def save_default_style(style: SlideStyle):
    data = _load_config()
    data["default_style"] = style.to_dict()
    _save_config(data)


def load_output_dir() -> Path:
    out = _load_config().get("output_dir")
    return Path(out) if out else DEFAULT_OUTPUT_DIR


def save_output_dir(path):
    data = _load_config()
    data["output_dir"] = str(path)
    _save_config(data)


def load_build_prefs():
    cfg = _load_config()
    return {
        "last_title": cfg.get("last_title"),
        "last_output": cfg.get("last_output"),
    }


def save_build_prefs(title, output_url):
    data = _load_config()
    data["last_title"] = title
    data["last_output"] = output_url
    _save_config(data)
