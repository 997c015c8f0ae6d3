"""
themes.py

Holds the built-in kilo colour themes in a Python dictionary form, and discovers
user themes: any .py file in the user's theme directory that defines `theme_name`
and `theme_data` is imported and added to the available themes.

A theme maps each highlight class to an ANSI foreground colour code.
"""
import importlib.util
import os

from kilo import logger

THEMES_DIR = os.path.expanduser("~/.kilo/themes")
DEFAULT_THEME = "default"
THEME_KEYS = ("normal", "number", "match")

def get_builtin_themes():
    """
    Returns a dict mapping built-in theme names to their colour definitions.
    """
    return {
        "default": {
            "normal": 39,
            "number": 31,
            "match": 34,
        },
        "mono": {
            "normal": 39,
            "number": 39,
            "match": 97,
        },
        "solarized": {
            "normal": 39,
            "number": 36,
            "match": 33,
        },
    }

def is_valid_theme(data) -> bool:
    """A theme must define an integer colour code for every highlight class."""
    if not isinstance(data, dict):
        return False
    return all(isinstance(data.get(key), int) for key in THEME_KEYS)

def load_user_themes(themes_dir: str = None) -> dict:
    """
    Scan `themes_dir` for .py files that define a theme and return them by name.
    Broken or incomplete theme files are logged and skipped.
    """
    themes_dir = THEMES_DIR if themes_dir is None else themes_dir
    found = {}
    if not os.path.isdir(themes_dir):
        return found  # no directory => do nothing

    for fname in sorted(os.listdir(themes_dir)):
        if not fname.endswith(".py") or fname == "__init__.py":
            continue

        # Attempt a dynamic import
        full_path = os.path.join(themes_dir, fname)
        spec = importlib.util.spec_from_file_location("kilo_user_theme", full_path)
        if not spec or not spec.loader:
            continue

        mod = importlib.util.module_from_spec(spec)
        try:
            spec.loader.exec_module(mod)
        except Exception as e:
            logger.log(f"theme {fname} failed to load: {e}")
            continue

        name = getattr(mod, "theme_name", None)
        data = getattr(mod, "theme_data", None)
        if isinstance(name, str) and is_valid_theme(data):
            found[name] = dict(data)
        else:
            logger.log(f"theme {fname} ignored: needs theme_name and theme_data")
    return found

def get_available_themes(themes_dir: str = None) -> dict:
    """Built-in themes, overridden or extended by the user's own."""
    available = get_builtin_themes()
    available.update(load_user_themes(themes_dir))
    return available

def resolve_theme(name: str, themes_dir: str = None) -> dict:
    """Return the colour definitions for `name`, falling back to the default theme."""
    available = get_available_themes(themes_dir)
    if name not in available:
        logger.log(f"unknown theme '{name}', using '{DEFAULT_THEME}'")
        name = DEFAULT_THEME
    return available[name]
