"""
Configuration for the kilo text editor.

Settings are read from a plain `key=value` file (default ~/.kilo/kilo.conf, or the
path in $KILO_CONFIG). Lines starting with '#' are comments. Unknown keys and bad
values are logged and the default is kept.
"""
import os

from kilo import logger, themes

CONFIG_PATH = os.path.expanduser(os.environ.get("KILO_CONFIG", "~/.kilo/kilo.conf"))

class Config:
    """Editor settings with their defaults."""
    def __init__(self):
        self.tab_stop = 8
        self.quit_times = 3
        self.message_timeout = 5
        self.theme_name = themes.DEFAULT_THEME
        self.theme = themes.get_builtin_themes()[themes.DEFAULT_THEME]

    def set(self, key: str, value: str):
        """Apply one `key=value` setting."""
        if key in ("tab_stop", "quit_times", "message_timeout"):
            try:
                number = int(value)
            except ValueError:
                logger.log(f"config: {key} must be an integer, got '{value}'")
                return
            if number < 1:
                logger.log(f"config: {key} must be at least 1, got {number}")
                return
            setattr(self, key, number)
        elif key == "theme":
            self.theme_name = value
        else:
            logger.log(f"config: unknown setting '{key}'")

def load_config(path: str = None, themes_dir: str = None) -> Config:
    """
    Load settings from `path`. A missing file simply yields the defaults.
    """
    config = Config()
    path = CONFIG_PATH if path is None else path
    if os.path.isfile(path):
        try:
            with open(path, 'r', encoding='utf-8') as f:
                for line in f:
                    line = line.strip()
                    if not line or line.startswith("#"):
                        continue
                    if "=" not in line:
                        logger.log(f"config: ignoring line '{line}'")
                        continue
                    key, value = line.split("=", 1)
                    config.set(key.strip(), value.strip())
        except OSError as e:
            logger.log(f"config: cannot read {path}: {e}")
    config.theme = themes.resolve_theme(config.theme_name, themes_dir)
    return config
