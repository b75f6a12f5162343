"""Fleet command-line client."""
from .config import ConfigStore, DEFAULT_CONFIG_PATH
from .errors import CliError, ConfigError, MissingTarget

__all__ = ["ConfigStore", "DEFAULT_CONFIG_PATH", "CliError", "ConfigError", "MissingTarget"]
