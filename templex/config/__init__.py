from __future__ import annotations

from .load import load_config, load_config_file
from .model import Config, LexerConfig, DEFAULT_CONFIG
from .paths import CONFIG_FILE, config_path
from .typed import ConfigLoadError, build_typed

__all__ = [
    "load_config",
    "load_config_file",
    "Config",
    "LexerConfig",
    "DEFAULT_CONFIG",
    "CONFIG_FILE",
    "config_path",
    "ConfigLoadError",
    "build_typed",
]
