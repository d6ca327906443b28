from __future__ import annotations

from pathlib import Path

# Single source of truth for configuration file naming.
CONFIG_FILE = "templex.yaml"


def config_path(root: Path) -> Path:
    """Path to the configuration file <root>/templex.yaml."""
    return (root / CONFIG_FILE).resolve()


__all__ = ["CONFIG_FILE", "config_path"]
