"""Gauntlet configuration management."""

from functools import lru_cache
from pathlib import Path

from .schemas import GauntletConfig
from .utils import load_json

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / 'data' / 'gauntlet_config.json'


@lru_cache(maxsize=1)
def get_config(path: Path | str | None = None) -> GauntletConfig:
    """
    Load Gauntlet configuration from data/gauntlet_config.json.

    Configuration is cached after first load.

    Args:
        path: Optional alternate config file

    Returns:
        GauntletConfig object with validated settings

    Raises:
        FileNotFoundError: If the config file doesn't exist
        ValueError: If the config file has an invalid structure

    Example:
        from gauntlet.config import get_config
        config = get_config()
        print(f"Round weeks: {config.round_weeks}")
    """
    return load_json(path or DEFAULT_CONFIG_PATH, schema=GauntletConfig)


def clear_config_cache() -> None:
    """
    Clear the configuration cache.

    Use this if the config file is modified during runtime.
    """
    get_config.cache_clear()
