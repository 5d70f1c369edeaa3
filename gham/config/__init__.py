"""Configuration for gham.

Key Components:
    - GhamSettings: Environment-driven runtime settings (pydantic-settings)
    - ContextStore: Load/save lifecycle for the YAML context document

Example:
    >>> from gham.config import ContextStore, GhamSettings
    >>> settings = GhamSettings()
    >>> store = ContextStore.load(settings.config_file)
"""

from gham.config.settings import GhamSettings, default_config_dir
from gham.config.store import ContextStore

__all__ = ["ContextStore", "GhamSettings", "default_config_dir"]
