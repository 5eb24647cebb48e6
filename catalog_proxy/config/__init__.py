"""Configuration module: exports Settings and load_config."""

from catalog_proxy.config.loader import load_config
from catalog_proxy.config.settings import Settings

__all__ = ["Settings", "load_config"]
