"""Utility helpers"""

from .config import load_config, get_default_config, merge_config, DEFAULT_CONFIG

__all__ = [
    'load_config',
    'get_default_config',
    'merge_config',
    'DEFAULT_CONFIG'
]
