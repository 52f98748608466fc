"""Configuration loading"""

import copy
from pathlib import Path
from typing import Any, Dict, Union

import yaml


DEFAULT_CONFIG: Dict[str, Any] = {
    'detection': {
        'criterion': 4.0,
        'skipna': False
    },
    'sensitivity': {
        'criteria': [2.0, 2.5, 3.0, 3.5, 4.0, 5.0],
        'parallel': False
    },
    'logging': {
        'level': 'INFO'
    }
}


def get_default_config() -> Dict[str, Any]:
    """Return a fresh copy of the default configuration"""
    return copy.deepcopy(DEFAULT_CONFIG)


def merge_config(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge override into a copy of base"""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_config(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Load a YAML configuration file over the defaults

    Raises:
        FileNotFoundError: the file does not exist
        ValueError: the document or one of its sections is not a mapping
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    with open(path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f)

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError(f"Configuration root must be a mapping, got {type(data).__name__}")

    for section in DEFAULT_CONFIG:
        if section in data and not isinstance(data[section], dict):
            raise ValueError(
                f"Configuration section '{section}' must be a mapping, "
                f"got {type(data[section]).__name__}"
            )

    return merge_config(DEFAULT_CONFIG, data)
