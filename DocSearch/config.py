import copy
import json
import os
from typing import Any, Dict

from .exceptions import ConfigError

DEFAULT_CONFIG_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), "config.json")

DEFAULT_CONFIG = {
    "preprocessing": {
        "lowercase": True,
        "stop_words": {"use": True, "language": "both"}
    },
    "search": {
        "similarity_limit": 5e-4,
        "max_results": 10
    },
    "input": {
        "encoding": "utf-8"
    }
}


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge override into a copy of base."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(config_file: str = None) -> Dict[str, Any]:
    """
    Load configuration from a JSON file, handling comments.
    
    Args:
        config_file: Path to configuration file (defaults to the bundled config.json)
    
    Returns:
        Configuration dictionary merged over the defaults
    """
    config_file = config_file or DEFAULT_CONFIG_PATH

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            content = f.read()
    except FileNotFoundError:
        print(f"Warning: Configuration file {config_file} not found, using default settings")
        return copy.deepcopy(DEFAULT_CONFIG)

    # Remove line comments (lines starting with //)
    filtered_lines = []
    for line in content.splitlines():
        line_without_comment = line.split("//")[0]
        if line_without_comment.strip():
            filtered_lines.append(line_without_comment)

    try:
        config = json.loads("\n".join(filtered_lines) or "{}")
    except json.JSONDecodeError as e:
        raise ConfigError(f"Error loading configuration file {config_file}: {e}") from e

    if not isinstance(config, dict):
        raise ConfigError(f"Configuration file {config_file} must contain a JSON object")

    return _merge(DEFAULT_CONFIG, config)
