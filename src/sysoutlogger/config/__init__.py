"""Locating and loading YAML configuration.

A config spec is one of
- a path to a YAML file,
- the name of a builtin config (with or without the `.yaml` suffix),
- a `dotted.key=value` pair, where the value is parsed as YAML.
"""

import os
from pathlib import Path

import yaml

builtin_config_dir = Path(__file__).parent


def get_config_path(config_spec: str | Path) -> Path:
    """Resolve a config file name or path to an existing file."""
    config_spec = Path(config_spec)
    if config_spec.suffix not in (".yaml", ".yml"):
        config_spec = config_spec.with_suffix(".yaml")
    candidates = [
        config_spec,
        Path(os.getenv("SYSOUT_LOGGER_CONFIG_DIR", ".")) / config_spec,
        builtin_config_dir / config_spec,
    ]
    for candidate in candidates:
        if candidate.is_file():
            return candidate
    raise FileNotFoundError(f"Could not find config file for {config_spec} (tried: {[str(c) for c in candidates]})")


def _key_value_spec_to_nested_dict(config_spec: str) -> dict:
    key, value = config_spec.split("=", 1)
    if not key or any(not part for part in key.split(".")):
        raise ValueError(f"Invalid config key in {config_spec!r}")
    try:
        value = yaml.safe_load(value)
    except yaml.YAMLError:
        pass
    result: dict = {}
    current = result
    *parents, leaf = key.split(".")
    for part in parents:
        current[part] = {}
        current = current[part]
    current[leaf] = value
    return result


def get_config_from_spec(config_spec: str | Path) -> dict:
    """Load a config spec into a (possibly nested) dictionary."""
    if isinstance(config_spec, str) and "=" in config_spec:
        return _key_value_spec_to_nested_dict(config_spec)
    path = get_config_path(config_spec)
    data = yaml.safe_load(path.read_text())
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping, got {type(data).__name__}")
    return data
