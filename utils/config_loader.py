"""
Configuration loading for the character language model.

Configuration lives in YAML files under `<project root>/configs`. An
environment-specific file (`language_model_<env>.yaml`) takes precedence over the
default `language_model.yaml`; values missing from both fall back to
`DEFAULT_CONFIG`.
"""

import copy
import os

import yaml

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
CONFIG_DIR = os.path.join(PROJECT_ROOT, "configs")

DEFAULT_CONFIG = {
    "window_length": 7,
    "fixed_seed": 20,
    "text_length": 200,
    "corpus_encoding": "utf-8",
    "csv_column": 0,
    "csv_header": None,
    "progress_interval": 1000000,
    "logging": {
        "level": "INFO",
        "console_json": True,
        "log_file": None,
    },
}


def merge_config(base, overrides):
    """
    Recursively merge `overrides` into a copy of `base`.

    Args:
        base (dict): Base configuration
        overrides (dict or None): Values that take precedence

    Returns:
        dict: The merged configuration
    """
    merged = copy.deepcopy(base)
    for key, value in (overrides or {}).items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_config(merged[key], value)
        else:
            merged[key] = value
    return merged


def read_yaml(path):
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(
            f"Configuration file {path} must contain a mapping, got {type(data).__name__}")
    return data


def load_config(config_path=None, environment=None, config_dir=CONFIG_DIR, logger=None):
    """
    Load the language model configuration.

    Args:
        config_path (str, optional): Explicit configuration file. When given it
            is the only file read and it must exist.
        environment (str, optional): Environment name used to look up
            `language_model_<environment>.yaml` before the default file.
        config_dir (str): Directory searched when `config_path` is None.
        logger (Logger, optional): Logger for reporting which file was used.

    Returns:
        dict: Configuration merged over `DEFAULT_CONFIG`

    Raises:
        FileNotFoundError: If `config_path` is given but does not exist.
        ValueError: If a configuration file does not hold a YAML mapping.
    """
    if config_path is not None:
        if not os.path.exists(config_path):
            if logger:
                logger.error(f"Configuration file not found: {config_path}")
            raise FileNotFoundError(f"Configuration file not found: {config_path}")
        candidates = [config_path]
    else:
        candidates = []
        if environment:
            candidates.append(os.path.join(
                config_dir, f"language_model_{environment}.yaml"))
        candidates.append(os.path.join(config_dir, "language_model.yaml"))

    for path in candidates:
        if os.path.exists(path):
            config = merge_config(DEFAULT_CONFIG, read_yaml(path))
            if logger:
                logger.info(f"Loaded configuration from {path}", extra={
                    "metrics": {"config_path": path, "environment": environment}
                })
            return config

    if logger:
        logger.info("No configuration file found, using defaults")
    return copy.deepcopy(DEFAULT_CONFIG)
