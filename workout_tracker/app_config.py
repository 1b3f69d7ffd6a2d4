"""
Configuration loading from config.yaml and the environment.
"""

import copy
import logging
import os

import yaml
from dotenv import load_dotenv


DEFAULT_CONFIG_PATH = "config.yaml"

DEFAULT_CONFIG = {
    "assistant": {
        "api_key_env": "ANTHROPIC_API_KEY",
        "model": "claude-sonnet-4-5",
        "max_tokens": 2048,
        "timeout": 60,
    },
    "storage": {
        "path": "data/workout_tracker.db",
        "key": "workoutGroups",
    },
    "logging": {
        "level": "INFO",
    },
}


def _merge(defaults, overrides):
    merged = copy.deepcopy(defaults)
    for key, value in (overrides or {}).items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        elif value is not None:
            merged[key] = value
    return merged


def load_config(path=DEFAULT_CONFIG_PATH):
    """
    Load configuration, falling back to defaults for anything missing.

    A missing or unreadable file yields the defaults.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            user_config = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError):
        user_config = {}

    if not isinstance(user_config, dict):
        user_config = {}
    return _merge(DEFAULT_CONFIG, user_config)


def get_api_key(config):
    """Read the assistant API key named in config, loading .env first."""
    load_dotenv()
    return os.getenv(config["assistant"]["api_key_env"])


def get_storage_path(config):
    return (config.get("storage", {}) or {}).get("path") or DEFAULT_CONFIG["storage"]["path"]


def get_storage_key(config):
    return (config.get("storage", {}) or {}).get("key") or DEFAULT_CONFIG["storage"]["key"]


def configure_logging(config):
    level_name = str((config.get("logging", {}) or {}).get("level", "INFO")).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
