import copy
import json
import os
from typing import Any, Dict, Optional

import yaml

from config.logging_config import LOGGING_CONFIG
from config.schemas import DEFAULT_CACHE_DIR
from core.errors import ConfigError

DEFAULT_CONFIG: Dict[str, Any] = {
    "cache_dir": DEFAULT_CACHE_DIR,
    "json": False,
    "keep_going": False,
    "logging": {
        "level": LOGGING_CONFIG.log_level,
        "file": LOGGING_CONFIG.log_file,
        "rotation": LOGGING_CONFIG.log_rotation,
        "retention": LOGGING_CONFIG.log_retention,
        "compression": LOGGING_CONFIG.log_compression,
    },
}


def load_external_config(path: Optional[str]) -> Dict[str, Any]:
    if not path:
        return {}
    config_path = os.path.expanduser(path)
    if not os.path.isfile(config_path):
        raise ConfigError(f"config file not found: {config_path}")

    try:
        with open(config_path, 'r') as cf:
            if config_path.endswith(".json"):
                data = json.load(cf)
            else:
                data = yaml.safe_load(cf)
    except (OSError, ValueError, yaml.YAMLError) as e:
        raise ConfigError(f"unable to read config file: {config_path}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"config file must contain a mapping: {config_path}")
    return data


def merge_config(base, overrides):
    if isinstance(base, dict) and isinstance(overrides, dict):
        for k, v in overrides.items():
            if k in base and isinstance(base[k], dict):
                base[k] = merge_config(base[k], v)
            else:
                base[k] = v
    return base


def finalize_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    final_config = copy.deepcopy(DEFAULT_CONFIG)
    external_data = load_external_config(config_path)
    return merge_config(final_config, external_data)
