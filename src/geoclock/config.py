"""Manage app configuration loading and access."""

import os
import typing as t
from functools import lru_cache
from pathlib import Path

from munch import Munch, munchify

from geoclock.exceptions import ConfigError
from geoclock.utils.data_utils import get_multi, merge_struct
from geoclock.utils.fs_utils import package_root
from geoclock.utils.yaml_utils import yaml_safe_load_file

CONFIG_ENV = "GEOCLOCK_CONFIG"
CONFIG_OVERRIDE_ENV = "GEOCLOCK_CONFIG_OVERRIDE"
USER_OVERRIDE_FILE = ".geoclock_config_override.yaml"


def _load_config(config_path: str, must_exist: bool = True, merge_into: dict = None) -> Munch[str, t.Any]:
    try:
        config_dict = yaml_safe_load_file(config_path, **({} if must_exist else {"default": {}}))
    except RuntimeError as e:
        raise ConfigError(str(e)) from e
    if config_dict is None:
        config_dict = {}
    if not isinstance(config_dict, dict):
        raise ConfigError(f"Config file '{config_path}' must contain a mapping, got {type(config_dict).__name__}")
    if merge_into is not None:
        config_dict = merge_struct(dict(merge_into), config_dict)
    return munchify(config_dict)


@lru_cache
def load_config() -> Munch[str, t.Any]:
    config_path = os.getenv(CONFIG_ENV) or package_root("data/config.yaml")
    config = _load_config(config_path)
    if config_override_path := os.getenv(CONFIG_OVERRIDE_ENV):
        config = _load_config(config_override_path, merge_into=config)
    else:
        config_override_path = str(Path.home() / USER_OVERRIDE_FILE)
        config = _load_config(config_override_path, merge_into=config, must_exist=False)
    return config


def get_config(datapath: str | None = None, default: t.Any | None = None) -> t.Any:
    config = load_config()
    return get_multi(config, datapath, default) if datapath else config
