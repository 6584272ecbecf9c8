"""
Configuration of the receipt codec.

The configuration is loaded from a YAML file when one is given, either
explicitly or through the `OP_RECEIPTS_CONFIG` environment variable, and is
validated with pydantic. Without a file, defaults apply.

Example `op_receipts.yaml`:

    log_level: INFO
    trace_decoding: true
"""

import logging
import os
from pathlib import Path
from typing import Optional, Union

import yaml
from pydantic import BaseModel, ValidationError, field_validator

CONFIG_ENV_VAR = "OP_RECEIPTS_CONFIG"


class CodecConfig(BaseModel):
    """
    Settings of the receipt codec.

    Attributes:
    - log_level (str): level of the package loggers.
    - trace_decoding (bool): log every decoder state transition at DEBUG.

    """

    log_level: str = "WARNING"
    trace_decoding: bool = False

    @field_validator("log_level")
    @classmethod
    def check_log_level(cls, value: str) -> str:
        """Accept any level name known to `logging`, case insensitively."""
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level {value!r}")
        return level


def load_config(path: Optional[Union[str, Path]] = None) -> CodecConfig:
    """
    Load the codec configuration from `path`, or from the file named by
    `OP_RECEIPTS_CONFIG`, falling back to the defaults.
    """
    if path is None:
        env_path = os.environ.get(CONFIG_ENV_VAR)
        if not env_path:
            return CodecConfig()
        path = env_path

    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(
            f"The configuration file '{config_path}' does not exist."
        )

    with config_path.open("r") as file:
        config_data = yaml.safe_load(file) or {}

    try:
        return CodecConfig(**config_data)
    except (TypeError, ValidationError) as e:
        raise ValueError(f"Invalid configuration: {e}") from e
