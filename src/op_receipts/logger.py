"""
Logging Setup
^^^^^^^^^^^^^
Applies a `CodecConfig` to the loggers of this package.
"""
import logging
from typing import Optional

from .config import CodecConfig, load_config

PACKAGE_LOGGER = "op_receipts"
CODEC_LOGGER = "op_receipts.codec"


def setup_logger(
    name: str = PACKAGE_LOGGER, config: Optional[CodecConfig] = None
) -> logging.Logger:
    """
    Set up the logger with the provided name using `config`, or the loaded
    configuration when none is given.
    """
    if config is None:
        config = load_config()

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(config.log_level)
    # Decoder DEBUG records are reserved for `trace_decoding`.
    if config.trace_decoding:
        codec_level = logging.DEBUG
    else:
        codec_level = max(logging.INFO, package_logger.level)
    logging.getLogger(CODEC_LOGGER).setLevel(codec_level)

    return logging.getLogger(name)
