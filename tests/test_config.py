import logging
from pathlib import Path
from typing import Iterator

import pytest

from op_receipts import codec
from op_receipts.config import CONFIG_ENV_VAR, CodecConfig, load_config
from op_receipts.logger import CODEC_LOGGER, PACKAGE_LOGGER, setup_logger

from .helpers import CANYON_RECEIPT


@pytest.fixture(autouse=True)
def restore_log_levels() -> Iterator[None]:
    loggers = [logging.getLogger(PACKAGE_LOGGER), logging.getLogger(CODEC_LOGGER)]
    levels = [logger.level for logger in loggers]
    yield
    for logger, level in zip(loggers, levels):
        logger.setLevel(level)


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "op_receipts.yaml"
    path.write_text("log_level: info\ntrace_decoding: true\n")
    return path


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    config = load_config()
    assert config == CodecConfig()
    assert config.log_level == "WARNING"
    assert config.trace_decoding is False


def test_load_from_path(config_file: Path) -> None:
    config = load_config(config_file)
    assert config.log_level == "INFO"
    assert config.trace_decoding is True
    assert load_config(str(config_file)) == config


def test_load_from_environment(
    monkeypatch: pytest.MonkeyPatch, config_file: Path
) -> None:
    monkeypatch.setenv(CONFIG_ENV_VAR, str(config_file))
    assert load_config().trace_decoding is True


def test_empty_file_gives_defaults(tmp_path: Path) -> None:
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert load_config(path) == CodecConfig()


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "missing.yaml")


@pytest.mark.parametrize(
    "content",
    [
        pytest.param("log_level: VERBOSE\n", id="unknown-level"),
        pytest.param("trace_decoding: [1, 2]\n", id="bad-flag"),
        pytest.param("- log_level\n", id="not-a-mapping"),
    ],
)
def test_invalid_config(tmp_path: Path, content: str) -> None:
    path = tmp_path / "invalid.yaml"
    path.write_text(content)
    with pytest.raises(ValueError, match="Invalid configuration"):
        load_config(path)


def test_setup_logger_levels() -> None:
    logger = setup_logger(config=CodecConfig(log_level="error"))
    assert logger.name == PACKAGE_LOGGER
    assert logger.level == logging.ERROR
    assert logging.getLogger(CODEC_LOGGER).level == logging.ERROR


def test_setup_logger_trace_decoding() -> None:
    setup_logger(config=CodecConfig(trace_decoding=True))
    assert logging.getLogger(PACKAGE_LOGGER).level == logging.WARNING
    assert logging.getLogger(CODEC_LOGGER).level == logging.DEBUG


def test_setup_logger_named(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    assert setup_logger(CODEC_LOGGER).name == CODEC_LOGGER


def test_decoder_traces_states(caplog: pytest.LogCaptureFixture) -> None:
    setup_logger(config=CodecConfig(trace_decoding=True))
    with caplog.at_level(logging.DEBUG, logger=CODEC_LOGGER):
        codec.decode(CANYON_RECEIPT)

    messages = [
        record.getMessage()
        for record in caplog.records
        if record.name == CODEC_LOGGER
    ]
    assert any(message.startswith("MANDATORY") for message in messages)
    assert any(message.startswith("MAYBE_NONCE") for message in messages)
    assert any(message.startswith("MAYBE_VERSION") for message in messages)


def test_decoder_silent_by_default(caplog: pytest.LogCaptureFixture) -> None:
    setup_logger(config=CodecConfig())
    with caplog.at_level(logging.INFO):
        codec.decode(CANYON_RECEIPT)
    assert not [r for r in caplog.records if r.name == CODEC_LOGGER]


def test_decoder_silent_at_debug_without_trace(
    caplog: pytest.LogCaptureFixture,
) -> None:
    setup_logger(config=CodecConfig(log_level="DEBUG", trace_decoding=False))
    assert logging.getLogger(CODEC_LOGGER).level == logging.INFO
    with caplog.at_level(logging.DEBUG):
        codec.decode(CANYON_RECEIPT)
    assert not [r for r in caplog.records if r.name == CODEC_LOGGER]
