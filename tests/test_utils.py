import json
import logging
import logging.handlers

import pytest

from utils import load_config, setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers = handlers
    root.setLevel(level)


def test_load_config_reads_json(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"simulation_parameters": {"particle_count": 5}}))

    config = load_config(str(path))

    assert config["simulation_parameters"]["particle_count"] == 5


def test_load_config_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(str(tmp_path / "nope.json"))


def test_load_config_bad_json(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json")

    with pytest.raises(json.JSONDecodeError):
        load_config(str(path))


def test_load_config_requires_object(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("[1, 2, 3]")

    with pytest.raises(ValueError, match="JSON object"):
        load_config(str(path))


def test_setup_logging_adds_console_and_rotating_file(tmp_path, restore_root_logger):
    log_file = tmp_path / "logs" / "run.log"

    setup_logging({"logging": {"level": "debug", "log_file": str(log_file)}})

    root = restore_root_logger
    assert root.level == logging.DEBUG
    assert len(root.handlers) == 2
    assert any(isinstance(h, logging.handlers.RotatingFileHandler) for h in root.handlers)
    assert log_file.parent.is_dir()


def test_setup_logging_without_file(restore_root_logger):
    setup_logging({"logging": {"level": "WARNING", "log_file": None}})

    root = restore_root_logger
    assert root.level == logging.WARNING
    assert len(root.handlers) == 1
    assert isinstance(root.handlers[0], logging.StreamHandler)
