# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_sandbox

import importlib
import shutil
from pathlib import Path
from unittest.mock import patch

# This import is intentionally module-level to test initial setup
import azure_code_interpreter.utils.logger as logger_module


def test_logger_initialization_and_directory_creation():
    """
    Verify that the logger is initialized correctly and creates the logs directory.
    """
    # GIVEN the logger module is imported
    log_dir = Path("logs")
    if not log_dir.exists():
        importlib.reload(logger_module)

    # THEN the logs directory should exist with a log file in it
    assert log_dir.is_dir()
    assert len(list(log_dir.glob("app.log*"))) > 0

    # and the logger should have two sinks configured (stderr and file)
    assert len(logger_module.logger._core.handlers) == 2

    shutil.rmtree(log_dir)


def test_logger_level_from_environment():
    """
    Verify that LOG_LEVEL is honoured on (re)load.
    """
    with patch.dict("os.environ", {"LOG_LEVEL": "debug"}):
        importlib.reload(logger_module)
    assert logger_module.LOG_LEVEL == "DEBUG"

    with patch.dict("os.environ", {}, clear=True):
        importlib.reload(logger_module)
    assert logger_module.LOG_LEVEL == "INFO"

    shutil.rmtree(Path("logs"))


def test_logger_sinks_keep_stdout_clean(capsys):
    """
    Verify messages go to stderr and the JSON file, never to stdout.
    """
    # GIVEN a fresh import of the logger
    log_dir = Path("logs")
    if log_dir.exists():
        shutil.rmtree(log_dir)
    importlib.reload(logger_module)

    # WHEN we log a message
    test_message = "Using session pool https://westus2.dynamicsessions.io/..."
    logger_module.logger.info(test_message)

    # THEN the message should appear in stderr only, stdout carries the MCP transport
    captured = capsys.readouterr()
    assert test_message in captured.err
    assert test_message not in captured.out

    # AND the message should be written to the log file (in JSON format)
    # Removing the sinks flushes the enqueued file writer before reading.
    logger_module.logger.remove()

    with open(log_dir / "app.log", "r") as f:
        log_content = f.read()
    assert '"message": "' + test_message + '"' in log_content

    shutil.rmtree(log_dir)
