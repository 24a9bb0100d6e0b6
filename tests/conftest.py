"""Shared fixtures — real-world log line samples."""

import pytest

from samples import CLOUD_LOGGING_LINE, ECS_LINE, PINO_LINE


@pytest.fixture
def ecs_line():
    return ECS_LINE


@pytest.fixture
def cloud_logging_line():
    return CLOUD_LOGGING_LINE


@pytest.fixture
def pino_line():
    return PINO_LINE


@pytest.fixture
def sample_log_file(tmp_path):
    """A mixed log file: JSON records, plain text, and a malformed line."""
    path = tmp_path / "app.log"
    path.write_text(
        "\n".join([
            CLOUD_LOGGING_LINE,
            "plain text startup banner",
            PINO_LINE,
            '{"level":"debug","msg":"cache warm","time":"2024-01-01T00:00:00Z"}',
            '{"broken": ',
            ECS_LINE,
        ]) + "\n"
    )
    return str(path)
