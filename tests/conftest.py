"""Pytest configuration and fixtures for mediaingest tests."""

import typing as t
from pathlib import Path

import loguru
import pytest
from blockbuster import BlockBuster, blockbuster_ctx
from typer.testing import CliRunner

from mediaingest.app import create_app
from mediaingest.cli.app import create_cli_app
from mediaingest.config.settings import Environment, LogLevel, Settings
from mediaingest.domain.retry import RetryPolicy
from mediaingest.events import BaseEmitter, EventEmitter
from mediaingest.infrastructure.logging import reset_logging
from mediaingest.ingest import ErrorClassifier, QueueStateStore


@pytest.fixture(autouse=True)
def blockbuster() -> t.Iterator[BlockBuster]:
    """Detect blocking calls in async event loop during tests.

    This fixture automatically activates Blockbuster for all tests,
    which will raise a BlockingError if any blocking I/O operations
    (like synchronous file.write()) are called within an async context.
    """
    with blockbuster_ctx(
        scanned_modules=["mediaingest"],
    ) as bb:
        # Third party modules use these functions, so we deactivate them
        # for now
        bb.functions["os.path.abspath"].deactivate()

        yield bb


@pytest.fixture
def test_settings(tmp_path: Path):
    """Provide test-specific settings."""
    return Settings(
        environment=Environment.TESTING,
        log_level=LogLevel.CRITICAL,  # Minimal logging during tests
        state_file=tmp_path / "state" / "batch-queue.json",
        transient_base_delay_ms=1,
        network_base_delay_ms=2,
    )


@pytest.fixture
def test_app(test_settings):
    """Provide a test app with clean logging state."""
    reset_logging()
    app = create_app(settings=test_settings)
    yield app
    reset_logging()


@pytest.fixture
def mock_logger(mocker):
    """Provide a mock logger for testing that captures log calls."""
    logger = mocker.Mock(spec=loguru.logger)
    return logger


@pytest.fixture
def mock_emitter(mocker):
    """Provide a mock event emitter for testing event emission."""
    emitter = mocker.Mock(spec=BaseEmitter)
    return emitter


@pytest.fixture
def real_emitter(mock_logger):
    """Provide a real EventEmitter for testing actual event emission.

    For simple tests that only verify emit() was called, use mock_emitter instead.
    """
    return EventEmitter(mock_logger)


@pytest.fixture(autouse=True)
def clean_logging_state():
    """Automatically reset logging before each test for isolation."""
    reset_logging()
    yield
    reset_logging()


@pytest.fixture
def fast_policy() -> RetryPolicy:
    """Retry policy with millisecond delays and one network mount."""
    return RetryPolicy(
        network_mount_prefixes=("/mnt/nas",),
        transient_base_delay_ms=1,
        network_base_delay_ms=2,
    )


@pytest.fixture
def fast_classifier(fast_policy) -> ErrorClassifier:
    return ErrorClassifier(fast_policy)


@pytest.fixture
def state_path(tmp_path: Path) -> Path:
    return tmp_path / "queue" / "batch-queue.json"


@pytest.fixture
def state_store(state_path, mock_logger) -> QueueStateStore:
    return QueueStateStore(state_path, mock_logger)


# CLI-specific fixtures (shared across all tests)


@pytest.fixture
def cli_runner():
    """Provide Typer CLI test runner."""
    return CliRunner()


@pytest.fixture
def default_app():
    """Provide CLI app with default settings."""
    return create_cli_app()
