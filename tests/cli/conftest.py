"""Shared fixtures for CLI tests."""

from pathlib import Path

import pytest

from mediaingest.cli.app import create_cli_app
from mediaingest.cli.state import CLIState
from mediaingest.config.settings import LogLevel, Settings


@pytest.fixture
def cli_settings(tmp_path: Path):
    """Provide CLI Settings with fast retries and a temp state file."""
    return Settings(
        log_level=LogLevel.CRITICAL,
        state_file=tmp_path / "state" / "queue.json",
        transient_base_delay_ms=1,
        network_base_delay_ms=1,
    )


@pytest.fixture
def test_cli_app(cli_settings):
    """Provide CLI app with test settings injected."""
    return create_cli_app(settings=cli_settings)


@pytest.fixture
def card(tmp_path: Path) -> Path:
    root = tmp_path / "CARD"
    (root / "DCIM").mkdir(parents=True)
    (root / "CLIP").mkdir()
    (root / "DCIM" / "A.JPG").write_bytes(b"photo-a")
    (root / "DCIM" / "B.JPG").write_bytes(b"photo-b")
    (root / "CLIP" / "C0001.MOV").write_bytes(b"video")
    (root / "DCIM" / "README.TXT").write_text("skip")
    return root


@pytest.fixture
def cli_state_with_mock_manager(cli_settings, mocker):
    """CLIState whose manager factory returns a mocked manager."""
    from mediaingest.ingest import BatchQueueManager

    manager = mocker.AsyncMock(spec=BatchQueueManager)
    manager.__aenter__.return_value = manager
    manager.__aexit__.return_value = None

    state = CLIState(cli_settings, manager_factory=lambda **kwargs: manager)
    return state, manager


@pytest.fixture
def app_with_mock_manager(cli_state_with_mock_manager):
    state, _ = cli_state_with_mock_manager
    return create_cli_app(state=state)
