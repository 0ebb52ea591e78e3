"""Tests for CLI app factory and context wiring."""

from pathlib import Path

import typer

from mediaingest.cli.state import CLIState
from mediaingest.config.settings import LogLevel


def capture_state(app: typer.Typer) -> dict:
    captured: dict = {}

    @app.command()
    def test_cmd(ctx: typer.Context):
        captured["state"] = ctx.obj

    return captured


class TestCLIAppFactory:
    def test_returns_typer_app(self, default_app):
        assert isinstance(default_app, typer.Typer)
        assert default_app.info.name == "mediaingest"

    def test_help_lists_commands(self, cli_runner, default_app):
        result = cli_runner.invoke(default_app, ["--help"])

        assert result.exit_code == 0
        assert "transfer" in result.stdout
        assert "queue" in result.stdout


class TestGlobalOptions:
    def test_commands_receive_cli_state(self, cli_runner, default_app):
        captured = capture_state(default_app)

        result = cli_runner.invoke(default_app, ["test-cmd"])

        assert result.exit_code == 0
        assert isinstance(captured["state"], CLIState)

    def test_verbose_flag_enables_debug_logging(self, cli_runner, default_app):
        captured = capture_state(default_app)

        result = cli_runner.invoke(default_app, ["--verbose", "test-cmd"])

        assert result.exit_code == 0
        assert captured["state"].settings.log_level == LogLevel.DEBUG

    def test_state_file_flag_overrides_default(self, cli_runner, default_app, tmp_path):
        captured = capture_state(default_app)
        state_file = tmp_path / "custom.json"

        result = cli_runner.invoke(default_app, ["--state-file", str(state_file), "test-cmd"])

        assert result.exit_code == 0
        assert captured["state"].settings.state_file == Path(state_file)

    def test_injected_settings_bypass_cli_flags(
        self, cli_runner, test_cli_app, cli_settings
    ):
        captured = capture_state(test_cli_app)

        result = cli_runner.invoke(test_cli_app, ["--verbose", "test-cmd"])

        assert result.exit_code == 0
        assert captured["state"].settings is cli_settings


class TestCLIState:
    def test_retry_policy_merges_network_prefixes(self, cli_settings):
        state = CLIState(cli_settings.model_copy(update={"network_mount_prefixes": ("/a",)}))

        policy = state.retry_policy(["/b"])

        assert policy.network_mount_prefixes == ("/a", "/b")
        assert policy.local_max_retries == cli_settings.local_max_retries

    def test_rate_limiter_uses_settings(self, cli_settings):
        limiter = CLIState(cli_settings).create_rate_limiter()

        assert limiter.capacity == cli_settings.rate_limit_capacity
        assert limiter.refill_rate == cli_settings.rate_limit_per_second
