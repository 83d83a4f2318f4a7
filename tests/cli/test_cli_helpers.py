"""Tests for CLI error handling, context and output helpers."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from rich.console import Console

from fsinspect.cli.common.context import (
    CliContext,
    LogLevel,
    ScanPreset,
    clear_cli_context,
    get_cli_context,
    set_cli_context,
)
from fsinspect.cli.common.error_handler import handle_cli_error
from fsinspect.cli.helpers import cancel_on_interrupt, format_size, print_scan_policy
from fsinspect.cli.json_formatter import format_json_output
from fsinspect.cli.scan_handler import build_scan_configuration, handle_scan_command
from fsinspect.cli.size_handler import handle_size_command
from fsinspect.config import ScanConfiguration
from fsinspect.shared.constants import CLIDefaults
from fsinspect.shared.errors import ErrorCode, InfrastructureError, create_validation_error


class TestHandleCliError:
    """Test cases for handle_cli_error."""

    def test_domain_error_text_output(self, capsys) -> None:
        error = create_validation_error("sample_rate must be in (0, 1]", field="sample_rate")

        exit_code = handle_cli_error(error, "size")

        assert exit_code == CLIDefaults.EXIT_ERROR
        assert "Invalid argument: sample_rate must be in (0, 1]" in capsys.readouterr().err

    def test_json_output_envelope(self, capsys) -> None:
        error = InfrastructureError(ErrorCode.SCANNER_ERROR, "worker failed")

        exit_code = handle_cli_error(error, "scan", json_output=True)

        payload = json.loads(capsys.readouterr().out)
        assert exit_code == CLIDefaults.EXIT_ERROR
        assert payload["success"] is False
        assert payload["command"] == "scan"
        assert payload["errors"] == ["Infrastructure error: worker failed"]
        assert payload["data"]["error_type"] == "InfrastructureError"

    def test_keyboard_interrupt_exit_code(self, capsys) -> None:
        exit_code = handle_cli_error(KeyboardInterrupt(), "scan")

        assert exit_code == CLIDefaults.EXIT_INTERRUPTED
        assert "interrupted" in capsys.readouterr().err

    def test_keyboard_interrupt_json_reports_cancellation(self, capsys) -> None:
        exit_code = handle_cli_error(KeyboardInterrupt(), "scan", json_output=True)

        payload = json.loads(capsys.readouterr().out)
        assert exit_code == CLIDefaults.EXIT_INTERRUPTED
        assert payload["data"]["error_code"] == ErrorCode.OPERATION_CANCELLED.value

    def test_os_error(self, capsys) -> None:
        exit_code = handle_cli_error(PermissionError("denied"), "hash")

        assert exit_code == CLIDefaults.EXIT_ERROR
        assert "File system error" in capsys.readouterr().err


class TestCliContext:
    """Test cases for the CLI context."""

    def test_verbose_forces_debug(self) -> None:
        context = CliContext(verbose=1, log_level=LogLevel.ERROR)

        assert context.get_effective_log_level("INFO") == "DEBUG"

    def test_explicit_level_wins_over_configured(self) -> None:
        assert CliContext(log_level=LogLevel.WARNING).get_effective_log_level("info") == "WARNING"
        assert CliContext().get_effective_log_level("info") == "INFO"

    def test_context_var_round_trip(self) -> None:
        context = CliContext(verbose=2)
        set_cli_context(context)
        try:
            assert get_cli_context() is context
        finally:
            clear_cli_context()

        with pytest.raises(RuntimeError):
            get_cli_context()


class TestBuildScanConfiguration:
    """Preset resolution with command-line overrides."""

    def test_default_preset_uses_settings(self) -> None:
        assert build_scan_configuration(ScanPreset.DEFAULT) == ScanConfiguration.default()

    def test_overrides_are_applied(self) -> None:
        config = build_scan_configuration(
            ScanPreset.LARGE,
            min_size=1,
            include_hidden=True,
            excludes=["/node_modules/"],
        )

        assert config.min_file_size == 1
        assert config.include_hidden is True
        assert "node_modules/" in config.excluded_prefixes
        assert "Library" in config.excluded_prefixes

    def test_junk_preset(self) -> None:
        assert build_scan_configuration(ScanPreset.JUNK) == ScanConfiguration.junk_scan()


class TestOutputHelpers:
    """Formatting helpers."""

    @pytest.mark.parametrize(
        ("num_bytes", "expected"),
        [
            (0, "0 B"),
            (1023, "1023 B"),
            (1536, "1.5 KB"),
            (5 * 1024**2, "5.0 MB"),
            (3 * 1024**4, "3.0 TB"),
        ],
    )
    def test_format_size(self, num_bytes: int, expected: str) -> None:
        assert format_size(num_bytes) == expected

    def test_json_envelope(self) -> None:
        payload = json.loads(format_json_output(True, "size", data={"total_size": 1}))

        assert payload["success"] is True
        assert payload["data"] == {"total_size": 1}
        assert payload["errors"] == []
        assert payload["warnings"] == []

    def test_errors_force_failure(self) -> None:
        payload = json.loads(format_json_output(True, "scan", errors=["boom"]))

        assert payload["success"] is False


class TestRunControl:
    """Interrupt handling and verbose reporting in command handlers."""

    def test_cancel_on_interrupt_cancels_token(self) -> None:
        with pytest.raises(KeyboardInterrupt):
            with cancel_on_interrupt() as token:
                raise KeyboardInterrupt

        assert token.is_cancelled()

    def test_token_untouched_on_normal_exit(self) -> None:
        with cancel_on_interrupt() as token:
            pass

        assert not token.is_cancelled()

    def test_scan_interrupt_cancels_scanner_token(self, tmp_path: Path, mocker) -> None:
        # Given
        scanner_cls = mocker.patch("fsinspect.cli.scan_handler.DirectoryScanner")
        scanner_cls.return_value.collect.side_effect = KeyboardInterrupt

        # When
        with pytest.raises(KeyboardInterrupt):
            handle_scan_command([tmp_path], ScanConfiguration(), json_output=True)

        # Then
        assert scanner_cls.call_args.kwargs["cancel_token"].is_cancelled()

    def test_size_interrupt_cancels_computer_token(self, tmp_path: Path, mocker) -> None:
        computer_cls = mocker.patch("fsinspect.cli.size_handler.SizeComputer")
        computer_cls.return_value.exact_size.side_effect = KeyboardInterrupt

        with pytest.raises(KeyboardInterrupt):
            handle_size_command(tmp_path, json_output=True)

        assert computer_cls.call_args.kwargs["cancel_token"].is_cancelled()

    def test_policy_hidden_without_verbose(self) -> None:
        console = Console(record=True, width=200)
        set_cli_context(CliContext())
        try:
            print_scan_policy(console, ScanConfiguration())
        finally:
            clear_cli_context()

        assert console.export_text() == ""

    def test_policy_printed_in_verbose_mode(self) -> None:
        # Given
        console = Console(record=True, width=200)
        config = ScanConfiguration(min_file_size=2048, excluded_prefixes=frozenset({"cache/"}))
        set_cli_context(CliContext(verbose=1, config_path=Path("/etc/fsinspect.toml")))

        # When
        try:
            print_scan_policy(console, config)
        finally:
            clear_cli_context()

        # Then
        output = console.export_text()
        assert "Configuration: /etc/fsinspect.toml" in output
        assert "Policy: min size 2.0 KB, hidden skipped, excluded cache/" in output
