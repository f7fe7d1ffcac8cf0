"""Tests for output formatting and logging setup."""

import io
import json
import logging

from rich.console import Console

from shipwright.commands.build import format_size
from shipwright.logging import configure_logging
from shipwright.output import OutputContext


def make_ctx(json_mode: bool = False) -> tuple[OutputContext, io.StringIO]:
    output = io.StringIO()
    console = Console(file=output, force_terminal=False, width=200)
    return OutputContext(console=console, json_mode=json_mode), output


class TestOutputContext:
    """Tests for OutputContext."""

    def test_print_in_normal_mode(self) -> None:
        ctx, output = make_ctx()
        ctx.print("Deployed file:")
        assert "Deployed file:" in output.getvalue()

    def test_print_suppressed_in_json_mode(self) -> None:
        ctx, output = make_ctx(json_mode=True)
        ctx.print("Deployed file:")
        ctx.warning("careful")
        ctx.steps("Next steps:", ["Restart the server"])
        assert output.getvalue() == ""

    def test_print_json_in_json_mode(self, capsys) -> None:
        ctx, _ = make_ctx(json_mode=True)
        ctx.print_json({"version": "1.3.0", "changed": True})
        data = json.loads(capsys.readouterr().out)
        assert data == {"version": "1.3.0", "changed": True}

    def test_error_in_json_mode(self, capsys) -> None:
        ctx, _ = make_ctx(json_mode=True)
        ctx.error("Build failed", {"exit_code": 12})
        data = json.loads(capsys.readouterr().out)
        assert data == {"error": "Build failed", "exit_code": 12}

    def test_error_in_normal_mode(self) -> None:
        ctx, output = make_ctx()
        ctx.error("Build failed")
        assert "Error: Build failed" in output.getvalue()

    def test_steps_numbered(self) -> None:
        ctx, output = make_ctx()
        ctx.steps("Next steps:", ["Restart the server", "Check server logs"])
        text = output.getvalue()
        assert "Next steps:" in text
        assert "1. Restart the server" in text
        assert "2. Check server logs" in text

    def test_steps_empty_prints_nothing(self) -> None:
        ctx, output = make_ctx()
        ctx.steps("Next steps:", [])
        assert output.getvalue() == ""


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_levels(self) -> None:
        stream = io.StringIO()
        configure_logging(stream=stream)
        assert logging.getLogger().level == logging.INFO
        configure_logging(verbosity=1, stream=stream)
        assert logging.getLogger().level == logging.DEBUG
        configure_logging(verbosity=2, quiet=True, stream=stream)
        assert logging.getLogger().level == logging.WARNING

    def test_logs_go_to_stream(self) -> None:
        stream = io.StringIO()
        configure_logging(no_color=True, stream=stream)
        logging.getLogger("shipwright.test").info("Deploying WeatherVoting")
        assert "Deploying WeatherVoting" in stream.getvalue()


def test_format_size():
    assert format_size(512) == "512B"
    assert format_size(2048) == "2.0K"
    assert format_size(5 * 1024 * 1024) == "5.0M"
