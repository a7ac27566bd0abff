"""
CLI Integration Tests
=====================

Tests the complete CLI interface including command parsing, configuration loading,
and basic functionality verification.
"""

import logging
from unittest.mock import patch

import pytest
import yaml
from click.testing import CliRunner
from conftest import FONT_BYTES, FakeFetcher

from fontcatalog.cli import cli
from fontcatalog.fonts.google import GoogleFontsProvider


@pytest.fixture(autouse=True)
def restore_logging():
    """The CLI reconfigures root logging; put the handlers back afterwards."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def runner():
    """Click test runner."""
    return CliRunner()


@pytest.fixture
def isolated_env(tmp_path, monkeypatch):
    """Run from an empty directory with an API key and quiet logging."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("GOOGLE_FONTS_API_KEY", "cli-key")
    monkeypatch.setenv("APP_LOG_LEVEL", "ERROR")
    return tmp_path


@pytest.fixture
def fake_provider(sample_documents):
    """Patch the CLI's provider class to serve the sample catalog."""

    def build(config):
        return GoogleFontsProvider(config, fetcher=FakeFetcher(sample_documents))

    with patch("fontcatalog.cli.GoogleFontsProvider", side_effect=build) as mock_provider:
        yield mock_provider


@pytest.mark.integration
class TestCLIIntegration:
    """CLI integration tests."""

    def test_cli_help(self, runner):
        result = runner.invoke(cli, ["--help"])

        assert result.exit_code == 0
        assert "search" in result.output
        assert "render" in result.output
        assert "download" in result.output

    def test_search(self, runner, isolated_env, fake_provider):
        result = runner.invoke(cli, ["search", "--sort", "alpha"])

        assert result.exit_code == 0, result.output
        lines = result.output.splitlines()
        assert lines[0] == "4 results, Page 1 of 1"
        assert lines[1].startswith("Lora [serif]")
        assert "Roboto [sans-serif] thin, normal, italic, bold, bold italic" in lines

    def test_search_with_filters(self, runner, isolated_env, fake_provider):
        result = runner.invoke(
            cli, ["search", "robo", "--category", "monospace", "--weight", "500"]
        )

        assert result.exit_code == 0, result.output
        assert result.output.splitlines() == [
            "1 results, Page 1 of 1",
            "Roboto Mono [monospace] medium",
        ]

    def test_search_without_api_key(self, runner, tmp_path, monkeypatch, fake_provider):
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("GOOGLE_FONTS_API_KEY", raising=False)

        result = runner.invoke(cli, ["search"])

        assert result.exit_code == 1
        fake_provider.assert_not_called()

    def test_render(self, runner, isolated_env, fake_provider):
        output = isolated_env / "page.html"

        result = runner.invoke(
            cli,
            [
                "render",
                "lora",
                "--output",
                str(output),
                "--sample",
                "Hello there",
                "--size",
                "20",
                "--select",
                "Pacifico|regular",
            ],
        )

        assert result.exit_code == 0, result.output
        html = output.read_text()
        assert "Hello there" in html
        assert "font-size: 20pt" in html
        assert "Previously Selected Fonts" in html
        assert "Pacifico|regular" in html

    def test_download(self, runner, isolated_env, fake_provider):
        dest = isolated_env / "fonts"

        result = runner.invoke(
            cli, ["download", "Roboto|700italic", "Lora|regular", "--dest", str(dest), "--no-progress"]
        )

        assert result.exit_code == 0, result.output
        assert (dest / "Roboto-BoldItalic.ttf").read_bytes() == FONT_BYTES
        assert (dest / "Lora-Regular.ttf").exists()
        assert f"Saved {dest / 'Lora-Regular.ttf'}" in result.output

    def test_download_unknown_font(self, runner, isolated_env, fake_provider):
        result = runner.invoke(cli, ["download", "Nope|regular", "--dest", str(isolated_env)])

        assert result.exit_code == 1
        assert "Nothing to download" in result.output

    def test_config_file(self, runner, isolated_env, fake_provider):
        config_path = isolated_env / "config.yaml"
        config_path.write_text(
            yaml.safe_dump(
                {
                    "download_dir": str(isolated_env / "configured"),
                    "provider": {"api_key": "yaml-key"},
                    "browser": {"splash_delay": 0},
                }
            )
        )

        result = runner.invoke(
            cli, ["--config", str(config_path), "download", "Lora|italic", "--no-progress"]
        )

        assert result.exit_code == 0, result.output
        assert (isolated_env / "configured" / "Lora-RegularItalic.ttf").exists()
        assert fake_provider.call_args.args[0].api_key == "yaml-key"

    def test_invalid_config_file(self, runner, isolated_env):
        config_path = isolated_env / "bad.yaml"
        config_path.write_text("provider: [unclosed")

        result = runner.invoke(cli, ["--config", str(config_path), "search"])

        assert result.exit_code == 1
        assert "Invalid YAML" in result.output
