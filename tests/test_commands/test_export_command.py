"""Tests for export command module."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from wow_ui_exporter.commands.export import export
from wow_ui_exporter.core.config import AppConfig
from wow_ui_exporter.core.errors import RegionNotFound
from wow_ui_exporter.core.pipeline import ExportResult, RunState
from wow_ui_exporter.core.types import Product, Region


class TestExportCommand:
    """Test export command functionality."""

    @pytest.fixture
    def runner(self):
        """Create CLI test runner."""
        return CliRunner()

    @pytest.fixture
    def export_result(self, sample_build) -> ExportResult:
        return ExportResult(
            build=sample_build,
            output_dir=Path("out"),
            candidates=10,
            exported=8,
            unresolved=["Interface/New.lua", "Interface/Other.lua"],
        )

    @patch("wow_ui_exporter.commands.export.ExportPipeline")
    def test_export_defaults(self, mock_pipeline_class, runner, cli_obj, export_result):
        """Test export with required options only."""
        mock_pipeline_class.return_value.run.return_value = export_result

        result = runner.invoke(export, ["--product", "wow", "--output", "out"], obj=cli_obj)

        assert result.exit_code == 0, result.output
        mock_pipeline_class.return_value.run.assert_called_once_with(
            Product.WOW,
            Path("out"),
            region=Region.US,
            keep_manifests=False,
            export_version=False,
        )
        console_output = " ".join(cli_obj["console"].printed_lines)
        assert "Exported 8 files for 1.15.0.54631" in console_output

    @patch("wow_ui_exporter.commands.export.ExportPipeline")
    def test_export_all_flags(self, mock_pipeline_class, runner, cli_obj, export_result):
        """Test region, retention and version flags are forwarded."""
        mock_pipeline_class.return_value.run.return_value = export_result

        result = runner.invoke(
            export,
            [
                "--product", "wow_classic_era",
                "--output", "out",
                "--region", "eu",
                "--keep-manifests",
                "--export-version",
                "--listfile-url", "https://example.com/listfile.csv",
            ],
            obj=cli_obj,
        )

        assert result.exit_code == 0, result.output
        assert mock_pipeline_class.call_args.kwargs["listfile_url"] == "https://example.com/listfile.csv"
        mock_pipeline_class.return_value.run.assert_called_once_with(
            Product.WOW_CLASSIC_ERA,
            Path("out"),
            region=Region.EU,
            keep_manifests=True,
            export_version=True,
        )

    @patch("wow_ui_exporter.commands.export.ExportPipeline")
    def test_export_tool_override(self, mock_pipeline_class, runner, cli_obj, export_result):
        """Test --tool replaces the configured executable."""
        mock_pipeline_class.return_value.run.return_value = export_result

        result = runner.invoke(
            export, ["--product", "wow", "--output", "out", "--tool", "/opt/TACTTool"], obj=cli_obj
        )

        assert result.exit_code == 0, result.output
        config: AppConfig = mock_pipeline_class.call_args.args[0]
        assert config.export_tool.executable == "/opt/TACTTool"
        assert cli_obj["config"].export_tool.executable == "TACTTool"

    @patch("wow_ui_exporter.commands.export.ExportPipeline")
    def test_export_verbose_lists_unresolved(self, mock_pipeline_class, runner, cli_obj, export_result):
        """Test verbose output lists names missing from the listfile."""
        mock_pipeline_class.return_value.run.return_value = export_result
        cli_obj["verbose"] = True

        result = runner.invoke(export, ["--product", "wow", "--output", "out"], obj=cli_obj)

        assert result.exit_code == 0, result.output
        assert "  Interface/New.lua" in cli_obj["console"].printed_lines

    @patch("wow_ui_exporter.commands.export.ExportPipeline")
    def test_export_json_output(self, mock_pipeline_class, runner, cli_obj, export_result):
        """Test JSON output format."""
        mock_pipeline_class.return_value.run.return_value = export_result
        cli_obj["config"] = AppConfig(output_format="json")

        result = runner.invoke(export, ["--product", "wow", "--output", "out"], obj=cli_obj)

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["exported"] == 8
        assert data["build"]["version_name"] == "1.15.0.54631"

    @patch("wow_ui_exporter.commands.export.ExportPipeline")
    def test_export_failure(self, mock_pipeline_class, runner, cli_obj):
        """Test run failures exit non-zero with the error."""
        mock_pipeline = mock_pipeline_class.return_value
        mock_pipeline.run.side_effect = RegionNotFound("No kr build listed for wow", region="kr")
        mock_pipeline.state = RunState.FAILED

        result = runner.invoke(export, ["--product", "wow", "--output", "out", "--region", "kr"], obj=cli_obj)

        assert result.exit_code == 1
        assert "No kr build listed for wow" in result.output
        console_output = " ".join(cli_obj["console"].printed_lines)
        assert "Error: No kr build listed for wow" in console_output

    def test_export_invalid_product(self, runner, cli_obj):
        """Test unknown products are rejected."""
        result = runner.invoke(export, ["--product", "d4", "--output", "out"], obj=cli_obj)

        assert result.exit_code == 2
