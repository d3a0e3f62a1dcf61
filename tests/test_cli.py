"""Tests for CLI commands using Typer's CliRunner."""

import json

from planet_workflow.cli import app


class TestCLIBasics:
    """Test basic CLI functionality."""

    def test_version_option(self, cli_runner):
        """Test --version displays version."""
        result = cli_runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_help_option(self, cli_runner):
        """Test --help displays help."""
        result = cli_runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "Planet Workflow" in result.output
        assert "generate" in result.output
        assert "list-regions" in result.output


class TestGenerateCommand:
    """Tests for generate command."""

    def test_generate_single_region(self, cli_runner, tmp_path, sample_config):
        """Test generate writes all manifests for the given region."""
        output = tmp_path / "out"
        result = cli_runner.invoke(
            app, ["generate", "-o", str(output), "-r", "liechtenstein", "--prefix", "planet", "-c", str(sample_config)]
        )
        assert result.exit_code == 0, result.output

        for name in ("planet-workflow", "planet-download", "planet-import", "planet-index"):
            assert (output / f"{name}.json").exists()

        download = json.loads((output / "planet-download.json").read_text())
        assert download["steps"][0]["tasks"][0]["url"] == "https://download.geofabrik.de/liechtenstein-latest.osm.pbf"

    def test_generate_uses_config(self, cli_runner, tmp_path, sample_config):
        """Test output dir, prefix and database come from the config file."""
        result = cli_runner.invoke(app, ["generate", "-c", str(sample_config)])
        assert result.exit_code == 0, result.output

        combined = json.loads((tmp_path / "manifests" / "small-workflow.json").read_text())
        assert len(combined["steps"][0]["tasks"]) == 2
        assert combined["steps"][2]["tasks"][0]["database"].startswith("jdbc:postgresql://db:5432/osm")

    def test_generate_dry_run(self, cli_runner, tmp_path, sample_config):
        """Test dry run writes nothing."""
        output = tmp_path / "out"
        result = cli_runner.invoke(app, ["generate", "-o", str(output), "--dry-run", "-c", str(sample_config)])
        assert result.exit_code == 0, result.output
        assert "dry run" in result.output
        assert not output.exists()

    def test_generate_write_failure(self, cli_runner, tmp_path, sample_config):
        """Test a write failure exits with an error."""
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        result = cli_runner.invoke(app, ["generate", "-o", str(blocker), "-c", str(sample_config)])
        assert result.exit_code == 1
        assert "Error" in result.output

    def test_generate_duplicate_region(self, cli_runner, tmp_path, sample_config):
        """Test an invalid region list exits with an error."""
        result = cli_runner.invoke(
            app, ["generate", "-o", str(tmp_path), "-r", "asia", "-r", "asia", "-c", str(sample_config)]
        )
        assert result.exit_code == 1
        assert "Duplicate region" in result.output


class TestShowCommand:
    """Tests for show command."""

    def test_show_manifest(self, cli_runner, tmp_path, sample_config):
        """Test show lists steps of a written manifest."""
        cli_runner.invoke(app, ["generate", "-o", str(tmp_path), "-c", str(sample_config)])
        result = cli_runner.invoke(app, ["show", str(tmp_path / "small-workflow.json")])
        assert result.exit_code == 0, result.output
        assert "download" in result.output
        assert "ExecuteSql" in result.output

    def test_show_invalid_manifest(self, cli_runner, tmp_path):
        """Test an unknown task type is reported."""
        manifest = tmp_path / "bad.json"
        manifest.write_text('{"steps": [{"id": "x", "needs": [], "tasks": [{"type": "Teleport"}]}]}')
        result = cli_runner.invoke(app, ["show", str(manifest)])
        assert result.exit_code == 1
        assert "Unknown task type" in result.output

    def test_show_step_without_id(self, cli_runner, tmp_path):
        """Test a step missing its id is reported, not raised."""
        manifest = tmp_path / "bad.json"
        manifest.write_text('{"steps": [{"needs": []}]}')
        result = cli_runner.invoke(app, ["show", str(manifest)])
        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "missing 'id'" in result.output

    def test_show_top_level_list(self, cli_runner, tmp_path):
        """Test a manifest that is not an object is reported."""
        manifest = tmp_path / "list.json"
        manifest.write_text("[]")
        result = cli_runner.invoke(app, ["show", str(manifest)])
        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "must be a JSON object" in result.output

    def test_show_nonexistent_file(self, cli_runner):
        """Test show fails for a missing file."""
        result = cli_runner.invoke(app, ["show", "/nonexistent/manifest.json"])
        # Typer returns exit code 2 for path validation errors
        assert result.exit_code == 2


class TestListRegionsCommand:
    """Tests for list-regions command."""

    def test_list_regions(self, cli_runner, sample_config):
        """Test list-regions shows configured regions."""
        result = cli_runner.invoke(app, ["list-regions", "--config", str(sample_config)])
        assert result.exit_code == 0
        assert "liechtenstein" in result.output
        assert "monaco" in result.output
