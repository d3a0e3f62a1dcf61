"""Shared pytest fixtures for planet-workflow tests."""

import logging

import pytest
from typer.testing import CliRunner

from planet_workflow.workflow import PLANET_TEMPLATE


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _reset_package_logger():
    """Drop handlers installed by CLI invocations (they hold captured streams)."""
    yield
    logger = logging.getLogger("planet_workflow")
    logger.handlers = []
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def liechtenstein_template():
    """Planet template reduced to a single small region."""
    return PLANET_TEMPLATE.with_regions(["liechtenstein"])


@pytest.fixture
def sample_config(tmp_path):
    """Create a sample config file."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()

    config_file = config_dir / "config.yaml"
    config_file.write_text(
        f"""
paths:
  output_dir: "{tmp_path / "manifests"}"

database:
  url: "jdbc:postgresql://db:5432/osm?&user=osm&password=secret"
  srid: 4326

template:
  regions:
    - liechtenstein
    - monaco
  prefix: "small"

logging:
  level: "WARNING"
"""
    )

    return config_file
