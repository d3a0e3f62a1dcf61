"""
Configuration management with YAML loading and environment variable support.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from .constants import (
    DATABASE_SRID,
    DATABASE_URL,
    DOWNLOAD_PATH_PATTERN,
    DOWNLOAD_URL_PATTERN,
    INDEX_SQL_FILE,
    MANIFEST_PREFIX,
    REGIONS,
)
from .workflow import RegionPatterns, WorkflowTemplate, create_planet_template


def _env_path(env_var: str, default: Path | None = None) -> Path | None:
    """Get path from environment variable or return default."""
    if value := os.environ.get(env_var):
        return Path(value)
    return default


@dataclass
class PathsConfig:
    """Paths configuration - output can be overridden via PWF_OUTPUT_DIR."""

    output_dir: Path = field(default_factory=lambda: _env_path("PWF_OUTPUT_DIR", Path(".")))


@dataclass
class DatabaseConfig:
    # Opaque connection string, embedded verbatim in the manifests
    url: str = field(default_factory=lambda: os.environ.get("PWF_DATABASE_URL", DATABASE_URL))
    srid: int = DATABASE_SRID


@dataclass
class TemplateConfig:
    regions: list[str] = field(default_factory=lambda: list(REGIONS))
    url_pattern: str = DOWNLOAD_URL_PATTERN
    path_pattern: str = DOWNLOAD_PATH_PATTERN
    index_file: str = INDEX_SQL_FILE
    prefix: str = MANIFEST_PREFIX


@dataclass
class LoggingConfig:
    level: str = "INFO"
    console_logging: bool = True


SECTIONS = ("paths", "database", "template", "logging")


@dataclass
class AppConfig:
    paths: PathsConfig = field(default_factory=PathsConfig)
    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    template: TemplateConfig = field(default_factory=TemplateConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_yaml(cls, path: Path) -> AppConfig:
        """Load configuration from YAML file."""
        if not path.exists():
            return cls()

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: dict) -> AppConfig:
        """Create config from dictionary, ignoring unknown keys."""
        config = cls()

        for section_name in SECTIONS:
            section = getattr(config, section_name)
            for key, value in (data.get(section_name) or {}).items():
                if hasattr(section, key):
                    setattr(section, key, value)

        if isinstance(config.paths.output_dir, str):
            config.paths.output_dir = Path(config.paths.output_dir)

        # "regions: europe" means a single region, a bare "regions:" means none
        if isinstance(config.template.regions, str):
            config.template.regions = [config.template.regions]
        elif config.template.regions is None:
            config.template.regions = []

        return config

    def _to_dict(self) -> dict:
        """Convert config to dictionary."""
        result = {}
        for attr in SECTIONS:
            section = getattr(self, attr)
            result[attr] = {
                key: str(value) if isinstance(value, Path) else value for key, value in vars(section).items()
            }
        return result


def _get_default_config_dir() -> Path:
    """Get default config directory."""
    if config_dir := os.environ.get("PWF_CONFIG_DIR"):
        return Path(config_dir)

    if xdg_config := os.environ.get("XDG_CONFIG_HOME"):
        return Path(xdg_config) / "planet-workflow"

    return Path.home() / ".config" / "planet-workflow"


def load_config(config_path: Path | None = None, config_dir: Path | None = None) -> AppConfig:
    """
    Load configuration from an explicit file or the standard locations.

    Args:
        config_path: Path to config file (default: searches standard locations)
        config_dir: Config directory to search (default: PWF_CONFIG_DIR / XDG)

    Returns:
        AppConfig (defaults if no file is found)
    """
    if config_path is None:
        if config_dir is None:
            config_dir = _get_default_config_dir()
        search_paths = [
            config_dir / "config.yaml",
            Path.cwd() / "pwf.yaml",
        ]
        for path in search_paths:
            if path.exists():
                config_path = path
                break

    return AppConfig.from_yaml(config_path) if config_path else AppConfig()


def build_template(config: AppConfig) -> WorkflowTemplate:
    """
    Build the planet workflow template from configuration.

    Raises:
        InvalidTemplateError: A URL/path pattern lacks the {region} placeholder
    """
    patterns = RegionPatterns(
        url_pattern=config.template.url_pattern,
        path_pattern=config.template.path_pattern,
    )
    return create_planet_template(
        regions=config.template.regions,
        database=config.database.url,
        database_srid=int(config.database.srid),
        index_file=config.template.index_file,
        patterns=patterns,
    )
