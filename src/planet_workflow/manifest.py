"""
Manifest persistence - Workflow documents as JSON files.

Each manifest is stored as <output_dir>/<name>.json and fully replaced on
every run. A single document write is atomic (temp file + rename); a run
that fails part way may leave other documents from a previous run.
"""

import json
import logging
import os
from pathlib import Path

from .constants import MANIFEST_EXTENSION
from .workflow import Workflow

logger = logging.getLogger(__name__)


class ManifestWriteError(OSError):
    """A manifest document could not be persisted."""


def encode_manifest(workflow: Workflow) -> str:
    """Canonical JSON encoding: 2-space indent, declaration key order."""
    return json.dumps(workflow.to_dict(), indent=2)


def atomic_write(path: Path, data: str):
    """Write text to path through a sibling temp file and rename."""
    tmp = path.with_suffix(path.suffix + ".tmp")
    try:
        tmp.write_text(data, encoding="utf-8")
        os.replace(tmp, path)
    except OSError:
        tmp.unlink(missing_ok=True)
        raise


class ManifestWriter:
    """
    Writes workflow manifests into one output directory.

    Stored as: <output_dir>/<name>.json
    """

    def __init__(self, output_dir: Path):
        """
        Initialize writer for an output directory.

        Args:
            output_dir: Directory where manifests are written (created on demand)
        """
        self.output_dir = Path(output_dir)

    def path_for(self, name: str) -> Path:
        return self.output_dir / f"{name}{MANIFEST_EXTENSION}"

    def ensure_dir(self):
        """Create the output directory if it doesn't exist."""
        self.output_dir.mkdir(parents=True, exist_ok=True)

    def write(self, name: str, workflow: Workflow) -> Path:
        """
        Persist a workflow under `name`, overwriting any existing document.

        Returns:
            Path of the written document

        Raises:
            ManifestWriteError: The directory or file could not be written
        """
        path = self.path_for(name)
        try:
            self.ensure_dir()
            atomic_write(path, encode_manifest(workflow))
        except OSError as err:
            raise ManifestWriteError(f"Failed to write manifest '{name}' to {path}: {err}") from err

        logger.info(f"Wrote manifest {path}")
        return path

    def read(self, name: str) -> Workflow:
        """Load a previously written manifest."""
        return read_manifest(self.path_for(name))

    def exists(self, name: str) -> bool:
        return self.path_for(name).exists()


def read_manifest(path: Path) -> Workflow:
    """Parse a manifest file into a Workflow."""
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    return Workflow.from_dict(data)
