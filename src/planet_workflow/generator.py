"""
Generation run - Expand the template and write every manifest.

Order of writes:
1. Combined manifest (<prefix>-workflow), original needs intact
2. One manifest per step (<prefix>-<step id>), needs cleared
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from .constants import COMBINED_SUFFIX, MANIFEST_PREFIX
from .manifest import ManifestWriter
from .workflow import Workflow, WorkflowTemplate, expand_workflow, partition_workflow

logger = logging.getLogger(__name__)


@dataclass
class GenerationResult:
    """Result of a generation run."""

    workflow: Workflow
    regions: tuple[str, ...]
    dry_run: bool = False
    # Manifest name -> path (path is where it was, or would be, written)
    manifests: dict[str, Path] = field(default_factory=dict)

    @property
    def task_counts(self) -> dict[str, int]:
        """Number of tasks per expanded step."""
        return {step.id: len(step.tasks) for step in self.workflow.steps}

    @property
    def total_tasks(self) -> int:
        return sum(self.task_counts.values())


def build_manifests(template: WorkflowTemplate, prefix: str = MANIFEST_PREFIX) -> dict[str, Workflow]:
    """
    Expand the template and pair every manifest with its name.

    Returns:
        Manifest name to workflow, combined manifest first then steps in order
    """
    expanded = expand_workflow(template)
    manifests = {f"{prefix}-{COMBINED_SUFFIX}": expanded}
    for step_id, partial in partition_workflow(expanded).items():
        manifests[f"{prefix}-{step_id}"] = partial
    return manifests


def generate_manifests(
    template: WorkflowTemplate,
    writer: ManifestWriter,
    prefix: str = MANIFEST_PREFIX,
    dry_run: bool = False,
) -> GenerationResult:
    """
    Generate and persist all manifests for a template.

    Args:
        template: Prototype workflow and region list
        writer: Destination for the manifest documents
        prefix: Manifest name prefix
        dry_run: If True, build everything but write nothing

    Returns:
        GenerationResult with the expanded workflow and manifest paths

    Raises:
        InvalidTemplateError: The template is malformed (nothing is written)
        ManifestWriteError: A write failed (remaining writes are skipped)
    """
    manifests = build_manifests(template, prefix)
    combined = next(iter(manifests.values()))
    logger.debug(f"Expanded {len(template.regions)} regions into {len(combined.steps)} steps")

    result = GenerationResult(workflow=combined, regions=template.regions, dry_run=dry_run)
    for name, workflow in manifests.items():
        if dry_run:
            result.manifests[name] = writer.path_for(name)
            logger.info(f"[DRY RUN] Would write: {result.manifests[name]}")
        else:
            result.manifests[name] = writer.write(name, workflow)

    return result
