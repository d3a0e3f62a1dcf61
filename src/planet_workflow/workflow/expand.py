"""
Workflow expansion - Project the single-region prototype onto N regions.

Download task i and import task i always refer to the same region: both
steps are expanded over the same region list in the same order, and each
concrete task carries its region so consumers need not rely on position.
"""

import logging
from dataclasses import replace

from .tasks import DownloadUrl, ImportOpenStreetMap, InvalidTemplateError, Step, Task, Workflow
from .template import RegionPatterns, WorkflowTemplate

logger = logging.getLogger(__name__)


def parameterize(task: Task, region: str, patterns: RegionPatterns | None = None) -> Task:
    """
    Produce the concrete task for one region.

    Args:
        task: Prototype task (DownloadUrl or ImportOpenStreetMap)
        region: Region identifier substituted into the patterns
        patterns: URL/path patterns (default: Geofabrik latest extracts)

    Returns:
        New task; the prototype is left untouched

    Raises:
        InvalidTemplateError: Empty region or a task type that has no
            per-region form
    """
    if not region:
        raise InvalidTemplateError("Region identifier must be a non-empty string")
    patterns = patterns or RegionPatterns()

    if isinstance(task, DownloadUrl):
        return replace(task, url=patterns.url(region), path=patterns.path(region), region=region)
    if isinstance(task, ImportOpenStreetMap):
        # Must match the download path for the same region
        return replace(task, file=patterns.path(region), region=region)

    raise InvalidTemplateError(f"{task.task_type.value} tasks cannot be parameterized by region")


def _check_regions(regions: tuple[str, ...], patterns: RegionPatterns) -> None:
    # Download path -> region that claimed it
    paths: dict[str, str] = {}
    for region in regions:
        if not region:
            raise InvalidTemplateError("Region identifier must be a non-empty string")
        if region in paths.values():
            raise InvalidTemplateError(f"Duplicate region: {region}")
        path = patterns.path(region)
        if path in paths:
            raise InvalidTemplateError(f"Regions '{paths[path]}' and '{region}' both download to {path}")
        paths[path] = region


def expand_step(step: Step, regions: tuple[str, ...], patterns: RegionPatterns) -> Step:
    """Replace a step's single prototype task with one task per region."""
    if len(step.tasks) != 1:
        raise InvalidTemplateError(
            f"Parameterized step '{step.id}' must hold exactly one prototype task, found {len(step.tasks)}"
        )
    prototype = step.tasks[0]
    return replace(step, tasks=tuple(parameterize(prototype, region, patterns) for region in regions))


def expand_workflow(template: WorkflowTemplate) -> Workflow:
    """
    Expand the template's prototype workflow over its region list.

    Parameterized steps get one concrete task per region, in region-list
    order. Other steps keep their tasks. Step ids and needs are unchanged.

    Raises:
        InvalidTemplateError: Malformed prototype or region list
    """
    prototype = template.workflow
    prototype.validate()
    _check_regions(template.regions, template.patterns)

    for step_id in template.expected_steps:
        if prototype.get_step(step_id) is None:
            raise InvalidTemplateError(f"Template is missing step '{step_id}'")

    steps = []
    for step in prototype.steps:
        if step.id in template.parameterized_steps:
            step = expand_step(step, template.regions, template.patterns)
            logger.debug(f"Expanded step {step.id} to {len(step.tasks)} tasks")
        steps.append(step)

    return Workflow(steps=tuple(steps))
