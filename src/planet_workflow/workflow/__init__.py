"""
Workflow layer - Manifest data model, template and transforms.

Workflows are DATA STRUCTURES that describe what the executor should do.
Nothing here executes tasks; every transform returns new values.
"""

from .expand import expand_step, expand_workflow, parameterize
from .partition import partition_workflow
from .tasks import (
    DownloadUrl,
    ExecuteSql,
    ImportOpenStreetMap,
    InvalidTemplateError,
    Step,
    Task,
    TaskType,
    Workflow,
    task_from_dict,
)
from .template import (
    PLANET_TEMPLATE,
    RegionPatterns,
    WorkflowTemplate,
    create_planet_template,
    create_planet_workflow,
)

__all__ = [
    "Task",
    "TaskType",
    "DownloadUrl",
    "ImportOpenStreetMap",
    "ExecuteSql",
    "Step",
    "Workflow",
    "InvalidTemplateError",
    "task_from_dict",
    "RegionPatterns",
    "WorkflowTemplate",
    "PLANET_TEMPLATE",
    "create_planet_template",
    "create_planet_workflow",
    "parameterize",
    "expand_step",
    "expand_workflow",
    "partition_workflow",
]
