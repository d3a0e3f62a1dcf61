"""Split an expanded workflow into standalone single-step workflows."""

from dataclasses import replace

from .tasks import Workflow


def partition_workflow(workflow: Workflow) -> dict[str, Workflow]:
    """
    Derive one dependency-free workflow per step.

    Each result holds a single step with the same id and tasks but empty
    `needs`, so it can be submitted to the executor on its own.

    Returns:
        Step id to single-step workflow, in step order
    """
    return {step.id: Workflow(steps=(replace(step, needs=()),)) for step in workflow.steps}
