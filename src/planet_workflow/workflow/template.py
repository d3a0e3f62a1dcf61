"""
Planet workflow template - The single-region prototype and its regions.

The prototype is a three step pipeline:
1. download - fetch one OpenStreetMap extract (per-region prototype)
2. import   - load the extract into the database (per-region prototype)
3. index    - build indexes once, after every import

The template is a constant for a generation run. Expansion never mutates
it; see `expand.py`.
"""

from dataclasses import dataclass, replace

from ..constants import (
    DATABASE_SRID,
    DATABASE_URL,
    DOWNLOAD_PATH_PATTERN,
    DOWNLOAD_STEP,
    DOWNLOAD_URL_PATTERN,
    IMPORT_STEP,
    INDEX_SQL_FILE,
    INDEX_STEP,
    REGIONS,
)
from .tasks import DownloadUrl, ExecuteSql, ImportOpenStreetMap, InvalidTemplateError, Step, Workflow

REGION_PLACEHOLDER = "{region}"


@dataclass(frozen=True)
class RegionPatterns:
    """String patterns that turn a region identifier into download fields."""

    url_pattern: str = DOWNLOAD_URL_PATTERN
    path_pattern: str = DOWNLOAD_PATH_PATTERN

    def __post_init__(self):
        for name in ("url_pattern", "path_pattern"):
            if REGION_PLACEHOLDER not in getattr(self, name):
                raise InvalidTemplateError(f"{name} must contain {REGION_PLACEHOLDER}: {getattr(self, name)!r}")

    def url(self, region: str) -> str:
        return self.url_pattern.format(region=region)

    def path(self, region: str) -> str:
        # Sub-regions such as "europe/monaco" download to a flat file name
        return self.path_pattern.format(region=region.rsplit("/", 1)[-1])


@dataclass(frozen=True)
class WorkflowTemplate:
    """
    Read-only prototype workflow plus the regions it is expanded over.

    Steps named in `parameterized_steps` hold exactly one prototype task,
    which expansion replaces with one task per region.
    """

    workflow: Workflow
    regions: tuple[str, ...] = REGIONS
    parameterized_steps: tuple[str, ...] = (DOWNLOAD_STEP, IMPORT_STEP)
    expected_steps: tuple[str, ...] = (DOWNLOAD_STEP, IMPORT_STEP, INDEX_STEP)
    patterns: RegionPatterns = RegionPatterns()

    def __post_init__(self):
        object.__setattr__(self, "regions", tuple(self.regions))

    def with_regions(self, regions) -> "WorkflowTemplate":
        """Copy of this template expanded over a different region list."""
        return replace(self, regions=tuple(regions))


def create_planet_workflow(
    database: str = DATABASE_URL,
    database_srid: int = DATABASE_SRID,
    index_file: str = INDEX_SQL_FILE,
    sample_region: str = "europe/liechtenstein",
    patterns: RegionPatterns | None = None,
) -> Workflow:
    """
    Create the single-region prototype workflow.

    Args:
        database: Connection string embedded verbatim in import/index tasks
        database_srid: SRID the importer reprojects geometries to
        index_file: SQL script run by the index step
        sample_region: Region the prototype tasks point at before expansion
        patterns: URL/path patterns (default: Geofabrik latest extracts)

    Returns:
        Workflow with download -> import -> index steps
    """
    patterns = patterns or RegionPatterns()
    sample_path = patterns.path(sample_region)

    return Workflow(
        steps=(
            Step(
                id=DOWNLOAD_STEP,
                tasks=(DownloadUrl(url=patterns.url(sample_region), path=sample_path),),
            ),
            Step(
                id=IMPORT_STEP,
                needs=(DOWNLOAD_STEP,),
                tasks=(ImportOpenStreetMap(file=sample_path, database=database, database_srid=database_srid),),
            ),
            Step(
                id=INDEX_STEP,
                needs=(IMPORT_STEP,),
                tasks=(ExecuteSql(file=index_file, database=database),),
            ),
        )
    )


def create_planet_template(
    regions=REGIONS,
    database: str = DATABASE_URL,
    database_srid: int = DATABASE_SRID,
    index_file: str = INDEX_SQL_FILE,
    patterns: RegionPatterns | None = None,
) -> WorkflowTemplate:
    """Create the planet template: prototype workflow plus region list."""
    patterns = patterns or RegionPatterns()
    workflow = create_planet_workflow(
        database=database,
        database_srid=database_srid,
        index_file=index_file,
        patterns=patterns,
    )
    return WorkflowTemplate(workflow=workflow, regions=tuple(regions), patterns=patterns)


PLANET_TEMPLATE = create_planet_template()
