"""
Planet Workflow (pwf) - Workflow manifest generator for OpenStreetMap imports

Generates declarative manifests for a multi-stage geospatial pipeline:
- Download regional OpenStreetMap extracts
- Import them into a spatial database
- Build indexes once every region is loaded
- Split the pipeline into standalone per-step manifests
"""

__version__ = "0.1.0"
__package_name__ = "planet-workflow"
__short_name__ = "pwf"
