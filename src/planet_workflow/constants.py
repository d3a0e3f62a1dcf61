"""
Centralized constants for the planet workflow template.

Region list, URL/path patterns and database defaults live here so the
template, config and CLI agree on a single set of values.
"""

# Geofabrik continent extracts, in manifest order
REGIONS = (
    "africa",
    "antarctica",
    "asia",
    "australia-oceania",
    "central-america",
    "europe",
    "north-america",
    "south-america",
)

# Region substitution patterns ({region} is the placeholder)
DOWNLOAD_URL_PATTERN = "https://download.geofabrik.de/{region}-latest.osm.pbf"
DOWNLOAD_PATH_PATTERN = "{region}-latest.osm.pbf"

# Connection string passed through verbatim to the importer
DATABASE_URL = "jdbc:postgresql://localhost:5432/baremaps?&user=baremaps&password=baremaps"
DATABASE_SRID = 3857

INDEX_SQL_FILE = "indexes.sql"

# Step ids of the planet template
DOWNLOAD_STEP = "download"
IMPORT_STEP = "import"
INDEX_STEP = "index"

# Manifest names are "<prefix>-workflow" and "<prefix>-<step id>"
MANIFEST_PREFIX = "planet"
COMBINED_SUFFIX = "workflow"
MANIFEST_EXTENSION = ".json"
