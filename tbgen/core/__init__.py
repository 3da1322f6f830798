from .log import configure_logging
from .schema_diff import SchemaDiff, diff_schemas, flat_policy_names, flatten_schema
from .versions import compare_versions, is_wildcard, normalize_version, version_sort_key

__all__ = [
    "SchemaDiff",
    "compare_versions",
    "configure_logging",
    "diff_schemas",
    "flat_policy_names",
    "flatten_schema",
    "is_wildcard",
    "normalize_version",
    "version_sort_key",
]
