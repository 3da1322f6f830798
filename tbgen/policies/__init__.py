from .compatibility import CompatibilityGroup, CompatibilityMap, display_policy_name
from .monitor import (
    DEFAULT_REVISION_STATE,
    RevisionCheck,
    acknowledge_latest,
    check_reference_revision,
    validate_revision_state,
)
from .readme import ReadmeSections, collect_readme_sections, parse_policy_readme
from .rebrand import rebrand

__all__ = [
    "DEFAULT_REVISION_STATE",
    "CompatibilityGroup",
    "CompatibilityMap",
    "ReadmeSections",
    "RevisionCheck",
    "acknowledge_latest",
    "check_reference_revision",
    "collect_readme_sections",
    "display_policy_name",
    "parse_policy_readme",
    "rebrand",
    "validate_revision_state",
]
