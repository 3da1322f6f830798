"""
Monitoring of upstream policies-schema.json revisions.

For every tree we keep the acknowledged mozilla revision (revisions.json).
When upstream has a newer revision, its schema is diffed against the
acknowledged one and the changes are logged, so a maintainer can decide
whether they need to be ported to Thunderbird before acknowledging them.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from jsonschema import Draft202012Validator
from jsonschema.exceptions import ValidationError

from tbgen.core.errors import RevisionStateError, UnknownRevisionError
from tbgen.core.schema_diff import SchemaDiff, diff_schemas
from tbgen.models.policy import SchemaRevision

logger = logging.getLogger(__name__)

REVISION_STATE_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "array",
    "items": {
        "type": "object",
        "required": ["tree", "mozillaReferencePolicyRevision"],
        "properties": {
            "tree": {"type": "string", "minLength": 1},
            "mozillaReferencePolicyRevision": {"type": "string", "minLength": 1},
        },
    },
}

# Starter set, used when no revisions.json has been published yet.
DEFAULT_REVISION_STATE: list[dict[str, str]] = [
    {"tree": "esr68", "mozillaReferencePolicyRevision": "1b0a29b456b432d1c8bef09c233b84205ec9e13c"},
    {"tree": "esr78", "mozillaReferencePolicyRevision": "a8c4670b6ef144a0f3b6851c2a9d4bbd44fc032a"},
    {"tree": "esr91", "mozillaReferencePolicyRevision": "02bf5ca05376f55029da3645bdc6c8806e306e80"},
    {"tree": "central", "mozillaReferencePolicyRevision": "02bf5ca05376f55029da3645bdc6c8806e306e80"},
]


def validate_revision_state(state: Any) -> list[dict[str, Any]]:
    """Validate the acknowledged revision state; raises RevisionStateError."""
    try:
        Draft202012Validator(REVISION_STATE_SCHEMA).validate(state)
    except ValidationError as e:
        path = "/".join(map(str, e.path)) or "#"
        raise RevisionStateError(f"{e.message} @ {path}") from e
    return state


@dataclass(frozen=True)
class RevisionCheck:
    tree: str
    acknowledged: SchemaRevision
    latest: SchemaRevision
    # None when both revisions are the same or not comparable
    diff: SchemaDiff | None = None

    @property
    def is_outdated(self) -> bool:
        return self.acknowledged.revision != self.latest.revision


def check_reference_revision(
    entry: dict[str, Any], revisions: Sequence[SchemaRevision]
) -> RevisionCheck:
    """
    Compare the acknowledged mozilla revision of entry["tree"] with the newest one.

    revisions are newest first. Changes are logged as warnings; the caller
    decides whether to acknowledge the latest revision.
    """
    tree = entry["tree"]
    wanted = entry["mozillaReferencePolicyRevision"]
    acknowledged = next((r for r in revisions if r.revision == wanted), None)
    if acknowledged is None:
        raise UnknownRevisionError(tree, wanted)

    latest = revisions[0]
    if latest.revision == acknowledged.revision:
        return RevisionCheck(tree=tree, acknowledged=acknowledged, latest=latest)

    diff = diff_schemas(acknowledged.schema_data, latest.schema_data)
    if diff is not None:
        logger.warning(
            "Mozilla has released a new policy revision for mozilla-%s "
            "(acknowledged %s / %s, latest %s / %s)",
            tree,
            acknowledged.revision,
            acknowledged.version,
            latest.revision,
            latest.version,
        )
        if diff.added:
            logger.warning("Mozilla added the following policies: %s", diff.added)
        if diff.removed:
            logger.warning("Mozilla removed the following policies: %s", diff.removed)
        if diff.changed:
            logger.warning(
                "Mozilla changed properties of the following policies: %s", diff.changed
            )
    return RevisionCheck(tree=tree, acknowledged=acknowledged, latest=latest, diff=diff)


def acknowledge_latest(
    state: list[dict[str, Any]], checks: Sequence[RevisionCheck]
) -> list[dict[str, Any]]:
    """Return a copy of state with every checked tree set to its latest revision."""
    latest = {check.tree: check.latest.revision for check in checks}
    updated = []
    for entry in state:
        revision = latest.get(entry["tree"], entry["mozillaReferencePolicyRevision"])
        updated.append({**entry, "mozillaReferencePolicyRevision": revision})
    return updated
