"""
Flat policy names and change detection for policies-schema.json revisions.

A policy schema nests policy properties under "properties" and
"patternProperties". Nested names are flattened with "_" so that
{"properties": {"Proxy": {"properties": {"Mode": {}}}}} yields
"Proxy" and "Proxy_Mode".
"""

from __future__ import annotations

import json
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

SchemaNode = Mapping[str, Any]

GROUPING_KEYS = ("properties", "patternProperties")


@dataclass(frozen=True)
class SchemaDiff:
    """Flat policy names added, removed or changed between two revisions."""

    added: list[str] = field(default_factory=list)
    removed: list[str] = field(default_factory=list)
    changed: list[str] = field(default_factory=list)

    @property
    def has_changes(self) -> bool:
        return bool(self.added or self.removed or self.changed)


def flatten_schema(node: SchemaNode) -> Iterator[tuple[str, SchemaNode]]:
    """
    Yield (flat_name, sub_node) for every property below node.

    Each child is yielded before its own descendants, which are prefixed
    with "<child>_". Order follows the schema's key order.
    """
    for key in GROUPING_KEYS:
        children = node.get(key)
        if not isinstance(children, Mapping):
            continue
        for name, child in children.items():
            yield name, child
            if isinstance(child, Mapping):
                for sub_name, sub_node in flatten_schema(child):
                    yield f"{name}_{sub_name}", sub_node


def flat_policy_names(node: SchemaNode) -> list[str]:
    return [name for name, _ in flatten_schema(node)]


def _serialize(node: Any) -> str:
    return json.dumps(node, sort_keys=True, ensure_ascii=False, default=str)


def _comparable(node: Any) -> bool:
    return isinstance(node, Mapping) and "properties" in node


def diff_schemas(old: Any, new: Any) -> SchemaDiff | None:
    """
    Compare two schema revisions.

    Returns None when either side has no "properties" key, i.e. the two
    nodes are not comparable schemas.
    """
    if not _comparable(old) or not _comparable(new):
        return None

    old_map = dict(flatten_schema(old))
    new_map = dict(flatten_schema(new))

    added = [name for name in new_map if name not in old_map]
    removed = [name for name in old_map if name not in new_map]
    changed = [
        name
        for name in new_map
        if name in old_map and _serialize(new_map[name]) != _serialize(old_map[name])
    ]
    return SchemaDiff(added=added, removed=removed, changed=changed)
