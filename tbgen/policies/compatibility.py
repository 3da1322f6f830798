"""
Policy compatibility information per tree.

For every flat policy name (see tbgen.core.schema_diff) we record the first
Thunderbird version whose policies-schema.json contains it, separately for
each tree ("esr91", "central", ...). The map is built once per run and
passed explicitly to the documentation builders.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from tbgen.core.config import get_settings
from tbgen.core.schema_diff import flat_policy_names
from tbgen.models.policy import SchemaRevision


@dataclass
class CompatibilityGroup:
    """Policies/properties sharing the same compatibility information."""

    key: str
    policies: list[str] = field(default_factory=list)


def display_policy_name(name: str) -> str:
    """Readable, markdown-safe code span for a flat policy name."""
    name = name.replace("^.*$", "[name]").replace("^(", "(").replace(")$", ")")
    return "`" + name.replace("|", "\\|") + "`"


class CompatibilityMap:
    """policy name -> {tree: first version}."""

    def __init__(self, product: str | None = None) -> None:
        self.product = product or get_settings().COMPAT_PRODUCT_NAME
        self._data: dict[str, dict[str, str]] = {}

    def __contains__(self, policy: str) -> bool:
        return policy in self._data

    def __len__(self) -> int:
        return len(self._data)

    def add_tree(self, tree: str, revisions: Iterable[SchemaRevision]) -> None:
        """
        Record compatibility for tree.

        revisions are expected newest first (as listed by the hg log), so they
        are walked in reverse to find the first version of each policy.
        """
        for revision in reversed(list(revisions)):
            for raw_name in flat_policy_names(revision.schema_data):
                policy = raw_name.strip().replace("'", "")
                self._data.setdefault(policy, {}).setdefault(tree, revision.version)

    def versions(self, policy: str) -> dict[str, str]:
        return dict(self._data.get(policy, {}))

    def policy_names(self) -> list[str]:
        return sorted(self._data, key=str.lower)

    def to_dict(self) -> dict[str, dict[str, str]]:
        return {policy: dict(trees) for policy, trees in self._data.items()}

    def _key_for(self, entry: str, tree: str) -> str:
        trees = self._data[entry]
        added = trees[tree].replace(".0a1", ".0", 1)
        others = [v for t, v in trees.items() if t != tree and v != trees[tree]]
        backported = others[-1] if others else None

        if backported:
            major, _, minor = added.partition(".")
            # Backported to the previous release (92.0a1 -> 91.0): only list that one
            if minor == "0" and major.isdigit() and f"{int(major) - 1}.0" == backported:
                return f"{self.product} {backported}"
            return f"{self.product} {added}, {self.product} {backported}"
        return f"{self.product} {added}"

    def groups_for(self, policy: str, tree: str) -> list[CompatibilityGroup]:
        """Compatibility of policy and its properties in tree, grouped by identical info."""
        groups: dict[str, CompatibilityGroup] = {}
        for entry, trees in self._data.items():
            if entry != policy and not entry.startswith(policy + "_"):
                continue
            if tree not in trees:
                continue
            key = self._key_for(entry, tree)
            groups.setdefault(key, CompatibilityGroup(key)).policies.append(
                display_policy_name(entry)
            )
        return list(groups.values())
