"""
Merge the upstream policy-templates README with local overrides.

The upstream README (mozilla/policy-templates) has two parts we care about:

- an intro table with one row per policy, e.g.
      | **[`3rdparty`](#3rdparty)** | Set policies that WebExtensions can access ...
- detail sections below level 3 headings ("### DisableAppUpdate"), nested
  policies use "### Parent | Child".

Both are stored per flat policy name in a PolicyReadme; a new upstream text
only refreshes the "upstream" content, hand-written overrides are kept.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass, field

from tbgen.models.policy import PolicyReadme, ReadmeEntry
from tbgen.policies.compatibility import CompatibilityGroup, CompatibilityMap
from tbgen.policies.rebrand import rebrand_line

logger = logging.getLogger(__name__)

HEADER_ROW_PREFIX = "| **[`"
SECTION_SEPARATOR = "\n### "
COMPATIBILITY_MARKER = "**Compatibility:**"

_RE_HEADER_NAME = re.compile(r"\*\*\[(.*?)\]")


def parse_policy_readme(text: str, previous: PolicyReadme | None = None) -> PolicyReadme:
    """Return previous (or an empty readme) updated with the upstream README text."""
    readme = previous.model_copy(deep=True) if previous else PolicyReadme()

    chunks = text.split(SECTION_SEPARATOR)
    intro = chunks.pop(0)

    for row in intro.split("\n"):
        if not row.startswith(HEADER_ROW_PREFIX):
            continue
        match = _RE_HEADER_NAME.search(row)
        if not match:
            continue
        name = match.group(1).replace("`", "").replace(" -> ", "_", 1)
        readme.headers.setdefault(name, ReadmeEntry()).upstream = row

    for chunk in chunks:
        lines = chunk.split("\n")
        title = lines[0]
        lines[0] = f"## {title}"
        name = title.replace(" | ", "_", 1)
        readme.policies.setdefault(name, ReadmeEntry()).upstream = lines

    return readme


def main_policy(name: str) -> str:
    return name.split("_", 1)[0]


@dataclass
class PolicyDetails:
    policy: str
    lines: list[str] = field(default_factory=list)
    compatibility: list[CompatibilityGroup] = field(default_factory=list)


@dataclass
class ReadmeSections:
    """Content of the generated README for one tree."""

    headers: list[str] = field(default_factory=list)
    details: list[PolicyDetails] = field(default_factory=list)
    # supported main policies without a header row in the readme
    missing: list[str] = field(default_factory=list)


def collect_readme_sections(
    tree: str,
    readme: PolicyReadme,
    policy_names: Iterable[str],
    compat: CompatibilityMap,
    rebranded: bool = True,
) -> ReadmeSections:
    """Select header rows and detail sections for the supported policies."""
    sections = ReadmeSections()
    printed: set[str] = set()
    skipped: list[str] = []
    fix = rebrand_line if rebranded else str

    for policy in policy_names:
        header = readme.headers.get(policy)
        if header is not None:
            content = header.resolved()
            if content:
                sections.headers.append(fix(content))
            printed.add(main_policy(policy))
        elif main_policy(policy) not in skipped:
            skipped.append(main_policy(policy))

        entry = readme.policies.get(policy)
        content = entry.resolved() if entry is not None else None
        if content:
            if isinstance(content, str):
                content = content.split("\n")
            sections.details.append(
                PolicyDetails(
                    policy=policy,
                    lines=[fix(line) for line in content if COMPATIBILITY_MARKER not in line],
                    compatibility=compat.groups_for(policy, tree),
                )
            )

    sections.missing = [name for name in skipped if name not in printed]
    for name in sections.missing:
        logger.warning("Supported policy not present in readme: %s", name)
    return sections
