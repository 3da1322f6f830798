"""
Shields.io badges used to annotate report rows.

Badges are referenced by name. A dotted name such as "permission.storage"
reuses the "permission" badge with "storage" as its right-hand text.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from urllib.parse import quote

from tbgen.models.extension import VersionData

SHIELDS_URL = "https://img.shields.io/badge"


@dataclass(frozen=True)
class BadgeSpec:
    left: str
    right: str = ""
    color: str = "lightgrey"
    tooltip: str | None = None

    @property
    def shield_url(self) -> str:
        parts = (quote(p.replace("-", "--"), safe="") for p in (self.left, self.right, self.color))
        return f"{SHIELDS_URL}/{'-'.join(parts)}.png"


@dataclass(frozen=True)
class Badge:
    """A named badge attached to a report row, optionally linking somewhere."""

    name: str
    link: str | None = None


BADGE_DEFINITIONS: dict[str, BadgeSpec] = {
    "permission": BadgeSpec(left="p", color="orange", tooltip="Requested permission"),
    "alternative_available": BadgeSpec(
        left="*", right="alternative available", color="darkgreen"
    ),
    "work_in_progress": BadgeSpec(left="TB102", right="work in progress", color="yellow"),
    "incompatible91": BadgeSpec(left="TB91", right="incompatible", color="c90016"),
    "incompatible102": BadgeSpec(left="TB102", right="incompatible", color="c90016"),
}


def resolve_badge(name: str) -> BadgeSpec:
    """Look up a badge by name; raises KeyError for unknown names."""
    if name in BADGE_DEFINITIONS:
        return BADGE_DEFINITIONS[name]
    prefix, _, rest = name.partition(".")
    if rest and prefix in BADGE_DEFINITIONS:
        return replace(BADGE_DEFINITIONS[prefix], right=rest)
    raise KeyError(f"Unknown badge {name!r}")


def extension_type_badges(data: VersionData, tooltip_limit: int = 14) -> list[BadgeSpec]:
    """Badges describing the kind of an XPI: manifest type, legacy type, experiments."""
    badges: list[BadgeSpec] = []

    if data.mext and not data.legacy:
        badges.append(
            BadgeSpec("T", "MX", "purple", "Extension Type:\n - MX : MailExtension (manifest.json)")
        )
    elif data.mext and data.legacy:
        badges.append(
            BadgeSpec(
                "T", "WE", "purple", "Extension Type:\n - WE : Legacy WebExtension (manifest.json)"
            )
        )
    else:
        badges.append(
            BadgeSpec("T", "RDF", "purple", "Extension Type:\n - RDF : Legacy Extension (install.rdf)")
        )

    if data.legacy:
        if data.legacy_type == "xul":
            badges.append(
                BadgeSpec("L", "XUL", "green", "Legacy Type:\n - XUL : XUL overlay (requires restart)")
            )
        else:
            badges.append(BadgeSpec("L", "BS", "green", "Legacy Type:\n - BS : Bootstrap"))

    if data.experiment:
        names = data.experiment_schema_names
        right = "+"
        if "WindowListener" in names:
            right = "WL"
        elif "BootstrapLoader" in names:
            right = "BL"
        tooltip = "Experiment APIs: " + "".join(f"\n - {n}" for n in names[:tooltip_limit])
        if len(names) > tooltip_limit:
            tooltip += "\n ..."
        badges.append(BadgeSpec("E", right, "blue", tooltip))

    return badges
