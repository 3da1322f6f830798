"""
Add-on compatibility report definitions.

Every report is a rule evaluated per extension record:

    result = report.evaluate(record, ctx)
    result.include  -> whether the extension is listed in the report
    result.badges   -> annotations shown next to the listed extension

Reports are grouped (per Thunderbird ESR, general reports, ATN errors); the
order of REPORTS and GROUPS is the order of the generated index.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date, datetime
from itertools import combinations

from tbgen.core.config import Settings, get_settings
from tbgen.core.versions import compare_versions, is_wildcard
from tbgen.models.extension import CURRENT, ExtensionRecord
from tbgen.services.alternatives import Alternative
from tbgen.services.badges import Badge
from tbgen.services.known_addons import DEFAULT_KNOWN_TO_WORK, DEFAULT_WORK_IN_PROGRESS

# Manifest keys reported as pseudo-permissions.
MANIFEST_PERMISSION_KEYS = (
    "compose_action",
    "browser_action",
    "message_display_action",
    "cloud_file",
    "commands",
)


@dataclass
class ReportContext:
    """Everything a report rule needs besides the record itself."""

    alternatives: Mapping[str, list[Alternative]] = field(default_factory=dict)
    work_in_progress: Mapping[str, str] = field(
        default_factory=lambda: dict(DEFAULT_WORK_IN_PROGRESS)
    )
    known_to_work: Mapping[str, frozenset[str]] = field(
        default_factory=lambda: dict(DEFAULT_KNOWN_TO_WORK)
    )
    today: date = field(default_factory=date.today)
    settings: Settings = field(default_factory=get_settings)

    @property
    def channels(self) -> list[str]:
        return list(self.settings.RELEASE_CHANNELS)

    def alternatives_for(self, record: ExtensionRecord) -> list[Alternative]:
        if record.guid is None:
            return []
        return list(self.alternatives.get(record.guid, []))

    def wip_link(self, record: ExtensionRecord) -> str | None:
        return self.work_in_progress.get(str(record.id))

    def is_known_to_work(self, record: ExtensionRecord, channel: str) -> bool:
        return str(record.id) in self.known_to_work.get(channel, frozenset())


@dataclass(frozen=True)
class RowResult:
    include: bool
    badges: tuple[Badge, ...] = ()


@dataclass(frozen=True)
class ReportGroup:
    id: str
    header: str


class Report(ABC):
    """Base class of all report rules."""

    def __init__(self, name: str, group: str, header: str, enabled: bool = True) -> None:
        self.name = name
        self.group = group
        self.header = header
        self.enabled = enabled

    @abstractmethod
    def evaluate(self, record: ExtensionRecord, ctx: ReportContext) -> RowResult:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


def _parse_timestamp(value: object) -> datetime | None:
    if not isinstance(value, str) or not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


# -- General reports ----------------------------------------------------------


class AllExtensionsReport(Report):
    def evaluate(self, record: ExtensionRecord, ctx: ReportContext) -> RowResult:
        return RowResult(include=bool(record.highest_version(ctx.channels)))


class ParsingErrorReport(Report):
    def evaluate(self, record: ExtensionRecord, ctx: ReportContext) -> RowResult:
        return RowResult(include=record.get_ext_data(CURRENT).data is None)


class RecentActivityReport(Report):
    def evaluate(self, record: ExtensionRecord, ctx: ReportContext) -> RowResult:
        data = record.get_ext_data(CURRENT).data
        created = _parse_timestamp(data.created) if data else None
        if created is None:
            return RowResult(include=False)
        age = (ctx.today - created.date()).days
        return RowResult(include=age <= ctx.settings.RECENT_ACTIVITY_DAYS)


class MaxAtnValueReport(Report):
    """
    Compares the strict_max_version of the current XPI with the max version
    set in ATN; direction 1 lists raised ATN values, -1 reduced ones.
    """

    def __init__(self, name: str, group: str, header: str, direction: int) -> None:
        super().__init__(name, group, header)
        self.direction = direction

    def evaluate(self, record: ExtensionRecord, ctx: ReportContext) -> RowResult:
        data = record.get_ext_data(CURRENT).data
        if data is None or not data.mext or data.legacy:
            return RowResult(include=False)
        order = compare_versions(data.strict_max_version, data.atn_max)
        return RowResult(include=order == -self.direction)


# -- ATN errors ---------------------------------------------------------------


class WrongOrderReport(Report):
    """An older channel lists a newer version than a later channel."""

    def evaluate(self, record: ExtensionRecord, ctx: ReportContext) -> RowResult:
        versions = [record.get_ext_data(c).version for c in ctx.channels]
        for older, newer in combinations(versions, 2):
            if older and newer and compare_versions(older, newer) > 0:
                return RowResult(include=True)
        return RowResult(include=False)


class LatestCurrentMismatchReport(Report):
    def __init__(self, name: str, group: str, header: str) -> None:
        super().__init__(name, group, header)
        self._wrong_order = WrongOrderReport("wrong-order", group, "")

    def evaluate(self, record: ExtensionRecord, ctx: ReportContext) -> RowResult:
        if self._wrong_order.evaluate(record, ctx).include:
            return RowResult(include=False)
        highest = record.highest_version(ctx.channels)
        current = record.get_ext_data(CURRENT).version
        return RowResult(include=bool(highest) and highest != current)


class FalsePositivesReport(Report):
    """Legacy extensions claiming compatibility with a WebExtension-only release."""

    def __init__(
        self, name: str, group: str, header: str, channel: str, allow_webextension: bool
    ) -> None:
        super().__init__(name, group, header)
        self.channel = channel
        self.allow_webextension = allow_webextension

    def evaluate(self, record: ExtensionRecord, ctx: ReportContext) -> RowResult:
        data = record.get_ext_data(self.channel).data
        if data is None or not data.legacy:
            return RowResult(include=False)
        if self.allow_webextension and data.mext:
            return RowResult(include=False)
        return RowResult(include=True)


# -- Per-release reports ------------------------------------------------------


class AtnCompatibleReport(Report):
    def __init__(
        self, name: str, group: str, header: str, channel: str, show_wip: bool = False
    ) -> None:
        super().__init__(name, group, header)
        self.channel = channel
        self.show_wip = show_wip

    def evaluate(self, record: ExtensionRecord, ctx: ReportContext) -> RowResult:
        badges: list[Badge] = []
        link = ctx.wip_link(record)
        if self.show_wip and link:
            badges.append(Badge("work_in_progress", link))
        return RowResult(
            include=bool(record.get_ext_data(self.channel).version), badges=tuple(badges)
        )


class RequestedPermissionsReport(Report):
    def __init__(self, name: str, group: str, header: str, channel: str) -> None:
        super().__init__(name, group, header)
        self.channel = channel

    def evaluate(self, record: ExtensionRecord, ctx: ReportContext) -> RowResult:
        data = record.get_ext_data(self.channel).data
        permissions = data.permissions if data else None
        badges: list[Badge] = []

        for permission in permissions or []:
            # Host permissions are summarized as a single content script badge
            if ":/" in permission or permission == "<all_urls>":
                if Badge("permission.contentScript") not in badges:
                    badges.append(Badge("permission.contentScript"))
            else:
                badges.append(Badge(f"permission.{permission}"))

        manifest = data.manifest if data else None
        if manifest:
            badges.extend(
                Badge(f"permission.{key}") for key in MANIFEST_PERMISSION_KEYS if manifest.get(key)
            )

        return RowResult(include=permissions is not None, badges=tuple(badges))


class ExperimentsWithoutUpperLimitReport(Report):
    """Experiments whose ATN entry has no max version and a min version below threshold."""

    def __init__(self, name: str, group: str, header: str, channel: str, threshold: str) -> None:
        super().__init__(name, group, header)
        self.channel = channel
        self.threshold = threshold

    def evaluate(self, record: ExtensionRecord, ctx: ReportContext) -> RowResult:
        if ctx.is_known_to_work(record, self.channel):
            return RowResult(include=False)
        data = record.get_ext_data(self.channel).data
        include = (
            data is not None
            and bool(data.mext)
            and bool(data.experiment)
            and compare_versions(self.threshold, data.atn_min) > 0
            and is_wildcard(data.atn_max)
        )
        return RowResult(include=include)


class LostReport(Report):
    """Extensions listed for an older release but not for the next one."""

    def __init__(
        self,
        name: str,
        group: str,
        header: str,
        old_channel: str,
        new_channel: str,
        incompatible_badge: str | None = None,
        show_wip: bool = False,
    ) -> None:
        super().__init__(name, group, header)
        self.old_channel = old_channel
        self.new_channel = new_channel
        self.incompatible_badge = incompatible_badge
        self.show_wip = show_wip

    def evaluate(self, record: ExtensionRecord, ctx: ReportContext) -> RowResult:
        include = bool(record.get_ext_data(self.old_channel).version) and not bool(
            record.get_ext_data(self.new_channel).version
        )
        if not include:
            return RowResult(include=False)

        link = ctx.wip_link(record)
        if ctx.alternatives_for(record):
            badges: tuple[Badge, ...] = (Badge("alternative_available"),)
        elif self.show_wip and link:
            badges = (Badge("work_in_progress", link),)
        elif self.incompatible_badge:
            badges = (Badge(self.incompatible_badge),)
        else:
            badges = ()
        return RowResult(include=True, badges=badges)


# -- Registry -----------------------------------------------------------------

GROUPS: tuple[ReportGroup, ...] = (
    ReportGroup("atn-errors", "Extensions with invalid ATN settings"),
    ReportGroup("all", "General reports"),
    ReportGroup("102", "Thunderbird 102 reports"),
    ReportGroup("91", "Thunderbird 91 reports"),
    ReportGroup("78", "Thunderbird 78 reports"),
    ReportGroup("68", "Thunderbird 68 reports"),
)

REPORTS: tuple[Report, ...] = (
    AllExtensionsReport(
        "all", "all", "All Extensions compatible with TB60 or newer."
    ),
    ParsingErrorReport(
        "parsing-error",
        "all",
        "Extensions whose XPI files could not be parsed properly and are excluded from analysis.",
    ),
    RecentActivityReport(
        "recent-activity", "all", "Extensions updated within the last 2 weeks."
    ),
    MaxAtnValueReport(
        "max-atn-value-raised-above-max-xpi-value",
        "all",
        "Extensions whose max version has been raised in ATN above the XPI value "
        "(excluding legacy extensions).",
        direction=1,
    ),
    WrongOrderReport(
        "wrong-order",
        "atn-errors",
        "Extension with wrong upper limit setting in older versions, which will lead to "
        "the wrong version reported compatible by ATN.",
    ),
    MaxAtnValueReport(
        "max-atn-value-reduced-below-max-xpi-value",
        "atn-errors",
        "Extensions whose max version has been reduced in ATN below the XPI value, which "
        "is ignored during install and app upgrade (excluding legacy).",
        direction=-1,
    ),
    LatestCurrentMismatchReport(
        "latest-current-mismatch",
        "atn-errors",
        "Extensions, where the latest upload is for an older release, which will fail to "
        "install in current ESR (current = defined current in ATN) from within the add-on "
        "manager.",
    ),
    FalsePositivesReport(
        "false-positives-tb68",
        "atn-errors",
        "Extensions claiming to be compatible with Thunderbird 68, but are legacy "
        "extensions and therefore unsupported.",
        channel="68",
        allow_webextension=True,
    ),
    FalsePositivesReport(
        "false-positives-tb78",
        "atn-errors",
        "Extensions claiming to be compatible with Thunderbird 78, but are legacy "
        "extensions or legacy WebExtensions and therefore unsupported.",
        channel="78",
        allow_webextension=False,
    ),
    AtnCompatibleReport(
        "atn-tb102",
        "102",
        "Extensions compatible with Thunderbird 102 as seen by ATN.",
        channel="102",
        show_wip=True,
    ),
    RequestedPermissionsReport(
        "tb102-requested-permissions",
        "102",
        "Extensions for TB102 requesting WebExtension permissions.",
        channel="102",
    ),
    ExperimentsWithoutUpperLimitReport(
        "tb102-experiments-without-upper-limit",
        "102",
        "Experiments without upper limit in ATN, which might not be compatible with TB102 "
        "(excluding confirmed positives).",
        channel="102",
        threshold="101",
    ),
    LostReport(
        "lost-tb91-to-tb102",
        "102",
        "Extensions which have been lost from TB91 to TB102, as seen by ATN.",
        old_channel="91",
        new_channel="102",
        incompatible_badge="incompatible102",
        show_wip=True,
    ),
    AtnCompatibleReport(
        "atn-tb91",
        "91",
        "Extensions compatible with Thunderbird 91 as seen by ATN.",
        channel="91",
    ),
    RequestedPermissionsReport(
        "tb91-requested-permissions",
        "91",
        "Extensions for TB91 requesting WebExtension permissions.",
        channel="91",
    ),
    ExperimentsWithoutUpperLimitReport(
        "tb91-experiments-without-upper-limit",
        "91",
        "Experiments without upper limit in ATN, which might not be compatible with TB91 "
        "(excluding confirmed positives).",
        channel="91",
        threshold="90",
    ),
    LostReport(
        "lost-tb78-to-tb91",
        "91",
        "Extensions which have been lost from TB78 to TB91, as seen by ATN.",
        old_channel="78",
        new_channel="91",
        incompatible_badge="incompatible91",
    ),
    AtnCompatibleReport(
        "atn-tb78",
        "78",
        "Extensions compatible with Thunderbird 78 as seen by ATN.",
        channel="78",
    ),
    LostReport(
        "lost-tb68-to-tb78",
        "78",
        "Extensions which have been lost from TB68 to TB78, as seen by ATN.",
        old_channel="68",
        new_channel="78",
    ),
    AtnCompatibleReport(
        "atn-tb68",
        "68",
        "Extensions compatible with Thunderbird 68 as seen by ATN.",
        channel="68",
    ),
    LostReport(
        "lost-tb60-to-tb68",
        "68",
        "Extensions which have been lost from TB60 to TB68, as seen by ATN.",
        old_channel="60",
        new_channel="68",
    ),
)


def get_report(name: str) -> Report:
    for report in REPORTS:
        if report.name == name:
            return report
    raise KeyError(f"Unknown report {name!r}")
