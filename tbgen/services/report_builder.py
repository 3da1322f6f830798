"""
Report evaluation over the whole extension dataset.

Produces the data behind the report pages and the index page: listed rows
(with their rank in the dataset), badge statistics and per-group counts.
Rendering is left to the caller.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import date

from tbgen.models.extension import CURRENT, ExtensionRecord, XpiLib
from tbgen.services.alternatives import Alternative
from tbgen.services.badges import Badge, BadgeSpec, extension_type_badges
from tbgen.services.reports import GROUPS, REPORTS, Report, ReportContext, ReportGroup

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VersionCell:
    """Version listed for one channel and the badges describing its XPI."""

    channel: str
    version: str | None
    badges: list[BadgeSpec] = field(default_factory=list)


@dataclass
class ReportRow:
    rank: int
    record: ExtensionRecord
    badges: list[Badge] = field(default_factory=list)
    alternatives: list[Alternative] = field(default_factory=list)

    def version_cells(self, channels: Iterable[str], tooltip_limit: int = 14) -> list[VersionCell]:
        cells = []
        for channel in [*channels, CURRENT]:
            version, data = self.record.get_ext_data(channel)
            badges = extension_type_badges(data, tooltip_limit) if data else []
            cells.append(VersionCell(channel, version, badges))
        return cells


@dataclass
class ReportResult:
    name: str
    group: str
    header: str
    generated_on: date
    rows: list[ReportRow] = field(default_factory=list)
    # (badge name, count), most frequent first
    stats: list[tuple[str, int]] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.rows)


@dataclass
class ReportGroupResult:
    id: str
    header: str
    reports: list[ReportResult] = field(default_factory=list)


def build_report(
    records: Sequence[ExtensionRecord | None], report: Report, ctx: ReportContext
) -> ReportResult:
    """Evaluate a single report against every record of the dataset."""
    result = ReportResult(
        name=report.name, group=report.group, header=report.header, generated_on=ctx.today
    )
    counts: Counter[str] = Counter()

    for index, record in enumerate(records):
        if record is None:
            continue
        logger.debug("Extension %s Index: %d", record.id, index)

        if record.xpilib is None:
            logger.error("xpilib data missing: %s", record.slug)
            record = record.model_copy(update={"xpilib": XpiLib()})

        row = report.evaluate(record, ctx)
        if not row.include:
            logger.debug("Skip %s", record.slug)
            continue

        result.rows.append(
            ReportRow(
                rank=index + 1,
                record=record,
                badges=list(row.badges),
                alternatives=ctx.alternatives_for(record),
            )
        )
        counts.update(badge.name for badge in row.badges)

    # sorted() is stable, ties keep first-seen order
    result.stats = sorted(counts.items(), key=lambda item: -item[1])
    return result


def build_all(
    records: Sequence[ExtensionRecord | None],
    ctx: ReportContext,
    reports: Sequence[Report] = REPORTS,
    groups: Sequence[ReportGroup] = GROUPS,
) -> list[ReportGroupResult]:
    """Evaluate every enabled report, grouped in index order."""
    index: list[ReportGroupResult] = []
    for group in groups:
        group_result = ReportGroupResult(id=group.id, header=group.header)
        for report in reports:
            if report.enabled and report.group == group.id:
                logger.info("  -> %s", report.name)
                group_result.reports.append(build_report(records, report, ctx))
        index.append(group_result)
    return index
