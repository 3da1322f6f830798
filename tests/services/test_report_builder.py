import logging

from tbgen.models.extension import ExtensionRecord
from tbgen.services.alternatives import Alternative
from tbgen.services.report_builder import build_all, build_report
from tbgen.services.reports import AllExtensionsReport, ReportGroup, get_report


def test_rank_is_dataset_position(make_record, ctx):
    records = [make_record(1, versions={"91": "1.0"}), None, make_record(3, versions={"91": "1.0"})]
    result = build_report(records, get_report("atn-tb91"), ctx)
    assert [row.rank for row in result.rows] == [1, 3]
    assert result.count == 2
    assert result.generated_on == ctx.today


def test_excluded_records_are_skipped(make_record, ctx):
    records = [make_record(1, versions={"91": "1.0"}), make_record(2, versions={"78": "1.0"})]
    result = build_report(records, get_report("atn-tb91"), ctx)
    assert [row.record.id for row in result.rows] == [1]


def test_missing_xpilib_is_logged(ctx, caplog):
    record = ExtensionRecord.model_validate({"id": 9, "slug": "broken"})
    with caplog.at_level(logging.ERROR):
        result = build_report([record], get_report("parsing-error"), ctx)
    assert result.count == 1
    assert "broken" in caplog.text


def test_stats_are_sorted_by_count(make_record, ctx):
    ctx.alternatives = {"alt@example.com": [Alternative("Other")]}
    records = [
        make_record(1, versions={"91": "1.0"}, guid="alt@example.com"),
        make_record(2, versions={"91": "1.0"}),
        make_record(3, versions={"91": "1.0"}),
    ]
    result = build_report(records, get_report("lost-tb91-to-tb102"), ctx)
    assert result.stats == [("incompatible102", 2), ("alternative_available", 1)]
    assert result.rows[0].alternatives == [Alternative("Other")]


def test_version_cells(make_record, ctx):
    record = make_record(1, versions={"91": "1.0", "current": "1.0"})
    row = build_report([record], get_report("atn-tb91"), ctx).rows[0]
    cells = row.version_cells(ctx.channels)
    assert [c.channel for c in cells] == ["60", "68", "78", "91", "102", "current"]
    by_channel = {c.channel: c for c in cells}
    assert by_channel["91"].version == "1.0"
    assert [b.right for b in by_channel["91"].badges] == ["MX"]
    assert by_channel["60"].version is None
    assert by_channel["60"].badges == []


def test_build_all_groups_in_index_order(make_record, ctx):
    records = [make_record(1, versions={"91": "1.0", "current": "1.0"})]
    groups = build_all(records, ctx)
    assert [g.id for g in groups] == ["atn-errors", "all", "102", "91", "78", "68"]
    by_id = {g.id: g for g in groups}
    assert [r.name for r in by_id["78"].reports] == ["atn-tb78", "lost-tb68-to-tb78"]
    counts = {r.name: r.count for r in by_id["91"].reports}
    assert counts["atn-tb91"] == 1
    assert counts["lost-tb78-to-tb91"] == 0


def test_build_all_skips_disabled_reports(make_record, ctx):
    enabled = AllExtensionsReport("all", "all", "All")
    disabled = AllExtensionsReport("all-off", "all", "Disabled", enabled=False)
    groups = build_all(
        [make_record(1, versions={"91": "1.0"})],
        ctx,
        reports=[enabled, disabled],
        groups=[ReportGroup("all", "General reports")],
    )
    assert [r.name for r in groups[0].reports] == ["all"]
