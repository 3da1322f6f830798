# ruff: noqa: E402
import sys
from datetime import date
from pathlib import Path

# Ensure project root on sys.path
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import pytest

from tbgen.core.config import Settings
from tbgen.models.extension import ExtensionRecord
from tbgen.services.reports import ReportContext

TODAY = date(2022, 9, 1)


def _version_data(
    *,
    mext=True,
    legacy=False,
    experiment=False,
    atn_min=None,
    atn_max=None,
    created="2022-08-25T10:00:00Z",
    manifest=None,
    **extra,
):
    """Build the xpilib data of a single XPI."""
    thunderbird = {}
    if atn_min is not None:
        thunderbird["min"] = atn_min
    if atn_max is not None:
        thunderbird["max"] = atn_max
    data = {
        "mext": mext,
        "legacy": legacy,
        "experiment": experiment,
        "manifest": manifest,
        "atn": {
            "compatibility": {"thunderbird": thunderbird},
            "files": [{"created": created}],
        },
    }
    data.update(extra)
    return data


def _make_record(ext_id=1, *, versions=None, ext_data=None, guid=None, **extra):
    """
    Build an extension record.

    versions: {"91": "2.0", "current": "2.0", ...}
    ext_data: {"2.0": version_data(...)}; missing versions get a default XPI.
    """
    versions = versions or {}
    data = dict(ext_data or {})
    for version in versions.values():
        data.setdefault(version, _version_data())
    raw = {
        "id": ext_id,
        "guid": guid or f"addon{ext_id}@example.com",
        "slug": f"addon-{ext_id}",
        "url": f"https://addons.thunderbird.net/addon/addon-{ext_id}/",
        "name": {"en-US": f"Add-on {ext_id}"},
        "average_daily_users": 100,
        "xpilib": {"cmp_data": versions, "ext_data": data},
    }
    raw.update(extra)
    return ExtensionRecord.model_validate(raw)


@pytest.fixture
def settings():
    return Settings()


@pytest.fixture
def ctx(settings):
    return ReportContext(today=TODAY, settings=settings)


@pytest.fixture
def version_data():
    return _version_data


@pytest.fixture
def make_record():
    return _make_record
