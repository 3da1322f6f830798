"""Rebrand upstream Firefox policy documentation for Thunderbird."""

from __future__ import annotations

import re

_REPLACEMENTS: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"\bFirefox\b"), "Thunderbird"),
    (re.compile(r"\bfirefox\b"), "thunderbird"),
    (re.compile(r"([\W_])FF(\d\d)"), r"\1TB\2"),
    (re.compile(r"\bAMO\b"), "ATN"),
    (re.compile(r"addons.mozilla.org"), "addons.thunderbird.net"),
    # Support articles which only exist with "firefox" in their URL
    (
        re.compile(re.escape("https://support.mozilla.org/kb/setting-certificate-authorities-thunderbird")),
        "https://support.mozilla.org/kb/setting-certificate-authorities-firefox",
    ),
    (
        re.compile(
            re.escape(
                "https://support.mozilla.org/en-US/kb/dom-events-changes-introduced-thunderbird-66"
            )
        ),
        "https://support.mozilla.org/en-US/kb/dom-events-changes-introduced-firefox-66",
    ),
]


def rebrand_line(line: str) -> str:
    for pattern, replacement in _REPLACEMENTS:
        line = pattern.sub(replacement, line)
    return line


def rebrand(lines: str | list[str]) -> str:
    """Rebrand a string or a list of lines; lists are joined with newlines."""
    if isinstance(lines, str):
        lines = [lines]
    return "\n".join(rebrand_line(str(line)) for line in lines)
