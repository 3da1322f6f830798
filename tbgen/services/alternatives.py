"""
Parser for the extension-finder alternative add-on data (data.yaml).

Despite its name the file is a plain key/value list, one block per
suggested replacement, blocks separated by "---":

    u_id: {3550f703-e582-4d05-9a08-453d09bdfdc6}
    r_name: Replacement add-on
    r_link: https://addons.thunderbird.net/addon/replacement/

Each line is split on its first ":"; lines starting with "#" are comments.
Values are kept verbatim (braces, further colons, "#" inside a value).
Entries are grouped by the guid of the unmaintained add-on (u_id).
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass

logger = logging.getLogger(__name__)

BLOCK_SEPARATOR = "---"
COMMENT_PREFIX = "#"


@dataclass(frozen=True)
class Alternative:
    name: str
    link: str | None = None


AlternativeData = Mapping[str, list[Alternative]]


def _blocks(text: str) -> Iterator[dict[str, str]]:
    entry: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if line.startswith(BLOCK_SEPARATOR):
            if entry:
                yield entry
            entry = {}
            continue
        if line.startswith(COMMENT_PREFIX):
            continue
        key, _, value = line.partition(":")
        key = key.strip()
        if key:
            entry[key] = value.strip()
    if entry:
        yield entry


def parse_alternative_data(text: str) -> dict[str, list[Alternative]]:
    """Return {guid: [Alternative, ...]} in file order."""
    entries: dict[str, list[Alternative]] = {}
    for entry in _blocks(text):
        guid = entry.get("u_id")
        if not guid:
            logger.debug("Skipping alternative entry without u_id: %s", entry)
            continue
        entries.setdefault(guid, []).append(
            Alternative(name=entry.get("r_name", ""), link=entry.get("r_link") or None)
        )
    return entries
