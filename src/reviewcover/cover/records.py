"""Parse raw history lines and turn them into affinity scores."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable

from reviewcover.cover.models import HistoryRecord

logger = logging.getLogger("reviewcover.cover")

# "   12\tJane Doe <jane@example.com>" or "3 jane"
_LINE_RE = re.compile(r"^\s*(\d+)\s+(\S.*?)\s*$")
_EMAIL_RE = re.compile(r"<([^<>\s]+)>")


def parse_history_line(line: str) -> HistoryRecord | None:
    """Parse one ``count identity`` line, or return None if it is malformed.

    The identity is the e-mail between angle brackets when there is one,
    otherwise the rest of the line.
    """
    match = _LINE_RE.match(line)
    if not match:
        return None
    commits = int(match.group(1))
    if commits <= 0:
        return None
    identity = match.group(2)
    email = _EMAIL_RE.search(identity)
    if email:
        identity = email.group(1)
    return HistoryRecord(author=identity, commits=commits)


def parse_history(lines: Iterable[str]) -> list[HistoryRecord]:
    """Parse every well-formed line, keeping the order they came in."""
    records = []
    for line in lines:
        record = parse_history_line(line)
        if record is None:
            if line.strip():
                logger.debug("skipping malformed history line: %r", line)
            continue
        records.append(record)
    return records


def normalize(records: list[HistoryRecord]) -> list[tuple[str, float]]:
    """Score each record against the file's first (top) record.

    Records arrive sorted by descending commit count, so the first one sets
    the denominator and scores 1.0. Nothing is re-sorted here.
    """
    if not records:
        return []
    top = records[0].commits
    return [(r.author, r.commits / top) for r in records]
