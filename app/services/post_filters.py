"""Filters applied to normalized records after retrieval.

Stored publication dates are free-form strings written by several versions
of the publishing service, and ``Creator`` may be a string or a list, so
neither filter is expressed in SQL.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime, time, timezone
from typing import Any, Optional, Pattern

from app.schemas.records import NormalizedRecord, creator_from_value
from app.schemas.search import FilterCriteria

# Formats seen in Status dates, tried in order
PUBLICATION_DATE_FORMATS = (
    "%b %d, %Y %I:%M:%S %p",  # Jan 15, 2020 10:30:00 AM
    "%b %d, %Y, %I:%M:%S %p",  # Jan 15, 2020, 10:30:00 AM
    "%a %b %d %H:%M:%S %Z %Y",  # Wed Jan 15 10:30:00 UTC 2020
    "%m/%d/%Y %H:%M:%S",
    "%m/%d/%Y %I:%M:%S %p",
    "%m/%d/%Y",
)


def parse_publication_date(value: Any) -> Optional[datetime]:
    """Best-effort parse of a stored publication date. Returns naive UTC or ``None``."""
    if not isinstance(value, str):
        return None
    # split() also folds no-break spaces, which some writers put before AM/PM
    text = " ".join(value.split())
    if not text:
        return None

    parsed: Optional[datetime] = None
    for fmt in PUBLICATION_DATE_FORMATS:
        try:
            parsed = datetime.strptime(text, fmt)
            break
        except ValueError:
            continue
    if parsed is None:
        try:
            parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError:
            return None

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def _start_of(day: Optional[date]) -> Optional[datetime]:
    return datetime.combine(day, time.min) if day is not None else None


def within_date_range(publication_date: Any, start: Optional[date], end: Optional[date]) -> bool:
    """Unparsable dates pass; bounds compare against midnight of the given day."""
    published = parse_publication_date(publication_date)
    if published is None:
        return True
    start_at, end_at = _start_of(start), _start_of(end)
    if start_at is not None and start_at > published:
        return False
    if end_at is not None and end_at < published:
        return False
    return True


def compile_creator_pattern(pattern: Optional[str]) -> Optional[Pattern[str]]:
    """Wrap a client pattern as a case-insensitive contains match.

    Raises ``re.error`` for malformed patterns.
    """
    if not pattern:
        return None
    return re.compile(f"(.*){pattern}(.*)", re.IGNORECASE)


def creator_matches(creator_value: Any, pattern: Optional[Pattern[str]]) -> bool:
    if pattern is None:
        return True
    creator = creator_from_value(creator_value)
    if creator is None:
        return True
    return any(pattern.fullmatch(identifier) for identifier in creator.identifiers())


@dataclass(frozen=True)
class PostQueryFilter:
    start: Optional[date] = None
    end: Optional[date] = None
    creator_pattern: Optional[Pattern[str]] = None

    @classmethod
    def from_criteria(cls, criteria: FilterCriteria) -> "PostQueryFilter":
        return cls(
            start=criteria.start_date,
            end=criteria.end_date,
            creator_pattern=compile_creator_pattern(criteria.creator_pattern),
        )

    def admits(self, record: NormalizedRecord) -> bool:
        return within_date_range(record.get("Publication Date"), self.start, self.end) and creator_matches(
            record.get("Creator"), self.creator_pattern
        )
