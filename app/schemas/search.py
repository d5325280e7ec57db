"""Search request/criteria schemas."""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from app.core.logging import get_logger

log = get_logger("schemas.search")

REQUEST_DATE_FORMAT = "%m/%d/%Y"


def parse_request_date(value: Optional[str], field: str) -> Optional[date]:
    """Parse an ``MM/DD/YYYY`` request date; blank or invalid input means no bound."""
    if value is None or not value.strip():
        return None
    try:
        return datetime.strptime(value.strip(), REQUEST_DATE_FORMAT).date()
    except ValueError:
        log.warning(f"Ignoring unparsable {field!r} value: {value!r}")
        return None


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None or value == "":
        return None
    return value


class FilterCriteria(BaseModel):
    """Validated search criteria. ``None`` on any field means no constraint."""

    model_config = ConfigDict(frozen=True)

    repository: Optional[str] = None
    creator_pattern: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    search_text: Optional[str] = None
    title_pattern: Optional[str] = None

    @classmethod
    def for_repository(cls, repository: Optional[str] = None) -> "FilterCriteria":
        return cls(repository=repository)

    def summary(self) -> str:
        parts = [f"{name}={value!r}" for name, value in self.model_dump().items() if value is not None]
        return ", ".join(parts) or "<none>"


class SearchRequest(BaseModel):
    """Body of ``POST /search``.

    Every key is required; an empty string disables that filter. Dates use
    ``MM/DD/YYYY``.
    """

    model_config = ConfigDict(populate_by_name=True)

    creator: str = Field(alias="Creator")
    start_date: str = Field(alias="Start Date")
    end_date: str = Field(alias="End Date")
    search_string: str = Field(alias="Search String")
    title: str = Field(alias="Title")

    def to_criteria(self, repository: Optional[str] = None) -> FilterCriteria:
        return FilterCriteria(
            repository=repository,
            creator_pattern=_blank_to_none(self.creator),
            start_date=parse_request_date(self.start_date, "Start Date"),
            end_date=parse_request_date(self.end_date, "End Date"),
            search_text=_blank_to_none(self.search_string),
            title_pattern=_blank_to_none(self.title),
        )
