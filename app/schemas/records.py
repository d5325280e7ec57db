"""Shapes of stored research object documents."""

from __future__ import annotations

from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict

NOT_FOUND = "Not Found"

# Aggregation sub-fields returned by search
PROJECTED_AGGREGATION_FIELDS: Tuple[str, ...] = (
    "Identifier",
    "Creator",
    "Title",
    "Contact",
    "Abstract",
    "Publishing Project Name",
    "Publishing Project",
)

RawRecord = Dict[str, Any]
NormalizedRecord = Dict[str, Any]


class SingleCreator(BaseModel):
    model_config = ConfigDict(frozen=True)

    identifier: str

    def identifiers(self) -> Iterator[str]:
        yield self.identifier


class MultipleCreators(BaseModel):
    model_config = ConfigDict(frozen=True)

    members: Tuple[str, ...]

    def identifiers(self) -> Iterator[str]:
        yield from self.members


Creator = Union[SingleCreator, MultipleCreators]


def creator_from_value(value: Any) -> Optional[Creator]:
    """Tag the polymorphic ``Creator`` field; anything else counts as absent."""
    if isinstance(value, str):
        return SingleCreator(identifier=value)
    if isinstance(value, (list, tuple)):
        return MultipleCreators(members=tuple(str(item) for item in value))
    return None


class StatusEntry(BaseModel):
    """One entry of a stored status history."""

    model_config = ConfigDict(frozen=True, extra="allow")

    stage: Optional[str] = None
    message: Optional[Any] = None
    date: Optional[Any] = None


class PublicationInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    doi_source: str
    published: str


def find_publication(status: Any, success_stage: str) -> PublicationInfo:
    """Pick DOI source and publication date from the status history.

    The last success entry wins. Without one, both fall back to ``NOT_FOUND``.
    """
    doi_source, published = NOT_FOUND, NOT_FOUND
    entries: List[Any] = status if isinstance(status, list) else []
    for entry in entries:
        if not isinstance(entry, dict) or entry.get("stage") != success_stage:
            continue
        status_entry = StatusEntry.model_validate(entry)
        doi_source = NOT_FOUND if status_entry.message is None else str(status_entry.message)
        published = NOT_FOUND if status_entry.date is None else str(status_entry.date)
    return PublicationInfo(doi_source=doi_source, published=published)
