"""Translates search criteria into a research object query.

Only filters the database can evaluate safely are pushed down: publication
status, repository, full-text phrase and title regex. Date range and creator
pattern are applied after retrieval by ``post_filters``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple

from sqlalchemy import Select, cast, func, literal, select
from sqlalchemy.dialects.postgresql import REGCONFIG
from sqlalchemy.sql.elements import ColumnElement

from app.core.config import settings
from app.models.research_object import ResearchObject
from app.schemas.records import PROJECTED_AGGREGATION_FIELDS, RawRecord
from app.schemas.search import FilterCriteria

FieldPath = Tuple[str, ...]

PROJECTION: Tuple[FieldPath, ...] = (
    ("Status",),
    ("Repository",),
    *(("Aggregation", name) for name in PROJECTED_AGGREGATION_FIELDS),
)


@dataclass(frozen=True)
class SearchQuery:
    statement: Select
    projection: Tuple[FieldPath, ...]

    def shape(self, row: Mapping[str, Any]) -> RawRecord:
        """Rebuild the nested raw document from one projected row."""
        record: Dict[str, Any] = {}
        for path in self.projection:
            value = row.get(_label(path))
            if value is None:
                continue
            target = record
            for key in path[:-1]:
                target = target.setdefault(key, {})
            target[path[-1]] = value
        return record


def _label(path: FieldPath) -> str:
    return ".".join(path)


def _projected_column(path: FieldPath) -> ColumnElement:
    document = ResearchObject.document
    expr = document[path[0]] if len(path) == 1 else document[path]
    return expr.label(_label(path))


def published_filter(success_stage: str) -> ColumnElement[bool]:
    """At least one Status entry has the success stage."""
    return ResearchObject.document.contains({"Status": [{"stage": success_stage}]})


def full_text_filter(search_text: str, config: str) -> ColumnElement[bool]:
    regconfig = cast(literal(config), REGCONFIG)
    vector = func.to_tsvector(regconfig, ResearchObject.document)
    return vector.bool_op("@@")(func.phraseto_tsquery(regconfig, search_text))


def title_filter(title_pattern: str) -> ColumnElement[bool]:
    title = ResearchObject.document[("Aggregation", "Title")].astext
    return title.regexp_match(title_pattern, flags="i")


def build_search_query(
    criteria: FilterCriteria,
    success_stage: Optional[str] = None,
    text_search_config: Optional[str] = None,
) -> SearchQuery:
    conditions = [published_filter(success_stage or settings.SUCCESS_STAGE)]

    if criteria.repository is not None:
        conditions.append(ResearchObject.document.contains({"Repository": criteria.repository}))
    if criteria.search_text:
        conditions.append(full_text_filter(criteria.search_text, text_search_config or settings.TEXT_SEARCH_CONFIG))
    if criteria.title_pattern:
        conditions.append(title_filter(criteria.title_pattern))

    statement = select(*(_projected_column(path) for path in PROJECTION)).where(*conditions)
    return SearchQuery(statement=statement, projection=PROJECTION)
