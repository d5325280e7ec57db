"""Reshapes stored research object documents into search results."""

from __future__ import annotations

from typing import List, Mapping, Union

from app.core.config import settings
from app.core.logging import get_logger
from app.schemas.records import (
    Creator,
    MultipleCreators,
    NormalizedRecord,
    SingleCreator,
    creator_from_value,
    find_publication,
)
from app.services.person_resolver import PersonNameResolver

log = get_logger("record_normalizer")

DIRECTORY_ANNOTATION = ": http"


def normalize_doi(doi: str, resolver_base: str = "http://dx.doi.org/") -> str:
    """Turn a DOI or ``scheme:DOI`` fragment into a resolver URL.

    Values already starting with ``http`` pass through. Everything up to the
    first ``:`` is dropped; with no colon the whole value gets the base.
    """
    if doi.startswith("http"):
        return doi
    return resolver_base + doi[doi.find(":") + 1:]


def strip_directory_annotation(identifier: str) -> str:
    """``"xyz123 : http://vivo.example/xyz123"`` -> ``"xyz123"``."""
    index = identifier.find(DIRECTORY_ANNOTATION)
    if index > -1:
        return identifier[:index].strip()
    return identifier


class RecordNormalizer:
    """Flattens ``Aggregation``, derives ``DOI``/``Publication Date`` and
    resolves ``CreatorName``. ``Status`` never leaves this class."""

    def __init__(
        self,
        resolver: PersonNameResolver,
        success_stage: str | None = None,
        doi_resolver_base: str | None = None,
    ):
        self.resolver = resolver
        self.success_stage = success_stage or settings.SUCCESS_STAGE
        self.doi_resolver_base = doi_resolver_base or settings.DOI_RESOLVER_BASE

    def normalize(self, raw: Mapping) -> NormalizedRecord:
        record: NormalizedRecord = dict(raw)

        aggregation = record.pop("Aggregation", None)
        if isinstance(aggregation, Mapping):
            record.update(aggregation)

        publication = find_publication(record.get("Status"), self.success_stage)
        record["DOI"] = normalize_doi(publication.doi_source, self.doi_resolver_base)
        record["Publication Date"] = publication.published

        creator = creator_from_value(record.get("Creator"))
        if creator is not None:
            record["CreatorName"] = self.resolve_creator(creator)

        record.pop("Status", None)
        return record

    def resolve_creator(self, creator: Creator) -> Union[str, List[str]]:
        if isinstance(creator, SingleCreator):
            return self._person_name(creator.identifier)
        if isinstance(creator, MultipleCreators):
            return [self._person_name(identifier) for identifier in creator.members]
        raise TypeError(f"Unsupported creator variant: {creator!r}")

    def _person_name(self, identifier: str) -> str:
        try:
            name = self.resolver.resolve(identifier)
        except Exception as exc:
            log.warning(f"Creator lookup failed for {identifier!r}: {exc}")
            return strip_directory_annotation(identifier)
        if name is None:
            return strip_directory_annotation(identifier)
        return name
