"""Search pipeline - query, normalize, post-filter."""

from __future__ import annotations

from typing import Iterator, List, Optional

from app.core.logging import get_logger
from app.schemas.records import NormalizedRecord
from app.schemas.search import FilterCriteria
from app.services.post_filters import PostQueryFilter
from app.services.query_builder import SearchQuery, build_search_query
from app.services.record_normalizer import RecordNormalizer
from app.services.record_store import RecordStore

log = get_logger("search_service")


class SearchPipeline:
    """Read-only search over published research objects.

    ``search`` is lazy: each call runs one query and consumes its cursor
    once, in store order. Closing the returned iterator early closes the
    cursor too.
    """

    def __init__(
        self,
        store: RecordStore,
        normalizer: RecordNormalizer,
        success_stage: Optional[str] = None,
        text_search_config: Optional[str] = None,
    ):
        self.store = store
        self.normalizer = normalizer
        self.success_stage = success_stage
        self.text_search_config = text_search_config

    def search(self, criteria: FilterCriteria) -> Iterator[NormalizedRecord]:
        # Compiled before the query runs so a bad pattern fails fast
        record_filter = PostQueryFilter.from_criteria(criteria)
        query = build_search_query(
            criteria,
            success_stage=self.success_stage or self.normalizer.success_stage,
            text_search_config=self.text_search_config,
        )
        return self._run(query, record_filter)

    def _run(self, query: SearchQuery, record_filter: PostQueryFilter) -> Iterator[NormalizedRecord]:
        scanned = 0
        with self.store.stream(query) as records:
            for raw in records:
                scanned += 1
                record = self.normalizer.normalize(raw)
                if record_filter.admits(record):
                    yield record
        log.debug(f"Scanned {scanned} published records")

    def search_all(self, criteria: FilterCriteria) -> List[NormalizedRecord]:
        return list(self.search(criteria))
