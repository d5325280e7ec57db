"""Read access to stored research objects."""

from __future__ import annotations

from contextlib import contextmanager
from typing import ContextManager, Iterator, Protocol

from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.logging import get_logger
from app.schemas.records import RawRecord
from app.services.query_builder import SearchQuery

log = get_logger("record_store")


class RecordStore(Protocol):
    def stream(self, query: SearchQuery) -> ContextManager[Iterator[RawRecord]]:
        """Yield raw projected records; the cursor closes when the context exits."""


class ResearchObjectStore:
    """Streams projected research object documents from PostgreSQL."""

    def __init__(self, db: Session, batch_size: int | None = None):
        self.db = db
        self.batch_size = batch_size or settings.SEARCH_BATCH_SIZE

    @contextmanager
    def stream(self, query: SearchQuery) -> Iterator[Iterator[RawRecord]]:
        result = self.db.execute(query.statement.execution_options(yield_per=self.batch_size))
        try:
            yield (query.shape(row._mapping) for row in result)
        finally:
            result.close()
            log.debug("Search cursor closed")
