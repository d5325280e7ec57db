# Services package
from app.services.person_resolver import (
    NullPersonResolver,
    PeopleServiceResolver,
    PersonNameResolver,
)
from app.services.post_filters import PostQueryFilter
from app.services.query_builder import SearchQuery, build_search_query
from app.services.record_normalizer import RecordNormalizer, normalize_doi
from app.services.record_store import RecordStore, ResearchObjectStore
from app.services.search_service import SearchPipeline

__all__ = [
    "NullPersonResolver",
    "PeopleServiceResolver",
    "PersonNameResolver",
    "PostQueryFilter",
    "SearchQuery",
    "build_search_query",
    "RecordNormalizer",
    "normalize_doi",
    "RecordStore",
    "ResearchObjectStore",
    "SearchPipeline",
]
