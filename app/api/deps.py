"""API dependencies"""

import threading
from typing import Generator, Optional, Union

from fastapi import Depends
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.db import SessionLocal
from app.services.person_resolver import NullPersonResolver, PeopleServiceResolver, PersonNameResolver
from app.services.record_normalizer import RecordNormalizer
from app.services.record_store import ResearchObjectStore
from app.services.search_service import SearchPipeline

DirectoryResolver = Union[PeopleServiceResolver, NullPersonResolver]

_people_resolver: Optional[DirectoryResolver] = None
_people_resolver_lock = threading.Lock()


def get_db() -> Generator[Session, None, None]:
    """Per-request database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def build_people_resolver() -> DirectoryResolver:
    if settings.PEOPLE_SERVICE_URL:
        return PeopleServiceResolver(
            settings.PEOPLE_SERVICE_URL,
            timeout=settings.PEOPLE_SERVICE_TIMEOUT_SECONDS,
        )
    return NullPersonResolver()


def init_people_resolver() -> DirectoryResolver:
    global _people_resolver
    with _people_resolver_lock:
        if _people_resolver is None:
            _people_resolver = build_people_resolver()
        return _people_resolver


def shutdown_people_resolver() -> None:
    global _people_resolver
    with _people_resolver_lock:
        if _people_resolver is not None:
            _people_resolver.close()
            _people_resolver = None


def get_people_resolver() -> PersonNameResolver:
    """Process-wide resolver, created on first use."""
    return init_people_resolver()


def get_search_pipeline(
    db: Session = Depends(get_db),
    resolver: PersonNameResolver = Depends(get_people_resolver),
) -> SearchPipeline:
    return SearchPipeline(ResearchObjectStore(db), RecordNormalizer(resolver))
