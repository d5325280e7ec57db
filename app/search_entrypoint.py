"""Search entrypoint - run a search from the command line.

Usage:
    python -m app.search_entrypoint                          # All published ROs
    python -m app.search_entrypoint --repo ideals            # One repository
    python -m app.search_entrypoint --creator smith --start 01/01/2020
"""

import argparse
import json
import sys
from typing import List, Optional, TextIO

from app.api.deps import build_people_resolver
from app.core.db import SessionLocal
from app.core.logging import get_logger
from app.schemas.search import SearchRequest
from app.services.record_normalizer import RecordNormalizer
from app.services.record_store import ResearchObjectStore
from app.services.search_service import SearchPipeline

logger = get_logger("search_entrypoint")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Search published research objects")
    parser.add_argument("--repo", help="Repository name (exact)")
    parser.add_argument("--creator", default="", help="Creator pattern (case-insensitive)")
    parser.add_argument("--start", default="", help="Earliest publication date, MM/DD/YYYY")
    parser.add_argument("--end", default="", help="Latest publication date, MM/DD/YYYY")
    parser.add_argument("--search", default="", help="Full-text phrase")
    parser.add_argument("--title", default="", help="Title pattern (case-insensitive)")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None, out: Optional[TextIO] = None) -> int:
    args = parse_args(argv)
    out = out or sys.stdout
    request = SearchRequest(
        creator=args.creator,
        start_date=args.start,
        end_date=args.end,
        search_string=args.search,
        title=args.title,
    )
    criteria = request.to_criteria(args.repo)
    logger.info(f"Searching with {criteria.summary()}")

    resolver = build_people_resolver()
    try:
        with SessionLocal() as db:
            pipeline = SearchPipeline(ResearchObjectStore(db), RecordNormalizer(resolver))
            results = pipeline.search_all(criteria)
    finally:
        resolver.close()

    json.dump(results, out, indent=2)
    out.write("\n")
    logger.info(f"Search returned {len(results)} records")
    return 0


if __name__ == "__main__":
    sys.exit(main())
