"""People directory lookups for creator identifiers.

Creators are stored as directory identifiers (often VIVO/ORCID style
``"name : http://..."`` strings). Search shows a display name next to each
identifier, looked up one at a time; lookups are not cached.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol
from urllib.parse import quote

import httpx

from app.core.logging import get_logger

log = get_logger("person_resolver")


class PersonNameResolver(Protocol):
    def resolve(self, identifier: str) -> Optional[str]:
        """Return a display name, or ``None`` when the person is unknown."""


def display_name(profile: Mapping[str, Any], identifier: str) -> str:
    given = profile.get("givenName")
    family = profile.get("familyName")
    if given is None and family is None:
        return identifier
    return f"{given or ''} {family or ''}".strip()


class NullPersonResolver:
    """Used when no directory is configured: every lookup misses."""

    def resolve(self, identifier: str) -> Optional[str]:
        return None

    def close(self) -> None:
        pass


class PeopleServiceResolver:
    """Resolves identifiers against the people service ``/people/{id}`` endpoint."""

    def __init__(self, base_url: str, timeout: float = 5.0, client: Optional[httpx.Client] = None):
        self.base_url = base_url.rstrip("/")
        self._client = client or httpx.Client(timeout=timeout)
        self._owns_client = client is None

    def resolve(self, identifier: str) -> Optional[str]:
        url = f"{self.base_url}/people/{quote(identifier, safe='')}"
        try:
            resp = self._client.get(url, headers={"Accept": "application/json"})
        except httpx.HTTPError as exc:
            log.warning(f"People service unreachable for {identifier!r}: {exc}")
            return None

        if resp.status_code != 200:
            log.debug(f"No profile for {identifier!r} (HTTP {resp.status_code})")
            return None

        try:
            profile = resp.json()
        except ValueError:
            log.warning(f"People service returned a non-JSON profile for {identifier!r}")
            return None
        if not isinstance(profile, dict):
            return None
        return display_name(profile, identifier)

    def close(self) -> None:
        if self._owns_client:
            self._client.close()
