"""External exercise catalog search."""
from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from reptrack.cache import TTLCache
from reptrack.settings import Settings

log = logging.getLogger(__name__)

_MISS = object()


def from_catalog(item: dict[str, Any]) -> dict[str, Any]:
    """Normalise one catalog record to the routine exercise shape."""
    name = item.get("name") or ""
    instructions = item.get("instructions") or ""
    if isinstance(instructions, list):
        instructions = " ".join(instructions)
    targets = item.get("targetMuscles") or []
    body_parts = item.get("bodyParts") or []
    return {
        "id": item.get("exerciseId") or "_".join(name.split()).lower(),
        "name": name,
        "muscle": targets[0] if targets else "",
        "equipments": item.get("equipments") or [],
        "difficulty": None,
        "instructions": instructions,
        "type": body_parts[0] if body_parts else "strength",
        "gif_url": item.get("gifUrl"),
        "is_custom": False,
    }


class ExerciseCatalog:
    """Keyword search against the catalog API, cached per query."""

    def __init__(
        self,
        base_url: str,
        *,
        cache: TTLCache,
        timeout: float = 5.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.cache = cache
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> "ExerciseCatalog":
        return cls(
            settings.CATALOG_BASE_URL,
            cache=TTLCache(ttl=settings.CATALOG_CACHE_TTL_SECONDS),
            timeout=settings.CATALOG_TIMEOUT_SECONDS,
        )

    def search(self, query: str, *, limit: int = 25) -> list[dict[str, Any]]:
        key = self.cache.make_key("search", {"q": query.strip().lower(), "limit": limit})
        cached = self.cache.get(key, _MISS)
        if cached is not _MISS:
            log.info("catalog cache hit %s", key)
            return cached
        log.info("catalog cache miss %s", key)

        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                r = client.get(
                    f"{self.base_url}/exercises/search",
                    params={"q": query, "limit": limit, "offset": 0},
                )
                r.raise_for_status()
                payload = r.json()
        except (httpx.HTTPError, ValueError) as e:
            # the catalog is optional; search still returns custom exercises
            log.warning("catalog search failed for %r: %s", query, e)
            return []

        items = payload.get("data", []) if isinstance(payload, dict) else []
        results = [from_catalog(i) for i in items if isinstance(i, dict) and i.get("name")]
        self.cache.set(key, results)
        return results
