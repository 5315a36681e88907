"""
Raster cache for captured diagrams and images.

Entries are content-addressed: the key is the SHA-256 of the diagram source
(or the image URI), so an unchanged diagram is rasterized once per cache
lifetime. The cache is a plain object owned by the caller and handed to the
capture adapter.
"""

from __future__ import annotations

import hashlib
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from ..models.blocks import RasterImage

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CacheEntry:
    image: RasterImage
    stored_at: float
    last_access: float


def cache_key(source: str) -> str:
    """Stable content hash used as the cache key."""
    return hashlib.sha256(source.encode("utf-8")).hexdigest()


class RasterCache:
    """
    Caches rasterized media keyed by a hash of their source.

    Entries older than ``max_age`` seconds are treated as missing and dropped
    on lookup; when ``max_size`` entries are held, the least recently used one
    is evicted before a new one is stored.
    """

    def __init__(self, max_size: int = 100, max_age: float = 3600.0, clock: Callable[[], float] = time.time):
        """
        Initialize raster cache.

        Args:
            max_size: Maximum number of cached rasters
            max_age: Maximum age of a cached raster in seconds
            clock: Time source, seconds since an arbitrary epoch
        """
        if max_size < 1:
            raise ValueError("Max size must be a positive integer")
        if max_age <= 0:
            raise ValueError("Max age must be positive")

        self.max_size = max_size
        self.max_age = max_age
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}
        self.stats = {"hits": 0, "misses": 0, "evictions": 0, "expired": 0}

        logger.debug(f"RasterCache initialized: max_size={max_size}, max_age={max_age}")

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, source: str) -> bool:
        entry = self._entries.get(cache_key(source))
        return entry is not None and not self._is_expired(entry)

    def get(self, source: str) -> Optional[RasterImage]:
        """
        Look up the raster for ``source``.

        Returns:
            Cached raster, or None on a miss or an expired entry
        """
        key = cache_key(source)
        entry = self._entries.get(key)
        if entry is None:
            self.stats["misses"] += 1
            logger.debug(f"Raster cache miss: {key[:12]}")
            return None

        if self._is_expired(entry):
            del self._entries[key]
            self.stats["misses"] += 1
            self.stats["expired"] += 1
            logger.debug(f"Raster cache entry expired: {key[:12]}")
            return None

        entry.last_access = self._clock()
        self.stats["hits"] += 1
        logger.debug(f"Raster cache hit: {key[:12]}")
        return entry.image

    def put(self, source: str, image: RasterImage) -> None:
        if not source:
            raise ValueError("Cache source must be a non-empty string")

        key = cache_key(source)
        if key not in self._entries:
            self._evict_if_needed()

        now = self._clock()
        self._entries[key] = CacheEntry(image=image, stored_at=now, last_access=now)
        logger.debug(f"Raster cached: {key[:12]}, {len(image.data)} bytes")

    def clear(self) -> None:
        self._entries.clear()
        logger.debug("Raster cache cleared")

    def cleanup_expired(self) -> int:
        """
        Drop expired entries.

        Returns:
            Number of entries removed
        """
        expired = [key for key, entry in self._entries.items() if self._is_expired(entry)]
        for key in expired:
            del self._entries[key]
        self.stats["expired"] += len(expired)
        logger.debug(f"Cleaned up {len(expired)} expired raster(s)")
        return len(expired)

    def info(self) -> Dict[str, Any]:
        total = self.stats["hits"] + self.stats["misses"]
        return {
            "max_size": self.max_size,
            "max_age": self.max_age,
            "entries": len(self._entries),
            "bytes": sum(len(entry.image.data) for entry in self._entries.values()),
            **self.stats,
            "hit_rate": self.stats["hits"] / total if total else 0.0,
        }

    def _is_expired(self, entry: CacheEntry) -> bool:
        return self._clock() - entry.stored_at > self.max_age

    def _evict_if_needed(self) -> None:
        while len(self._entries) >= self.max_size:
            oldest = min(self._entries, key=lambda key: self._entries[key].last_access)
            del self._entries[oldest]
            self.stats["evictions"] += 1
            logger.debug(f"Raster evicted from cache: {oldest[:12]}")
