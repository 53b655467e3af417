"""
Disk-backed image cache for the export pipeline.

Maps an image URL to its inlined ``data:`` URI so repeated exports within a
session do not refetch the same asset. Entries are only ever added, never
replaced or expired, which keeps overlapping exports safe without locking.
Uses the diskcache library for thread-safe and process-safe storage.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Callable

import diskcache


@dataclass
class CacheEntry:
    """
    Wrapper around a cached value.

    Attributes:
        value: The cached data URI.
    """

    value: str


class ImageCache:
    """
    Append-only cache of image URL to data URI.

    One instance is created per application session and handed to the
    export pipeline; tests construct their own against a temporary
    directory.

    Attributes:
        cache_dir: Path to the cache directory.
    """

    def __init__(self, cache_dir: str | Path) -> None:
        """
        Initialize the image cache.

        Args:
            cache_dir: Directory path for storing cache files.
                       Created if it doesn't exist.
        """
        self.cache_dir = Path(cache_dir)
        self._cache = diskcache.Cache(str(self.cache_dir))

    def get(self, url: str) -> CacheEntry | None:
        """
        Get the inlined representation of an image.

        Args:
            url: Absolute image URL.

        Returns:
            CacheEntry if found, None otherwise.
        """
        cached = self._cache.get(url, default=None)
        if cached is not None:
            return CacheEntry(value=cached)
        return None

    def add(self, url: str, data_uri: str) -> bool:
        """
        Store an inlined image unless the URL is already cached.

        Args:
            url: Absolute image URL.
            data_uri: The ``data:`` URI for the image bytes.

        Returns:
            True if the entry was stored, False if one already existed.
        """
        return self._cache.add(url, data_uri)

    def get_or_load(self, url: str, loader: Callable[[], str]) -> CacheEntry:
        """
        Get a cached data URI or load and store it.

        The loader is only called on a cache miss. If two callers race on
        the same URL the first stored value wins and both return it.

        Args:
            url: Absolute image URL.
            loader: Function returning the data URI (no arguments).

        Returns:
            CacheEntry containing the data URI.
        """
        cached = self.get(url)
        if cached is not None:
            return cached

        # Cache miss - load the value
        self.add(url, loader())
        return CacheEntry(value=self._cache[url])

    def __contains__(self, url: object) -> bool:
        return url in self._cache

    def __len__(self) -> int:
        return len(self._cache)

    def close(self) -> None:
        """Close the cache and release resources."""
        self._cache.close()
