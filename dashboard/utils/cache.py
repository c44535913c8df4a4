"""Per-application cache of page data.

List pages load their rows once per path and lookup key and reuse them
until a mutation calls :func:`revalidate_path`. Only the data is cached; the
template is still rendered per request so CSRF tokens and flashed messages
stay specific to the visitor.

Each entry remembers the :class:`~dashboard.models.PageRevision` it was
loaded under. Revalidating bumps that revision in the database, which makes
the entry stale in every worker process and not only in the one that
handled the mutation.
"""

from __future__ import annotations

import threading
from collections import OrderedDict
from typing import Any, Callable, Hashable, Tuple, TypeVar

from flask import current_app, request

from dashboard.models import PageRevision

T = TypeVar("T")

DEFAULT_MAX_ENTRIES = 256

_MISSING = object()


class PageCache:
    """Loaded page data keyed by ``(path, key)``, evicting least recently used."""

    def __init__(self, max_entries: int = DEFAULT_MAX_ENTRIES) -> None:
        self.max_entries = max(1, max_entries)
        self._entries: "OrderedDict[Tuple[str, Hashable], Tuple[int, Any]]" = (
            OrderedDict()
        )
        self._lock = threading.Lock()

    def get(
        self,
        path: str,
        key: Hashable = "",
        revision: int = 0,
        default: Any = None,
    ) -> Any:
        """Return the value stored for ``key`` if it was loaded at ``revision``."""
        entry_key = (normalize_path(path), key)
        with self._lock:
            entry = self._entries.get(entry_key)
            if entry is None or entry[0] != revision:
                return default
            self._entries.move_to_end(entry_key)
            return entry[1]

    def set(self, path: str, key: Hashable, value: Any, revision: int = 0) -> None:
        entry_key = (normalize_path(path), key)
        with self._lock:
            self._entries[entry_key] = (revision, value)
            self._entries.move_to_end(entry_key)
            while len(self._entries) > self.max_entries:
                self._entries.popitem(last=False)

    def revalidate(self, path: str) -> int:
        """Drop every entry for ``path`` and return how many were removed."""
        path = normalize_path(path)
        with self._lock:
            stale = [key for key in self._entries if key[0] == path]
            for key in stale:
                del self._entries[key]
        return len(stale)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __contains__(self, path: str) -> bool:
        path = normalize_path(path)
        with self._lock:
            return any(key[0] == path for key in self._entries)

    def __len__(self) -> int:
        return len(self._entries)


def normalize_path(path: str) -> str:
    return path.rstrip("/") or "/"


def get_page_cache() -> PageCache:
    app = current_app._get_current_object()
    cache = app.extensions.get("page_cache")
    if cache is None:
        max_entries = app.config.get("PAGE_CACHE_MAX_ENTRIES", DEFAULT_MAX_ENTRIES)
        cache = app.extensions["page_cache"] = PageCache(max_entries)
    return cache


def revalidate_path(path: str) -> None:
    """Invalidate the cached data of ``path`` in every worker."""
    PageRevision.bump(normalize_path(path))
    removed = get_page_cache().revalidate(path)
    current_app.logger.debug("Revalidated %s (%d cached entries)", path, removed)


def cached_page_data(loader: Callable[[], T], key: Hashable = "") -> T:
    """Return ``loader()`` for the current path and ``key``, cached.

    ``key`` should hold the normalized inputs of ``loader`` rather than the
    raw query string, so unrelated URL parameters do not add entries.
    """

    if not current_app.config.get("PAGE_CACHE_ENABLED", True):
        return loader()

    cache = get_page_cache()
    path = request.path
    revision = PageRevision.current(normalize_path(path))
    value = cache.get(path, key, revision, _MISSING)
    if value is _MISSING:
        value = loader()
        cache.set(path, key, value, revision)
    return value
