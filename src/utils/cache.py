"""
Listing cache keyed by admin API path.

The admin console keeps listings (blog posts, YouTube videos, channels)
around until something marks them stale.  Imports, bulk edits and
conversions call :meth:`ListingCache.invalidate` on the keys they touched;
the next :meth:`ListingCache.get` refetches.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List

BLOG_POSTS_KEY = "/api/admin/blog/posts"
YOUTUBE_VIDEOS_KEY = "/api/admin/youtube/videos"
YOUTUBE_CHANNELS_KEY = "/api/admin/youtube/channels"


class ListingCache:
    def __init__(self) -> None:
        self._entries: Dict[str, Any] = {}
        self.invalidated: List[str] = []

    def get(self, key: str, loader: Callable[[], Any]) -> Any:
        if key not in self._entries:
            self._entries[key] = loader()
        return self._entries[key]

    def is_cached(self, key: str) -> bool:
        return key in self._entries

    def invalidate(self, key: str) -> None:
        """Drop ``key`` and every cached entry nested under it."""
        for cached in [k for k in self._entries if k == key or k.startswith(key.rstrip("/") + "/")]:
            del self._entries[cached]
        self.invalidated.append(key)

    def clear(self) -> None:
        self._entries.clear()
