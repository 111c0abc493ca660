"""
Admin console REST helper functions.

This module implements low-level interactions with the admin backend of
the site.  Functions defined here start bulk imports (WordPress posts and
YouTube channel videos), fetch video transcripts one at a time, apply bulk
category/status changes and deletions to a selection of ids, and ask the
backend to turn a video into a blog post.  Every helper takes the ``admin``
configuration section as its first argument.

There are no automatic retries: a failed call raises :class:`ApiError`
and the caller decides what the failure means (fatal for an import, a
logged per-item error for a transcript fetch).  A simple pacing helper,
:class:`RateLimiter`, is provided so sequential loops do not flood the
YouTube transcript service behind the backend.

Usage example::

    from src.client.admin_api import import_channel_videos, fetch_video_transcript

    cfg = {"base_url": "http://localhost:5000", "session_cookie": "..."}
    result = import_channel_videos(cfg, "3", limit=10)
    for item in result.get("importedItems", []):
        fetch_video_transcript(cfg, item["id"])
"""

from __future__ import annotations

import time
from typing import Any, Callable, Dict, Iterable, List, Optional

import requests

###############################################################################
# Errors, pacing and request plumbing
###############################################################################

# Listing path and id field name per item type.  YouTube routes expect the
# selection under ``videoIds``.
ITEM_TYPES: Dict[str, Dict[str, str]] = {
    "blog": {"path": "/api/admin/blog/posts", "ids_key": "ids"},
    "youtube": {"path": "/api/admin/youtube/videos", "ids_key": "videoIds"},
}


class ApiError(Exception):
    """A non-2xx answer (or an error payload) from the admin backend."""

    def __init__(self, message: str, status_code: Optional[int] = None, url: str = "") -> None:
        self.message = message
        self.status_code = status_code
        self.url = url
        super().__init__(f"{status_code}: {message}" if status_code else message)


class RateLimiter:
    """
    Simple time-based pacing.  Ensures consecutive calls to :meth:`wait`
    are at least ``interval`` seconds apart.  The first call never waits.
    """

    def __init__(self, interval: float = 1.0) -> None:
        self.interval = max(0.0, float(interval))
        self._last: Optional[float] = None

    def wait(self, time_fn: Callable[[], float] = time.monotonic, sleep_fn: Callable[[float], None] = time.sleep) -> None:
        now = time_fn()
        if self._last is not None:
            dt = now - self._last
            if dt < self.interval:
                sleep_fn(self.interval - dt)
        self._last = time_fn()


def admin_headers(cfg: Dict[str, Any]) -> Dict[str, str]:
    """
    Construct the headers required for admin API requests.

    :param cfg: The ``admin`` configuration section.
    :return: A dictionary of headers with the session cookie and/or token.
    """
    headers = {"Accept": "application/json"}
    if cfg.get("session_cookie"):
        headers["Cookie"] = f"connect.sid={cfg['session_cookie']}"
    if cfg.get("api_token"):
        headers["Authorization"] = f"Bearer {cfg['api_token']}"
    return headers


def _error_message(resp: requests.Response) -> str:
    text = resp.text or ""
    try:
        data = resp.json()
    except ValueError:
        return text or resp.reason or "Request failed"
    if isinstance(data, dict) and data.get("message"):
        return str(data["message"])
    return text or resp.reason or "Request failed"


def request_json(cfg: Dict[str, Any], method: str, path: str, payload: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Send one JSON request to the admin backend and decode the answer.

    :param cfg: The ``admin`` configuration section.
    :param method: HTTP method.
    :param path: Path starting with ``/api``.
    :param payload: Optional JSON body.
    :return: The decoded JSON object, or ``{}`` for an empty body.
    :raises ApiError: on a non-2xx status.
    :raises requests.RequestException: on connection problems.
    """
    url = f"{cfg['base_url'].rstrip('/')}{path}"
    headers = admin_headers(cfg)
    if payload is not None:
        headers["Content-Type"] = "application/json"
    resp = requests.request(method, url, headers=headers, json=payload, timeout=cfg.get("timeout"))
    if not resp.ok:
        raise ApiError(_error_message(resp), status_code=resp.status_code, url=url)
    if not resp.content:
        return {}
    try:
        data = resp.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {"data": data}


def _item_type(item_type: str) -> Dict[str, str]:
    try:
        return ITEM_TYPES[item_type]
    except KeyError:
        raise ValueError(f"Unknown item type {item_type!r}; expected one of {sorted(ITEM_TYPES)}") from None


def _ids(ids: Iterable[Any]) -> List[Any]:
    ids = list(ids)
    if not ids:
        raise ValueError("At least one id is required")
    return ids


###############################################################################
# Import helpers
###############################################################################

def import_wordpress_posts(
    cfg: Dict[str, Any],
    wordpress: Dict[str, str],
    *,
    limit: int,
    category_id: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Ask the backend to pull up to ``limit`` posts from a WordPress site.

    :param cfg: The ``admin`` configuration section.
    :param wordpress: The ``wordpress`` section with ``url``, ``username``
                      and ``password``.
    :param limit: Maximum number of posts to import.
    :param category_id: Optional blog category assigned to new posts.
    :return: ``{"count", "skipped", "importedPosts": [{"id", "title"}], ...}``
    """
    body: Dict[str, Any] = {
        "wordpressUrl": wordpress.get("url", ""),
        "username": wordpress.get("username", ""),
        "password": wordpress.get("password", ""),
        "postsCount": limit,
    }
    if category_id:
        body["categoryId"] = category_id
    return request_json(cfg, "POST", "/api/admin/blog/import/wordpress", body)


def import_channel_videos(
    cfg: Dict[str, Any],
    channel_id: str,
    *,
    limit: int,
    category_id: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Ask the backend to import up to ``limit`` new videos from a channel.

    :param channel_id: Id of the channel row in the admin database.
    :return: ``{"count", "skipped", "importedItems": [{"id", "title"}], ...}``
    """
    body: Dict[str, Any] = {"limit": limit}
    if category_id:
        body["categoryId"] = category_id
    return request_json(cfg, "POST", f"/api/admin/youtube/channels/{channel_id}/import", body)


def fetch_video_transcript(cfg: Dict[str, Any], video_id: str) -> Dict[str, Any]:
    """
    Fetch and store the transcript of a single imported video.

    The backend answers 200 with an ``errorCount`` even when the transcript
    could not be fetched, so a non-zero count is turned into an error here.

    :raises ApiError: if the request or the transcript fetch failed.
    """
    path = "/api/admin/youtube/videos/fetch-transcripts"
    data = request_json(cfg, "POST", path, {"videoIds": [video_id]})
    if data.get("errorCount"):
        errors = data.get("errors") or [f"Failed to fetch transcript for video {video_id}"]
        raise ApiError("; ".join(str(e) for e in errors), url=path)
    return data


###############################################################################
# Bulk helpers
###############################################################################

def bulk_update_category(cfg: Dict[str, Any], item_type: str, ids: Iterable[Any], category_id: str) -> Dict[str, Any]:
    kind = _item_type(item_type)
    body = {kind["ids_key"]: _ids(ids), "categoryId": category_id}
    return request_json(cfg, "PATCH", f"{kind['path']}/bulk-category", body)


def bulk_update_status(cfg: Dict[str, Any], item_type: str, ids: Iterable[Any], status: str) -> Dict[str, Any]:
    kind = _item_type(item_type)
    body = {kind["ids_key"]: _ids(ids), "status": status}
    return request_json(cfg, "PATCH", f"{kind['path']}/bulk-status", body)


def bulk_delete(cfg: Dict[str, Any], item_type: str, ids: Iterable[Any]) -> Dict[str, Any]:
    kind = _item_type(item_type)
    return request_json(cfg, "DELETE", kind["path"], {kind["ids_key"]: _ids(ids)})


###############################################################################
# Video and blog helpers
###############################################################################

def get_video(cfg: Dict[str, Any], video_id: str) -> Dict[str, Any]:
    return request_json(cfg, "GET", f"/api/admin/youtube/videos/{video_id}")


def convert_video(
    cfg: Dict[str, Any],
    video_id: str,
    *,
    category_id: str,
    title: Optional[str] = None,
    summary: bool = True,
    tags: bool = True,
) -> Dict[str, Any]:
    """
    Ask the backend to turn a video transcript into a published blog post.

    :return: ``{"success": True, "blogPostId": ...}``
    """
    body: Dict[str, Any] = {"videoId": video_id, "categoryId": category_id, "summary": summary, "tags": tags}
    if title:
        body["title"] = title
    return request_json(cfg, "POST", "/api/admin/youtube/videos/convert", body)


def create_blog_post(cfg: Dict[str, Any], payload: Dict[str, Any]) -> Dict[str, Any]:
    return request_json(cfg, "POST", "/api/admin/blog/posts", payload)
