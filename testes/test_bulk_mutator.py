import pytest

from src.client.admin_api import ApiError
from src.mutators.bulk import BulkMutator, Selection
from src.utils.cache import BLOG_POSTS_KEY, YOUTUBE_VIDEOS_KEY, ListingCache
from src.utils.notifications import Notifier


def make_mutator(config, item_type, ids):
    cache = ListingCache()
    cache.get(BLOG_POSTS_KEY, lambda: ["post"])
    cache.get(YOUTUBE_VIDEOS_KEY, lambda: ["video"])
    return BulkMutator(config, item_type, selection=Selection(ids), cache=cache, notifier=Notifier())


def test_bulk_category_success_clears_selection_and_invalidates(config, backend):
    backend.on("PATCH", "/api/admin/blog/posts/bulk-category", (200, {"success": True}))
    mutator = make_mutator(config, "blog", [1, 2, 3])

    mutator.change_category("5")

    call = backend.calls_to("PATCH", "/api/admin/blog/posts/bulk-category")[0]
    assert call["json"] == {"ids": [1, 2, 3], "categoryId": "5"}
    assert len(mutator.selection) == 0
    assert not mutator.cache.is_cached(BLOG_POSTS_KEY)
    assert mutator.cache.is_cached(YOUTUBE_VIDEOS_KEY)
    assert mutator.notifier.last.title == "Success"


def test_bulk_category_failure_keeps_selection(config, backend):
    backend.on("PATCH", "/api/admin/blog/posts/bulk-category", (400, {"message": "Valid category ID is required"}))
    mutator = make_mutator(config, "blog", [1, 2, 3])

    with pytest.raises(ApiError):
        mutator.change_category("x")

    assert mutator.selection.ids == [1, 2, 3]
    assert mutator.cache.is_cached(BLOG_POSTS_KEY)
    assert mutator.notifier.last.variant == "destructive"
    assert "Valid category ID is required" in mutator.notifier.last.description


def test_youtube_bulk_category_uses_video_ids(config, backend):
    backend.on("PATCH", "/api/admin/youtube/videos/bulk-category", (200, {"success": True}))
    mutator = make_mutator(config, "youtube", ["9", "10"])

    mutator.change_category("header_2")

    call = backend.calls_to("PATCH", "/api/admin/youtube/videos/bulk-category")[0]
    assert call["json"] == {"videoIds": ["9", "10"], "categoryId": "header_2"}
    assert not mutator.cache.is_cached(YOUTUBE_VIDEOS_KEY)


def test_bulk_status_and_delete(config, backend):
    backend.on("PATCH", "/api/admin/blog/posts/bulk-status", (200, {"success": True}))
    backend.on("DELETE", "/api/admin/blog/posts", (200, {"success": True}))
    mutator = make_mutator(config, "blog", [4, 5])

    mutator.change_status("draft")
    assert backend.calls_to("PATCH", "/api/admin/blog/posts/bulk-status")[0]["json"] == {"ids": [4, 5], "status": "draft"}

    mutator.selection.add(6)
    mutator.delete()
    assert backend.calls_to("DELETE", "/api/admin/blog/posts")[0]["json"] == {"ids": [6]}
    assert len(mutator.selection) == 0


def test_empty_selection_sends_nothing(config, backend):
    mutator = make_mutator(config, "blog", [])

    with pytest.raises(ValueError):
        mutator.delete()
    with pytest.raises(ValueError):
        mutator.change_category("")

    assert backend.calls == []


def test_selection_is_an_ordered_set():
    selection = Selection([3, 1, 3, 2])
    selection.toggle(1)
    selection.toggle(7)
    selection.add(3)
    selection.remove(42)

    assert selection.ids == [3, 2, 7]
    assert 7 in selection


def test_unknown_item_type_is_rejected(config):
    with pytest.raises(ValueError):
        BulkMutator(config, "products")
