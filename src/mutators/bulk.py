"""
Bulk edits applied to a selection of listing rows.

A :class:`BulkMutator` sends one request for the whole :class:`Selection`
and treats it as a unit: on success the selection is cleared and the
listing cache entry is invalidated, on failure the selection is left as it
was so the operator can try again.  Failures are reported, notified and
re-raised; nothing is retried.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional

from src.client.admin_api import ITEM_TYPES, bulk_delete, bulk_update_category, bulk_update_status
from src.utils.cache import ListingCache
from src.utils.errors import report_error, report_ok
from src.utils.notifications import Notifier


class Selection:
    """Ordered set of selected row ids."""

    def __init__(self, ids: Iterable[Any] = ()) -> None:
        self._ids: List[Any] = list(dict.fromkeys(ids))

    def __iter__(self) -> Iterator[Any]:
        return iter(self._ids)

    def __len__(self) -> int:
        return len(self._ids)

    def __contains__(self, item_id: Any) -> bool:
        return item_id in self._ids

    @property
    def ids(self) -> List[Any]:
        return list(self._ids)

    def add(self, item_id: Any) -> None:
        if item_id not in self._ids:
            self._ids.append(item_id)

    def remove(self, item_id: Any) -> None:
        if item_id in self._ids:
            self._ids.remove(item_id)

    def toggle(self, item_id: Any) -> None:
        if item_id in self._ids:
            self._ids.remove(item_id)
        else:
            self._ids.append(item_id)

    def clear(self) -> None:
        self._ids = []


class BulkMutator:
    def __init__(
        self,
        config: Dict[str, Any],
        item_type: str = "blog",
        *,
        selection: Optional[Selection] = None,
        cache: Optional[ListingCache] = None,
        notifier: Optional[Notifier] = None,
    ) -> None:
        if item_type not in ITEM_TYPES:
            raise ValueError(f"Unknown item type {item_type!r}")
        self.config = config
        self.item_type = item_type
        self.selection = selection if selection is not None else Selection()
        self.cache = cache or ListingCache()
        self.notifier = notifier or Notifier()

    @property
    def listing_key(self) -> str:
        return ITEM_TYPES[self.item_type]["path"]

    def change_category(self, category_id: str) -> Dict[str, Any]:
        if not category_id:
            raise ValueError("A category id is required")
        return self._apply(
            "BULK_CATEGORY",
            lambda ids: bulk_update_category(self.config["admin"], self.item_type, ids, category_id),
            success=f"{self._noun()} category updated successfully",
            failure="Failed to update category",
            extra={"category_id": category_id},
        )

    def change_status(self, status: str) -> Dict[str, Any]:
        if not status:
            raise ValueError("A status is required")
        return self._apply(
            "BULK_STATUS",
            lambda ids: bulk_update_status(self.config["admin"], self.item_type, ids, status),
            success=f"{self._noun()} status updated successfully",
            failure="Failed to update status",
            extra={"status": status},
        )

    def delete(self) -> Dict[str, Any]:
        return self._apply(
            "BULK_DELETE",
            lambda ids: bulk_delete(self.config["admin"], self.item_type, ids),
            success=f"{self._noun()} deleted successfully",
            failure=f"Failed to delete {self._noun().lower()}",
            ok_code="BULK_DELETED",
        )

    def _noun(self) -> str:
        return "Blog posts" if self.item_type == "blog" else "Videos"

    def _apply(
        self,
        code: str,
        call: Callable[[List[Any]], Dict[str, Any]],
        *,
        success: str,
        failure: str,
        extra: Optional[Dict[str, Any]] = None,
        ok_code: Optional[str] = None,
    ) -> Dict[str, Any]:
        ids = self.selection.ids
        if not ids:
            raise ValueError("Select at least one item first")
        subject = {"item_type": self.item_type, "ids": ids, **(extra or {})}
        try:
            response = call(ids)
        except Exception as e:
            report_error(f"{code}_FAILED", subject, e)
            self.notifier.error("Error", f"{failure}: {getattr(e, 'message', None) or e}")
            raise
        self.selection.clear()
        self.cache.invalidate(self.listing_key)
        report_ok(ok_code or f"{code}_UPDATED", subject)
        self.notifier.success("Success", success)
        return response
