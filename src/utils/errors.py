"""
Structured reporting helpers for import and bulk-edit events.

The :mod:`src.utils.errors` module centralizes the writing of report entries
for both failed and successful operations run from the admin console.  Each
entry is appended to a JSON Lines file under ``reports/import`` so that the
information can be reviewed or parsed after a run.

Two public functions are provided:

``report_error``
    Record an error that occurred for a subject (an import run, a video, a
    selection of posts).  An optional exception can be supplied and will be
    serialized to the report.

``report_ok``
    Record a successful step for a subject.  Additional key/value information
    can be attached to the entry via the ``extra`` parameter.

The ``ERRORS`` dictionary maps error or event codes to human readable
messages.  Codes not present in the dictionary fall back to the code itself.
"""

from __future__ import annotations

import json
import os
from typing import Any, Dict, Optional

from src.utils.logs import REPORT_DIR, log_message

# Mapping of event codes used by the importers and mutators to descriptive
# messages.  The keys include both error and success codes as the same lookup
# is used by :func:`report_error` and :func:`report_ok`.
ERRORS: Dict[str, str] = {
    "IMPORT_FAILED": "Bulk import request failed",
    "TRANSCRIPT_FAILED": "Failed to fetch video transcript",
    "BULK_CATEGORY_FAILED": "Failed to update category",
    "BULK_STATUS_FAILED": "Failed to update status",
    "BULK_DELETE_FAILED": "Failed to delete items",
    "CONVERT_FAILED": "Failed to convert video to blog post",
    "IMPORT_COMPLETED": "Bulk import completed",
    "BULK_CATEGORY_UPDATED": "Category updated",
    "BULK_STATUS_UPDATED": "Status updated",
    "BULK_DELETED": "Items deleted",
    "VIDEO_CONVERTED": "Video converted to blog post",
}

_ERROR_LOG = "errors.jsonl"
_OK_LOG = "success.jsonl"


class ImportInProgressError(RuntimeError):
    """Raised when an import is started while another one is still running."""


def _write_jsonl(name: str, data: Dict[str, Any]) -> None:
    """Append ``data`` as a JSON object followed by a newline to ``name``."""
    os.makedirs(REPORT_DIR, exist_ok=True)
    with open(os.path.join(REPORT_DIR, name), "a", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, default=str)
        f.write("\n")


def report_error(code: str, subject: Dict[str, Any], exc: Optional[BaseException] = None) -> None:
    """Log an error event for ``subject``.

    Parameters
    ----------
    code:
        A key identifying the type of error.  If ``code`` is present in
        :data:`ERRORS` its value will be used as the message.
    subject:
        Dictionary describing what the error is about.  It is merged into
        the entry as-is, so keep it to small JSON-friendly values such as
        ``source``, ``id``, ``title`` or ``ids``.
    exc:
        Optional exception instance that triggered the error.  The string
        representation of the exception will be included in the entry.
    """
    message = ERRORS.get(code, code)
    entry: Dict[str, Any] = {"code": code, "message": message, **subject}
    if exc is not None:
        entry["error"] = str(exc)
        status = getattr(exc, "status_code", None)
        if status is not None:
            entry["status_code"] = status
    log_message(f"{message} - {subject.get('title') or subject.get('id') or subject.get('source', '')}", level="ERROR")
    _write_jsonl(_ERROR_LOG, entry)


def report_ok(code: str, subject: Dict[str, Any], extra: Optional[Dict[str, Any]] = None) -> None:
    """Log a successful event for ``subject``.

    Parameters
    ----------
    code:
        A key identifying the type of event.
    subject:
        Dictionary describing what the event is about.
    extra:
        Optional dictionary of additional fields to merge into the entry.
    """
    message = ERRORS.get(code, code)
    entry: Dict[str, Any] = {"code": code, "message": message, **subject}
    if extra:
        entry.update(extra)
    _write_jsonl(_OK_LOG, entry)
