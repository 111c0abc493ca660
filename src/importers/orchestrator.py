"""
High-level orchestration of a bulk import.

This module defines :class:`ImportOrchestrator`, which runs one bulk import
(WordPress posts or YouTube channel videos) against the admin backend and
keeps a :class:`src.importers.progress.ProgressTracker` up to date while it
does so.  A run goes through four phases:

1. initiate - mark the job as importing and log the start;
2. remote call - one request to the bulk-import endpoint;
3. per-item enrichment - one transcript fetch per imported video, or a
   paced reveal of each imported post, strictly one after the other;
4. completion - final counts, summary line, close deadline, listing cache
   invalidation and a success notification.

A failure in phases 1-2 is fatal: the job is marked failed, an error is
reported and the exception propagates.  A failure in phase 3 only costs
that item a log line.
"""

from __future__ import annotations

import time
from typing import Any, Callable, Dict, List, Optional

from models.import_job import ImportedItem, ImportJob, ImportResult
from src.client.admin_api import (
    RateLimiter,
    fetch_video_transcript,
    import_channel_videos,
    import_wordpress_posts,
)
from src.importers.progress import ProgressTracker
from src.utils.cache import BLOG_POSTS_KEY, YOUTUBE_VIDEOS_KEY, ListingCache
from src.utils.errors import ImportInProgressError, report_error, report_ok
from src.utils.logs import log_message
from src.utils.notifications import Notifier
from src.utils.text import plain_text

SOURCES: Dict[str, Dict[str, str]] = {
    "wordpress": {"label": "WordPress", "noun": "posts", "listing": BLOG_POSTS_KEY},
    "youtube": {"label": "YouTube", "noun": "videos", "listing": YOUTUBE_VIDEOS_KEY},
}

# Progress checkpoints for the phases of a run.
START_PROGRESS = 10
CONNECT_PROGRESS = 20
FETCHED_PROGRESS = 50
ENRICHED_PROGRESS = 90


class ImportOrchestrator:
    """
    Runs bulk imports one at a time and owns the progress state they
    produce.  The clock and sleep functions are injectable so the close
    delay and per-item pacing can be driven by a fake clock.
    """

    def __init__(
        self,
        config: Dict[str, Any],
        *,
        tracker: Optional[ProgressTracker] = None,
        cache: Optional[ListingCache] = None,
        notifier: Optional[Notifier] = None,
        clock: Optional[Callable[[], float]] = None,
        sleep: Optional[Callable[[float], None]] = None,
    ) -> None:
        self.config = config
        self.tracker = tracker or ProgressTracker()
        self.cache = cache or ListingCache()
        self.notifier = notifier or Notifier()
        self._clock = clock or time.monotonic
        self._sleep = sleep or time.sleep

        imports_cfg = config.get("imports", {})
        self.close_delay = float(imports_cfg.get("close_delay_seconds", 3.0))
        self._limiters = {
            "wordpress": RateLimiter(imports_cfg.get("reveal_interval_seconds", 0.2)),
            "youtube": RateLimiter(imports_cfg.get("transcript_interval_seconds", 1.0)),
        }

    @property
    def job(self) -> ImportJob:
        return self.tracker.job

    def import_wordpress(self, *, limit: Optional[int] = None, category_id: Optional[str] = None) -> ImportResult:
        return self.run("wordpress", limit=limit, category_id=category_id)

    def import_youtube(self, channel_id: str, *, limit: Optional[int] = None, category_id: Optional[str] = None) -> ImportResult:
        return self.run("youtube", target_id=channel_id, limit=limit, category_id=category_id)

    def run(
        self,
        source: str,
        *,
        target_id: Optional[str] = None,
        limit: Optional[int] = None,
        category_id: Optional[str] = None,
    ) -> ImportResult:
        """
        Run one import to completion.

        :param source: ``"wordpress"`` or ``"youtube"``.
        :param target_id: Channel id for YouTube imports; WordPress site
            credentials come from the ``wordpress`` config section.
        :param limit: Maximum number of items to import.
        :param category_id: Optional category assigned to imported items.
        :return: The parsed response of the bulk-import endpoint.
        :raises ImportInProgressError: if another import is running.
        :raises ApiError: if the bulk-import call fails.
        """
        if source not in SOURCES:
            raise ValueError(f"Unknown import source {source!r}")
        if source == "youtube" and not target_id:
            raise ValueError("A channel id is required for YouTube imports")
        if self.tracker.job.is_importing:
            raise ImportInProgressError("An import is already running")
        if limit is None:
            limit = int(self.config.get("imports", {}).get("default_limit", 10))
        if limit < 1:
            raise ValueError("limit must be at least 1")

        meta = SOURCES[source]
        self.tracker.start(
            total_count=limit,
            step="Starting import...",
            log=f"Starting {meta['label']} import...",
            progress=START_PROGRESS,
        )

        # Any error after start ends the job as failed.
        try:
            log_message(f"Starting {meta['label']} import (limit {limit}, target {target_id or '-'})")
            self.tracker.step(
                f"Connecting to {meta['label']}...",
                progress=CONNECT_PROGRESS,
                log=f"Connecting to {meta['label']} API...",
            )
            result = ImportResult.model_validate(self._call_import(source, target_id, limit, category_id))

            items = result.imported_items
            self.tracker.step(
                f"Processing {meta['noun']}...",
                progress=FETCHED_PROGRESS,
                log=f"Processing {len(items)} fetched {meta['noun']}...",
            )
            self._enrich(source, items)
            self._complete(source, target_id, result)
        except Exception as e:
            self._fail(source, target_id, e)
            raise
        return result

    def tick(self, now: Optional[float] = None) -> ImportJob:
        return self.tracker.tick(self._clock() if now is None else now)

    def wait_until_closable(self) -> ImportJob:
        """Block until the close deadline of the finished job has passed."""
        deadline = self.tracker.job.close_deadline
        if deadline is not None:
            remaining = deadline - self._clock()
            if remaining > 0:
                self._sleep(remaining)
        return self.tick()

    def close(self) -> bool:
        return self.tracker.close()

    # ------------------------------------------------------------------
    # Phases
    # ------------------------------------------------------------------

    def _call_import(self, source: str, target_id: Optional[str], limit: int, category_id: Optional[str]) -> Dict[str, Any]:
        admin_cfg = self.config["admin"]
        if source == "wordpress":
            return import_wordpress_posts(admin_cfg, self.config.get("wordpress", {}), limit=limit, category_id=category_id)
        return import_channel_videos(admin_cfg, str(target_id), limit=limit, category_id=category_id)

    def _enrich(self, source: str, items: List[ImportedItem]) -> None:
        total = len(items)
        limiter = self._limiters[source]
        for i, item in enumerate(items):
            limiter.wait(time_fn=self._clock, sleep_fn=self._sleep)
            title = plain_text(item.title) or f"#{item.id}"
            progress = FETCHED_PROGRESS + ((i + 1) / total) * (ENRICHED_PROGRESS - FETCHED_PROGRESS)
            label = f"Importing {SOURCES[source]['noun'][:-1]} {i + 1}/{total}"
            if source == "wordpress":
                self.tracker.step(label, progress=progress, log=f'Imported: "{title}"', imported_count=i + 1)
                continue
            try:
                fetch_video_transcript(self.config["admin"], item.id)
            except Exception as e:
                self.tracker.step(
                    label,
                    progress=progress,
                    log=f'Error fetching transcript for "{title}": {e}',
                    imported_count=i + 1,
                    failed_enrichments=self.tracker.job.failed_enrichments + 1,
                )
                try:
                    report_error("TRANSCRIPT_FAILED", {"source": source, "id": item.id, "title": title}, e)
                except OSError as report_exc:
                    self.tracker.step(label, log=f'Could not write error report for "{title}": {report_exc}')
            else:
                self.tracker.step(label, progress=progress, log=f'Transcript fetched: "{title}"', imported_count=i + 1)
        if not total:
            self.tracker.step("Import processing...", progress=ENRICHED_PROGRESS)

    def _complete(self, source: str, target_id: Optional[str], result: ImportResult) -> None:
        meta = SOURCES[source]
        self.tracker.complete(
            imported=result.count,
            skipped=result.skipped,
            log=f"Import summary: {result.count} imported, {result.skipped} skipped",
            deadline=self._clock() + self.close_delay,
        )
        self.cache.invalidate(meta["listing"])
        report_ok(
            "IMPORT_COMPLETED",
            {"source": source, "id": target_id},
            {"count": result.count, "skipped": result.skipped, "failed_enrichments": self.tracker.job.failed_enrichments},
        )
        self.notifier.success(
            "Import Complete",
            result.message
            or f"Successfully imported {result.count} new {meta['noun']}, skipped {result.skipped} existing {meta['noun']}",
        )

    def _fail(self, source: str, target_id: Optional[str], exc: Exception) -> None:
        meta = SOURCES[source]
        message = getattr(exc, "message", None) or str(exc)
        self.tracker.fail(f"Error: {message}", deadline=self._clock() + self.close_delay)
        report_error("IMPORT_FAILED", {"source": source, "id": target_id}, exc)
        self.notifier.error("Import Failed", f"Failed to import from {meta['label']}: {message}")
