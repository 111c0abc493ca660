"""
Progress and log state for a bulk import.

:class:`ProgressTracker` owns the current :class:`models.import_job.ImportJob`
snapshot.  Every operation builds a new frozen snapshot, swaps it in and hands
it to the subscribed listeners, so a renderer can hold on to whatever it last
received without locking.

Within one job the tracker keeps two rules: ``progress`` never goes down and
``logs`` only grows.  Both are reset by :meth:`ProgressTracker.start` and
:meth:`ProgressTracker.reset`.
"""

from __future__ import annotations

from typing import Any, Callable, List, Optional

from models.import_job import ImportJob

Listener = Callable[[ImportJob], None]


class ProgressTracker:
    def __init__(self, listeners: Optional[List[Listener]] = None) -> None:
        self._job = ImportJob()
        self._listeners: List[Listener] = list(listeners or [])

    @property
    def job(self) -> ImportJob:
        return self._job

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def _publish(self, job: ImportJob) -> ImportJob:
        self._job = job
        for listener in self._listeners:
            listener(job)
        return job

    def _update(self, *, progress: Optional[float] = None, log: Optional[str] = None, **changes: Any) -> ImportJob:
        current = self._job
        if progress is not None:
            changes["progress"] = min(100.0, max(current.progress, float(progress)))
        if log:
            changes["logs"] = current.logs + (log,)
        return self._publish(current.model_copy(update=changes))

    def start(self, *, total_count: int, step: str, log: str, progress: float = 10) -> ImportJob:
        return self._publish(
            ImportJob(
                is_importing=True,
                current_step=step,
                progress=progress,
                total_count=max(0, total_count),
                logs=(log,),
            )
        )

    def step(self, label: str, *, progress: Optional[float] = None, log: Optional[str] = None, **counts: int) -> ImportJob:
        return self._update(current_step=label, progress=progress, log=log, **counts)

    def complete(self, *, imported: int, skipped: int, log: str, deadline: float) -> ImportJob:
        total = max(self._job.total_count, imported + skipped)
        return self._update(
            current_step="Import completed!",
            progress=100,
            log=log,
            is_importing=False,
            total_count=total,
            imported_count=imported,
            skipped_count=skipped,
            can_close=False,
            close_deadline=deadline,
        )

    def fail(self, log: str, *, deadline: float) -> ImportJob:
        return self._update(
            current_step="Import failed",
            log=log,
            is_importing=False,
            failed=True,
            can_close=False,
            close_deadline=deadline,
        )

    def tick(self, now: float) -> ImportJob:
        """Allow closing once the close deadline has passed.

        The job itself is only reset by :meth:`close`, which a renderer calls
        when it dismisses the finished job.
        """
        job = self._job
        if job.can_close or job.close_deadline is None or now < job.close_deadline:
            return job
        return self._update(can_close=True)

    def close(self) -> bool:
        """Dismiss a finished job.  Returns ``False`` while it may not be closed yet."""
        if not self._job.can_close:
            return False
        self.reset()
        return True

    def reset(self) -> ImportJob:
        return self._publish(ImportJob())
