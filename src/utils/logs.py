"""
Plain-text run log shared by the importers, mutators and converters.

Messages are echoed to stdout as ``[LEVEL] message`` and appended to
``reports/import/import.log`` so an operator can review what happened after
the console closed.  Structured JSONL entries live next to it, see
:mod:`src.utils.errors`.
"""

from __future__ import annotations

import os
from datetime import datetime, timezone

REPORT_DIR = os.path.join("reports", "import")
LOG_FILE = os.path.join(REPORT_DIR, "import.log")


def log_message(message: str, level: str = "INFO") -> None:
    ts = datetime.now(timezone.utc).isoformat(timespec="seconds")
    print(f"[{level}] {message}")
    os.makedirs(REPORT_DIR, exist_ok=True)
    with open(LOG_FILE, "a", encoding="utf-8") as f:
        f.write(f"{ts} {level}: {message}\n")
