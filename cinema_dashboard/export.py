"""
Export of the generated dataset.

Writes transactions as CSV (buffered in batches) and the aggregate views as a
JSON snapshot. Snapshots are saved under the results directory:
- `latest.json` (last export)
- `snapshot-<timestamp>.json` (timestamped archive)
"""

from __future__ import annotations

import csv
import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, List

from cinema_dashboard.domain.models import Transaction
from cinema_dashboard.utils.logging import get_logger

log = get_logger(__name__)

CSV_HEADER = ["timestamp", "country", "city", "theater", "room", "title", "seats", "price"]


def write_transactions_csv(
    csv_path: Path, transactions: Iterable[Transaction], batch_size: int = 500
) -> int:
    """Write transactions to ``csv_path``; returns the number of rows written."""
    csv_path.parent.mkdir(parents=True, exist_ok=True)
    written = 0
    with csv_path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(CSV_HEADER)

        buffer: List[List[str]] = []
        for t in transactions:
            buffer.append(
                [
                    t.timestamp.isoformat(),
                    t.country,
                    t.city,
                    t.theater,
                    t.room,
                    t.title,
                    str(t.seats),
                    f"{t.price:.2f}",
                ]
            )
            if len(buffer) >= batch_size:
                writer.writerows(buffer)
                written += len(buffer)
                buffer.clear()
        if buffer:
            writer.writerows(buffer)
            written += len(buffer)

    log.info("Transactions exported", extra={"csv": str(csv_path), "rows": written})
    return written


def write_snapshot(payload: dict, results_dir: Path) -> Path:
    """Persist ``payload`` as latest.json plus a timestamped archive; returns the latter."""
    results_dir.mkdir(parents=True, exist_ok=True)
    latest_path = results_dir / "latest.json"
    timestamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
    archive_path = results_dir / f"snapshot-{timestamp}.json"

    for path in (latest_path, archive_path):
        with path.open("w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2, sort_keys=True, default=str)

    log.info("Snapshot persisted", extra={"latest": str(latest_path), "archive": str(archive_path)})
    return archive_path


__all__ = ["write_transactions_csv", "write_snapshot", "CSV_HEADER"]
