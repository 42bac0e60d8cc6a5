from __future__ import annotations

import csv
import io
import time
from pathlib import Path
from typing import Iterable, Optional

from models import Profile
from services.mapping import CSV_COLUMNS, map_to_csv_row


def export_filename(now_ms: Optional[int] = None) -> str:
    """profiles_<epoch millis>.csv"""
    stamp = now_ms if now_ms is not None else int(time.time() * 1000)
    return f"profiles_{stamp}.csv"


def render_csv(profiles: Iterable[Profile]) -> str:
    """Header row plus one row per profile, columns in CSV_COLUMNS order."""
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=CSV_COLUMNS)
    writer.writeheader()
    for profile in profiles:
        writer.writerow(map_to_csv_row(profile))
    return buffer.getvalue()


def write_csv(profiles: Iterable[Profile], output_dir: str, filename: Optional[str] = None) -> Path:
    out_dir = Path(output_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    path = out_dir / (filename or export_filename())
    # newline="" keeps the csv module's \r\n row terminators intact
    with path.open("w", encoding="utf-8", newline="") as f:
        f.write(render_csv(profiles))
    return path
