import csv
import os
from typing import Iterable, Optional

import pandas as pd

from .config import settings
from .schemas import GenerationResult

CSV_COLUMNS = ["URL", "Meta Title", "Meta Description"]


def results_to_frame(results: Iterable[GenerationResult]) -> pd.DataFrame:
    rows = [(r.url, r.meta_title, r.meta_description) for r in results]
    return pd.DataFrame(rows, columns=CSV_COLUMNS, dtype=str)


def results_to_csv(results: Iterable[GenerationResult]) -> str:
    """
    Encode results as CSV: a bare header row, then one row per result with
    every field double-quoted and inner quotes doubled. Empty input gives "".
    """
    df = results_to_frame(results)
    if df.empty:
        return ""
    body = df.to_csv(index=False, header=False, quoting=csv.QUOTE_ALL, lineterminator="\n")
    return ",".join(CSV_COLUMNS) + "\n" + body


def safe_filename(name: Optional[str]) -> str:
    """Reduce a caller supplied name to a bare, header-safe file name."""
    base = os.path.basename((name or "").replace("\\", "/"))
    cleaned = "".join(c for c in base if 32 <= ord(c) < 127 and c not in '"').strip()
    return cleaned or settings.export_filename


def save_csv(results: Iterable[GenerationResult], output_path: Optional[str] = None) -> str:
    path = output_path or settings.export_filename
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(results_to_csv(results))
    return path
