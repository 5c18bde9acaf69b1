"""Persist corrected measurements to CSV and load them back."""
from __future__ import annotations

import csv
from pathlib import Path
from typing import Any, Dict, List, Optional, TextIO

import pandas as pd

from .units import Wrench

FIELDNAMES = ["t_s", "fx", "fy", "fz", "tx", "ty", "tz"]
REQUIRED_COLUMNS = set(FIELDNAMES)


class CsvRecorder:
    """
    Lazily creates the CSV writer when the first measurement arrives so that
    dry runs never touch the filesystem.
    """

    def __init__(self, path: Path):
        self.path = path
        self._writer: Optional[Any] = None
        self._file_handle: Optional[TextIO] = None
        self._pending_metadata: List[str] = []

    def append(self, t_s: float, wrench: Wrench) -> None:
        if self._writer is None:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self._file_handle = self.path.open("w", newline="", encoding="utf-8")
            for line in self._pending_metadata:
                self._file_handle.write(line + "\n")
            self._pending_metadata.clear()
            self._writer = csv.writer(self._file_handle)
            self._writer.writerow(FIELDNAMES)
        assert self._writer is not None and self._file_handle is not None
        self._writer.writerow([f"{t_s:.6f}", *(repr(value) for value in wrench.to_array().tolist())])
        self._file_handle.flush()

    def set_metadata(self, metadata: Dict[str, str]) -> None:
        if not metadata:
            return
        line = "# " + " ".join(f"{key}={value}" for key, value in metadata.items())
        if self._writer is None or self._file_handle is None:
            self._pending_metadata.append(line)
            return
        self._file_handle.write(line + "\n")
        self._file_handle.flush()

    def close(self) -> None:
        if self._file_handle:
            self._file_handle.close()
            self._file_handle = None
            self._writer = None


def wrench_metadata(prefix: str, wrench: Wrench) -> Dict[str, str]:
    return {f"{prefix}_{name}": repr(value) for name, value in zip(FIELDNAMES[1:], wrench.to_array().tolist())}


def load_recording(path: str | Path) -> pd.DataFrame:
    """Load a CSV written by :class:`CsvRecorder`, skipping ``#`` metadata lines."""

    path = Path(path)
    df = pd.read_csv(path, comment="#")
    missing = REQUIRED_COLUMNS - set(df.columns)
    if missing:
        raise ValueError(f"Missing required columns: {sorted(missing)}")
    return df
