import logging
import time
from dataclasses import dataclass
from typing import Callable, List, Optional

import pandas as pd

import config_paths
from csv_serializer import serialize
from debouncer import Debouncer
from file_loader import load_rows
from persister import Persister
from row_matrix import RowMatrix

logger = logging.getLogger(__name__)


@dataclass
class DisplaySnapshot:
    rows: List[List[str]]
    height: int
    width: int

    def to_frame(self) -> pd.DataFrame:
        """Grid padded to the display bounds, empty cells as ''."""
        padded = []
        for i in range(self.height):
            row = self.rows[i] if i < len(self.rows) else []
            padded.append(row[: self.width] + [""] * max(0, self.width - len(row)))
        return pd.DataFrame(padded, columns=range(self.width), dtype=object)


class EditorSession:
    """The one owner of a file's matrix, its persister and its save timer.

    A UI layer holds a session handle and feeds it integer cell coordinates;
    every commit reschedules a save, and ``poll()`` from the UI's loop runs it
    once the edits go quiet.
    """

    def __init__(
        self,
        path: str,
        rows,
        config: Optional[dict] = None,
        clock: Callable[[], float] = time.monotonic,
        wall_clock: Callable[[], float] = time.time,
        set_status_cb: Optional[Callable[[str, int], None]] = None,
    ):
        cfg = config if config is not None else config_paths.load_config()
        self.path = path
        self.matrix = RowMatrix(rows, min_rows=cfg["MIN_ROWS"], min_cols=cfg["MIN_COLS"])
        self.persister = Persister(
            path,
            last_saved=serialize(self.matrix.rows),
            backup_dir=cfg["BACKUP_DIR"],
            clock=wall_clock,
        )
        self.debouncer = Debouncer(
            self.save_now, delay=cfg["SAVE_DELAY_MS"] / 1000.0, clock=clock
        )
        self._set_status = set_status_cb or (lambda _msg, _secs: None)

        self.active_cell = None
        self.active_original = ""

    @classmethod
    def open(cls, path: str, config: Optional[dict] = None, **kwargs) -> "EditorSession":
        return cls(path, load_rows(path), config=config, **kwargs)

    @property
    def last_saved(self) -> str:
        return self.persister.last_saved

    # ---------- cell edits ----------
    def on_cell_committed(self, row: int, col: int, raw_value) -> None:
        self.matrix.set_cell(row, col, raw_value)
        self.debouncer.schedule()

    def on_cell_input(self, row: int, col: int, raw_value) -> None:
        self.on_cell_committed(row, col, raw_value)

    def begin_edit(self, row: int, col: int) -> str:
        original = self.matrix.get_cell(row, col)
        self.active_cell = (row, col)
        self.active_original = original
        return original

    def cancel_edit(self) -> None:
        if self.active_cell is None:
            return
        row, col = self.active_cell
        self.active_cell = None
        self.on_cell_committed(row, col, self.active_original)

    def get_display_snapshot(self) -> DisplaySnapshot:
        height, width = self.matrix.dimensions()
        return DisplaySnapshot(rows=self.matrix.rows, height=height, width=width)

    # ---------- saving ----------
    def poll(self, now: Optional[float] = None) -> bool:
        return self.debouncer.poll(now)

    def flush(self) -> bool:
        return self.debouncer.flush()

    def save_now(self) -> str:
        before = self.persister.last_saved
        try:
            saved = self.persister.save(self.matrix.rows)
        except OSError as e:
            logger.error("Save of %s failed: %s", self.path, e)
            self._set_status(f"Save failed: {e}", 4)
            raise
        if saved != before:
            self._set_status(f"Saved {self.path}", 3)
        return saved
