from typing import List, Optional, Tuple

from csv_serializer import clean_cell

MIN_ROWS = 100
MIN_COLS = 26


class RowMatrix:
    """In-memory spreadsheet contents: a list of rows of trimmed text cells.

    Row 0 is the header. Rows may have unequal lengths; any write past the
    current extent grows the matrix with empty rows and cells instead of
    failing. ``dimensions()`` reports the display bounds, which never shrink
    below the configured floor and are never persisted.
    """

    def __init__(self, rows=None, min_rows: int = MIN_ROWS, min_cols: int = MIN_COLS):
        self.min_rows = min_rows
        self.min_cols = min_cols
        self._rows: List[List[str]] = [
            [clean_cell(cell) for cell in row] for row in (rows or [])
        ]

    @property
    def rows(self) -> List[List[str]]:
        return [list(row) for row in self._rows]

    @property
    def row_count(self) -> int:
        return len(self._rows)

    def max_row_length(self) -> int:
        longest = 0
        for row in self._rows:
            longest = max(longest, len(row))
        return longest

    def get_cell(self, row: int, col: int) -> str:
        self._check_coords(row, col)
        if row >= len(self._rows):
            return ""
        cells = self._rows[row]
        if col >= len(cells):
            return ""
        return cells[col]

    def set_cell(self, row: int, col: int, value) -> None:
        self._check_coords(row, col)

        # Expand the table if necessary.
        while row >= len(self._rows):
            self._rows.append([])
        cells = self._rows[row]
        while col >= len(cells):
            cells.append("")

        cells[col] = clean_cell(value)

    def dimensions(self) -> Tuple[int, int]:
        height = max(len(self._rows), self.min_rows)
        width = max(self.max_row_length(), self.min_cols)
        return height, width

    def next_empty_row(self) -> Optional[int]:
        """Row index just past the last data row with a non-empty first cell."""
        last = len(self._rows) - 1
        while last >= 1 and self.get_cell(last, 0) == "":
            last -= 1
        if last >= 1:
            return last + 1
        return None

    def _check_coords(self, row: int, col: int):
        if row < 0 or col < 0:
            raise IndexError(f"Cell coordinates must be non-negative, got ({row}, {col})")
