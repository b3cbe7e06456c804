"""Canonical CSV text for a row matrix.

Canonical form is what gets written to disk and what ``last_saved`` holds:
trailing all-empty rows are dropped, every row is resized to the width of the
header (only padding is ever removed, never content), cells are trimmed, and
lines end in ``\\n`` with no newline after the last row.
"""
import csv
import io
from typing import List, Sequence

Row = Sequence[str]


def clean_cell(cell) -> str:
    """Trimmed text with CRLF and lone CR folded to LF."""
    if cell is None:
        return ""
    return str(cell).replace("\r\n", "\n").replace("\r", "\n").strip()


def _is_empty(cell) -> bool:
    return cell is None or str(cell).strip() == ""


def row_width(row: Row) -> int:
    """Width of the row, not counting empty cells at the end."""
    i = len(row) - 1
    while i >= 0 and _is_empty(row[i]):
        i -= 1
    return i + 1


def resize_row(row: Row, width: int) -> List[str]:
    """Return a trimmed copy of ``row`` extended or truncated to ``width``.

    Only empty cells are truncated, so a row with non-empty cells past the
    ``width``'th column comes back longer than ``width``.
    """
    real_width = row_width(row)
    new_row = [clean_cell(cell) for cell in row[:real_width]]
    while len(new_row) < width:
        new_row.append("")
    return new_row


def max_row_length(rows: Sequence[Row]) -> int:
    longest = 0
    for row in rows:
        longest = max(longest, len(row))
    return longest


def serialize(rows: Sequence[Row]) -> str:
    if len(rows) == 0:
        return ""

    # Skip past trailing empty rows.
    last = len(rows) - 1
    while last >= 0 and all(_is_empty(cell) for cell in rows[last]):
        last -= 1
    if last < 0:
        return ""

    width = row_width(rows[0])
    kept = [resize_row(row, width) for row in rows[: last + 1]]

    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n", quoting=csv.QUOTE_MINIMAL)
    writer.writerows(kept)
    return buf.getvalue().rstrip("\n")


def has_changed(new_text: str, last_saved: str) -> bool:
    return new_text != last_saved
