import csv
import io
import os
from typing import List

# cells longer than the default 128KiB limit are valid and must reload
FIELD_SIZE_LIMIT = 2**31 - 1
csv.field_size_limit(FIELD_SIZE_LIMIT)


class ParseError(ValueError):
    """The source file cannot be read as CSV."""


def parse_text(text: str) -> List[List[str]]:
    reader = csv.reader(io.StringIO(text, newline=""), strict=True)
    rows = []
    try:
        for row in reader:
            # skip fully empty lines
            if not row:
                continue
            rows.append(row)
    except csv.Error as exc:
        raise ParseError(f"line {reader.line_num}: {exc}") from exc
    return rows


def load_rows(path: str) -> List[List[str]]:
    if not os.path.exists(path) or os.path.getsize(path) == 0:
        return []

    try:
        with open(path, "r", encoding="utf-8", newline="") as fh:
            text = fh.read()
    except UnicodeDecodeError as exc:
        raise ParseError(f"{path} is not valid UTF-8: {exc}") from exc
    return parse_text(text)
