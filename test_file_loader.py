import tempfile
from pathlib import Path

import pytest

from file_loader import ParseError, load_rows, parse_text


def test_parse_skips_empty_lines_and_keeps_ragged_rows():
    text = "a,b,c\n\n1,2\n\r\n3,4,5,6\n"
    assert parse_text(text) == [["a", "b", "c"], ["1", "2"], ["3", "4", "5", "6"]]


def test_parse_keeps_untrimmed_cells_and_quoted_fields():
    text = ' a ,"x,y"\n"multi\nline",""\n'
    assert parse_text(text) == [[" a ", "x,y"], ["multi\nline", ""]]


def test_parse_keeps_comma_only_lines():
    assert parse_text("a,b\n,\nc,d") == [["a", "b"], ["", ""], ["c", "d"]]


@pytest.mark.parametrize("text", ['a,"unterminated\n', 'a,"b"c\n'])
def test_malformed_csv_raises_parse_error(text):
    with pytest.raises(ParseError):
        parse_text(text)


def test_load_rows_reads_utf8_file():
    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / "names.csv"
        path.write_text("name\nZoë\n", encoding="utf-8")
        assert load_rows(str(path)) == [["name"], ["Zoë"]]


def test_load_rows_missing_or_empty_file_is_empty_matrix():
    with tempfile.TemporaryDirectory() as tmp:
        missing = Path(tmp) / "missing.csv"
        assert load_rows(str(missing)) == []
        empty = Path(tmp) / "empty.csv"
        empty.write_text("")
        assert load_rows(str(empty)) == []


def test_load_rows_accepts_any_text_path():
    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / "export.txt"
        path.write_text("a,b\n1,2\n", encoding="utf-8")
        assert load_rows(str(path)) == [["a", "b"], ["1", "2"]]


def test_load_rows_oversized_cell_reloads():
    big = "x" * 200_000
    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / "big.csv"
        path.write_text(f"a,b\n{big},1\n", encoding="utf-8")
        assert load_rows(str(path)) == [["a", "b"], [big, "1"]]


def test_load_rows_rejects_bad_bytes():
    with tempfile.TemporaryDirectory() as tmp:
        bad = Path(tmp) / "bad.csv"
        bad.write_bytes(b"a,b\n\xff\xfe,c\n")
        with pytest.raises(ParseError):
            load_rows(str(bad))
