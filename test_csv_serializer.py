import pytest

from csv_serializer import has_changed, max_row_length, resize_row, row_width, serialize
from file_loader import parse_text


@pytest.mark.parametrize(
    "row, expected",
    [
        (["a", "b", ""], 2),
        (["", "", ""], 0),
        ([], 0),
        (["", "b", " "], 2),
        (["a"], 1),
    ],
)
def test_row_width(row, expected):
    assert row_width(row) == expected


def test_resize_row_pads_and_drops_padding_only():
    assert resize_row(["a"], 3) == ["a", "", ""]
    assert resize_row(["a", "", "", ""], 2) == ["a", ""]
    assert resize_row(["x", "y", "z"], 2) == ["x", "y", "z"]
    assert resize_row([" a ", None], 2) == ["a", ""]


def test_max_row_length():
    assert max_row_length([["a"], ["a", "b", "c"], []]) == 3
    assert max_row_length([]) == 0


def test_serialize_empty_inputs():
    assert serialize([]) == ""
    assert serialize([["", ""], [" "]]) == ""


def test_trailing_empty_rows_are_dropped():
    padded = [["a", "b"], ["", ""], ["c", "d"], ["", ""], ["", ""]]
    trimmed = [["a", "b"], ["", ""], ["c", "d"]]
    assert serialize(padded) == serialize(trimmed)
    assert serialize(trimmed) == "a,b\n,\nc,d"


def test_width_follows_header():
    rows = [["Name", "Age", ""], ["bob", "", "", ""], ["al"]]
    assert serialize(rows) == "Name,Age\nbob,\nal,"


def test_overflowing_content_is_not_truncated():
    rows = [["Name", "Age", ""], ["x", "y", "z"]]
    assert serialize(rows) == "Name,Age\nx,y,z"


def test_quotes_delimiters_and_newlines():
    rows = [["a", "b"], ['say "hi"', "x,y"], ["line\nbreak", "ok"]]
    assert serialize(rows) == 'a,b\n"say ""hi""","x,y"\n"line\nbreak",ok'


def test_no_trailing_newline_and_unix_endings():
    text = serialize([["a"], ["b"]])
    assert not text.endswith("\n")
    assert "\r" not in text


def test_serialize_is_idempotent():
    rows = [["h1", "h2"], ["1", "2"], ["", ""], ["3"]]
    assert serialize(rows) == serialize(rows)


def test_serialized_text_is_a_fixed_point():
    rows = [["h1", "h2", ""], ['q"uote', "a,b"], ["", ""], ["x", "y", "z"], ["", ""]]
    once = serialize(rows)
    again = serialize(parse_text(once))
    assert again == once


def test_has_changed():
    assert has_changed("a,b", "a,c")
    assert not has_changed("a,b", "a,b")


@pytest.mark.parametrize("cell", ["x\ry", "x\r\ny"])
def test_carriage_returns_are_folded_and_survive_reload(cell):
    rows = [["a", "b"], [cell, "z"]]
    text = serialize(rows)
    assert "\r" not in text
    assert parse_text(text) == [["a", "b"], ["x\ny", "z"]]
    assert serialize(parse_text(text)) == text
