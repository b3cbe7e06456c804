import logging
import sys

from _version import __version__
from config_paths import load_config
from csv_serializer import serialize
from editor_session import EditorSession
from file_loader import ParseError

USAGE = (
    "csvgrid - CSV spreadsheet editing core\n\n"
    "Usage:\n"
    "  csvgrid FILE\n"
    "  csvgrid FILE ROW COL VALUE [ROW COL VALUE ...]\n"
    "  csvgrid -v\n"
)


def _parse_edits(args: list[str]) -> list[tuple[int, int, str]]:
    if len(args) % 3 != 0:
        raise ValueError("edits must be given as ROW COL VALUE triples")
    edits = []
    for i in range(0, len(args), 3):
        row, col, value = args[i : i + 3]
        try:
            r, c = int(row), int(col)
        except ValueError:
            raise ValueError(f"bad cell coordinates: {row} {col}") from None
        if r < 0 or c < 0:
            raise ValueError(f"bad cell coordinates: {row} {col}")
        edits.append((r, c, value))
    return edits


def main(argv=None):
    args = sys.argv[1:] if argv is None else list(argv)

    flag = args[0] if args else None

    if flag in ("-v", "-V"):
        print(__version__)
        return 0

    if flag is None or flag == "-h":
        print(USAGE)
        return 0

    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    path = args[0]
    try:
        edits = _parse_edits(args[1:])
    except ValueError as e:
        print(f"{e}\n\n{USAGE}", file=sys.stderr)
        return 2

    config = load_config()
    try:
        session = EditorSession.open(path, config=config)
    except ParseError as e:
        print(f"Load failed: {e}", file=sys.stderr)
        return 1

    for row, col, value in edits:
        session.on_cell_committed(row, col, value)

    try:
        session.flush()
    except OSError as e:
        print(f"Save failed: {e}", file=sys.stderr)
        return 1

    height, width = session.matrix.dimensions()
    print(f"{path}: {session.matrix.row_count} rows ({height}x{width} grid)")
    text = serialize(session.matrix.rows)
    if text:
        print(text)
    return 0


if __name__ == "__main__":
    sys.exit(main())
