"""Adjacency-matrix parsers for CSV, delimited text and JSON sources.

Each source format maps to one parser function through ``PARSERS``; files
are dispatched on their extension by ``detect_format``. Parsers only
produce a list of numeric rows. Squareness and label checks belong to
``Graph``, so a ragged matrix parses fine and fails at construction.

Example:
    matrix = load_matrix("social.csv")
    graph = Graph(matrix, ["A", "B", "C"])
"""

import csv
import io
import json
import math
import re
from enum import Enum
from pathlib import Path
from typing import Any, Callable

import structlog

from .errors import ParseError

logger = structlog.get_logger(__name__)

Matrix = list[list[float]]

_CELL_SEPARATOR = re.compile(r"[\s,]+")
_LINE_SEPARATOR = re.compile(r"[\r\n]+")


class MatrixFormat(str, Enum):
    """Supported matrix source formats."""

    CSV = "csv"
    TEXT = "text"
    JSON = "json"


def _coerce_cell(token: str, row: int, column: int) -> float:
    """Convert one textual cell to an int, or a float if it has a decimal part."""
    text = token.strip()
    try:
        return int(text)
    except ValueError:
        pass
    try:
        value = float(text)
    except ValueError:
        raise ParseError(
            f"Invalid matrix cell {token!r} at row {row + 1}, column {column + 1}"
        ) from None
    if not math.isfinite(value):
        raise ParseError(
            f"Non-finite matrix cell {token!r} at row {row + 1}, column {column + 1}"
        )
    return value


def _non_blank_lines(text: str) -> list[str]:
    return [line.strip() for line in _LINE_SEPARATOR.split(text) if line.strip()]


def parse_text(text: str) -> Matrix:
    """Parse rows of whitespace- and/or comma-separated numbers.

    Blank lines are dropped before rows are split, so trailing newlines and
    spacer lines are harmless.
    """
    matrix: Matrix = []
    for row_index, line in enumerate(_non_blank_lines(text)):
        tokens = [t for t in _CELL_SEPARATOR.split(line) if t]
        matrix.append(
            [_coerce_cell(tok, row_index, col) for col, tok in enumerate(tokens)]
        )
    return matrix


def parse_csv(text: str) -> Matrix:
    """Parse comma-separated rows of numbers.

    Unlike ``parse_text`` every field must be present: ``1,,0`` is rejected.
    """
    matrix: Matrix = []
    reader = csv.reader(io.StringIO(text))
    row_index = 0
    for fields in reader:
        if not fields or all(not f.strip() for f in fields):
            continue
        matrix.append(
            [_coerce_cell(f, row_index, col) for col, f in enumerate(fields)]
        )
        row_index += 1
    return matrix


def _validate_json_matrix(data: Any) -> Matrix:
    if not isinstance(data, list):
        raise ParseError("JSON matrix must be a list of rows")
    matrix: Matrix = []
    for row_index, row in enumerate(data):
        if not isinstance(row, list):
            raise ParseError(f"JSON matrix row {row_index + 1} is not a list")
        for col, cell in enumerate(row):
            # bool is an int subclass but never a weight
            if isinstance(cell, bool) or not isinstance(cell, (int, float)):
                raise ParseError(
                    f"Invalid matrix cell {cell!r} at row {row_index + 1}, "
                    f"column {col + 1}"
                )
            # json.loads accepts NaN and Infinity literals
            if not math.isfinite(cell):
                raise ParseError(
                    f"Non-finite matrix cell {cell!r} at row {row_index + 1}, "
                    f"column {col + 1}"
                )
        matrix.append(list(row))
    return matrix


def parse_json(text: str) -> Matrix:
    """Parse ``{"matrix": [[...]]}`` or a bare 2-D JSON array."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ParseError(f"Invalid JSON: {e.msg} (line {e.lineno})") from e

    if isinstance(data, dict) and "matrix" in data:
        return _validate_json_matrix(data["matrix"])
    if isinstance(data, list):
        return _validate_json_matrix(data)
    raise ParseError("Invalid JSON format for matrix")


PARSERS: dict[MatrixFormat, Callable[[str], Matrix]] = {
    MatrixFormat.CSV: parse_csv,
    MatrixFormat.TEXT: parse_text,
    MatrixFormat.JSON: parse_json,
}

_EXTENSIONS: dict[str, MatrixFormat] = {
    ".csv": MatrixFormat.CSV,
    ".json": MatrixFormat.JSON,
    ".txt": MatrixFormat.TEXT,
}


def detect_format(path: str | Path) -> MatrixFormat:
    """Pick a format from the file extension, falling back to text."""
    return _EXTENSIONS.get(Path(path).suffix.lower(), MatrixFormat.TEXT)


def parse_matrix(text: str, fmt: MatrixFormat | str = MatrixFormat.TEXT) -> Matrix:
    """Parse matrix text in the given format."""
    return PARSERS[MatrixFormat(fmt)](text)


def parse_matrix_string(text: str) -> Matrix:
    """Parse an inline matrix such as ``"0,1\\n1,0"`` or ``"0 1\\n1 0"``."""
    return parse_text(text)


def load_matrix(path: str | Path, fmt: MatrixFormat | str | None = None) -> Matrix:
    """Read and parse a matrix file.

    Args:
        path: File to read.
        fmt: Explicit format; detected from the extension when omitted.

    Returns:
        The parsed rows.

    Raises:
        ParseError: If the file is missing, unreadable or malformed.
    """
    file_path = Path(path)
    try:
        exists = file_path.is_file()
    except (OSError, ValueError) as e:
        raise ParseError(f"Invalid matrix path '{file_path}': {e}") from e
    if not exists:
        raise ParseError(f"File '{file_path}' not found")

    matrix_format = MatrixFormat(fmt) if fmt is not None else detect_format(file_path)
    try:
        text = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ParseError(f"Could not read '{file_path}': {e}") from e

    matrix = PARSERS[matrix_format](text)
    logger.debug(
        "Matrix loaded",
        path=str(file_path),
        format=matrix_format.value,
        rows=len(matrix),
    )
    return matrix
