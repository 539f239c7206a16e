"""Laying out rendered cells in columns, as in the grid, long and tree views."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence

from .width import get_visible_width

_UNDERLINE = "\x1b[4m"
_RESET = "\x1b[0m"


class Direction(enum.Enum):
    """The order in which cells fill the grid."""

    LEFT_TO_RIGHT = "left-to-right"
    TOP_TO_BOTTOM = "top-to-bottom"


@dataclass(frozen=True)
class Cell:
    """A piece of rendered text together with the columns it occupies."""

    contents: str
    width: int

    @classmethod
    def from_text(cls, text: str, hyperlink: bool = False) -> "Cell":
        """A cell whose width is the visible width of `text`."""
        return cls(contents=text, width=get_visible_width(text, hyperlink))


@dataclass(frozen=True)
class _Dimensions:
    num_lines: int
    widths: list[int]


def _div_ceil(numerator: int, denominator: int) -> int:
    return -(-numerator // denominator)


@dataclass
class Grid:
    """Cells arranged into aligned columns separated by `filling` spaces."""

    direction: Direction = Direction.LEFT_TO_RIGHT
    filling: int = 1
    cells: list[Cell] = field(default_factory=list)

    def add(self, cell: Cell) -> None:
        """Append a cell to the grid."""
        self.cells.append(cell)

    def extend(self, cells: Iterable[Cell]) -> None:
        """Append several cells to the grid."""
        self.cells.extend(cells)

    def _column_of(self, index: int, num_lines: int, num_columns: int) -> int:
        if self.direction is Direction.LEFT_TO_RIGHT:
            return index % num_columns
        return index // num_lines

    def _column_widths(self, num_lines: int, num_columns: int) -> _Dimensions:
        widths = [0] * num_columns
        for index, cell in enumerate(self.cells):
            column = self._column_of(index, num_lines, num_columns)
            widths[column] = max(widths[column], cell.width)
        return _Dimensions(num_lines, widths)

    def _theoretical_max_num_lines(self, maximum_width: int) -> int:
        by_width = sorted((cell.width for cell in self.cells), reverse=True)
        total_width = by_width[0]
        num_columns = 1
        for width in by_width[1:]:
            total_width += width + self.filling
            if total_width > maximum_width:
                break
            num_columns += 1
        return _div_ceil(len(self.cells), num_columns)

    def _width_dimensions(self, maximum_width: int) -> Optional[_Dimensions]:
        if not self.cells:
            return _Dimensions(0, [])
        if max(cell.width for cell in self.cells) > maximum_width:
            return None
        if len(self.cells) == 1:
            return _Dimensions(1, [self.cells[0].width])

        max_lines = self._theoretical_max_num_lines(maximum_width)
        if max_lines == 1:
            return _Dimensions(1, [cell.width for cell in self.cells])

        best: Optional[_Dimensions] = None
        for num_lines in range(max_lines, 0, -1):
            num_columns = _div_ceil(len(self.cells), num_lines)
            separators = (num_columns - 1) * self.filling
            if maximum_width < separators:
                continue
            candidate = self._column_widths(num_lines, num_columns)
            if sum(candidate.widths) < maximum_width - separators:
                best = candidate
            else:
                return best
        return best

    def _render(self, dimensions: _Dimensions) -> str:
        num_columns = len(dimensions.widths)
        lines = []
        for row in range(dimensions.num_lines):
            parts = []
            for column, column_width in enumerate(dimensions.widths):
                if self.direction is Direction.LEFT_TO_RIGHT:
                    index = row * num_columns + column
                else:
                    index = row + dimensions.num_lines * column
                if index >= len(self.cells):
                    continue
                cell = self.cells[index]
                if column == num_columns - 1:
                    parts.append(cell.contents)
                else:
                    padding = column_width - cell.width + self.filling
                    parts.append(cell.contents + " " * padding)
            lines.append("".join(parts) + "\n")
        return "".join(lines)

    def fit_into_columns(self, num_columns: int) -> str:
        """Render the cells in exactly `num_columns` columns."""
        if num_columns <= 0:
            raise ValueError("number of columns must be positive")
        num_lines = _div_ceil(len(self.cells), num_columns)
        return self._render(self._column_widths(num_lines, num_columns))

    def fit_into_width(self, width: int) -> Optional[str]:
        """Render the cells in as few lines as fit into `width` columns.

        Returns None when they cannot fit.
        """
        dimensions = self._width_dimensions(width)
        if dimensions is None:
            return None
        return self._render(dimensions)


def _center(text: str, width: int) -> str:
    padding = max(width - len(text), 0)
    left = padding // 2
    return " " * left + text + " " * (padding - left)


def header_cells(
    headers: Sequence[str], cells: Sequence[Cell], hyperlink: bool = False
) -> list[Cell]:
    """Underlined, centred header cells, one per column of `cells`.

    Each header is as wide as the widest of itself and the cells in its column.
    """
    num_columns = len(headers)
    if num_columns == 0:
        return []
    widths = [get_visible_width(header, hyperlink) for header in headers]
    for index, cell in enumerate(cells):
        column = index % num_columns
        widths[column] = max(widths[column], cell.width)
    return [
        Cell(contents=f"{_UNDERLINE}{_center(header, width)}{_RESET}", width=width)
        for header, width in zip(headers, widths)
    ]