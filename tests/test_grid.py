import pytest

from lsdeluxe.grid import Cell, Direction, Grid, header_cells
from lsdeluxe.width import get_visible_width


def _grid(texts, direction=Direction.LEFT_TO_RIGHT, filling=1):
    grid = Grid(direction=direction, filling=filling)
    for text in texts:
        grid.add(Cell.from_text(text))
    return grid


def test_cell_from_text_uses_visible_width():
    text = "\x1b[38;5;184m日本語\x1b[39m"
    cell = Cell.from_text(text)
    assert cell.contents == text
    assert cell.width == get_visible_width(text, False)
    assert cell.width == 6


def test_tree_single_column_matches_source_output():
    grid = _grid(["one.d", "├── .hidden", "└── two"])
    assert grid.fit_into_columns(1) == "one.d\n├── .hidden\n└── two\n"


def test_empty_grid_renders_nothing():
    grid = Grid()
    assert grid.fit_into_columns(3) == ""
    assert grid.fit_into_width(80) == ""


def test_left_to_right_fills_rows():
    grid = _grid(["a", "bbb", "c", "dd", "e"], filling=1)
    lines = grid.fit_into_columns(2).splitlines()
    assert len(lines) == 3
    assert [line.split() for line in lines] == [["a", "bbb"], ["c", "dd"], ["e"]]


def test_top_to_bottom_fills_columns():
    grid = _grid(["a", "b", "c", "d", "e"], direction=Direction.TOP_TO_BOTTOM, filling=2)
    lines = grid.fit_into_columns(2).splitlines()
    assert [line.split() for line in lines] == [["a", "d"], ["b", "e"], ["c"]]


def test_columns_are_aligned_and_last_column_not_padded():
    grid = _grid(["x", "longer", "yy", "z"], filling=1)
    lines = grid.fit_into_columns(2).splitlines()
    second_starts = {line.index(token) for line, token in zip(lines, ["longer", "z"])}
    assert len(second_starts) == 1
    assert all(not line.endswith(" ") for line in lines)


def test_fit_into_columns_rejects_zero():
    with pytest.raises(ValueError):
        _grid(["a"]).fit_into_columns(0)


def test_fit_into_width_none_when_cell_too_wide():
    grid = _grid(["short", "this-name-is-rather-long"])
    assert grid.fit_into_width(10) is None


def test_fit_into_width_single_cell():
    grid = _grid(["alone"])
    assert grid.fit_into_width(40) == "alone\n"


@pytest.mark.parametrize("width", [20, 30, 50, 120])
def test_fit_into_width_respects_width_and_keeps_all_cells(width):
    names = [f"file{i}.txt" for i in range(12)]
    grid = _grid(names, direction=Direction.TOP_TO_BOTTOM, filling=2)
    output = grid.fit_into_width(width)
    assert output is not None
    lines = output.splitlines()
    assert all(get_visible_width(line, False) <= width for line in lines)
    assert sorted(token for line in lines for token in line.split()) == sorted(names)


def test_fit_into_width_uses_fewer_lines_when_wider():
    names = [f"entry{i}" for i in range(10)]
    narrow = _grid(names, direction=Direction.TOP_TO_BOTTOM, filling=2).fit_into_width(20)
    wide = _grid(names, direction=Direction.TOP_TO_BOTTOM, filling=2).fit_into_width(200)
    assert len(wide.splitlines()) < len(narrow.splitlines())
    assert len(wide.splitlines()) == 1


def test_header_cells_widths_cover_headers_and_cells():
    cells = [Cell.from_text("a-long-file-name"), Cell.from_text("1"),
             Cell.from_text("b"), Cell.from_text("22")]
    headers = header_cells(["Name", "Size"], cells)
    assert [cell.width for cell in headers] == [len("a-long-file-name"), len("Size")]
    for header, cell in zip(["Name", "Size"], headers):
        assert header in cell.contents
        assert get_visible_width(cell.contents, False) == cell.width


def test_header_cells_center_text():
    cells = [Cell.from_text("abcdefgh")]
    (cell,) = header_cells(["Name"], cells)
    visible = cell.contents[cell.contents.index("Name") - 2:cell.contents.index("Name") + 6]
    assert visible == "  Name  "


def test_header_cells_empty_headers():
    assert header_cells([], [Cell.from_text("x")]) == []