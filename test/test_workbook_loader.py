import pytest

from errors import ReadError
from loaders import workbook_loader as wl
from loaders.workbook_loader import WorkbookLoader


@pytest.fixture
def loader():
    return WorkbookLoader()


def test_load_grid_reads_first_sheet_with_none_for_blanks(loader, make_xlsx):
    data = make_xlsx({
        "Rota": [["id", "endereco"], ["S1", None], [7, "Rua X"]],
        "Outra": [["ignored"]],
    })
    grid = loader.load_grid(data, "rota.xlsx")
    assert grid == [["id", "endereco"], ["S1", None], [7, "Rua X"]]


def test_load_grid_keeps_blank_rows_between_data(loader, make_xlsx):
    data = make_xlsx({"Rota": [["a", "b"], [None, None], ["c", "d"]]})
    grid = loader.load_grid(data)
    assert len(grid) == 3
    assert grid[1] == [None, None]


def test_load_sheets_preserves_sheet_order(loader, make_xlsx):
    data = make_xlsx({"Z": [["1"]], "A": [["2"]], "M": [["3"]]})
    sheets = loader.load_sheets(data)
    assert list(sheets) == ["Z", "A", "M"]
    assert sheets["A"] == [["2"]]


def test_load_sheets_starts_at_first_used_row(loader, make_xlsx):
    data = make_xlsx({
        "Jan": [[None, None], [None, None], ["id", "addr"], ["1", "Rua A"]],
        "Vazia": [[None]],
    })
    sheets = loader.load_sheets(data)
    assert sheets["Jan"] == [["id", "addr"], ["1", "Rua A"]]
    assert sheets["Vazia"] == []


def test_load_grid_keeps_leading_blank_rows(loader, make_xlsx):
    data = make_xlsx({"Rota": [[None, None], ["S1", "Rua X"]]})
    grid = loader.load_grid(data)
    assert grid == [[None, None], ["S1", "Rua X"]]


@pytest.mark.parametrize("data, filename, engine", [
    (b"PK\x03\x04rest", None, "openpyxl"),
    (b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1rest", None, "xlrd"),
    (b"????", "legacy.XLS", "xlrd"),
    (b"????", "book.xlsx", "openpyxl"),
])
def test_detect_engine(loader, data, filename, engine):
    assert loader.detect_engine(data, filename) == engine


def test_detect_engine_rejects_unknown_format(loader):
    with pytest.raises(ReadError, match="unsupported"):
        loader.detect_engine(b"id;endereco\n1;Rua X", "rota.csv")


def test_empty_input_is_read_error(loader):
    with pytest.raises(ReadError, match="empty"):
        loader.load_grid(b"")


def test_corrupt_workbook_is_read_error(loader):
    with pytest.raises(ReadError, match="could not parse"):
        loader.load_grid(b"PK\x03\x04 definitely not a zip archive")


def test_xls_bytes_are_read_with_xlrd(loader, monkeypatch):
    engines = []

    def fake_read_excel(*args, **kwargs):
        engines.append(kwargs.get("engine"))
        return wl.pd.DataFrame([["S1", None, "Rua X"]])

    monkeypatch.setattr(wl.pd, "read_excel", fake_read_excel)
    grid = loader.load_grid(b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1...")
    assert engines == ["xlrd"]
    assert grid == [["S1", None, "Rua X"]]


def test_read_bytes_missing_file(loader, tmp_path):
    with pytest.raises(ReadError, match="could not read"):
        loader.read_bytes(tmp_path / "nope.xlsx")


def test_read_bytes(loader, tmp_path):
    path = tmp_path / "rota.xlsx"
    path.write_bytes(b"PK\x03\x04")
    assert loader.read_bytes(path) == b"PK\x03\x04"


def test_read_error_is_an_ioerror():
    assert issubclass(ReadError, IOError)
