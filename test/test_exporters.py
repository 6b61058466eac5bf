from datetime import datetime

import pandas as pd
import pytest

from errors import SerializationError
from exporters import manifest_exporter as me
from exporters.manifest_exporter import ManifestExporter, manifest_filename
from exporters.sheet_merger import SheetMerger
from models import ConsolidatedGroup, Manifest, ManifestLayout, ServiceRecord


@pytest.fixture
def manifest():
    records = [ServiceRecord("S1", "Rua A"), ServiceRecord("S2", "Rua B"), ServiceRecord("S3", "Rua A")]
    groups = [ConsolidatedGroup("Rua A", ["S1", "S3"]), ConsolidatedGroup("Rua B", ["S2"])]
    return Manifest(layout=ManifestLayout.FIXED_COLUMN, records=records, groups=groups)


# ---------- manifest workbook ----------
def test_consolidated_rows_join_ids(manifest, read_back):
    content = ManifestExporter().build(manifest.records, manifest.groups, consolidate=True)
    wb, ws, rows = read_back(content)
    assert rows == [("S1, S3", "Rua A"), ("S2", "Rua B")]
    assert wb.sheetnames == ["Dados Processados"]
    assert ws.column_dimensions["A"].width == pytest.approx(50, abs=1)
    assert ws.column_dimensions["B"].width == pytest.approx(40, abs=1)


def test_flat_rows_follow_record_order(manifest, read_back):
    content = ManifestExporter().build(manifest.records, manifest.groups, consolidate=False)
    _, ws, rows = read_back(content)
    assert rows == [("S1", "Rua A"), ("S2", "Rua B"), ("S3", "Rua A")]
    assert ws.column_dimensions["A"].width == pytest.approx(30, abs=1)


def test_text_that_looks_like_formula_or_number_stays_text(read_back):
    records = [ServiceRecord("=1+1", "00123"), ServiceRecord("0042", "http://x.example")]
    content = ManifestExporter().build(records, [], consolidate=False)
    _, _, rows = read_back(content)
    assert rows == [("=1+1", "00123"), ("0042", "http://x.example")]


def test_export_uses_layout_sheet_and_filename(manifest, read_back):
    manifest.layout = ManifestLayout.HEADER_MATCHED
    exported = ManifestExporter().export(manifest, consolidate=True, driver_name=" Joao ")
    assert exported.filename == "Romaneio_TMS_Joao.xlsx"
    assert exported.mime_type.endswith("spreadsheetml.sheet")
    wb, _, _ = read_back(exported.content)
    assert wb.sheetnames == ["Dados Processados TMS"]


@pytest.mark.parametrize("layout, driver, expected", [
    (ManifestLayout.FIXED_COLUMN, "Maria", "Romaneio_Maria.xlsx"),
    (ManifestLayout.HEADER_MATCHED, "Maria", "Romaneio_TMS_Maria.xlsx"),
    (ManifestLayout.FIXED_COLUMN, "Ana/Rota 2", "Romaneio_Ana_Rota 2.xlsx"),
])
def test_manifest_filename(layout, driver, expected):
    assert manifest_filename(layout, driver) == expected


@pytest.mark.parametrize("driver", ["", "   ", None])
def test_manifest_filename_requires_driver(driver):
    with pytest.raises(ValueError):
        manifest_filename(ManifestLayout.FIXED_COLUMN, driver)


def test_writer_failure_is_serialization_error(monkeypatch, manifest):
    def broken_writer(*args, **kwargs):
        raise RuntimeError("disk full")

    monkeypatch.setattr(me.pd, "ExcelWriter", broken_writer)
    with pytest.raises(SerializationError, match="disk full"):
        ManifestExporter().build(manifest.records, manifest.groups, consolidate=True)


# ---------- sheet merger ----------
def test_merge_keeps_first_sheet_and_drops_later_headers(make_xlsx, read_back):
    data = make_xlsx({
        "Jan": [["id", "addr"], ["1", "Rua A"], ["2", "Rua B"]],
        "Feb": [["id", "addr"], ["3", "Rua C"]],
    })
    exported = SheetMerger().merge_workbook(data, "rotas.xlsx", now=datetime(2025, 1, 15, 10, 30, 0))
    wb, _, rows = read_back(exported.content)
    assert rows == [("id", "addr"), ("1", "Rua A"), ("2", "Rua B"), ("3", "Rua C")]
    assert wb.sheetnames == ["Dados Consolidados"]
    assert exported.filename == "Arquivo_Convertido_2025-01-15T10-30-00.xlsx"


def test_merge_drops_header_of_sheet_starting_below_row_1(make_xlsx, read_back):
    data = make_xlsx({
        "Jan": [["id", "addr"], ["1", "Rua A"]],
        "Feb": [[None, None], ["id", "addr"], ["2", "Rua B"]],
    })
    _, _, rows = read_back(SheetMerger().merge_workbook(data, "rotas.xlsx").content)
    assert rows == [("id", "addr"), ("1", "Rua A"), ("2", "Rua B")]


def test_merge_drops_first_row_even_without_real_header():
    rows = SheetMerger.merge_rows({"A": [["1"], ["2"]], "B": [["3"], ["4"]], "C": [["5"]]})
    assert rows == [["1"], ["2"], ["4"]]


def test_merge_handles_empty_sheets():
    assert SheetMerger.merge_rows({"A": [], "B": []}) == []
    assert SheetMerger.merge_rows({"A": [], "B": [["h"], ["x"]]}) == [["x"]]


def test_merge_of_empty_workbook_is_still_a_workbook(read_back):
    wb, _, rows = read_back(SheetMerger().merge({"Vazia": []}))
    assert wb.sheetnames == ["Dados Consolidados"]
    assert rows in ([], [(None,)])


def test_merge_keeps_ragged_rows():
    df = pd.DataFrame(SheetMerger.merge_rows({"A": [["a", "b", "c"]], "B": [["h"], ["x", "y"]]}))
    assert df.shape == (2, 3)
