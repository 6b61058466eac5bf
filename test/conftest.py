"""
Pytest configuration and shared fixtures.
"""
import io
import os
import sys

import pytest
from openpyxl import Workbook, load_workbook

# Add project root to path for imports
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if project_root not in sys.path:
    sys.path.insert(0, project_root)


TMS_HEADER = [
    "Numero_da_Ordem",
    "Logradouro_Destinatario",
    "Numero_do_Destinatario",
    "Bairro_Destinatario",
    "Cidade_Destinatario",
    "UF_Destinatario",
    "CEP_Destinatario",
]


def build_xlsx(sheets):
    """Sheet name -> rows, in order, saved to XLSX bytes."""
    wb = Workbook()
    wb.remove(wb.active)
    for name, rows in sheets.items():
        ws = wb.create_sheet(title=name)
        for row in rows:
            ws.append(list(row))
    buffer = io.BytesIO()
    wb.save(buffer)
    return buffer.getvalue()


def read_xlsx(content):
    """XLSX bytes -> (worksheet, rows as tuples)."""
    wb = load_workbook(io.BytesIO(content))
    ws = wb.worksheets[0]
    return wb, ws, [tuple(r) for r in ws.iter_rows(values_only=True)]


@pytest.fixture
def make_xlsx():
    return build_xlsx


@pytest.fixture
def fixed_column_grid():
    """Nine legend rows, then service id in A and address in C."""
    legend = [[f"Legenda {i}", None, None] for i in range(1, 10)]
    data = [
        ["S1", "ignored", "Condominio Alfa - Rua X, 10"],
        ["S2", "ignored", "Rua Y, 20"],
        [None, None, "Rua sem servico, 1"],
        ["S3", "ignored", None],
        ["S4", None, "  Rua X, 10  "],
    ]
    return legend + data


@pytest.fixture
def tms_grid():
    return [
        TMS_HEADER,
        ["123", "Rua Barra do Turvo", "49", "Cordovil", "Rio de Janeiro", "RJ", "21010-220"],
        ["124", "Rua Dois", None, None, "Niteroi", "RJ", None],
        ["123", "Rua Barra do Turvo", "49", "Cordovil", "Rio de Janeiro", "RJ", "21010-220"],
        [None, "Rua Tres", "1", "Centro", "Rio de Janeiro", "RJ", "20000-000"],
        ["125", None, "5", "Centro", "Rio de Janeiro", "RJ", "20000-000"],
    ]


@pytest.fixture
def read_back():
    return read_xlsx


@pytest.fixture
def tms_header():
    return list(TMS_HEADER)
