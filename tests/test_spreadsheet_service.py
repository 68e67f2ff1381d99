from datetime import date, datetime
from decimal import Decimal
from io import BytesIO

import pandas as pd
import pytest
from openpyxl import load_workbook

from corpo_libero.models import Cuota, Tournament, TournamentParticipant
from corpo_libero.services import spreadsheet_service

TODAY = date(2026, 1, 20)


def _xlsx(rows, columns):
    output = BytesIO()
    pd.DataFrame(rows, columns=columns).to_excel(output, index=False, engine="openpyxl")
    return output.getvalue()


def _cuota(alumna, grupo, monto):
    return Cuota(
        alumna=alumna, grupo=grupo, monto=Decimal(monto), medio="efectivo",
        fecha_pago=date(2026, 1, 5), vencimiento=date(2026, 2, 5), estado="pagado",
        created_at=datetime(2026, 1, 5, 10, 0),
    )


def test_export_has_fixed_headers_and_sheet():
    content = spreadsheet_service.build_cuotas_workbook([_cuota("Lucía", "jardin", "25000")])

    sheet = load_workbook(BytesIO(content))["Cuotas"]
    headers = [cell.value for cell in sheet[1]]
    assert headers == spreadsheet_service.CUOTAS_HEADERS
    assert sheet["A2"].value == 1
    assert sheet["I2"].value == "05/01/2026"


def test_export_without_rows_fails():
    with pytest.raises(ValueError, match="No hay cuotas para exportar"):
        spreadsheet_service.build_cuotas_workbook([])


def test_export_then_import_keeps_alumna_grupo_monto():
    cuotas = [_cuota("Lucía", "jardin", "25000"), _cuota("Martina", "competencia", "30500.50")]

    content = spreadsheet_service.build_cuotas_workbook(cuotas)
    rows = spreadsheet_service.parse_cuotas_workbook(content, "cuotas.xlsx", TODAY)

    assert [(r.alumna, r.grupo, r.monto) for r in rows] == [
        ("Lucía", "jardin", Decimal("25000")),
        ("Martina", "competencia", Decimal("30500.5")),
    ]
    assert rows[0].vencimiento == date(2026, 2, 5)


def test_import_applies_defaults():
    content = _xlsx(
        [
            ["Ana", "ESCUELA", "$25.000", None, "2026-01-31", None, None],
            ["Bea", "jardin", 18000, "efectivo", None, None, "pendiente"],
        ],
        ["Alumna", "Grupo", "Monto", "Medio de Pago", "Fecha de Pago", "Vencimiento", "Estado"],
    )

    ana, bea = spreadsheet_service.parse_cuotas_workbook(content, "import.xlsx", TODAY)

    assert ana.grupo == "escuela"
    assert ana.monto == Decimal("25.000")
    assert ana.medio == "transferencia"
    assert ana.estado == "pagado"
    assert ana.fecha_pago == date(2026, 1, 31)
    # Fin de mes: relativedelta no desborda al mes siguiente
    assert ana.vencimiento == date(2026, 2, 28)

    assert bea.fecha_pago == TODAY
    assert bea.vencimiento == date(2026, 2, 19)
    assert bea.medio == "efectivo"
    assert bea.estado == "pendiente"


def test_import_skips_incomplete_rows():
    content = _xlsx(
        [["Ana", "jardin", 1000], [None, "jardin", 1000], ["Bea", None, 1000], ["Caro", "jardin", None]],
        ["Alumna", "Grupo", "Monto"],
    )

    rows = spreadsheet_service.parse_cuotas_workbook(content, "import.xlsx", TODAY)

    assert [r.alumna for r in rows] == ["Ana"]


def test_import_without_valid_rows_fails():
    content = _xlsx([[None, "jardin", 1000]], ["Alumna", "Grupo", "Monto"])

    with pytest.raises(ValueError, match="No se encontraron filas con datos válidos"):
        spreadsheet_service.parse_cuotas_workbook(content, "import.xlsx", TODAY)


def test_import_rejects_unreadable_file():
    with pytest.raises(ValueError, match="No se pudo leer el archivo"):
        spreadsheet_service.parse_cuotas_workbook(b"not a workbook", "import.xlsx", TODAY)

    with pytest.raises(ValueError):
        spreadsheet_service.parse_cuotas_workbook(b"", "import.csv", TODAY)


def _tournament():
    tournament = Tournament(name="Copa de Verano", date=date(2026, 2, 14), location="Club Norte",
                            category=["Nivel 1", "Nivel 2"])
    tournament.participants.append(
        TournamentParticipant(student_name="Lucía", level="Nivel 1", payment_status="partial",
                              payment_amount=Decimal("5000"), payment_method="efectivo",
                              payment_date=date(2026, 1, 10))
    )
    return tournament


def test_tournament_roster_workbook():
    tournament = _tournament()

    content = spreadsheet_service.build_tournament_roster_workbook(tournament)
    sheet = load_workbook(BytesIO(content))["Participantes"]

    assert [c.value for c in sheet[1]] == spreadsheet_service.ROSTER_HEADERS
    assert sheet["A1"].font.bold is True
    assert sheet["F2"].value == "Parcial"
    assert spreadsheet_service.tournament_roster_filename(tournament) == "Copa_de_Verano_participantes.xlsx"


def test_tournaments_history_workbook():
    content = spreadsheet_service.build_tournaments_history_workbook([_tournament()])
    sheet = load_workbook(BytesIO(content))["Todos los Torneos"]

    assert [c.value for c in sheet[1]] == spreadsheet_service.HISTORY_HEADERS
    assert sheet["D2"].value == "Nivel 1, Nivel 2"
    assert sheet["B2"].value == "14/02/2026"
    assert spreadsheet_service.tournaments_history_filename(TODAY) == "Historial_Torneos_2026-01-20.xlsx"
