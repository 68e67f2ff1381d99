"""
Import/export de planillas Excel (cuotas y torneos).

Las planillas se arman con pandas (motor openpyxl) y se leen con
pandas.read_excel: openpyxl para .xlsx, xlrd para .xls.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from decimal import Decimal, InvalidOperation
from io import BytesIO
from typing import Any, Dict, Iterable, List, Optional, Sequence

import pandas as pd
from dateutil.relativedelta import relativedelta
from openpyxl.styles import Font, PatternFill
from openpyxl.utils import get_column_letter

from corpo_libero.models import Cuota, Tournament

CUOTAS_SHEET = "Cuotas"
CUOTAS_HEADERS = [
    "N°", "Alumna", "Grupo", "Monto", "Medio de Pago",
    "Fecha de Pago", "Vencimiento", "Estado", "Fecha de Registro",
]
CUOTAS_COLUMN_WIDTHS = [5, 20, 12, 12, 15, 15, 15, 10, 18]

ROSTER_SHEET = "Participantes"
ROSTER_HEADERS = [
    "Gimnasta", "Nivel", "Fecha de Pago", "Monto", "Método", "Estado", "Observación",
]

HISTORY_SHEET = "Todos los Torneos"
HISTORY_HEADERS = ["Torneo", "Fecha Torneo", "Lugar", "Categorías"] + ROSTER_HEADERS

PAYMENT_STATUS_LABELS = {
    "paid": "Pagado",
    "partial": "Parcial",
    "pending": "Pendiente",
}

HEADER_FONT = Font(bold=True)
HEADER_FILL = PatternFill(start_color="CCCCCC", end_color="CCCCCC", fill_type="solid")

DEFAULT_MEDIO = "transferencia"
DEFAULT_ESTADO = "pagado"

_AMOUNT_CLEANUP = re.compile(r"[^0-9.\-]")


@dataclass
class CuotaRow:
    alumna: str
    grupo: str
    monto: Decimal
    medio: str
    fecha_pago: date
    vencimiento: date
    estado: str


# ---------------------------------------------------------------------------
# Export
# ---------------------------------------------------------------------------

def _iso(value: Optional[date]) -> str:
    if value is None:
        return ""
    if isinstance(value, datetime):
        value = value.date()
    return value.isoformat()


def _amount_cell(value) -> Optional[float]:
    if value is None:
        return None
    return float(value)


def _write_workbook(
    sheet_name: str,
    headers: Sequence[str],
    rows: List[Dict[str, Any]],
    column_widths: Optional[Sequence[int]] = None,
    style_header: bool = False,
) -> bytes:
    df = pd.DataFrame(rows, columns=list(headers))

    output = BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        df.to_excel(writer, sheet_name=sheet_name, index=False)
        worksheet = writer.sheets[sheet_name]

        if column_widths:
            for idx, width in enumerate(column_widths, start=1):
                worksheet.column_dimensions[get_column_letter(idx)].width = width

        if style_header:
            for cell in worksheet[1]:
                cell.font = HEADER_FONT
                cell.fill = HEADER_FILL

    output.seek(0)
    return output.getvalue()


def cuotas_export_filename(today: Optional[date] = None) -> str:
    return f"cuotas_{(today or date.today()).isoformat()}.xlsx"


def build_cuotas_workbook(cuotas: Sequence[Cuota]) -> bytes:
    if not cuotas:
        raise ValueError("No hay cuotas para exportar")

    rows = []
    for index, cuota in enumerate(cuotas, start=1):
        rows.append(
            {
                "N°": index,
                "Alumna": cuota.alumna,
                "Grupo": cuota.grupo,
                "Monto": _amount_cell(cuota.monto),
                "Medio de Pago": cuota.medio,
                "Fecha de Pago": _iso(cuota.fecha_pago),
                "Vencimiento": _iso(cuota.vencimiento),
                "Estado": cuota.estado,
                "Fecha de Registro": cuota.created_at.strftime("%d/%m/%Y") if cuota.created_at else "",
            }
        )
    return _write_workbook(CUOTAS_SHEET, CUOTAS_HEADERS, rows, CUOTAS_COLUMN_WIDTHS)


def _participant_columns(participant) -> Dict[str, Any]:
    return {
        "Gimnasta": participant.student_name,
        "Nivel": participant.level,
        "Fecha de Pago": _iso(participant.payment_date),
        "Monto": _amount_cell(participant.payment_amount),
        "Método": participant.payment_method or "",
        "Estado": PAYMENT_STATUS_LABELS.get(participant.payment_status, "Pendiente"),
        "Observación": participant.observation or "",
    }


def tournament_roster_filename(tournament: Tournament) -> str:
    base_name = re.sub(r"\s+", "_", tournament.name.strip())
    return f"{base_name}_participantes.xlsx"


def build_tournament_roster_workbook(tournament: Tournament) -> bytes:
    rows = [_participant_columns(p) for p in tournament.participants]
    return _write_workbook(ROSTER_SHEET, ROSTER_HEADERS, rows, style_header=True)


def tournaments_history_filename(today: Optional[date] = None) -> str:
    return f"Historial_Torneos_{(today or date.today()).isoformat()}.xlsx"


def build_tournaments_history_workbook(tournaments: Iterable[Tournament]) -> bytes:
    rows = []
    for tournament in tournaments:
        header = {
            "Torneo": tournament.name,
            "Fecha Torneo": tournament.date.strftime("%d/%m/%Y") if tournament.date else "",
            "Lugar": tournament.location,
            "Categorías": ", ".join(tournament.category or []),
        }
        for participant in tournament.participants:
            row = dict(header)
            row.update(_participant_columns(participant))
            rows.append(row)

    if not rows:
        raise ValueError("No hay participantes para exportar")
    return _write_workbook(HISTORY_SHEET, HISTORY_HEADERS, rows, style_header=True)


# ---------------------------------------------------------------------------
# Import
# ---------------------------------------------------------------------------

def _cell(row: Dict[str, Any], key: str) -> Any:
    value = row.get(key)
    if value is None:
        return None
    try:
        if pd.isna(value):
            return None
    except (TypeError, ValueError):
        pass
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _parse_amount(value: Any) -> Optional[Decimal]:
    cleaned = _AMOUNT_CLEANUP.sub("", str(value))
    if not cleaned:
        return None
    try:
        return Decimal(cleaned)
    except InvalidOperation:
        return None


def _parse_sheet_date(value: Any) -> Optional[date]:
    if value is None:
        return None
    if isinstance(value, pd.Timestamp):
        return value.date()
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    for fmt in ("%Y-%m-%d", "%d/%m/%Y", "%Y-%m-%d %H:%M:%S"):
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def _row_to_cuota(row: Dict[str, Any], today: date) -> Optional[CuotaRow]:
    alumna = _cell(row, "Alumna")
    grupo = _cell(row, "Grupo")
    monto_raw = _cell(row, "Monto")
    if alumna is None or grupo is None or monto_raw is None:
        return None

    monto = _parse_amount(monto_raw)
    if monto is None:
        return None

    fecha_cell = _parse_sheet_date(_cell(row, "Fecha de Pago"))
    fecha_pago = fecha_cell or today

    vencimiento = _parse_sheet_date(_cell(row, "Vencimiento"))
    if vencimiento is None:
        if fecha_cell is not None:
            vencimiento = fecha_cell + relativedelta(months=1)
        else:
            vencimiento = today + timedelta(days=30)

    medio = _cell(row, "Medio de Pago")
    estado = _cell(row, "Estado")
    return CuotaRow(
        alumna=str(alumna).strip(),
        grupo=str(grupo).strip().lower(),
        monto=monto,
        medio=str(medio).strip() if medio is not None else DEFAULT_MEDIO,
        fecha_pago=fecha_pago,
        vencimiento=vencimiento,
        estado=str(estado).strip() if estado is not None else DEFAULT_ESTADO,
    )


def _read_first_sheet(content: bytes, filename: str) -> pd.DataFrame:
    engine = "xlrd" if filename.lower().endswith(".xls") else "openpyxl"
    return pd.read_excel(BytesIO(content), sheet_name=0, engine=engine, dtype=object)


def parse_cuotas_workbook(content: bytes, filename: str, today: Optional[date] = None) -> List[CuotaRow]:
    """
    Lee la primera hoja y devuelve las filas válidas.

    Una fila es válida si tiene Alumna, Grupo y Monto; las demás se
    descartan sin aviso.
    """
    today = today or date.today()
    if not filename or not filename.lower().endswith((".xlsx", ".xls")):
        raise ValueError("El archivo debe ser .xlsx o .xls")

    try:
        df = _read_first_sheet(content, filename)
    except Exception as exc:
        raise ValueError(f"No se pudo leer el archivo: {exc}") from exc

    rows = []
    for record in df.to_dict(orient="records"):
        parsed = _row_to_cuota(record, today)
        if parsed is not None:
            rows.append(parsed)

    if not rows:
        raise ValueError("No se encontraron filas con datos válidos en el archivo")
    return rows
