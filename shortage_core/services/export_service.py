# =============================================================================
# shortage_core/services/export_service.py
# Export Projector - flattens reports into spreadsheet rows
# =============================================================================

from __future__ import annotations
import io
from datetime import date
from typing import Dict, List, Optional, Sequence

import pandas as pd

from shortage_core.models import Report

from .base_service import BaseService, ServiceResult


EXPORT_COLUMNS = [
    "FECHA",
    "SERVICIO",
    "MÉDICO",
    "CLAVE",
    "DESCRIPCIÓN",
    "PRESENTACIÓN",
    "CATEGORÍA",
]
SHEET_NAME = "HISTORICO"
FILENAME_PREFIX = "LOG_CHMH"


def project(reports: Sequence[Report]) -> List[Dict[str, str]]:
    """One row per (report, item) pair, in report then item order."""
    return [
        {
            "FECHA": report.date,
            "SERVICIO": report.service,
            "MÉDICO": report.physician_name,
            "CLAVE": item.code,
            "DESCRIPCIÓN": item.description,
            "PRESENTACIÓN": item.presentation,
            "CATEGORÍA": item.category.value,
        }
        for report in reports
        for item in report.items
    ]


def to_dataframe(reports: Sequence[Report]) -> pd.DataFrame:
    return pd.DataFrame(project(reports), columns=EXPORT_COLUMNS)


def to_excel_bytes(reports: Sequence[Report]) -> Optional[bytes]:
    """
    Render an .xlsx workbook with a single HISTORICO sheet.

    Returns:
        Workbook bytes, or None when there is nothing to export
    """
    df = to_dataframe(reports)
    if df.empty:
        return None

    buffer = io.BytesIO()
    with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
        df.to_excel(writer, sheet_name=SHEET_NAME, index=False)
    return buffer.getvalue()


def export_filename(today: Optional[date] = None) -> str:
    today = today or date.today()
    return f"{FILENAME_PREFIX}_{today.isoformat()}.xlsx"


class ExportService(BaseService):
    """
    Wraps the projector for the history page.

    Usage:
        result = ExportService().build_workbook(filtered_reports)
        if result.success and result.data:
            st.download_button(..., data=result.data, file_name=export_filename())
    """

    def build_workbook(self, reports: Sequence[Report]) -> ServiceResult:
        result = self.safe_execute(f"Exporting {len(reports)} reports", to_excel_bytes, reports)
        if result.success:
            result.metadata = {"rows": sum(r.item_count for r in reports)}
        return result
