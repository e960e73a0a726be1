"""Value objects for shortage reports."""

from .report import (
    Category,
    ItemOrigin,
    MedicalItem,
    Report,
    PhysicianSession,
    make_custom_item,
    format_report_date,
    CUSTOM_ID_PREFIX,
    NO_CATALOG_CODE,
    NOT_APPLICABLE,
)
from .draft import ReportDraft

__all__ = [
    "Category",
    "ItemOrigin",
    "MedicalItem",
    "Report",
    "PhysicianSession",
    "ReportDraft",
    "make_custom_item",
    "format_report_date",
    "CUSTOM_ID_PREFIX",
    "NO_CATALOG_CODE",
    "NOT_APPLICABLE",
]
