# =============================================================================
# shortage_core/models/report.py
# Report and Medical Item Value Objects
# =============================================================================
"""
Immutable value objects for shortage reports.

- MedicalItem: one catalog (or free-text) medication/supply line
- Report: one shortage submission by a physician for a service
- PhysicianSession: last-used physician name, valid for a single day

Reports travel to the remote store as flat rows whose ``items`` column is a
JSON string; ``Report.to_row`` / ``Report.from_row`` handle that encoding.
"""

from __future__ import annotations
import json
import uuid
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, Iterable, Optional, Sequence, Tuple

from shortage_core.errors import ReportValidationError


CUSTOM_ID_PREFIX = "custom-"
NO_CATALOG_CODE = "CAPTURA LIBRE"
NOT_APPLICABLE = "N/A"


class Category(Enum):
    """Item category as stored on the wire."""
    MEDICAMENTO = "Medicamento"
    INSUMO = "Insumo"

    @classmethod
    def parse(cls, value: Any) -> Category:
        if isinstance(value, Category):
            return value
        for member in cls:
            if str(value).strip().lower() == member.value.lower():
                return member
        raise ReportValidationError(
            f"Unknown item category: {value!r}",
            field="category",
            value=str(value),
        )


class ItemOrigin(Enum):
    """Where an item came from."""
    CATALOG = "catalog"
    FREE_TEXT = "free_text"


@dataclass(frozen=True)
class MedicalItem:
    """A single medication or supply line."""
    id: str
    code: str
    description: str
    presentation: str
    category: Category
    origin: ItemOrigin = ItemOrigin.CATALOG

    @property
    def is_custom(self) -> bool:
        return self.origin is ItemOrigin.FREE_TEXT

    def display_tag(self, admin: bool = False) -> str:
        """Annotation shown next to free-text items ("" for catalog items)."""
        if not self.is_custom:
            return ""
        return "[LIBRE]" if admin else "[MANUAL]"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "code": self.code,
            "description": self.description,
            "presentation": self.presentation,
            "category": self.category.value,
            "origin": self.origin.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> MedicalItem:
        item_id = str(data.get("id") or "")
        if not item_id:
            raise ReportValidationError("Item id is required", field="id")

        origin = data.get("origin")
        if origin:
            origin = ItemOrigin(origin)
        else:
            # Rows written before the explicit origin field carried it in the id
            origin = ItemOrigin.FREE_TEXT if item_id.startswith(CUSTOM_ID_PREFIX) else ItemOrigin.CATALOG

        return cls(
            id=item_id,
            code=str(data.get("code") or ""),
            description=str(data.get("description") or ""),
            presentation=str(data.get("presentation") or ""),
            category=Category.parse(data.get("category")),
            origin=origin,
        )


def make_custom_item(description: str, category: Category = Category.MEDICAMENTO) -> MedicalItem:
    """
    Build a free-text item that is not in the catalog.

    Args:
        description: What is missing; stored upper-cased
        category: Medicamento or Insumo

    Raises:
        ReportValidationError: if the description is empty or whitespace
    """
    if not description or not description.strip():
        raise ReportValidationError("La descripción del artículo es obligatoria", field="description")

    return MedicalItem(
        id=f"{CUSTOM_ID_PREFIX}{uuid.uuid4().hex[:12]}",
        code=NO_CATALOG_CODE,
        description=description.strip().upper(),
        presentation=NOT_APPLICABLE,
        category=Category.parse(category),
        origin=ItemOrigin.FREE_TEXT,
    )


def format_report_date(moment: datetime) -> str:
    """Short es-MX date as shown to users, e.g. 5/3/2026."""
    return f"{moment.day}/{moment.month}/{moment.year}"


@dataclass(frozen=True)
class Report:
    """
    One shortage submission. Never edited; only created and deleted.

    Construction enforces the basic invariants (id, physician, service and at
    least one item). Membership of ``service`` in the known service list is
    checked by ``Report.create`` so that historical rows whose service was
    later renamed can still be read back.
    """
    id: str
    physician_name: str
    service: str
    date: str
    timestamp: int
    items: Tuple[MedicalItem, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, "items", tuple(self.items))

        if not self.id:
            raise ReportValidationError("Report id is required", field="id")
        if not self.physician_name or not self.physician_name.strip():
            raise ReportValidationError("El nombre del médico es obligatorio", field="physician_name")
        if not self.service or not self.service.strip():
            raise ReportValidationError("El servicio es obligatorio", field="service")
        if not self.items:
            raise ReportValidationError("El reporte debe incluir al menos un artículo", field="items")

    @classmethod
    def create(
        cls,
        physician_name: str,
        service: str,
        items: Iterable[MedicalItem],
        now: Optional[datetime] = None,
        services: Optional[Sequence[str]] = None,
    ) -> Report:
        """
        Stamp a new report with a fresh id, display date and timestamp.

        Args:
            physician_name: Submitter name (stripped)
            service: Hospital service; must be in ``services``
            items: Selected items (snapshotted)
            now: Creation time (defaults to datetime.now())
            services: Known service list (defaults to catalog SERVICES)
        """
        from shortage_core.catalog.constants import SERVICES

        known = services if services is not None else SERVICES
        if not service or not service.strip():
            raise ReportValidationError("El servicio es obligatorio", field="service")
        if service not in known:
            raise ReportValidationError("Servicio desconocido", field="service", value=service)

        now = now or datetime.now()
        return cls(
            id=uuid.uuid4().hex,
            physician_name=(physician_name or "").strip(),
            service=service,
            date=format_report_date(now),
            timestamp=int(now.timestamp() * 1000),
            items=tuple(items),
        )

    @property
    def item_count(self) -> int:
        return len(self.items)

    # =========================================================================
    # SERIALIZATION
    # =========================================================================

    def to_dict(self) -> Dict[str, Any]:
        """Nested representation (items as a list of dicts)."""
        return {
            "id": self.id,
            "physician_name": self.physician_name,
            "service": self.service,
            "date": self.date,
            "timestamp": self.timestamp,
            "items": [item.to_dict() for item in self.items],
        }

    def to_row(self) -> Dict[str, Any]:
        """Remote store row: items encoded as a JSON string."""
        row = self.to_dict()
        row["items"] = json.dumps(row["items"], ensure_ascii=False)
        return row

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> Report:
        """
        Decode a remote row or a to_dict() payload.

        Raises:
            ReportValidationError: for any row that cannot be read back
        """
        if not isinstance(row, dict):
            raise ReportValidationError("Report row is not an object", value=type(row).__name__)

        raw_items = row.get("items") or []
        if isinstance(raw_items, str):
            try:
                raw_items = json.loads(raw_items)
            except json.JSONDecodeError as e:
                raise ReportValidationError(
                    f"Malformed items payload: {e}",
                    field="items",
                ) from e

        if not isinstance(raw_items, list) or not all(isinstance(i, dict) for i in raw_items):
            raise ReportValidationError("Items must be a list of objects", field="items")

        try:
            return cls(
                id=str(row.get("id") or ""),
                physician_name=row.get("physician_name") or "",
                service=row.get("service") or "",
                date=row.get("date") or "",
                timestamp=int(row.get("timestamp") or 0),
                items=tuple(MedicalItem.from_dict(i) for i in raw_items),
            )
        except (TypeError, ValueError, AttributeError) as e:
            raise ReportValidationError(f"Malformed report row: {e}", value=row.get("id")) from e


@dataclass(frozen=True)
class PhysicianSession:
    """Last-used physician name and the ISO date it was written."""
    name: str
    date: str

    def is_valid_on(self, day: date) -> bool:
        return self.date == day.isoformat()

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.name, "date": self.date}
