# =============================================================================
# tests/unit/test_models.py
# Unit Tests for report value objects and the item draft
# =============================================================================

import json
import pytest
from datetime import date, datetime


class TestCategory:
    """Test category parsing"""

    def test_parse_is_case_insensitive(self):
        from shortage_core.models import Category

        assert Category.parse("insumo") is Category.INSUMO
        assert Category.parse(" Medicamento ") is Category.MEDICAMENTO

    def test_parse_unknown_raises(self):
        from shortage_core.errors import ReportValidationError
        from shortage_core.models import Category

        with pytest.raises(ReportValidationError) as exc:
            Category.parse("Equipo")
        assert exc.value.code == "VALIDATION_001"


class TestCustomItem:
    """Test free-text item creation"""

    def test_custom_item_fields(self):
        from shortage_core.models import Category, ItemOrigin, make_custom_item

        item = make_custom_item("  gasas estériles ", Category.INSUMO)

        assert item.id.startswith("custom-")
        assert item.code == "CAPTURA LIBRE"
        assert item.presentation == "N/A"
        assert item.description == "GASAS ESTÉRILES"
        assert item.category is Category.INSUMO
        assert item.origin is ItemOrigin.FREE_TEXT

    def test_custom_items_get_distinct_ids(self):
        from shortage_core.models import make_custom_item

        assert make_custom_item("x").id != make_custom_item("x").id

    @pytest.mark.parametrize("description", ["", "   ", None])
    def test_blank_description_rejected(self, description):
        from shortage_core.errors import ReportValidationError
        from shortage_core.models import make_custom_item

        with pytest.raises(ReportValidationError):
            make_custom_item(description)

    def test_display_tags(self, paracetamol):
        from shortage_core.models import make_custom_item

        custom = make_custom_item("vendas")
        assert custom.display_tag() == "[MANUAL]"
        assert custom.display_tag(admin=True) == "[LIBRE]"
        assert paracetamol.display_tag() == ""


class TestReportCreate:
    """Test report construction and validation"""

    def test_create_stamps_date_and_timestamp(self, paracetamol, fixed_now):
        from shortage_core.models import Report

        report = Report.create(" Dra. Lopez ", "Pediatría", [paracetamol], now=fixed_now)

        assert report.physician_name == "Dra. Lopez"
        assert report.date == "5/3/2026"
        assert report.timestamp == int(fixed_now.timestamp() * 1000)
        assert report.items == (paracetamol,)
        assert report.id

    def test_unknown_service_rejected(self, paracetamol):
        from shortage_core.errors import ReportValidationError
        from shortage_core.models import Report

        with pytest.raises(ReportValidationError) as exc:
            Report.create("Dra. Lopez", "Cardiología", [paracetamol])
        assert exc.value.details["field"] == "service"

    @pytest.mark.parametrize("service", ["", "   "])
    def test_blank_service_reports_missing_service(self, paracetamol, service):
        from shortage_core.errors import ReportValidationError
        from shortage_core.models import Report

        with pytest.raises(ReportValidationError) as exc:
            Report.create("Dra. Lopez", service, [paracetamol])
        assert exc.value.message == "El servicio es obligatorio"

    def test_empty_physician_rejected(self, paracetamol):
        from shortage_core.errors import ReportValidationError
        from shortage_core.models import Report

        with pytest.raises(ReportValidationError):
            Report.create("   ", "Pediatría", [paracetamol])

    def test_no_items_rejected(self):
        from shortage_core.errors import ReportValidationError
        from shortage_core.models import Report

        with pytest.raises(ReportValidationError):
            Report.create("Dra. Lopez", "Pediatría", [])

    def test_reports_are_immutable(self, make_report):
        report = make_report()
        with pytest.raises(AttributeError):
            report.service = "Neonatología"


class TestReportSerialization:
    """Test remote row encoding"""

    def test_row_items_are_json_string(self, make_report):
        row = make_report(codes=("M001", "I001")).to_row()

        assert isinstance(row["items"], str)
        items = json.loads(row["items"])
        assert [i["code"] for i in items] == ["M001", "I001"]
        assert "SOLUCIÓN" in row["items"]

    def test_from_row_accepts_list_items(self, make_report):
        from shortage_core.models import Report

        report = make_report()
        assert Report.from_row(report.to_dict()) == report

    def test_legacy_custom_item_without_origin(self):
        from shortage_core.models import ItemOrigin, MedicalItem

        item = MedicalItem.from_dict({
            "id": "custom-1700000000000",
            "code": "CAPTURA LIBRE",
            "description": "SONDA",
            "presentation": "N/A",
            "category": "Insumo",
        })
        assert item.origin is ItemOrigin.FREE_TEXT

    def test_malformed_items_payload(self):
        from shortage_core.errors import ReportValidationError
        from shortage_core.models import Report

        with pytest.raises(ReportValidationError):
            Report.from_row({
                "id": "r1",
                "physician_name": "Dr. Vega",
                "service": "Pediatría",
                "date": "1/1/2026",
                "timestamp": 1,
                "items": "{not json",
            })

    @pytest.mark.parametrize("row", [
        {"items": "null"},
        {"items": ["M001"]},
        {"timestamp": "5/3/2026"},
        {"physician_name": 42},
    ])
    def test_unreadable_rows_raise_validation_error(self, make_report, row):
        from shortage_core.errors import ReportValidationError
        from shortage_core.models import Report

        with pytest.raises(ReportValidationError):
            Report.from_row(dict(make_report().to_row(), **row))


class TestPhysicianSession:

    def test_valid_only_on_same_day(self):
        from shortage_core.models import PhysicianSession

        session = PhysicianSession(name="Dra. Lopez", date="2026-03-05")
        assert session.is_valid_on(date(2026, 3, 5))
        assert not session.is_valid_on(date(2026, 3, 6))


class TestReportDraft:
    """Test the in-progress selection"""

    def test_toggle_adds_then_removes(self, paracetamol):
        from shortage_core.models import ReportDraft

        draft = ReportDraft()
        assert draft.toggle(paracetamol) is True
        assert paracetamol in draft
        assert draft.toggle(paracetamol) is False
        assert len(draft) == 0

    def test_add_ignores_duplicates(self, paracetamol):
        from shortage_core.models import ReportDraft

        draft = ReportDraft()
        draft.add(paracetamol)
        assert draft.add(paracetamol) is False
        assert len(draft) == 1

    def test_preserves_selection_order(self, catalog):
        from shortage_core.models import ReportDraft

        draft = ReportDraft()
        for code in ("M003", "I001", "M001"):
            draft.add(catalog.by_code(code))
        assert [i.code for i in draft.items] == ["M003", "I001", "M001"]

    def test_build_snapshots_items(self, paracetamol, fixed_now):
        from shortage_core.models import ReportDraft

        draft = ReportDraft([paracetamol])
        report = draft.build("Dra. Lopez", "Pediatría", now=fixed_now)
        draft.clear()

        assert report.item_count == 1
        assert len(draft) == 0

    def test_build_empty_draft_fails(self):
        from shortage_core.errors import ReportValidationError
        from shortage_core.models import ReportDraft

        with pytest.raises(ReportValidationError):
            ReportDraft().build("Dra. Lopez", "Pediatría", now=datetime(2026, 1, 1))
