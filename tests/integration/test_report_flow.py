# =============================================================================
# tests/integration/test_report_flow.py
# End-to-end report flow: form draft -> gateway -> history -> export
# =============================================================================

import io
import pytest
import pandas as pd
from datetime import date, datetime


@pytest.fixture
def memory(local_db):
    from shortage_core.offline import PhysicianSessionMemory
    return PhysicianSessionMemory(local_db, today=lambda: date(2026, 3, 5))


class TestReportFlowOnline:
    """Supabase reachable"""

    def test_submit_list_filter_export(self, catalog, gateway, memory, fallback):
        from shortage_core.models import ReportDraft
        from shortage_core.services import SubmitOutcome, filter_reports, to_excel_bytes

        # Physician picks PARACETAMOL from the search results
        draft = ReportDraft()
        draft.toggle(catalog.search("paracetamol")[0])
        report = draft.build("Dra. Lopez", "Pediatría", now=datetime(2026, 3, 5, 10, 15))

        assert gateway.submit(report) is SubmitOutcome.REMOTE
        memory.remember("Dra. Lopez")

        history = gateway.list()
        assert len(history) == 1
        assert history[0].items[0].code == "M001"
        assert fallback.count() == 0
        assert memory.recall() == "Dra. Lopez"

        visible = filter_reports("pediatr", history)
        sheet = pd.read_excel(io.BytesIO(to_excel_bytes(visible)), sheet_name="HISTORICO")
        assert sheet.iloc[0].to_dict() == {
            "FECHA": "5/3/2026",
            "SERVICIO": "Pediatría",
            "MÉDICO": "Dra. Lopez",
            "CLAVE": "M001",
            "DESCRIPCIÓN": "PARACETAMOL",
            "PRESENTACIÓN": "SOLUCIÓN ORAL 100 MG/ML FRASCO GOTERO 15 ML",
            "CATEGORÍA": "Medicamento",
        }

    def test_delete_from_history(self, gateway, sample_reports):
        for report in sample_reports:
            gateway.submit(report)

        target = gateway.list()[0]

        assert gateway.remove(target.id) is True
        assert target.id not in [r.id for r in gateway.list()]


class TestReportFlowOffline:
    """Supabase unreachable, then restored"""

    def test_offline_submit_then_sync(self, catalog, gateway, fake_store, fallback):
        from shortage_core.models import Category, ReportDraft, make_custom_item
        from shortage_core.offline import SyncEngine
        from shortage_core.services import SubmitOutcome

        fake_store.fail = True

        draft = ReportDraft()
        draft.add(catalog.by_code("M001"))
        draft.add(make_custom_item("sonda nasogástrica 6 fr", Category.INSUMO))
        report = draft.build("Dra. Lopez", "Pediatría")

        assert gateway.submit(report) is SubmitOutcome.LOCAL_FALLBACK
        assert fallback.reports()[0] == report
        assert gateway.list() == []

        fake_store.fail = False
        assert SyncEngine(fake_store, fallback).sync_now() is True

        history = gateway.list()
        assert [r.id for r in history] == [report.id]
        custom = history[0].items[1]
        assert custom.is_custom
        assert custom.display_tag(admin=True) == "[LIBRE]"
        assert gateway.pending_count == 0

    def test_newest_offline_report_first(self, gateway, fake_store, fallback, make_report):
        fake_store.fail = True
        first = make_report("Dr. Ruiz", "Lactantes")
        second = make_report("Dr. Vega", "Escolares")

        gateway.submit(first)
        gateway.submit(second)

        assert [r.id for r in gateway.pending()] == [second.id, first.id]
