# =============================================================================
# tests/unit/test_fallback_store.py
# Unit Tests for the local report queue
# =============================================================================

import pytest
from datetime import datetime


class TestLocalFallbackStore:
    """Test the most-recent-first queue"""

    def test_starts_empty(self, fallback):
        assert fallback.count() == 0
        assert fallback.reports() == []

    def test_newest_report_is_first(self, fallback, sample_reports):
        for report in sample_reports:
            fallback.enqueue(report)

        queued = fallback.reports()

        assert [r.id for r in queued] == [r.id for r in reversed(sample_reports)]
        assert fallback.count() == 3

    def test_oldest_returns_delivery_order(self, fallback, sample_reports):
        for report in sample_reports:
            fallback.enqueue(report)

        assert [r.id for r in fallback.oldest(2)] == [r.id for r in sample_reports[:2]]

    def test_round_trip_preserves_report(self, fallback, make_report):
        report = make_report(codes=("M001", "I014"))
        fallback.enqueue(report)

        assert fallback.get(report.id) == report

    def test_reenqueue_moves_to_head(self, fallback, sample_reports):
        for report in sample_reports:
            fallback.enqueue(report)

        fallback.enqueue(sample_reports[0])

        assert fallback.reports()[0].id == sample_reports[0].id
        assert fallback.count() == 3

    def test_remove_and_clear(self, fallback, sample_reports):
        for report in sample_reports:
            fallback.enqueue(report)

        assert fallback.remove(sample_reports[1].id) is True
        assert fallback.remove("missing") is False
        assert fallback.count() == 2
        assert fallback.clear() == 2
        assert fallback.count() == 0

    def test_record_failure_tracks_attempts(self, fallback, make_report):
        report = make_report()
        fallback.enqueue(report)

        fallback.record_failure(report.id, "timeout")
        fallback.record_failure(report.id, "timeout again")

        entry = fallback.entries()[0]
        assert entry["attempts"] == 2
        assert entry["error_message"] == "timeout again"

    def test_unreadable_entry_is_skipped(self, fallback, local_db, make_report):
        good = make_report()
        fallback.enqueue(good)
        local_db.queue_push(fallback.namespace, "broken", {"id": "broken", "items": []})

        assert [r.id for r in fallback.reports()] == [good.id]

    def test_corrupt_payloads_are_skipped(self, fallback, local_db, make_report):
        good = make_report()
        fallback.enqueue(good)
        row = good.to_dict()
        local_db.queue_push(fallback.namespace, "null-items", dict(row, id="null-items", items=None))
        local_db.queue_push(fallback.namespace, "str-items", dict(row, id="str-items", items=["X"]))
        local_db.queue_push(fallback.namespace, "bad-ts", dict(row, id="bad-ts", timestamp="5/3/2026"))
        local_db.queue_push(fallback.namespace, "not-a-dict", ["oops"])

        assert [r.id for r in fallback.reports()] == [good.id]
        assert [r.id for r in fallback.oldest(10)] == [good.id]

    def test_survives_reopen(self, tmp_path, make_report):
        from shortage_core.offline import LocalFallbackStore
        from shortage_core.offline.local_database import LocalDatabase

        path = tmp_path / "queue.db"
        report = make_report()

        first = LocalDatabase(path)
        LocalFallbackStore(first).enqueue(report)
        first.close()

        second = LocalDatabase(path)
        assert LocalFallbackStore(second).get(report.id) == report
        second.close()


class TestLocalDatabase:
    """Test settings storage"""

    def test_settings_round_trip_json(self, local_db):
        local_db.set_setting("k", {"name": "Dra. López"})

        assert local_db.get_setting("k") == {"name": "Dra. López"}
        assert local_db.get_setting("missing", "x") == "x"

    def test_namespaces_are_isolated(self, local_db):
        local_db.queue_push("a", "1", {"v": 1})
        local_db.queue_push("b", "1", {"v": 2})

        assert local_db.queue_count("a") == 1
        assert local_db.queue_items("b")[0]["data"] == {"v": 2}
