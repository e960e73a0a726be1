# =============================================================================
# tests/unit/test_search_service.py
# Unit Tests for catalog search and report filtering
# =============================================================================

import pytest


class TestSearchItems:
    """Test catalog lookup for the report form"""

    def test_matches_description_case_insensitive(self, catalog):
        from shortage_core.services import search_items

        results = search_items("jeringa", catalog.all())

        assert [i.code for i in results] == ["I001", "I002", "I003"]

    def test_matches_code(self, catalog):
        from shortage_core.services import search_items

        results = search_items("m001", catalog.all())

        assert [i.id for i in results] == ["med-001"]

    def test_results_are_capped(self, catalog):
        from shortage_core.services import SEARCH_RESULT_LIMIT, search_items

        results = search_items("a", catalog.all())

        assert len(results) == SEARCH_RESULT_LIMIT == 15

    def test_custom_limit(self, catalog):
        results = catalog.search("paracetamol", limit=1)

        assert len(results) == 1
        assert results[0].code == "M001"

    @pytest.mark.parametrize("term", ["", "   ", None])
    def test_blank_term_returns_nothing(self, catalog, term):
        from shortage_core.services import search_items

        assert search_items(term, catalog.all()) == []

    def test_accents_are_not_folded(self, catalog):
        assert catalog.search("cateter") == []
        assert len(catalog.search("catéter")) == 3


class TestFilterReports:
    """Test the history page filter"""

    def test_empty_term_keeps_all(self, sample_reports):
        from shortage_core.services import filter_reports

        assert filter_reports("", sample_reports) == sample_reports

    def test_matches_service(self, sample_reports):
        from shortage_core.services import filter_reports

        result = filter_reports("neonato", sample_reports)

        assert [r.physician_name for r in result] == ["Dr. Vega"]

    def test_matches_physician(self, sample_reports):
        from shortage_core.services import filter_reports

        result = filter_reports("LOPEZ", sample_reports)

        assert [r.service for r in result] == ["Pediatría"]

    def test_matches_item_description_or_code(self, sample_reports):
        from shortage_core.services import filter_reports

        assert len(filter_reports("ibuprofeno", sample_reports)) == 1
        assert len(filter_reports("i001", sample_reports)) == 1

    def test_no_match(self, sample_reports):
        from shortage_core.services import filter_reports

        assert filter_reports("oncología", sample_reports) == []
