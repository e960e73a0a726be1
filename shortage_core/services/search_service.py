# =============================================================================
# shortage_core/services/search_service.py
# Free-text search over the item catalog and persisted reports
# =============================================================================
"""
Lexical search helpers.

Matching is a case-folded substring test; accents are NOT folded, so
"pediatria" does not match "Pediatría".
"""

from __future__ import annotations
from typing import Iterable, List, Sequence

from shortage_core.models import MedicalItem, Report

# Maximum catalog matches returned to the form
SEARCH_RESULT_LIMIT = 15


def _matches_item(term: str, item: MedicalItem) -> bool:
    return term in item.description.casefold() or term in item.code.casefold()


def search_items(
    term: str,
    items: Iterable[MedicalItem],
    limit: int = SEARCH_RESULT_LIMIT,
) -> List[MedicalItem]:
    """
    Find catalog items whose description or code contains ``term``.

    An empty (or whitespace-only) term returns no results; browsing the whole
    catalog is not supported. At most ``limit`` items are returned, in
    catalog order.
    """
    clean = (term or "").strip().casefold()
    if not clean:
        return []

    results = []
    for item in items:
        if _matches_item(clean, item):
            results.append(item)
            if len(results) >= limit:
                break
    return results


def filter_reports(term: str, reports: Sequence[Report]) -> List[Report]:
    """
    Keep reports where ``term`` matches the service, the physician name, or
    the description/code of any item in the report.

    An empty term keeps every report.
    """
    needle = (term or "").casefold()
    if not needle:
        return list(reports)

    return [
        r for r in reports
        if needle in r.service.casefold()
        or needle in r.physician_name.casefold()
        or any(_matches_item(needle, i) for i in r.items)
    ]
