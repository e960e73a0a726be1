# =============================================================================
# shortage_core/catalog/constants.py
# Reference data: hospital services and the bundled catalog file
# =============================================================================

from pathlib import Path

# Services allowed on a report (alphabetical, as shown in the form select)
SERVICES = [
    "Cirugía Pediátrica",
    "Consulta Externa",
    "Escolares",
    "Hemato-Oncología",
    "Infectología",
    "Lactantes",
    "Neonatología",
    "Pediatría",
    "Preescolares",
    "Terapia Intensiva Neonatal (UCIN)",
    "Terapia Intensiva Pediátrica (UTIP)",
    "Urgencias Pediátricas",
]

CATALOG_PATH = Path(__file__).parent / "data" / "catalog.csv"
CATALOG_COLUMNS = ["id", "code", "description", "presentation", "category"]
