"""Static item catalog and hospital service list."""

from .constants import SERVICES
from .catalog import ItemCatalog

__all__ = ["ItemCatalog", "SERVICES"]
