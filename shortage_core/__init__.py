"""Shortage Log core: report capture, local fallback and history export."""

__version__ = "1.0.0"
