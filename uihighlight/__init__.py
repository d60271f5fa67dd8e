"""Highlight leaf UI elements from layout dumps on their screenshots."""

__version__ = "1.0.0"
