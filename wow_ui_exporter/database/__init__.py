"""Listfile data management.

This module provides the FileDataID lookup built from the
wowdev/wow-listfile community snapshot.
"""

from wow_ui_exporter.database.listfile import ListfileIndex

__all__ = ["ListfileIndex"]
