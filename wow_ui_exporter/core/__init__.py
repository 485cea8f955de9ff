"""Core functionality for wow_ui_exporter.

This module provides shared functionality used across the entire package:
- Configuration management
- Type definitions and errors
- Version endpoint client
- File resolution and export batching
"""

from wow_ui_exporter.core.errors import (
    ExporterError,
    ExportToolFailure,
    IncompleteManifest,
    RegionNotFound,
    UpstreamUnavailable,
)
from wow_ui_exporter.core.types import (
    BuildDescriptor,
    FileLocation,
    Product,
    Region,
)

__all__ = [
    # Types
    "BuildDescriptor",
    "FileLocation",
    "Product",
    "Region",
    # Errors
    "ExporterError",
    "ExportToolFailure",
    "IncompleteManifest",
    "RegionNotFound",
    "UpstreamUnavailable",
]
