"""WoW UI Source Exporter - export interface source files from the CDN.

This package resolves the Lua, XML and TOC files that make up the game
client's user interface for the current build of a product, maps each
file to its FileDataID through the community listfile and hands the
result to an external retrieval tool.

Key modules:
- core: Shared functionality (config, types, errors, pipeline)
- formats: Manifest file handling
- commands: CLI command implementations
- database: Listfile lookup
"""

__version__ = "0.1.0"
__author__ = "WoW UI Source Exporter Team"

# Re-export commonly used types
from wow_ui_exporter.core.types import (
    BuildDescriptor,
    FileLocation,
    Product,
    Region,
)

__all__ = [
    "__version__",
    "__author__",
    "BuildDescriptor",
    "FileLocation",
    "Product",
    "Region",
]
