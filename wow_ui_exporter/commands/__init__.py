"""CLI command implementations for wow_ui_exporter.

- export: Export interface source files for the current build
"""

from wow_ui_exporter.commands.export import export

__all__ = ["export"]
