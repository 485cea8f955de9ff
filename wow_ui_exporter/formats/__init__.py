"""Manifest formats for interface source exports."""

from wow_ui_exporter.formats.manifest import (
    MANIFEST_SET,
    ManifestReader,
    parse_manifest_lines,
)

__all__ = ["MANIFEST_SET", "ManifestReader", "parse_manifest_lines"]
