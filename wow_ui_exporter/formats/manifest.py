"""Interface manifest files.

Each build ships three plain text manifests listing the interface source
files, one path per line:

- ui-code-list.txt: Lua and XML code files
- ui-toc-list.txt: addon TOC files
- ui-gen-addon-list.txt: generated addon files

The manifests are exported like any other file, so their FileDataIDs are
fixed here instead of being looked up.
"""

from __future__ import annotations

from pathlib import Path

import structlog

from wow_ui_exporter.core.errors import IncompleteManifest
from wow_ui_exporter.core.export import ExportBatcher
from wow_ui_exporter.core.types import BuildDescriptor, FileLocation

logger = structlog.get_logger()

CODE_LIST = FileLocation(id=6067012, name="Interface/ui-code-list.txt")
TOC_LIST = FileLocation(id=6067013, name="Interface/ui-toc-list.txt")
GEN_ADDON_LIST = FileLocation(id=6076661, name="Interface/ui-gen-addon-list.txt")

MANIFEST_SET: tuple[FileLocation, ...] = (CODE_LIST, TOC_LIST, GEN_ADDON_LIST)


def parse_manifest_lines(text: str) -> list[str]:
    """Return the non-empty lines of a manifest, trailing whitespace stripped."""
    return [line.rstrip() for line in text.splitlines() if line.strip()]


def manifest_paths(
    output_dir: Path,
    manifests: tuple[FileLocation, ...] = MANIFEST_SET,
) -> list[Path]:
    """Local paths the manifests are exported to."""
    return [output_dir / manifest.name for manifest in manifests]


class ManifestReader:
    """Exports the manifests and collects the filenames they list."""

    def __init__(
        self,
        batcher: ExportBatcher,
        manifests: tuple[FileLocation, ...] = MANIFEST_SET,
    ):
        self.batcher = batcher
        self.manifests = manifests

    def export(self, build: BuildDescriptor, output_dir: Path) -> None:
        """Export the manifest files for a build."""
        self.batcher.export(self.manifests, build, output_dir)

    def collect(self, output_dir: Path) -> list[str]:
        """Read exported manifests into a sorted, duplicate-free name list.

        Raises:
            IncompleteManifest: If any manifest is missing or not valid UTF-8
        """
        names: set[str] = set()

        for path in manifest_paths(output_dir, self.manifests):
            if not path.is_file():
                logger.error("manifest_missing", path=str(path))
                raise IncompleteManifest(f"Manifest was not exported: {path}", path=str(path))

            try:
                text = path.read_text(encoding="utf-8-sig")
            except UnicodeDecodeError as e:
                logger.error("manifest_unreadable", path=str(path), error=str(e))
                raise IncompleteManifest(f"Manifest is not valid UTF-8: {path}", path=str(path)) from e

            lines = parse_manifest_lines(text)
            logger.debug("manifest_read", manifest=path.name, count=len(lines))
            names.update(lines)

        candidates = sorted(names)
        logger.info("manifests_read", candidates=len(candidates))
        return candidates

    def read(self, build: BuildDescriptor, output_dir: Path) -> list[str]:
        """Export the manifests, then read the filenames they list."""
        self.export(build, output_dir)
        return self.collect(output_dir)
