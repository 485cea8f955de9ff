"""Export batches through the external retrieval tool.

The tool performs the actual CDN fetch. It is handed a listing file with
one ``id;name`` line per file plus the build and CDN config hashes, and
writes each file below the output directory at its listed name.
"""

from __future__ import annotations

import subprocess
import tempfile
from collections.abc import Iterable
from pathlib import Path
from typing import Protocol

import structlog

from wow_ui_exporter.core.config import ExportToolConfig
from wow_ui_exporter.core.errors import ExportToolFailure
from wow_ui_exporter.core.types import BuildDescriptor, FileLocation

logger = structlog.get_logger()


class ExportTool(Protocol):
    """Materializes the files named in a listing on disk."""

    def run(
        self,
        listing: Path,
        output_dir: Path,
        build_config: str,
        cdn_config: str,
    ) -> None:
        """Fetch every file in ``listing`` into ``output_dir``.

        Raises:
            ExportToolFailure: If the files could not be retrieved
        """
        ...


class TACTTool:
    """Runs TACTTool as a subprocess in list mode."""

    def __init__(self, config: ExportToolConfig | None = None):
        self.config = config or ExportToolConfig()

    def build_command(
        self,
        listing: Path,
        output_dir: Path,
        build_config: str,
        cdn_config: str,
    ) -> list[str]:
        return [
            self.config.executable,
            "--buildconfig", build_config,
            "--cdnconfig", cdn_config,
            "--mode", self.config.mode,
            "--inputvalue", str(listing),
            "--output", str(output_dir),
        ]

    def run(
        self,
        listing: Path,
        output_dir: Path,
        build_config: str,
        cdn_config: str,
    ) -> None:
        cmd = self.build_command(listing, output_dir, build_config, cdn_config)
        logger.info("export_tool_invoked", command=cmd)

        try:
            result = subprocess.run(cmd, check=False)
        except OSError as e:
            logger.error("export_tool_unavailable", executable=self.config.executable, error=str(e))
            raise ExportToolFailure(
                f"Cannot run {self.config.executable}: {e}",
                command=cmd,
            ) from e

        if result.returncode != 0:
            logger.error("export_tool_failed", returncode=result.returncode)
            raise ExportToolFailure(
                f"{self.config.executable} exited with status {result.returncode}",
                returncode=result.returncode,
                command=cmd,
            )


def build_export_batch(locations: Iterable[FileLocation]) -> list[FileLocation]:
    """Deduplicate by (id, name) and sort for a deterministic listing."""
    return sorted(set(locations), key=lambda location: location.sort_key)


class ExportBatcher:
    """Writes export listings and hands them to an ExportTool."""

    def __init__(self, tool: ExportTool | None = None):
        self.tool = tool if tool is not None else TACTTool()

    def export(
        self,
        locations: Iterable[FileLocation],
        build: BuildDescriptor,
        output_dir: Path,
    ) -> list[FileLocation]:
        """Export a batch of files.

        The listing is written to a temporary file that is removed on the
        way out whether or not the tool succeeded.

        Args:
            locations: Files to export, duplicates allowed
            build: Build whose config hashes are passed to the tool
            output_dir: Root directory the files are written below

        Returns:
            The batch that was exported

        Raises:
            ExportToolFailure: If the tool fails
        """
        batch = build_export_batch(locations)
        if not batch:
            logger.info("export_batch_empty")
            return batch

        output_dir.mkdir(parents=True, exist_ok=True)

        f = tempfile.NamedTemporaryFile(
            "w", suffix=".txt", prefix="export-", delete=False, encoding="utf-8"
        )
        listing = Path(f.name)

        try:
            with f:
                f.writelines(f"{location.to_listing_line()}\n" for location in batch)
            logger.debug("export_listing_written", path=str(listing), count=len(batch))
            self.tool.run(listing, output_dir, build.build_config, build.cdn_config)
        finally:
            try:
                listing.unlink(missing_ok=True)
            except OSError as e:
                logger.warning("export_listing_cleanup_failed", path=str(listing), error=str(e))

        logger.info("export_batch_complete", count=len(batch), output=str(output_dir))
        return batch
