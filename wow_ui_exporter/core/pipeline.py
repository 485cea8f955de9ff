"""End-to-end export run.

A run moves through the states below in order. The bracketed states only
happen when requested. Any failure moves the run to FAILED and the error
propagates to the caller; there is no resume.

    START -> RESOLVE_BUILD -> EXPORT_MANIFESTS -> READ_MANIFESTS
          -> BUILD_INDEX -> RESOLVE_FILES -> EXPORT_FILES
          -> [WRITE_VERSION_METADATA] -> [CLEANUP_MANIFESTS] -> DONE
"""

from __future__ import annotations

from collections.abc import Callable
from enum import StrEnum
from pathlib import Path

import structlog
from pydantic import BaseModel, ConfigDict, Field

from wow_ui_exporter.core.config import AppConfig
from wow_ui_exporter.core.export import ExportBatcher, ExportTool, TACTTool
from wow_ui_exporter.core.resolver import FileResolver
from wow_ui_exporter.core.tact import BuildResolver
from wow_ui_exporter.core.types import BuildDescriptor, Product, Region
from wow_ui_exporter.database.listfile import ListfileIndex
from wow_ui_exporter.formats.manifest import ManifestReader, manifest_paths

logger = structlog.get_logger()

VERSION_FILE = "version.txt"


class RunState(StrEnum):
    """States of an export run."""
    START = "start"
    RESOLVE_BUILD = "resolve_build"
    EXPORT_MANIFESTS = "export_manifests"
    READ_MANIFESTS = "read_manifests"
    BUILD_INDEX = "build_index"
    RESOLVE_FILES = "resolve_files"
    EXPORT_FILES = "export_files"
    WRITE_VERSION_METADATA = "write_version_metadata"
    CLEANUP_MANIFESTS = "cleanup_manifests"
    DONE = "done"
    FAILED = "failed"


class ExportResult(BaseModel):
    """Summary of a completed run."""
    build: BuildDescriptor
    output_dir: Path
    candidates: int = Field(..., description="Distinct names listed by the manifests")
    exported: int = Field(..., description="Files handed to the export tool")
    unresolved: list[str] = Field(default_factory=list, description="Names missing from the listfile")

    model_config = ConfigDict(frozen=True)


class ExportPipeline:
    """Runs the build -> manifests -> listfile -> export sequence."""

    def __init__(
        self,
        config: AppConfig | None = None,
        tool: ExportTool | None = None,
        build_resolver: BuildResolver | None = None,
        index_builder: Callable[[], ListfileIndex] | None = None,
        listfile_url: str | None = None,
    ):
        self.config = config or AppConfig()
        self.batcher = ExportBatcher(tool if tool is not None else TACTTool(self.config.export_tool))
        self.build_resolver = build_resolver or BuildResolver(self.config.tact)
        self.index_builder = index_builder or (
            lambda: ListfileIndex.build(listfile_url, config=self.config.listfile)
        )
        self.manifest_reader = ManifestReader(self.batcher)
        self.state = RunState.START

    def _enter(self, state: RunState) -> None:
        self.state = state
        logger.debug("pipeline_state", state=state.value)

    def run(
        self,
        product: Product,
        output_dir: Path,
        region: Region | str = Region.US,
        keep_manifests: bool = False,
        export_version: bool = False,
    ) -> ExportResult:
        """Export the interface source files for the current build.

        Args:
            product: Product code
            output_dir: Directory files are written below
            region: CDN region to query
            keep_manifests: Leave the manifest text files in place
            export_version: Write the version string to ``version.txt``

        Returns:
            Summary of the run
        """
        self.state = RunState.START
        try:
            return self._run(product, output_dir, region, keep_manifests, export_version)
        except Exception:
            logger.error("pipeline_failed", state=self.state.value)
            self.state = RunState.FAILED
            raise

    def _run(
        self,
        product: Product,
        output_dir: Path,
        region: Region | str,
        keep_manifests: bool,
        export_version: bool,
    ) -> ExportResult:
        self._enter(RunState.RESOLVE_BUILD)
        build = self.build_resolver.resolve(product, region)

        self._enter(RunState.EXPORT_MANIFESTS)
        self.manifest_reader.export(build, output_dir)

        self._enter(RunState.READ_MANIFESTS)
        candidates = self.manifest_reader.collect(output_dir)

        self._enter(RunState.BUILD_INDEX)
        index = self.index_builder()

        self._enter(RunState.RESOLVE_FILES)
        resolver = FileResolver()
        locations = resolver.resolve(candidates, index)

        self._enter(RunState.EXPORT_FILES)
        batch = self.batcher.export(locations, build, output_dir)

        if export_version:
            self._enter(RunState.WRITE_VERSION_METADATA)
            write_version_file(output_dir, build)

        if not keep_manifests:
            self._enter(RunState.CLEANUP_MANIFESTS)
            self.cleanup_manifests(output_dir)

        self._enter(RunState.DONE)
        logger.info(
            "export_complete",
            product=product.value,
            version=build.version_name,
            exported=len(batch),
            unresolved=len(resolver.unresolved),
        )
        return ExportResult(
            build=build,
            output_dir=output_dir,
            candidates=len(candidates),
            exported=len(batch),
            unresolved=resolver.unresolved,
        )

    def cleanup_manifests(self, output_dir: Path) -> None:
        """Remove the exported manifest text files."""
        for path in manifest_paths(output_dir, self.manifest_reader.manifests):
            path.unlink(missing_ok=True)
            logger.debug("manifest_removed", path=str(path))


def write_version_file(output_dir: Path, build: BuildDescriptor) -> Path:
    """Write the build's version string to ``version.txt``."""
    path = output_dir / VERSION_FILE
    path.write_text(build.version_name, encoding="utf-8")
    logger.info("version_written", path=str(path), version=build.version_name)
    return path
