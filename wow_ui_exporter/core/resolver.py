"""Reconciles manifest filenames against the listfile."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

import structlog

from wow_ui_exporter.core.types import FileLocation

logger = structlog.get_logger()


def normalize_name(name: str) -> str:
    """Lookup key for a filename: lowercase with forward slashes."""
    return name.lower().replace("\\", "/")


def output_name(name: str) -> str:
    """Output path for a filename: original casing with forward slashes."""
    return name.replace("\\", "/")


class FileResolver:
    """Maps candidate filenames to FileLocations.

    Names missing from the index are dropped. The listfile often lags the
    current build, so this is expected and is only logged at debug level.
    """

    def __init__(self) -> None:
        self.unresolved: list[str] = []

    def resolve(
        self,
        candidates: Iterable[str],
        index: Mapping[str, int],
    ) -> list[FileLocation]:
        """Resolve candidate names in the order given.

        When several candidates share a FileDataID only the first one is
        kept, so the output never holds two spellings of the same file.

        Args:
            candidates: Filenames read from the manifests
            index: Normalized name to FileDataID

        Returns:
            Resolved locations
        """
        self.unresolved = []
        locations: list[FileLocation] = []
        seen: set[int] = set()

        for name in candidates:
            fdid = index.get(normalize_name(name))
            if fdid is None:
                self.unresolved.append(name)
                logger.debug("candidate_unresolved", name=name)
                continue

            if fdid in seen:
                logger.debug("candidate_duplicate", name=name, fdid=fdid)
                continue

            seen.add(fdid)
            locations.append(FileLocation(id=fdid, name=output_name(name)))

        logger.info(
            "candidates_resolved",
            resolved=len(locations),
            unresolved=len(self.unresolved),
        )
        return locations
