"""FileDataID lookup built from the wowdev/wow-listfile snapshot."""

from __future__ import annotations

from collections.abc import Iterator, Mapping

import httpx
import structlog

from wow_ui_exporter import __version__
from wow_ui_exporter.core.config import ListfileConfig
from wow_ui_exporter.core.errors import UpstreamUnavailable

logger = structlog.get_logger()


class ListfileIndex(Mapping[str, int]):
    """Read-only mapping from listfile path to FileDataID.

    Keys are stored exactly as the snapshot spells them. The snapshot is
    lowercase with forward slashes, so callers normalize their own names
    before looking them up.
    """

    def __init__(self, entries: Mapping[str, int] | None = None) -> None:
        self._entries: dict[str, int] = dict(entries or {})

    def __getitem__(self, key: str) -> int:
        return self._entries[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"ListfileIndex({len(self._entries)} entries)"

    @classmethod
    def from_text(cls, text: str, prefix: str = "interface/") -> ListfileIndex:
        """Parse ``id;name`` rows, keeping names under ``prefix``.

        Args:
            text: Listfile snapshot contents
            prefix: Case-sensitive path prefix to retain

        Returns:
            Index of the retained rows; later rows win on duplicate names
        """
        entries: dict[str, int] = {}
        skipped = 0

        for line in text.splitlines():
            fdid_text, sep, path = line.partition(";")
            path = path.strip()
            if not sep or not path.startswith(prefix):
                continue

            try:
                fdid = int(fdid_text)
            except ValueError:
                skipped += 1
                logger.debug("skip_invalid_listfile_entry", line=line)
                continue

            entries[path] = fdid

        logger.info("listfile_indexed", count=len(entries), prefix=prefix, skipped=skipped)
        return cls(entries)

    @classmethod
    def build(
        cls,
        snapshot_url: str | None = None,
        config: ListfileConfig | None = None,
    ) -> ListfileIndex:
        """Fetch the listfile snapshot and index it.

        Args:
            snapshot_url: Snapshot URL, taken from config if None
            config: Listfile configuration

        Returns:
            Index filtered to the configured prefix

        Raises:
            UpstreamUnavailable: On fetch errors
        """
        config = config or ListfileConfig()
        url = snapshot_url or config.url

        logger.info("fetching_listfile", url=url)
        try:
            with httpx.Client(
                timeout=config.timeout,
                follow_redirects=True,
                headers={"User-Agent": f"wow-ui-exporter/{__version__}"}
            ) as client:
                response = client.get(url)
                response.raise_for_status()
                text = response.text
        except httpx.HTTPError as e:
            logger.error("failed_to_fetch_listfile", url=url, error=str(e))
            raise UpstreamUnavailable(f"Failed to fetch listfile {url}: {e}", url=url) from e

        return cls.from_text(text, prefix=config.prefix)
