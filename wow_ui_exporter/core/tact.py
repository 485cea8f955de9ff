"""TACT version endpoint client and build resolution."""

from __future__ import annotations

import httpx
import structlog

from wow_ui_exporter.core.config import TACTConfig
from wow_ui_exporter.core.errors import RegionNotFound, UpstreamUnavailable
from wow_ui_exporter.core.types import BuildDescriptor, Product, Region

logger = structlog.get_logger()


class BPSVParser:
    """Parser for Blizzard Pipe-Separated Values format."""

    def parse(self, manifest: str) -> list[dict[str, str]]:
        """Parse BPSV manifest into list of dictionaries.

        Args:
            manifest: BPSV manifest text

        Returns:
            List of parsed entries
        """
        # "## seqn = N" lines carry the sequence number, not data
        lines = [
            line.strip() for line in manifest.splitlines()
            if line.strip() and not line.strip().startswith("##")
        ]
        if not lines:
            return []

        # Format: ColumnName!TYPE:SIZE|ColumnName2!TYPE:SIZE
        columns = [column_def.split('!')[0] for column_def in lines[0].split('|')]

        results = []
        for line in lines[1:]:
            values = line.split('|')

            # Map values to columns, handling mismatched counts
            entry = {
                column: values[i] if i < len(values) else ""
                for i, column in enumerate(columns)
            }
            results.append(entry)

        return results


class TACTClient:
    """Client for the TACT HTTPS version endpoint.

    A single request is made per call. Failures are not retried.
    """

    def __init__(self, region: str = "us", config: TACTConfig | None = None):
        """Initialize TACT client.

        Args:
            region: Region code (us, eu, kr, tw, cn, sg)
            config: Optional TACT configuration
        """
        self.region = region
        self.config = config or TACTConfig()
        self._base_url = self.config.get_base_url(region)

    def _build_url(self, endpoint: str, product: Product) -> str:
        """Build URL for TACT endpoint.

        Args:
            endpoint: API endpoint (versions, cdns)
            product: Product code

        Returns:
            Full URL for the endpoint
        """
        # HTTPS TACT v2 uses pattern: /{product}/{endpoint}
        return f"{self._base_url}/{product.value}/{endpoint}"

    def _fetch(self, url: str) -> str:
        """Fetch URL once.

        Raises:
            UpstreamUnavailable: On transport errors or non-success status
        """
        try:
            with httpx.Client(
                timeout=self.config.timeout,
                verify=self.config.verify_ssl
            ) as client:
                response = client.get(url)
                response.raise_for_status()
                return response.text
        except httpx.HTTPError as e:
            logger.error("tact_fetch_failed", url=url, error=str(e))
            raise UpstreamUnavailable(f"Failed to fetch {url}: {e}", url=url) from e

    def fetch_versions(self, product: Product) -> str:
        """Fetch product versions.

        Args:
            product: Product code

        Returns:
            Version manifest as string
        """
        url = self._build_url("versions", product)
        response = self._fetch(url)
        logger.debug("tact_fetched", endpoint="versions", product=product.value)
        return response

    def parse_versions(self, manifest: str) -> list[dict[str, str]]:
        """Parse versions manifest.

        Args:
            manifest: BPSV manifest text

        Returns:
            List of version entries
        """
        parser = BPSVParser()
        return parser.parse(manifest)

    def get_latest_build(self, product: Product) -> dict[str, str] | None:
        """Get the versions row for this client's region.

        Args:
            product: Product code

        Returns:
            First entry matching the region or None if not found
        """
        manifest = self.fetch_versions(product)
        versions = self.parse_versions(manifest)
        if not versions:
            raise UpstreamUnavailable(
                f"Empty versions payload for {product.value}",
                url=self._build_url("versions", product),
            )

        for entry in versions:
            if entry.get("Region") == self.region:
                return entry
        return None


def _parse_build_id(value: str) -> int | None:
    try:
        return int(value)
    except ValueError:
        return None


class BuildResolver:
    """Resolves the current build of a product for a region."""

    def __init__(self, config: TACTConfig | None = None):
        self.config = config or TACTConfig()

    def resolve(self, product: Product, region: Region | str = Region.US) -> BuildDescriptor:
        """Resolve the build descriptor for a product and region.

        Args:
            product: Product code
            region: Region code

        Returns:
            Build descriptor taken from the first matching versions row

        Raises:
            UpstreamUnavailable: If the endpoint fails or returns unusable data
            RegionNotFound: If the region is not configured or no row matches it
        """
        region = str(region)
        if region not in self.config.regions:
            logger.error("region_not_configured", region=region, product=product.value)
            raise RegionNotFound(
                f"Region {region!r} is not one of {', '.join(self.config.regions)}",
                region=region,
                product=product.value,
            )

        client = TACTClient(region=region, config=self.config)
        entry = client.get_latest_build(product)

        if entry is None:
            raise RegionNotFound(
                f"No {region} build listed for {product.value}",
                region=region,
                product=product.value,
            )

        build_config = entry.get("BuildConfig", "")
        cdn_config = entry.get("CDNConfig", "")
        if not build_config or not cdn_config:
            raise UpstreamUnavailable(
                f"Versions row for {region} is missing config hashes",
                url=client._build_url("versions", product),
            )

        build = BuildDescriptor(
            region=region,
            build_config=build_config,
            cdn_config=cdn_config,
            keyring=entry.get("KeyRing") or None,
            build_id=_parse_build_id(entry.get("BuildId", "")),
            version_name=entry.get("VersionsName", ""),
            product_config=entry.get("ProductConfig") or None,
        )

        logger.info(
            "build_resolved",
            product=product.value,
            region=region,
            version=build.version_name,
            build_config=build.build_config,
            cdn_config=build.cdn_config,
        )
        return build
