"""Failure taxonomy for an export run.

Every error below is fatal to the run. Nothing is retried and nothing is
downgraded to a partial result. Candidates that do not resolve against the
listfile are not errors and never show up here.
"""

from __future__ import annotations


class ExporterError(Exception):
    """Base class for all export run failures."""


class UpstreamUnavailable(ExporterError):
    """Raised when an HTTP fetch fails or returns unusable data.

    Attributes:
        url: The URL that was being fetched
    """

    def __init__(self, message: str, *, url: str | None = None):
        self.url = url
        super().__init__(message)


class RegionNotFound(ExporterError):
    """Raised when the versions payload has no row for the region.

    Attributes:
        region: Requested region code
        product: Requested product code
    """

    def __init__(self, message: str, *, region: str, product: str | None = None):
        self.region = region
        self.product = product
        super().__init__(message)


class IncompleteManifest(ExporterError):
    """Raised when a manifest file is absent after it was exported.

    Attributes:
        path: Expected location of the manifest on disk
    """

    def __init__(self, message: str, *, path: str):
        self.path = path
        super().__init__(message)


class ExportToolFailure(ExporterError):
    """Raised when the retrieval tool cannot be run or exits non-zero.

    Attributes:
        returncode: Exit status of the tool, None if it never started
        command: The command line that was executed
    """

    def __init__(
        self,
        message: str,
        *,
        returncode: int | None = None,
        command: list[str] | None = None,
    ):
        self.returncode = returncode
        self.command = command
        super().__init__(message)
