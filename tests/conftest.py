"""Pytest configuration and shared fixtures for wow_ui_exporter tests."""

import tempfile
from collections.abc import Generator
from pathlib import Path
from unittest.mock import Mock

import pytest

from wow_ui_exporter.core.config import AppConfig
from wow_ui_exporter.core.types import BuildDescriptor, Product

SAMPLE_VERSIONS = (
    "Region!STRING:0|BuildConfig!HEX:16|CDNConfig!HEX:16|KeyRing!HEX:16|"
    "BuildId!DEC:4|VersionsName!String:0|ProductConfig!HEX:16\n"
    "## seqn = 2954881\n"
    "eu|eeeeeeeeeeeeeeeeeeeeeeeeeeeeeeee|ffffffffffffffffffffffffffffffff|"
    "|54630|1.15.0.54630|11111111111111111111111111111111\n"
    "us|1234567890abcdef1234567890abcdef|abcdef1234567890abcdef1234567890|"
    "|54631|1.15.0.54631|567890abcdef1234567890abcdef1234\n"
)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        yield Path(tmp_dir)


@pytest.fixture
def sample_versions() -> str:
    """Versions payload with an eu row ahead of the us row."""
    return SAMPLE_VERSIONS


@pytest.fixture
def sample_build() -> BuildDescriptor:
    """Sample BuildDescriptor for testing."""
    return BuildDescriptor(
        region="us",
        build_config="1234567890abcdef1234567890abcdef",
        cdn_config="abcdef1234567890abcdef1234567890",
        build_id=54631,
        version_name="1.15.0.54631",
        product_config="567890abcdef1234567890abcdef1234",
    )


@pytest.fixture
def sample_product() -> Product:
    """Sample Product for testing."""
    return Product.WOW_CLASSIC_ERA


class FakeExportTool:
    """In-process ExportTool that writes files from a content table.

    Each invocation records the listing lines. Files whose name appears in
    ``contents`` are written below the output directory; others are skipped,
    the same way the real tool leaves out files it cannot find.
    """

    def __init__(self, contents: dict[str, str] | None = None, returncode: int = 0):
        self.contents = contents or {}
        self.returncode = returncode
        self.calls: list[dict] = []

    def run(self, listing: Path, output_dir: Path, build_config: str, cdn_config: str) -> None:
        from wow_ui_exporter.core.errors import ExportToolFailure

        lines = listing.read_text(encoding="utf-8").splitlines()
        self.calls.append({
            "listing": listing,
            "lines": lines,
            "output_dir": output_dir,
            "build_config": build_config,
            "cdn_config": cdn_config,
        })
        if self.returncode != 0:
            raise ExportToolFailure("fake tool failed", returncode=self.returncode)

        for line in lines:
            _, name = line.split(";", 1)
            if name in self.contents:
                path = output_dir / name
                path.parent.mkdir(parents=True, exist_ok=True)
                path.write_text(self.contents[name], encoding="utf-8")


@pytest.fixture
def fake_tool() -> FakeExportTool:
    """Fake export tool with no file contents."""
    return FakeExportTool()


@pytest.fixture
def mock_console() -> Mock:
    """Mock Rich console that records printed lines."""
    import re

    console = Mock()

    status_cm = Mock()
    status_cm.__enter__ = Mock(return_value=status_cm)
    status_cm.__exit__ = Mock(return_value=None)
    console.status.return_value = status_cm

    console.printed_lines = []

    def track_print(text="", **kwargs):
        clean_text = re.sub(r'\[/?[^\]]*\]', '', str(text))
        console.printed_lines.append(clean_text)

    console.print.side_effect = track_print
    return console


@pytest.fixture
def cli_obj(mock_console: Mock) -> dict:
    """Click context object as built by the main group."""
    return {
        "config": AppConfig(),
        "console": mock_console,
        "verbose": False,
        "debug": False,
    }


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest settings."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )


def pytest_collection_modifyitems(config: pytest.Config, items: list) -> None:
    """Add unit marker to all tests not marked integration."""
    for item in items:
        if not any(marker.name == 'integration' for marker in item.iter_markers()):
            item.add_marker(pytest.mark.unit)


@pytest.fixture
def make_fake_tool():
    """Factory for fake export tools with file contents."""
    return FakeExportTool
