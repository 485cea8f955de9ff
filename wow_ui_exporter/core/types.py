"""Core type definitions for wow_ui_exporter."""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class Product(StrEnum):
    """Supported product codes."""
    WOW = "wow"
    WOW_TEST = "wowt"
    WOW_XPTR = "wowxptr"
    WOW_BETA = "wow_beta"
    WOW_CLASSIC = "wow_classic"
    WOW_CLASSIC_BETA = "wow_classic_beta"
    WOW_CLASSIC_PTR = "wow_classic_ptr"
    WOW_CLASSIC_ERA = "wow_classic_era"
    WOW_CLASSIC_ERA_PTR = "wow_classic_era_ptr"
    WOW_ANNIVERSARY = "wow_anniversary"


class Region(StrEnum):
    """CDN regions served by the version endpoint."""
    US = "us"
    EU = "eu"
    KR = "kr"
    TW = "tw"
    CN = "cn"
    SG = "sg"


class BuildDescriptor(BaseModel):
    """Build selected from the versions endpoint for a single region."""
    region: str = Field(..., description="Region code of the selected row")
    build_config: str = Field(..., description="Build config hash")
    cdn_config: str = Field(..., description="CDN config hash")
    keyring: str | None = Field(None, description="Keyring hash")
    build_id: int | None = Field(None, description="Build ID")
    version_name: str = Field(..., description="Version string")
    product_config: str | None = Field(None, description="Product config hash")

    model_config = ConfigDict(frozen=True)


class FileLocation(BaseModel):
    """A FileDataID paired with the path it is exported to."""
    id: int = Field(..., ge=0, description="File Data ID")
    name: str = Field(..., min_length=1, description="Output path")

    model_config = ConfigDict(frozen=True)

    @property
    def sort_key(self) -> tuple[int, str]:
        return (self.id, self.name)

    def to_listing_line(self) -> str:
        """Format as an ``id;name`` listing line."""
        return f"{self.id};{self.name}"
