"""
Models for the precomputed extension dataset (xall.json).

Each record describes one add-on as listed in the add-on directory (ATN),
plus "xpilib" data extracted from its XPI files:

    xpilib.cmp_data: {"60": "1.2", "91": "2.0", "current": "2.1", ...}
    xpilib.ext_data: {"2.0": {...version data...}, ...}

Upstream data is inconsistent, so every model allows extra fields and
defaults everything that may be missing.
"""

from __future__ import annotations

from typing import Any, NamedTuple

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    field_validator,
)

from tbgen.core.errors import DatasetError

CURRENT = "current"


def _dig(data: Any, *keys: str) -> Any:
    for key in keys:
        if not isinstance(data, dict):
            return None
        data = data.get(key)
    return data


class VersionData(BaseModel):
    """Data extracted from a single XPI file."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    mext: bool | None = None
    legacy: bool | None = None
    legacy_type: str | None = None
    experiment: bool | None = None
    experiment_schema_names: list[str] = Field(
        default_factory=list, alias="experimentSchemaNames"
    )
    manifest: dict[str, Any] | None = None
    atn: dict[str, Any] = Field(default_factory=dict)

    @field_validator("experiment_schema_names", "atn", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None:
            return [] if info.field_name == "experiment_schema_names" else {}
        return value

    @property
    def atn_min(self) -> str:
        return _dig(self.atn, "compatibility", "thunderbird", "min") or "*"

    @property
    def atn_max(self) -> str:
        return _dig(self.atn, "compatibility", "thunderbird", "max") or "*"

    @property
    def strict_max_version(self) -> str:
        return (
            _dig(self.manifest, "applications", "gecko", "strict_max_version")
            or _dig(self.manifest, "browser_specific_settings", "gecko", "strict_max_version")
            or "*"
        )

    @property
    def created(self) -> str | None:
        """Creation timestamp of the first file uploaded for this version."""
        files = self.atn.get("files")
        if not isinstance(files, list) or not files or not isinstance(files[0], dict):
            return None
        created = files[0].get("created")
        return created if isinstance(created, str) else None

    @property
    def permissions(self) -> list[str] | None:
        perms = _dig(self.manifest, "permissions")
        return perms if isinstance(perms, list) else None


class XpiLib(BaseModel):
    model_config = ConfigDict(extra="allow")

    cmp_data: dict[str, Any] | None = None
    ext_data: dict[str, VersionData | None] | None = None


class ChannelData(NamedTuple):
    version: str | None
    data: VersionData | None


class ExtensionRecord(BaseModel):
    """One add-on of the dataset."""

    model_config = ConfigDict(extra="allow")

    id: int | str
    guid: str | None = None
    slug: str = ""
    url: str = ""
    name: dict[str, str | None] = Field(default_factory=dict)
    default_locale: str | None = None
    average_daily_users: int | None = 0
    xpilib: XpiLib | None = None

    def get_ext_data(self, channel: str) -> ChannelData:
        """Return the version listed for channel ("91", "current", ...) and its data."""
        xpilib = self.xpilib
        version = xpilib.cmp_data.get(channel) if xpilib and xpilib.cmp_data else None
        data = None
        if version and xpilib and xpilib.ext_data:
            data = xpilib.ext_data.get(str(version))
        return ChannelData(str(version) if version else None, data)

    def highest_version(self, channels: list[str]) -> str | None:
        """Version of the newest channel (of channels, oldest first) with a listing."""
        for channel in reversed(channels):
            version = self.get_ext_data(channel).version
            if version:
                return version
        return None

    @property
    def locale(self) -> str | None:
        if isinstance(self.name.get("en-US"), str):
            return self.default_locale if self.default_locale in self.name else "en-US"
        return next(iter(self.name), None)

    def display_name(self, max_length: int = 38) -> str:
        name = (self.name.get(self.locale) if self.locale else None) or ""
        return name[:max_length]


def parse_extensions(raw: Any) -> list[ExtensionRecord | None]:
    """
    Validate the raw dataset (a JSON list).

    null entries are kept as None so that ranks still match dataset positions.
    """
    if not isinstance(raw, list):
        raise DatasetError("Extension dataset must be a list")

    records: list[ExtensionRecord | None] = []
    for index, item in enumerate(raw):
        if item is None:
            records.append(None)
            continue
        try:
            records.append(ExtensionRecord.model_validate(item))
        except ValidationError as e:
            raise DatasetError(f"Invalid extension record at index {index}: {e}") from e
    return records
