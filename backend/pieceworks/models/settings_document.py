"""Settings document — the JSON shape saved to disk and to the settings store."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class VersionDetails(BaseModel):
    major: int
    minor: int
    patch: int
    string: str


class GeneratorInfo(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    version: str
    # Older exports carry only name and version
    version_details: VersionDetails | None = Field(default=None, alias="versionDetails")
    build_date: str | None = Field(default=None, alias="buildDate")


class SettingsMeta(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    type: Literal["user-settings", "defaults"] = "user-settings"
    last_modified: str | None = Field(default=None, alias="lastModified")
    description: str = ""


class SettingsDocument(BaseModel):
    """content holds the state key and displayType; appearance the full option set."""

    content: dict[str, Any]
    appearance: dict[str, Any]
    generator: GeneratorInfo
    meta: SettingsMeta | None = None

    def to_json_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)
