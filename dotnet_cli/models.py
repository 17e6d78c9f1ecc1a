"""Pydantic value records produced by the dotnet CLI parsers."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .constants import UNKNOWN


class SdkInfo(BaseModel):
    """An installed .NET SDK as reported by ``dotnet --list-sdks``."""

    model_config = ConfigDict(frozen=True)

    version: str
    path: str


class RuntimeInfo(BaseModel):
    """An installed shared runtime as reported by ``dotnet --list-runtimes``."""

    model_config = ConfigDict(frozen=True)

    name: str
    version: str
    path: str


class DotNetInfo(BaseModel):
    """Key fields extracted from ``dotnet --info``.

    Each field falls back to ``"Unknown"`` independently; ``raw_output`` always
    holds the unparsed text for display when extraction was incomplete.
    """

    model_config = ConfigDict(frozen=True)

    sdk_version: str = UNKNOWN
    runtime_version: str = UNKNOWN
    os_version: str = UNKNOWN
    architecture: str = UNKNOWN
    raw_output: str = ""


class SdkVersionCheck(BaseModel):
    """Answer to "is SDK version X installed?"."""

    model_config = ConfigDict(frozen=True)

    requested_version: str
    is_installed: bool
    closest_matches: list[SdkInfo] = Field(
        default_factory=list,
        description="Installed SDKs sharing the requested major version prefix.",
    )
