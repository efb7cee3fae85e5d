"""Models for asset metadata snapshots and setting deltas."""

from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import Any, Iterator, Optional

from pydantic import BaseModel, ConfigDict, Field

_MISSING = object()


class ImportSettings(BaseModel):
    """Current import settings of one asset."""

    model_config = ConfigDict(frozen=True)

    values: dict[str, Any] = Field(default_factory=dict, description="Global settings by host field name")
    platforms: dict[str, dict[str, Any]] = Field(
        default_factory=dict,
        description="Platform-scoped settings keyed by host platform name",
    )

    def get(self, name: str, platform: Optional[str] = None) -> Any:
        """Get a setting value, or None if the host did not report it."""
        if platform is None:
            return self.values.get(name)
        return self.platforms.get(platform, {}).get(name)


class AssetMetadata(BaseModel):
    """Read-only snapshot of one asset, rebuilt on every refresh."""

    model_config = ConfigDict(frozen=True)

    path: str = Field(description="Asset path as reported by the host")
    kind: str = Field(description="Asset kind (model, texture)")
    classification: dict[str, str] = Field(
        default_factory=dict, description="Categorical attributes used by filters"
    )
    flags: dict[str, bool] = Field(default_factory=dict, description="Boolean attributes used by filters")
    settings: ImportSettings = Field(default_factory=ImportSettings, description="Current import settings")
    stats: dict[str, int] = Field(
        default_factory=dict,
        description="Display-only figures (vertex_count, width, file_size, ...)",
    )

    @property
    def file_name(self) -> str:
        return PurePosixPath(self.path).name

    def __str__(self) -> str:
        return f"{self.path} ({self.kind})"


@dataclass
class SettingsDelta:
    """Setting changes to commit to one asset.

    Never holds "don't change" entries: every key present is a concrete new value.
    """

    values: dict[str, Any] = field(default_factory=dict)
    platforms: dict[str, dict[str, Any]] = field(default_factory=dict)

    def set(self, name: str, value: Any, platform: Optional[str] = None) -> None:
        if platform is None:
            self.values[name] = value
        else:
            self.platforms.setdefault(platform, {})[name] = value

    def get(self, name: str, platform: Optional[str] = None, default: Any = None) -> Any:
        if platform is None:
            return self.values.get(name, default)
        return self.platforms.get(platform, {}).get(name, default)

    def contains(self, name: str, platform: Optional[str] = None) -> bool:
        return self.get(name, platform, _MISSING) is not _MISSING

    def merge(self, other: "SettingsDelta") -> None:
        """Merge another delta into this one; the other delta wins per field."""
        for platform, name, value in other.items():
            self.set(name, value, platform)

    def items(self) -> Iterator[tuple[Optional[str], str, Any]]:
        """Iterate (platform, name, value) triples, global settings first."""
        for name, value in self.values.items():
            yield None, name, value
        for platform, values in self.platforms.items():
            for name, value in values.items():
                yield platform, name, value

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = dict(self.values)
        if self.platforms:
            data["platforms"] = {p: dict(v) for p, v in self.platforms.items()}
        return data

    def __len__(self) -> int:
        return len(self.values) + sum(len(v) for v in self.platforms.values())

    def __bool__(self) -> bool:
        return len(self) > 0
