"""Models for batch planning and apply results."""

from pydantic import BaseModel, ConfigDict, Field

from importrules.models.asset import SettingsDelta


class AssetPlan(BaseModel):
    """The merged delta computed for one asset before it is committed."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    path: str = Field(description="Asset path")
    matched_rules: list[str] = Field(default_factory=list, description="Names of enabled rules that matched")
    delta: SettingsDelta = Field(default_factory=SettingsDelta, description="Merged setting changes")

    @property
    def changed(self) -> bool:
        return bool(self.delta)


class AssetFailure(BaseModel):
    """An asset whose commit failed."""

    path: str = Field(description="Asset path")
    reason: str = Field(description="Error reported by the host")

    def __str__(self) -> str:
        return f"{self.path}: {self.reason}"


class BatchResult(BaseModel):
    """Aggregate outcome of one apply call."""

    attempted: int = Field(default=0, ge=0, description="Number of assets evaluated")
    modified: int = Field(default=0, ge=0, description="Number of assets successfully committed")
    failed: list[AssetFailure] = Field(default_factory=list, description="Assets whose commit failed")
    modified_paths: list[str] = Field(default_factory=list, description="Paths of modified assets")

    @property
    def failure_count(self) -> int:
        return len(self.failed)

    @property
    def unchanged(self) -> int:
        """Assets that needed no change."""
        return self.attempted - self.modified - self.failure_count
