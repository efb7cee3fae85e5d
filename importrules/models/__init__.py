"""Data models for assets and batch results."""

from importrules.models.asset import AssetMetadata, ImportSettings, SettingsDelta
from importrules.models.result import AssetFailure, AssetPlan, BatchResult

__all__ = [
    "AssetFailure",
    "AssetMetadata",
    "AssetPlan",
    "BatchResult",
    "ImportSettings",
    "SettingsDelta",
]
