"""Working-set construction and batch application."""

from .batch import AssetMutator, SecondaryUVQuery, apply_rules, plan_asset, plan_batch
from .scan import (
    AssetMetadataProvider,
    ScanResult,
    build_model_metadata,
    build_texture_metadata,
    list_assets,
    scan_assets,
)

__all__ = [
    "AssetMetadataProvider",
    "AssetMutator",
    "ScanResult",
    "SecondaryUVQuery",
    "apply_rules",
    "build_model_metadata",
    "build_texture_metadata",
    "list_assets",
    "plan_asset",
    "plan_batch",
    "scan_assets",
]
