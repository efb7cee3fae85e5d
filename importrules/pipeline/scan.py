"""Build the working set of asset metadata from the host."""

import logging
from typing import Optional, Protocol

from pydantic import BaseModel, Field

from importrules.config import LocationScope, get_settings
from importrules.errors import MetadataUnavailable
from importrules.models.asset import AssetMetadata, ImportSettings
from importrules.schemas import classify_model_file, get_schema

logger = logging.getLogger(__name__)

SEARCH_FOLDERS: dict[LocationScope, Optional[list[str]]] = {
    LocationScope.ASSETS: ["Assets"],
    LocationScope.PACKAGES: ["Packages"],
    LocationScope.BOTH: None,  # No folder restriction
}


class AssetMetadataProvider(Protocol):
    """Host capability that enumerates assets and snapshots their metadata."""

    def find_assets(self, kind: str, folders: Optional[list[str]]) -> list[str]:
        """Return asset paths of the given kind under the folders (None = everywhere)."""
        ...

    def scene_asset_paths(self, kind: str) -> set[str]:
        """Return paths of assets of the given kind referenced by the open scene."""
        ...

    def read_metadata(self, path: str) -> AssetMetadata:
        """Snapshot one asset; raises MetadataUnavailable if that is not possible."""
        ...


class ScanResult(BaseModel):
    """Working set built from the host."""

    assets: list[AssetMetadata] = Field(default_factory=list, description="Assets available to rules")
    excluded: dict[str, str] = Field(default_factory=dict, description="Assets left out, with the reason")

    @property
    def asset_count(self) -> int:
        return len(self.assets)


def build_model_metadata(
    path: str,
    settings: ImportSettings,
    *,
    has_skinned_mesh: bool,
    vertex_count: int = 0,
    triangle_count: int = 0,
    file_size: int = 0,
) -> AssetMetadata:
    """Build model metadata, classifying the file type from its extension."""
    return AssetMetadata(
        path=path,
        kind="model",
        classification={"file_type": classify_model_file(path)},
        flags={"has_skinned_mesh": has_skinned_mesh},
        settings=settings,
        stats={"vertex_count": vertex_count, "triangle_count": triangle_count, "file_size": file_size},
    )


def build_texture_metadata(
    path: str,
    settings: ImportSettings,
    *,
    texture_type: str,
    has_alpha: bool,
    width: int = 0,
    height: int = 0,
    file_size: int = 0,
) -> AssetMetadata:
    """Build texture metadata from the importer-reported texture type.

    Raises:
        MetadataUnavailable: If the texture type is not one rules can match
    """
    try:
        get_schema("texture").filter("texture_type").validate(texture_type)
    except ValueError as e:
        raise MetadataUnavailable(path, str(e)) from e
    return AssetMetadata(
        path=path,
        kind="texture",
        classification={"texture_type": texture_type},
        flags={"has_alpha": has_alpha},
        settings=settings,
        stats={"width": width, "height": height, "file_size": file_size},
    )


def scan_assets(
    provider: AssetMetadataProvider,
    kind: str,
    scope: Optional[LocationScope] = None,
    scene_only: Optional[bool] = None,
) -> ScanResult:
    """Build the working set of assets of one kind.

    Assets whose metadata cannot be read are excluded with a warning.

    Args:
        provider: Host metadata provider
        kind: Asset kind to scan
        scope: Asset roots to search (defaults to the configured scope)
        scene_only: Restrict to assets used by the open scene (defaults to configured value)
    """
    settings = get_settings().scan
    scope = scope if scope is not None else settings.location_scope
    scene_only = scene_only if scene_only is not None else settings.scene_only

    paths = provider.find_assets(kind, SEARCH_FOLDERS[LocationScope(scope)])
    logger.info("Found %d %s asset(s)", len(paths), kind)

    scene_paths: Optional[set[str]] = None
    if scene_only:
        scene_paths = provider.scene_asset_paths(kind)
        logger.info("Found %d unique %s asset(s) in the current scene", len(scene_paths), kind)

    result = ScanResult()
    for path in paths:
        if scene_paths is not None and path not in scene_paths:
            continue
        try:
            result.assets.append(provider.read_metadata(path))
        except MetadataUnavailable as e:
            logger.warning("Skipping %s: %s", path, e.reason)
            result.excluded[path] = e.reason

    logger.info("Loaded %d %s asset(s), %d excluded", result.asset_count, kind, len(result.excluded))
    return result


def list_assets(
    provider: AssetMetadataProvider,
    kind: str,
    scope: Optional[LocationScope] = None,
    scene_only: Optional[bool] = None,
) -> list[AssetMetadata]:
    """Return the working set of assets of one kind."""
    return scan_assets(provider, kind, scope, scene_only).assets
