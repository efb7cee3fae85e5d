"""Fake host collaborators and asset builders for tests."""

from typing import Optional

from importrules.errors import MetadataUnavailable, MutationError
from importrules.models.asset import AssetMetadata, ImportSettings, SettingsDelta
from importrules.pipeline import build_model_metadata, build_texture_metadata

MODEL_DEFAULTS = {
    "global_scale": 1.0,
    "is_readable": False,
    "optimize_mesh_vertices": True,
    "optimize_mesh_polygons": True,
    "mesh_compression": "off",
    "import_blend_shapes": True,
    "add_collider": False,
    "import_normals": "import",
    "import_tangents": "calculate_mikk",
    "generate_secondary_uv": False,
}

PLATFORM_DEFAULTS = {
    "overridden": False,
    "format": "automatic",
    "texture_compression": "compressed",
    "crunched_compression": False,
    "compression_quality": 50,
    "max_texture_size": 2048,
}


def make_model(path: str = "Assets/Models/crate.fbx", skinned: bool = False, **settings) -> AssetMetadata:
    values = {**MODEL_DEFAULTS, **settings}
    return build_model_metadata(path, ImportSettings(values=values), has_skinned_mesh=skinned)


def make_texture(
    path: str = "Assets/Textures/wall.png",
    texture_type: str = "default",
    has_alpha: bool = False,
    platforms: Optional[dict[str, dict]] = None,
    **settings,
) -> AssetMetadata:
    values = {"mipmap_enabled": True, "is_readable": False, **settings}
    platform_values = {
        name: {**PLATFORM_DEFAULTS, **(platforms or {}).get(name, {})}
        for name in ("Standalone", "Android", "iPhone")
    }
    return build_texture_metadata(
        path,
        ImportSettings(values=values, platforms=platform_values),
        texture_type=texture_type,
        has_alpha=has_alpha,
    )


class RecordingMutator:
    """Asset mutator that records calls and can fail for chosen paths."""

    def __init__(self, fail_paths: Optional[set[str]] = None, error: Optional[Exception] = None):
        self.fail_paths = fail_paths or set()
        self.error = error
        self.calls: list[str] = []
        self.commits: dict[str, SettingsDelta] = {}

    def begin_batch(self) -> None:
        self.calls.append("begin")

    def commit(self, path: str, delta: SettingsDelta) -> None:
        self.calls.append(f"commit:{path}")
        if path in self.fail_paths:
            raise self.error or MutationError(path, "file is read-only")
        self.commits[path] = delta

    def end_batch(self) -> None:
        self.calls.append("end")


class FakeSecondaryUV:
    """Secondary-UV query answering from a fixed set of paths."""

    def __init__(self, with_uv2: set[str], error: Optional[Exception] = None):
        self.with_uv2 = with_uv2
        self.error = error
        self.queries: list[str] = []

    def has_secondary_uv(self, path: str) -> bool:
        self.queries.append(path)
        if self.error:
            raise self.error
        return path in self.with_uv2


class FakeProvider:
    """Metadata provider backed by a list of assets."""

    def __init__(
        self,
        assets: list[AssetMetadata],
        broken: Optional[set[str]] = None,
        scene: Optional[set[str]] = None,
    ):
        self.assets = {asset.path: asset for asset in assets}
        self.broken = broken or set()
        self.scene = scene or set()
        self.requested_folders: list[Optional[list[str]]] = []

    def find_assets(self, kind: str, folders: Optional[list[str]]) -> list[str]:
        self.requested_folders.append(folders)
        paths = [p for p, a in self.assets.items() if a.kind == kind] + sorted(self.broken)
        if folders is None:
            return paths
        return [p for p in paths if any(p.startswith(f + "/") for f in folders)]

    def scene_asset_paths(self, kind: str) -> set[str]:
        return set(self.scene)

    def read_metadata(self, path: str) -> AssetMetadata:
        if path in self.broken:
            raise MetadataUnavailable(path, "file is missing")
        return self.assets[path]
