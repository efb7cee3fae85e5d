"""Model (mesh) import rule schema."""

from pathlib import PurePosixPath

from .base import WILDCARD, AssetSchema, FilterDimension, FilterKind, SettingKind, SettingSpec

MODEL_FILE_TYPES: dict[str, str] = {
    ".fbx": "fbx",
    ".obj": "obj",
    ".blend": "blend",
    ".dae": "dae",
}


def classify_model_file(path: str) -> str:
    """Classify a model file by its extension."""
    suffix = PurePosixPath(path).suffix.lower()
    return MODEL_FILE_TYPES.get(suffix, "other")


MODEL_SCHEMA = AssetSchema(
    kind="model",
    filters=(
        FilterDimension(
            name="file_type",
            attribute="file_type",
            kind=FilterKind.CATEGORICAL,
            choices=(WILDCARD, "fbx", "obj", "blend", "dae", "other"),
        ),
        FilterDimension(
            name="mesh_type",
            attribute="has_skinned_mesh",
            kind=FilterKind.FLAG,
            choices=(WILDCARD, "skinned_only", "static_only"),
            flag_values={"skinned_only": True, "static_only": False},
        ),
    ),
    settings=(
        SettingSpec("scale_factor", SettingKind.SCALE, ("global_scale",)),
        SettingSpec("read_write", SettingKind.VALUE, ("is_readable",), value_type=bool),
        SettingSpec(
            "optimize_mesh",
            SettingKind.VALUE,
            ("optimize_mesh_vertices", "optimize_mesh_polygons"),
            value_type=bool,
        ),
        SettingSpec(
            "mesh_compression",
            SettingKind.VALUE,
            ("mesh_compression",),
            choices=("off", "low", "medium", "high"),
        ),
        SettingSpec("import_blend_shapes", SettingKind.VALUE, ("import_blend_shapes",), value_type=bool),
        SettingSpec("generate_colliders", SettingKind.VALUE, ("add_collider",), value_type=bool),
        SettingSpec(
            "normals",
            SettingKind.VALUE,
            ("import_normals",),
            choices=("import", "calculate", "none"),
        ),
        SettingSpec(
            "tangents",
            SettingKind.VALUE,
            ("import_tangents",),
            choices=("import", "calculate_mikk", "calculate_legacy", "none"),
        ),
        SettingSpec(
            "lightmap_uvs",
            SettingKind.LIGHTMAP_UV,
            ("generate_secondary_uv",),
            choices=("no", "yes", "yes_only_without_uv2"),
        ),
    ),
)
