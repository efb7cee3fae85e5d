"""Setting schemas for each supported asset kind."""

from .base import (
    WILDCARD,
    AssetSchema,
    Crunch,
    FilterDimension,
    FilterKind,
    MaxSize,
    ScaleFactor,
    SettingKind,
    SettingSpec,
)
from .model import MODEL_SCHEMA, classify_model_file
from .texture import TEXTURE_SCHEMA, FormatCapabilities, format_capabilities

ASSET_SCHEMAS: dict[str, AssetSchema] = {
    MODEL_SCHEMA.kind: MODEL_SCHEMA,
    TEXTURE_SCHEMA.kind: TEXTURE_SCHEMA,
}


def get_schema(kind: str) -> AssetSchema:
    """Look up the schema for an asset kind."""
    try:
        return ASSET_SCHEMAS[kind]
    except KeyError:
        valid = ", ".join(ASSET_SCHEMAS)
        raise ValueError(f"Unknown asset kind '{kind}'. Valid kinds: {valid}")


__all__ = [
    "ASSET_SCHEMAS",
    "AssetSchema",
    "Crunch",
    "FilterDimension",
    "FilterKind",
    "FormatCapabilities",
    "MODEL_SCHEMA",
    "MaxSize",
    "ScaleFactor",
    "SettingKind",
    "SettingSpec",
    "TEXTURE_SCHEMA",
    "WILDCARD",
    "classify_model_file",
    "format_capabilities",
    "get_schema",
]
