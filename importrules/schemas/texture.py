"""Texture import rule schema and compression format capabilities."""

from dataclasses import dataclass

from importrules.overrides import DONT_CHANGE, is_set

from .base import AssetSchema, FilterDimension, FilterKind, SettingKind, SettingSpec, WILDCARD

TEXTURE_TYPES = (
    "default",
    "normal_map",
    "editor_gui",
    "sprite",
    "cursor",
    "cookie",
    "lightmap",
    "single_channel",
    "directional_lightmap",
    "shadowmask",
)

PC_FORMATS = ("automatic", "dxt1", "dxt5", "bc5", "bc7", "rgba32", "rgb24")
MOBILE_FORMATS = (
    "automatic",
    "astc_4x4",
    "astc_6x6",
    "astc_8x8",
    "etc2_rgb4",
    "etc2_rgba8",
    "pvrtc_rgb4",
    "pvrtc_rgba4",
)

MAX_SIZES = (32, 64, 128, 256, 512, 1024, 2048, 4096, 8192)

# Rule platform -> host platform settings name
TEXTURE_PLATFORMS = {
    "pc": "Standalone",
    "android": "Android",
    "ios": "iPhone",
}


@dataclass(frozen=True)
class FormatCapabilities:
    """Which sub-overrides a compression format can make use of."""

    supports_quality: bool
    supports_crunch: bool


def formats_for_platform(platform: str) -> tuple[str, ...]:
    """Compression formats offered for a rule platform."""
    return PC_FORMATS if platform == "pc" else MOBILE_FORMATS


def format_capabilities(platform: str, compression_format: str) -> FormatCapabilities:
    """Report whether quality and crunch settings apply to a compression format."""
    if platform == "pc":
        return FormatCapabilities(
            supports_quality=compression_format == "bc7",
            supports_crunch=compression_format in ("dxt1", "dxt5"),
        )
    return FormatCapabilities(
        supports_quality=compression_format.startswith(("astc_", "etc2_")),
        supports_crunch=compression_format.startswith("etc2_"),
    )


TEXTURE_SCHEMA = AssetSchema(
    kind="texture",
    filters=(
        FilterDimension(
            name="texture_type",
            attribute="texture_type",
            kind=FilterKind.CATEGORICAL,
            choices=TEXTURE_TYPES,
            default="default",
            escape_flag="apply_to_all_types",
        ),
        FilterDimension(
            name="alpha",
            attribute="has_alpha",
            kind=FilterKind.FLAG,
            choices=(WILDCARD, "only_with_alpha", "only_opaque"),
            flag_values={"only_with_alpha": True, "only_opaque": False},
        ),
    ),
    settings=(
        SettingSpec("mipmaps", SettingKind.VALUE, ("mipmap_enabled",), value_type=bool),
        SettingSpec("read_write", SettingKind.VALUE, ("is_readable",), value_type=bool),
        SettingSpec(
            "compression_format",
            SettingKind.VALUE,
            ("format",),
            choices=tuple(dict.fromkeys(PC_FORMATS + MOBILE_FORMATS)),
            platform_scoped=True,
        ),
        SettingSpec(
            "compression_quality",
            SettingKind.VALUE,
            ("texture_compression",),
            choices=("fast", "normal", "best"),
            value_map={"fast": "compressed_lq", "normal": "compressed", "best": "compressed_hq"},
            platform_scoped=True,
            requires="compression_format",
        ),
        SettingSpec(
            "crunch",
            SettingKind.CRUNCH,
            ("crunched_compression", "compression_quality"),
            platform_scoped=True,
            requires="compression_format",
        ),
        SettingSpec(
            "max_size",
            SettingKind.MAX_SIZE,
            ("max_texture_size",),
            choices=MAX_SIZES,
            platform_scoped=True,
        ),
    ),
    platforms=TEXTURE_PLATFORMS,
    default_platforms=("pc",),
)


def compression_warnings(rule_name: str, platforms: list[str], overrides: dict) -> list[str]:
    """Describe quality/crunch overrides that the selected format cannot use.

    Advisory only: the resolver applies whatever is set and leaves unsupported
    combinations for the host to ignore.
    """
    fmt = overrides.get("compression_format")
    wants_quality = is_set(overrides.get("compression_quality", DONT_CHANGE))
    wants_crunch = is_set(overrides.get("crunch", DONT_CHANGE))
    if not (wants_quality or wants_crunch):
        return []
    selected = fmt.value if is_set(fmt) else None
    if selected is None or selected == "automatic":
        return [f"Rule '{rule_name}': select a compression format to use quality or crunch settings"]

    warnings = []
    for platform in platforms:
        if selected not in formats_for_platform(platform):
            warnings.append(f"Rule '{rule_name}': format '{selected}' is not offered on {platform}")
            continue
        caps = format_capabilities(platform, selected)
        if wants_quality and not caps.supports_quality:
            warnings.append(f"Rule '{rule_name}': format '{selected}' ignores compression quality on {platform}")
        if wants_crunch and not caps.supports_crunch:
            warnings.append(f"Rule '{rule_name}': format '{selected}' does not support crunch on {platform}")
    return warnings
