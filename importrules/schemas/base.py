"""Setting-schema data structures shared by every asset kind.

An asset kind is described entirely by data: the filter dimensions a rule can
match on and the settings a rule can override. The matcher and resolver are
generic over these descriptions.
"""

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

WILDCARD = "all"


class FilterKind(Enum):
    """How a filter dimension reads asset metadata."""

    CATEGORICAL = "categorical"  # Compare against asset.classification[attribute]
    FLAG = "flag"  # Compare against asset.flags[attribute]


class SettingKind(Enum):
    """How an override is turned into concrete setting changes."""

    VALUE = "value"
    SCALE = "scale"
    LIGHTMAP_UV = "lightmap_uv"
    MAX_SIZE = "max_size"
    CRUNCH = "crunch"


@dataclass(frozen=True)
class ScaleFactor:
    """Scale override payload; only the use_custom mode writes a value."""

    mode: str = "use_custom"
    factor: float = 1.0


SCALE_MODES = ("dont_change", "use_custom")


@dataclass(frozen=True)
class MaxSize:
    """Max texture size override payload."""

    size: int
    only_when_larger: bool = True


@dataclass(frozen=True)
class Crunch:
    """Crunch compression override payload."""

    enabled: bool
    quality: int = 50


@dataclass(frozen=True)
class FilterDimension:
    """A categorical predicate over one metadata dimension."""

    name: str
    attribute: str
    kind: FilterKind
    choices: tuple[str, ...]
    default: str = WILDCARD
    flag_values: Mapping[str, bool] = field(default_factory=dict)
    escape_flag: Optional[str] = None  # Label of the "apply to all" switch, if the dimension has one

    def validate(self, value: Any) -> str:
        """Return the value if it is a valid choice for this dimension."""
        if value not in self.choices:
            raise ValueError(
                f"Invalid value {value!r} for filter '{self.name}'. "
                f"Valid values: {', '.join(self.choices)}"
            )
        return value


def _require_bool(name: str, value: Any) -> bool:
    if not isinstance(value, bool):
        raise ValueError(f"Setting '{name}' expects true/false, got {value!r}")
    return value


def _require_number(name: str, value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"Setting '{name}' expects a number, got {value!r}")
    return float(value)


def _require_int(name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"Setting '{name}' expects an integer, got {value!r}")
    return value


@dataclass(frozen=True)
class SettingSpec:
    """Description of one overridable setting."""

    name: str
    kind: SettingKind
    targets: tuple[str, ...]
    value_type: Optional[type] = None
    choices: tuple[Any, ...] = ()
    value_map: Mapping[Any, Any] = field(default_factory=dict)
    platform_scoped: bool = False
    requires: Optional[str] = None  # Only applied when the rule also sets this setting

    @property
    def target(self) -> str:
        """The primary host setting written by this override."""
        return self.targets[0]

    def stored_value(self, value: Any) -> Any:
        """Translate a rule choice into the value the host stores."""
        return self.value_map.get(value, value)

    def _check_choice(self, value: Any) -> Any:
        if self.choices and value not in self.choices:
            valid = ", ".join(str(c) for c in self.choices)
            raise ValueError(f"Invalid value {value!r} for setting '{self.name}'. Valid values: {valid}")
        return value

    def coerce(self, value: Any) -> Any:
        """Validate an override payload, expanding shorthand forms.

        Raises:
            ValueError: If the value is not acceptable for this setting
        """
        handler = _COERCERS[self.kind]
        return handler(self, value)


def _bool_alias(value: Any, choices: tuple[Any, ...]) -> Any:
    """Map YAML 1.1 booleans (yes/no/on/off) back to the choice they were written as."""
    if not isinstance(value, bool):
        return value
    for alias in (("yes", "on") if value else ("no", "off")):
        if alias in choices:
            return alias
    return value


def _coerce_value(spec: SettingSpec, value: Any) -> Any:
    if spec.value_type is bool:
        return _require_bool(spec.name, value)
    return spec._check_choice(_bool_alias(value, spec.choices))


def _coerce_scale(spec: SettingSpec, value: Any) -> ScaleFactor:
    if isinstance(value, ScaleFactor):
        value = {"mode": value.mode, "factor": value.factor}
    if isinstance(value, Mapping):
        payload = ScaleFactor(
            mode=value.get("mode", "use_custom"),
            factor=_require_number(spec.name, value.get("factor", 1.0)),
        )
    else:
        payload = ScaleFactor(mode="use_custom", factor=_require_number(spec.name, value))
    if payload.mode not in SCALE_MODES:
        raise ValueError(f"Invalid scale mode {payload.mode!r}. Valid modes: {', '.join(SCALE_MODES)}")
    if not math.isfinite(payload.factor) or payload.factor <= 0:
        raise ValueError(f"Scale factor must be a positive finite number, got {payload.factor}")
    return payload


def _coerce_lightmap_uv(spec: SettingSpec, value: Any) -> str:
    return spec._check_choice(_bool_alias(value, spec.choices))


def _coerce_max_size(spec: SettingSpec, value: Any) -> MaxSize:
    if isinstance(value, MaxSize):
        value = {"size": value.size, "only_when_larger": value.only_when_larger}
    if isinstance(value, Mapping):
        if "size" not in value:
            raise ValueError(f"Setting '{spec.name}' missing required 'size' field")
        payload = MaxSize(
            size=_require_int(spec.name, value["size"]),
            only_when_larger=_require_bool(spec.name, value.get("only_when_larger", True)),
        )
    else:
        payload = MaxSize(size=_require_int(spec.name, value))
    spec._check_choice(payload.size)
    return payload


def _coerce_crunch(spec: SettingSpec, value: Any) -> Crunch:
    if isinstance(value, Crunch):
        value = {"enabled": value.enabled, "quality": value.quality}
    if isinstance(value, Mapping):
        if "enabled" not in value:
            raise ValueError(f"Setting '{spec.name}' missing required 'enabled' field")
        payload = Crunch(
            enabled=_require_bool(spec.name, value["enabled"]),
            quality=_require_int(spec.name, value.get("quality", 50)),
        )
    else:
        payload = Crunch(enabled=_require_bool(spec.name, value))
    if not 0 <= payload.quality <= 100:
        raise ValueError(f"Crunch quality must be between 0 and 100, got {payload.quality}")
    return payload


_COERCERS = {
    SettingKind.VALUE: _coerce_value,
    SettingKind.SCALE: _coerce_scale,
    SettingKind.LIGHTMAP_UV: _coerce_lightmap_uv,
    SettingKind.MAX_SIZE: _coerce_max_size,
    SettingKind.CRUNCH: _coerce_crunch,
}


@dataclass(frozen=True)
class AssetSchema:
    """Everything the engine needs to know about one asset kind."""

    kind: str
    filters: tuple[FilterDimension, ...]
    settings: tuple[SettingSpec, ...]
    platforms: Mapping[str, str] = field(default_factory=dict)  # rule platform -> host platform
    default_platforms: tuple[str, ...] = ()

    @property
    def has_platforms(self) -> bool:
        return bool(self.platforms)

    def filter(self, name: str) -> FilterDimension:
        for dimension in self.filters:
            if dimension.name == name:
                return dimension
        raise KeyError(f"Unknown filter '{name}' for {self.kind} rules")

    def setting(self, name: str) -> SettingSpec:
        for spec in self.settings:
            if spec.name == name:
                return spec
        raise KeyError(f"Unknown setting '{name}' for {self.kind} rules")

    def setting_names(self) -> list[str]:
        """Setting names in evaluation order."""
        return [spec.name for spec in self.settings]

    def host_platform(self, platform: str) -> str:
        try:
            return self.platforms[platform]
        except KeyError:
            valid = ", ".join(self.platforms) or "none"
            raise ValueError(f"Invalid platform {platform!r} for {self.kind} rules. Valid platforms: {valid}")
