"""Compute the setting changes a matched rule makes to one asset."""

import logging
from typing import Any, Callable, Optional

from importrules.models.asset import ImportSettings, SettingsDelta
from importrules.overrides import is_set
from importrules.schemas import Crunch, MaxSize, ScaleFactor, SettingKind, SettingSpec

from .models import Rule

logger = logging.getLogger(__name__)

# Lazily answers "does this asset already have a secondary UV channel?"
SecondaryUVCheck = Callable[[], bool]

_MISSING = object()


class _Resolution:
    """Working state while resolving one rule against one asset.

    Values are looked up in this rule's delta first, then in the delta already
    accumulated from earlier rules, then in the asset's current settings.
    """

    def __init__(
        self,
        current: ImportSettings,
        pending: Optional[SettingsDelta],
        secondary_uv: Optional[SecondaryUVCheck],
    ):
        self.current = current
        self.pending = pending or SettingsDelta()
        self.secondary_uv = secondary_uv
        self.delta = SettingsDelta()

    def effective(self, name: str, platform: Optional[str] = None) -> Any:
        for source in (self.delta, self.pending):
            value = source.get(name, platform, _MISSING)
            if value is not _MISSING:
                return value
        return self.current.get(name, platform)

    def propose(self, name: str, value: Any, platform: Optional[str] = None) -> bool:
        """Record value if it differs from the effective one. Returns True if recorded."""
        if self.effective(name, platform) == value:
            return False
        self.delta.set(name, value, platform)
        return True

    def has_secondary_uv(self) -> bool:
        if self.secondary_uv is None:
            return False
        return self.secondary_uv()


def _resolve_value(res: _Resolution, spec: SettingSpec, payload: Any, platform: Optional[str]) -> bool:
    stored = spec.stored_value(payload)
    changed = False
    for target in spec.targets:
        changed = res.propose(target, stored, platform) or changed
    return changed


def _resolve_scale(res: _Resolution, spec: SettingSpec, payload: ScaleFactor, platform: Optional[str]) -> bool:
    if payload.mode != "use_custom":
        return False
    return res.propose(spec.target, payload.factor, platform)


def _resolve_lightmap_uv(res: _Resolution, spec: SettingSpec, payload: str, platform: Optional[str]) -> bool:
    if payload == "yes":
        generate = True
    elif payload == "no":
        generate = False
    else:
        generate = not res.has_secondary_uv()
    return res.propose(spec.target, generate, platform)


def _resolve_max_size(res: _Resolution, spec: SettingSpec, payload: MaxSize, platform: Optional[str]) -> bool:
    current = res.effective(spec.target, platform)
    if payload.only_when_larger and (current is None or current <= payload.size):
        return False
    return res.propose(spec.target, payload.size, platform)


def _resolve_crunch(res: _Resolution, spec: SettingSpec, payload: Crunch, platform: Optional[str]) -> bool:
    enabled_field, quality_field = spec.targets
    changed = res.propose(enabled_field, payload.enabled, platform)
    if payload.enabled:
        changed = res.propose(quality_field, payload.quality, platform) or changed
    return changed


_RESOLVERS = {
    SettingKind.VALUE: _resolve_value,
    SettingKind.SCALE: _resolve_scale,
    SettingKind.LIGHTMAP_UV: _resolve_lightmap_uv,
    SettingKind.MAX_SIZE: _resolve_max_size,
    SettingKind.CRUNCH: _resolve_crunch,
}


def resolve(
    current: ImportSettings,
    rule: Rule,
    pending: Optional[SettingsDelta] = None,
    secondary_uv: Optional[SecondaryUVCheck] = None,
) -> tuple[SettingsDelta, bool]:
    """Compute the changes a rule makes to an asset's settings.

    Only overrides holding a concrete value are considered, in the schema's
    setting order. Settings that depend on another override (compression
    quality and crunch need a compression format) are skipped unless the rule
    also sets that override. A value equal to the effective one is a no-op, so
    re-applying a satisfied rule reports no change. Platform-scoped settings are evaluated
    once per platform the rule targets, and a platform whose settings change is
    marked as overridden.

    Args:
        current: The asset's current settings
        rule: The matched rule
        pending: Changes already made by earlier rules in the same pass
        secondary_uv: Query used by the "only without secondary UV" policy

    Returns:
        Tuple of (delta, changed); the delta holds only this rule's changes
    """
    res = _Resolution(current, pending, secondary_uv)
    changed = False

    for spec, payload in rule.active_overrides():
        if spec.requires and not is_set(rule.override(spec.requires)):
            continue
        handler = _RESOLVERS[spec.kind]
        if not spec.platform_scoped:
            changed = handler(res, spec, payload, None) or changed
            continue
        for platform in rule.host_platforms():
            if handler(res, spec, payload, platform):
                res.propose("overridden", True, platform)
                changed = True

    if changed:
        logger.debug("Rule '%s' changes: %s", rule.name, res.delta.to_dict())
    return res.delta, changed
