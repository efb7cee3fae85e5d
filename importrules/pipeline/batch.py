"""Batch application of a rule set across a working set of assets.

For each asset, every enabled rule is evaluated in order; the changes of each
matching rule are merged into one delta (later rules win per field) and the
delta is committed once. All commits of one call are bracketed by a single
begin/end batch notification so the host can defer reimports.
"""

import logging
from functools import cache
from typing import Optional, Protocol

from importrules.errors import ConfigurationError, MutationError
from importrules.models.asset import AssetMetadata, SettingsDelta
from importrules.models.result import AssetFailure, AssetPlan, BatchResult
from importrules.rules import Rule, RuleSet, SecondaryUVCheck, matches, resolve

logger = logging.getLogger(__name__)


class AssetMutator(Protocol):
    """Host capability that writes setting changes to assets."""

    def begin_batch(self) -> None:
        """Start deferring reimports until end_batch."""
        ...

    def commit(self, path: str, delta: SettingsDelta) -> None:
        """Apply exactly the fields in delta to one asset; raises MutationError on failure."""
        ...

    def end_batch(self) -> None:
        """Stop deferring and run the pending reimports."""
        ...


class SecondaryUVQuery(Protocol):
    """Host capability reporting whether an asset already has a secondary UV channel."""

    def has_secondary_uv(self, path: str) -> bool:
        ...


def _secondary_uv_check(query: Optional[SecondaryUVQuery], path: str) -> Optional[SecondaryUVCheck]:
    """Wrap the host query for one asset; asked at most once, failures count as no UV."""
    if query is None:
        return None

    @cache
    def check() -> bool:
        try:
            return query.has_secondary_uv(path)
        except Exception as e:
            logger.warning("Could not check secondary UVs for %s: %s", path, e)
            return False

    return check


def _require_enabled_rules(rule_set: RuleSet) -> list[Rule]:
    rules = rule_set.enabled_rules()
    if not rules:
        raise ConfigurationError("No enabled rules: create and enable at least one rule")
    return rules


def plan_asset(
    rules: list[Rule],
    asset: AssetMetadata,
    secondary_uv: Optional[SecondaryUVQuery] = None,
) -> AssetPlan:
    """Merge the changes of every matching rule for one asset."""
    plan = AssetPlan(path=asset.path)
    check = _secondary_uv_check(secondary_uv, asset.path)

    for rule in rules:
        if not matches(rule, asset):
            continue
        plan.matched_rules.append(rule.name)
        rule_delta, changed = resolve(asset.settings, rule, plan.delta, check)
        if changed:
            plan.delta.merge(rule_delta)

    if plan.changed:
        logger.debug("Planned changes for %s: %s", asset.path, plan.delta.to_dict())
    return plan


def plan_batch(
    rule_set: RuleSet,
    assets: list[AssetMetadata],
    secondary_uv: Optional[SecondaryUVQuery] = None,
) -> list[AssetPlan]:
    """Compute every asset's merged delta without committing anything.

    Raises:
        ConfigurationError: If the rule set has no enabled rules
    """
    rules = _require_enabled_rules(rule_set)
    return [plan_asset(rules, asset, secondary_uv) for asset in assets]


def _commit(mutator: AssetMutator, plan: AssetPlan, result: BatchResult) -> None:
    """Commit one asset's delta, recording a failure instead of raising."""
    try:
        mutator.commit(plan.path, plan.delta)
    except MutationError as e:
        logger.warning("Failed to update %s: %s", plan.path, e.reason)
        result.failed.append(AssetFailure(path=plan.path, reason=e.reason))
    except Exception as e:
        logger.warning("Failed to update %s: %s", plan.path, e)
        result.failed.append(AssetFailure(path=plan.path, reason=str(e) or type(e).__name__))
    else:
        result.modified += 1
        result.modified_paths.append(plan.path)


def apply_rules(
    rule_set: RuleSet,
    assets: list[AssetMetadata],
    mutator: AssetMutator,
    secondary_uv: Optional[SecondaryUVQuery] = None,
) -> BatchResult:
    """Apply the enabled rules of a rule set to every asset.

    Assets are processed in the given order and committed one at a time. A failed
    commit is recorded and the batch continues with the next asset.

    Args:
        rule_set: Rules to apply; only enabled rules are used, in order
        assets: Working set of assets
        mutator: Host mutator that commits deltas
        secondary_uv: Host query for the "only without secondary UV" lightmap policy

    Returns:
        Aggregate result with attempted, modified and failed assets

    Raises:
        ConfigurationError: If the rule set has no enabled rules (nothing is touched)
    """
    rules = _require_enabled_rules(rule_set)
    logger.info("Applying %d rule(s) to %d %s asset(s)", len(rules), len(assets), rule_set.kind)

    result = BatchResult(attempted=len(assets))
    mutator.begin_batch()
    try:
        for asset in assets:
            plan = plan_asset(rules, asset, secondary_uv)
            if plan.changed:
                _commit(mutator, plan, result)
    finally:
        mutator.end_batch()

    logger.info(
        "Batch complete: %d modified, %d unchanged, %d failed",
        result.modified,
        result.unchanged,
        result.failure_count,
    )
    return result
