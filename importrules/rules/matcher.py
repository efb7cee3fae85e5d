"""Decide whether a rule's filters accept an asset."""

import logging

from importrules.models.asset import AssetMetadata
from importrules.schemas import WILDCARD, FilterDimension, FilterKind

from .models import Rule

logger = logging.getLogger(__name__)


def _dimension_matches(dimension: FilterDimension, value: str, asset: AssetMetadata) -> bool:
    """Check one filter dimension against an asset."""
    if value == WILDCARD:
        return True
    if dimension.kind == FilterKind.FLAG:
        return asset.flags.get(dimension.attribute, False) == dimension.flag_values[value]
    return asset.classification.get(dimension.attribute) == value


def matches(rule: Rule, asset: AssetMetadata) -> bool:
    """Check if a rule applies to an asset.

    Disabled rules never match. All filter dimensions must match; a dimension set
    to the wildcard, or listed in the rule's apply_to_all set, always matches.
    Matching is exact and categorical.
    """
    if not rule.enabled:
        return False
    if asset.kind != rule.kind:
        return False

    for dimension in rule.schema.filters:
        if dimension.name in rule.apply_to_all:
            continue
        if not _dimension_matches(dimension, rule.filters[dimension.name], asset):
            return False
    return True


def matching_rules(rules: list[Rule], asset: AssetMetadata) -> list[Rule]:
    """Rules from the list that match the asset, in list order."""
    matched = [rule for rule in rules if matches(rule, asset)]
    if matched:
        logger.debug("%s matched %d rule(s): %s", asset.path, len(matched), ", ".join(r.name for r in matched))
    return matched
