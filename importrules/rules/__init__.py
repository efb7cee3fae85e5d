"""Rule models, matching, resolution and serialization."""

from importrules.errors import RuleParseError

from .matcher import matches, matching_rules
from .models import Rule, RuleSet
from .parser import dump_rule_set, format_for_path, load_rule_set
from .resolver import SecondaryUVCheck, resolve

__all__ = [
    "Rule",
    "RuleParseError",
    "RuleSet",
    "SecondaryUVCheck",
    "dump_rule_set",
    "format_for_path",
    "load_rule_set",
    "matches",
    "matching_rules",
    "resolve",
]
