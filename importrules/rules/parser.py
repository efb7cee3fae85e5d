"""Serialize rule sets to structured text documents and back.

Document layout (YAML shown, JSON has the same structure):

    version: 1
    kind: texture
    rules:
      - name: Mobile textures
        enabled: true
        filters: {texture_type: default, alpha: all}
        apply_to_all: [texture_type]
        platforms: [android, ios]
        overrides:
          mipmaps: dont_change
          max_size: {size: 1024, only_when_larger: true}

Every override is written, with untouched settings as the literal
``dont_change``, so a document loads back into an identical rule set.
"""

import json
from dataclasses import asdict, is_dataclass
from pathlib import Path
from typing import Any, Literal, Optional

import yaml  # type: ignore[import-untyped]

from importrules.errors import RuleParseError
from importrules.overrides import DONT_CHANGE, DontChange, OverrideValue

from .models import Rule, RuleSet

DOCUMENT_VERSION = 1
DONT_CHANGE_TOKEN = DONT_CHANGE.value

DocumentFormat = Literal["yaml", "json"]

_RULE_FIELDS = {"name", "enabled", "filters", "apply_to_all", "platforms", "overrides"}


def format_for_path(path: str | Path) -> DocumentFormat:
    """Pick the document format from a file extension (JSON for .json, otherwise YAML)."""
    return "json" if Path(path).suffix.lower() == ".json" else "yaml"


def _override_to_document(override: OverrideValue) -> Any:
    if isinstance(override, DontChange):
        return DONT_CHANGE_TOKEN
    payload = override.value
    if is_dataclass(payload) and not isinstance(payload, type):
        return asdict(payload)
    return payload


def rule_to_dict(rule: Rule) -> dict[str, Any]:
    """Convert a Rule to a plain dictionary."""
    data: dict[str, Any] = {
        "name": rule.name,
        "enabled": rule.enabled,
        "filters": dict(rule.filters),
        "apply_to_all": sorted(rule.apply_to_all),
    }
    if rule.schema.has_platforms:
        data["platforms"] = list(rule.platforms)
    data["overrides"] = {name: _override_to_document(value) for name, value in rule.overrides.items()}
    return data


def rule_set_to_dict(rule_set: RuleSet) -> dict[str, Any]:
    """Convert a RuleSet to a plain dictionary."""
    return {
        "version": DOCUMENT_VERSION,
        "kind": rule_set.kind,
        "rules": [rule_to_dict(rule) for rule in rule_set],
    }


def _expect(value: Any, expected: type, what: str) -> Any:
    if not isinstance(value, expected):
        raise RuleParseError(f"{what} must be a {expected.__name__}, got {type(value).__name__}")
    return value


def _parse_overrides(raw: Any, rule_name: str) -> dict[str, Any]:
    overrides = _expect(raw, dict, f"Overrides of rule '{rule_name}'")
    return {
        name: DONT_CHANGE if value == DONT_CHANGE_TOKEN else value
        for name, value in overrides.items()
    }


def rule_from_dict(data: Any, kind: str) -> Rule:
    """Build a Rule from a plain dictionary.

    Raises:
        RuleParseError: If a field is missing, unknown or invalid
    """
    data = _expect(data, dict, "Rule")
    name = data.get("name")
    label = f" '{name}'" if isinstance(name, str) else ""
    if "name" not in data:
        raise RuleParseError("Rule missing required 'name' field")
    unknown = set(data) - _RULE_FIELDS
    if unknown:
        raise RuleParseError(f"Rule{label} has unknown field(s): {', '.join(sorted(unknown))}")

    try:
        return Rule(
            kind=kind,
            name=_expect(name, str, "Rule name"),
            enabled=_expect(data.get("enabled", True), bool, f"'enabled' of rule{label}"),
            filters=_expect(data.get("filters", {}), dict, f"Filters of rule{label}"),
            apply_to_all=frozenset(_expect(data.get("apply_to_all", []), list, f"'apply_to_all' of rule{label}")),
            platforms=list(_expect(data.get("platforms", []), list, f"Platforms of rule{label}")),
            overrides=_parse_overrides(data.get("overrides", {}), str(name)),
        )
    except RuleParseError as e:
        raise RuleParseError(f"Error in rule{label}: {e}") from e


def rule_set_from_dict(data: Any, kind: Optional[str] = None) -> RuleSet:
    """Build a RuleSet from a plain dictionary.

    Args:
        data: Parsed document
        kind: Expected asset kind; a document of another kind is rejected

    Raises:
        RuleParseError: If the document is malformed
    """
    if not isinstance(data, dict):
        raise RuleParseError("Rule document must contain a mapping")
    version = data.get("version", DOCUMENT_VERSION)
    if version != DOCUMENT_VERSION:
        raise RuleParseError(f"Unsupported rule document version {version!r}")
    if "kind" not in data:
        raise RuleParseError("Rule document missing 'kind' key")
    if kind is not None and data["kind"] != kind:
        raise RuleParseError(f"Expected {kind} rules but document contains {data['kind']} rules")

    rules = _expect(data.get("rules", []), list, "'rules'")
    rule_set = RuleSet(kind=data["kind"])
    for index, rule_data in enumerate(rules, 1):
        try:
            rule_set.append(rule_from_dict(rule_data, rule_set.kind))
        except RuleParseError as e:
            raise RuleParseError(f"Rule #{index}: {e}") from e
    return rule_set


def dump_rule_set(rule_set: RuleSet, document_format: DocumentFormat = "yaml") -> str:
    """Serialize a rule set to YAML or JSON text."""
    data = rule_set_to_dict(rule_set)
    if document_format == "json":
        return json.dumps(data, indent=2)
    return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)


def load_rule_set(
    text: str,
    document_format: DocumentFormat = "yaml",
    kind: Optional[str] = None,
) -> RuleSet:
    """Parse a rule set from YAML or JSON text.

    Raises:
        RuleParseError: If the text is not a valid rule document
    """
    try:
        data = json.loads(text) if document_format == "json" else yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise RuleParseError(f"Invalid {document_format.upper()}: {e}") from e
    return rule_set_from_dict(data, kind)
