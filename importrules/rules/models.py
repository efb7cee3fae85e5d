"""Data models for import rules and rule sets."""

from dataclasses import dataclass, field
from typing import Any, Iterator, Optional

from importrules.errors import RuleParseError
from importrules.overrides import DONT_CHANGE, DontChange, OverrideValue, SetValue, is_set
from importrules.schemas import AssetSchema, SettingSpec, get_schema
from importrules.schemas.texture import compression_warnings


@dataclass
class Rule:
    """A named, enableable bundle of filters and override values.

    Filters are ANDed together. Every setting of the asset kind's schema has an
    override entry; settings the rule does not configure hold DONT_CHANGE.
    """

    kind: str
    name: str = "New Rule"
    enabled: bool = True
    filters: dict[str, str] = field(default_factory=dict)
    apply_to_all: frozenset[str] = field(default_factory=frozenset)
    platforms: list[str] = field(default_factory=list)
    overrides: dict[str, OverrideValue] = field(default_factory=dict)

    def __post_init__(self) -> None:
        try:
            schema = get_schema(self.kind)
        except ValueError as e:
            raise RuleParseError(str(e)) from e
        self._validate_filters(schema)
        self._validate_platforms(schema)
        self._validate_overrides(schema)

    @classmethod
    def new(cls, kind: str, name: str = "New Rule") -> "Rule":
        """Create an enabled rule with default filters and no overrides."""
        return cls(kind=kind, name=name)

    @property
    def schema(self) -> AssetSchema:
        return get_schema(self.kind)

    def _validate_filters(self, schema: AssetSchema) -> None:
        self.filters = dict(self.filters)
        known = {d.name for d in schema.filters}
        unknown = set(self.filters) - known
        if unknown:
            raise RuleParseError(f"Unknown filter(s) for {self.kind} rules: {', '.join(sorted(unknown))}")
        for dimension in schema.filters:
            value = self.filters.setdefault(dimension.name, dimension.default)
            try:
                dimension.validate(value)
            except ValueError as e:
                raise RuleParseError(str(e)) from e

        self.apply_to_all = frozenset(self.apply_to_all)
        escapable = {d.name for d in schema.filters if d.escape_flag}
        invalid = self.apply_to_all - escapable
        if invalid:
            raise RuleParseError(f"Filter(s) cannot be widened to all values: {', '.join(sorted(invalid))}")

    def _validate_platforms(self, schema: AssetSchema) -> None:
        if not schema.has_platforms:
            if self.platforms:
                raise RuleParseError(f"{self.kind} rules do not target platforms")
            return
        if not self.platforms:
            self.platforms = list(schema.default_platforms)
        for platform in self.platforms:
            try:
                schema.host_platform(platform)
            except ValueError as e:
                raise RuleParseError(str(e)) from e
        if len(set(self.platforms)) != len(self.platforms):
            raise RuleParseError(f"Duplicate platform in rule '{self.name}'")

    def _validate_overrides(self, schema: AssetSchema) -> None:
        unknown = set(self.overrides) - set(schema.setting_names())
        if unknown:
            raise RuleParseError(f"Unknown setting(s) for {self.kind} rules: {', '.join(sorted(unknown))}")
        # Rebuild in schema order so iteration is deterministic
        overrides: dict[str, OverrideValue] = {}
        for spec in schema.settings:
            overrides[spec.name] = _coerce_override(spec, self.overrides.get(spec.name, DONT_CHANGE))
        self.overrides = overrides

    def override(self, name: str) -> OverrideValue:
        if name not in self.overrides:
            raise KeyError(f"Unknown setting '{name}' for {self.kind} rules")
        return self.overrides[name]

    def set_override(self, name: str, value: Any) -> None:
        """Set an override; raw values are wrapped in SetValue after validation."""
        if name not in self.overrides:
            raise RuleParseError(f"Unknown setting '{name}' for {self.kind} rules")
        self.overrides[name] = _coerce_override(self.schema.setting(name), value)

    def clear_override(self, name: str) -> None:
        self.set_override(name, DONT_CHANGE)

    def set_filter(self, name: str, value: str) -> None:
        try:
            dimension = self.schema.filter(name)
            self.filters[name] = dimension.validate(value)
        except (KeyError, ValueError) as e:
            raise RuleParseError(str(e)) from e

    def active_overrides(self) -> list[tuple[SettingSpec, Any]]:
        """Configured overrides with their payloads, in evaluation order."""
        return [
            (spec, self.overrides[spec.name].value)  # type: ignore[union-attr]
            for spec in self.schema.settings
            if is_set(self.overrides[spec.name])
        ]

    def is_noop(self) -> bool:
        """True if every override is DONT_CHANGE."""
        return not any(is_set(o) for o in self.overrides.values())

    def host_platforms(self) -> list[str]:
        """Host platform names this rule's platform-scoped settings target."""
        return [self.schema.host_platform(p) for p in self.platforms]


def _coerce_override(spec: SettingSpec, value: Any) -> OverrideValue:
    if isinstance(value, DontChange):
        return value
    raw = value.value if isinstance(value, SetValue) else value
    try:
        return SetValue(spec.coerce(raw))
    except ValueError as e:
        raise RuleParseError(str(e)) from e


@dataclass
class RuleSet:
    """An ordered list of rules for one asset kind.

    Order is precedence: rules are evaluated first to last and later rules win.
    """

    kind: str
    rules: list[Rule] = field(default_factory=list)

    def __post_init__(self) -> None:
        try:
            get_schema(self.kind)
        except ValueError as e:
            raise RuleParseError(str(e)) from e
        for rule in self.rules:
            self._check_kind(rule)

    def _check_kind(self, rule: Rule) -> None:
        if rule.kind != self.kind:
            raise RuleParseError(f"Cannot add {rule.kind} rule '{rule.name}' to a {self.kind} rule set")

    def __len__(self) -> int:
        return len(self.rules)

    def __iter__(self) -> Iterator[Rule]:
        return iter(self.rules)

    def __getitem__(self, index: int) -> Rule:
        return self.rules[index]

    def add_rule(self, name: Optional[str] = None) -> Rule:
        """Append a fresh rule, named "Rule N" unless a name is given."""
        rule = Rule.new(self.kind, name or f"Rule {len(self.rules) + 1}")
        self.rules.append(rule)
        return rule

    def append(self, rule: Rule) -> None:
        self._check_kind(rule)
        self.rules.append(rule)

    def extend(self, rules: list[Rule]) -> None:
        for rule in rules:
            self._check_kind(rule)
        self.rules.extend(rules)

    def remove(self, index: int) -> Rule:
        return self.rules.pop(index)

    def clear(self) -> None:
        self.rules.clear()

    def move(self, old_index: int, new_index: int) -> None:
        """Move a rule to a new position, changing its precedence."""
        if not 0 <= new_index < len(self.rules):
            raise IndexError(f"Rule index {new_index} out of range")
        rule = self.rules.pop(old_index)
        self.rules.insert(new_index, rule)

    def enabled_rules(self) -> list[Rule]:
        """Enabled rules in their original order."""
        return [rule for rule in self.rules if rule.enabled]

    def warnings(self) -> list[str]:
        """Advisory warnings about overrides the host will ignore."""
        if self.kind != "texture":
            return []
        warnings: list[str] = []
        for rule in self.rules:
            warnings.extend(compression_warnings(rule.name, rule.platforms, rule.overrides))
        return warnings
