"""Error taxonomy for the import rules engine."""


class ImportRulesError(Exception):
    """Base class for all engine errors."""

    pass


class ConfigurationError(ImportRulesError):
    """Raised when a rule set cannot be used as requested (e.g. no enabled rules)."""

    pass


class MetadataUnavailable(ImportRulesError):
    """Raised by a metadata provider when an asset's metadata cannot be built."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Metadata unavailable for {path}: {reason}")
        self.path = path
        self.reason = reason


class MutationError(ImportRulesError):
    """Raised by an asset mutator when committing a delta to one asset fails."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Failed to update {path}: {reason}")
        self.path = path
        self.reason = reason


class SerializationError(ImportRulesError):
    """Raised when a persisted rule set document cannot be read or written."""

    pass


class RuleParseError(SerializationError):
    """Raised when a rule or one of its fields is invalid."""

    pass
