"""Rule set persistence: session storage, export and import."""

import logging
from enum import Enum
from pathlib import Path
from typing import Optional

from importrules.config import get_settings
from importrules.errors import ConfigurationError, SerializationError
from importrules.rules import RuleSet, dump_rule_set, format_for_path, load_rule_set
from importrules.rules.parser import DocumentFormat

logger = logging.getLogger(__name__)


class ImportMode(str, Enum):
    """How imported rules combine with the existing ones."""

    REPLACE = "replace"  # Discard existing rules
    APPEND = "append"  # Keep existing rules, imported ones go after them


def _write_text(path: Path, text: str) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    except OSError as e:
        raise SerializationError(f"Failed to write {path}: {e}") from e


def read_rules_file(path: str | Path, kind: Optional[str] = None) -> RuleSet:
    """Load a rule set document, choosing YAML or JSON by extension.

    Raises:
        FileNotFoundError: If the file doesn't exist
        SerializationError: If the file cannot be read or is malformed
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Rules file not found: {path}")
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SerializationError(f"Failed to read {path}: {e}") from e
    return load_rule_set(text, format_for_path(path), kind)


def export_rules(rule_set: RuleSet, path: str | Path) -> None:
    """Write a rule set to a file.

    Raises:
        ConfigurationError: If the rule set is empty
        SerializationError: If the file cannot be written
    """
    if not len(rule_set):
        raise ConfigurationError("There are no rules to export")
    path = Path(path)
    _write_text(path, dump_rule_set(rule_set, format_for_path(path)))
    logger.info("Exported %d rule(s) to %s", len(rule_set), path)


def import_rules(rule_set: RuleSet, path: str | Path, mode: ImportMode = ImportMode.REPLACE) -> int:
    """Merge the rules of a file into a rule set.

    The rule set is only changed once the whole file has loaded successfully.

    Returns:
        Number of imported rules

    Raises:
        FileNotFoundError: If the file doesn't exist
        SerializationError: If the file is malformed, of another asset kind, or has no rules
    """
    imported = read_rules_file(path, rule_set.kind)
    if not len(imported):
        raise SerializationError(f"The file does not contain any rules: {path}")

    if ImportMode(mode) == ImportMode.REPLACE:
        rule_set.clear()
    rule_set.extend(imported.rules)
    logger.info("Imported %d rule(s) from %s (%s)", len(imported), path, ImportMode(mode).value)
    return len(imported)


class RuleStore:
    """Saves and restores the session's rule sets under a caller-supplied directory."""

    def __init__(self, directory: Optional[Path] = None, document_format: Optional[DocumentFormat] = None):
        settings = get_settings().store
        self.directory = Path(directory) if directory is not None else settings.directory
        self.document_format: DocumentFormat = document_format or settings.document_format
        self.last_error: Optional[SerializationError] = None

    def path_for(self, kind: str) -> Path:
        """Location of the saved rule set for an asset kind."""
        return self.directory / f"{kind}_rules.{self.document_format}"

    def save(self, rule_set: RuleSet) -> Path:
        """Persist a rule set, replacing any previously saved one of the same kind."""
        path = self.path_for(rule_set.kind)
        try:
            _write_text(path, dump_rule_set(rule_set, self.document_format))
        except SerializationError as e:
            logger.error("Failed to save %s rules: %s", rule_set.kind, e)
            raise
        logger.debug("Saved %d %s rule(s) to %s", len(rule_set), rule_set.kind, path)
        return path

    def load(self, kind: str) -> RuleSet:
        """Restore the saved rule set for an asset kind.

        A missing document yields an empty rule set. A malformed one also yields an
        empty rule set; the error is logged and kept in last_error.
        """
        self.last_error = None
        path = self.path_for(kind)
        if not path.exists():
            return RuleSet(kind=kind)
        try:
            rule_set = read_rules_file(path, kind)
        except SerializationError as e:
            logger.error("Failed to load %s rules from %s: %s", kind, path, e)
            self.last_error = e
            return RuleSet(kind=kind)
        logger.info("Loaded %d %s rule(s)", len(rule_set), kind)
        return rule_set
