"""Tests for rule set export, import and session storage."""

import pytest

from importrules.errors import ConfigurationError, RuleParseError, SerializationError
from importrules.rules import RuleSet, load_rule_set
from importrules.store import ImportMode, RuleStore, export_rules, import_rules, read_rules_file


def _rules(*names: str, kind: str = "model") -> RuleSet:
    rule_set = RuleSet(kind=kind)
    for name in names:
        rule_set.add_rule(name).set_override("read_write", True)
    return rule_set


class TestExportImport:
    """Tests for exporting to and importing from files."""

    @pytest.mark.parametrize("filename", ["rules.yaml", "rules.json"])
    def test_export_then_import(self, tmp_path, filename):
        path = tmp_path / filename
        export_rules(_rules("A", "B"), path)

        target = RuleSet(kind="model")
        count = import_rules(target, path)

        assert count == 2
        assert [r.name for r in target] == ["A", "B"]
        assert target == _rules("A", "B")

    def test_export_creates_parent_directory(self, tmp_path):
        path = tmp_path / "nested" / "dir" / "rules.yaml"
        export_rules(_rules("A"), path)
        assert path.exists()

    def test_export_empty_rule_set(self, tmp_path):
        path = tmp_path / "rules.yaml"
        with pytest.raises(ConfigurationError, match="no rules to export"):
            export_rules(RuleSet(kind="model"), path)
        assert not path.exists()

    def test_json_extension_writes_json(self, tmp_path):
        path = tmp_path / "rules.json"
        export_rules(_rules("A"), path)
        assert path.read_text().lstrip().startswith("{")

    def test_replace_mode(self, tmp_path):
        path = tmp_path / "rules.yaml"
        export_rules(_rules("Imported"), path)
        target = _rules("Existing")

        import_rules(target, path, ImportMode.REPLACE)

        assert [r.name for r in target] == ["Imported"]

    def test_append_mode(self, tmp_path):
        path = tmp_path / "rules.yaml"
        export_rules(_rules("Imported"), path)
        target = _rules("Existing")

        import_rules(target, path, ImportMode.APPEND)

        assert [r.name for r in target] == ["Existing", "Imported"]

    def test_file_without_rules(self, tmp_path):
        path = tmp_path / "rules.yaml"
        path.write_text("version: 1\nkind: model\nrules: []\n")
        target = _rules("Existing")

        with pytest.raises(SerializationError, match="does not contain any rules"):
            import_rules(target, path)

        assert [r.name for r in target] == ["Existing"]

    def test_malformed_file_leaves_rules_untouched(self, tmp_path):
        path = tmp_path / "rules.yaml"
        path.write_text("kind: model\nrules:\n  - name: Bad\n    overrides: {normals: smooth}\n")
        target = _rules("Existing")

        with pytest.raises(RuleParseError):
            import_rules(target, path)

        assert [r.name for r in target] == ["Existing"]

    def test_wrong_kind(self, tmp_path):
        path = tmp_path / "rules.yaml"
        export_rules(_rules("A"), path)
        with pytest.raises(SerializationError, match="Expected texture rules"):
            import_rules(RuleSet(kind="texture"), path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="Rules file not found"):
            read_rules_file(tmp_path / "missing.yaml")


class TestRuleStore:
    """Tests for session persistence."""

    def test_uses_configured_directory(self, isolated_settings):
        store = RuleStore()
        assert store.directory == isolated_settings.store.directory
        assert store.path_for("model").name == "model_rules.yaml"

    def test_save_and_load(self, tmp_path):
        store = RuleStore(tmp_path / "session")
        rules = _rules("A", "B")
        rules[1].enabled = False

        path = store.save(rules)
        loaded = store.load("model")

        assert path.exists()
        assert loaded == rules
        assert store.last_error is None

    def test_save_replaces_previous(self, tmp_path):
        store = RuleStore(tmp_path)
        store.save(_rules("Old"))
        store.save(_rules("New"))
        assert [r.name for r in store.load("model")] == ["New"]

    def test_kinds_are_stored_separately(self, tmp_path):
        store = RuleStore(tmp_path, document_format="json")
        store.save(_rules("Model rule"))
        store.save(_rules("Texture rule", kind="texture"))
        assert [r.name for r in store.load("model")] == ["Model rule"]
        assert [r.name for r in store.load("texture")] == ["Texture rule"]
        assert store.path_for("texture").suffix == ".json"

    def test_missing_document_loads_empty(self, tmp_path):
        store = RuleStore(tmp_path)
        loaded = store.load("model")
        assert loaded.kind == "model"
        assert len(loaded) == 0
        assert store.last_error is None

    def test_malformed_document_loads_empty(self, tmp_path, caplog):
        store = RuleStore(tmp_path)
        store.path_for("model").write_text("kind: [model")

        loaded = store.load("model")

        assert len(loaded) == 0
        assert isinstance(store.last_error, RuleParseError)
        assert "Failed to load model rules" in caplog.text

    def test_saved_document_is_readable_text(self, tmp_path):
        store = RuleStore(tmp_path)
        path = store.save(_rules("A"))
        assert load_rule_set(path.read_text(), kind="model")[0].name == "A"
