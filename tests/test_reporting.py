"""Tests for console reporting."""

import io

import pytest
from rich.console import Console
from rich.logging import RichHandler

from importrules.models.result import AssetFailure, BatchResult
from importrules.pipeline import plan_batch
from importrules.reporting import display_batch_result, display_plan, display_rule_set, setup_logging
from importrules.rules import RuleSet
from tests.helpers import make_model


@pytest.fixture
def out() -> Console:
    return Console(file=io.StringIO(), width=200, color_system=None)


def _text(console: Console) -> str:
    return console.file.getvalue()


class TestDisplayRuleSet:
    def test_empty(self, out):
        display_rule_set(RuleSet(kind="model"), out)
        assert "No model rules defined." in _text(out)

    def test_lists_rules_with_overrides(self, out):
        rule_set = RuleSet(kind="model")
        rule_set.add_rule("ScaleDown").set_override("read_write", True)
        rule_set.add_rule("Idle").enabled = False

        display_rule_set(rule_set, out)

        text = _text(out)
        assert "Model Rules" in text
        assert "ScaleDown" in text
        assert "read_write=True" in text
        assert "no changes" in text

    def test_shows_texture_warnings(self, out):
        rule_set = RuleSet(kind="texture")
        rule_set.add_rule("Quality").set_override("compression_quality", "best")

        display_rule_set(rule_set, out)

        assert "select a compression format" in _text(out)


class TestDisplayResults:
    def test_plan(self, out):
        rule_set = RuleSet(kind="model")
        rule_set.add_rule("ScaleDown").set_override("scale_factor", 0.01)
        plans = plan_batch(rule_set, [make_model("Assets/a.fbx"), make_model("Assets/b.fbx", global_scale=0.01)])

        display_plan(plans, out)

        text = _text(out)
        assert "1 of 2 asset(s) would change" in text
        assert "Assets/a.fbx" in text
        assert "global_scale → 0.01" in text

    def test_batch_result_with_failures(self, out):
        result = BatchResult(
            attempted=3,
            modified=1,
            failed=[AssetFailure(path="Assets/locked.fbx", reason="file is read-only")],
        )

        display_batch_result(result, out)

        text = _text(out)
        assert "Summary" in text
        assert "Failed Assets" in text
        assert "Assets/locked.fbx" in text
        assert "file is read-only" in text

    def test_batch_result_without_failures(self, out):
        display_batch_result(BatchResult(attempted=2, modified=2), out)
        assert "Failed Assets" not in _text(out)


class TestSetupLogging:
    """Tests for the rich logging setup."""

    def test_uses_configured_level(self, monkeypatch, isolated_settings):
        calls = []
        monkeypatch.setattr("importrules.reporting.logging.basicConfig", lambda **kwargs: calls.append(kwargs))
        isolated_settings.log_level = "DEBUG"

        setup_logging()

        assert calls[0]["level"] == "DEBUG"
        assert isinstance(calls[0]["handlers"][0], RichHandler)

    def test_explicit_level(self, monkeypatch):
        calls = []
        monkeypatch.setattr("importrules.reporting.logging.basicConfig", lambda **kwargs: calls.append(kwargs))

        setup_logging("WARNING")

        assert calls[0]["level"] == "WARNING"
