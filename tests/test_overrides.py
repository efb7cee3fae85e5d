"""Tests for override values."""

from importrules.overrides import DONT_CHANGE, DontChange, SetValue, is_set


class TestOverrideValue:
    """Tests for the DONT_CHANGE sentinel and SetValue."""

    def test_dont_change_is_not_set(self):
        assert not is_set(DONT_CHANGE)
        assert isinstance(DONT_CHANGE, DontChange)

    def test_set_value_is_set(self):
        assert is_set(SetValue(0.01))

    def test_dont_change_never_equals_a_set_value(self):
        """DONT_CHANGE differs from any SetValue, including one holding its own token."""
        assert DONT_CHANGE != SetValue(None)
        assert DONT_CHANGE != SetValue("dont_change")
        assert DONT_CHANGE != SetValue(False)

    def test_set_values_compare_by_value(self):
        assert SetValue(1024) == SetValue(1024)
        assert SetValue(1024) != SetValue(2048)
