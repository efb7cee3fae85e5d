import pytest

from importrules.config import EngineSettings, get_settings, set_settings


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path):
    """Give every test fresh settings with the rule store under a temp directory."""
    original_settings = get_settings()

    test_settings = EngineSettings()
    test_settings.store.directory = tmp_path / "store"
    set_settings(test_settings)

    yield test_settings

    set_settings(original_settings)
