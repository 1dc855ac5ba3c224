import pytest

from cosmos_sample import config
from cosmos_sample.config import ConfigurationError, Settings
from cosmos_sample.utils import profiler

ACCOUNT_ENV = ["COSMOS_ENDPOINT", "ACCOUNT_HOST", "COSMOS_KEY", "ACCOUNT_KEY"]


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    for name in ACCOUNT_ENV:
        monkeypatch.delenv(name, raising=False)
    # Keep a developer's .env out of the picture.
    monkeypatch.chdir(tmp_path)
    config.get_settings.cache_clear()
    yield
    config.get_settings.cache_clear()


def test_get_settings_defaults(clean_env):
    settings = config.get_settings()
    assert settings.database_name == "MainDB"
    assert settings.container_name == "Employee"
    assert settings.partition_key_path == "/lastName"
    assert settings.throughput == 400
    assert settings.consistency_level == "Eventual"
    assert settings.preferred_regions == ["West US"]
    assert settings.query_text == "SELECT * FROM Family"
    assert settings.page_size == 10
    assert settings.query_metrics_enabled is True
    assert settings.create_items is False
    assert settings.read_items is False


def test_get_settings_is_cached(clean_env):
    assert config.get_settings() is config.get_settings()


def test_account_credentials_missing_is_hard_error(clean_env):
    with pytest.raises(ConfigurationError, match="COSMOS_ENDPOINT, COSMOS_KEY"):
        Settings().account_credentials()


def test_account_credentials_from_sample_env_names(clean_env, monkeypatch):
    monkeypatch.setenv("ACCOUNT_HOST", "https://example.documents.azure.com:443/")
    monkeypatch.setenv("ACCOUNT_KEY", "c2VjcmV0")

    endpoint, key = Settings().account_credentials()

    assert endpoint == "https://example.documents.azure.com:443/"
    assert key == "c2VjcmV0"


def test_settings_reads_demo_toggles_and_regions(clean_env, monkeypatch):
    monkeypatch.setenv("DEMO_CREATE_ITEMS", "true")
    monkeypatch.setenv("DEMO_PAGE_SIZE", "25")
    monkeypatch.setenv("COSMOS_PREFERRED_REGIONS", '["East US", "West Europe"]')

    settings = Settings()

    assert settings.create_items is True
    assert settings.page_size == 25
    assert settings.preferred_regions == ["East US", "West Europe"]


def test_key_is_not_exposed_in_repr():
    settings = Settings(cosmos_endpoint="https://localhost:8081/", cosmos_key="top-secret")
    assert "top-secret" not in repr(settings)


def test_profile_block_measures_failed_block():
    with pytest.raises(RuntimeError):
        with profiler.profile_block("boom") as stats:
            raise RuntimeError("boom")
    assert stats.label == "boom"
    assert stats.duration_seconds >= 0.0
    assert stats.end_ts >= stats.start_ts
    assert stats.peak_rss_bytes and stats.peak_rss_bytes > 0
