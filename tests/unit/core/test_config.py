"""Unit tests for ListingSettings."""

from __future__ import annotations

import pytest

from quotelist.core import ConfigurationError, FailurePolicy, ListingSettings

ENV_VARS = (
    "CLOUDINARY_CLOUD_NAME",
    "CLOUDINARY_API_KEY",
    "CLOUDINARY_API_SECRET",
    "CLOUDINARY_FOLDER",
    "QUOTE_PREFIX",
    "SITE_BASE_URL",
    "QUOTELIST_FETCH_TIMEOUT",
    "QUOTELIST_FAILURE_POLICY",
)


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Empty environment and a working directory without a .env file."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return monkeypatch


def test_defaults(clean_env):
    settings = ListingSettings()
    assert settings.cloud_name is None
    assert settings.folder == "quotes"
    assert settings.quote_prefix == "q-"
    assert settings.site_base_url == ""
    assert settings.fetch_timeout == 10.0
    assert settings.failure_policy is FailurePolicy.PARTIAL
    assert settings.has_credentials is False


def test_reads_hosted_function_variables(clean_env):
    clean_env.setenv("CLOUDINARY_CLOUD_NAME", "demo")
    clean_env.setenv("CLOUDINARY_API_KEY", "key")
    clean_env.setenv("CLOUDINARY_API_SECRET", "secret")
    clean_env.setenv("CLOUDINARY_FOLDER", "offers")
    clean_env.setenv("QUOTE_PREFIX", "o-")
    clean_env.setenv("SITE_BASE_URL", "https://example.com/app")
    clean_env.setenv("QUOTELIST_FAILURE_POLICY", "fail_fast")
    clean_env.setenv("QUOTELIST_FETCH_TIMEOUT", "2.5")

    settings = ListingSettings()

    assert settings.cloud_name == "demo"
    assert settings.api_key == "key"
    assert settings.api_secret.get_secret_value() == "secret"
    assert settings.folder == "offers"
    assert settings.quote_prefix == "o-"
    assert settings.site_base_url == "https://example.com/app"
    assert settings.failure_policy is FailurePolicy.FAIL_FAST
    assert settings.fetch_timeout == 2.5
    assert settings.has_credentials is True


def test_blank_folder_and_prefix_use_defaults(clean_env):
    clean_env.setenv("CLOUDINARY_FOLDER", "")
    clean_env.setenv("QUOTE_PREFIX", "  ")

    settings = ListingSettings()

    assert settings.folder == "quotes"
    assert settings.quote_prefix == "q-"


def test_secret_is_not_rendered(clean_env):
    settings = ListingSettings(cloud_name="demo", api_key="key", api_secret="hunter2")
    assert "hunter2" not in repr(settings)


@pytest.mark.parametrize(
    "missing",
    ["cloud_name", "api_key", "api_secret"],
)
def test_require_credentials_raises_when_any_is_missing(clean_env, missing):
    values = {"cloud_name": "demo", "api_key": "key", "api_secret": "secret"}
    values[missing] = ""
    settings = ListingSettings(**values)

    with pytest.raises(ConfigurationError, match="Missing Cloudinary config"):
        settings.require_credentials()


def test_require_credentials_passes_when_complete(clean_env):
    ListingSettings(cloud_name="demo", api_key="key", api_secret="secret").require_credentials()


def test_invalid_failure_policy_rejected(clean_env):
    clean_env.setenv("QUOTELIST_FAILURE_POLICY", "sometimes")
    with pytest.raises(ValueError):
        ListingSettings()
