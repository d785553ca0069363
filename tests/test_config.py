import pytest
from pydantic import ValidationError

from atomicwork_mcp.config import DEFAULT_BASE_URL, Settings
from atomicwork_mcp.errors import ConfigurationError

_ENV_VARS = (
    "ATOMICWORK_API_KEY",
    "ATOMICWORK_BASE_URL",
    "ATOMICWORK_USER_ID",
    "ATOMICWORK_WORKSPACE_ID",
    "ATOMICWORK_TIMEOUT",
    "LOG_LEVEL",
)


@pytest.fixture
def clean_env(monkeypatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_missing_api_key_is_allowed(clean_env):
    settings = Settings(_env_file=None)
    assert settings.ATOMICWORK_API_KEY == ""
    assert not settings.has_api_key
    assert settings.ATOMICWORK_BASE_URL == DEFAULT_BASE_URL
    assert settings.ATOMICWORK_TIMEOUT is None


def test_reads_environment(clean_env, monkeypatch):
    monkeypatch.setenv("ATOMICWORK_API_KEY", "abc")
    monkeypatch.setenv("ATOMICWORK_WORKSPACE_ID", "9")
    monkeypatch.setenv("ATOMICWORK_TIMEOUT", "12.5")
    settings = Settings(_env_file=None)
    assert settings.has_api_key
    assert settings.ATOMICWORK_WORKSPACE_ID == "9"
    assert settings.ATOMICWORK_TIMEOUT == 12.5


def test_empty_timeout_means_no_timeout(clean_env, monkeypatch):
    monkeypatch.setenv("ATOMICWORK_TIMEOUT", "")
    assert Settings(_env_file=None).ATOMICWORK_TIMEOUT is None


def test_base_url_trailing_slash_stripped():
    settings = Settings(ATOMICWORK_BASE_URL="https://x.atomicwork.com/api/v1/", _env_file=None)
    assert settings.ATOMICWORK_BASE_URL == "https://x.atomicwork.com/api/v1"
    assert settings.web_url == "https://x.atomicwork.com"


def test_base_url_requires_scheme():
    with pytest.raises(ValidationError):
        Settings(ATOMICWORK_BASE_URL="x.atomicwork.com", _env_file=None)


def test_invalid_log_level():
    with pytest.raises(ValidationError):
        Settings(LOG_LEVEL="chatty", _env_file=None)


def test_assignee_id_parsed_as_int():
    assert Settings(ATOMICWORK_USER_ID=" 1234 ", _env_file=None).assignee_id() == 1234


def test_assignee_id_invalid():
    with pytest.raises(ConfigurationError) as exc:
        Settings(ATOMICWORK_USER_ID="me", _env_file=None).assignee_id()
    assert "ATOMICWORK_USER_ID" in exc.value.message
