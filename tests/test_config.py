import pytest
from pydantic import ValidationError
from ghs.config import Settings


def test_defaults():
    settings = Settings(_env_file=None)

    assert settings.GITHUB_TOKEN is None
    assert settings.GITHUB_API_URL == "https://api.github.com/graphql"
    assert settings.GITHUB_REQUEST_TIMEOUT == 30.0
    assert settings.has_app_credentials is False


def test_blank_values_are_unset():
    settings = Settings(_env_file=None, GITHUB_TOKEN="   ", GITHUB_APP_ID="")

    assert settings.GITHUB_TOKEN is None
    assert settings.GITHUB_APP_ID is None


def test_private_key_newlines_are_expanded():
    settings = Settings(_env_file=None, GITHUB_APP_PRIVATE_KEY="line1\\nline2")

    assert settings.GITHUB_APP_PRIVATE_KEY == "line1\nline2"


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("GITHUB_TOKEN", "from-env")
    monkeypatch.setenv("GITHUB_APP_ID", "1")
    monkeypatch.setenv("GITHUB_APP_PRIVATE_KEY", "key")
    monkeypatch.setenv("GITHUB_APP_INSTALLATION_ID", "2")

    settings = Settings(_env_file=None)

    assert settings.GITHUB_TOKEN == "from-env"
    assert settings.has_app_credentials is True


def test_log_level_is_normalized():
    assert Settings(_env_file=None, LOG_LEVEL="debug").LOG_LEVEL == "DEBUG"


@pytest.mark.parametrize(
    "overrides",
    [{"LOG_LEVEL": "LOUD"}, {"GITHUB_REQUEST_TIMEOUT": 0}, {"GITHUB_REQUEST_TIMEOUT": -1}],
)
def test_invalid_values(overrides):
    with pytest.raises(ValidationError):
        Settings(_env_file=None, **overrides)
