import pytest
from ghs.config import Settings
from ghs.github.client import GitHubClient
from fakes import BoardTransport, FakeTransport

ENV_KEYS = (
    "GITHUB_TOKEN",
    "GITHUB_APP_ID",
    "GITHUB_APP_PRIVATE_KEY",
    "GITHUB_APP_INSTALLATION_ID",
    "GITHUB_API_URL",
    "GITHUB_REQUEST_TIMEOUT",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """実行環境のGitHub関連の環境変数を無効化"""
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def settings():
    return Settings(_env_file=None, GITHUB_TOKEN="test-token")


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def client(settings, transport):
    return GitHubClient(settings=settings, transport=transport)


@pytest.fixture
def board():
    return BoardTransport()


@pytest.fixture
def board_client(settings, board):
    return GitHubClient(settings=settings, transport=board)
