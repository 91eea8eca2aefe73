import asyncio
from typing import Optional
from github import Auth, GithubIntegration
from ghs.config import Settings
from ghs.github.errors import ConfigurationError
from ghs.utils.logger import get_logger

logger = get_logger(__name__)

MISSING_CREDENTIALS_MESSAGE = (
    "GitHub authentication failed. Please provide either GITHUB_TOKEN or "
    "(GITHUB_APP_ID, GITHUB_APP_PRIVATE_KEY, GITHUB_APP_INSTALLATION_ID) "
    "in your environment or .env file, or pass a token explicitly."
)


def exchange_installation_token(
    app_id: str, private_key: str, installation_id: str
) -> str:
    """GitHub Appの認証情報からインストールトークンを発行する（同期）"""
    auth = Auth.AppAuth(int(app_id), private_key)
    integration = GithubIntegration(auth=auth)
    return integration.get_access_token(int(installation_id)).token


class CredentialResolver:
    """Bearerトークンの解決

    優先順位: 明示的なトークン → GitHub App → GITHUB_TOKEN
    """

    def __init__(self, settings: Settings, token: Optional[str] = None):
        self.settings = settings
        self.token = token

    async def resolve_token(self) -> str:
        """トークンを取得

        Returns:
            str: Bearerトークン

        Raises:
            ConfigurationError: どの認証情報も使えない場合
        """
        if self.token:
            return self.token

        if self.settings.has_app_credentials:
            loop = asyncio.get_running_loop()
            try:
                token = await loop.run_in_executor(
                    None,
                    lambda: exchange_installation_token(
                        self.settings.GITHUB_APP_ID,
                        self.settings.GITHUB_APP_PRIVATE_KEY,
                        self.settings.GITHUB_APP_INSTALLATION_ID,
                    ),
                )
                logger.debug("Authenticated as GitHub App installation")
                return token
            except Exception as e:
                logger.warning(
                    f"GitHub App auth failed: {e}. Checking for GITHUB_TOKEN fallback..."
                )

        if self.settings.GITHUB_TOKEN:
            return self.settings.GITHUB_TOKEN

        raise ConfigurationError(MISSING_CREDENTIALS_MESSAGE)
