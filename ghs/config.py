import logging
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator
from functools import lru_cache
from typing import Optional


class Settings(BaseSettings):
    """アプリケーション設定

    クライアントには明示的に渡す値オブジェクトとして扱う。
    CLIでは環境変数と .env から読み込んだものを使う。
    """

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # GitHub (Personal Access Token)
    GITHUB_TOKEN: Optional[str] = None

    # GitHub App
    GITHUB_APP_ID: Optional[str] = None
    GITHUB_APP_PRIVATE_KEY: Optional[str] = None
    GITHUB_APP_INSTALLATION_ID: Optional[str] = None

    # API
    GITHUB_API_URL: str = "https://api.github.com/graphql"
    GITHUB_REQUEST_TIMEOUT: float = 30.0

    # Logging
    LOG_LEVEL: str = "WARNING"
    LOG_FILE: Optional[str] = None

    @field_validator(
        "GITHUB_TOKEN",
        "GITHUB_APP_ID",
        "GITHUB_APP_PRIVATE_KEY",
        "GITHUB_APP_INSTALLATION_ID",
        "LOG_FILE",
    )
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        """空文字列は未設定として扱う"""
        if v is None or not v.strip():
            return None
        return v.strip()

    @field_validator("GITHUB_APP_PRIVATE_KEY")
    @classmethod
    def expand_private_key(cls, v: Optional[str]) -> Optional[str]:
        """1行で書かれた秘密鍵の \\n を改行に戻す"""
        if v is None:
            return v
        return v.replace("\\n", "\n")

    @field_validator("GITHUB_REQUEST_TIMEOUT")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("GITHUB_REQUEST_TIMEOUT must be greater than 0")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """ログレベル名の検証"""
        level = v.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(
                "Invalid LOG_LEVEL. Must be one of: DEBUG, INFO, WARNING, ERROR, CRITICAL"
            )
        return level

    @property
    def has_app_credentials(self) -> bool:
        """GitHub Appの認証情報が3つとも揃っているか"""
        return bool(
            self.GITHUB_APP_ID
            and self.GITHUB_APP_PRIVATE_KEY
            and self.GITHUB_APP_INSTALLATION_ID
        )


@lru_cache()
def get_settings() -> Settings:
    """設定のシングルトンインスタンスを取得"""
    return Settings()
