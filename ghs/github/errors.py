from typing import Any, Dict, List, Optional


class GitHubError(Exception):
    """ghs の例外の基底クラス"""

    pass


class TransportError(GitHubError):
    """GraphQLリクエストの失敗

    HTTPエラーの場合は status、GraphQLエラーの場合は errors（各要素に
    "type" を含む）を保持する。
    """

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        errors: Optional[List[Dict[str, Any]]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status = status
        self.errors = errors

    @property
    def is_not_found(self) -> bool:
        """NOT_FOUND 型のGraphQLエラーを含むか"""
        return any(
            isinstance(e, dict) and e.get("type") == "NOT_FOUND"
            for e in self.errors or []
        )


class ConfigurationError(GitHubError):
    """利用できる認証情報がない"""

    pass


class PreconditionError(GitHubError, ValueError):
    """呼び出し側の入力が不正（owner/repo の形式、存在しないステータス名など）"""

    pass
