import asyncio
import requests
from typing import Any, Dict, Optional, Protocol
from ghs.github.errors import TransportError
from ghs.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_API_URL = "https://api.github.com/graphql"


class Transport(Protocol):
    """GraphQLドキュメントを実行するもの"""

    async def execute(
        self, query: str, variables: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]: ...


class GraphQLTransport:
    """GitHub GraphQL APIへの単発リクエスト（リトライなし）"""

    def __init__(
        self, token: str, api_url: str = DEFAULT_API_URL, timeout: float = 30.0
    ):
        self.api_url = api_url
        self.timeout = timeout
        self.headers = {
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json",
        }

    async def execute(
        self, query: str, variables: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """GraphQLクエリを実行

        Args:
            query: GraphQLクエリ文字列
            variables: クエリ変数

        Returns:
            Dict[str, Any]: レスポンスの data 部

        Raises:
            TransportError: GraphQLエラー、HTTPエラー、通信エラー
        """
        payload = {"query": query}
        if variables:
            payload["variables"] = variables

        # requestsは同期ライブラリなので、非同期コンテキストで実行
        loop = asyncio.get_running_loop()
        try:
            response = await loop.run_in_executor(
                None,
                lambda: requests.post(
                    self.api_url,
                    json=payload,
                    headers=self.headers,
                    timeout=self.timeout,
                ),
            )
        except requests.RequestException as e:
            raise TransportError(f"GraphQL request failed: {e}") from e

        if not response.ok:
            raise self._http_error(response)

        try:
            data = response.json()
        except ValueError as e:
            raise TransportError(
                "GraphQL response is not valid JSON", status=response.status_code
            ) from e

        if data.get("errors"):
            errors = data["errors"]
            logger.debug(f"GraphQL errors: {errors}")
            messages = "; ".join(
                str(e.get("message") or e) if isinstance(e, dict) else str(e)
                for e in errors
            )
            raise TransportError(f"GraphQL errors: {messages}", errors=errors)

        return data.get("data") or {}

    @staticmethod
    def _http_error(response: requests.Response) -> TransportError:
        message = f"GraphQL request failed with status {response.status_code}"
        errors = None
        try:
            body = response.json()
            if isinstance(body, dict):
                if body.get("message"):
                    message += f": {body['message']}"
                errors = body.get("errors") or None
        except ValueError:
            # JSONでないボディはステータスだけ返す
            pass
        return TransportError(message, status=response.status_code, errors=errors)
