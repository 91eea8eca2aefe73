from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Optional, Sequence, TypeVar
from ghs.github import queries
from ghs.github.errors import TransportError
from ghs.utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class OwnerScope:
    """ownerの解釈（Organization / User）

    スキーマに共通のowner型がないため、ルートごとに別のクエリを持つ。
    """

    root: str
    project_query: str
    projects_query: str
    repositories_query: str

    def owner_node(self, data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """レスポンスからowner（organization / user）ノードを取り出す"""
        return data.get(self.root)

    def project(self, data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        return (self.owner_node(data) or {}).get("projectV2")

    def projects(self, data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        return (self.owner_node(data) or {}).get("projectsV2")

    def repositories(self, data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        return (self.owner_node(data) or {}).get("repositories")


ORGANIZATION = OwnerScope(
    root="organization",
    project_query=queries.GET_ORG_PROJECT,
    projects_query=queries.LIST_ORG_PROJECTS,
    repositories_query=queries.LIST_ORG_REPOSITORIES,
)

USER = OwnerScope(
    root="user",
    project_query=queries.GET_USER_PROJECT,
    projects_query=queries.LIST_USER_PROJECTS,
    repositories_query=queries.LIST_USER_REPOSITORIES,
)

# 試行順: Organization → User
OWNER_SCOPES = (ORGANIZATION, USER)


async def resolve_in_owner_scope(
    owner: str,
    attempt: Callable[[OwnerScope], Awaitable[Optional[T]]],
    scopes: Sequence[OwnerScope] = OWNER_SCOPES,
) -> Optional[T]:
    """ownerをスコープ順に試し、最初に値（None / 空リスト以外）が得られた結果を返す

    最後以外のスコープで起きたエラーは次のスコープへフォールバックする
    （NOT_FOUND は黙って、それ以外は警告を出して）。
    最後のスコープの NOT_FOUND は「見つからない」として None を返し、
    それ以外のエラーはそのまま送出する。

    Args:
        owner: Organization名またはユーザー名（ログ用）
        attempt: スコープを受け取り1回分の問い合わせを行うコルーチン関数
        scopes: 試すスコープの順序

    Returns:
        最初に見つかった結果。どのスコープでも見つからなければ None
    """
    for index, scope in enumerate(scopes):
        is_last = index == len(scopes) - 1
        try:
            result = await attempt(scope)
        except TransportError as e:
            if e.is_not_found:
                logger.debug(f"{scope.root} '{owner}' not found")
                continue
            if is_last:
                raise
            logger.warning(f"Error fetching {scope.root} '{owner}': {e.message}")
            continue

        if result:
            return result

    return None
