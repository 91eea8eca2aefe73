import asyncio
import re
from typing import Any, Dict, List, Optional, Tuple, Union
from ghs.config import Settings, get_settings
from ghs.github import mutations, queries
from ghs.github.auth import CredentialResolver
from ghs.github.errors import PreconditionError, TransportError
from ghs.github.models import (
    AddCommentParams,
    AddDraftItemParams,
    AddProjectItemParams,
    ArchiveItemParams,
    Comment,
    CreateIssueParams,
    DeleteItemParams,
    Issue,
    IssueDetails,
    IssueListItem,
    IssueStateFilter,
    MoveItemParams,
    Project,
    ProjectColumn,
    ProjectIssueItem,
    ProjectItem,
    ProjectItemDetails,
    Repository,
    RepositoryRef,
    UpdateIssueParams,
)
from ghs.github.normalizer import (
    DEFAULT_STATUS_FIELD,
    normalize_project_item,
    normalize_project_item_details,
)
from ghs.github.owner import OwnerScope, resolve_in_owner_scope
from ghs.github.pagination import collect_pages
from ghs.github.reconciler import build_search_query, match_project_issue
from ghs.github.transport import GraphQLTransport, Transport
from ghs.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_LIMIT = 50

_ISSUE_STATES = {
    "open": ["OPEN"],
    "closed": ["CLOSED"],
    "all": ["OPEN", "CLOSED"],
}


def split_repo(repo: str) -> Tuple[str, str]:
    """"owner/name" 形式を分割する

    Raises:
        PreconditionError: 形式が不正な場合
    """
    owner, sep, name = (repo or "").strip().partition("/")
    if not sep or not owner or not name or "/" in name:
        raise PreconditionError(
            f"Invalid repository '{repo}'. Expected format: owner/name"
        )
    return owner, name


def parse_project_number(identifier: Union[int, str]) -> Optional[int]:
    """Project識別子が番号ならintを返す（タイトルなら None）"""
    if isinstance(identifier, int) and not isinstance(identifier, bool):
        return identifier
    text = str(identifier).strip()
    if re.fullmatch(r"\d+", text):
        return int(text)
    return None


def clamp_limit(limit: Optional[int]) -> int:
    if limit is None:
        return DEFAULT_LIMIT
    return max(1, limit)


def _login(node: Dict[str, Any]) -> Optional[str]:
    return (node.get("author") or {}).get("login")


def _to_issue(node: Dict[str, Any]) -> Issue:
    repository = node.get("repository") or {}
    return Issue(
        id=node["id"],
        number=node["number"],
        title=node["title"],
        body=node.get("body"),
        state=node["state"],
        url=node["url"],
        repository=RepositoryRef(
            owner=(repository.get("owner") or {}).get("login", ""),
            name=repository.get("name", ""),
        ),
    )


def _to_issue_details(node: Dict[str, Any]) -> IssueDetails:
    issue = _to_issue(node)
    return IssueDetails(
        **issue.model_dump(),
        createdAt=node["createdAt"],
        updatedAt=node["updatedAt"],
        author=_login(node),
    )


def _to_issue_list_item(node: Dict[str, Any]) -> IssueListItem:
    return IssueListItem(
        id=node["id"],
        number=node["number"],
        title=node["title"],
        state=node["state"],
        url=node["url"],
        createdAt=node["createdAt"],
        updatedAt=node["updatedAt"],
        author=_login(node),
    )


def _to_comment(node: Dict[str, Any]) -> Comment:
    return Comment(
        id=node["id"],
        url=node["url"],
        body=node.get("body") or "",
        createdAt=node["createdAt"],
        updatedAt=node["updatedAt"],
        author=_login(node),
    )


class GitHubClient:
    """GitHub Projects (V2) / Issues クライアント

    トランスポートは最初の呼び出し時に認証情報を解決して作成し、以降は使い回す。

    Example:
        async with GitHubClient() as client:
            projects = await client.get_projects("octo-org")
    """

    def __init__(
        self,
        token: Optional[str] = None,
        settings: Optional[Settings] = None,
        transport: Optional[Transport] = None,
    ):
        self.settings = settings or get_settings()
        self._resolver = CredentialResolver(self.settings, token=token)
        self._transport = transport
        self._owns_transport = transport is None
        self._transport_lock = asyncio.Lock()

    async def __aenter__(self) -> "GitHubClient":
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    async def close(self):
        """自前で作成したトランスポートを破棄（次回呼び出し時に再作成される）"""
        if self._owns_transport:
            self._transport = None

    async def _get_transport(self) -> Transport:
        if self._transport is not None:
            return self._transport

        async with self._transport_lock:
            if self._transport is None:
                token = await self._resolver.resolve_token()
                self._transport = GraphQLTransport(
                    token,
                    api_url=self.settings.GITHUB_API_URL,
                    timeout=self.settings.GITHUB_REQUEST_TIMEOUT,
                )
                logger.debug(f"GraphQL transport ready for {self.settings.GITHUB_API_URL}")
        return self._transport

    async def execute(
        self, query: str, variables: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """GraphQLドキュメントを実行

        Args:
            query: GraphQLクエリ文字列
            variables: クエリ変数

        Returns:
            Dict[str, Any]: レスポンスの data 部

        Raises:
            TransportError: GraphQLエラーまたはHTTPエラー
            ConfigurationError: 認証情報がない場合
        """
        transport = await self._get_transport()
        return await transport.execute(query, variables)

    async def _execute_or_none(
        self, query: str, variables: Dict[str, Any]
    ) -> Optional[Dict[str, Any]]:
        """NOT_FOUND を「見つからない」(None) として扱う execute"""
        try:
            return await self.execute(query, variables)
        except TransportError as e:
            if e.is_not_found:
                logger.debug(f"Not found: {variables}")
                return None
            raise

    # ---- Owner / Project ----

    async def get_project(self, owner: str, number: int) -> Optional[Project]:
        """番号でProjectを取得（Organization → User の順に探す）"""

        async def attempt(scope: OwnerScope) -> Optional[Project]:
            data = await self.execute(
                scope.project_query, {"owner": owner, "number": number}
            )
            project = scope.project(data)
            return Project(**project) if project else None

        return await resolve_in_owner_scope(owner, attempt)

    async def get_projects(self, owner: str) -> List[Project]:
        """ownerのProject一覧（全ページ）

        Organizationで1件以上見つかった場合、Userは問い合わせない。
        """

        async def attempt(scope: OwnerScope) -> List[Project]:
            return await collect_pages(
                self.execute,
                scope.projects_query,
                {"owner": owner},
                scope.projects,
                transform=lambda node: Project(**node),
            )

        return await resolve_in_owner_scope(owner, attempt) or []

    async def resolve_project(
        self, owner: str, identifier: Union[int, str]
    ) -> Optional[Project]:
        """番号またはタイトルからProjectを解決

        番号として解釈できる識別子は番号検索のみ行う。
        タイトルは前後の空白と大文字小文字を無視して完全一致で比較し、最初の一致を返す。
        """
        number = parse_project_number(identifier)
        if number is not None:
            return await self.get_project(owner, number)

        wanted = str(identifier).strip().lower()
        for project in await self.get_projects(owner):
            if project.title.strip().lower() == wanted:
                return project
        return None

    async def get_repositories(self, owner: str) -> List[Repository]:
        """ownerのリポジトリ一覧（更新日時の新しい順、全ページ）"""

        async def attempt(scope: OwnerScope) -> List[Repository]:
            return await collect_pages(
                self.execute,
                scope.repositories_query,
                {"owner": owner},
                scope.repositories,
                transform=lambda node: Repository(**node),
            )

        return await resolve_in_owner_scope(owner, attempt) or []

    # ---- Project board ----

    async def get_project_columns(
        self, project_id: str, status_field_name: str = DEFAULT_STATUS_FIELD
    ) -> List[ProjectColumn]:
        """Statusフィールドの選択肢（ボードの列）を取得

        Returns:
            List[ProjectColumn]: フィールドがない場合は空リスト
        """
        fields = await collect_pages(
            self.execute,
            queries.GET_PROJECT_FIELDS,
            {"projectId": project_id},
            lambda data: (data.get("node") or {}).get("fields"),
        )

        for field in fields:
            if field.get("name") == status_field_name and "options" in field:
                return [
                    ProjectColumn(id=field["id"], name=option["name"], optionId=option["id"])
                    for option in field.get("options") or []
                ]

        logger.debug(f"Field '{status_field_name}' not found in project {project_id}")
        return []

    async def get_project_items(
        self, project_id: str, status_field_name: str = DEFAULT_STATUS_FIELD
    ) -> List[ProjectItem]:
        """Projectの全アイテムを取得"""
        return await collect_pages(
            self.execute,
            queries.GET_PROJECT_ITEMS,
            {"projectId": project_id},
            lambda data: (data.get("node") or {}).get("items"),
            transform=lambda node: (
                normalize_project_item(node, status_field_name)
                if node.get("id")
                else None
            ),
        )

    async def get_project_item(
        self, item_id: str, status_field_name: str = DEFAULT_STATUS_FIELD
    ) -> Optional[ProjectItemDetails]:
        """アイテムIDからアイテム詳細を取得（ProjectV2Item 以外は None）"""
        data = await self._execute_or_none(queries.GET_PROJECT_ITEM, {"id": item_id})
        node = (data or {}).get("node")
        if not node or node.get("__typename") != "ProjectV2Item":
            return None
        return normalize_project_item_details(node, status_field_name)

    async def move_item(self, params: MoveItemParams):
        """アイテムのStatusを変更"""
        await self.execute(
            mutations.UPDATE_PROJECT_FIELD,
            {
                "projectId": params.project_id,
                "itemId": params.item_id,
                "fieldId": params.status_field_id,
                "value": {"singleSelectOptionId": params.status_option_id},
            },
        )
        logger.info(f"Moved item {params.item_id} to option {params.status_option_id}")

    async def move_item_to_status(
        self,
        project_id: str,
        item_id: str,
        status: str,
        status_field_name: str = DEFAULT_STATUS_FIELD,
    ) -> ProjectColumn:
        """ステータス名でアイテムを移動

        Returns:
            ProjectColumn: 移動先の列

        Raises:
            PreconditionError: 列がない、またはステータス名が見つからない場合
        """
        columns = await self.get_project_columns(project_id, status_field_name)
        if not columns:
            raise PreconditionError(
                f"Field '{status_field_name}' not found or has no options in project {project_id}"
            )

        wanted = status.strip().lower()
        column = next((c for c in columns if c.name.strip().lower() == wanted), None)
        if column is None:
            available = ", ".join(c.name for c in columns)
            raise PreconditionError(
                f"Status '{status}' not found. Available statuses: {available}"
            )

        await self.move_item(
            MoveItemParams(
                item_id=item_id,
                project_id=project_id,
                status_field_id=column.id,
                status_option_id=column.optionId,
            )
        )
        return column

    async def add_project_item(self, params: AddProjectItemParams) -> str:
        """既存のIssue/PRをProjectに追加

        Returns:
            str: 追加されたアイテムのID
        """
        data = await self.execute(
            mutations.ADD_TO_PROJECT,
            {"projectId": params.project_id, "contentId": params.content_id},
        )
        item_id = data["addProjectV2ItemById"]["item"]["id"]
        logger.info(f"Added {params.content_id} to project {params.project_id} as {item_id}")
        return item_id

    async def add_draft_item(self, params: AddDraftItemParams) -> str:
        """ProjectにDraft Issueを追加

        Returns:
            str: 追加されたアイテムのID
        """
        data = await self.execute(
            mutations.ADD_DRAFT_ISSUE,
            {
                "projectId": params.project_id,
                "title": params.title,
                "body": params.body,
            },
        )
        item_id = data["addProjectV2DraftIssue"]["projectItem"]["id"]
        logger.info(f"Created draft item {item_id} in project {params.project_id}")
        return item_id

    async def archive_project_item(self, params: ArchiveItemParams):
        """アイテムをアーカイブ（archived=False なら解除）"""
        mutation = (
            mutations.ARCHIVE_PROJECT_ITEM
            if params.archived
            else mutations.UNARCHIVE_PROJECT_ITEM
        )
        await self.execute(
            mutation, {"projectId": params.project_id, "itemId": params.item_id}
        )
        action = "Archived" if params.archived else "Unarchived"
        logger.info(f"{action} item {params.item_id}")

    async def delete_project_item(self, params: DeleteItemParams) -> Optional[str]:
        """Projectからアイテムを削除（Issue自体は残る）

        Returns:
            Optional[str]: 削除されたアイテムのID
        """
        data = await self.execute(
            mutations.DELETE_PROJECT_ITEM,
            {"projectId": params.project_id, "itemId": params.item_id},
        )
        logger.info(f"Deleted item {params.item_id} from project {params.project_id}")
        return (data.get("deleteProjectV2Item") or {}).get("deletedItemId")

    async def list_project_issues(
        self,
        owner: str,
        project_id: str,
        status_field_name: str = DEFAULT_STATUS_FIELD,
        state: IssueStateFilter = "open",
        limit: Optional[int] = DEFAULT_LIMIT,
        repo: Optional[str] = None,
    ) -> List[ProjectIssueItem]:
        """検索APIからProjectに紐付くIssueを取得

        検索結果は最大1000件まで。Draftは含まれない。
        """
        return await collect_pages(
            self.execute,
            queries.SEARCH_PROJECT_ISSUES,
            {"q": build_search_query(owner, state, repo)},
            lambda data: data.get("search"),
            limit=clamp_limit(limit),
            transform=lambda node: match_project_issue(
                node, project_id, status_field_name
            ),
        )

    # ---- Issues ----

    async def _get_repository_id(self, owner: str, repo: str) -> str:
        data = await self._execute_or_none(
            queries.GET_REPOSITORY_ID, {"owner": owner, "name": repo}
        )
        repository = (data or {}).get("repository")
        if not repository:
            raise PreconditionError(f"Repository {owner}/{repo} not found")
        return repository["id"]

    async def create_issue(self, params: CreateIssueParams) -> Issue:
        """Issueを作成"""
        repository_id = await self._get_repository_id(params.owner, params.repo)
        data = await self.execute(
            mutations.CREATE_ISSUE,
            {
                "repositoryId": repository_id,
                "title": params.title,
                "body": params.body,
            },
        )
        issue = _to_issue(data["createIssue"]["issue"])
        logger.info(f"Created issue {params.owner}/{params.repo}#{issue.number}")
        return issue

    async def update_issue(self, params: UpdateIssueParams) -> str:
        """Issueのタイトル・本文を更新（None の項目は変更しない）

        Returns:
            str: 更新したIssueのID
        """
        variables: Dict[str, Any] = {"issueId": params.issue_id}
        if params.title is not None:
            variables["title"] = params.title
        if params.body is not None:
            variables["body"] = params.body

        data = await self.execute(mutations.UPDATE_ISSUE, variables)
        logger.info(f"Updated issue {params.issue_id}")
        return data["updateIssue"]["issue"]["id"]

    async def close_issue(self, issue_id: str) -> str:
        """Issueをクローズ

        Returns:
            str: クローズ後の状態（"CLOSED"）
        """
        data = await self.execute(mutations.CLOSE_ISSUE, {"issueId": issue_id})
        logger.info(f"Closed issue {issue_id}")
        return data["closeIssue"]["issue"]["state"]

    async def add_comment(self, params: AddCommentParams):
        """Issue/PRにコメントを追加"""
        await self.execute(
            mutations.ADD_COMMENT,
            {"subjectId": params.subject_id, "body": params.body},
        )
        logger.info(f"Added comment to {params.subject_id}")

    async def get_issue(self, owner: str, repo: str, number: int) -> Optional[Issue]:
        """リポジトリと番号からIssueを取得"""
        data = await self._execute_or_none(
            queries.GET_ISSUE, {"owner": owner, "repo": repo, "number": number}
        )
        issue = ((data or {}).get("repository") or {}).get("issue")
        return _to_issue(issue) if issue else None

    async def get_issue_by_id(self, issue_id: str) -> Optional[IssueDetails]:
        """ノードIDからIssueを取得（Issue 以外は None）"""
        data = await self._execute_or_none(queries.GET_ISSUE_BY_ID, {"id": issue_id})
        node = (data or {}).get("node")
        if not node or node.get("__typename") != "Issue":
            return None
        return _to_issue_details(node)

    async def list_issues(
        self,
        owner: str,
        repo: str,
        state: IssueStateFilter = "open",
        limit: Optional[int] = DEFAULT_LIMIT,
    ) -> List[IssueListItem]:
        """リポジトリのIssue一覧（作成日時の新しい順）"""
        return await collect_pages(
            self.execute,
            queries.LIST_ISSUES,
            {
                "owner": owner,
                "repo": repo,
                "states": _ISSUE_STATES.get(state, _ISSUE_STATES["open"]),
            },
            lambda data: (data.get("repository") or {}).get("issues"),
            limit=clamp_limit(limit),
            transform=_to_issue_list_item,
        )

    async def list_issue_comments(
        self, issue_id: str, limit: Optional[int] = DEFAULT_LIMIT
    ) -> List[Comment]:
        """Issueのコメント一覧（投稿順）"""

        def comments(data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
            node = data.get("node") or {}
            if node.get("__typename") != "Issue":
                return None
            return node.get("comments")

        return await collect_pages(
            self.execute,
            queries.LIST_ISSUE_COMMENTS,
            {"id": issue_id},
            comments,
            limit=clamp_limit(limit),
            transform=_to_comment,
        )
