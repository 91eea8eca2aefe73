from pydantic import BaseModel, ConfigDict, Field
from typing import List, Literal, Optional

IssueStateFilter = Literal["open", "closed", "all"]


class Project(BaseModel):
    """GitHub Project (V2)"""

    id: str
    number: int
    title: str
    url: str
    shortDescription: Optional[str] = None


class ProjectRef(BaseModel):
    """アイテムから辿った所属Project"""

    id: str
    title: str
    number: int


class ProjectColumn(BaseModel):
    """Statusフィールドの選択肢（ボードの列）

    id は選択肢ではなくフィールドのID。同じフィールドの選択肢は全て同じ id を持つ。
    """

    id: str
    name: str
    optionId: str


class Repository(BaseModel):
    """GitHubリポジトリ"""

    id: str
    name: str
    nameWithOwner: str


class RepositoryRef(BaseModel):
    """Issueの所属リポジトリ"""

    owner: str
    name: str


class Issue(BaseModel):
    """GitHub Issue"""

    id: str
    number: int
    title: str
    body: Optional[str] = None
    state: str
    url: str
    repository: RepositoryRef


class IssueDetails(Issue):
    """GitHub Issue（作成・更新日時と作成者つき）"""

    createdAt: str
    updatedAt: str
    author: Optional[str] = None


class IssueListItem(BaseModel):
    """Issue一覧の1件"""

    id: str
    number: int
    title: str
    state: str
    url: str
    createdAt: str
    updatedAt: str
    author: Optional[str] = None


class Comment(BaseModel):
    """Issueコメント"""

    id: str
    url: str
    body: str
    createdAt: str
    updatedAt: str
    author: Optional[str] = None


class ItemContent(BaseModel):
    """Projectアイテムの中身（Issue / PR / Draft を平坦化したもの）

    id はコンテンツのノードID（コメント・更新・クローズに使う）。
    中身が見えない（REDACTED）アイテムでは None。
    """

    id: Optional[str] = None
    number: int = 0
    title: str
    url: str = ""
    repository: str = "N/A"


class ItemContentDetails(ItemContent):
    """アイテム詳細用の中身（型名つき）"""

    model_config = ConfigDict(populate_by_name=True)

    typename: Optional[str] = Field(default=None, alias="__typename")


class ProjectItem(BaseModel):
    """GitHub Projectアイテム

    id はアイテムのノードID（移動・アーカイブ・削除に使う）。
    """

    id: str
    type: Optional[str] = None
    content: ItemContent
    status: Optional[str] = None  # "Todo", "In Progress", "Done"


class ProjectItemDetails(BaseModel):
    """GitHub Projectアイテム詳細"""

    id: str
    isArchived: bool = False
    project: Optional[ProjectRef] = None
    content: ItemContentDetails
    status: Optional[str] = None


class ProjectIssueItem(BaseModel):
    """Projectに紐付くIssue（検索経由）"""

    issue: IssueListItem
    projectItemId: str
    status: Optional[str] = None


class CreateIssueParams(BaseModel):
    """Issue作成パラメータ"""

    owner: str
    repo: str
    title: str
    body: Optional[str] = None


class UpdateIssueParams(BaseModel):
    """Issue更新パラメータ（None の項目は変更しない）"""

    issue_id: str
    title: Optional[str] = None
    body: Optional[str] = None


class MoveItemParams(BaseModel):
    """アイテムのStatus変更パラメータ（item_id はアイテムID、Issue IDではない）"""

    item_id: str
    project_id: str
    status_field_id: str
    status_option_id: str


class AddCommentParams(BaseModel):
    """コメント追加パラメータ（subject_id はIssue/PRのノードID）"""

    subject_id: str
    body: str


class AddProjectItemParams(BaseModel):
    """既存Issue/PRをProjectに追加するパラメータ"""

    project_id: str
    content_id: str


class AddDraftItemParams(BaseModel):
    """Draft Issue追加パラメータ"""

    project_id: str
    title: str
    body: Optional[str] = None


class ArchiveItemParams(BaseModel):
    """アイテムのアーカイブ／解除パラメータ"""

    project_id: str
    item_id: str
    archived: bool = True


class DeleteItemParams(BaseModel):
    """アイテム削除パラメータ"""

    project_id: str
    item_id: str


class ProjectBoard(BaseModel):
    """Projectと列の一覧（board コマンドの出力）"""

    project: Project
    columns: List[ProjectColumn] = []
