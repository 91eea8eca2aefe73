from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, Literal, Optional, Union
from ghs.github.models import (
    ItemContent,
    ItemContentDetails,
    ProjectItem,
    ProjectItemDetails,
    ProjectRef,
)
from ghs.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_STATUS_FIELD = "Status"
NO_TITLE = "No Title"
REDACTED = "REDACTED"
NO_REPOSITORY = "N/A"


class _RawRepository(BaseModel):
    nameWithOwner: str


class _RawContent(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class IssueContent(_RawContent):
    """content: Issue"""

    typename: Literal["Issue"] = Field(alias="__typename")
    id: str
    number: int
    title: Optional[str] = None
    url: str = ""
    repository: Optional[_RawRepository] = None


class PullRequestContent(_RawContent):
    """content: PullRequest"""

    typename: Literal["PullRequest"] = Field(alias="__typename")
    id: str
    number: int
    title: Optional[str] = None
    url: str = ""
    repository: Optional[_RawRepository] = None


class DraftIssueContent(_RawContent):
    """content: DraftIssue（番号・URL・リポジトリなし）"""

    typename: Literal["DraftIssue"] = Field(alias="__typename")
    id: Optional[str] = None
    title: Optional[str] = None


class UnsupportedContent(_RawContent):
    """クエリで選択していない型のcontent（型名のみ）"""

    typename: str = Field(alias="__typename")


Content = Union[IssueContent, PullRequestContent, DraftIssueContent, UnsupportedContent]

_CONTENT_TYPES = {
    "Issue": IssueContent,
    "PullRequest": PullRequestContent,
    "DraftIssue": DraftIssueContent,
}


def parse_content(raw: Optional[Dict[str, Any]]) -> Optional[Content]:
    """content を型名で振り分ける

    Returns:
        Content: 各型のモデル。content 自体がない（権限で見えない）場合は None
    """
    if not raw or not raw.get("__typename"):
        return None

    typename = raw["__typename"]
    model = _CONTENT_TYPES.get(typename)
    if model is None:
        logger.warning(f"Unsupported project item content type: {typename}")
        return UnsupportedContent.model_validate(raw)
    return model.model_validate(raw)


def _title_or_placeholder(title: Optional[str]) -> str:
    if title and title.strip():
        return title
    return NO_TITLE


def flatten_content(content: Optional[Content]) -> ItemContentDetails:
    """content を平坦なレコードにする"""
    if content is None:
        return ItemContentDetails(title=REDACTED)

    if isinstance(content, (IssueContent, PullRequestContent)):
        return ItemContentDetails(
            typename=content.typename,
            id=content.id,
            number=content.number,
            title=_title_or_placeholder(content.title),
            url=content.url or "",
            repository=(
                content.repository.nameWithOwner
                if content.repository
                else NO_REPOSITORY
            ),
        )

    if isinstance(content, DraftIssueContent):
        return ItemContentDetails(
            typename=content.typename,
            id=content.id,
            title=_title_or_placeholder(content.title),
        )

    return ItemContentDetails(typename=content.typename, title=NO_TITLE)


def find_status(
    field_values: Optional[Dict[str, Any]],
    status_field_name: str = DEFAULT_STATUS_FIELD,
) -> Optional[str]:
    """fieldValues から指定フィールド（大文字小文字を区別）の選択値を探す

    Returns:
        Optional[str]: 選択肢名。未設定なら None
    """
    for value in (field_values or {}).get("nodes") or []:
        if not value:
            continue
        field = value.get("field") or {}
        if field.get("name") == status_field_name:
            return value.get("name") or None
    return None


def normalize_project_item(
    raw: Dict[str, Any], status_field_name: str = DEFAULT_STATUS_FIELD
) -> ProjectItem:
    """Project.items のノードを ProjectItem にする"""
    content = flatten_content(parse_content(raw.get("content")))
    return ProjectItem(
        id=raw["id"],
        type=content.typename,
        content=ItemContent(**content.model_dump(exclude={"typename"})),
        status=find_status(raw.get("fieldValues"), status_field_name),
    )


def normalize_project_item_details(
    raw: Dict[str, Any], status_field_name: str = DEFAULT_STATUS_FIELD
) -> ProjectItemDetails:
    """ProjectV2Item ノードを ProjectItemDetails にする"""
    project = raw.get("project")
    return ProjectItemDetails(
        id=raw["id"],
        isArchived=bool(raw.get("isArchived")),
        project=ProjectRef(**project) if project else None,
        content=flatten_content(parse_content(raw.get("content"))),
        status=find_status(raw.get("fieldValues"), status_field_name),
    )
