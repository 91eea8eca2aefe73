"""Project-linked issues recovered through the search API.

Listing a project's items only sees what the project's own container returns.
Searching the owner's issues and checking each issue's ``projectItems`` finds
the same linkage from the issue side. Drafts are never returned by search.
"""

from typing import Any, Dict, Optional
from ghs.github.models import IssueListItem, IssueStateFilter, ProjectIssueItem
from ghs.github.normalizer import DEFAULT_STATUS_FIELD, find_status


def build_search_query(
    owner: str, state: IssueStateFilter = "open", repo: Optional[str] = None
) -> str:
    """Build the issue search string for an owner.

    ``org:`` is used for users as well; the search API accepts it for both.
    """
    parts = [f"org:{owner}", "is:issue"]
    if state == "open":
        parts.append("is:open")
    elif state == "closed":
        parts.append("is:closed")
    if repo:
        parts.append(f"repo:{repo}")
    return " ".join(parts)


def match_project_issue(
    node: Optional[Dict[str, Any]],
    project_id: str,
    status_field_name: str = DEFAULT_STATUS_FIELD,
) -> Optional[ProjectIssueItem]:
    """Pair a search node with its item on ``project_id``.

    Returns None for non-issue nodes and for issues not on the project.
    """
    if not node or node.get("__typename") != "Issue":
        return None

    for item in (node.get("projectItems") or {}).get("nodes") or []:
        if not item or (item.get("project") or {}).get("id") != project_id:
            continue
        author = node.get("author") or {}
        return ProjectIssueItem(
            issue=IssueListItem(
                id=node["id"],
                number=node["number"],
                title=node["title"],
                state=node["state"],
                url=node["url"],
                createdAt=node["createdAt"],
                updatedAt=node["updatedAt"],
                author=author.get("login"),
            ),
            projectItemId=item["id"],
            status=find_status(item.get("fieldValues"), status_field_name),
        )

    return None
