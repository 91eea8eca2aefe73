import argparse
from typing import Optional
from ghs.github.client import DEFAULT_LIMIT, GitHubClient
from ghs.github.errors import PreconditionError
from ghs.github.models import IssueStateFilter, Project
from ghs.github.normalizer import DEFAULT_STATUS_FIELD


def add_status_field_option(parser: argparse.ArgumentParser):
    parser.add_argument(
        "-s",
        "--status-field",
        default=DEFAULT_STATUS_FIELD,
        help="Name of the status field (default: Status)",
    )


def add_limit_option(parser: argparse.ArgumentParser, what: str = "issues"):
    parser.add_argument(
        "-l",
        "--limit",
        type=int,
        default=DEFAULT_LIMIT,
        help=f"Max {what} to return (default: {DEFAULT_LIMIT})",
    )


def normalize_state(value: Optional[str]) -> IssueStateFilter:
    """closed / all 以外は open として扱う"""
    state = (value or "open").strip().lower()
    if state == "closed":
        return "closed"
    if state == "all":
        return "all"
    return "open"


async def require_project(client: GitHubClient, owner: str, identifier: str) -> Project:
    """Projectを解決し、見つからなければ PreconditionError"""
    project = await client.resolve_project(owner, identifier)
    if not project:
        raise PreconditionError(f"Project '{identifier}' not found for owner '{owner}'")
    return project
