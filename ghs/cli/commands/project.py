import argparse
from ghs.cli.common import (
    add_limit_option,
    add_status_field_option,
    normalize_state,
    require_project,
)
from ghs.cli.output import print_output
from ghs.github.client import GitHubClient, clamp_limit
from ghs.github.models import ProjectBoard
from ghs.utils.logger import get_logger

logger = get_logger(__name__)


async def project_list(client: GitHubClient, args: argparse.Namespace):
    projects = await client.get_projects(args.owner)

    def human():
        print(f"\n📋 Projects for {args.owner}:")
        for p in projects:
            print(f"- [#{p.number}] {p.title}")
            print(f"  ID:  {p.id}")
            print(f"  URL: {p.url}\n")

    print_output(args, projects, human)


async def repo_list(client: GitHubClient, args: argparse.Namespace):
    repos = await client.get_repositories(args.owner)

    def human():
        print(f"\n📦 Repositories for {args.owner}:")
        for r in repos:
            print(f"- {r.nameWithOwner} (ID: {r.id})")

    print_output(args, repos, human)


async def board(client: GitHubClient, args: argparse.Namespace):
    project = await require_project(client, args.owner, args.project)
    columns = await client.get_project_columns(project.id, args.status_field)

    def human():
        print(f"\n📋 {project.title} (#{project.number})")
        print(f"   ID: {project.id}")
        if project.shortDescription:
            print(f"   {project.shortDescription}")
        print(f"   {project.url}\n")

        print(f'Columns (Field: "{args.status_field}"):')
        if columns:
            print(f"   (Status Field ID: {columns[0].id})")
        for col in columns:
            print(f"  • {col.name} (Option ID: {col.optionId})")
        print()

    print_output(args, ProjectBoard(project=project, columns=columns), human)


async def items(client: GitHubClient, args: argparse.Namespace):
    project = await require_project(client, args.owner, args.project)
    project_items = await client.get_project_items(project.id, args.status_field)

    def human():
        print(f'\nItems in "{project.title}":')
        for item in project_items:
            print(f"- [#{item.content.number}] {item.content.title}")
            print(f"  Status:  {item.status or 'No Status'}")
            print(f"  Repo:    {item.content.repository}")
            print(f"  Item ID: {item.id}")
            print(f"  Node ID: {item.content.id or 'N/A'}\n")

    print_output(args, project_items, human)


async def project_issues(client: GitHubClient, args: argparse.Namespace):
    project = await require_project(client, args.owner, args.project)
    issues = await client.list_project_issues(
        args.owner,
        project.id,
        status_field_name=args.status_field,
        state=normalize_state(args.state),
        limit=clamp_limit(args.limit),
        repo=args.repo,
    )

    def human():
        print(f'\n📌 Issues linked to project "{project.title}" (#{project.number})')
        for it in issues:
            print(f"- [#{it.issue.number}] ({it.issue.state}) {it.issue.title}")
            print(f"  Repo:    {args.repo or 'org-wide'}")
            print(f"  URL:     {it.issue.url}")
            print(f"  IssueID: {it.issue.id}")
            print(f"  ItemID:  {it.projectItemId}")
            print(f"  Status:  {it.status or 'No Status'}\n")

    print_output(args, issues, human)


def setup_project_commands(subparsers, parent: argparse.ArgumentParser):
    """Project関連のサブコマンドを登録"""
    parser = subparsers.add_parser(
        "project-list", parents=[parent], help="List all projects for an owner"
    )
    parser.add_argument("owner", help="Project owner (user or org)")
    parser.set_defaults(handler=project_list)

    parser = subparsers.add_parser(
        "repo-list", parents=[parent], help="List repositories for an owner"
    )
    parser.add_argument("owner", help="Repository owner (user or org)")
    parser.set_defaults(handler=repo_list)

    parser = subparsers.add_parser(
        "board", parents=[parent], help="Show project board details and columns"
    )
    parser.add_argument("owner", help="Project owner (user or org)")
    parser.add_argument("project", help="Project number or title")
    add_status_field_option(parser)
    parser.set_defaults(handler=board)

    parser = subparsers.add_parser(
        "items", parents=[parent], help="List all items (issues/PRs/drafts) in a project"
    )
    parser.add_argument("owner", help="Project owner (user or org)")
    parser.add_argument("project", help="Project number or title")
    add_status_field_option(parser)
    parser.set_defaults(handler=items)

    parser = subparsers.add_parser(
        "project-issues",
        parents=[parent],
        help="List issues linked to a project (search based)",
    )
    parser.add_argument("owner", help="Project owner (user or org)")
    parser.add_argument("project", help="Project number or title")
    add_status_field_option(parser)
    parser.add_argument("--state", default="open", help="Issue state: open|closed|all")
    add_limit_option(parser)
    parser.add_argument("--repo", default=None, help="Limit to one repository (owner/repo)")
    parser.set_defaults(handler=project_issues)

    logger.debug("Project commands registered")
