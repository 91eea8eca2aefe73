import argparse
from ghs.cli.common import add_status_field_option, require_project
from ghs.cli.output import print_output
from ghs.github.client import GitHubClient
from ghs.github.errors import PreconditionError
from ghs.github.models import (
    AddDraftItemParams,
    AddProjectItemParams,
    ArchiveItemParams,
    DeleteItemParams,
    MoveItemParams,
)
from ghs.utils.logger import get_logger

logger = get_logger(__name__)


async def issue_move(client: GitHubClient, args: argparse.Namespace):
    await client.move_item(
        MoveItemParams(
            item_id=args.item_id,
            project_id=args.project_id,
            status_field_id=args.status_field_id,
            status_option_id=args.option_id,
        )
    )
    print_output(
        args,
        {
            "success": True,
            "itemId": args.item_id,
            "projectId": args.project_id,
            "statusFieldId": args.status_field_id,
            "optionId": args.option_id,
        },
        lambda: print("✅ Item moved successfully"),
    )


async def item_move(client: GitHubClient, args: argparse.Namespace):
    project = await require_project(client, args.owner, args.project)
    column = await client.move_item_to_status(
        project.id, args.item_id, args.status, args.status_field
    )
    print_output(
        args,
        {
            "success": True,
            "owner": args.owner,
            "project": args.project,
            "itemId": args.item_id,
            "status": column.name,
        },
        lambda: print(f'✅ Item moved to "{column.name}" successfully'),
    )


async def draft_create(client: GitHubClient, args: argparse.Namespace):
    project = await require_project(client, args.owner, args.project)
    item_id = await client.add_draft_item(
        AddDraftItemParams(project_id=project.id, title=args.title, body=args.body)
    )
    print_output(
        args,
        {"success": True, "itemId": item_id, "projectId": project.id},
        lambda: print(f"✅ Draft created. Item ID: {item_id}"),
    )


async def item_show(client: GitHubClient, args: argparse.Namespace):
    item = await client.get_project_item(args.item_id, args.status_field)
    if not item:
        raise PreconditionError(f"Item {args.item_id} not found")

    def human():
        print(f"\n🧩 Project Item: {item.id}")
        print(f"Archived: {'yes' if item.isArchived else 'no'}")
        if item.project:
            print(f"Project:  {item.project.title} (#{item.project.number})")
            print(f"Project ID: {item.project.id}")
        if item.status:
            print(f"Status:  {item.status}")
        content = item.content
        print(f"Type:    {content.typename or 'N/A'}")
        print(f"Title:   {content.title}")
        if content.url:
            print(f"URL:     {content.url}")
        print(f"Repo:    {content.repository}")
        if content.id:
            print(f"Node ID: {content.id}")
        print()

    print_output(args, item, human)


async def item_archive(client: GitHubClient, args: argparse.Namespace):
    project = await require_project(client, args.owner, args.project)
    archived = not args.unarchive
    await client.archive_project_item(
        ArchiveItemParams(project_id=project.id, item_id=args.item_id, archived=archived)
    )
    action = "archived" if archived else "unarchived"
    print_output(
        args,
        {"success": True, "itemId": args.item_id, "archived": archived},
        lambda: print(f"✅ Item {action} successfully"),
    )


async def item_delete(client: GitHubClient, args: argparse.Namespace):
    project = await require_project(client, args.owner, args.project)
    await client.delete_project_item(
        DeleteItemParams(project_id=project.id, item_id=args.item_id)
    )
    print_output(
        args,
        {"success": True, "itemId": args.item_id},
        lambda: print("✅ Item deleted from project successfully"),
    )


async def issue_add_to_project(client: GitHubClient, args: argparse.Namespace):
    project = await require_project(client, args.owner, args.project)
    item_id = await client.add_project_item(
        AddProjectItemParams(project_id=project.id, content_id=args.issue_id)
    )
    print_output(
        args,
        {"success": True, "itemId": item_id, "projectId": project.id},
        lambda: print(f"✅ Issue added to project. Item ID: {item_id}"),
    )


def setup_item_commands(subparsers, parent: argparse.ArgumentParser):
    """Projectアイテム関連のサブコマンドを登録"""
    parser = subparsers.add_parser(
        "issue-move",
        parents=[parent],
        help="Move a project item to a column by field and option IDs",
    )
    parser.add_argument("item_id", metavar="itemId", help="Project item ID (PVTI_...)")
    parser.add_argument("project_id", metavar="projectId", help="Project node ID")
    parser.add_argument("status_field_id", metavar="statusFieldId", help="Status field ID")
    parser.add_argument("option_id", metavar="optionId", help="Status option ID")
    parser.set_defaults(handler=issue_move)

    parser = subparsers.add_parser(
        "item-move", parents=[parent], help="Move a project item by status name"
    )
    parser.add_argument("owner", help="Project owner")
    parser.add_argument("project", help="Project number or title")
    parser.add_argument("item_id", metavar="itemId", help="Project item ID (PVTI_...)")
    parser.add_argument("--status", required=True, help='Target column name (e.g. "Todo")')
    add_status_field_option(parser)
    parser.set_defaults(handler=item_move)

    parser = subparsers.add_parser(
        "draft-create", parents=[parent], help="Create a draft issue in a project"
    )
    parser.add_argument("owner", help="Project owner")
    parser.add_argument("project", help="Project number or title")
    parser.add_argument("title", help="Draft title")
    parser.add_argument("-b", "--body", default=None, help="Draft body")
    parser.set_defaults(handler=draft_create)

    parser = subparsers.add_parser(
        "item-show", parents=[parent], help="Show a project item by item ID"
    )
    parser.add_argument("item_id", metavar="itemId", help="Project item ID (PVTI_...)")
    add_status_field_option(parser)
    parser.set_defaults(handler=item_show)

    parser = subparsers.add_parser(
        "item-archive", parents=[parent], help="Archive or unarchive a project item"
    )
    parser.add_argument("owner", help="Project owner")
    parser.add_argument("project", help="Project number or title")
    parser.add_argument("item_id", metavar="itemId", help="Project item ID")
    parser.add_argument("--unarchive", action="store_true", help="Unarchive the item")
    parser.set_defaults(handler=item_archive)

    parser = subparsers.add_parser(
        "item-delete", parents=[parent], help="Delete an item from a project"
    )
    parser.add_argument("owner", help="Project owner")
    parser.add_argument("project", help="Project number or title")
    parser.add_argument("item_id", metavar="itemId", help="Project item ID")
    parser.set_defaults(handler=item_delete)

    parser = subparsers.add_parser(
        "issue-add-to-project",
        parents=[parent],
        help="Add an existing issue/PR to a project",
    )
    parser.add_argument("owner", help="Project owner")
    parser.add_argument("project", help="Project number or title")
    parser.add_argument("issue_id", metavar="issueId", help="Issue/PR node ID")
    parser.set_defaults(handler=issue_add_to_project)

    logger.debug("Item commands registered")
