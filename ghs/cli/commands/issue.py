import argparse
from ghs.cli.common import add_limit_option, normalize_state
from ghs.cli.output import print_output
from ghs.github.client import GitHubClient, clamp_limit, split_repo
from ghs.github.errors import PreconditionError
from ghs.github.models import AddCommentParams, CreateIssueParams, UpdateIssueParams
from ghs.utils.logger import get_logger

logger = get_logger(__name__)


async def issue_show(client: GitHubClient, args: argparse.Namespace):
    owner, repo = split_repo(args.repo)
    issue = await client.get_issue(owner, repo, args.number)
    if not issue:
        raise PreconditionError(f"Issue #{args.number} not found in {owner}/{repo}")

    def human():
        print(f"\n#{issue.number}: {issue.title}")
        print(f"Node ID: {issue.id}")
        print(f"State:   {issue.state}")
        print(f"URL:     {issue.url}")
        if issue.body:
            print(f"\nDescription:\n{issue.body}\n")

    print_output(args, issue, human)


async def issue_get(client: GitHubClient, args: argparse.Namespace):
    issue = await client.get_issue_by_id(args.issue_id)
    if not issue:
        raise PreconditionError(f"Issue {args.issue_id} not found")

    def human():
        print(f"\n#{issue.number}: {issue.title}")
        print(f"Node ID: {issue.id}")
        print(f"Repo:    {issue.repository.owner}/{issue.repository.name}")
        print(f"State:   {issue.state}")
        print(f"URL:     {issue.url}")
        print(f"Updated: {issue.updatedAt}")
        if issue.body:
            print(f"\nDescription:\n{issue.body}\n")

    print_output(args, issue, human)


async def issue_list(client: GitHubClient, args: argparse.Namespace):
    owner, repo = split_repo(args.repo)
    state = normalize_state(args.state)
    limit = clamp_limit(args.limit)
    issues = await client.list_issues(owner, repo, state=state, limit=limit)

    def human():
        print(f"\n🧾 Issues for {owner}/{repo} (state: {state}, limit: {limit}):")
        for i in issues:
            print(f"- [#{i.number}] ({i.state}) {i.title}")
            print(f"  ID:  {i.id}")
            print(f"  URL: {i.url}\n")

    print_output(args, issues, human)


async def issue_create(client: GitHubClient, args: argparse.Namespace):
    owner, repo = split_repo(args.repo)
    issue = await client.create_issue(
        CreateIssueParams(owner=owner, repo=repo, title=args.title, body=args.body)
    )

    def human():
        print(f"\n✅ Issue created: #{issue.number}")
        print(f"   Node ID: {issue.id}")
        print(f"   {issue.url}\n")

    print_output(args, issue, human)


async def issue_update(client: GitHubClient, args: argparse.Namespace):
    if args.title is None and args.body is None:
        raise PreconditionError("Specify at least one of --title or --body")

    await client.update_issue(
        UpdateIssueParams(issue_id=args.issue_id, title=args.title, body=args.body)
    )
    print_output(
        args,
        {"success": True, "issueId": args.issue_id},
        lambda: print("✅ Issue updated successfully"),
    )


async def issue_comment(client: GitHubClient, args: argparse.Namespace):
    await client.add_comment(AddCommentParams(subject_id=args.issue_id, body=args.body))
    print_output(
        args,
        {"success": True, "issueId": args.issue_id},
        lambda: print("✅ Comment added successfully"),
    )


async def issue_comments(client: GitHubClient, args: argparse.Namespace):
    limit = clamp_limit(args.limit)
    comments = await client.list_issue_comments(args.issue_id, limit=limit)

    def human():
        print(f"\n💬 Comments (limit: {limit}):")
        for c in comments:
            print(f"- {c.author or 'unknown'} @ {c.createdAt}")
            print(f"  {c.url}")
            print(f"  {c.body}\n")

    print_output(args, comments, human)


async def issue_close(client: GitHubClient, args: argparse.Namespace):
    await client.close_issue(args.issue_id)
    print_output(
        args,
        {"success": True, "issueId": args.issue_id},
        lambda: print("✅ Issue closed successfully"),
    )


async def issue_delete(client: GitHubClient, args: argparse.Namespace):
    # GitHub APIにIssueの削除はないためクローズする
    await client.close_issue(args.issue_id)
    print_output(
        args,
        {"success": True, "issueId": args.issue_id, "deleted": False, "closed": True},
        lambda: print("✅ Issue closed (hard-delete is not supported by GitHub APIs)"),
    )


def setup_issue_commands(subparsers, parent: argparse.ArgumentParser):
    """Issue関連のサブコマンドを登録"""
    parser = subparsers.add_parser(
        "issue-show", parents=[parent], help="Show an issue by repository and number"
    )
    parser.add_argument("repo", help="Repository in format owner/repo")
    parser.add_argument("number", type=int, help="Issue number")
    parser.set_defaults(handler=issue_show)

    parser = subparsers.add_parser(
        "issue-get", parents=[parent], help="Get issue details by issue node ID"
    )
    parser.add_argument("issue_id", metavar="issueId", help="Issue node ID")
    parser.set_defaults(handler=issue_get)

    parser = subparsers.add_parser(
        "issue-list", parents=[parent], help="List issues in a repository"
    )
    parser.add_argument("repo", help="Repository in format owner/repo")
    parser.add_argument("-s", "--state", default="open", help="Issue state: open|closed|all")
    add_limit_option(parser)
    parser.set_defaults(handler=issue_list)

    parser = subparsers.add_parser(
        "issue-create", parents=[parent], help="Create a new issue"
    )
    parser.add_argument("repo", help="Repository in format owner/repo")
    parser.add_argument("title", help="Issue title")
    parser.add_argument("-b", "--body", default=None, help="Issue body")
    parser.set_defaults(handler=issue_create)

    parser = subparsers.add_parser(
        "issue-update", parents=[parent], help="Update an issue title or body"
    )
    parser.add_argument("issue_id", metavar="issueId", help="Issue node ID")
    parser.add_argument("-t", "--title", default=None, help="New title")
    parser.add_argument("-b", "--body", default=None, help="New body")
    parser.set_defaults(handler=issue_update)

    parser = subparsers.add_parser(
        "issue-comment", parents=[parent], help="Add a comment to an issue"
    )
    parser.add_argument("issue_id", metavar="issueId", help="Issue node ID")
    parser.add_argument("body", help="Comment text")
    parser.set_defaults(handler=issue_comment)

    parser = subparsers.add_parser(
        "issue-comments", parents=[parent], help="List comments for an issue"
    )
    parser.add_argument("issue_id", metavar="issueId", help="Issue node ID")
    add_limit_option(parser, "comments")
    parser.set_defaults(handler=issue_comments)

    parser = subparsers.add_parser(
        "issue-close", parents=[parent], help="Close an issue"
    )
    parser.add_argument("issue_id", metavar="issueId", help="Issue node ID")
    parser.set_defaults(handler=issue_close)

    parser = subparsers.add_parser(
        "issue-delete",
        parents=[parent],
        help="Delete an issue (GitHub has no hard delete: the issue is closed)",
    )
    parser.add_argument("issue_id", metavar="issueId", help="Issue node ID")
    parser.set_defaults(handler=issue_delete)

    logger.debug("Issue commands registered")
