import argparse
import asyncio
import sys
import time
from typing import List, Optional
from ghs.cli.commands.issue import setup_issue_commands
from ghs.cli.commands.item import setup_item_commands
from ghs.cli.commands.project import setup_project_commands
from ghs.cli.output import handle_error
from ghs.github.client import GitHubClient
from ghs.utils.logger import StructuredLogger, get_logger

logger = get_logger(__name__)

VERSION = "1.0.0"


def build_parser() -> argparse.ArgumentParser:
    """ghs のパーサを組み立てる"""
    parser = argparse.ArgumentParser(
        prog="ghs", description="GitHub Projects & Issues CLI Tool"
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    parser.add_argument(
        "-j", "--json", action="store_true", help="Output results in JSON format"
    )

    # サブコマンドの後ろでも -j/--json を受け付ける（未指定時は上位の値を残す）
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "-j",
        "--json",
        action="store_true",
        default=argparse.SUPPRESS,
        help="Output results in JSON format",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="<command>")
    subparsers.required = True

    # コマンド登録
    setup_project_commands(subparsers, common)  # project-list, repo-list, board, items, project-issues
    setup_issue_commands(subparsers, common)  # issue-*
    setup_item_commands(subparsers, common)  # issue-move, item-*, draft-create, issue-add-to-project

    return parser


async def main(
    argv: Optional[List[str]] = None, client: Optional[GitHubClient] = None
) -> int:
    """CLIのエントリーポイント

    Args:
        argv: 引数（省略時は sys.argv）
        client: 使用するクライアント（省略時は環境変数と .env から作成）

    Returns:
        int: 終了コード
    """
    args = build_parser().parse_args(argv)

    start = time.monotonic()
    success = False
    owns_client = client is None
    try:
        if client is None:
            client = GitHubClient()
        await args.handler(client, args)
        success = True
        return 0
    except Exception as e:
        logger.debug(f"{args.command} failed: {e}", exc_info=True)
        return handle_error(e, args.json)
    finally:
        duration_ms = (time.monotonic() - start) * 1000
        StructuredLogger.log_command_execution(
            command_name=args.command, success=success, duration_ms=duration_ms
        )
        if owns_client and client is not None:
            await client.close()


def run():
    """コンソールスクリプト用"""
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        logger.info("Interrupted")
        sys.exit(130)
