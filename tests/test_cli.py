import json
import pytest
from ghs.cli.app import build_parser, main
from ghs.cli.common import normalize_state
from ghs.cli.output import serialize_error
from ghs.github import mutations, queries
from ghs.github.client import clamp_limit
from ghs.github.errors import PreconditionError, TransportError
from fakes import not_found, page

ROADMAP = {
    "id": "PVT_1",
    "number": 1,
    "title": "Roadmap",
    "url": "https://github.com/orgs/octo/projects/1",
    "shortDescription": "Q3 plan",
}


@pytest.fixture
def roadmap(board):
    board.on(queries.GET_ORG_PROJECT, lambda v: {"organization": {"projectV2": ROADMAP}})
    board.on(
        queries.LIST_ORG_PROJECTS,
        lambda v: {"organization": {"projectsV2": page([ROADMAP])}},
    )
    return board


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "argv",
    [["-j", "project-list", "octo"], ["project-list", "octo", "--json"]],
)
async def test_json_flag_before_or_after_command(board_client, roadmap, capsys, argv):
    code = await main(argv, client=board_client)

    assert code == 0
    assert json.loads(capsys.readouterr().out) == [ROADMAP]


@pytest.mark.asyncio
async def test_board_human_output(board_client, roadmap, capsys):
    code = await main(["board", "octo", "Roadmap"], client=board_client)

    out = capsys.readouterr().out
    assert code == 0
    assert "Roadmap (#1)" in out
    assert "(Status Field ID: PVTSSF_status)" in out
    assert "• Done (Option ID: opt_done)" in out


@pytest.mark.asyncio
async def test_board_json_output(board_client, roadmap, capsys):
    await main(["--json", "board", "octo", "1"], client=board_client)

    data = json.loads(capsys.readouterr().out)
    assert data["project"]["id"] == "PVT_1"
    assert [c["name"] for c in data["columns"]] == ["Todo", "In Progress", "Done"]


@pytest.mark.asyncio
async def test_item_move_by_status_name(board_client, roadmap, capsys):
    code = await main(
        ["-j", "item-move", "octo", "Roadmap", "PVTI_2", "--status", "done"],
        client=board_client,
    )

    assert code == 0
    assert json.loads(capsys.readouterr().out)["status"] == "Done"
    assert roadmap.items["PVTI_2"]["option"] == "opt_done"


@pytest.mark.asyncio
async def test_unknown_project_is_an_error(board_client, roadmap, capsys):
    code = await main(["-j", "items", "octo", "Backlog"], client=board_client)

    captured = capsys.readouterr()
    assert code == 1
    assert captured.out == ""
    error = json.loads(captured.err)["error"]
    assert error["name"] == "PreconditionError"
    assert "Backlog" in error["message"]


@pytest.mark.asyncio
async def test_human_error_output(client, transport, capsys):
    transport.on(queries.GET_ISSUE, lambda v: not_found())

    code = await main(["issue-show", "octo/app", "5"], client=client)

    assert code == 1
    assert capsys.readouterr().err.startswith("Error: Issue #5 not found")


@pytest.mark.asyncio
async def test_malformed_repo(client, capsys):
    code = await main(["issue-list", "octo"], client=client)

    assert code == 1
    assert "owner/name" in capsys.readouterr().err


@pytest.mark.asyncio
async def test_issue_update_requires_a_change(client, transport, capsys):
    code = await main(["issue-update", "I_1"], client=client)

    assert code == 1
    assert transport.calls == []


@pytest.mark.asyncio
async def test_issue_delete_closes(client, transport, capsys):
    transport.on(mutations.CLOSE_ISSUE, lambda v: {"closeIssue": {"issue": {"state": "CLOSED"}}})

    code = await main(["-j", "issue-delete", "I_1"], client=client)

    assert code == 0
    assert json.loads(capsys.readouterr().out) == {
        "success": True,
        "issueId": "I_1",
        "deleted": False,
        "closed": True,
    }
    assert transport.calls_for(mutations.CLOSE_ISSUE) == [{"issueId": "I_1"}]


@pytest.mark.asyncio
async def test_issue_list_clamps_limit(client, transport, capsys):
    transport.on(queries.LIST_ISSUES, lambda v: {"repository": {"issues": page([])}})

    code = await main(["issue-list", "octo/app", "--state", "weird", "--limit", "0"], client=client)

    assert code == 0
    assert "(state: open, limit: 1)" in capsys.readouterr().out
    assert transport.calls_for(queries.LIST_ISSUES)[0]["states"] == ["OPEN"]


def test_every_command_is_registered():
    parser = build_parser()
    commands = {
        "project-list", "repo-list", "board", "items", "project-issues",
        "issue-show", "issue-get", "issue-list", "issue-create", "issue-update",
        "issue-comment", "issue-comments", "issue-move", "item-move",
        "draft-create", "item-show", "item-archive", "item-delete",
        "issue-close", "issue-delete", "issue-add-to-project",
    }
    subparsers = next(a for a in parser._actions if a.dest == "command")

    assert set(subparsers.choices) == commands


def test_normalize_state_and_limit():
    assert normalize_state("CLOSED") == "closed"
    assert normalize_state("all") == "all"
    assert normalize_state("anything") == "open"
    assert normalize_state(None) == "open"
    assert clamp_limit(-5) == 1
    assert clamp_limit(None) == 50


def test_serialize_error():
    error = TransportError(
        "GraphQL errors: nope", errors=[{"type": "NOT_FOUND", "message": "nope"}]
    )

    assert serialize_error(error) == {
        "message": "GraphQL errors: nope",
        "name": "TransportError",
        "errors": [{"type": "NOT_FOUND", "message": "nope"}],
    }
    assert serialize_error(TransportError("boom", status=500))["status"] == 500
    assert serialize_error(PreconditionError("bad input")) == {
        "message": "bad input",
        "name": "PreconditionError",
    }
