"""Transport doubles for the client tests (no network)."""

from typing import Any, Callable, Dict, List, Optional, Tuple
from ghs.github import mutations, queries
from ghs.github.errors import TransportError


def page(nodes: List[Any], has_next: bool = False, cursor: Optional[str] = None) -> Dict[str, Any]:
    """Build one connection page."""
    return {
        "pageInfo": {"hasNextPage": has_next, "endCursor": cursor},
        "nodes": nodes,
    }


def not_found(message: str = "Could not resolve to a node") -> TransportError:
    return TransportError(
        f"GraphQL errors: {message}",
        errors=[{"type": "NOT_FOUND", "message": message}],
    )


class FakeTransport:
    """Answers each document through a handler registered for it.

    A handler takes the variables and returns the ``data`` dict, or an
    exception instance to raise. Every call is recorded.
    """

    def __init__(self, handlers: Optional[Dict[str, Callable[[Dict[str, Any]], Any]]] = None):
        self.handlers: Dict[str, Callable[[Dict[str, Any]], Any]] = dict(handlers or {})
        self.calls: List[Tuple[str, Dict[str, Any]]] = []

    def on(self, query: str, handler: Callable[[Dict[str, Any]], Any]):
        self.handlers[query] = handler
        return self

    async def execute(self, query: str, variables: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        variables = dict(variables or {})
        self.calls.append((query, variables))
        handler = self.handlers.get(query)
        if handler is None:
            name = query.strip().split("(")[0]
            raise AssertionError(f"Unexpected document: {name}")
        result = handler(variables)
        if isinstance(result, Exception):
            raise result
        return result

    def calls_for(self, query: str) -> List[Dict[str, Any]]:
        return [v for q, v in self.calls if q == query]


class BoardTransport(FakeTransport):
    """A project board that remembers each item's status option."""

    def __init__(self, project_id: str = "PVT_1", field_id: str = "PVTSSF_status"):
        super().__init__()
        self.project_id = project_id
        self.field_id = field_id
        self.options = {"opt_todo": "Todo", "opt_doing": "In Progress", "opt_done": "Done"}
        self.items: Dict[str, Dict[str, Any]] = {
            "PVTI_1": {"title": "First", "number": 1, "option": "opt_todo"},
            "PVTI_2": {"title": "Second", "number": 2, "option": None},
        }
        self.on(queries.GET_PROJECT_FIELDS, self._fields)
        self.on(queries.GET_PROJECT_ITEMS, self._items)
        self.on(mutations.UPDATE_PROJECT_FIELD, self._update)

    def _fields(self, variables):
        assert variables["projectId"] == self.project_id
        status = {
            "id": self.field_id,
            "name": "Status",
            "options": [{"id": k, "name": v} for k, v in self.options.items()],
        }
        return {"node": {"fields": page([{}, status])}}

    def _items(self, variables):
        nodes = []
        for item_id, item in self.items.items():
            values = [{}]
            if item["option"]:
                values.append(
                    {"name": self.options[item["option"]], "field": {"name": "Status"}}
                )
            nodes.append(
                {
                    "id": item_id,
                    "content": {
                        "__typename": "Issue",
                        "id": f"I_{item['number']}",
                        "number": item["number"],
                        "title": item["title"],
                        "url": f"https://github.com/octo/app/issues/{item['number']}",
                        "repository": {"nameWithOwner": "octo/app"},
                    },
                    "fieldValues": {"nodes": values},
                }
            )
        return {"node": {"items": page(nodes)}}

    def _update(self, variables):
        if variables["itemId"] not in self.items:
            return not_found()
        assert variables["fieldId"] == self.field_id
        option = variables["value"]["singleSelectOptionId"]
        self.items[variables["itemId"]]["option"] = option
        return {"updateProjectV2ItemFieldValue": {"projectV2Item": {"id": variables["itemId"]}}}
