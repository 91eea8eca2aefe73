import json
import sys
from argparse import Namespace
from typing import Any, Callable, Dict
from pydantic import BaseModel


def to_jsonable(data: Any) -> Any:
    """pydanticモデルを含む値をJSON化できる形に変換"""
    if isinstance(data, BaseModel):
        return data.model_dump(by_alias=True)
    if isinstance(data, (list, tuple)):
        return [to_jsonable(v) for v in data]
    if isinstance(data, dict):
        return {k: to_jsonable(v) for k, v in data.items()}
    return data


def print_output(args: Namespace, data: Any, human: Callable[[], None]):
    """--json 指定時はJSONを、それ以外は human() で人間向けの表示を標準出力に出す"""
    if getattr(args, "json", False):
        print(json.dumps(to_jsonable(data), indent=2, ensure_ascii=False))
    else:
        human()


def serialize_error(error: BaseException) -> Dict[str, Any]:
    """例外をエラーオブジェクトに変換

    message は必ず含み、name / status / errors は値がある場合のみ含む。
    """
    message = getattr(error, "message", None) or str(error) or type(error).__name__
    serialized: Dict[str, Any] = {"message": str(message)}
    serialized["name"] = type(error).__name__

    status = getattr(error, "status", None)
    if isinstance(status, int) and status:
        serialized["status"] = status

    errors = getattr(error, "errors", None)
    if isinstance(errors, list):
        serialized["errors"] = errors

    return serialized


def handle_error(error: BaseException, json_mode: bool) -> int:
    """エラーを標準エラーに出力し、終了コードを返す"""
    serialized = serialize_error(error)
    if json_mode:
        print(
            json.dumps({"error": serialized}, indent=2, ensure_ascii=False),
            file=sys.stderr,
        )
    else:
        print(f"Error: {serialized['message']}", file=sys.stderr)
    return 1
