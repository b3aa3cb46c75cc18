import base64
from pathlib import Path
from typing import Any, Callable, Generator, Sequence
from unittest.mock import patch

import httpx
import pytest
from mcp.server.fastmcp.exceptions import ToolError
from mcp.types import EmbeddedResource, TextContent

from azure_code_interpreter.client import SessionPoolClient
from azure_code_interpreter.config import InterpreterConfig
from azure_code_interpreter.interpreter import CodeInterpreterMCP
from azure_code_interpreter.main import mcp
from azure_code_interpreter.session import SessionState

MakeClient = Callable[[Callable[[httpx.Request], httpx.Response]], SessionPoolClient]


def backend(request: httpx.Request) -> httpx.Response:
    path = request.url.path
    if path.endswith("/code/execute"):
        return httpx.Response(200, json={"properties": {"status": "Success", "stdout": "5\n", "stderr": ""}})
    if path.endswith("/files/content/a.csv"):
        return httpx.Response(200, content=b"hello")
    if path.endswith("/files"):
        return httpx.Response(
            200,
            json={"value": [{"properties": {"filename": "a.csv"}}, {"properties": {"filename": "b.png"}}]},
        )
    return httpx.Response(404)


def refused(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectError("refused", request=request)


async def call(name: str, arguments: dict[str, Any]) -> Sequence[Any]:
    """Return the content blocks of a tool call through the MCP server."""
    result = await mcp.call_tool(name, arguments)
    # Newer SDK releases return (content, structured_output)
    if isinstance(result, tuple):
        return result[0]
    return result


@pytest.fixture
def serve(config: InterpreterConfig, make_client: MakeClient) -> Generator[Callable[..., None], None, None]:
    """Install a real interpreter, backed by the given handler, behind the registered tools."""
    with patch("azure_code_interpreter.main.interpreter", None):

        def _serve(handler: Callable[[httpx.Request], httpx.Response] = backend) -> None:
            import azure_code_interpreter.main as main_module

            main_module.interpreter = CodeInterpreterMCP(config, make_client(handler), SessionState("s1"))

        yield _serve


@pytest.mark.asyncio
async def test_exec_through_server(serve: Callable[..., None], recorded_requests: list[httpx.Request]) -> None:
    serve()

    content = await call("exec", {"code": "print(2 + 3)"})

    assert len(content) == 1
    assert isinstance(content[0], TextContent)
    assert content[0].text == "5\n"
    assert recorded_requests[0].url.params["identifier"] == "s1"


@pytest.mark.asyncio
async def test_exec_missing_code_is_rejected(
    serve: Callable[..., None], recorded_requests: list[httpx.Request]
) -> None:
    serve()

    with pytest.raises(ToolError):
        await call("exec", {})
    assert recorded_requests == []


@pytest.mark.asyncio
async def test_exec_backend_failure_becomes_tool_error(serve: Callable[..., None]) -> None:
    serve(refused)

    with pytest.raises(ToolError, match="failed to execute code: .*refused"):
        await call("exec", {"code": "print(1)"})

    # The server keeps answering after a failed call
    serve()
    content = await call("exec", {"code": "print(2 + 3)"})
    assert content[0].text == "5\n"


@pytest.mark.asyncio
async def test_list_files_through_server(serve: Callable[..., None]) -> None:
    serve()

    content = await call("list_files", {"session_id": "other"})

    assert content[0].text == "a.csv\nb.png"


@pytest.mark.asyncio
async def test_download_file_through_server(serve: Callable[..., None], download_dir: Path) -> None:
    serve()

    content = await call("download_file", {"file_name": "a.csv"})

    label, resource = content
    assert isinstance(label, TextContent)
    assert label.text == "a.csv"
    assert isinstance(resource, EmbeddedResource)
    assert resource.resource.blob == base64.b64encode(b"hello").decode("utf-8") == "aGVsbG8="
    assert str(resource.resource.uri) == f"file://{download_dir}/a.csv"
    assert (download_dir / "a.csv").read_bytes() == b"hello"
