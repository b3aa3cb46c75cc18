import base64
import mimetypes
from pathlib import Path

import aiofiles  # type: ignore[import-untyped]
from loguru import logger
from mcp.types import BlobResourceContents, EmbeddedResource, TextContent

from azure_code_interpreter.client import SessionPoolClient
from azure_code_interpreter.config import InterpreterConfig
from azure_code_interpreter.errors import DownloadError, InterpreterError, ToolInvocationError
from azure_code_interpreter.fences import strip_code_fence
from azure_code_interpreter.session import SessionState

NO_OUTPUT = "No output"


class CodeInterpreterMCP:
    """
    MCP server logic for the session pool code interpreter.
    Resolves the target session for each tool call and relays it to the backend.
    """

    def __init__(
        self,
        config: InterpreterConfig,
        client: SessionPoolClient,
        sessions: SessionState | None = None,
    ):
        self.config = config
        self.client = client
        self.sessions = sessions or SessionState()

    async def new_session(self, reason: str | None = None) -> str:
        """
        Start a new session and make it the current one.
        """
        return self.sessions.new_session(reason)

    async def exec_code(self, code: str, session_id: str | None = None) -> str:
        """
        Execute code in the resolved session.
        Returns stdout, followed by a STDERR section when the backend reported one.
        """
        session_id = self.sessions.resolve(session_id)
        code = strip_code_fence(code)

        try:
            result = await self.client.execute_detailed(session_id, code)
        except InterpreterError as e:
            raise ToolInvocationError(f"failed to execute code: {e}") from e

        if not result.stdout and not result.stderr:
            return NO_OUTPUT

        output = result.stdout
        if result.stderr:
            logger.debug(f"Session {session_id} stderr:\n{result.stderr}")
            output += f"\nSTDERR:\n{result.stderr}" if output else f"STDERR:\n{result.stderr}"
        return output

    async def list_files(self, session_id: str | None = None) -> str:
        """
        List files stored in the resolved session.
        """
        session_id = self.sessions.resolve(session_id)
        try:
            return await self.client.list_files(session_id)
        except InterpreterError as e:
            raise ToolInvocationError(f"failed to list files: {e}") from e

    def _local_path(self, file_name: str) -> Path:
        """Map a session file name onto the download directory.

        Raises:
            ToolInvocationError: If the name is empty, contains NUL or points outside the download directory.
        """
        if not file_name:
            raise ToolInvocationError("file_name is required")
        if "\x00" in file_name:
            raise ToolInvocationError(f"file_name {file_name!r} contains a null byte")

        directory = Path(self.config.download_directory).absolute()
        target = (directory / file_name).absolute()
        if directory.resolve() not in target.resolve().parents:
            raise ToolInvocationError(f"file_name {file_name!r} resolves outside the download directory")
        return target

    async def _write_file(self, target: Path, content: bytes) -> None:
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise DownloadError(f"failed to create directory: {e}") from e

        try:
            async with aiofiles.open(target, "wb") as f:
                await f.write(content)
        except OSError as e:
            raise DownloadError(f"failed to write file: {e}") from e

    async def download_file(
        self, file_name: str, session_id: str | None = None
    ) -> list[TextContent | EmbeddedResource]:
        """
        Download a session file into the download directory.
        Returns the file name and an embedded blob resource pointing at the local copy.
        """
        session_id = self.sessions.resolve(session_id)
        target = self._local_path(file_name)

        try:
            content = await self.client.get_file(session_id, file_name)
            await self._write_file(target, content)
        except InterpreterError as e:
            raise ToolInvocationError(f"failed to get file {file_name}: {e}") from e

        logger.info(f"Downloaded {file_name} from session {session_id} to {target} ({len(content)} bytes)")

        mime_type, _ = mimetypes.guess_type(file_name)
        resource = EmbeddedResource(
            type="resource",
            resource=BlobResourceContents(
                uri=f"file://{target}",
                mimeType=mime_type or "application/octet-stream",
                blob=base64.b64encode(content).decode("utf-8"),
            ),
        )
        return [TextContent(type="text", text=file_name), resource]

    async def shutdown(self) -> None:
        await self.client.aclose()
