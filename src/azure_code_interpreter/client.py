# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_sandbox

from typing import Any, TypeVar
from urllib.parse import quote

import httpx
from loguru import logger
from pydantic import BaseModel, ValidationError

from azure_code_interpreter.config import InterpreterConfig
from azure_code_interpreter.credentials import TokenProvider
from azure_code_interpreter.errors import BackendDecodeError, BackendTransportError
from azure_code_interpreter.models import ExecutionRequest, ExecutionResult, FileListing, FileListingEntry

M = TypeVar("M", bound=BaseModel)


class SessionPoolClient:
    """Authenticated client for the session pool code interpreter API.

    Every call is a single blocking round trip: no retries, no caching.
    """

    def __init__(
        self,
        config: InterpreterConfig,
        token_provider: TokenProvider,
        http_client: httpx.AsyncClient | None = None,
    ):
        """Initializes the SessionPoolClient.

        Args:
            config: Bridge configuration. All four identity fields must be set.
            token_provider: Source of bearer tokens.
            http_client: Optional httpx.AsyncClient for connection pooling.

        Raises:
            ConfigurationError: If an identity field is missing.
        """
        self.base_url = config.base_url()
        self.api_version = config.api_version
        self.token_provider = token_provider
        self._internal_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=config.request_timeout)

    async def _request(self, method: str, path: str, session_id: str, **kwargs: Any) -> httpx.Response:
        token = await self.token_provider.get_token()
        url = f"{self.base_url}{path}"
        params = {"api-version": self.api_version, "identifier": session_id}
        headers = {"Authorization": f"Bearer {token}"}

        try:
            response = await self._client.request(method, url, params=params, headers=headers, **kwargs)
        except (httpx.RequestError, httpx.InvalidURL) as e:
            logger.error(f"{method} {path} failed for session {session_id}: {e}")
            raise BackendTransportError(f"failed to execute request: {e}") from e

        logger.info(f"{method} {path} HTTP status: {response.status_code}")
        if response.is_error:
            raise BackendTransportError(
                f"request failed with HTTP {response.status_code}: {response.text[:500]}",
                status_code=response.status_code,
            )
        return response

    @staticmethod
    def _decode(response: httpx.Response, model: type[M]) -> M:
        try:
            return model.model_validate_json(response.content)
        except ValidationError as e:
            raise BackendDecodeError(f"failed to decode response: {e}") from e

    async def execute_detailed(self, session_id: str, code: str) -> ExecutionResult:
        """Run code synchronously in the session.

        Args:
            session_id: Session identifier.
            code: Source text to execute.

        Returns:
            ExecutionResult: Backend status, stdout and stderr.

        Raises:
            BackendTransportError: If the HTTP exchange fails.
            BackendDecodeError: If the response body is malformed.
        """
        body = ExecutionRequest.inline(code).model_dump(by_alias=True)
        response = await self._request("POST", "/code/execute", session_id, json=body)
        result = self._decode(response, ExecutionResult)
        logger.info(f"/code/execute status: {result.status}")
        if result.stdout:
            logger.debug(f"/code/execute stdout:\n{result.stdout}")
        return result

    async def execute(self, session_id: str, code: str) -> str:
        """Run code and return its stdout ("" when there is none)."""
        result = await self.execute_detailed(session_id, code)
        return result.stdout

    async def list_file_entries(self, session_id: str) -> list[FileListingEntry]:
        response = await self._request("GET", "/files", session_id)
        return self._decode(response, FileListing).value

    async def list_files(self, session_id: str) -> str:
        """List files stored in the session.

        Returns:
            str: Filenames joined by newlines, in the order the backend returned them.
        """
        entries = await self.list_file_entries(session_id)
        listing = "\n".join(entry.filename for entry in entries)
        logger.info(f"Files in session {session_id}:\n{listing}")
        return listing

    async def get_file(self, session_id: str, file_name: str) -> bytes:
        """Fetch the raw content of a session file.

        The name is not checked against a previous listing.
        """
        logger.info(f"Get file {file_name} in session {session_id}")
        response = await self._request("GET", f"/files/content/{quote(file_name, safe='/')}", session_id)
        return response.content

    async def aclose(self) -> None:
        if self._internal_client:
            await self._client.aclose()
