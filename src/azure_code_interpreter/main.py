# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_sandbox

import sys
from contextlib import asynccontextmanager
from typing import Annotated, AsyncIterator

from mcp.server.fastmcp import FastMCP
from mcp.types import EmbeddedResource, TextContent
from pydantic import Field

from azure_code_interpreter.client import SessionPoolClient
from azure_code_interpreter.config import InterpreterConfig
from azure_code_interpreter.credentials import TokenProvider
from azure_code_interpreter.errors import ConfigurationError, CredentialError
from azure_code_interpreter.interpreter import CodeInterpreterMCP
from azure_code_interpreter.utils.logger import logger

SERVER_NAME = "Azure Code Interpreter MCP Server"

# Set by main() once configuration and credentials are verified
interpreter: CodeInterpreterMCP | None = None


@asynccontextmanager
async def lifespan(server: FastMCP) -> AsyncIterator[None]:
    """Close the backend client when the server stops."""
    try:
        yield
    finally:
        if interpreter is not None:
            logger.info(f"Shutting down {SERVER_NAME}")
            await interpreter.shutdown()


mcp = FastMCP(SERVER_NAME, lifespan=lifespan)


def _interpreter() -> CodeInterpreterMCP:
    if interpreter is None:
        raise RuntimeError("Code interpreter is not initialized")
    return interpreter


@mcp.tool(name="new_session")  # type: ignore[misc]
async def new_session(
    reason: Annotated[str | None, Field(description="Optional: reason the session was created")] = None,
) -> str:
    """Create a new session, any generated files are stored in the session"""
    return await _interpreter().new_session(reason)


@mcp.tool(name="exec")  # type: ignore[misc]
async def exec_code(
    code: Annotated[str, Field(description="Python code to execute in the session")],
    session_id: Annotated[str | None, Field(description="Optional: Session ID to execute code in")] = None,
) -> str:
    """Execute Python code in a session. Store all files generated in the `/mnt/data/` directory"""
    return await _interpreter().exec_code(code, session_id)


@mcp.tool(name="list_files")  # type: ignore[misc]
async def list_files(
    session_id: Annotated[str | None, Field(description="Optional: Session ID to list files in")] = None,
) -> str:
    """List files in the session"""
    return await _interpreter().list_files(session_id)


@mcp.tool(name="download_file")  # type: ignore[misc]
async def download_file(
    file_name: Annotated[str, Field(description="Path of file to download from the session")],
    session_id: Annotated[str | None, Field(description="Optional: Session ID to download file from")] = None,
) -> list[TextContent | EmbeddedResource]:
    """Download a file from the session to the local computer"""
    return await _interpreter().download_file(file_name, session_id)


def build_interpreter(config: InterpreterConfig | None = None) -> CodeInterpreterMCP:
    """Wire configuration, credentials and the backend client together.

    The bearer token is acquired once here so that a missing identity fails
    before the server starts accepting calls.

    Raises:
        ConfigurationError: If a required setting is missing.
        CredentialError: If no token can be obtained.
    """
    config = config or InterpreterConfig()
    config.validate_required()

    token_provider = TokenProvider(scope=config.token_scope, refresh_margin=config.token_refresh_margin)
    token_provider.get_token_sync()

    client = SessionPoolClient(config, token_provider)
    logger.info(f"Using session pool {client.base_url}")
    return CodeInterpreterMCP(config, client)


def main() -> None:
    """Entry point for the MCP server."""
    global interpreter
    try:
        interpreter = build_interpreter()
    except (ConfigurationError, CredentialError) as e:
        logger.error(f"Failed to start {SERVER_NAME}: {e}")
        sys.exit(1)

    mcp.run()


if __name__ == "__main__":  # pragma: no cover
    main()
