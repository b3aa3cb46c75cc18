# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_sandbox

"""
azure-code-interpreter-mcp
"""

__version__ = "0.1.0"

from .client import SessionPoolClient
from .config import InterpreterConfig
from .credentials import TokenProvider
from .errors import (
    BackendDecodeError,
    BackendTransportError,
    ConfigurationError,
    CredentialError,
    DownloadError,
    InterpreterError,
    ToolInvocationError,
)
from .fences import strip_code_fence
from .interpreter import CodeInterpreterMCP
from .session import SessionState

__all__ = [
    "CodeInterpreterMCP",
    "InterpreterConfig",
    "SessionPoolClient",
    "SessionState",
    "TokenProvider",
    "strip_code_fence",
    "InterpreterError",
    "ConfigurationError",
    "CredentialError",
    "BackendTransportError",
    "BackendDecodeError",
    "DownloadError",
    "ToolInvocationError",
]
