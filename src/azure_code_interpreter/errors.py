# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_sandbox

"""Exception hierarchy for the code interpreter bridge.

Configuration and credential errors are fatal at startup. Transport, decode
and download errors are raised per call and wrapped into a
ToolInvocationError before reaching the MCP layer.
"""


class InterpreterError(Exception):
    """Base class for all bridge errors."""


class ConfigurationError(InterpreterError):
    """Raised when a required setting is missing or invalid."""


class CredentialError(InterpreterError):
    """Raised when a bearer token cannot be obtained from the credential provider."""


class BackendTransportError(InterpreterError):
    """Raised when an HTTP exchange with the session pool cannot complete.

    Attributes:
        status_code: HTTP status of the response, or None if no response was received.
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class BackendDecodeError(InterpreterError):
    """Raised when the session pool returns a body that cannot be decoded."""


class DownloadError(InterpreterError):
    """Raised when a downloaded file cannot be stored locally."""


class ToolInvocationError(InterpreterError):
    """Raised by a tool handler, wrapping the underlying cause with context."""
