# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_sandbox

from uuid import uuid4

from loguru import logger


def new_session_id() -> str:
    return uuid4().hex


class SessionState:
    """Holds the current session identifier.

    The value is shared by every tool call in the process. A new_session()
    issued while another call is in flight changes what later implicit calls
    resolve to; calls that need isolation must pass an explicit session id.
    """

    def __init__(self, initial: str | None = None):
        self.current = initial or new_session_id()
        logger.info(f"Initial session: {self.current}")

    def new_session(self, reason: str | None = None) -> str:
        """Replace the current session with a fresh identifier and return it."""
        self.current = new_session_id()
        if reason:
            logger.info(f"New session {self.current} created: {reason}")
        else:
            logger.info(f"New session {self.current} created")
        return self.current

    def resolve(self, session_id: str | None = None) -> str:
        """Return the explicit session id if given, else the current one."""
        if session_id:
            return session_id
        return self.current
