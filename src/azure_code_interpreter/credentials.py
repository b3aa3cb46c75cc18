# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_sandbox

import threading
import time
from typing import Callable

import anyio
from azure.core.credentials import AccessToken, TokenCredential
from azure.identity import DefaultAzureCredential
from loguru import logger

from azure_code_interpreter.config import TOKEN_SCOPE
from azure_code_interpreter.errors import CredentialError


class TokenProvider:
    """Caches a bearer token for a fixed scope and refreshes it before expiry.

    The wrapped credential is a blocking Azure SDK object, so the async path
    runs it in a worker thread.
    """

    def __init__(
        self,
        credential: TokenCredential | None = None,
        scope: str = TOKEN_SCOPE,
        refresh_margin: float = 300.0,
        clock: Callable[[], float] = time.time,
    ):
        """Initializes the TokenProvider.

        Args:
            credential: Azure credential. Defaults to DefaultAzureCredential.
            scope: Authorization scope the token is requested for.
            refresh_margin: Seconds before expiry at which the token is renewed.
            clock: Source of the current epoch time.
        """
        self._credential = credential
        self.scope = scope
        self.refresh_margin = refresh_margin
        self._clock = clock
        self._token: AccessToken | None = None
        self._lock = threading.Lock()

    @property
    def credential(self) -> TokenCredential:
        if self._credential is None:
            try:
                self._credential = DefaultAzureCredential()
            except Exception as e:
                raise CredentialError(f"failed to create Azure credential: {e}") from e
        return self._credential

    def _is_fresh(self, token: AccessToken | None) -> bool:
        return token is not None and token.expires_on - self.refresh_margin > self._clock()

    def get_token_sync(self) -> str:
        """Return a valid bearer token, acquiring a new one if needed.

        Raises:
            CredentialError: If the credential provider fails.
        """
        with self._lock:
            cached = self._token
            if cached is not None and self._is_fresh(cached):
                return cached.token

            try:
                token = self.credential.get_token(self.scope)
            except CredentialError:
                raise
            except Exception as e:
                logger.error(f"Failed to acquire token for scope {self.scope}: {e}")
                raise CredentialError(f"failed to acquire token: {e}") from e

            logger.debug(f"Acquired token for scope {self.scope}, expires at {token.expires_on}")
            self._token = token
            return token.token

    async def get_token(self) -> str:
        """Async variant of get_token_sync."""
        return await anyio.to_thread.run_sync(self.get_token_sync)
