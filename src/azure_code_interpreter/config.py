# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_sandbox

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from azure_code_interpreter.errors import ConfigurationError

API_VERSION = "2024-02-02-preview"
SERVICE_DOMAIN = "dynamicsessions.io"
TOKEN_SCOPE = "https://dynamicsessions.io/.default"


class InterpreterConfig(BaseSettings):
    """
    Configuration for the code interpreter bridge.

    The four identity fields locate the session pool. They have no defaults:
    an empty value is reported by validate_required() or base_url().
    """

    subscription_id: str = ""
    resource_group: str = ""
    session_pool: str = ""
    region: str = ""

    download_directory: str = Field(
        default="",
        validation_alias=AliasChoices("DOWNLOAD_DIRECTORY", "download_directory"),
    )

    api_version: str = API_VERSION
    service_domain: str = SERVICE_DOMAIN
    token_scope: str = TOKEN_SCOPE
    token_refresh_margin: float = 300.0  # seconds before expiry
    request_timeout: float | None = None

    model_config = SettingsConfigDict(
        env_prefix="AZURE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    def _identity_fields(self) -> list[tuple[str, str]]:
        return [
            ("AZURE_SUBSCRIPTION_ID", self.subscription_id),
            ("AZURE_RESOURCE_GROUP", self.resource_group),
            ("AZURE_SESSION_POOL", self.session_pool),
            ("AZURE_REGION", self.region),
        ]

    def validate_required(self) -> None:
        """Check every required setting, in declaration order.

        Raises:
            ConfigurationError: Naming the first missing environment variable.
        """
        for env_name, value in self._identity_fields() + [("DOWNLOAD_DIRECTORY", self.download_directory)]:
            if not value:
                raise ConfigurationError(f"{env_name} is required")

    def base_url(self) -> str:
        """Compose the session pool management endpoint.

        Returns:
            str: https://<region>.<domain>/subscriptions/<sub>/resourceGroups/<rg>/sessionPools/<pool>

        Raises:
            ConfigurationError: If any identity field is empty.
        """
        for env_name, value in self._identity_fields():
            if not value:
                raise ConfigurationError(f"{env_name} is required")

        return (
            f"https://{self.region}.{self.service_domain}"
            f"/subscriptions/{self.subscription_id}"
            f"/resourceGroups/{self.resource_group}"
            f"/sessionPools/{self.session_pool}"
        )
