# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_sandbox

"""Wire models for the session pool code interpreter API."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class ExecutionRequestProperties(_WireModel):
    code_input_type: Literal["inline"] = Field(default="inline", alias="codeInputType")
    execution_type: Literal["synchronous"] = Field(default="synchronous", alias="executionType")
    code: str


class ExecutionRequest(_WireModel):
    """Body of POST /code/execute."""

    properties: ExecutionRequestProperties

    @classmethod
    def inline(cls, code: str) -> "ExecutionRequest":
        return cls(properties=ExecutionRequestProperties(code=code))


class ExecutionResultProperties(_WireModel):
    status: str = ""
    stdout: str = ""
    stderr: str = ""


class ExecutionResult(_WireModel):
    """Response of POST /code/execute.

    Attributes:
        properties: Backend status with captured stdout and stderr.
    """

    properties: ExecutionResultProperties

    @property
    def status(self) -> str:
        return self.properties.status

    @property
    def stdout(self) -> str:
        return self.properties.stdout

    @property
    def stderr(self) -> str:
        return self.properties.stderr


class FileListingProperties(_WireModel):
    filename: str
    size: int = 0
    last_modified_time: str = Field(default="", alias="lastModifiedTime")


class FileListingEntry(_WireModel):
    """Metadata for one file stored in a session."""

    properties: FileListingProperties

    @property
    def filename(self) -> str:
        return self.properties.filename


class FileListing(_WireModel):
    """Response of GET /files."""

    value: list[FileListingEntry] = Field(default_factory=list)
