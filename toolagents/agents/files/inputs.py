from typing import Literal

from pydantic import Field

from ...tools.schema import ToolInput


Encoding = Literal["utf8", "utf-8", "base64"]


class ReadFileInput(ToolInput):
    path: str = Field(min_length=1)
    encoding: Encoding = "utf8"


class WriteFileInput(ToolInput):
    path: str = Field(min_length=1)
    content: str
    encoding: Encoding = "utf8"
    create_directories: bool = Field(default=False, alias="createDirectories")


class ListDirectoryInput(ToolInput):
    path: str = Field(min_length=1)
    recursive: bool = False
    include_hidden: bool = Field(default=False, alias="includeHidden")


class CreateDirectoryInput(ToolInput):
    path: str = Field(min_length=1)
    recursive: bool = False


class DeleteFileInput(ToolInput):
    path: str = Field(min_length=1)
    recursive: bool = False
