from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..base import ToolAgent, tools_from_manifest
from ...config import AgentConfig
from ...tools.schema import Tool
from .workspace import FileWorkspace
from .manifest import MANIFEST
from .inputs import (
    ReadFileInput,
    WriteFileInput,
    ListDirectoryInput,
    CreateDirectoryInput,
    DeleteFileInput,
)


class FileAgent(ToolAgent):
    """
    File operations confined to the configured allowed roots.

    Relative paths resolve against the first root.
    """

    manifest = MANIFEST

    def __init__(
        self,
        config: AgentConfig,
        workspace: Optional[FileWorkspace] = None,
    ) -> None:
        super().__init__(config)
        if workspace is None:
            workspace = FileWorkspace(
                config.allowed_roots,
                max_file_size=config.max_file_size,
            )
        self.workspace = workspace

    def build_tools(self) -> List[Tool]:
        return tools_from_manifest(
            self.manifest,
            {
                "read_file": (ReadFileInput, self._read_file, False),
                "write_file": (WriteFileInput, self._write_file, True),
                "list_directory": (ListDirectoryInput, self._list_directory, False),
                "create_directory": (CreateDirectoryInput, self._create_directory, True),
                "delete_file": (DeleteFileInput, self._delete_file, True),
            },
        )

    def _read_file(self, args: ReadFileInput) -> Dict[str, Any]:
        return self.workspace.read(args.path, encoding=args.encoding)

    def _write_file(self, args: WriteFileInput) -> Dict[str, Any]:
        return self.workspace.write(
            args.path,
            args.content,
            encoding=args.encoding,
            create_directories=args.create_directories,
        )

    def _list_directory(self, args: ListDirectoryInput) -> Dict[str, Any]:
        return self.workspace.list(
            args.path,
            recursive=args.recursive,
            include_hidden=args.include_hidden,
        )

    def _create_directory(self, args: CreateDirectoryInput) -> Dict[str, Any]:
        return self.workspace.mkdir(args.path, recursive=args.recursive)

    def _delete_file(self, args: DeleteFileInput) -> Dict[str, Any]:
        return self.workspace.delete(args.path, recursive=args.recursive)

    def health_details(self) -> Dict[str, Any]:
        return {"allowedRoots": [str(root) for root in self.workspace.roots]}
