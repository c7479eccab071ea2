from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..base import ToolAgent, tools_from_manifest
from ...config import AgentConfig
from ...tools.schema import Tool
from .board import ProjectBoard
from .manifest import MANIFEST
from .inputs import (
    CreateProjectInput,
    AddPhaseInput,
    AddTaskInput,
    ExecuteTaskInput,
    ProjectInput,
)


class TaskAgent(ToolAgent):
    """Project / phase / task bookkeeping with dependency validation."""

    manifest = MANIFEST

    def __init__(
        self,
        config: AgentConfig,
        board: Optional[ProjectBoard] = None,
    ) -> None:
        super().__init__(config)
        self.board = board if board is not None else ProjectBoard()

    def build_tools(self) -> List[Tool]:
        return tools_from_manifest(
            self.manifest,
            {
                "create_project": (CreateProjectInput, self._create_project, True),
                "add_phase": (AddPhaseInput, self._add_phase, True),
                "add_task": (AddTaskInput, self._add_task, True),
                "execute_task": (ExecuteTaskInput, self._execute_task, True),
                "get_project_status": (ProjectInput, self._get_project_status, False),
                "validate_dependencies": (ProjectInput, self._validate_dependencies, False),
            },
        )

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------

    def _create_project(self, args: CreateProjectInput) -> Dict[str, Any]:
        return self.board.create_project(args.name, args.description)

    def _add_phase(self, args: AddPhaseInput) -> Dict[str, Any]:
        return self.board.add_phase(args.project_id, args.name, args.description)

    def _add_task(self, args: AddTaskInput) -> Dict[str, Any]:
        return self.board.add_task(
            args.project_id,
            args.phase_id,
            args.name,
            args.description,
            depends_on=args.depends_on,
        )

    def _execute_task(self, args: ExecuteTaskInput) -> Dict[str, Any]:
        return self.board.execute_task(args.project_id, args.task_id)

    def _get_project_status(self, args: ProjectInput) -> Dict[str, Any]:
        return self.board.get_project_status(args.project_id)

    def _validate_dependencies(self, args: ProjectInput) -> Dict[str, Any]:
        return self.board.validate_dependencies(args.project_id)

    def health_details(self) -> Dict[str, Any]:
        return {"projectCount": len(self.board)}
