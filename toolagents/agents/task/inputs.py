from typing import List, Optional

from pydantic import Field

from ...tools.schema import ToolInput


class CreateProjectInput(ToolInput):
    name: str = Field(min_length=1)
    description: str


class AddPhaseInput(ToolInput):
    project_id: str = Field(alias="projectId")
    name: str = Field(min_length=1)
    description: str


class AddTaskInput(ToolInput):
    project_id: str = Field(alias="projectId")
    phase_id: str = Field(alias="phaseId")
    name: str = Field(min_length=1)
    description: str
    depends_on: Optional[List[str]] = Field(default=None, alias="dependsOn")


class ExecuteTaskInput(ToolInput):
    project_id: str = Field(alias="projectId")
    task_id: str = Field(alias="taskId")


class ProjectInput(ToolInput):
    project_id: str = Field(alias="projectId")
