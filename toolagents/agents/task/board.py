from __future__ import annotations

import logging
import time
import uuid
from dataclasses import dataclass, field
from threading import RLock
from typing import Any, Dict, List, Optional

from .dependencies import find_cycles, find_missing
from ...errors import NotFoundError
from ...utils import isoformat

logger = logging.getLogger(__name__)


def _new_id(prefix: str) -> str:
    return f"{prefix}_{uuid.uuid4().hex[:12]}"


@dataclass
class Task:
    id: str
    name: str
    description: str
    depends_on: List[str] = field(default_factory=list)
    status: str = "pending"
    completed_at: Optional[float] = None


@dataclass
class Phase:
    id: str
    name: str
    description: str
    tasks: List[Task] = field(default_factory=list)


@dataclass
class Project:
    id: str
    name: str
    description: str
    created_at: float
    phases: List[Phase] = field(default_factory=list)

    def all_tasks(self) -> List[Task]:
        return [task for phase in self.phases for task in phase.tasks]

    def find_task(self, task_id: str) -> Optional[Task]:
        for task in self.all_tasks():
            if task.id == task_id:
                return task
        return None


class ProjectBoard:
    """
    In-memory project / phase / task bookkeeping for the task agent.

    Executing a task only records its completion; no work is performed.
    All access goes through one re-entrant lock.
    """

    def __init__(self) -> None:
        self._projects: Dict[str, Project] = {}
        self._lock = RLock()

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def _project(self, project_id: str) -> Project:
        try:
            return self._projects[project_id]
        except KeyError:
            raise NotFoundError(f"Project not found: {project_id}") from None

    def __len__(self) -> int:
        with self._lock:
            return len(self._projects)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def create_project(self, name: str, description: str) -> Dict[str, Any]:
        with self._lock:
            project = Project(_new_id("proj"), name, description, time.time())
            self._projects[project.id] = project

        logger.info("[TASK BOARD] Created project %s (%s)", project.id, name)
        return {
            "projectId": project.id,
            "name": name,
            "created": isoformat(project.created_at),
        }

    def add_phase(self, project_id: str, name: str, description: str) -> Dict[str, Any]:
        with self._lock:
            project = self._project(project_id)
            phase = Phase(_new_id("phase"), name, description)
            project.phases.append(phase)

        return {"phaseId": phase.id, "projectId": project_id, "name": name}

    def add_task(
        self,
        project_id: str,
        phase_id: str,
        name: str,
        description: str,
        depends_on: Optional[List[str]] = None,
    ) -> Dict[str, Any]:
        with self._lock:
            project = self._project(project_id)
            phase = next((p for p in project.phases if p.id == phase_id), None)
            if phase is None:
                raise NotFoundError(f"Phase not found: {phase_id}")

            task = Task(_new_id("task"), name, description, list(depends_on or []))
            phase.tasks.append(task)

        return {
            "taskId": task.id,
            "phaseId": phase_id,
            "name": name,
            "dependsOn": task.depends_on,
        }

    def execute_task(self, project_id: str, task_id: str) -> Dict[str, Any]:
        """
        Mark a task completed when every dependency already is.
        Otherwise report it as blocked and leave it pending.
        """
        with self._lock:
            project = self._project(project_id)
            task = project.find_task(task_id)
            if task is None:
                raise NotFoundError(f"Task not found: {task_id}")

            pending = []
            for dep in task.depends_on:
                dep_task = project.find_task(dep)
                if dep_task is None or dep_task.status != "completed":
                    pending.append(dep)

            if pending:
                return {
                    "taskId": task_id,
                    "status": "blocked",
                    "pendingDependencies": pending,
                }

            if task.status != "completed":
                task.status = "completed"
                task.completed_at = time.time()

        logger.info("[TASK BOARD] Task %s completed", task_id)
        return {
            "taskId": task_id,
            "status": task.status,
            "timestamp": isoformat(task.completed_at),
        }

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_project_status(self, project_id: str) -> Dict[str, Any]:
        with self._lock:
            project = self._project(project_id)
            tasks = project.all_tasks()
            completed = sum(1 for t in tasks if t.status == "completed")

            return {
                "projectId": project_id,
                "name": project.name,
                "description": project.description,
                "phases": len(project.phases),
                "tasks": {
                    "total": len(tasks),
                    "completed": completed,
                    "pending": len(tasks) - completed,
                },
                "status": "completed" if tasks and completed == len(tasks) else "active",
            }

    def validate_dependencies(self, project_id: str) -> Dict[str, Any]:
        with self._lock:
            project = self._project(project_id)
            graph = {task.id: list(task.depends_on) for task in project.all_tasks()}

        cycles = find_cycles(graph)
        missing = find_missing(graph)

        if cycles:
            logger.warning(
                "[TASK BOARD] Project %s has %d dependency cycles",
                project_id,
                len(cycles),
            )

        return {
            "projectId": project_id,
            "valid": not cycles and not missing,
            "cycles": cycles,
            "missing": missing,
        }
