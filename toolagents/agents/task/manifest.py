MANIFEST = {
    "name": "task-agent",
    "version": "1.0.0",
    "protocol": "2024-11-05",
    "port": 3004,
    "tools": {
        "create_project": {
            "description": "Create a new project",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "name": {"type": "string"},
                    "description": {"type": "string"},
                },
                "required": ["name", "description"],
            },
        },
        "add_phase": {
            "description": "Add phase to project",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "projectId": {"type": "string"},
                    "name": {"type": "string"},
                    "description": {"type": "string"},
                },
                "required": ["projectId", "name", "description"],
            },
        },
        "add_task": {
            "description": "Add task to phase",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "projectId": {"type": "string"},
                    "phaseId": {"type": "string"},
                    "name": {"type": "string"},
                    "description": {"type": "string"},
                    "dependsOn": {
                        "type": "array",
                        "items": {"type": "string"},
                        "description": "Ids of tasks that must complete first",
                    },
                },
                "required": ["projectId", "phaseId", "name", "description"],
            },
        },
        "execute_task": {
            "description": "Mark a task as executed once its dependencies are complete",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "projectId": {"type": "string"},
                    "taskId": {"type": "string"},
                },
                "required": ["projectId", "taskId"],
            },
        },
        "get_project_status": {
            "description": "Get project status",
            "inputSchema": {
                "type": "object",
                "properties": {"projectId": {"type": "string"}},
                "required": ["projectId"],
            },
        },
        "validate_dependencies": {
            "description": "Check task dependencies for cycles and unknown references",
            "inputSchema": {
                "type": "object",
                "properties": {"projectId": {"type": "string"}},
                "required": ["projectId"],
            },
        },
    },
}
