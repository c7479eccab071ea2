MANIFEST = {
    "name": "file-agent",
    "version": "1.0.0",
    "protocol": "2024-11-05",
    "port": 3001,
    "tools": {
        "read_file": {
            "description": "Read contents of a file",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "path": {"type": "string", "description": "Path to the file to read"},
                    "encoding": {
                        "type": "string",
                        "description": "File encoding",
                        "enum": ["utf8", "utf-8", "base64"],
                        "default": "utf8",
                    },
                },
                "required": ["path"],
            },
        },
        "write_file": {
            "description": "Write content to a file",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "path": {"type": "string", "description": "Path to the file to write"},
                    "content": {"type": "string", "description": "Content to write"},
                    "encoding": {
                        "type": "string",
                        "description": "File encoding",
                        "enum": ["utf8", "utf-8", "base64"],
                        "default": "utf8",
                    },
                    "createDirectories": {
                        "type": "boolean",
                        "description": "Create parent directories",
                        "default": False,
                    },
                },
                "required": ["path", "content"],
            },
        },
        "list_directory": {
            "description": "List contents of a directory",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "path": {"type": "string", "description": "Path to the directory"},
                    "recursive": {
                        "type": "boolean",
                        "description": "List recursively",
                        "default": False,
                    },
                    "includeHidden": {
                        "type": "boolean",
                        "description": "Include hidden files",
                        "default": False,
                    },
                },
                "required": ["path"],
            },
        },
        "create_directory": {
            "description": "Create a directory",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "path": {"type": "string", "description": "Path to create"},
                    "recursive": {
                        "type": "boolean",
                        "description": "Create parent directories",
                        "default": False,
                    },
                },
                "required": ["path"],
            },
        },
        "delete_file": {
            "description": "Delete a file or directory",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "path": {"type": "string", "description": "Path to delete"},
                    "recursive": {
                        "type": "boolean",
                        "description": "Delete non-empty directories",
                        "default": False,
                    },
                },
                "required": ["path"],
            },
        },
    },
}
