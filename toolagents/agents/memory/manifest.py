MANIFEST = {
    "name": "memory-agent",
    "version": "1.0.0",
    "protocol": "2024-11-05",
    "port": 3002,
    "tools": {
        "store_knowledge": {
            "description": "Store knowledge in the graph-based memory system",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "key": {"type": "string", "description": "Unique identifier"},
                    "content": {"type": "string", "description": "Knowledge content"},
                    "metadata": {
                        "type": "object",
                        "description": "Additional metadata",
                        "properties": {
                            "type": {"type": "string"},
                            "category": {"type": "string"},
                            "tags": {"type": "array", "items": {"type": "string"}},
                            "source": {"type": "string"},
                            "confidence": {"type": "number", "minimum": 0, "maximum": 1},
                        },
                    },
                    "ttl": {
                        "type": "number",
                        "description": "Time to live in seconds",
                        "exclusiveMinimum": 0,
                        "maximum": 3153600000,
                    },
                },
                "required": ["key", "content"],
            },
        },
        "query_knowledge": {
            "description": "Query knowledge from the memory system",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "query": {"type": "string", "description": "Search query"},
                    "type": {
                        "type": "string",
                        "description": "Search type",
                        "enum": ["exact", "fuzzy", "semantic", "graph"],
                        "default": "fuzzy",
                    },
                    "limit": {
                        "type": "integer",
                        "description": "Max results (values above 100 are clamped)",
                        "minimum": 1,
                        "default": 10,
                    },
                    "includeMetadata": {"type": "boolean", "default": True},
                    "includeRelationships": {"type": "boolean", "default": False},
                },
                "required": ["query"],
            },
        },
        "create_relationship": {
            "description": "Create a relationship between knowledge items",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "fromKey": {"type": "string", "description": "Source key"},
                    "toKey": {"type": "string", "description": "Target key"},
                    "relationshipType": {"type": "string", "description": "Relationship type"},
                    "strength": {
                        "type": "number",
                        "description": "Relationship strength",
                        "minimum": 0,
                        "maximum": 1,
                        "default": 0.5,
                    },
                    "metadata": {"type": "object", "description": "Additional metadata"},
                },
                "required": ["fromKey", "toKey", "relationshipType"],
            },
        },
        "get_context": {
            "description": "Get contextual information around a knowledge item",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "key": {"type": "string", "description": "Knowledge item key"},
                    "depth": {
                        "type": "integer",
                        "description": "Relationship depth",
                        "minimum": 1,
                        "maximum": 5,
                        "default": 2,
                    },
                    "relationshipTypes": {
                        "type": "array",
                        "items": {"type": "string"},
                        "description": "Only follow these relationship types",
                    },
                    "includeContent": {"type": "boolean", "default": True},
                    "direction": {
                        "type": "string",
                        "enum": ["outgoing", "incoming", "both"],
                        "default": "outgoing",
                    },
                },
                "required": ["key"],
            },
        },
        "delete_knowledge": {
            "description": "Delete a knowledge item (its relationships are kept)",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "key": {"type": "string", "description": "Knowledge item key"},
                },
                "required": ["key"],
            },
        },
    },
}
