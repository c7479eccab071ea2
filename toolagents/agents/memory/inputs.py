from typing import Any, Dict, List, Literal, Optional

from pydantic import Field, field_validator

from ...tools.schema import ToolInput


_STRING_METADATA_FIELDS = ("type", "category", "source")

# 100 years
MAX_TTL_SECONDS = 3_153_600_000


def check_metadata(metadata: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """Type-check the recognized metadata fields; others pass through."""
    if metadata is None:
        return metadata

    for name in _STRING_METADATA_FIELDS:
        if name in metadata and not isinstance(metadata[name], str):
            raise ValueError(f"metadata.{name} must be a string")

    tags = metadata.get("tags")
    if tags is not None and (
        not isinstance(tags, list) or not all(isinstance(t, str) for t in tags)
    ):
        raise ValueError("metadata.tags must be an array of strings")

    confidence = metadata.get("confidence")
    if confidence is not None:
        if isinstance(confidence, bool) or not isinstance(confidence, (int, float)):
            raise ValueError("metadata.confidence must be a number")
        if not 0.0 <= confidence <= 1.0:
            raise ValueError("metadata.confidence must be between 0 and 1")

    return metadata


class StoreKnowledgeInput(ToolInput):
    key: str = Field(min_length=1)
    content: str
    metadata: Optional[Dict[str, Any]] = None
    ttl: Optional[float] = Field(
        default=None, gt=0, le=MAX_TTL_SECONDS, allow_inf_nan=False
    )

    @field_validator("metadata")
    @classmethod
    def validate_metadata(cls, value):
        return check_metadata(value)


class QueryKnowledgeInput(ToolInput):
    query: str
    query_type: Literal["exact", "fuzzy", "semantic", "graph"] = Field(
        default="fuzzy", alias="type"
    )
    limit: int = Field(default=10, ge=1)
    include_metadata: bool = Field(default=True, alias="includeMetadata")
    include_relationships: bool = Field(default=False, alias="includeRelationships")


class CreateRelationshipInput(ToolInput):
    from_key: str = Field(alias="fromKey", min_length=1)
    to_key: str = Field(alias="toKey", min_length=1)
    relationship_type: str = Field(alias="relationshipType", min_length=1)
    strength: float = Field(default=0.5, ge=0.0, le=1.0)
    metadata: Optional[Dict[str, Any]] = None

    @field_validator("metadata")
    @classmethod
    def validate_metadata(cls, value):
        return check_metadata(value)


class GetContextInput(ToolInput):
    key: str
    depth: int = Field(default=2, ge=1, le=5)
    relationship_types: Optional[List[str]] = Field(default=None, alias="relationshipTypes")
    include_content: bool = Field(default=True, alias="includeContent")
    direction: Literal["outgoing", "incoming", "both"] = "outgoing"


class DeleteKnowledgeInput(ToolInput):
    key: str
