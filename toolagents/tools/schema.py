from dataclasses import dataclass
from typing import Any, Callable, Dict, Type

from pydantic import BaseModel, ConfigDict


class ToolInput(BaseModel):
    """
    Base class for typed tool inputs.

    Strict mode keeps JSON types honest (no "5" for a number, no true
    for a number). Unknown fields are tolerated and carried in
    `model_extra`. Wire names are camelCase aliases.
    """

    model_config = ConfigDict(
        strict=True,
        extra="allow",
        populate_by_name=True,
        frozen=True,
    )


@dataclass(frozen=True)
class Tool:
    """
    Declarative contract describing one operation an agent exposes
    through `tools/call`.

    A Tool couples two views of the same input:

        input_schema  → published JSON-Schema description (tools/list)
        input_model   → typed pydantic structure used for validation

    The handler receives the validated model instance, never the raw
    arguments dict. Tools are immutable and the set registered per
    agent is fixed at startup.
    """

    # ------------------------------------------------------------------
    # Core Identity
    # ------------------------------------------------------------------

    name: str
    description: str

    # ------------------------------------------------------------------
    # Contract Layer
    # ------------------------------------------------------------------

    input_schema: Dict[str, Any]
    input_model: Type[BaseModel]

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    handler: Callable[[Any], Any]

    # Mutating tools trigger persistence hooks after success
    side_effect: bool = False

    def __post_init__(self):
        if not self.name or not isinstance(self.name, str):
            raise ValueError("Tool name must be a non-empty string.")

        if not isinstance(self.input_schema, dict):
            raise TypeError("input_schema must be a dictionary.")

        if self.input_schema.get("type") != "object":
            raise ValueError(f"Tool '{self.name}' input_schema must describe an object.")

        if not (isinstance(self.input_model, type) and issubclass(self.input_model, BaseModel)):
            raise TypeError("input_model must be a pydantic model class.")

        if not callable(self.handler):
            raise TypeError("handler must be callable.")

    # ------------------------------------------------------------------
    # Published Descriptor
    # ------------------------------------------------------------------

    def to_descriptor(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema,
        }

    @property
    def required_fields(self):
        return tuple(self.input_schema.get("required", ()))
