from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ValidationError

from .registry import ToolRegistry


class ArgumentValidationError(Exception):
    """
    Raised when tool arguments violate the tool's input contract.

    Carries the structured breakdown the protocol layer publishes
    as `error.data`.
    """

    def __init__(
        self,
        missing_fields: Optional[List[str]] = None,
        type_mismatches: Optional[List[Dict[str, str]]] = None,
    ) -> None:
        self.missing_fields = missing_fields or []
        self.type_mismatches = type_mismatches or []
        super().__init__(self._describe())

    @classmethod
    def from_pydantic(cls, error: ValidationError) -> "ArgumentValidationError":
        missing: List[str] = []
        mismatches: List[Dict[str, str]] = []

        for detail in error.errors():
            field = ".".join(str(part) for part in detail["loc"]) or "arguments"

            if detail["type"] == "missing":
                missing.append(field)
            else:
                mismatches.append({"field": field, "reason": detail["msg"]})

        return cls(missing, mismatches)

    def _describe(self) -> str:
        parts = []
        if self.missing_fields:
            parts.append(f"Missing required arguments: {self.missing_fields}")
        if self.type_mismatches:
            invalid = ", ".join(
                f"{m['field']} ({m['reason']})" for m in self.type_mismatches
            )
            parts.append(f"Invalid arguments: {invalid}")
        return "; ".join(parts) or "Invalid arguments"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "missingFields": list(self.missing_fields),
            "typeMismatches": list(self.type_mismatches),
        }


class ArgumentValidator:
    """
    Validates tool arguments against the tool's typed input model.

    Checks required fields, JSON types, numeric bounds and enum
    membership. The input dict is never mutated; unknown fields pass
    through untouched.
    """

    def __init__(self, registry: ToolRegistry) -> None:
        self._registry = registry

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def validate(self, tool_name: str, args: Any) -> BaseModel:

        tool = self._registry.lookup(tool_name)

        if not isinstance(args, dict):
            raise ArgumentValidationError(
                type_mismatches=[
                    {"field": "arguments", "reason": "Arguments must be an object"}
                ]
            )

        try:
            return tool.input_model.model_validate(args)
        except ValidationError as e:
            raise ArgumentValidationError.from_pydantic(e) from None
