"""Helpers shared by every tool module: argument parsing and JSON responses."""

import json
from typing import Any, TypeVar

from mcp import types
from pydantic import BaseModel, ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


def parse_arguments(model: type[ModelT], arguments: dict[str, Any]) -> ModelT:
    """Validate raw tool arguments. Bad input surfaces to the caller as ValueError."""
    try:
        return model.model_validate(arguments or {})
    except ValidationError as e:
        raise ValueError(f"Invalid arguments: {e}") from e


def dump(model: BaseModel) -> dict[str, Any]:
    return model.model_dump(mode="json", by_alias=True)


def respond(result: dict[str, Any]) -> list[types.TextContent]:
    return [types.TextContent(type="text", text=json.dumps(result, indent=2))]


# Reusable JSON Schema fragments.

def enum_schema(enum_cls, description: str, nullable: bool = False) -> dict[str, Any]:
    values = [member.value for member in enum_cls]
    if nullable:
        return {"type": ["string", "null"], "enum": values + [None], "description": description}
    return {"type": "string", "enum": values, "description": description}


def timestamp_schema(description: str, nullable: bool = False) -> dict[str, Any]:
    return {"type": ["integer", "null"] if nullable else "integer", "description": description}
