"""
Tool argument validation.
"""

from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


def _describe(error: dict[str, Any]) -> str:
    location = ".".join(str(part) for part in error["loc"]) or "arguments"
    return f"{location}: {error['msg']}"


def validate_input(model_class: type[ModelT], data: dict[str, Any]) -> ModelT:
    """
    Parse raw tool arguments into the tool's input model.

    Raises:
        ValueError: With every field error joined into one message, so the
            server can report it as a VALIDATION_ERROR.
    """
    try:
        return model_class.model_validate(data)
    except ValidationError as e:
        problems = "; ".join(_describe(error) for error in e.errors())
        raise ValueError(f"Input validation failed: {problems}") from e


def get_json_schema(model_class: type[BaseModel]) -> dict[str, Any]:
    """JSON Schema advertised in tools/list."""
    return model_class.model_json_schema()
