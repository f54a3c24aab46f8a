"""Input validation for capability arguments.

Arguments are checked against a descriptor's input shape by compiling the
shape into a strict Pydantic model. Unknown keys are ignored; absent
optional parameters take their declared default or are omitted.
"""

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, create_model
from pydantic import ValidationError as PydanticValidationError

from greeting_server.capabilities.descriptors import InputShape, ParamSpec
from greeting_server.errors import ArgumentIssue, ArgumentValidationError, ErrorKind
from greeting_server.types import ParamType, ValidatedArguments

ARGUMENTS_FIELD = "<arguments>"

_PRIMITIVES: dict[ParamType, type] = {
    ParamType.STRING: str,
    ParamType.NUMBER: float,
    ParamType.INTEGER: int,
    ParamType.BOOLEAN: bool,
}


def _field_definition(spec: ParamSpec) -> tuple[Any, Any]:
    annotation: Any = (
        Literal[spec.enum] if spec.enum is not None else _PRIMITIVES[spec.type]
    )
    constraints: dict[str, Any] = {"description": spec.description}
    if spec.type is ParamType.NUMBER:
        constraints["allow_inf_nan"] = False
    if spec.required:
        return annotation, Field(..., **constraints)
    return annotation | None, Field(default=spec.default, **constraints)


def compile_shape(input_shape: InputShape, name: str = "Arguments") -> type[BaseModel]:
    """Compile an input shape into a Pydantic model.

    Args:
        input_shape: Parameter name to spec mapping.
        name: Model name, used in Pydantic's own messages.

    Returns:
        A strict model class that ignores unknown keys.
    """
    fields = {
        param: _field_definition(spec) for param, spec in input_shape.items()
    }
    return create_model(
        name,
        __config__=ConfigDict(strict=True, extra="ignore"),
        **fields,
    )


def _issue_from_error(error: Mapping[str, Any], input_shape: InputShape) -> ArgumentIssue:
    loc = error.get("loc") or ()
    field = str(loc[0]) if loc else ARGUMENTS_FIELD
    spec = input_shape.get(field)
    value = error.get("input")

    if error["type"] == "missing":
        return ArgumentIssue(ErrorKind.MISSING_FIELD, field, f"'{field}' is required")

    if spec is not None and spec.enum is not None and isinstance(value, str):
        allowed = ", ".join(spec.enum)
        return ArgumentIssue(
            ErrorKind.INVALID_ENUM_VALUE,
            field,
            f"'{field}' must be one of: {allowed} (got '{value}')",
        )

    overflowed = (
        spec is not None
        and spec.type is ParamType.NUMBER
        and isinstance(value, int)
        and not isinstance(value, bool)
    )
    if error["type"] == "finite_number" or overflowed:
        expected = "a finite number"
    elif spec is not None:
        expected = f"a {spec.type.value}"
    else:
        expected = "an object"
    return ArgumentIssue(
        ErrorKind.TYPE_MISMATCH,
        field,
        f"'{field}' must be {expected} (got {type(value).__name__})",
    )


def validate(
    input_shape: InputShape,
    raw_args: Mapping[str, Any] | None,
    capability: str = "",
) -> ValidatedArguments:
    """Validate a raw argument bag against an input shape.

    Pure function: no side effects, and validating an already validated
    result yields the same values.

    Args:
        input_shape: Declared parameters of the capability.
        raw_args: Arguments as received from the client (None means empty).
        capability: Capability name, for error messages.

    Returns:
        Read-only mapping of validated arguments.

    Raises:
        ArgumentValidationError: If a required parameter is missing, a value
            has the wrong type, or an enum value is not allowed.
    """
    if raw_args is None:
        raw_args = {}
    if not isinstance(raw_args, Mapping):
        raise ArgumentValidationError(
            capability,
            [
                ArgumentIssue(
                    ErrorKind.TYPE_MISMATCH,
                    ARGUMENTS_FIELD,
                    f"arguments must be an object (got {type(raw_args).__name__})",
                )
            ],
        )

    # Null optionals count as absent so their declared default applies
    data = {
        key: value
        for key, value in raw_args.items()
        if not (value is None and key in input_shape and not input_shape[key].required)
    }

    model = compile_shape(input_shape)
    try:
        instance = model.model_validate(data)
    except PydanticValidationError as e:
        issues = [_issue_from_error(error, input_shape) for error in e.errors()]
        raise ArgumentValidationError(capability, issues) from None

    return MappingProxyType(instance.model_dump(exclude_none=True))


__all__ = ["ARGUMENTS_FIELD", "compile_shape", "validate"]
