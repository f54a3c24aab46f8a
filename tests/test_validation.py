"""Tests for argument validation against input shapes."""

import math

import pytest

from greeting_server.capabilities import ParamSpec, validate
from greeting_server.capabilities.validation import ARGUMENTS_FIELD
from greeting_server.catalog import CALCULATOR, CODE_REVIEW, CURRENT_TIME, GREETING
from greeting_server.errors import ArgumentValidationError, ErrorKind
from greeting_server.types import ParamType

GREETING_SHAPE = GREETING.input_shape
CALCULATOR_SHAPE = CALCULATOR.input_shape


def _issues(shape, raw_args):
    with pytest.raises(ArgumentValidationError) as exc_info:
        validate(shape, raw_args, "test")
    return exc_info.value.issues


class TestValidArguments:
    """Test arguments that satisfy their shape."""

    def test_required_fields_pass_through(self) -> None:
        """Valid values should come back unchanged."""
        result = validate(GREETING_SHAPE, {"name": "Ann", "language": "english"})
        assert dict(result) == {"name": "Ann", "language": "english"}

    def test_unknown_fields_are_ignored(self) -> None:
        """Extra keys should be dropped, not rejected."""
        result = validate(
            GREETING_SHAPE, {"name": "Ann", "language": "english", "mood": "happy"}
        )
        assert "mood" not in result

    def test_number_accepts_integers(self) -> None:
        """Integral JSON numbers should satisfy a number parameter."""
        result = validate(CALCULATOR_SHAPE, {"num1": 3, "num2": 2.5, "operator": "+"})
        assert result["num1"] == 3
        assert result["num2"] == 2.5

    def test_absent_optional_without_default_is_omitted(self) -> None:
        """An optional parameter with no default should not appear."""
        assert dict(validate(CURRENT_TIME.input_shape, {})) == {}

    def test_explicit_null_optional_is_omitted(self) -> None:
        """An optional parameter given as null behaves as absent."""
        assert dict(validate(CURRENT_TIME.input_shape, {"timezone": None})) == {}

    def test_absent_optional_takes_default(self) -> None:
        """An optional parameter with a default should get that default."""
        shape = {
            "style": ParamSpec(ParamType.STRING, required=False, default="plain"),
        }
        assert validate(shape, {})["style"] == "plain"

    def test_null_optional_takes_default(self) -> None:
        """An optional parameter given as null should get its default."""
        shape = {
            "style": ParamSpec(ParamType.STRING, required=False, default="plain"),
        }
        assert validate(shape, {"style": None})["style"] == "plain"

    def test_null_required_is_type_mismatch(self) -> None:
        """Null does not satisfy a required parameter."""
        issues = _issues(GREETING_SHAPE, {"name": None, "language": "english"})
        assert issues[0].kind is ErrorKind.TYPE_MISMATCH

    def test_none_means_empty(self) -> None:
        """A missing argument bag should be treated as empty."""
        assert dict(validate(CURRENT_TIME.input_shape, None)) == {}

    def test_empty_shape_accepts_anything(self) -> None:
        """A shape with no parameters should ignore every key."""
        assert dict(validate({}, {"anything": 1})) == {}

    def test_result_is_read_only(self) -> None:
        """Validated arguments should not be mutable."""
        result = validate(GREETING_SHAPE, {"name": "Ann", "language": "english"})
        with pytest.raises(TypeError):
            result["name"] = "Bob"  # type: ignore[index]

    def test_integer_and_boolean_types(self) -> None:
        """Integer and boolean parameters should accept their own types."""
        shape = {
            "count": ParamSpec(ParamType.INTEGER),
            "verbose": ParamSpec(ParamType.BOOLEAN),
        }
        result = validate(shape, {"count": 3, "verbose": True})
        assert dict(result) == {"count": 3, "verbose": True}

    @pytest.mark.parametrize(
        "shape,raw_args",
        [
            (GREETING_SHAPE, {"name": "Ann", "language": "korean", "x": 1}),
            (CALCULATOR_SHAPE, {"num1": 1.5, "num2": 4, "operator": "/"}),
            (CURRENT_TIME.input_shape, {}),
            (CODE_REVIEW.input_shape, {"code": "x = 1", "focus": "security"}),
        ],
    )
    def test_validation_is_idempotent(self, shape, raw_args) -> None:
        """Validating a validated result should yield the same values."""
        once = validate(shape, raw_args)
        twice = validate(shape, once)
        assert dict(twice) == dict(once)


class TestMissingFields:
    """Test missing required parameters."""

    def test_missing_required_field(self) -> None:
        """A missing required parameter should be reported by name."""
        issues = _issues(GREETING_SHAPE, {"language": "english"})

        assert len(issues) == 1
        assert issues[0].kind is ErrorKind.MISSING_FIELD
        assert issues[0].field == "name"

    def test_all_missing_fields_reported(self) -> None:
        """Every missing parameter should be listed."""
        issues = _issues(GREETING_SHAPE, {})

        assert {issue.field for issue in issues} == {"name", "language"}
        assert all(issue.kind is ErrorKind.MISSING_FIELD for issue in issues)

    def test_error_message_names_capability(self) -> None:
        """The exception message should name the capability and field."""
        with pytest.raises(ArgumentValidationError) as exc_info:
            validate(GREETING_SHAPE, {"language": "english"}, "greeting")

        assert "greeting" in str(exc_info.value)
        assert "'name' is required" in str(exc_info.value)
        assert exc_info.value.code == "missing_field"


class TestTypeMismatch:
    """Test values of the wrong type."""

    def test_number_for_string(self) -> None:
        """A number should not satisfy a string parameter."""
        issues = _issues(GREETING_SHAPE, {"name": 42, "language": "english"})

        assert issues[0].kind is ErrorKind.TYPE_MISMATCH
        assert issues[0].field == "name"

    def test_numeric_string_not_coerced(self) -> None:
        """A numeric string should not satisfy a number parameter."""
        issues = _issues(CALCULATOR_SHAPE, {"num1": "5", "num2": 1, "operator": "+"})

        assert issues[0].kind is ErrorKind.TYPE_MISMATCH
        assert issues[0].field == "num1"

    def test_boolean_is_not_a_number(self) -> None:
        """A boolean should not satisfy a number parameter."""
        issues = _issues(CALCULATOR_SHAPE, {"num1": True, "num2": 1, "operator": "+"})
        assert issues[0].kind is ErrorKind.TYPE_MISMATCH

    @pytest.mark.parametrize("value", [math.inf, -math.inf, math.nan])
    def test_non_finite_number_rejected(self, value) -> None:
        """Infinite and NaN values should be rejected."""
        issues = _issues(CALCULATOR_SHAPE, {"num1": value, "num2": 1, "operator": "+"})

        assert issues[0].kind is ErrorKind.TYPE_MISMATCH
        assert "finite" in issues[0].message

    def test_oversized_integer(self) -> None:
        """An integer too large for a float should be reported as non-finite."""
        issues = _issues(
            CALCULATOR_SHAPE, {"num1": 10**400, "num2": 1, "operator": "+"}
        )

        assert issues[0].kind is ErrorKind.TYPE_MISMATCH
        assert issues[0].field == "num1"
        assert "finite number" in issues[0].message

    def test_non_string_enum_value(self) -> None:
        """A non-string value for an enum parameter is a type mismatch."""
        issues = _issues(GREETING_SHAPE, {"name": "Ann", "language": 7})

        assert issues[0].kind is ErrorKind.TYPE_MISMATCH
        assert issues[0].field == "language"

    @pytest.mark.parametrize("raw_args", [["name", "Ann"], "name=Ann", 42])
    def test_non_object_arguments(self, raw_args) -> None:
        """An argument bag that is not an object should be rejected."""
        issues = _issues(GREETING_SHAPE, raw_args)

        assert issues[0].kind is ErrorKind.TYPE_MISMATCH
        assert issues[0].field == ARGUMENTS_FIELD


class TestInvalidEnumValue:
    """Test enumerated parameters."""

    def test_value_outside_allowed_set(self) -> None:
        """A string outside the allowed set should be reported."""
        issues = _issues(GREETING_SHAPE, {"name": "Ann", "language": "klingon"})

        assert issues[0].kind is ErrorKind.INVALID_ENUM_VALUE
        assert issues[0].field == "language"
        assert "klingon" in issues[0].message
        assert "korean" in issues[0].message

    def test_enum_is_case_sensitive(self) -> None:
        """Enum matching should be exact."""
        issues = _issues(GREETING_SHAPE, {"name": "Ann", "language": "English"})
        assert issues[0].kind is ErrorKind.INVALID_ENUM_VALUE

    def test_unknown_operator(self) -> None:
        """Operators outside + - * / should be rejected."""
        issues = _issues(CALCULATOR_SHAPE, {"num1": 1, "num2": 2, "operator": "%"})
        assert issues[0].kind is ErrorKind.INVALID_ENUM_VALUE
