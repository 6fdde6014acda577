"""Field assertions against declared types and literal values.

Every function records its outcome on the recorder and never raises for any
JSON value. A field that is absent (or null) passes its type check, because
the schema language has no way to mark a field as required.
"""

import math
import re
from collections.abc import Iterable, Mapping
from datetime import UTC, datetime, timedelta
from typing import Any

from apiconform.fields.models import (
    MISSING,
    FieldType,
    LiteralMatch,
    TypeCheck,
    parse_expectation,
    parse_field_spec,
)
from apiconform.runner.recorder import AssertionRecorder

_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)
_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")

# Years outside this open interval are probably a malformed timestamp.
MIN_YEAR = 2000
MAX_YEAR = 2050

# Tags outside FieldType are checked against these JSON type names.
_JSON_TYPE_NAMES = frozenset({"string", "number", "boolean", "object"})


def json_type(value: Any) -> str:
    """Name the JSON runtime type of a value: string, number, boolean, object."""
    if value is MISSING:
        return "undefined"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int | float):
        return "number"
    if isinstance(value, str):
        return "string"
    return "object"


def parse_int(value: Any) -> int | None:
    """Leniently parse an integer, accepting numeric strings with trailing text.

    Returns:
        The parsed integer, or None if the value does not start with one

    Raises:
        ValueError: If a string's leading digits exceed the interpreter's
            integer conversion limit
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    if isinstance(value, str):
        match = _INT_PREFIX.match(value)
        return int(match.group(1)) if match else None
    return None


def _is_long(value: Any) -> bool:
    # Only the shape matters, so digit strings of any length pass.
    if isinstance(value, str):
        return _INT_PREFIX.match(value) is not None
    return parse_int(value) is not None


def _is_date(value: Any) -> bool:
    try:
        millis = parse_int(value)
        if millis is None:
            return False
        year = (_EPOCH + timedelta(milliseconds=millis)).year
    except (OverflowError, ValueError):
        return False
    return MIN_YEAR < year < MAX_YEAR


def _is_keyvalue(value: Any) -> bool:
    if not isinstance(value, Mapping):
        return False
    return all(
        isinstance(k, str) and isinstance(v, list | tuple) and bool(v) and isinstance(v[0], str)
        for k, v in value.items()
    )


def assert_field_type(
    recorder: AssertionRecorder, value: Any, name: str, field_type: FieldType | str
) -> bool:
    """Check that a field holds a value of the given type.

    Args:
        recorder: Recorder of the running test
        value: Field value, or MISSING if the field is absent
        name: Field name used in the message
        field_type: Type tag; unknown tags are checked against JSON type names

    Returns:
        The warning flag, True when the check failed
    """
    if value is MISSING or value is None:
        return recorder.check(True, f"Field {name} is missing so the type can't be tested")

    label = str(field_type)
    if field_type == FieldType.LONG:
        test = _is_long(value)
    elif field_type == FieldType.DATE:
        test = _is_date(value)
        label = "date in milliseconds since the epoch"
    elif field_type == FieldType.ARRAY:
        test = isinstance(value, list | tuple)
    elif field_type == FieldType.KEYVALUE:
        test = _is_keyvalue(value)
    else:
        if field_type == FieldType.INT:
            label = "number"
        test = json_type(value) == label and label in _JSON_TYPE_NAMES

    return recorder.check(test, f"Field {name} is a {label}")


def assert_field(
    recorder: AssertionRecorder,
    value: Any,
    name: str,
    expectation: object = FieldType.STRING,
) -> bool:
    """Check a field against a type tag or a literal value.

    Returns:
        The warning flag, True when the check failed
    """
    resolved = parse_expectation(expectation)
    if isinstance(resolved, TypeCheck):
        return assert_field_type(recorder, value, name, resolved.tag)
    return _assert_literal(recorder, value, name, resolved)


def _assert_literal(
    recorder: AssertionRecorder, value: Any, name: str, expected: LiteralMatch
) -> bool:
    same_type = json_type(value) == json_type(expected.value)
    return recorder.check(
        same_type and value == expected.value, f"Field {name} is {expected.value}"
    )


def assert_fields(
    recorder: AssertionRecorder, obj: Mapping[str, Any], prefix: str, fields: Iterable[object]
) -> None:
    """Check each declared field of an object, in schema order.

    Args:
        recorder: Recorder of the running test
        obj: Parsed JSON object
        prefix: Prepended to every field name in messages, e.g. ``"items."``
        fields: Schema entries, see ``parse_field_spec``
    """
    for entry in fields:
        spec = parse_field_spec(entry)
        value = obj.get(spec.name, MISSING) if isinstance(obj, Mapping) else MISSING
        assert_field(recorder, value, prefix + spec.name, spec.expectation)


def assert_array_object(
    recorder: AssertionRecorder,
    parent: Mapping[str, Any],
    array_name: str,
    prefix: str,
    fields: Iterable[object],
) -> None:
    """Check that an array field is non-empty and that its first element fits a schema.

    Only the first element is validated; arrays are assumed to be homogeneous.
    """
    objects = parent.get(array_name) if isinstance(parent, Mapping) else None
    if not isinstance(objects, list | tuple):
        objects = []
    field = prefix + array_name
    recorder.check(len(objects) > 0, f"Field {field} is non-empty")

    first = objects[0] if objects else {}
    if not isinstance(first, Mapping):
        first = {}
    assert_fields(recorder, first, field + ".", fields)
