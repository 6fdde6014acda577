"""apiconform fields — declared field types and the assertions that check them.

Public API for fields module.
"""

from apiconform.fields.models import (
    MISSING,
    FieldExpectation,
    FieldSpec,
    FieldType,
    LiteralMatch,
    TypeCheck,
    parse_expectation,
    parse_field_spec,
)
from apiconform.fields.validator import (
    assert_array_object,
    assert_field,
    assert_field_type,
    assert_fields,
    json_type,
    parse_int,
)

__all__ = [
    "MISSING",
    "FieldExpectation",
    "FieldSpec",
    "FieldType",
    "LiteralMatch",
    "TypeCheck",
    "assert_array_object",
    "assert_field",
    "assert_field_type",
    "assert_fields",
    "json_type",
    "parse_expectation",
    "parse_field_spec",
    "parse_int",
]
