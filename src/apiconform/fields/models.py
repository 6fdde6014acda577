"""Field schema data models.

A field schema is a list of entries, each either a bare field name (checked as a
string) or a ``(name, expectation)`` pair. The expectation is one of the fixed
type tags, or any other value to be matched literally.
"""

from collections.abc import Sequence
from enum import StrEnum
from typing import Annotated, Any, Final, Literal

from pydantic import BaseModel, ConfigDict, Field


class FieldType(StrEnum):
    """Type tags understood by the field validator."""

    STRING = "string"
    LONG = "long"
    DATE = "date"
    ARRAY = "array"
    KEYVALUE = "keyvalue"
    INT = "int"
    BOOLEAN = "boolean"


class _Missing:
    """Marker for a field that is absent from its parent object."""

    _instance: "_Missing | None" = None

    def __new__(cls) -> "_Missing":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Final = _Missing()

_TAGS: Final = frozenset(tag.value for tag in FieldType)


class TypeCheck(BaseModel):
    """Expectation that a field has a given type."""

    kind: Literal["type"] = "type"
    tag: FieldType

    model_config = ConfigDict(frozen=True)


class LiteralMatch(BaseModel):
    """Expectation that a field equals a literal value of the same runtime type."""

    kind: Literal["literal"] = "literal"
    value: Any

    model_config = ConfigDict(frozen=True)


FieldExpectation = Annotated[TypeCheck | LiteralMatch, Field(discriminator="kind")]


class FieldSpec(BaseModel):
    """A single declared field and what it is expected to hold."""

    name: str
    expectation: FieldExpectation = TypeCheck(tag=FieldType.STRING)

    model_config = ConfigDict(frozen=True)


def parse_expectation(value: object) -> TypeCheck | LiteralMatch:
    """Resolve a raw expectation into a type check or a literal match.

    Strings naming one of the type tags request a type check. Everything else,
    including strings that are not tags, is matched literally. Wrap a value in
    ``LiteralMatch`` to match a tag name literally.
    """
    if isinstance(value, TypeCheck | LiteralMatch):
        return value
    if isinstance(value, str) and value in _TAGS:
        return TypeCheck(tag=FieldType(value))
    return LiteralMatch(value=value)


def parse_field_spec(entry: object) -> FieldSpec:
    """Parse one schema entry.

    Args:
        entry: A field name, a ``(name, expectation)`` pair, a one-element
            ``(name,)`` sequence meaning a string field, or a FieldSpec

    Returns:
        The parsed FieldSpec

    Raises:
        ValueError: If the entry has none of these shapes
    """
    if isinstance(entry, FieldSpec):
        return entry
    if isinstance(entry, str):
        return FieldSpec(name=entry)
    if isinstance(entry, Sequence) and entry and isinstance(entry[0], str):
        if len(entry) == 1:
            return FieldSpec(name=entry[0])
        if len(entry) == 2:
            return FieldSpec(name=entry[0], expectation=parse_expectation(entry[1]))
    raise ValueError(f"Invalid field spec: {entry!r}")
