"""Field type descriptors and the :class:`Schema` container.

Every field type is one of a closed set of frozen dataclasses
(:class:`PrimitiveType`, :class:`OptionalType`, :class:`DefaultType`,
:class:`ArrayType`, :class:`ObjectType`, :class:`EnumType`). Schemas are built
from the constructor helpers at the bottom of this module and stay mutable
until a :class:`~portfolio_content.schema.registry.SchemaRegistry` registers
them.

Examples
--------
>>> from portfolio_content.schema import array_of, date, optional, string, Schema
>>> post = Schema({"title": string(), "date": date(), "tags": optional(array_of(string()))})
>>> list(post)
['title', 'date', 'tags']
>>> post["tags"].describe()
'optional<array<string>>'
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import enum
import types
import typing as typ

from ..errors import SchemaDefinitionError


class Primitive(enum.Enum):
    """Primitive value kinds understood by the validator."""

    STRING = "string"
    DATE = "date"
    BOOLEAN = "boolean"
    NUMBER = "number"


@dc.dataclass(frozen=True, slots=True)
class PrimitiveType:
    """A scalar field: string, date, boolean or number."""

    kind: Primitive

    def describe(self) -> str:
        return self.kind.value


@dc.dataclass(frozen=True, slots=True)
class OptionalType:
    """A field that may be absent; absent values validate to ``None``."""

    inner: FieldType

    def describe(self) -> str:
        return f"optional<{self.inner.describe()}>"


@dc.dataclass(frozen=True, slots=True)
class DefaultType:
    """A field whose absent value is replaced by ``default``."""

    inner: FieldType
    default: typ.Any

    def describe(self) -> str:
        return self.inner.describe()


@dc.dataclass(frozen=True, slots=True)
class ArrayType:
    """A list whose every element conforms to ``item``."""

    item: FieldType

    def describe(self) -> str:
        return f"array<{self.item.describe()}>"


@dc.dataclass(frozen=True, slots=True, eq=False)
class ObjectType:
    """A nested mapping validated against its own :class:`Schema`."""

    schema: Schema

    def describe(self) -> str:
        return "object"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ObjectType):
            return NotImplemented
        return self.schema is other.schema

    def __hash__(self) -> int:
        return id(self.schema)


@dc.dataclass(frozen=True, slots=True)
class EnumType:
    """A string restricted to a fixed set of members."""

    values: tuple[str, ...]

    def describe(self) -> str:
        return "one of: " + ", ".join(self.values)


FieldType = (
    PrimitiveType | OptionalType | DefaultType | ArrayType | ObjectType | EnumType
)
_FIELD_TYPES = (
    PrimitiveType,
    OptionalType,
    DefaultType,
    ArrayType,
    ObjectType,
    EnumType,
)


class Schema:
    """Ordered mapping of field names to field types.

    Field names are unique. Passing a :class:`Schema` or a plain mapping as a
    field type nests it as an object field.
    """

    __slots__ = ("_fields", "_frozen")

    def __init__(
        self, fields: cabc.Mapping[str, FieldSpec] | None = None, /, **named: FieldSpec
    ) -> None:
        self._fields: dict[str, FieldType] = {}
        self._frozen = False
        for name, spec in (fields or {}).items():
            self.add(name, spec)
        for name, spec in named.items():
            self.add(name, spec)

    @property
    def fields(self) -> cabc.Mapping[str, FieldType]:
        """Read-only view of the declared fields in declaration order."""
        return types.MappingProxyType(self._fields)

    @property
    def frozen(self) -> bool:
        return self._frozen

    def add(self, name: str, spec: FieldSpec) -> Schema:
        """Declare a new field and return ``self`` for chaining."""
        if self._frozen:
            msg = f"Cannot add field '{name}' to a registered schema."
            raise SchemaDefinitionError(msg)
        if not isinstance(name, str) or not name:
            msg = f"Field names must be non-empty strings, got {name!r}."
            raise SchemaDefinitionError(msg)
        if name in self._fields:
            msg = f"Field '{name}' is declared more than once."
            raise SchemaDefinitionError(msg)
        self._fields[name] = as_field_type(spec)
        return self

    def extend(
        self, fields: cabc.Mapping[str, FieldSpec] | None = None, /, **named: FieldSpec
    ) -> Schema:
        """Return a new schema with this schema's fields followed by new ones."""
        extended = Schema(self._fields)
        for name, spec in (fields or {}).items():
            extended.add(name, spec)
        for name, spec in named.items():
            extended.add(name, spec)
        return extended

    def freeze(self) -> None:
        """Reject further field declarations."""
        self._frozen = True

    def __getitem__(self, name: str) -> FieldType:
        return self._fields[name]

    def __contains__(self, name: object) -> bool:
        return name in self._fields

    def __iter__(self) -> cabc.Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        inner = ", ".join(
            f"{name}: {field.describe()}" for name, field in self._fields.items()
        )
        return f"Schema({{{inner}}})"


FieldSpec = FieldType | Schema | cabc.Mapping[str, typ.Any]


def as_field_type(spec: FieldSpec) -> FieldType:
    """Normalize ``spec`` into a field type, wrapping schemas and mappings."""
    match spec:
        case Schema():
            return ObjectType(spec)
        case cabc.Mapping():
            return ObjectType(Schema(spec))
        case _ if isinstance(spec, _FIELD_TYPES):
            return spec
        case _:
            msg = f"Unsupported field type {spec!r}."
            raise SchemaDefinitionError(msg)


def string() -> PrimitiveType:
    return PrimitiveType(Primitive.STRING)


def date() -> PrimitiveType:
    """Calendar date without a time or timezone component."""
    return PrimitiveType(Primitive.DATE)


def boolean() -> PrimitiveType:
    return PrimitiveType(Primitive.BOOLEAN)


def number() -> PrimitiveType:
    """Integer or floating point number; booleans are not numbers."""
    return PrimitiveType(Primitive.NUMBER)


def optional(inner: FieldSpec) -> OptionalType:
    return OptionalType(as_field_type(inner))


def with_default(inner: FieldSpec, value: typ.Any) -> DefaultType:
    """Wrap ``inner`` so an absent value is replaced by ``value``.

    The default is checked against ``inner`` when the owning schema is
    registered.
    """
    if value is None:
        msg = "Defaults must not be None; use optional() for absent values."
        raise SchemaDefinitionError(msg)
    return DefaultType(as_field_type(inner), value)


def array_of(item: FieldSpec) -> ArrayType:
    return ArrayType(as_field_type(item))


def object_of(
    fields: Schema | cabc.Mapping[str, FieldSpec] | None = None, /, **named: FieldSpec
) -> ObjectType:
    """Nest a schema, or build one from ``fields``, as an object field."""
    if isinstance(fields, Schema):
        if named:
            msg = "Pass either a Schema or field declarations to object_of, not both."
            raise SchemaDefinitionError(msg)
        return ObjectType(fields)
    return ObjectType(Schema(fields, **named))


def enum_of(values: cabc.Iterable[str]) -> EnumType:
    members = tuple(values)
    if not members:
        msg = "enum_of() requires at least one member."
        raise SchemaDefinitionError(msg)
    if not all(isinstance(member, str) for member in members):
        msg = f"enum_of() members must be strings, got {members!r}."
        raise SchemaDefinitionError(msg)
    if len(set(members)) != len(members):
        msg = f"enum_of() members must be unique, got {members!r}."
        raise SchemaDefinitionError(msg)
    return EnumType(members)


__all__ = [
    "ArrayType",
    "DefaultType",
    "EnumType",
    "FieldSpec",
    "FieldType",
    "ObjectType",
    "OptionalType",
    "Primitive",
    "PrimitiveType",
    "Schema",
    "array_of",
    "as_field_type",
    "boolean",
    "date",
    "enum_of",
    "number",
    "object_of",
    "optional",
    "string",
    "with_default",
]
