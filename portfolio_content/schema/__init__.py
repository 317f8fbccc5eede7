"""Schema declaration primitives and the collection registry.

Field types are built from the primitive constructors (:func:`string`,
:func:`date`, :func:`boolean`, :func:`number`) and the combinators
(:func:`optional`, :func:`with_default`, :func:`array_of`, :func:`object_of`,
:func:`enum_of`), then grouped into a :class:`Schema` and registered under a
collection name in a :class:`SchemaRegistry`.

Examples
--------
>>> from portfolio_content.schema import Schema, SchemaRegistry, enum_of, string
>>> registry = SchemaRegistry()
>>> _ = registry.register(
...     "projects", Schema(title=string(), category=enum_of(["automation", "testing"]))
... )
>>> registry.resolve("projects")["category"].describe()
'one of: automation, testing'
"""

from .fields import (
    ArrayType,
    DefaultType,
    EnumType,
    FieldType,
    ObjectType,
    OptionalType,
    Primitive,
    PrimitiveType,
    Schema,
    array_of,
    boolean,
    date,
    enum_of,
    number,
    object_of,
    optional,
    string,
    with_default,
)
from .registry import SchemaRegistry

__all__ = [
    "ArrayType",
    "DefaultType",
    "EnumType",
    "FieldType",
    "ObjectType",
    "OptionalType",
    "Primitive",
    "PrimitiveType",
    "Schema",
    "SchemaRegistry",
    "array_of",
    "boolean",
    "date",
    "enum_of",
    "number",
    "object_of",
    "optional",
    "string",
    "with_default",
]
