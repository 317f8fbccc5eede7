"""Registry mapping collection names to their schemas.

The registry is built once at startup, then frozen. Registration walks the
schema tree so declaration mistakes (self-referencing schemas, defaults that
do not match their field type) surface before any content is read.
"""

from __future__ import annotations

import collections.abc as cabc
import typing as typ

from .. import validator
from ..errors import (
    DuplicateCollectionError,
    RegistryFrozenError,
    SchemaCycleError,
    SchemaDefinitionError,
    UnknownCollectionError,
)
from .fields import ArrayType, DefaultType, ObjectType, OptionalType, Schema

if typ.TYPE_CHECKING:
    from .fields import FieldType


class SchemaRegistry:
    """Collection name to :class:`Schema` mapping with one-time initialisation.

    Examples
    --------
    >>> from portfolio_content.schema import SchemaRegistry, Schema, string
    >>> registry = SchemaRegistry({"notes": Schema(title=string())}).freeze()
    >>> registry.names()
    ['notes']
    >>> "notes" in registry
    True
    """

    def __init__(self, collections: cabc.Mapping[str, Schema] | None = None) -> None:
        self._schemas: dict[str, Schema] = {}
        self._frozen = False
        for name, schema in (collections or {}).items():
            self.register(name, schema)

    @property
    def frozen(self) -> bool:
        return self._frozen

    def register(self, name: str, schema: Schema) -> Schema:
        """Register ``schema`` under the collection ``name``.

        Raises
        ------
        RegistryFrozenError
            If :meth:`freeze` has already been called.
        DuplicateCollectionError
            If ``name`` is already registered.
        SchemaCycleError
            If ``schema`` reaches itself through its object fields.
        SchemaDefinitionError
            If a declared default does not conform to its field type.
        """
        if self._frozen:
            msg = f"Cannot register '{name}': the schema registry is frozen."
            raise RegistryFrozenError(msg)
        if name in self._schemas:
            raise DuplicateCollectionError(name)
        if not isinstance(schema, Schema):
            msg = f"Collection '{name}' needs a Schema, got {schema!r}."
            raise SchemaDefinitionError(msg)
        _walk_schema(name, schema, "", [])
        _freeze_tree(schema)
        self._schemas[name] = schema
        return schema

    def resolve(self, name: str) -> Schema:
        """Return the schema registered for ``name``."""
        try:
            return self._schemas[name]
        except KeyError:
            raise UnknownCollectionError(name, self._schemas) from None

    def freeze(self) -> SchemaRegistry:
        """Reject further registrations and return ``self``."""
        self._frozen = True
        return self

    def names(self) -> list[str]:
        """Return the registered collection names in registration order."""
        return list(self._schemas)

    def items(self) -> cabc.ItemsView[str, Schema]:
        return self._schemas.items()

    def __contains__(self, name: object) -> bool:
        return name in self._schemas

    def __iter__(self) -> cabc.Iterator[str]:
        return iter(self._schemas)

    def __len__(self) -> int:
        return len(self._schemas)


def _walk_schema(collection: str, schema: Schema, path: str, stack: list[int]) -> None:
    """Depth-first walk that tracks the schemas on the current path."""
    if id(schema) in stack:
        raise SchemaCycleError(collection, path or "<root>")
    stack.append(id(schema))
    for name, field_type in schema.fields.items():
        field_path = f"{path}.{name}" if path else name
        _walk_field(collection, field_type, field_path, stack)
    stack.pop()


def _walk_field(
    collection: str, field_type: FieldType, path: str, stack: list[int]
) -> None:
    match field_type:
        case OptionalType(inner=inner):
            _walk_field(collection, inner, path, stack)
        case DefaultType(inner=inner, default=default):
            _walk_field(collection, inner, path, stack)
            errors = validator.check_value(inner, default, path)
            if errors:
                details = "; ".join(str(error) for error in errors)
                msg = f"Invalid default in collection '{collection}': {details}"
                raise SchemaDefinitionError(msg)
        case ArrayType(item=item):
            _walk_field(collection, item, f"{path}[]", stack)
        case ObjectType(schema=schema):
            _walk_schema(collection, schema, path, stack)
        case _:
            pass


def _freeze_tree(schema: Schema) -> None:
    if schema.frozen:
        return
    schema.freeze()
    for field_type in schema.fields.values():
        nested = field_type
        while isinstance(nested, (OptionalType, DefaultType, ArrayType)):
            nested = nested.item if isinstance(nested, ArrayType) else nested.inner
        if isinstance(nested, ObjectType):
            _freeze_tree(nested.schema)


__all__ = ["SchemaRegistry"]
