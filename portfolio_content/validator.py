"""Validate and coerce raw documents against a collection schema.

The validator walks the schema in declaration order and never stops at the
first problem: every field error of a document is collected so the build log
can show them all at once. Values that already have the right Python type are
accepted unchanged; textual representations (ISO dates, ``"true"``, ``"42"``)
are coerced. Fields that the schema does not declare are ignored.

Examples
--------
>>> from portfolio_content.schema import Schema, date, optional, array_of, string
>>> from portfolio_content.validator import validate
>>> post = Schema(title=string(), date=date(), tags=optional(array_of(string())))
>>> entry = validate(post, {"title": "Hello", "date": "2024-01-05"})
>>> entry.data
{'title': 'Hello', 'date': datetime.date(2024, 1, 5), 'tags': None}
>>> [str(error) for error in validate(post, {"date": "2024-01-05"})]
['title: expected string, got missing']
"""

from __future__ import annotations

import collections.abc as cabc
import datetime as dt
import math
import typing as typ

from .errors import MISSING, ValidationError
from .models import ContentEntry, RawDocument
from .schema.fields import (
    ArrayType,
    DefaultType,
    EnumType,
    ObjectType,
    OptionalType,
    Primitive,
    PrimitiveType,
)

if typ.TYPE_CHECKING:
    from .schema.fields import FieldType, Schema

INLINE_DOCUMENT_ID = "<inline>"

_TRUE_WORDS = frozenset({"true", "yes", "on"})
_FALSE_WORDS = frozenset({"false", "no", "off"})


class _Invalid:
    """Marks a value that failed validation and produced errors."""


_INVALID = _Invalid()


def validate(
    schema: Schema, document: RawDocument | cabc.Mapping[str, typ.Any]
) -> ContentEntry | list[ValidationError]:
    """Validate one document against ``schema``.

    Parameters
    ----------
    schema : Schema
        The collection schema.
    document : RawDocument or Mapping
        The parsed document; a bare mapping is treated as an inline document
        without body or source.

    Returns
    -------
    ContentEntry or list[ValidationError]
        The typed entry when every field conforms, otherwise every error found,
        each tagged with the collection and document id.
    """
    inline = not isinstance(document, RawDocument)
    if inline:
        document = RawDocument(
            collection="", id=INLINE_DOCUMENT_ID, data=dict(document)
        )

    errors: list[ValidationError] = []
    data = _check_fields(schema, document.data, "", errors)
    if errors:
        return [
            ValidationError(
                error.path,
                expected=error.expected,
                actual=error.actual,
                collection=None if inline else document.collection,
                document_id=None if inline else document.id,
            )
            for error in errors
        ]
    return ContentEntry(
        collection=document.collection,
        id=document.id,
        data=data,
        body=document.body,
        source=document.source,
    )


def check_value(
    field_type: FieldType, value: typ.Any, path: str = ""
) -> list[ValidationError]:
    """Return the errors ``value`` would raise against ``field_type``."""
    errors: list[ValidationError] = []
    _check(field_type, value, path, errors)
    return errors


def coerce_value(field_type: FieldType, value: typ.Any) -> typ.Any:
    """Return ``value`` coerced to ``field_type``.

    Raises
    ------
    ValueError
        If the value does not conform; the message lists every field error.
    """
    errors: list[ValidationError] = []
    result = _check(field_type, value, "", errors)
    if errors:
        msg = "; ".join(str(error) for error in errors)
        raise ValueError(msg)
    return result


def _join(path: str, name: str) -> str:
    return f"{path}.{name}" if path else name


def _mismatch(field_type: FieldType, path: str, value: typ.Any) -> ValidationError:
    return ValidationError(path, expected=field_type.describe(), actual=value)


def _check_fields(
    schema: Schema,
    raw: cabc.Mapping[str, typ.Any],
    path: str,
    errors: list[ValidationError],
) -> dict[str, typ.Any]:
    result: dict[str, typ.Any] = {}
    for name, field_type in schema.fields.items():
        value = raw.get(name, MISSING)
        checked = _check(field_type, value, _join(path, name), errors)
        if checked is not _INVALID:
            result[name] = checked
    return result


def _check(
    field_type: FieldType, value: typ.Any, path: str, errors: list[ValidationError]
) -> typ.Any:
    if value is None:
        value = MISSING

    if value is MISSING:
        match field_type:
            case OptionalType():
                return None
            case DefaultType(inner=inner, default=default):
                # Re-validating rebuilds containers so entries never share defaults.
                return _check(inner, default, path, errors)
            case _:
                errors.append(_mismatch(field_type, path, MISSING))
                return _INVALID

    match field_type:
        case OptionalType(inner=inner) | DefaultType(inner=inner):
            return _check(inner, value, path, errors)
        case PrimitiveType(kind=kind):
            coerced = _coerce_primitive(kind, value)
        case EnumType(values=values):
            coerced = value if isinstance(value, str) and value in values else _INVALID
        case ArrayType(item=item):
            return _check_array(field_type, item, value, path, errors)
        case ObjectType(schema=schema):
            if not isinstance(value, cabc.Mapping):
                coerced = _INVALID
            else:
                before = len(errors)
                fields = _check_fields(schema, value, path, errors)
                return fields if len(errors) == before else _INVALID
        case _:  # pragma: no cover - closed set of field types
            msg = f"Unsupported field type {field_type!r}"
            raise TypeError(msg)

    if coerced is _INVALID:
        errors.append(_mismatch(field_type, path, value))
    return coerced


def _check_array(
    field_type: ArrayType,
    item: FieldType,
    value: typ.Any,
    path: str,
    errors: list[ValidationError],
) -> typ.Any:
    if isinstance(value, (str, bytes)) or not isinstance(value, cabc.Sequence):
        errors.append(_mismatch(field_type, path, value))
        return _INVALID
    before = len(errors)
    items = [
        _check(item, element, f"{path}[{index}]", errors)
        for index, element in enumerate(value)
    ]
    return items if len(errors) == before else _INVALID


def _coerce_primitive(kind: Primitive, value: typ.Any) -> typ.Any:
    match kind:
        case Primitive.STRING:
            return value if isinstance(value, str) else _INVALID
        case Primitive.DATE:
            return _coerce_date(value)
        case Primitive.BOOLEAN:
            return _coerce_boolean(value)
        case Primitive.NUMBER:
            return _coerce_number(value)
    return _INVALID  # pragma: no cover - closed enum


def _coerce_date(value: typ.Any) -> dt.date | _Invalid:
    """Return a calendar date; datetimes keep the date they were written with."""
    match value:
        case dt.datetime():
            return value.date()
        case dt.date():
            return value
        case str() as text:
            sanitized = text.strip()
            try:
                return dt.date.fromisoformat(sanitized)
            except ValueError:
                pass
            if sanitized.endswith(("Z", "z")):
                sanitized = sanitized[:-1] + "+00:00"
            try:
                return dt.datetime.fromisoformat(sanitized).date()
            except ValueError:
                return _INVALID
        case _:
            return _INVALID


def _coerce_boolean(value: typ.Any) -> bool | _Invalid:
    match value:
        case bool():
            return value
        case str() as text:
            word = text.strip().lower()
            if word in _TRUE_WORDS:
                return True
            if word in _FALSE_WORDS:
                return False
            return _INVALID
        case _:
            return _INVALID


def _coerce_number(value: typ.Any) -> int | float | _Invalid:
    match value:
        case bool():
            return _INVALID
        case float() if not math.isfinite(value):
            return _INVALID
        case int() | float():
            return value
        case str() as text:
            sanitized = text.strip()
            try:
                return int(sanitized)
            except ValueError:
                pass
            try:
                parsed = float(sanitized)
            except ValueError:
                return _INVALID
            return parsed if math.isfinite(parsed) else _INVALID
        case _:
            return _INVALID


__all__ = ["INLINE_DOCUMENT_ID", "check_value", "coerce_value", "validate"]
