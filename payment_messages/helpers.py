"""
Helpers shared by the request and response models.

``structure_get`` reads values out of decoded gateway responses, which
mix dicts, lists and (occasionally) objects at any depth.
``prefixed_field_name`` derives the wire name of a field that is sent
under a prefix, e.g. ``address1`` -> ``shippingAddress1``.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import datetime, timezone

from .exceptions import ValidationError


_MISSING = object()


def structure_get(data, path: str, default=None):
    """Return the value at a dotted ``path`` inside ``data``, or ``default``.

    Each segment is looked up as a mapping key, a list index (numeric
    segments only) or an attribute, whichever fits the current node.
    A missing segment is not an error.

    Examples:
        structure_get({'3DSecure': {'status': 'Force'}}, '3DSecure.status') -> 'Force'
        structure_get({'items': [{'id': 7}]}, 'items.0.id') -> 7
        structure_get({}, 'a.b', 'x') -> 'x'
    """
    if data is None or path is None or path == '':
        return default

    node = data
    for segment in str(path).split('.'):
        node = _get_segment(node, segment)
        if node is _MISSING:
            return default

    return node


def _get_segment(node, segment: str):
    if isinstance(node, Mapping):
        return node.get(segment, _MISSING)

    if isinstance(node, Sequence) and not isinstance(node, (str, bytes)):
        if not segment.isdecimal():
            return _MISSING
        try:
            return node[int(segment)]
        except IndexError:
            return _MISSING

    if isinstance(node, (str, bytes, int, float, bool)):
        return _MISSING

    return getattr(node, segment, _MISSING)


def prefixed_field_name(prefix: str | None, field_name: str) -> str:
    """Return the wire name of ``field_name`` sent under ``prefix``.

    With no prefix the name is unchanged, otherwise the first letter of the
    field is upper-cased and appended: ('customer', 'firstName') -> 'customerFirstName'.
    """
    if not prefix:
        return field_name

    return prefix + field_name[:1].upper() + field_name[1:]


def parse_datetime(value, field: str = 'datetime') -> datetime | None:
    """Parse a gateway timestamp into an aware datetime.

    Accepts ISO 8601 strings (with or without offset), unix timestamps and
    datetime instances. Naive values are taken to be UTC. Empty values give None.
    """
    if value is None or value == '':
        return None

    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            parsed = datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            raise ValidationError(field, value, f'Timestamp {field} "{value}" is out of range.') from None
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith('Z'):
            text = text[:-1] + '+00:00'
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            raise ValidationError(field, value, f'Cannot parse {field} "{value}" as a date/time.') from None
    else:
        raise ValidationError(field, value, f'Cannot parse {field} "{value}" as a date/time.')

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)

    return parsed
