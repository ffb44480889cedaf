# Copyright Krafter SAS <developer@krafter.io>
# MIT License (see LICENSE file).

"""Canonical identifiers for related records."""

from collections.abc import Iterable
from typing import Any


Identifier = int | str | float

SCALAR_TYPES = (int, str, float)


def normalize_primary_key(raw: Any) -> Identifier:
    """
    Convert a raw primary key into its canonical comparison form.

    Scalars are kept as-is, any other object (UUID, ObjectId...) is
    converted to its string form.

    Examples:
        >>> normalize_primary_key(42)
        42
        >>> normalize_primary_key(UUID("12345678-1234-5678-1234-567812345678"))
        '12345678-1234-5678-1234-567812345678'
    """
    if isinstance(raw, SCALAR_TYPES):
        return raw

    return str(raw)


def identifier_key(value: Identifier) -> tuple[type, Identifier]:
    """Hashable key comparing identifiers by type and value."""
    return type(value), value


def same_identifier(a: Identifier, b: Identifier) -> bool:
    """Type-strict equality: ``"5"`` and ``5`` are different identifiers."""
    return identifier_key(a) == identifier_key(b)


def normalize_references(raw: Any) -> list[Identifier]:
    """
    Normalize a desired reference value into a list of unique identifiers.

    Duplicates are collapsed on their string form, first occurrence wins,
    so ``1`` and ``"1"`` count as one reference.

    Examples:
        >>> normalize_references([1, 1, "2"])
        [1, '2']
        >>> normalize_references(["1", 1])
        ['1']
        >>> normalize_references(None)
        []
        >>> normalize_references(7)
        [7]
    """
    if isinstance(raw, Iterable) and not isinstance(raw, (str, bytes)):
        result: list[Identifier] = []
        seen: set[str] = set()

        for value in raw:
            identifier = normalize_primary_key(value)
            key = str(identifier)

            if key not in seen:
                seen.add(key)
                result.append(identifier)

        return result

    if not raw:
        return []

    return [normalize_primary_key(raw)]


__all__ = [
    "Identifier",
    "normalize_primary_key",
    "identifier_key",
    "same_identifier",
    "normalize_references",
]
