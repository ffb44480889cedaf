# Copyright Krafter SAS <developer@krafter.io>
# MIT License (see LICENSE file).

"""Diff between the linked records and the desired references."""

from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Iterable

from edgylink.identifiers import (
    Identifier,
    identifier_key,
    normalize_primary_key,
    normalize_references,
)


FetchRecords = Callable[[list[Identifier]], Awaitable[list[Any]]]


@dataclass
class ReconcilePlan:
    to_link: list[Any] = field(default_factory=list)
    to_unlink: list[Any] = field(default_factory=list)
    missing: list[Identifier] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.to_link and not self.to_unlink


async def reconcile(
    current_related: Iterable[Any],
    desired_raw: Any,
    fetch: FetchRecords,
) -> ReconcilePlan:
    """
    Compute the records to unlink and to link so that the relation matches
    the desired references.

    Args:
        current_related: Records currently linked to the owner
        desired_raw: Desired references (list, single identifier or empty)
        fetch: Bulk loader of related records by primary key, only awaited
            when there is something new to link

    Returns:
        The reconcile plan. Identifiers without a matching record are
        reported in ``missing`` and otherwise ignored.

    Examples:
        >>> plan = await reconcile([tag1, tag2, tag3], [2, 3, 4], fetch)
        >>> plan.to_unlink
        [tag1]
        >>> plan.to_link
        [tag4]
    """
    plan = ReconcilePlan()
    remaining = normalize_references(desired_raw)

    for record in current_related:
        key = identifier_key(normalize_primary_key(record.pk))
        position = next(
            (i for i, value in enumerate(remaining) if identifier_key(value) == key),
            None,
        )

        if position is None:
            plan.to_unlink.append(record)
        else:
            del remaining[position]

    if remaining:
        plan.to_link = list(await fetch(remaining))

        found = {identifier_key(normalize_primary_key(record.pk)) for record in plan.to_link}
        plan.missing = [value for value in remaining if identifier_key(value) not in found]

    return plan


__all__ = [
    "ReconcilePlan",
    "FetchRecords",
    "reconcile",
]
