# Copyright Krafter SAS <developer@krafter.io>
# MIT License (see LICENSE file).

from typing import Any, TYPE_CHECKING

from edgylink.identifiers import normalize_primary_key

if TYPE_CHECKING:
    from edgylink.gateway import RelationGateway


_UNSET: Any = object()


class ReferenceHolder:
    """
    Desired reference value of one owner relation.

    The value is read from storage on the first ``get()`` only, so an owner
    whose references were never touched keeps its links unchanged on save.
    """

    def __init__(self, owner: Any, relation: str, gateway: "RelationGateway"):
        self.owner = owner
        self.relation = relation
        self.gateway = gateway
        self._value: Any = _UNSET

    @property
    def is_initialized(self) -> bool:
        return self._value is not _UNSET

    async def get(self) -> Any:
        if self._value is _UNSET:
            related = await self.gateway.load_related(self.owner, self.relation)
            self._value = [normalize_primary_key(record.pk) for record in related]

        return self._value

    def set(self, value: Any) -> None:
        self._value = value


__all__ = [
    "ReferenceHolder",
]
