# Copyright Krafter SAS <developer@krafter.io>
# MIT License (see LICENSE file).

"""Persistence operations used by the link many behavior."""

import logging

from contextlib import AbstractAsyncContextManager
from typing import Any, Protocol, Sequence, TYPE_CHECKING

from edgylink.dependencies import get_service, has_service, register_service
from edgylink.exceptions import LinkManyConfigurationError

if TYPE_CHECKING:
    from edgy import Model
    from edgylink.identifiers import Identifier


logger = logging.getLogger("edgylink.gateway")


class RelationGateway(Protocol):
    """Relational operations on a many-to-many relation of an owner record."""

    async def load_related(self, owner: Any, relation: str) -> list[Any]:
        """Records currently linked to the owner."""
        ...

    async def find_many_by_pk(
        self, owner: Any, relation: str, identifiers: Sequence["Identifier"]
    ) -> list[Any]:
        """Related records by primary key, unknown keys are dropped."""
        ...

    async def link(
        self, owner: Any, relation: str, record: Any, extra_columns: dict[str, Any]
    ) -> None: ...

    async def unlink(
        self, owner: Any, relation: str, record: Any, delete: bool
    ) -> None: ...

    async def unlink_all(self, owner: Any, relation: str, delete: bool) -> None: ...

    def transaction(self, owner: Any) -> AbstractAsyncContextManager[Any]: ...


class EdgyRelationGateway:
    """Relation gateway backed by edgy many-to-many fields."""

    def get_field(self, owner: "Model", relation: str) -> Any:
        field = owner.meta.fields.get(relation)

        if field is None or getattr(field, "through", None) is None:
            raise LinkManyConfigurationError(
                f"{type(owner).__name__}.{relation} is not a many-to-many field"
            )

        return field

    async def load_related(self, owner: "Model", relation: str) -> list[Any]:
        self.get_field(owner, relation)

        return list(await getattr(owner, relation).all())

    async def find_many_by_pk(
        self, owner: "Model", relation: str, identifiers: Sequence["Identifier"]
    ) -> list[Any]:
        target = self.get_field(owner, relation).target
        pkname = target.pknames[0]

        return list(
            await target.query.filter(**{f"{pkname}__in": list(identifiers)}).all()
        )

    async def link(
        self,
        owner: "Model",
        relation: str,
        record: Any,
        extra_columns: dict[str, Any],
    ) -> None:
        field = self.get_field(owner, relation)

        if not extra_columns:
            await getattr(owner, relation).add(record)
            return

        await field.through.query.create(
            **{
                field.from_foreign_key: owner,
                field.to_foreign_key: record,
                **extra_columns,
            }
        )

    async def unlink(
        self, owner: "Model", relation: str, record: Any, delete: bool
    ) -> None:
        field = self.get_field(owner, relation)
        rows = field.through.query.filter(
            **{field.from_foreign_key: owner, field.to_foreign_key: record}
        )

        if delete:
            await rows.delete()
        else:
            await rows.update(**{field.from_foreign_key: None})

    async def unlink_all(self, owner: "Model", relation: str, delete: bool) -> None:
        field = self.get_field(owner, relation)
        rows = field.through.query.filter(**{field.from_foreign_key: owner})

        if delete:
            await rows.delete()
        else:
            await rows.update(**{field.from_foreign_key: None})

        logger.debug(
            f"Unlinked all {relation} of {type(owner).__name__}({owner.pk}) (delete={delete})"
        )

    def transaction(self, owner: "Model") -> AbstractAsyncContextManager[Any]:
        return owner.database.transaction()


def get_gateway() -> RelationGateway:
    """Registered relation gateway, edgy backed unless another one is registered."""
    if not has_service(RelationGateway):
        register_service(EdgyRelationGateway(), RelationGateway)

    return get_service(RelationGateway)


__all__ = [
    "RelationGateway",
    "EdgyRelationGateway",
    "get_gateway",
]
