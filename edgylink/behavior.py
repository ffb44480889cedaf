# Copyright Krafter SAS <developer@krafter.io>
# MIT License (see LICENSE file).

import logging

from contextlib import AsyncExitStack
from typing import Any

from edgylink.columns import compose_extra_columns
from edgylink.config import LinkManyConfig
from edgylink.gateway import RelationGateway, get_gateway
from edgylink.holder import ReferenceHolder
from edgylink.identifiers import Identifier
from edgylink.reconciler import ReconcilePlan, reconcile


logger = logging.getLogger("edgylink.behavior")


class LinkManyBehavior:
    """
    Keeps the many-to-many links of one owner in sync with its references.

    The owner holds one behavior per configured relation. References set
    with ``set_references()`` are applied by ``after_save()`` once the owner
    row is stored; untouched references leave the relation as it is.

    Example:
        behavior = LinkManyBehavior(item, LinkManyConfig(relation="groups", reference_attribute="group_ids"))
        behavior.set_references([1, 2])
        await item.save()
        await behavior.after_save()
    """

    def __init__(
        self,
        owner: Any,
        config: LinkManyConfig,
        gateway: RelationGateway | None = None,
    ):
        self.owner = owner
        self.config = config
        self.gateway = gateway if gateway is not None else get_gateway()
        self.holder = ReferenceHolder(owner, config.relation, self.gateway)

    @property
    def relation(self) -> str:
        return self.config.relation

    @property
    def is_references_initialized(self) -> bool:
        return self.holder.is_initialized

    async def get_references(self) -> Any:
        return await self.holder.get()

    def set_references(self, value: Any) -> None:
        self.holder.set(value)

    async def plan(self) -> ReconcilePlan:
        """Compute the pending link and unlink operations without applying them."""
        desired = await self.holder.get()
        current = await self.gateway.load_related(self.owner, self.relation)

        plan = await reconcile(current, desired, self._fetch)

        logger.debug(
            f"Planned {self._label()}: {len(plan.to_unlink)} to unlink, {len(plan.to_link)} to link"
        )

        if plan.missing:
            logger.debug(f"Ignored unknown references for {self._label()}: {plan.missing}")

        return plan

    async def after_insert(self) -> ReconcilePlan | None:
        return await self.after_save()

    async def after_update(self) -> ReconcilePlan | None:
        return await self.after_save()

    async def after_save(self) -> ReconcilePlan | None:
        """
        Apply the references to the stored relation.

        Unlinks are applied before links. Errors raised by the gateway are not
        caught: operations applied before the failure stay applied unless the
        behavior is configured as atomic.

        Returns:
            The applied plan, or None when the references were never touched
        """
        if not self.holder.is_initialized:
            return None

        async with AsyncExitStack() as stack:
            if self.config.atomic:
                await stack.enter_async_context(self.gateway.transaction(self.owner))

            plan = await self.plan()

            for record in plan.to_unlink:
                await self.gateway.unlink(
                    self.owner, self.relation, record, self.config.delete_on_unlink
                )

            for record in plan.to_link:
                await self.gateway.link(
                    self.owner,
                    self.relation,
                    record,
                    compose_extra_columns(self.config.extra_columns, record),
                )

        if not plan.is_empty:
            logger.debug(
                f"Applied {self._label()}: {len(plan.to_unlink)} unlinked, {len(plan.to_link)} linked"
            )

        return plan

    async def after_delete(self) -> None:
        await self.gateway.unlink_all(
            self.owner, self.relation, self.config.delete_on_unlink
        )

    async def _fetch(self, identifiers: list[Identifier]) -> list[Any]:
        return await self.gateway.find_many_by_pk(self.owner, self.relation, identifiers)

    def _label(self) -> str:
        return f"{type(self.owner).__name__}.{self.relation}"


__all__ = [
    "LinkManyBehavior",
]
