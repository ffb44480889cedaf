# Copyright Krafter SAS <developer@krafter.io>
# MIT License (see LICENSE file).

from typing import Any, ClassVar

from edgylink.behavior import LinkManyBehavior
from edgylink.config import LinkManyConfig
from edgylink.exceptions import LinkManyConfigurationError


_configs_cache: dict[type, list[LinkManyConfig]] = {}


class LinkManyMixin:
    """
    Model mixin exposing many-to-many references as explicit accessors.

    Example:
        class Item(LinkManyMixin, Model):
            link_many: ClassVar[list] = [
                {"relation": "groups", "reference_attribute": "group_ids"},
            ]

            groups: list[Group] = fields.ManyToMany(Group, through_tablename="item_group")

        register_link_many(Item)

        item = await Item.query.get(id=1)
        await item.get_references("group_ids")
        item.set_references("group_ids", [2, 3])
        await item.save()
    """

    link_many: ClassVar[list[LinkManyConfig | dict[str, Any]]] = []

    @classmethod
    def get_link_many_configs(cls) -> list[LinkManyConfig]:
        configs = _configs_cache.get(cls)

        if configs is None:
            configs = [LinkManyConfig.build(config) for config in cls.link_many]
            names = [c.reference_attribute for c in configs]

            if len(set(names)) != len(names):
                raise LinkManyConfigurationError(
                    f"Duplicate reference attribute in {cls.__name__}.link_many: {names}"
                )

            _configs_cache[cls] = configs

        return configs

    def get_link_behaviors(self) -> list[LinkManyBehavior]:
        behaviors = getattr(self, "_link_many_behaviors", None)

        if behaviors is None:
            behaviors = [
                LinkManyBehavior(self, config)
                for config in type(self).get_link_many_configs()
            ]
            self._link_many_behaviors = behaviors  # type: ignore[attr-defined]

        return behaviors

    def get_link_behavior(self, name: str) -> LinkManyBehavior:
        """Behavior by reference attribute or relation name."""
        for behavior in self.get_link_behaviors():
            if name in (behavior.config.reference_attribute, behavior.relation):
                return behavior

        raise LinkManyConfigurationError(
            f"No link many behavior named {name!r} on {type(self).__name__}"
        )

    async def get_references(self, attribute: str) -> Any:
        return await self.get_link_behavior(attribute).get_references()

    def set_references(self, attribute: str, value: Any) -> None:
        self.get_link_behavior(attribute).set_references(value)

    async def after_link_save(self) -> None:
        for behavior in self.get_link_behaviors():
            await behavior.after_save()

    async def after_link_delete(self) -> None:
        for behavior in self.get_link_behaviors():
            await behavior.after_delete()


__all__ = [
    "LinkManyMixin",
]
