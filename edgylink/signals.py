# Copyright Krafter SAS <developer@krafter.io>
# MIT License (see LICENSE file).

import logging

from typing import Any

from edgy.core.signals import post_delete, post_save, post_update

from edgylink.exceptions import LinkManyConfigurationError
from edgylink.models import LinkManyMixin


logger = logging.getLogger("edgylink.signals")


_registered_models: set[type] = set()


def _get_owner(instance: Any, model_instance: Any) -> LinkManyMixin | None:
    # Model level updates send the queryset as instance
    for candidate in (model_instance, instance):
        if isinstance(candidate, LinkManyMixin):
            return candidate

    return None


async def on_post_save(
    sender: Any, instance: Any, model_instance: Any = None, **kwargs: Any
) -> None:
    owner = _get_owner(instance, model_instance)

    if owner is not None:
        await owner.after_link_save()


async def on_post_update(
    sender: Any, instance: Any, model_instance: Any = None, **kwargs: Any
) -> None:
    owner = _get_owner(instance, model_instance)

    if owner is not None:
        await owner.after_link_save()


async def on_post_delete(
    sender: Any, instance: Any, model_instance: Any = None, **kwargs: Any
) -> None:
    owner = _get_owner(instance, model_instance)

    if owner is not None:
        await owner.after_link_delete()


def register_link_many(model_class: type) -> type:
    """
    Connect the link many lifecycle of a model to the edgy signals.

    ``save()`` sends ``post_save`` and ``update()`` sends ``post_update``,
    both reconcile the relations. Can be used as a class decorator.
    Registering a model twice is a no-op.
    """
    if not issubclass(model_class, LinkManyMixin):
        raise LinkManyConfigurationError(
            f"{model_class.__name__} must inherit from LinkManyMixin"
        )

    if model_class in _registered_models:
        return model_class

    model_class.get_link_many_configs()

    post_save.connect(on_post_save, sender=model_class, weak=False)
    post_update.connect(on_post_update, sender=model_class, weak=False)
    post_delete.connect(on_post_delete, sender=model_class, weak=False)
    _registered_models.add(model_class)

    logger.debug(f"Registered link many signals for {model_class.__name__}")

    return model_class


def unregister_link_many(model_class: type) -> None:
    if model_class not in _registered_models:
        return

    post_save.disconnect(on_post_save, sender=model_class)
    post_update.disconnect(on_post_update, sender=model_class)
    post_delete.disconnect(on_post_delete, sender=model_class)
    _registered_models.discard(model_class)


__all__ = [
    "post_save",
    "post_update",
    "post_delete",
    "on_post_save",
    "on_post_update",
    "on_post_delete",
    "register_link_many",
    "unregister_link_many",
]
