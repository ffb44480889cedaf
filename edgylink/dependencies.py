# Copyright Krafter SAS <developer@krafter.io>
# MIT License (see LICENSE file).

from typing import Any, Dict, Type, TypeVar, Union, cast


T = TypeVar("T")


_services_registry: Dict[Type[Any], Union[Any, Type[Any]]] = {}


def register_service(
    instance: Union[T, Type[T]],
    key: Union[Type[T], None] = None,
    force: bool = False,
) -> None:
    """
    Register a service (class or instance) in the registry.
    - If instance is a class: will be instantiated on first request
    - If instance is an object: will be returned as-is (singleton)
    """
    if key is None:
        key = instance if isinstance(instance, type) else type(instance)

    if force or key not in _services_registry:
        _services_registry[key] = instance


def unregister_service(key: Type[T]) -> None:
    """Unregister a service from the registry."""
    _services_registry.pop(key, None)


def has_service(key: Type[T]) -> bool:
    """Check if a service is registered."""
    return key in _services_registry


def get_service(key: Type[T]) -> T:
    """
    Get a service instance from the registry.
    Auto-registers concrete classes if not already registered.
    """
    if key not in _services_registry:
        register_service(key)

    value = _services_registry[key]

    if isinstance(value, type):
        value = value()
        _services_registry[key] = value

    return cast(T, value)


__all__ = [
    "register_service",
    "unregister_service",
    "has_service",
    "get_service",
]
