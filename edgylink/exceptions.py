# Copyright Krafter SAS <developer@krafter.io>
# MIT License (see LICENSE file).

"""Errors raised by the link many behavior."""


class LinkManyError(Exception):
    """Base error for link many behaviors."""

    pass


class LinkManyConfigurationError(LinkManyError, ValueError):
    """Invalid behavior configuration (missing relation, unknown attribute...)."""

    pass


__all__ = [
    "LinkManyError",
    "LinkManyConfigurationError",
]
