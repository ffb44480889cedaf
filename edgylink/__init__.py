# Copyright Krafter SAS <developer@krafter.io>
# MIT License (see LICENSE file).

"""
Many-to-many reference syncing for edgy models.

An owner model declares which relation is driven by which reference
attribute; after the owner is saved, the relation is reconciled so that the
linked records match the references:
- records no longer referenced are unlinked
- newly referenced records are linked, with optional extra junction columns
- already linked records are left untouched
"""

from edgylink.behavior import LinkManyBehavior
from edgylink.columns import (
    LiteralColumn,
    ComputedColumn,
    ExtraColumn,
    coerce_extra_column,
    compose_extra_columns,
)
from edgylink.config import (
    LinkManyConfig,
    LinkManySettings,
    init_settings,
    get_settings,
)
from edgylink.exceptions import (
    LinkManyError,
    LinkManyConfigurationError,
)
from edgylink.gateway import (
    RelationGateway,
    EdgyRelationGateway,
    get_gateway,
)
from edgylink.holder import ReferenceHolder
from edgylink.identifiers import (
    Identifier,
    identifier_key,
    normalize_primary_key,
    normalize_references,
    same_identifier,
)
from edgylink.logger import LogLevel, LogFormat, setup_logging
from edgylink.models import LinkManyMixin
from edgylink.reconciler import ReconcilePlan, reconcile
from edgylink.signals import register_link_many, unregister_link_many

__all__ = [
    # Behavior
    "LinkManyBehavior",
    "LinkManyMixin",
    "ReferenceHolder",
    "ReconcilePlan",
    "reconcile",
    "register_link_many",
    "unregister_link_many",
    # Columns
    "LiteralColumn",
    "ComputedColumn",
    "ExtraColumn",
    "coerce_extra_column",
    "compose_extra_columns",
    # Config
    "LinkManyConfig",
    "LinkManySettings",
    "init_settings",
    "get_settings",
    "LogLevel",
    "LogFormat",
    "setup_logging",
    # Errors
    "LinkManyError",
    "LinkManyConfigurationError",
    # Gateway
    "RelationGateway",
    "EdgyRelationGateway",
    "get_gateway",
    # Identifiers
    "Identifier",
    "identifier_key",
    "normalize_primary_key",
    "normalize_references",
    "same_identifier",
]
