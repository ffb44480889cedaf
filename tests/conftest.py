"""
Shared pytest fixtures for all tests.

Provides an in-memory relation gateway recording every call, and service
registry isolation.
"""

from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any, ClassVar

import pytest

from edgylink import dependencies
from edgylink.gateway import RelationGateway
from edgylink.models import LinkManyMixin


# =============================================================================
# FAKE RECORDS
# =============================================================================

@dataclass(eq=False)
class FakeRecord:
    """Related record with a primary key and an arbitrary attribute."""

    pk: Any
    owner_hint: Any = None

    def __repr__(self):
        return f"FakeRecord({self.pk!r})"


class FakeOwner(LinkManyMixin):
    """Owner model with two configured relations."""

    link_many: ClassVar[list] = [
        {"relation": "groups", "reference_attribute": "group_ids"},
        {
            "relation": "tags",
            "reference_attribute": "tag_ids",
            "extra_columns": {"created_by": lambda record: record.owner_hint},
            "delete_on_unlink": False,
        },
    ]

    def __init__(self, pk: int = 1):
        self.pk = pk


# =============================================================================
# RECORDING GATEWAY
# =============================================================================

class RecordingGateway:
    """
    In-memory relation gateway.

    ``linked`` holds the currently linked records per relation, ``store``
    the records which can be found by primary key per relation.
    """

    def __init__(self):
        self.linked: dict[str, list[FakeRecord]] = {}
        self.store: dict[str, dict[Any, FakeRecord]] = {}
        self.calls: list[tuple] = []
        self.fail_on: tuple[str, Any] | None = None

    def add_records(self, relation: str, *records: FakeRecord, linked: bool = False):
        self.store.setdefault(relation, {}).update({r.pk: r for r in records})
        if linked:
            self.linked.setdefault(relation, []).extend(records)

    def calls_named(self, name: str) -> list[tuple]:
        return [call for call in self.calls if call[0] == name]

    @property
    def write_calls(self) -> list[tuple]:
        return [
            call for call in self.calls if call[0] in ("link", "unlink", "unlink_all")
        ]

    def _maybe_fail(self, name: str, record: Any = None):
        if self.fail_on is not None and self.fail_on == (name, getattr(record, "pk", None)):
            raise RuntimeError(f"{name} failed")

    async def load_related(self, owner, relation):
        self.calls.append(("load_related", relation))
        return list(self.linked.get(relation, []))

    async def find_many_by_pk(self, owner, relation, identifiers):
        self.calls.append(("find_many_by_pk", relation, list(identifiers)))
        store = self.store.get(relation, {})
        # Keyed by (type, value) so that "1" never finds 1
        by_key = {(type(pk), pk): record for pk, record in store.items()}
        return [by_key[(type(i), i)] for i in identifiers if (type(i), i) in by_key]

    async def link(self, owner, relation, record, extra_columns):
        self._maybe_fail("link", record)
        self.calls.append(("link", relation, record.pk, extra_columns))
        self.linked.setdefault(relation, []).append(record)

    async def unlink(self, owner, relation, record, delete):
        self._maybe_fail("unlink", record)
        self.calls.append(("unlink", relation, record.pk, delete))
        self.linked[relation].remove(record)

    async def unlink_all(self, owner, relation, delete):
        self.calls.append(("unlink_all", relation, delete))
        self.linked[relation] = []

    @asynccontextmanager
    async def transaction(self, owner):
        self.calls.append(("begin",))
        snapshot = {relation: list(records) for relation, records in self.linked.items()}
        try:
            yield self
        except BaseException:
            self.linked = snapshot
            self.calls.append(("rollback",))
            raise
        self.calls.append(("commit",))


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture(autouse=True)
def isolated_services(monkeypatch):
    """Empty service registry for each test."""
    monkeypatch.setattr(dependencies, "_services_registry", {})
    yield


@pytest.fixture
def gateway() -> RecordingGateway:
    """Recording gateway registered as the default relation gateway."""
    gateway = RecordingGateway()
    dependencies.register_service(gateway, RelationGateway)
    return gateway


@pytest.fixture
def owner(gateway) -> FakeOwner:
    return FakeOwner()
