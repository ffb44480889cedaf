# Copyright Krafter SAS <developer@krafter.io>
# MIT License (see LICENSE file).

"""Pydantic models for extra junction columns."""

import inspect

from typing import Any, Callable, Literal, Mapping

from pydantic import BaseModel, ConfigDict


class LiteralColumn(BaseModel):
    """
    Static value stored on every junction row.

    Example:
        LiteralColumn(value="user-defined")
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    kind: Literal["literal"] = "literal"
    value: Any = None

    def resolve(self, record: Any) -> Any:
        return self.value


class ComputedColumn(BaseModel):
    """
    Value computed for each linked record.

    Example:
        ComputedColumn(compute=lambda group: group.category_id)
        ComputedColumn(compute=datetime.now, pass_record=False)
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    kind: Literal["computed"] = "computed"
    compute: Callable[..., Any]
    pass_record: bool = True

    def resolve(self, record: Any) -> Any:
        if self.pass_record:
            return self.compute(record)
        return self.compute()


ExtraColumn = LiteralColumn | ComputedColumn


def _accepts_record(func: Callable[..., Any]) -> bool:
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        # Builtins without signature metadata get the record
        return True

    for param in signature.parameters.values():
        if param.kind in (param.VAR_POSITIONAL, param.POSITIONAL_ONLY, param.POSITIONAL_OR_KEYWORD):
            return True

    return False


def coerce_extra_column(value: Any) -> ExtraColumn:
    """
    Convert a raw extra column value into a tagged column.

    Examples:
        >>> coerce_extra_column("user-defined")
        LiteralColumn(kind='literal', value='user-defined')
        >>> coerce_extra_column(lambda group: group.category_id).pass_record
        True
        >>> coerce_extra_column(lambda: 42).pass_record
        False
    """
    if isinstance(value, (LiteralColumn, ComputedColumn)):
        return value

    if callable(value) and not isinstance(value, type):
        return ComputedColumn(compute=value, pass_record=_accepts_record(value))

    return LiteralColumn(value=value)


def compose_extra_columns(
    columns: Mapping[str, ExtraColumn],
    record: Any,
) -> dict[str, Any]:
    """Resolve the extra columns for the junction row of ``record``."""
    return {name: column.resolve(record) for name, column in columns.items()}


__all__ = [
    "LiteralColumn",
    "ComputedColumn",
    "ExtraColumn",
    "coerce_extra_column",
    "compose_extra_columns",
]
