"""Partial-update query builder.

Renders a parameterized ``UPDATE`` statement that only touches the columns
a caller actually supplied. Values never enter the SQL text; they are bound
positionally (``$1``, ``$2``, ...) with position 1 reserved for the row id.

Pure string assembly with no Flask or database dependency.
"""

from dataclasses import dataclass
from typing import Any, Iterable


class _Unset:
    """Marker for "leave this column unchanged"."""

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET = _Unset()


@dataclass(frozen=True)
class UpdateStatement:
    """A rendered update: SQL text plus positional parameters.

    ``columns[i]`` is the column bound to ``params[i]`` (placeholder
    ``$<i + 1>``), so the executor can apply per-column types.
    """

    sql: str
    params: tuple
    columns: tuple


class UpdateQueryBuilder:
    """Builds ``UPDATE <table> SET ... WHERE <where_field> = $1`` statements."""

    def __init__(
        self,
        table: str,
        where_field: str = "id",
        timestamp_field: str = "updated_at",
    ):
        self._table = table
        self._where_field = where_field
        self._timestamp_field = timestamp_field

    def build(
        self,
        where_value: Any,
        fields: Iterable[tuple[str, Any]],
    ) -> UpdateStatement | None:
        """Render the statement for the given ``(column, value)`` pairs.

        Pairs whose value is ``UNSET`` are skipped entirely. Returns ``None``
        when nothing is left to set; that is an empty update, not an error
        and not a missing row.
        """
        set_parts: list[str] = []
        columns: list[str] = [self._where_field]
        params: list[Any] = [where_value]
        position = 1

        for column, value in fields:
            if value is UNSET:
                continue
            position += 1
            set_parts.append(f"{column} = ${position}")
            columns.append(column)
            params.append(value)

        if not set_parts:
            return None

        set_parts.append(f"{self._timestamp_field} = CURRENT_TIMESTAMP")
        sql = (
            f"UPDATE {self._table} SET {', '.join(set_parts)} "
            f"WHERE {self._where_field} = $1"
        )
        return UpdateStatement(sql=sql, params=tuple(params), columns=tuple(columns))
