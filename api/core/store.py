"""
Generic collection store over Postgres tables.

Each feature package instantiates one `Collection` per table and talks to it
with equality filters (`{"column": value}`), the same small verb set for every
resource: find_many / find_one / find_longest / insert_one / upsert_one /
delete_one / delete_many.

Every call is a single SQL statement, so it is atomic on its own. Nothing here
spans more than one statement; composite operations (blog delete + wishlist
purge, wishlist lookup + insert) are not atomic.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Any, Iterable

from core import db

ID_COLUMN = "id"


class MalformedIdError(ValueError):
    pass


def parse_object_id(value: Any) -> str:
    """
    Return the canonical text form of a resource id, or raise MalformedIdError.

    Ids are validated before they reach the driver so a bad path segment is a
    client error and never a driver error.
    """
    raw = str(value if value is not None else "").strip()
    try:
        return str(uuid.UUID(raw))
    except ValueError as exc:
        raise MalformedIdError(f"Malformed id: {raw[:64]!r}") from exc


@dataclass(frozen=True)
class InsertResult:
    inserted_id: str

    def to_dict(self) -> dict[str, Any]:
        return {"acknowledged": True, "insertedId": self.inserted_id}


@dataclass(frozen=True)
class UpdateResult:
    matched_count: int
    modified_count: int
    upserted_id: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "acknowledged": True,
            "matchedCount": self.matched_count,
            "modifiedCount": self.modified_count,
            "upsertedId": self.upserted_id,
        }


@dataclass(frozen=True)
class DeleteResult:
    deleted_count: int
    acknowledged: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {"acknowledged": self.acknowledged, "deletedCount": self.deleted_count}


class Collection:
    """
    CRUD façade for one table.

    `columns` is the allowlist of column names that may appear in filters and
    documents; `id_columns` are the UUID columns whose filter values are
    validated with `parse_object_id`.
    """

    def __init__(
        self,
        table: str,
        columns: Iterable[str],
        *,
        id_columns: Iterable[str] = (ID_COLUMN,),
        order_by: str = "created_at ASC, id ASC",
    ) -> None:
        self.table = table
        self.columns = frozenset(columns) | {ID_COLUMN}
        self.id_columns = frozenset(id_columns) | {ID_COLUMN}
        self.order_by = order_by

    def _check_columns(self, names: Iterable[str]) -> None:
        unknown = sorted(set(names) - self.columns)
        if unknown:
            raise ValueError(f"Unknown column(s) for {self.table}: {', '.join(unknown)}")

    def _value(self, column: str, value: Any) -> Any:
        if column in self.id_columns and value is not None:
            return parse_object_id(value)
        return value

    def _where(self, filters: dict[str, Any] | None) -> tuple[str, list[Any]]:
        filters = filters or {}
        self._check_columns(filters)
        clauses: list[str] = []
        args: list[Any] = []
        for column, value in filters.items():
            if value is None:
                clauses.append(f"{column} IS NULL")
                continue
            args.append(self._value(column, value))
            clauses.append(f"{column} = ${len(args)}")
        return (" AND ".join(clauses) or "true"), args

    async def find_many(self, filters: dict[str, Any] | None = None) -> list[dict[str, Any]]:
        where, args = self._where(filters)
        return await db.fetch_all(
            f"SELECT * FROM {self.table} WHERE {where} ORDER BY {self.order_by}",
            *args,
        )

    async def find_one(self, filters: dict[str, Any]) -> dict[str, Any] | None:
        where, args = self._where(filters)
        return await db.fetch_one(
            f"SELECT * FROM {self.table} WHERE {where} ORDER BY {self.order_by} LIMIT 1",
            *args,
        )

    async def find_longest(
        self,
        column: str,
        *,
        limit: int,
        ties_desc: Iterable[str] = (),
    ) -> list[dict[str, Any]]:
        """
        Rows with a non-empty `column`, longest first (in characters), each
        carrying its `content_length`. Ties go to `ties_desc` columns,
        descending with NULLs last, then to the collection's natural order.
        """
        tie_columns = list(ties_desc)
        self._check_columns([column, *tie_columns])
        order = ", ".join(
            ["content_length DESC", *(f"{name} DESC NULLS LAST" for name in tie_columns), self.order_by]
        )
        return await db.fetch_all(
            f"""
            SELECT *, char_length({column}) AS content_length
            FROM {self.table}
            WHERE char_length({column}) > 0
            ORDER BY {order}
            LIMIT $1
            """,
            max(limit, 0),
        )

    async def insert_one(self, document: dict[str, Any]) -> InsertResult:
        if not document:
            raise ValueError(f"Refusing to insert an empty document into {self.table}.")
        self._check_columns(document)
        names = list(document)
        placeholders = ", ".join(f"${i}" for i in range(1, len(names) + 1))
        row = await db.fetch_one(
            f"INSERT INTO {self.table} ({', '.join(names)}) VALUES ({placeholders}) RETURNING id",
            *(self._value(name, document[name]) for name in names),
        )
        if row is None:
            raise RuntimeError(f"Failed to insert into {self.table}.")
        return InsertResult(inserted_id=str(row["id"]))

    async def upsert_one(
        self,
        filters: dict[str, Any],
        patch: dict[str, Any],
        *,
        on_insert: dict[str, Any] | None = None,
        guard: Iterable[str] = (),
    ) -> UpdateResult:
        """
        Update the row matching `filters` with `patch`, or insert
        filters + on_insert + patch when nothing matches.

        `filters` must name columns covered by a unique index (normally just
        `id`); they are the ON CONFLICT target, which keeps this one statement.

        `guard` names columns that must already equal the new document for the
        update branch to apply; when they differ nothing is written and the
        result has matched_count=0 and no upserted_id.
        """
        if not filters or not patch:
            raise ValueError("upsert_one needs both filters and a patch.")
        document = {**(on_insert or {}), **patch, **filters}
        self._check_columns(document)
        names = list(document)
        placeholders = ", ".join(f"${i}" for i in range(1, len(names) + 1))
        updates = ", ".join(f"{name} = EXCLUDED.{name}" for name in patch)
        guard_columns = list(guard)
        self._check_columns(guard_columns)
        condition = " AND ".join(f"{self.table}.{name} = EXCLUDED.{name}" for name in guard_columns)
        where = f"WHERE {condition}" if condition else ""
        row = await db.fetch_one(
            f"""
            INSERT INTO {self.table} ({', '.join(names)})
            VALUES ({placeholders})
            ON CONFLICT ({', '.join(filters)}) DO UPDATE
            SET {updates}
            {where}
            RETURNING id, (xmax = 0) AS inserted
            """,
            *(self._value(name, document[name]) for name in names),
        )
        if row is None:
            return UpdateResult(matched_count=0, modified_count=0)
        if row["inserted"]:
            return UpdateResult(matched_count=0, modified_count=0, upserted_id=str(row["id"]))
        return UpdateResult(matched_count=1, modified_count=1)

    async def delete_one(self, filters: dict[str, Any]) -> DeleteResult:
        where, args = self._where(filters)
        status = await db.execute(
            f"""
            DELETE FROM {self.table}
            WHERE id IN (
              SELECT id FROM {self.table} WHERE {where} ORDER BY {self.order_by} LIMIT 1
            )
            """,
            *args,
        )
        return DeleteResult(deleted_count=db.affected_rows(status))

    async def delete_many(self, filters: dict[str, Any]) -> DeleteResult:
        if not filters:
            raise ValueError(f"Refusing to delete every row of {self.table}.")
        where, args = self._where(filters)
        status = await db.execute(f"DELETE FROM {self.table} WHERE {where}", *args)
        return DeleteResult(deleted_count=db.affected_rows(status))
