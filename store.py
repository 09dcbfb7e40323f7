import asyncio
import logging
import sqlite3
import uuid
from typing import Any, Awaitable, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from database import get_db_connection, initialize_database
from errors import CatalogError

logger = logging.getLogger(__name__)

_SORT_DIRECTIONS = {
    "ascending": "ASC", "asc": "ASC", "1": "ASC",
    "descending": "DESC", "desc": "DESC", "-1": "DESC",
}


async def gather(*aws: Awaitable[Any]) -> List[Any]:
    """Run independent lookups concurrently.

    Raises the first error any of them raises, otherwise returns every result
    in argument order.
    """
    return list(await asyncio.gather(*aws))


class DocumentStore:
    """Async access to the catalog collections kept in SQLite.

    Records are model instances (Author, Book, BookInstance). Each model
    declares its `collection`, its stored `fields` and the `references` that
    can be populated. Every operation opens its own connection inside a worker
    thread, so several reads can be awaited at the same time.
    """

    def __init__(self, db_file: str) -> None:
        self.db_file = db_file
        initialize_database(db_file)

    # ------------------------- Reads ------------------------- #
    async def find_by_id(self, model, doc_id: str, populate: Sequence[str] = ()):
        return await self._run(self._find_by_id, model, doc_id, tuple(populate))

    async def find(self, model, filter: Optional[Mapping[str, Any]] = None,
                   projection: Optional[Sequence[str]] = None,
                   sort: Optional[Sequence[Tuple[str, Any]]] = None,
                   populate: Sequence[str] = ()) -> list:
        return await self._run(self._find, model, dict(filter or {}), projection, sort, tuple(populate))

    async def count(self, model, filter: Optional[Mapping[str, Any]] = None) -> int:
        return await self._run(self._count, model, dict(filter or {}))

    # ------------------------- Writes ------------------------- #
    async def create(self, record):
        return await self._run(self._create, record)

    async def update_by_id(self, doc_id: str, record):
        """Replace every stored field of the record with the given id. Returns None if absent."""
        return await self._run(self._update_by_id, doc_id, record)

    async def delete_by_id(self, model, doc_id: str) -> bool:
        """Delete by id. Deleting an id that does not exist is a no-op returning False."""
        return await self._run(self._delete_by_id, model, doc_id)

    # ------------------------- Internals ------------------------- #
    async def _run(self, func, *args):
        try:
            return await asyncio.to_thread(func, *args)
        except sqlite3.Error as exc:
            logger.error(f"Store operation {func.__name__} failed: {exc}")
            raise CatalogError.store_failure(str(exc), operation=func.__name__.lstrip("_")) from exc

    def _connect(self) -> sqlite3.Connection:
        return get_db_connection(self.db_file)

    @staticmethod
    def _check_fields(model, names: Iterable[str]) -> None:
        known = set(model.fields) | {"id"}
        for name in names:
            if name not in known:
                raise ValueError(f"Unknown field '{name}' for collection {model.collection}")

    @staticmethod
    def _where(filter: Dict[str, Any]) -> Tuple[str, list]:
        if not filter:
            return "", []
        clauses = [f"{name} = ?" for name in filter]
        return " WHERE " + " AND ".join(clauses), list(filter.values())

    @staticmethod
    def _row_values(record) -> list:
        data = record.to_dict()
        return [data[name] for name in record.fields]

    def _find_by_id(self, model, doc_id: str, populate: tuple):
        results = self._find(model, {"id": doc_id}, None, None, populate)
        return results[0] if results else None

    def _find(self, model, filter: Dict[str, Any], projection, sort, populate: tuple) -> list:
        self._check_fields(model, filter)
        self._check_fields(model, populate)
        columns = ["id"] + [name for name in (projection or model.fields) if name != "id"]
        self._check_fields(model, columns)

        where, params = self._where(filter)
        sql = f"SELECT {', '.join(columns)} FROM {model.collection}{where}"
        if sort:
            order = []
            for name, direction in sort:
                self._check_fields(model, [name])
                keyword = _SORT_DIRECTIONS.get(str(direction).lower())
                if keyword is None:
                    raise ValueError(f"Unknown sort direction '{direction}'")
                order.append(f"{name} {keyword}")
            sql += " ORDER BY " + ", ".join(order)
        else:
            sql += " ORDER BY rowid"

        conn = self._connect()
        try:
            rows = conn.execute(sql, params).fetchall()
            records = [model.from_dict(dict(row)) for row in rows]
            for field in populate:
                self._populate(conn, model, records, field)
            return records
        finally:
            conn.close()

    @staticmethod
    def _populate(conn: sqlite3.Connection, model, records: list, field: str) -> None:
        target = model.references.get(field)
        if target is None:
            raise ValueError(f"Field '{field}' of {model.collection} is not a reference")
        ids = sorted({getattr(r, field) for r in records if isinstance(getattr(r, field), str)})
        if not ids:
            return
        placeholders = ", ".join("?" for _ in ids)
        columns = ", ".join(("id",) + target.fields)
        rows = conn.execute(
            f"SELECT {columns} FROM {target.collection} WHERE id IN ({placeholders})", ids
        ).fetchall()
        resolved = {row["id"]: target.from_dict(dict(row)) for row in rows}
        for record in records:
            ref = getattr(record, field)
            if ref in resolved:
                setattr(record, field, resolved[ref])

    def _count(self, model, filter: Dict[str, Any]) -> int:
        self._check_fields(model, filter)
        where, params = self._where(filter)
        conn = self._connect()
        try:
            return conn.execute(f"SELECT COUNT(*) FROM {model.collection}{where}", params).fetchone()[0]
        finally:
            conn.close()

    def _create(self, record):
        record.id = uuid.uuid4().hex
        columns = ("id",) + tuple(record.fields)
        placeholders = ", ".join("?" for _ in columns)
        conn = self._connect()
        try:
            conn.execute(
                f"INSERT INTO {record.collection} ({', '.join(columns)}) VALUES ({placeholders})",
                [record.id] + self._row_values(record),
            )
            conn.commit()
        except sqlite3.Error:
            record.id = None
            raise
        finally:
            conn.close()
        logger.info(f"Created {record.collection} record {record.id}")
        return record

    def _update_by_id(self, doc_id: str, record):
        assignments = ", ".join(f"{name} = ?" for name in record.fields)
        conn = self._connect()
        try:
            cursor = conn.execute(
                f"UPDATE {record.collection} SET {assignments} WHERE id = ?",
                self._row_values(record) + [doc_id],
            )
            conn.commit()
            if cursor.rowcount == 0:
                return None
        finally:
            conn.close()
        record.id = doc_id
        logger.info(f"Updated {record.collection} record {doc_id}")
        return record

    def _delete_by_id(self, model, doc_id: str) -> bool:
        conn = self._connect()
        try:
            cursor = conn.execute(f"DELETE FROM {model.collection} WHERE id = ?", (doc_id,))
            conn.commit()
            deleted = cursor.rowcount > 0
        finally:
            conn.close()
        if deleted:
            logger.info(f"Deleted {model.collection} record {doc_id}")
        return deleted
