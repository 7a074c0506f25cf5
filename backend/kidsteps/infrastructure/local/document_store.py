"""
SQLite implementation of the document store.

Emulates the hosted store closely enough for local development and tests:
documents are JSON blobs addressed by path, queries touching more than one
field need a declared composite index, writes notify live subscriptions of
the affected collection with a fresh full snapshot, and batches commit in a
single transaction.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Mapping, Sequence
from uuid import uuid4

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from kidsteps.core.config import get_settings
from kidsteps.core.exceptions import QueryConfigurationError, TransientIOError
from kidsteps.infrastructure.local.database import DocumentORM, get_session_factory
from kidsteps.interfaces.document_store import (
    Document,
    FieldFilter,
    IDocumentStore,
    ISnapshotStream,
    OrderBy,
    Snapshot,
    WriteOp,
    join_path,
    split_document_path,
)
from kidsteps.utils.datetime_utils import now_utc

logger = logging.getLogger(__name__)

_CLOSED = object()

_COMPARATORS: dict[str, Callable[[Any, Any], bool]] = {
    "==": lambda a, b: a == b,
    "<": lambda a, b: a < b,
    "<=": lambda a, b: a <= b,
    ">": lambda a, b: a > b,
    ">=": lambda a, b: a >= b,
}


def _type_rank(value: Any) -> int:
    if value is None:
        return 0
    if isinstance(value, bool):
        return 1
    if isinstance(value, (int, float)):
        return 2
    if isinstance(value, str):
        return 3
    return 4


def _sort_value(value: Any) -> tuple[int, Any]:
    rank = _type_rank(value)
    return (rank, value if rank < 4 else str(value))


def _matches(data: Mapping[str, Any], condition: FieldFilter) -> bool:
    # Documents without the field never match, like the hosted store
    if condition.field not in data:
        return False
    value = data[condition.field]
    if condition.op != "==" and _type_rank(value) != _type_rank(condition.value):
        return False
    try:
        return _COMPARATORS[condition.op](value, condition.value)
    except TypeError:
        return False


def required_index_fields(
    filters: Sequence[FieldFilter],
    order_by: Sequence[OrderBy],
) -> tuple[str, ...]:
    """Fields of the composite index a query needs: equality filters, then range filters, then ordering."""
    fields: list[str] = []
    ordered_filters = [f for f in filters if f.op == "=="] + [f for f in filters if f.op != "=="]
    for name in [f.field for f in ordered_filters] + [o.field for o in order_by]:
        if name not in fields:
            fields.append(name)
    return tuple(fields)


class SqliteSnapshotStream(ISnapshotStream[Snapshot]):
    """Live query result stream backed by an asyncio queue."""

    def __init__(
        self,
        collection: str,
        filters: Sequence[FieldFilter],
        order_by: Sequence[OrderBy],
        on_close: Callable[["SqliteSnapshotStream"], Awaitable[None]],
    ):
        self.collection = collection
        self.filters = tuple(filters)
        self.order_by = tuple(order_by)
        self.refresh_lock = asyncio.Lock()
        self._queue: asyncio.Queue[Any] = asyncio.Queue()
        self._on_close = on_close
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def push(self, snapshot: Snapshot) -> None:
        if not self._closed:
            self._queue.put_nowait(snapshot)

    def fail(self, exc: Exception) -> None:
        if not self._closed:
            self._queue.put_nowait(exc)

    async def __anext__(self) -> Snapshot:
        if self._closed:
            raise StopAsyncIteration
        item = await self._queue.get()
        if item is _CLOSED:
            raise StopAsyncIteration
        if isinstance(item, Exception):
            # A failed listener is terminated by the store
            await self.close()
            raise item
        return item

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._queue.put_nowait(_CLOSED)
        await self._on_close(self)


class SqliteDocumentStore(IDocumentStore):
    """SQLite implementation of the document store."""

    def __init__(
        self,
        session_factory=None,
        composite_indexes: Mapping[str, Sequence[Sequence[str]]] | None = None,
    ):
        """
        Initialize the store.

        Args:
            session_factory: Optional session factory (for testing)
            composite_indexes: Provisioned indexes keyed by collection ID
                (the last path segment). Defaults to Settings.COMPOSITE_INDEXES.
        """
        self._session_factory = session_factory or get_session_factory()
        if composite_indexes is None:
            composite_indexes = get_settings().COMPOSITE_INDEXES
        self._indexes: dict[str, set[tuple[str, ...]]] = {
            collection_id: {tuple(fields) for fields in indexes}
            for collection_id, indexes in composite_indexes.items()
        }
        self._subscriptions: dict[str, set[SqliteSnapshotStream]] = {}
        self._lock = asyncio.Lock()

    # ===========================================
    # Reads
    # ===========================================

    async def get(self, path: str) -> Document | None:
        try:
            async with self._session_factory() as session:
                orm = await session.get(DocumentORM, path)
                return Document(path=orm.path, data=orm.data or {}) if orm else None
        except SQLAlchemyError as exc:
            raise TransientIOError(f"Failed to read {path}: {exc}") from exc

    async def query(
        self,
        collection: str,
        filters: Sequence[FieldFilter] = (),
        order_by: Sequence[OrderBy] = (),
    ) -> list[Document]:
        self._check_index(collection, filters, order_by)
        return await self._run_query(collection, filters, order_by)

    async def subscribe(
        self,
        collection: str,
        filters: Sequence[FieldFilter] = (),
        order_by: Sequence[OrderBy] = (),
    ) -> ISnapshotStream[Snapshot]:
        self._check_index(collection, filters, order_by)
        stream = SqliteSnapshotStream(collection, filters, order_by, self._unsubscribe)
        async with self._lock:
            self._subscriptions.setdefault(collection, set()).add(stream)
        logger.debug(f"Subscribed to {collection}")
        await self._refresh(stream)
        return stream

    def active_subscriptions(self, collection: str | None = None) -> int:
        """Number of open subscriptions, optionally for one collection."""
        if collection is not None:
            return len(self._subscriptions.get(collection, ()))
        return sum(len(streams) for streams in self._subscriptions.values())

    # ===========================================
    # Writes
    # ===========================================

    async def add(self, collection: str, fields: Mapping[str, Any]) -> Document:
        path = join_path(collection, str(uuid4()))
        await self.upsert(path, fields, merge=False)
        return Document(path=path, data=fields)

    async def upsert(self, path: str, fields: Mapping[str, Any], merge: bool = True) -> None:
        collection, _ = split_document_path(path)
        try:
            async with self._session_factory() as session:
                await self._apply(session, path, fields, merge)
                await session.commit()
        except SQLAlchemyError as exc:
            raise TransientIOError(f"Failed to write {path}: {exc}") from exc
        await self._notify({collection})

    async def batch_write(self, writes: Sequence[WriteOp]) -> None:
        if not writes:
            return
        collections = {split_document_path(write.path)[0] for write in writes}
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    for write in writes:
                        await self._apply(session, write.path, write.fields, merge=True)
        except SQLAlchemyError as exc:
            raise TransientIOError(f"Batch write of {len(writes)} documents failed: {exc}") from exc
        await self._notify(collections)

    # ===========================================
    # Internals
    # ===========================================

    @staticmethod
    async def _apply(session, path: str, fields: Mapping[str, Any], merge: bool) -> None:
        collection, doc_id = split_document_path(path)
        orm = await session.get(DocumentORM, path)
        if orm is None:
            session.add(
                DocumentORM(path=path, collection=collection, doc_id=doc_id, data=dict(fields))
            )
            return
        if merge:
            orm.data = {**(orm.data or {}), **fields}
        else:
            orm.data = dict(fields)
        orm.updated_at = now_utc()

    def _check_index(
        self,
        collection: str,
        filters: Sequence[FieldFilter],
        order_by: Sequence[OrderBy],
    ) -> None:
        fields = required_index_fields(filters, order_by)
        if len(fields) <= 1:
            return
        collection_id = collection.rsplit("/", 1)[-1]
        if fields in self._indexes.get(collection_id, set()):
            return
        logger.error(f"Query on {collection} requires a composite index on {fields}")
        raise QueryConfigurationError(
            f"The query requires an index on '{collection_id}' ({', '.join(fields)}) "
            "that has not been created.",
            collection=collection_id,
            fields=fields,
        )

    async def _run_query(
        self,
        collection: str,
        filters: Sequence[FieldFilter],
        order_by: Sequence[OrderBy],
    ) -> list[Document]:
        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    select(DocumentORM)
                    .where(DocumentORM.collection == collection)
                    .order_by(DocumentORM.doc_id)
                )
                rows = [(orm.path, orm.data or {}) for orm in result.scalars().all()]
        except SQLAlchemyError as exc:
            raise TransientIOError(f"Failed to query {collection}: {exc}") from exc

        matched = [
            (path, data)
            for path, data in rows
            if all(_matches(data, condition) for condition in filters)
            and all(order.field in data for order in order_by)
        ]
        # Stable sorts applied from the last key to the first
        for order in reversed(order_by):
            matched.sort(key=lambda row: _sort_value(row[1][order.field]), reverse=order.descending)
        return [Document(path=path, data=data) for path, data in matched]

    async def _refresh(self, stream: SqliteSnapshotStream) -> None:
        async with stream.refresh_lock:
            if stream.closed:
                return
            try:
                documents = await self._run_query(stream.collection, stream.filters, stream.order_by)
            except TransientIOError as exc:
                logger.warning(f"Snapshot refresh for {stream.collection} failed: {exc}")
                stream.fail(exc)
                return
            stream.push(tuple(documents))

    async def _notify(self, collections: set[str]) -> None:
        async with self._lock:
            streams = [
                stream
                for collection in collections
                for stream in self._subscriptions.get(collection, set())
            ]
        for stream in streams:
            await self._refresh(stream)

    async def _unsubscribe(self, stream: SqliteSnapshotStream) -> None:
        async with self._lock:
            streams = self._subscriptions.get(stream.collection)
            if not streams:
                return
            streams.discard(stream)
            if not streams:
                self._subscriptions.pop(stream.collection, None)
        logger.debug(f"Unsubscribed from {stream.collection}")
